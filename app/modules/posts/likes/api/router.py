from typing import Any, List

from fastapi import APIRouter, Depends, Path

from app.deps import get_current_user_id, get_post_service
from app.modules.posts.likes.schemas.like import Like as LikeSchema
from app.modules.posts.services.post import PostService

router = APIRouter()

@router.put("/like/{post_id}", response_model=List[LikeSchema])
def like_post(
    *,
    post_id: str = Path(..., description="The ID of the post to like"),
    service: PostService = Depends(get_post_service),
    current_user_id: str = Depends(get_current_user_id),
) -> Any:
    """Like a post; returns the post's likes, most recent first"""
    return service.like_post(current_user_id, post_id)

@router.put("/unlike/{post_id}", response_model=List[LikeSchema])
def unlike_post(
    *,
    post_id: str = Path(..., description="The ID of the post to unlike"),
    service: PostService = Depends(get_post_service),
    current_user_id: str = Depends(get_current_user_id),
) -> Any:
    """Remove the current user's like from a post"""
    return service.unlike_post(current_user_id, post_id)
