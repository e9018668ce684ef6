from typing import Any, List
import logging

from fastapi import APIRouter, Depends, Path

from app.deps import get_current_user_id, get_post_service
from app.modules.posts.comments.schemas.comment import Comment as CommentSchema, CommentCreate
from app.modules.posts.services.post import PostService

router = APIRouter()
logger = logging.getLogger("app")

@router.post("/{post_id}", response_model=List[CommentSchema])
def create_new_comment(
    *,
    post_id: str = Path(..., description="The ID of the post to comment on"),
    comment_in: CommentCreate,
    service: PostService = Depends(get_post_service),
    current_user_id: str = Depends(get_current_user_id),
) -> Any:
    """Comment on a post; returns the post's comments, most recent first"""
    comments = service.add_comment(current_user_id, post_id, comment_in.text)
    logger.info(f"User {current_user_id} commented on post {post_id}")
    return comments

@router.delete("/{post_id}/{comment_id}", response_model=List[CommentSchema])
def delete_comment_by_id(
    *,
    post_id: str = Path(..., description="The ID of the post"),
    comment_id: str = Path(..., description="The ID of the comment to delete"),
    service: PostService = Depends(get_post_service),
    current_user_id: str = Depends(get_current_user_id),
) -> Any:
    """Delete one of the current user's comments"""
    return service.delete_comment(current_user_id, post_id, comment_id)
