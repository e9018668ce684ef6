from typing import Any, List
import logging

from fastapi import APIRouter, Depends

from app.deps import get_current_user_id, get_post_service
from app.modules.posts.schemas.post import Post as PostSchema, PostCreate, PostRemoved
from app.modules.posts.services.post import PostService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="")

@router.get("", response_model=List[PostSchema])
def read_posts(
    service: PostService = Depends(get_post_service),
    current_user_id: str = Depends(get_current_user_id),
) -> Any:
    """
    Retrieve all posts, newest first.
    """
    return service.list_posts()

@router.post("", response_model=PostSchema)
def create_new_post(
    *,
    post_in: PostCreate,
    service: PostService = Depends(get_post_service),
    current_user_id: str = Depends(get_current_user_id),
) -> Any:
    """
    Create new post.
    """
    return service.create_post(current_user_id, post_in.text)

@router.get("/{post_id}", response_model=PostSchema)
def read_post_by_id(
    *,
    post_id: str,
    service: PostService = Depends(get_post_service),
    current_user_id: str = Depends(get_current_user_id),
) -> Any:
    """
    Get post by ID.
    """
    return service.get_post(post_id)

@router.delete("/{post_id}", response_model=PostRemoved)
def delete_post_by_id(
    *,
    post_id: str,
    service: PostService = Depends(get_post_service),
    current_user_id: str = Depends(get_current_user_id),
) -> Any:
    """
    Delete a post. Its likes and comments go with it.
    Only the author of the post may delete it.
    """
    service.delete_post(current_user_id, post_id)
    return PostRemoved()
