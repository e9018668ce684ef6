from typing import Optional, List
from datetime import datetime
from pydantic import BaseModel, ConfigDict

from app.modules.posts.likes.schemas.like import Like
from app.modules.posts.comments.schemas.comment import Comment

class PostCreate(BaseModel):
    text: str

class Post(BaseModel):
    """Post model returned to client, and the document the post store persists"""
    id: Optional[str] = None
    author_id: str
    author_name: str
    text: str
    created_at: datetime
    likes: List[Like] = []
    comments: List[Comment] = []
    version: int = 0

    model_config = ConfigDict(from_attributes=True)

    def has_liked(self, user_id: str) -> bool:
        return any(like.user_id == user_id for like in self.likes)

    def find_comment(self, comment_id: str) -> Optional[Comment]:
        return next((c for c in self.comments if c.id == comment_id), None)

class PostRemoved(BaseModel):
    msg: str = "Post is removed"
