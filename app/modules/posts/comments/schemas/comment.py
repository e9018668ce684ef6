from datetime import datetime
from pydantic import BaseModel, ConfigDict

class CommentCreate(BaseModel):
    text: str

class Comment(BaseModel):
    """Comment model returned to client. Comments are never edited."""
    id: str
    author_id: str
    author_name: str
    text: str
    created_at: datetime

    model_config = ConfigDict(frozen=True, from_attributes=True)
