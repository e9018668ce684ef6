from typing import Optional
from datetime import datetime
from pydantic import BaseModel, ConfigDict

class UserBase(BaseModel):
    name: str

class UserCreate(UserBase):
    id: str

class User(UserBase):
    """User model returned to client"""
    id: str
    is_active: bool = True
    created_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)
