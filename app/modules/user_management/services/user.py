from typing import Optional
import logging

from sqlalchemy.exc import DBAPIError
from sqlalchemy.orm import Session

from app.core.exceptions import NotFoundError, StoreUnavailableError
from app.modules.user_management.models.user import User
from app.modules.user_management.schemas.user import UserCreate

logger = logging.getLogger(__name__)

def get_user(db: Session, user_id: str) -> Optional[User]:
    """Get user by ID"""
    return db.query(User).filter(User.id == user_id).first()

def upsert_user(db: Session, user_in: UserCreate) -> User:
    """Create the user, or rename it if it already exists"""
    user = get_user(db, user_id=user_in.id)
    if user:
        user.name = user_in.name
    else:
        user = User(id=user_in.id, name=user_in.name)
        db.add(user)
    db.commit()
    db.refresh(user)
    return user


class UserDirectory:
    """Resolves user ids to the display names stamped on posts and comments"""

    def __init__(self, db: Session):
        self.db = db

    def get_display_name(self, user_id: str) -> str:
        try:
            user = get_user(self.db, user_id=user_id)
        except DBAPIError as e:
            logger.error(f"Error looking up user {user_id}: {e}")
            raise StoreUnavailableError() from e

        if not user or not user.is_active:
            raise NotFoundError("User not found")
        return user.name
