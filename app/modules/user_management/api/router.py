from typing import Any

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.core.exceptions import NotFoundError
from app.db.session import get_db
from app.deps import get_current_user_id
from app.modules.user_management.schemas.user import User as UserSchema
from app.modules.user_management.services.user import get_user

router = APIRouter()

@router.get("/me", response_model=UserSchema)
def read_user_me(
    db: Session = Depends(get_db),
    current_user_id: str = Depends(get_current_user_id),
) -> Any:
    """
    Get the directory entry of the current user.
    """
    user = get_user(db, user_id=current_user_id)
    if not user:
        raise NotFoundError("User not found")
    return user
