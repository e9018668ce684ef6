from typing import Optional

from fastapi import Depends
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.orm import Session

from app.core import security
from app.core.config import settings
from app.core.exceptions import UnauthenticatedError
from app.db.session import get_db
from app.modules.posts.services.post import PostService
from app.modules.posts.services.store import SqlPostStore
from app.modules.user_management.services.user import UserDirectory

# Tokens are issued elsewhere; this only tells clients where to send them
oauth2_scheme = OAuth2PasswordBearer(tokenUrl=f"{settings.API_V1_STR}/auth/login", auto_error=False)

def get_current_user_id(token: Optional[str] = Depends(oauth2_scheme)) -> str:
    """
    Dependency for getting the authenticated caller's user id
    """
    if not token:
        raise UnauthenticatedError("No token, authorization denied")

    user_id = security.verify_access_token(token)
    if not user_id:
        raise UnauthenticatedError("Token is not valid")

    return user_id

def get_post_service(db: Session = Depends(get_db)) -> PostService:
    """
    Dependency for getting a post service bound to the request's DB session
    """
    return PostService(SqlPostStore(db), UserDirectory(db))
