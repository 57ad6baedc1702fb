from typing import Optional

from fastapi import Depends, HTTPException, status
from sqlalchemy.orm import Session

from tourney.api.dependencies import get_db
from tourney.core import security
from tourney.core.logger import setup_logger
from tourney.models import user as user_model
from tourney.services import user_service

logger = setup_logger(__name__)

def register_user(db: Session, email: str, password: str, username: str) -> user_model.User:
    """Create a local account with an empty wallet. Raises DuplicateUserError on clashes."""
    return user_service.create_user(
        db,
        email=email,
        username=username,
        hashed_password=security.get_password_hash(password),
    )

def authenticate_user(db: Session, email: str, password: str) -> Optional[user_model.User]:
    user = user_service.get_user_by_email(db, email)
    if user is None:
        return None
    if not security.verify_password(password, user.hashed_password):
        return None
    return user

def issue_token(user: user_model.User) -> str:
    return security.create_access_token(user.id)

def get_current_user(token: str = Depends(security.oauth2_scheme), db: Session = Depends(get_db)) -> user_model.User:
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )
    token_data = security.decode_access_token(token)
    if token_data is None:
        raise credentials_exception

    user = user_service.get_user(db, token_data.user_id)
    if user is None:
        raise credentials_exception
    if user.is_banned:
        logger.warning(f"Rejected request from banned user {user.id}")
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="This account has been banned")
    return user
