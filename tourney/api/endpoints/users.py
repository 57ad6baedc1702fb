from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from tourney.services import auth_service, user_service
from tourney.models import user as user_model
from tourney.schemas import user_schemas
from tourney.api.dependencies import get_db
from tourney.core.exceptions import DuplicateUserError, NotFoundError

router = APIRouter()

@router.get("/me", response_model=user_schemas.UserRead)
async def read_users_me(
    current_user: user_model.User = Depends(auth_service.get_current_user)
):
    return current_user

@router.patch("/me", response_model=user_schemas.UserRead)
async def update_users_me(
    profile_in: user_schemas.UserProfileUpdate,
    db: Session = Depends(get_db),
    current_user: user_model.User = Depends(auth_service.get_current_user),
):
    try:
        return user_service.update_profile(db, current_user.id, profile_in)
    except DuplicateUserError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=e.message)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.message)

@router.get("/me/stats", response_model=user_schemas.UserStats)
async def get_my_stats(
    db: Session = Depends(get_db),
    current_user: user_model.User = Depends(auth_service.get_current_user),
):
    return user_service.get_user_stats(db, current_user.id)
