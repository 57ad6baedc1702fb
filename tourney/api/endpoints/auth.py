from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from tourney.services import auth_service
from tourney.schemas import auth_schemas
from tourney.api.dependencies import get_db
from tourney.core.exceptions import DuplicateUserError

router = APIRouter()

@router.post("/register", response_model=auth_schemas.Token, status_code=status.HTTP_201_CREATED)
async def register(
    request: auth_schemas.RegisterRequest,
    db: Session = Depends(get_db)
):
    try:
        user = auth_service.register_user(
            db, email=request.email, password=request.password, username=request.username
        )
    except DuplicateUserError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=e.message)

    return {"access_token": auth_service.issue_token(user), "token_type": "bearer"}

@router.post("/login", response_model=auth_schemas.Token)
async def login(
    request: auth_schemas.LoginRequest,
    db: Session = Depends(get_db)
):
    user = auth_service.authenticate_user(db, email=request.email, password=request.password)
    if not user:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Incorrect email or password",
            headers={"WWW-Authenticate": "Bearer"},
        )
    if user.is_banned:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="This account has been banned")

    return {"access_token": auth_service.issue_token(user), "token_type": "bearer"}
