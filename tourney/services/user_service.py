from decimal import Decimal
from typing import Optional

from sqlalchemy.orm import Session

from tourney.core.exceptions import DuplicateUserError, NotFoundError
from tourney.core.logger import setup_logger
from tourney.models import participant as participant_model
from tourney.models import user as user_model
from tourney.models.enums import UserRole
from tourney.schemas import user_schemas

logger = setup_logger(__name__)

def get_user(db: Session, user_id: str) -> Optional[user_model.User]:
    return db.get(user_model.User, user_id)

def get_user_by_email(db: Session, email: str) -> Optional[user_model.User]:
    return db.query(user_model.User).filter(user_model.User.email == email).first()

def get_user_by_username(db: Session, username: str) -> Optional[user_model.User]:
    return db.query(user_model.User).filter(user_model.User.username == username).first()

def create_user(
    db: Session,
    email: str,
    username: str,
    hashed_password: str,
    wallet_balance: Decimal = Decimal("0"),
    role: UserRole = UserRole.USER,
) -> user_model.User:
    if get_user_by_email(db, email):
        raise DuplicateUserError(f"User with email {email} already exists.")
    if get_user_by_username(db, username):
        raise DuplicateUserError("Username is already taken.")

    user = user_model.User(
        email=email,
        username=username,
        in_game_name="",
        hashed_password=hashed_password,
        wallet_balance=wallet_balance,
        role=role.value,
        is_banned=False,
        profile_pic_url="",
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    logger.info(f"Created user {user.id} ({user.username})")
    return user

def update_profile(db: Session, user_id: str, profile: user_schemas.UserProfileUpdate) -> user_model.User:
    user = get_user(db, user_id)
    if user is None:
        raise NotFoundError("User not found.")

    update_data = profile.model_dump(exclude_unset=True, exclude_none=True)
    new_username = update_data.get("username")
    if new_username and new_username != user.username:
        existing = get_user_by_username(db, new_username)
        if existing and existing.id != user.id:
            raise DuplicateUserError("Username is already taken.")

    for key, value in update_data.items():
        setattr(user, key, value)

    db.commit()
    db.refresh(user)
    return user

def get_user_stats(db: Session, user_id: str) -> user_schemas.UserStats:
    user = get_user(db, user_id)
    if user is None:
        raise NotFoundError("User not found.")

    participations = db.query(participant_model.Participant).filter(
        participant_model.Participant.user_id == user_id
    ).all()

    matches_played = len(participations)
    total_kills = sum(p.kills or 0 for p in participations)
    total_winnings = sum((Decimal(p.winnings or 0) for p in participations), Decimal("0"))
    wins = sum(1 for p in participations if p.rank == 1)

    win_percentage = 0.0
    if matches_played > 0:
        win_percentage = round((wins / matches_played) * 100, 1)

    return user_schemas.UserStats(
        id=user.id,
        username=user.username,
        matches_played=matches_played,
        total_kills=total_kills,
        total_winnings=total_winnings,
        wins=wins,
        win_percentage=win_percentage,
    )
