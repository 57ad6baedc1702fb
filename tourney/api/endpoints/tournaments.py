from typing import List

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from tourney.services import tournament_service, auth_service
from tourney.models import user as user_model
from tourney.models.enums import TournamentStatus
from tourney.schemas import tournament_schemas, participant_schemas
from tourney.api.dependencies import get_db
from tourney.core.exceptions import (
    AlreadyJoinedError,
    InsufficientFundsError,
    NotFoundError,
    NotJoinableError,
    TournamentFullError,
    TransactionConflictError,
)

router = APIRouter()

# HTTP status for each way a join can be refused
JOIN_ERROR_STATUS = {
    NotFoundError: status.HTTP_404_NOT_FOUND,
    InsufficientFundsError: status.HTTP_400_BAD_REQUEST,
    TournamentFullError: status.HTTP_409_CONFLICT,
    AlreadyJoinedError: status.HTTP_409_CONFLICT,
    NotJoinableError: status.HTTP_400_BAD_REQUEST,
    TransactionConflictError: status.HTTP_503_SERVICE_UNAVAILABLE,
}

@router.get("/", response_model=List[tournament_schemas.TournamentRead])
async def list_tournaments_endpoint(
    status_filter: TournamentStatus = Query(TournamentStatus.UPCOMING, alias="status"),
    db: Session = Depends(get_db),
):
    return tournament_service.list_tournaments(db=db, status=status_filter)

@router.get("/mine", response_model=List[tournament_schemas.TournamentRead])
async def list_my_tournaments_endpoint(
    status_filter: TournamentStatus = Query(TournamentStatus.UPCOMING, alias="status"),
    db: Session = Depends(get_db),
    current_user: user_model.User = Depends(auth_service.get_current_user),
):
    return tournament_service.list_user_tournaments(db=db, user_id=current_user.id, status=status_filter)

@router.get("/{tournament_id}", response_model=tournament_schemas.TournamentRead)
async def get_tournament_endpoint(
    tournament_id: str,
    db: Session = Depends(get_db),
):
    tournament = tournament_service.get_tournament(db=db, tournament_id=tournament_id)
    if not tournament:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Tournament not found")
    return tournament

@router.get("/{tournament_id}/participants", response_model=List[participant_schemas.ParticipantRead])
async def list_participants_endpoint(
    tournament_id: str,
    db: Session = Depends(get_db),
):
    try:
        return tournament_service.list_participants(db=db, tournament_id=tournament_id)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.message)

@router.get("/{tournament_id}/membership", response_model=tournament_schemas.MembershipRead)
async def get_membership_endpoint(
    tournament_id: str,
    db: Session = Depends(get_db),
    current_user: user_model.User = Depends(auth_service.get_current_user),
):
    joined = tournament_service.has_joined(db=db, tournament_id=tournament_id, user_id=current_user.id)
    return {"tournament_id": tournament_id, "joined": joined}

@router.post("/{tournament_id}/join", response_model=participant_schemas.ParticipantRead, status_code=status.HTTP_201_CREATED)
async def join_tournament_endpoint(
    tournament_id: str,
    db: Session = Depends(get_db),
    current_user: user_model.User = Depends(auth_service.get_current_user),
):
    """
    Join a tournament, paying its entry fee from the caller's wallet.

    Refusals come back with `detail = {"code", "message"}`; `message` is meant
    to be shown to the user as is.
    """
    try:
        return tournament_service.join_tournament(db=db, tournament_id=tournament_id, user_id=current_user.id)
    except tuple(JOIN_ERROR_STATUS) as e:
        raise HTTPException(status_code=JOIN_ERROR_STATUS[type(e)], detail=e.to_detail())
