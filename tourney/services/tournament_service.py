import datetime
from typing import List, Optional

from sqlalchemy.orm import Session

from tourney.core.config import settings
from tourney.core.exceptions import (
    AlreadyJoinedError,
    InsufficientFundsError,
    NotFoundError,
    NotJoinableError,
    TournamentFullError,
)
from tourney.core.logger import setup_logger
from tourney.models import participant as participant_model
from tourney.models import tournament as tournament_model
from tourney.models import transaction as transaction_model
from tourney.models import user as user_model
from tourney.models.enums import TournamentStatus, TransactionType
from tourney.schemas import tournament_schemas
from tourney.services.transactions import run_in_transaction

logger = setup_logger(__name__)

def create_tournament(db: Session, tournament: tournament_schemas.TournamentCreate) -> tournament_model.Tournament:
    data = tournament.model_dump()
    data["status"] = tournament.status.value
    db_tournament = tournament_model.Tournament(**data, slots_filled=0)
    db.add(db_tournament)
    db.commit()
    db.refresh(db_tournament)
    logger.info(f"Created tournament {db_tournament.id} ({db_tournament.title})")
    return db_tournament

def get_tournament(db: Session, tournament_id: str) -> Optional[tournament_model.Tournament]:
    return db.get(tournament_model.Tournament, tournament_id)

def list_tournaments(db: Session, status: TournamentStatus = TournamentStatus.UPCOMING) -> List[tournament_model.Tournament]:
    """Approved tournaments in one lifecycle state, soonest first (most recent first for Completed)."""
    start_time = tournament_model.Tournament.start_time
    order = start_time.desc() if status == TournamentStatus.COMPLETED else start_time.asc()
    return db.query(tournament_model.Tournament).filter(
        tournament_model.Tournament.status == status.value,
        tournament_model.Tournament.is_approved == True,
    ).order_by(order).all()

def list_user_tournaments(db: Session, user_id: str, status: TournamentStatus = TournamentStatus.UPCOMING) -> List[tournament_model.Tournament]:
    return db.query(tournament_model.Tournament).join(
        participant_model.Participant,
        participant_model.Participant.tournament_id == tournament_model.Tournament.id,
    ).filter(
        participant_model.Participant.user_id == user_id,
        tournament_model.Tournament.status == status.value,
    ).order_by(tournament_model.Tournament.start_time.asc()).all()

def list_participants(db: Session, tournament_id: str) -> List[participant_model.Participant]:
    if get_tournament(db, tournament_id) is None:
        raise NotFoundError("Tournament not found.")
    return db.query(participant_model.Participant).filter(
        participant_model.Participant.tournament_id == tournament_id
    ).order_by(participant_model.Participant.join_time.asc()).all()

def has_joined(db: Session, tournament_id: str, user_id: str) -> bool:
    return db.get(participant_model.Participant, (tournament_id, user_id)) is not None

def join_tournament(db: Session, tournament_id: str, user_id: str, max_attempts: Optional[int] = None) -> participant_model.Participant:
    """
    Atomically admit a user into a tournament, paying the entry fee from their wallet.

    All checks run against rows read inside the transaction, never against
    caller-supplied state. The first failing check wins, in this order:
    missing user/tournament, insufficient balance, no free slot, already
    joined, tournament not Upcoming.

    On success exactly these writes commit together: the debited balance and
    its ledger entry (only when the fee is non-zero), ``slots_filled + 1``,
    and the new Participant row. On any failure nothing is written.
    """
    attempts = settings.JOIN_MAX_ATTEMPTS if max_attempts is None else max_attempts

    def _join(session: Session) -> participant_model.Participant:
        # populate_existing: rows already cached in the session (e.g. the authenticated user) are re-read
        user = session.get(user_model.User, user_id, populate_existing=True)
        tournament = session.get(tournament_model.Tournament, tournament_id, populate_existing=True)
        if user is None or tournament is None:
            raise NotFoundError()

        entry_fee = tournament.entry_fee
        if user.wallet_balance < entry_fee:
            raise InsufficientFundsError()
        if tournament.slots_filled >= tournament.slots_total:
            raise TournamentFullError()
        if session.get(participant_model.Participant, (tournament.id, user.id), populate_existing=True) is not None:
            raise AlreadyJoinedError()
        if tournament.status != TournamentStatus.UPCOMING.value:
            raise NotJoinableError()

        now = datetime.datetime.utcnow()
        if entry_fee > 0:
            user.wallet_balance = user.wallet_balance - entry_fee
            session.add(transaction_model.Transaction(
                user_id=user.id,
                amount=-entry_fee,
                type=TransactionType.ENTRY_FEE.value,
                description=f"Joined: {tournament.title}",
                tournament_id=tournament.id,
                timestamp=now,
            ))

        tournament.slots_filled = tournament.slots_filled + 1

        participant = participant_model.Participant(
            tournament_id=tournament.id,
            user_id=user.id,
            username=user.username,
            in_game_name=user.in_game_name or user.username,
            join_time=now,
            rank=0,
            kills=0,
            winnings=0,
        )
        session.add(participant)
        return participant

    try:
        participant = run_in_transaction(db, _join, max_attempts=attempts, label=f"join {tournament_id} by {user_id}")
    except Exception as e:
        logger.info(f"User {user_id} could not join tournament {tournament_id}: {e}")
        raise
    logger.info(f"User {user_id} joined tournament {tournament_id}")
    return participant
