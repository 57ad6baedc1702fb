from decimal import Decimal
from typing import List, Optional

from sqlalchemy import func
from sqlalchemy.orm import Session

from tourney.core.config import settings
from tourney.core.exceptions import InvalidRequestError, NotFoundError
from tourney.core.logger import setup_logger
from tourney.models import request as request_model
from tourney.models import transaction as transaction_model
from tourney.models import user as user_model
from tourney.models.enums import RequestStatus, RequestType
from tourney.schemas import wallet_schemas

logger = setup_logger(__name__)

def get_balance(db: Session, user_id: str) -> Decimal:
    user = db.get(user_model.User, user_id)
    if user is None:
        raise NotFoundError("User not found.")
    return Decimal(user.wallet_balance)

def get_transactions(db: Session, user_id: str, limit: Optional[int] = None) -> List[transaction_model.Transaction]:
    query = db.query(transaction_model.Transaction).filter(
        transaction_model.Transaction.user_id == user_id
    ).order_by(transaction_model.Transaction.timestamp.desc())
    if limit:
        query = query.limit(limit)
    return query.all()

def get_requests(db: Session, user_id: str, limit: Optional[int] = None) -> List[request_model.Request]:
    query = db.query(request_model.Request).filter(
        request_model.Request.user_id == user_id
    ).order_by(request_model.Request.created_at.desc())
    if limit:
        query = query.limit(limit)
    return query.all()

def get_wallet_history(db: Session, user_id: str) -> List[wallet_schemas.HistoryEntry]:
    """Ledger entries and deposit/withdrawal requests as one list, newest first."""
    entries = [
        wallet_schemas.HistoryEntry(
            kind="transaction",
            id=t.id,
            type=t.type,
            amount=t.amount,
            description=t.description,
            timestamp=t.timestamp,
        )
        for t in get_transactions(db, user_id)
    ]
    entries.extend(
        wallet_schemas.HistoryEntry(
            kind="request",
            id=r.id,
            type=r.type,
            amount=r.amount,
            status=r.status,
            description=f"{r.type} request",
            timestamp=r.created_at,
        )
        for r in get_requests(db, user_id)
    )
    entries.sort(key=lambda entry: entry.timestamp, reverse=True)
    return entries

def submit_request(db: Session, user_id: str, request_in: wallet_schemas.RequestCreate) -> request_model.Request:
    """
    File a deposit or withdrawal request for manual review.

    Only inserts a Pending request; the wallet balance is not touched until
    the request is approved elsewhere.
    """
    user = db.get(user_model.User, user_id)
    if user is None:
        raise NotFoundError("User not found.")

    if request_in.amount <= 0:
        raise InvalidRequestError("Please enter a valid amount.")

    if request_in.type == RequestType.DEPOSIT:
        if not request_in.transaction_ref:
            raise InvalidRequestError("All fields are required.")
    elif request_in.type == RequestType.WITHDRAWAL:
        if not request_in.upi_id:
            raise InvalidRequestError("All fields are required.")
        minimum = settings.MIN_WITHDRAWAL_AMOUNT
        if request_in.amount < minimum:
            raise InvalidRequestError(f"Minimum withdrawal amount is {minimum}.")
        if request_in.amount > user.wallet_balance:
            raise InvalidRequestError("Withdrawal amount cannot exceed your wallet balance.")

    db_request = request_model.Request(
        user_id=user.id,
        username=user.username,
        type=request_in.type.value,
        amount=request_in.amount,
        transaction_ref=request_in.transaction_ref if request_in.type == RequestType.DEPOSIT else None,
        upi_id=request_in.upi_id if request_in.type == RequestType.WITHDRAWAL else None,
        status=RequestStatus.PENDING.value,
    )
    db.add(db_request)
    db.commit()
    db.refresh(db_request)
    logger.info(f"User {user.id} submitted {db_request.type} request {db_request.id} for {db_request.amount}")
    return db_request

def ledger_total(db: Session, user_id: str) -> Decimal:
    total = db.query(func.coalesce(func.sum(transaction_model.Transaction.amount), 0)).filter(
        transaction_model.Transaction.user_id == user_id
    ).scalar()
    return Decimal(total)

def verify_balance_integrity(db: Session, user_id: str, opening_balance: Decimal = Decimal("0")) -> dict:
    """Compare the cached wallet balance with opening balance plus the ledger sum."""
    cached_balance = get_balance(db, user_id)
    calculated_balance = Decimal(opening_balance) + ledger_total(db, user_id)
    return {
        "user_id": user_id,
        "cached_balance": cached_balance,
        "calculated_balance": calculated_balance,
        "integrity_check": cached_balance == calculated_balance,
    }
