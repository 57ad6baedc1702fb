from typing import List

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from tourney.services import auth_service, wallet_service
from tourney.models import user as user_model
from tourney.schemas import wallet_schemas
from tourney.api.dependencies import get_db
from tourney.core.exceptions import InvalidRequestError, NotFoundError

router = APIRouter()

@router.get("/", response_model=wallet_schemas.WalletRead)
async def get_wallet(
    db: Session = Depends(get_db),
    current_user: user_model.User = Depends(auth_service.get_current_user),
):
    return {"user_id": current_user.id, "wallet_balance": wallet_service.get_balance(db, current_user.id)}

@router.get("/transactions", response_model=List[wallet_schemas.TransactionRead])
async def list_transactions(
    db: Session = Depends(get_db),
    current_user: user_model.User = Depends(auth_service.get_current_user),
    limit: int = 100,
):
    return wallet_service.get_transactions(db, current_user.id, limit=limit)

@router.get("/requests", response_model=List[wallet_schemas.RequestRead])
async def list_requests(
    db: Session = Depends(get_db),
    current_user: user_model.User = Depends(auth_service.get_current_user),
    limit: int = 100,
):
    return wallet_service.get_requests(db, current_user.id, limit=limit)

@router.get("/history", response_model=List[wallet_schemas.HistoryEntry])
async def get_history(
    db: Session = Depends(get_db),
    current_user: user_model.User = Depends(auth_service.get_current_user),
):
    return wallet_service.get_wallet_history(db, current_user.id)

def _submit(db: Session, user_id: str, request_in: wallet_schemas.RequestCreate):
    try:
        return wallet_service.submit_request(db, user_id, request_in)
    except InvalidRequestError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.to_detail())
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.to_detail())

@router.post("/deposits", response_model=wallet_schemas.RequestRead, status_code=status.HTTP_201_CREATED)
async def submit_deposit(
    deposit_in: wallet_schemas.DepositCreate,
    db: Session = Depends(get_db),
    current_user: user_model.User = Depends(auth_service.get_current_user),
):
    """Ask for a deposit to be credited once an admin has checked the payment reference."""
    return _submit(db, current_user.id, deposit_in.to_request())

@router.post("/withdrawals", response_model=wallet_schemas.RequestRead, status_code=status.HTTP_201_CREATED)
async def submit_withdrawal(
    withdrawal_in: wallet_schemas.WithdrawalCreate,
    db: Session = Depends(get_db),
    current_user: user_model.User = Depends(auth_service.get_current_user),
):
    """Ask for a payout to `upi_id`. The balance is checked now but only debited on approval."""
    return _submit(db, current_user.id, withdrawal_in.to_request())
