from datetime import datetime
from decimal import Decimal
from typing import Literal, Optional

from pydantic import BaseModel, Field

from tourney.models.enums import RequestType

class WalletRead(BaseModel):
    user_id: str
    wallet_balance: Decimal

class TransactionRead(BaseModel):
    id: str
    user_id: str
    amount: Decimal
    type: str
    description: Optional[str] = None
    tournament_id: Optional[str] = None
    timestamp: datetime

    class Config:
        from_attributes = True

class RequestCreate(BaseModel):
    type: RequestType
    amount: Decimal = Field(..., gt=0)
    transaction_ref: Optional[str] = None
    upi_id: Optional[str] = None

class DepositCreate(BaseModel):
    amount: Decimal = Field(..., gt=0)
    transaction_ref: str = Field(..., min_length=1, description="Payment reference shown on the sender's receipt")

    def to_request(self) -> RequestCreate:
        return RequestCreate(type=RequestType.DEPOSIT, amount=self.amount, transaction_ref=self.transaction_ref)

class WithdrawalCreate(BaseModel):
    amount: Decimal = Field(..., gt=0)
    upi_id: str = Field(..., min_length=1, description="Payout destination, e.g. yourname@bank")

    def to_request(self) -> RequestCreate:
        return RequestCreate(type=RequestType.WITHDRAWAL, amount=self.amount, upi_id=self.upi_id)

class RequestRead(BaseModel):
    id: str
    user_id: str
    type: str
    amount: Decimal
    transaction_ref: Optional[str] = None
    upi_id: Optional[str] = None
    status: str
    admin_note: Optional[str] = None
    created_at: datetime

    class Config:
        from_attributes = True

class HistoryEntry(BaseModel):
    """One line of the unified wallet history: a ledger entry or a request."""
    kind: Literal["transaction", "request"]
    id: str
    type: str
    amount: Decimal
    status: Optional[str] = None # Only requests carry a status
    description: Optional[str] = None
    timestamp: datetime
