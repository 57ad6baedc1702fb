import datetime
from uuid import uuid4

from sqlalchemy import Column, DateTime, ForeignKey, Numeric, String
from sqlalchemy.orm import relationship

from tourney.core.database import Base
from tourney.models.enums import RequestStatus

class Request(Base):
    __tablename__ = "requests"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid4()))
    user_id = Column(String(36), ForeignKey("users.id"), nullable=False, index=True)
    username = Column(String, nullable=True)
    type = Column(String, nullable=False) # "Deposit" or "Withdrawal"
    amount = Column(Numeric(12, 2), nullable=False)
    transaction_ref = Column(String, nullable=True) # Payment reference for deposits
    upi_id = Column(String, nullable=True) # Payout destination for withdrawals
    status = Column(String, nullable=False, default=RequestStatus.PENDING.value)
    admin_note = Column(String, nullable=True)
    created_at = Column(DateTime, default=datetime.datetime.utcnow, index=True)

    user = relationship("User", back_populates="requests")
