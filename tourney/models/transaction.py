import datetime
from uuid import uuid4

from sqlalchemy import Column, DateTime, ForeignKey, Numeric, String
from sqlalchemy.orm import relationship

from tourney.core.database import Base

class Transaction(Base):
    """
    Append-only wallet ledger.

    ``amount`` is signed: debits (entry fees, withdrawals) are negative,
    credits positive. A user's balance equals their opening balance plus the
    sum of these amounts. Rows are never updated or deleted.
    """
    __tablename__ = "transactions"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid4()))
    user_id = Column(String(36), ForeignKey("users.id"), nullable=False, index=True)
    amount = Column(Numeric(12, 2), nullable=False)
    type = Column(String, nullable=False) # e.g. "Entry Fee"
    description = Column(String, nullable=True)
    tournament_id = Column(String(36), ForeignKey("tournaments.id"), nullable=True)
    timestamp = Column(DateTime, default=datetime.datetime.utcnow, index=True)

    user = relationship("User", back_populates="transactions")
    tournament = relationship("Tournament")

    def __repr__(self):
        return f"<Transaction(user_id={self.user_id}, amount={self.amount}, type='{self.type}')>"
