import datetime
from uuid import uuid4

from sqlalchemy import Boolean, CheckConstraint, Column, DateTime, Integer, Numeric, String
from sqlalchemy.orm import relationship

from tourney.core.database import Base
from tourney.models.enums import UserRole

class User(Base):
    __tablename__ = "users"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid4()))
    email = Column(String, unique=True, index=True, nullable=False)
    username = Column(String, unique=True, index=True, nullable=False)
    in_game_name = Column(String, default="")
    hashed_password = Column(String, nullable=False)
    wallet_balance = Column(Numeric(12, 2), nullable=False, default=0)
    role = Column(String, nullable=False, default=UserRole.USER.value)
    is_banned = Column(Boolean, nullable=False, default=False)
    profile_pic_url = Column(String, default="")
    created_at = Column(DateTime, default=datetime.datetime.utcnow)

    # Bumped on every UPDATE; a write based on a stale read fails with StaleDataError
    version = Column(Integer, nullable=False)

    participations = relationship("Participant", back_populates="user")
    transactions = relationship("Transaction", back_populates="user")
    requests = relationship("Request", back_populates="user")

    __table_args__ = (
        CheckConstraint("wallet_balance >= 0", name="chk_wallet_balance_nonneg"),
    )
    __mapper_args__ = {"version_id_col": version}

    def __repr__(self):
        return f"<User(id={self.id}, username={self.username}, balance={self.wallet_balance})>"
