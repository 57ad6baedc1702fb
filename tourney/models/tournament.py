import datetime
from uuid import uuid4

from sqlalchemy import Boolean, CheckConstraint, Column, DateTime, Integer, Numeric, String
from sqlalchemy.orm import relationship

from tourney.core.database import Base
from tourney.models.enums import TournamentStatus

class Tournament(Base):
    __tablename__ = "tournaments"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid4()))
    title = Column(String, nullable=False)
    status = Column(String, nullable=False, default=TournamentStatus.UPCOMING.value, index=True)
    entry_fee = Column(Numeric(12, 2), nullable=False, default=0)
    prize_pool = Column(Numeric(12, 2), nullable=False, default=0) # Informational only
    slots_total = Column(Integer, nullable=False)
    slots_filled = Column(Integer, nullable=False, default=0)
    map = Column(String, nullable=True)
    mode = Column(String, nullable=True) # e.g. "Solo", "Duo", "Squad"
    start_time = Column(DateTime, nullable=True)
    is_approved = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime, default=datetime.datetime.utcnow)

    version = Column(Integer, nullable=False)

    participants = relationship("Participant", back_populates="tournament")

    __table_args__ = (
        CheckConstraint("entry_fee >= 0", name="chk_entry_fee_nonneg"),
        CheckConstraint("slots_filled >= 0", name="chk_slots_filled_nonneg"),
        CheckConstraint("slots_filled <= slots_total", name="chk_slots_within_total"),
    )
    __mapper_args__ = {"version_id_col": version}

    def __repr__(self):
        return f"<Tournament(id={self.id}, title={self.title}, slots={self.slots_filled}/{self.slots_total})>"
