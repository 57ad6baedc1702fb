import datetime

from sqlalchemy import Column, DateTime, ForeignKey, Integer, Numeric, String
from sqlalchemy.orm import relationship

from tourney.core.database import Base

class Participant(Base):
    __tablename__ = "participants"

    # One row per (tournament, user); the key itself rejects a second join
    tournament_id = Column(String(36), ForeignKey("tournaments.id"), primary_key=True)
    user_id = Column(String(36), ForeignKey("users.id"), primary_key=True, index=True)
    username = Column(String, nullable=False)
    in_game_name = Column(String, nullable=True)
    join_time = Column(DateTime, default=datetime.datetime.utcnow)

    # Filled in later by results entry
    rank = Column(Integer, nullable=False, default=0)
    kills = Column(Integer, nullable=False, default=0)
    winnings = Column(Numeric(12, 2), nullable=False, default=0)

    user = relationship("User", back_populates="participations")
    tournament = relationship("Tournament", back_populates="participants")
