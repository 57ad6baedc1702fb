from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime
from decimal import Decimal

from tourney.models.enums import TournamentStatus

class TournamentBase(BaseModel):
    title: str = Field(..., min_length=1, max_length=100)
    entry_fee: Decimal = Field(Decimal("0"), ge=0)
    prize_pool: Decimal = Field(Decimal("0"), ge=0)
    slots_total: int = Field(..., gt=0)
    map: Optional[str] = None
    mode: Optional[str] = None
    start_time: Optional[datetime] = None

class TournamentCreate(TournamentBase):
    status: TournamentStatus = TournamentStatus.UPCOMING
    is_approved: bool = True

class TournamentRead(TournamentBase):
    id: str
    status: str
    slots_filled: int
    is_approved: bool

    class Config:
        from_attributes = True

class MembershipRead(BaseModel):
    tournament_id: str
    joined: bool
