from pydantic import BaseModel
from typing import Optional
from datetime import datetime
from decimal import Decimal

class ParticipantRead(BaseModel):
    tournament_id: str
    user_id: str
    username: str
    in_game_name: Optional[str] = None
    join_time: Optional[datetime] = None
    rank: int
    kills: int
    winnings: Decimal

    class Config:
        from_attributes = True
