from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, EmailStr, Field

class UserBase(BaseModel):
    username: str
    email: EmailStr
    in_game_name: Optional[str] = None
    profile_pic_url: Optional[str] = None

class UserRead(UserBase):
    id: str
    wallet_balance: Decimal
    role: str
    is_banned: bool
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True

class UserProfileUpdate(BaseModel):
    username: Optional[str] = Field(None, min_length=3, max_length=32)
    in_game_name: Optional[str] = Field(None, max_length=32)

class UserStats(BaseModel):
    id: str
    username: str
    matches_played: int
    total_kills: int
    total_winnings: Decimal
    wins: int
    win_percentage: float
