from decimal import Decimal

from pydantic_settings import BaseSettings

class Settings(BaseSettings):
    PROJECT_NAME: str = "Tourney Wallet API"
    DATABASE_URL: str = "sqlite:///./tourney.db"
    SECRET_KEY: str = "YOUR_SECRET_KEY_HERE"
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 30

    # Wallet rules
    MIN_WITHDRAWAL_AMOUNT: Decimal = Decimal("100")
    JOIN_MAX_ATTEMPTS: int = 5

    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    class Config:
        env_file = ".env"

settings = Settings()
