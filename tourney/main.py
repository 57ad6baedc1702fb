from contextlib import asynccontextmanager
from typing import Optional

import uvicorn
from fastapi import FastAPI

from tourney.api.endpoints import auth as auth_endpoints
from tourney.api.endpoints import users as user_endpoints
from tourney.api.endpoints import tournaments as tournament_endpoints
from tourney.api.endpoints import wallet as wallet_endpoints
from tourney.core.config import Settings, settings as default_settings
from tourney.core.database import create_db_engine, create_session_factory, init_db
from tourney.core.logger import setup_logger

logger = setup_logger(__name__)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Build the API with its own engine and session factory (no module-level database globals)."""
    settings = settings or default_settings

    engine = create_db_engine(settings.DATABASE_URL, echo=settings.DEBUG)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info(f"Starting {settings.PROJECT_NAME}")
        init_db(engine)
        yield
        engine.dispose()
        logger.info("Database connection closed")

    app = FastAPI(title=settings.PROJECT_NAME, lifespan=lifespan)
    app.state.settings = settings
    app.state.engine = engine
    app.state.session_factory = create_session_factory(engine)

    app.include_router(auth_endpoints.router, prefix="/auth", tags=["Authentication"])
    app.include_router(user_endpoints.router, prefix="/users", tags=["Users"])
    app.include_router(tournament_endpoints.router, prefix="/tournaments", tags=["Tournaments"])
    app.include_router(wallet_endpoints.router, prefix="/wallet", tags=["Wallet"])

    @app.get("/")
    async def root():
        return {"message": settings.PROJECT_NAME}

    return app


app = create_app()


if __name__ == "__main__":
    uvicorn.run("tourney.main:app", host="0.0.0.0", port=8000, reload=True)
