import pytest
from datetime import datetime, timedelta
from decimal import Decimal

from fastapi.testclient import TestClient

from tourney.core.config import Settings
from tourney.core.database import create_db_engine, create_session_factory, init_db
from tourney.core.security import create_access_token
from tourney.main import create_app
from tourney.models.enums import TournamentStatus
from tourney.schemas.tournament_schemas import TournamentCreate
from tourney.services import tournament_service, user_service

# Seeded users skip bcrypt; they authenticate with tokens minted directly
DUMMY_PASSWORD_HASH = "not-a-real-hash"


@pytest.fixture
def database_url(tmp_path):
    # File-backed so that separate sessions really are separate connections
    return f"sqlite:///{tmp_path / 'test.db'}"


@pytest.fixture
def session_factory(database_url):
    engine = create_db_engine(database_url)
    init_db(engine)
    yield create_session_factory(engine)
    engine.dispose()


@pytest.fixture
def db(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def make_user(db):
    counter = {"n": 0}

    def _make_user(balance="0", username=None, **kwargs):
        counter["n"] += 1
        username = username or f"player{counter['n']}"
        return user_service.create_user(
            db,
            email=kwargs.pop("email", f"{username}@example.com"),
            username=username,
            hashed_password=DUMMY_PASSWORD_HASH,
            wallet_balance=Decimal(balance),
            **kwargs,
        )

    return _make_user


@pytest.fixture
def make_tournament(db):
    def _make_tournament(entry_fee="50", slots_total=10, status=TournamentStatus.UPCOMING, **kwargs):
        data = {
            "title": kwargs.pop("title", "Erangel Solo Cup"),
            "entry_fee": Decimal(entry_fee),
            "prize_pool": Decimal(kwargs.pop("prize_pool", "500")),
            "slots_total": slots_total,
            "map": kwargs.pop("map", "Erangel"),
            "mode": kwargs.pop("mode", "Solo"),
            "start_time": kwargs.pop("start_time", datetime.utcnow() + timedelta(days=1)),
            "status": status,
        }
        data.update(kwargs)
        return tournament_service.create_tournament(db, TournamentCreate(**data))

    return _make_tournament


@pytest.fixture
def app(database_url):
    return create_app(Settings(DATABASE_URL=database_url))


@pytest.fixture
def client(app, session_factory):
    # session_factory has already created the schema on the same database file
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def auth_headers():
    def _auth_headers(user) -> dict:
        token = create_access_token(user.id)
        return {"Authorization": f"Bearer {token}"}

    return _auth_headers
