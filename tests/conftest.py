"""Pytest configuration and shared fixtures."""

import datetime as dt
import os

# settings are read at import time; keep the app off disk and skip startup work
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["RUN_MIGRATIONS"] = "false"
os.environ["SEED_DEMO_DATA"] = "false"
os.environ["STORAGE_BACKEND"] = "sql"
os.environ["ADMIN_USERNAME"] = "admin"
os.environ["ADMIN_PASSWORD"] = "password"
os.environ.pop("ADMIN_PASSWORD_HASH", None)
os.environ["HOUSE_PARTNER_NAME"] = "Rumba"

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from nightflow.api.deps import get_db, get_repository  # noqa: E402
from nightflow.db.base import Base  # noqa: E402
from nightflow.db.session import build_engine  # noqa: E402
from nightflow.main import api  # noqa: E402
from nightflow.repository.memory import InMemoryEventRepository  # noqa: E402
from nightflow.repository.sql import SqlEventRepository  # noqa: E402
from nightflow.schemas.entry import EventEntryCreate, Promoter, Staff  # noqa: E402
from nightflow.schemas.event import EventCreate  # noqa: E402
from nightflow.schemas.partner import Partner  # noqa: E402


@pytest.fixture
def engine():
    eng = build_engine("sqlite://", poolclass=StaticPool)
    Base.metadata.create_all(eng)
    yield eng
    eng.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine, autocommit=False, autoflush=False)


@pytest.fixture
def db_session(session_factory):
    with session_factory() as db:
        yield db


@pytest.fixture
def memory_repo() -> InMemoryEventRepository:
    return InMemoryEventRepository()


@pytest.fixture
def sql_repo(db_session) -> SqlEventRepository:
    return SqlEventRepository(db_session)


@pytest.fixture(params=["memory", "sql"])
def repo(request):
    """Each repository implementation in turn."""
    return request.getfixturevalue(f"{request.param}_repo")


@pytest.fixture
def make_event():
    def _make(**overrides) -> EventCreate:
        data = {
            "name": "Night Fever",
            "date": dt.date(2024, 6, 14),
            "time": "22:00",
            "venue_name": "Skyline Lounge",
            "location": "Downtown",
            "deal_type": "Entrance Deal",
            "rumba_percentage": 50,
            "payment_terms": "50% upfront",
            "partners": [Partner(name="Rumba", percentage=50), Partner(name="Local Partner", percentage=50)],
        }
        data.update(overrides)
        return EventCreate(**data)

    return _make


@pytest.fixture
def make_entry():
    def _make(**overrides) -> EventEntryCreate:
        data = {
            "date": dt.date(2024, 6, 14),
            "promoters": [
                Promoter(id="p1", name="John Promoter", commission=500),
                Promoter(id="p2", name="Sarah Promoter", commission=350),
            ],
            "staff": [
                Staff(id="s1", role="Hostess", name="Alice", payment=200),
                Staff(id="s2", role="Photographer", name="Bob", payment=150),
            ],
            "table_commissions": 800,
            "vip_girls_commissions": 300,
            "ad_spend": 400,
            "door_revenue": 4000,
            "attendance": 200,
            "tables_from_rumba": 3,
            "days_until_paid": 7,
        }
        data.update(overrides)
        return EventEntryCreate(**data)

    return _make


@pytest.fixture
def client(session_factory, memory_repo):
    def _get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    api.dependency_overrides[get_db] = _get_db
    api.dependency_overrides[get_repository] = lambda: memory_repo
    with TestClient(api) as c:
        yield c
    api.dependency_overrides.clear()


@pytest.fixture
def auth_headers(client) -> dict:
    resp = client.post("/api/v1/auth/login", json={"username": "admin", "password": "password"})
    assert resp.status_code == 200, resp.text
    return {"Authorization": f"Bearer {resp.json()['access_token']}"}
