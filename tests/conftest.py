from datetime import datetime, timedelta, timezone

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app import models  # noqa: F401
from app.core.config import settings
from app.core.database import Base, get_db
from app.core.deps import waitlist_rate_limit
from app.main import app
from app.models.waitlist_entry import WaitlistEntry

BASE_TIME = datetime(2026, 1, 1, tzinfo=timezone.utc)


@pytest.fixture
def db_session():
    """In-memory SQLite shared across threads for the duration of one test"""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    SessionLocal = sessionmaker(bind=engine, autoflush=False)
    session = SessionLocal()
    yield session
    session.close()
    engine.dispose()


@pytest.fixture
def add_entry(db_session):
    """Insert an entry directly; larger minutes means a more recent signup."""
    def _add(email: str, name: str = "Test User", minutes: int = 0, notified: bool = False) -> WaitlistEntry:
        entry = WaitlistEntry(
            email=email,
            name=name,
            created_at=BASE_TIME + timedelta(minutes=minutes),
            notified=notified,
            notified_at=BASE_TIME + timedelta(days=1) if notified else None,
        )
        db_session.add(entry)
        db_session.commit()
        db_session.refresh(entry)
        return entry
    return _add


@pytest.fixture
def api_app(db_session, monkeypatch):
    monkeypatch.setattr(settings, "ADMIN_API_TOKEN", "")

    def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[waitlist_rate_limit] = lambda: None
    yield app
    app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def client(api_app):
    async with AsyncClient(transport=ASGITransport(app=api_app), base_url="http://test") as ac:
        yield ac
