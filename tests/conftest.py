"""Shared test fixtures."""

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from ttreviews.db.base import Base
# Import all models to register with Base.metadata
import ttreviews.db.models  # noqa: F401
from ttreviews.models.enums import SubmissionType
from ttreviews.repositories.submission_repo import SubmissionRepository


class RecordingNotifier:
    """Notification sink that keeps every event it receives."""

    def __init__(self):
        self.events = []

    async def notify(self, event):
        self.events.append(event)
        return {"status": 204, "error": None}


class RecordingAssetStore:
    def __init__(self, fail: bool = False):
        self.deleted = []
        self.fail = fail

    async def delete(self, key: str) -> None:
        if self.fail:
            raise OSError("bucket unavailable")
        self.deleted.append(key)


@pytest.fixture
async def db_engine():
    """Create an in-memory SQLite async engine for testing."""
    engine = create_async_engine("sqlite+aiosqlite:///", echo=False)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
async def db_session(db_engine):
    """Create a test database session."""
    session_factory = async_sessionmaker(db_engine, class_=AsyncSession, expire_on_commit=False)
    async with session_factory() as session:
        yield session


@pytest.fixture
def notifier():
    return RecordingNotifier()


@pytest.fixture
def app(db_engine, notifier):
    """Create a test application instance with in-memory DB."""
    from ttreviews.main import create_app

    _app = create_app()
    _app.state.db_engine = db_engine
    _app.state.db_session_factory = async_sessionmaker(db_engine, class_=AsyncSession, expire_on_commit=False)
    _app.state.notifier = notifier
    _app.state.asset_store = None
    return _app


@pytest.fixture
async def client(app):
    """Async HTTP test client."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


EQUIPMENT_DATA = {
    "name": "Butterfly Viscaria",
    "manufacturer": "Butterfly",
    "category": "blade",
    "specifications": {"plies": "5+2", "weight": "86g"},
    "image_key": "equipment/viscaria/1700000000.jpg",
}


@pytest.fixture
def make_submission(db_session):
    """Return a coroutine that inserts a pending submission and returns its row."""

    async def _make(submission_type: str, user_id: str = "user_1", **fields):
        if not fields and submission_type == SubmissionType.EQUIPMENT:
            fields = dict(EQUIPMENT_DATA)
        repo = SubmissionRepository(db_session, SubmissionType(submission_type))
        row = await repo.create_submission(user_id, fields)
        await db_session.commit()
        return row

    return _make


@pytest.fixture
def asset_store():
    return RecordingAssetStore()


@pytest.fixture
def failing_asset_store():
    return RecordingAssetStore(fail=True)
