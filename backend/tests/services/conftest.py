"""Service test fixtures — file-backed SQLite + FastAPI test client.

Invariants:
    - Every test gets a fresh SQLite database file under tmp_path
    - get_context dependency overridden with a context built from test collaborators
    - Mail goes to FakeMailer, uploads to a tmp directory

Design Decisions:
    - File database instead of :memory: so concurrent sessions share one database
    - Lifespan is not run by ASGITransport; the override supplies the context instead
"""

import pytest
from httpx import ASGITransport, AsyncClient

from folio.api.dependencies import get_context
from folio.context import AppContext
from folio.infrastructure.blob_store import DiskBlobStore
from folio.infrastructure.database import DatabaseSessionManager
from folio.main import app
from folio.services.contact_relay import ContactRelay
from tests.services.fakes import ADMIN_SECRET, FakeMailer



@pytest.fixture
async def db_manager(tmp_path):
    manager = DatabaseSessionManager(
        f"sqlite+aiosqlite:///{tmp_path / 'test.sqlite3'}",
    )
    await manager.create_schema()
    yield manager
    await manager.dispose()


@pytest.fixture
async def test_db(db_manager):
    async with db_manager.session() as session:
        yield session


@pytest.fixture
def fake_mailer():
    return FakeMailer()


@pytest.fixture
def upload_dir(tmp_path):
    return tmp_path / "uploads"


@pytest.fixture
def test_context(db_manager, fake_mailer, upload_dir):
    return AppContext(
        db=db_manager,
        admin_secret=ADMIN_SECRET,
        blobs=DiskBlobStore(upload_dir, max_bytes=1024),
        contact=ContactRelay(
            fake_mailer,
            sender="noreply@example.com",
            recipient="owner@example.com",
        ),
    )


@pytest.fixture
async def client(test_context):
    """FastAPI test client with the application context overridden."""
    app.dependency_overrides[get_context] = lambda: test_context

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
