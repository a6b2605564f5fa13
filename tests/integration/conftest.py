"""Shared fixtures: a fresh in-memory SQLite database per test."""

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from cms.application.interfaces import MailSender
from cms.infrastructure.database import Base
from cms.infrastructure.database.models import CategoryModel, UserModel
from cms.infrastructure.database.session import enable_sqlite_foreign_keys, get_db_session
from cms.infrastructure.dependencies import get_image_storage, get_mail_sender
from cms.infrastructure.security import pwd_context
from cms.infrastructure.storage.local_image_storage import LocalImageStorage
from cms.main import app


@pytest_asyncio.fixture
async def db_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    enable_sqlite_foreign_keys(engine)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def session_factory(db_engine):
    return async_sessionmaker(db_engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture
async def session(session_factory):
    async with session_factory() as session:
        yield session


@pytest_asyncio.fixture
async def categories(session) -> dict[str, int]:
    """Seed three categories in the test session; returns name → id."""
    models = [CategoryModel(name=name) for name in ("News", "Tech", "Travel")]
    session.add_all(models)
    await session.flush()
    return {model.name: model.id for model in models}


class RecordingMailSender(MailSender):
    """Collects outgoing mail instead of talking to an SMTP server."""

    def __init__(self):
        self.sent: list[dict] = []

    async def send(self, *, to, subject, body, reply_to=None):
        self.sent.append({"to": to, "subject": subject, "body": body, "reply_to": reply_to})


ADMIN_AUTH = ("admin", "s3cret")


@pytest.fixture
def mail_sender() -> RecordingMailSender:
    return RecordingMailSender()


@pytest.fixture
def image_storage(tmp_path) -> LocalImageStorage:
    return LocalImageStorage(str(tmp_path / "uploads"), max_size_bytes=1024)


@pytest_asyncio.fixture
async def seeded(session_factory) -> dict[str, int]:
    """Commit an admin account and three categories; returns category name → id."""
    async with session_factory() as session:
        session.add(UserModel(username=ADMIN_AUTH[0], password=pwd_context.hash(ADMIN_AUTH[1])))
        models = [CategoryModel(name=name) for name in ("News", "Tech", "Travel")]
        session.add_all(models)
        await session.commit()
        return {model.name: model.id for model in models}


@pytest_asyncio.fixture
async def client(session_factory, seeded, mail_sender, image_storage):
    """HTTP client against the app, wired to the test database and fakes."""

    async def _session_override():
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db_session] = _session_override
    app.dependency_overrides[get_mail_sender] = lambda: mail_sender
    app.dependency_overrides[get_image_storage] = lambda: image_storage

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as http_client:
        yield http_client

    app.dependency_overrides.clear()
