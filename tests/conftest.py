"""Общие фикстуры тестов.

- test_engine / db_session: SQLite в памяти (aiosqlite), схема создается из моделей
- make_user: создание пользователя в БД
- broadcaster: рассылка, запоминающая события
- client: TestClient с подмененными get_db и get_broadcaster
"""
import os
from typing import Any, Dict, List, Tuple

# Переменные окружения задаются до импорта приложения
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("JWT_SECRET", "test-jwt-secret-key-for-doccollab-tests")
os.environ.setdefault("LOG_LEVEL", "WARNING")

import pytest
import pytest_asyncio
from fastapi.testclient import TestClient
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from app.core.db import Base, get_db
import app.db.models  # noqa: F401
from app.db.repositories.user_repository import UserRepository
from app.domains.identity.entities import User


def create_test_engine():
    return create_async_engine(
        "sqlite+aiosqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )


@pytest_asyncio.fixture
async def test_engine():
    engine = create_test_engine()
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(test_engine):
    session_factory = async_sessionmaker(test_engine, expire_on_commit=False)
    async with session_factory() as session:
        yield session


@pytest.fixture
def make_user(db_session):
    """Фабрика пользователей: await make_user("alice")"""

    async def _make_user(username: str, password: str = "Secret123") -> User:
        user = User.create_user(
            email=f"{username}@example.com",
            username=username,
            password=password
        )
        return await UserRepository(db_session).create(user)

    return _make_user


class RecordingBroadcaster:
    """Запоминает разосланные события вместо отправки клиентам"""

    def __init__(self):
        self.events: List[Tuple[str, Dict[str, Any]]] = []

    async def broadcast(self, event_name: str, payload: Dict[str, Any]) -> None:
        self.events.append((event_name, payload))

    def names(self) -> List[str]:
        return [name for name, _ in self.events]


@pytest.fixture
def broadcaster():
    return RecordingBroadcaster()


@pytest.fixture
def client(broadcaster):
    """TestClient с отдельной БД в памяти.

    Движок создается при первом запросе, внутри цикла событий TestClient.
    """
    from app.api.ws.events import get_broadcaster
    from app.main import app

    state = {}

    async def override_get_db():
        if "sessions" not in state:
            engine = create_test_engine()
            async with engine.begin() as conn:
                await conn.run_sync(Base.metadata.create_all)
            state["engine"] = engine
            state["sessions"] = async_sessionmaker(engine, expire_on_commit=False)
        async with state["sessions"]() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_broadcaster] = lambda: broadcaster

    with TestClient(app) as test_client:
        yield test_client
        if "engine" in state:
            test_client.portal.call(state["engine"].dispose)

    app.dependency_overrides.clear()
