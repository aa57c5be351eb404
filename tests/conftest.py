import itertools
import json
import os
import tempfile

# 設定必須在匯入 artmatch 之前完成 (Settings 在匯入時就會讀取環境變數)
_TEST_DIR = tempfile.mkdtemp(prefix="artmatch-tests-")
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{os.path.join(_TEST_DIR, 'import.db')}"
os.environ["JWT_SECRET_KEY"] = "artmatch-test-secret"
os.environ["UPLOAD_DIR"] = os.path.join(_TEST_DIR, "static", "uploads")
os.environ["UPLOAD_URL_PREFIX"] = "/static/uploads"

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlalchemy.orm import sessionmaker

from artmatch.main import app
from artmatch.core.database import Base, get_db, get_session_factory
from artmatch.core.security import create_access_token, get_password_hash
from artmatch.core.websocket_manager import ConnectionManager, get_connection_manager
from artmatch.models.user import User, UserRoleEnum
from artmatch.models.artist_profile import ArtistProfile
from artmatch.models.employer_profile import EmployerProfile

TEST_PASSWORD = "secret123"
_PASSWORD_HASH = get_password_hash(TEST_PASSWORD)


class FakeWebSocket:
    """記錄收到的 frame；fail=True 時模擬已斷線的連線"""

    def __init__(self, fail: bool = False):
        self.fail = fail
        self.accepted = False
        self.sent = []

    async def accept(self):
        self.accepted = True

    async def send_text(self, data: str):
        if self.fail:
            raise RuntimeError("socket closed")
        self.sent.append(json.loads(data))

    def events(self, name: str):
        return [frame["data"] for frame in self.sent if frame["event"] == name]


@pytest_asyncio.fixture
async def engine(tmp_path):
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture
async def db(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture
def connection_manager():
    return ConnectionManager()


@pytest_asyncio.fixture
async def client(session_factory, connection_manager):
    async def override_get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_session_factory] = lambda: session_factory
    app.dependency_overrides[get_connection_manager] = lambda: connection_manager

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest.fixture
def make_user(session_factory):
    counter = itertools.count(1)

    async def _make_user(role=UserRoleEnum.artist, fullname=None, user_id=None, is_active=True):
        n = next(counter)
        user = User(
            username=f"user{n}",
            email=f"user{n}@artmatch.io",
            password_hash=_PASSWORD_HASH,
            fullname=fullname or f"User {n}",
            role=role,
            is_active=is_active
        )
        if user_id is not None:
            user.user_id = user_id
        if role == UserRoleEnum.artist:
            user.artist_profile = ArtistProfile(bio="")
        elif role == UserRoleEnum.employer:
            user.employer_profile = EmployerProfile(bio="")

        async with session_factory() as session:
            session.add(user)
            await session.commit()
            await session.refresh(user)
        return user

    return _make_user


@pytest.fixture
def auth_headers():
    def _auth_headers(user: User) -> dict:
        token = create_access_token(
            data={"sub": user.email, "user_id": user.user_id, "role": user.role.value}
        )
        return {"Authorization": f"Bearer {token}"}

    return _auth_headers


@pytest.fixture
def fetch_all(session_factory):
    """每次用新的 session 查詢，避免讀到 identity map 中的舊資料"""
    async def _fetch_all(stmt):
        async with session_factory() as session:
            result = await session.execute(stmt)
            return result.scalars().all()

    return _fetch_all


@pytest.fixture
def make_socket():
    return FakeWebSocket


@pytest.fixture
def connect_socket(connection_manager):
    async def _connect(user_id: int, fail: bool = False) -> FakeWebSocket:
        ws = FakeWebSocket(fail=fail)
        await connection_manager.connect(user_id, ws)
        return ws

    return _connect
