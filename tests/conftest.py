"""Shared test fixtures."""

import random

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from t2k.domain.ports import CheckContext
from t2k.infra.db import get_db
from t2k.main import app
from t2k.models.check import (
    CufDialogResult,
    CufOptions,
    DialogResult,
    RollMode,
    RollOverrides,
)
from t2k.models.db_models import Base

TEST_DB_URL = "sqlite+aiosqlite:///:memory:"


@pytest_asyncio.fixture
async def db_engine():
    engine = create_async_engine(TEST_DB_URL, echo=False)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(db_engine):
    factory = async_sessionmaker(db_engine, class_=AsyncSession, expire_on_commit=False)
    async with factory() as session:
        yield session


@pytest_asyncio.fixture
async def client(db_engine):
    factory = async_sessionmaker(db_engine, class_=AsyncSession, expire_on_commit=False)

    async def _override_get_db():
        async with factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db] = _override_get_db
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c
    app.dependency_overrides.clear()


# --- Collaborator fakes ---


class CountingRandom(random.Random):
    """Seeded RNG that counts dice rolled, so tests can tell whether a roll was evaluated."""

    def __init__(self, seed: int = 42) -> None:
        super().__init__(seed)
        self.calls = 0

    def randint(self, a: int, b: int) -> int:
        self.calls += 1
        return super().randint(a, b)


class FakeDialog:
    def __init__(self, answer=None, cuf_answer=None) -> None:
        self.answer = answer
        self.cuf_answer = cuf_answer
        self.asked: list[str] = []
        self.seen_formula: str | None = None

    async def ask_roll_options(self, params, formula):
        self.asked.append("roll")
        self.seen_formula = formula
        if self.answer is not None:
            return self.answer
        return DialogResult(options=RollOverrides.from_parameters(params))

    async def ask_cuf_options(self, title, unit_morale, modifier, max_push, roll_mode):
        self.asked.append("cuf")
        if self.cuf_answer is not None:
            return self.cuf_answer
        return CufDialogResult(options=CufOptions(unit_morale=unit_morale, roll_mode=roll_mode))


class FakeHandle:
    def __init__(self, log: list, message_id: str) -> None:
        self.id = message_id
        self.log = log
        self.deleted = False

    async def delete(self) -> None:
        self.deleted = True
        self.log.append(("delete", self.id))


class FakeSink:
    def __init__(self, log: list | None = None) -> None:
        self.log = log if log is not None else []
        self.published: list[tuple] = []

    async def publish(self, roll, roll_mode):
        self.published.append((roll, roll_mode))
        self.log.append(("publish", roll.name))
        return FakeHandle(self.log, f"msg-{len(self.published)}")


class FakeActor:
    def __init__(self, **ratings: int) -> None:
        self.ratings = ratings

    def get_rating(self, key: str) -> int:
        return self.ratings[key]


@pytest.fixture
def rng():
    return CountingRandom()


@pytest.fixture
def make_ctx(rng):
    def _make(dialog=None, sink=None, show_task_check_options=False):
        return CheckContext(
            dialog=dialog or FakeDialog(),
            sink=sink or FakeSink(),
            show_task_check_options=show_task_check_options,
            default_roll_mode=RollMode.PUBLIC,
            rng=rng,
        )

    return _make


async def create_actor(client: AsyncClient, name: str = "Sgt. Kowalski", **sheet) -> dict:
    """Create an actor through the API and return its JSON."""
    body = {
        "name": name,
        "attributes": {"str": 8, "agl": 10, "int": 6, "emp": 6},
        "skills": {"rangedCombat": 10, "recon": 8},
        "cuf": 10,
        "unit_morale": 8,
    }
    body.update(sheet)
    resp = await client.post("/api/actors", json=body)
    assert resp.status_code == 200
    return resp.json()
