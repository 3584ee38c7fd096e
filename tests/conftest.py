import os

# the app module builds its engine at import time
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("SECRET_KEY", "test-secret")

from typing import List, Optional

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from flashdeck.core.database import enable_sqlite_foreign_keys, get_db, init_db
from flashdeck.core.security import create_access_token, hash_password
from flashdeck.main import app
from flashdeck.models.card import Card
from flashdeck.models.deck import Deck
from flashdeck.models.user import User
from flashdeck.schemas.ai import GeneratedCard
from flashdeck.services.ai_generation import get_card_generator

# hashing once keeps the suite fast
PASSWORD = "correct-horse-battery"
PASSWORD_HASH = hash_password(PASSWORD)


class FakeCardGenerator:
    """Stand-in for the OpenAI-backed generator."""

    def __init__(self, count: int = 0, error: Optional[Exception] = None, configured: bool = True):
        self.count = count
        self.error = error
        self.configured = configured
        self.prompts: List[str] = []

    @property
    def is_configured(self) -> bool:
        return self.configured

    async def generate(self, prompt: str) -> List[GeneratedCard]:
        self.prompts.append(prompt)
        if self.error is not None:
            raise self.error
        return [GeneratedCard(frontSide=f"Q{i}", backSide=f"A{i}") for i in range(self.count)]


@pytest_asyncio.fixture
async def engine():
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    enable_sqlite_foreign_keys(engine.sync_engine)
    await init_db(engine)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def session_maker(engine):
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture
async def db(session_maker):
    async with session_maker() as session:
        yield session


@pytest.fixture
def fake_generator() -> FakeCardGenerator:
    return FakeCardGenerator()


@pytest_asyncio.fixture
async def client(session_maker, fake_generator):
    async def override_get_db():
        async with session_maker() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_card_generator] = lambda: fake_generator
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


@pytest.fixture
def make_user(db):
    async def _make_user(email: str = "alice@example.com", features: str = "") -> User:
        user = User(email=email, password=PASSWORD_HASH, full_name=email.split("@")[0], features=features)
        db.add(user)
        await db.commit()
        await db.refresh(user)
        return user

    return _make_user


@pytest.fixture
def make_deck(db):
    async def _make_deck(user: User, title: str = "Spanish", description: Optional[str] = "Basic words", cards=()) -> Deck:
        deck = Deck(title=title, description=description, user_id=user.id)
        db.add(deck)
        await db.flush()
        for front, back in cards:
            db.add(Card(deck_id=deck.id, front_side=front, back_side=back))
        await db.commit()
        await db.refresh(deck)
        return deck

    return _make_deck


def auth_headers(user: User) -> dict:
    return {"Authorization": f"Bearer {create_access_token({'sub': user.email})}"}


@pytest_asyncio.fixture
async def alice(make_user):
    return await make_user("alice@example.com", features="ai_deck")


@pytest_asyncio.fixture
async def bob(make_user):
    return await make_user("bob@example.com")
