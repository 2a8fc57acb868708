"""Shared test fixtures for Trip Indo."""

import json
import os

# Point the app at SQLite before tripindo.config is imported
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["SECRET_KEY"] = "test-secret-key-with-at-least-32-bytes"
os.environ["RESEND_API_KEY"] = ""

import httpx
import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from tripindo.main import app
from tripindo.services.email import InvitationMailer, get_mailer
from tripindo.utils.database import Base, get_db

DEFAULT_PASSWORD = "password123"


class FakeResend:
    """Stands in for the Resend API behind httpx.MockTransport."""

    def __init__(self):
        self.requests = []
        self.status_code = 200
        self.text_body = None

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.status_code >= 400:
            return httpx.Response(self.status_code, json={"message": "rejected by provider"})
        if self.text_body is not None:
            return httpx.Response(200, text=self.text_body)
        return httpx.Response(200, json={"id": f"email-{len(self.requests)}"})

    @property
    def sent(self):
        return [json.loads(request.content) for request in self.requests]

    def mailer(self, api_key: str = "re_test_key") -> InvitationMailer:
        return InvitationMailer(api_key=api_key, transport=httpx.MockTransport(self.handler))


# Database fixtures
@pytest.fixture
async def engine():
    """Fresh in-memory database with every table created."""
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False, autoflush=False)


@pytest.fixture
async def db(session_factory):
    async with session_factory() as session:
        yield session


# HTTP fixtures
@pytest.fixture
def resend():
    return FakeResend()


@pytest.fixture
async def client(session_factory, resend):
    """API client with the database and the mailer swapped for test doubles."""

    async def override_get_db():
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_mailer] = resend.mailer

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


def auth_headers(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


async def sign_up(client: AsyncClient, email: str, first_name: str = "Ayu", last_name: str = "Lestari") -> dict:
    """Register an account and return its session payload."""
    response = await client.post(
        "/auth/signup",
        json={
            "email": email,
            "password": DEFAULT_PASSWORD,
            "first_name": first_name,
            "last_name": last_name,
        },
    )
    assert response.status_code == 201, response.text
    return response.json()


async def create_trip(client: AsyncClient, token: str, budget: float = 1000, title: str = "Bali Getaway") -> dict:
    response = await client.post(
        "/trips",
        json={"title": title, "budget": budget, "start_date": "2026-07-01", "end_date": "2026-07-10"},
        headers=auth_headers(token),
    )
    assert response.status_code == 201, response.text
    return response.json()
