"""Pytest configuration and fixtures for mailrelay.

Uses mailrelay.main:app for HTTP tests. Every test that asks for `db` (and
therefore `client`) gets a fresh SQLite file; SMTP is replaced by a
recording fake so nothing leaves the process. All imports use mailrelay.*.
"""

import os
import re
import tempfile
from dataclasses import dataclass

# Settings are validated when mailrelay.main is imported; give it a valid env.
os.environ.setdefault("SECRET_KEY", "test-secret-key-0123456789abcdef0123456789abcdef")
os.environ.setdefault("ENCRYPTION_SALT", "test-encryption-salt")
os.environ.setdefault(
    "DATABASE_URL",
    f"sqlite+aiosqlite:///{os.path.join(tempfile.gettempdir(), 'mailrelay-import.db')}",
)
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ.pop("TURNSTILE_SECRET", None)
os.environ.pop("BOOTSTRAP_ADMIN_EMAIL", None)
os.environ.pop("BOOTSTRAP_ADMIN_PASSWORD", None)

import pytest  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402

from mailrelay.api.v1.dependencies import get_mail_transport  # noqa: E402
from mailrelay.application.dtos.mail import OutgoingMail  # noqa: E402
from mailrelay.core.config import get_settings  # noqa: E402
from mailrelay.domain.enums import UserRole  # noqa: E402
from mailrelay.infrastructure.persistence import database  # noqa: E402
from mailrelay.infrastructure.persistence import models  # noqa: E402, F401
from mailrelay.infrastructure.persistence.bootstrap import create_user_with_role  # noqa: E402
from mailrelay.main import app  # noqa: E402

DEFAULT_PASSWORD = "Password123!"
_TOKEN_IN_LINK = re.compile(r"token=([A-Za-z0-9_\-]+)")


class FakeTransport:
    """Records OutgoingMail instead of talking SMTP. Set `error` to make sends fail."""

    def __init__(self) -> None:
        self.sent: list[OutgoingMail] = []
        self.error: Exception | None = None

    async def send(self, mail: OutgoingMail) -> None:
        if self.error is not None:
            raise self.error
        self.sent.append(mail)

    def last_token(self) -> str:
        """Token embedded in the most recent system mail link."""
        assert self.sent, "no mail was sent"
        match = _TOKEN_IN_LINK.search(self.sent[-1].body)
        assert match, "no token link in mail body"
        return match.group(1)


@dataclass
class Actor:
    """A user created for a test plus its session headers."""

    id: str
    email: str
    password: str
    headers: dict[str, str]


@pytest.fixture
async def db(tmp_path, monkeypatch):
    """Fresh SQLite database with all tables for one test."""
    monkeypatch.setenv("DATABASE_URL", f"sqlite+aiosqlite:///{tmp_path / 'relay.db'}")
    get_settings.cache_clear()
    await database.dispose_engine()
    database.get_session_factory()
    async with database.engine.begin() as conn:
        await conn.run_sync(database.Base.metadata.create_all)
    yield
    await database.dispose_engine()
    get_settings.cache_clear()


@pytest.fixture
def mail_transport() -> FakeTransport:
    return FakeTransport()


@pytest.fixture
async def client(db, mail_transport: FakeTransport) -> AsyncClient:
    """Async HTTP client against the FastAPI app (ASGI) with the fake SMTP transport."""
    app.dependency_overrides[get_mail_transport] = lambda: mail_transport
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


async def login_headers(client: AsyncClient, email: str, password: str) -> dict[str, str]:
    response = await client.post("/api/auth/login", json={"email": email, "password": password})
    assert response.status_code == 200, response.text
    return {"Authorization": f"Bearer {response.json()['token']}"}


@pytest.fixture
def make_user(client: AsyncClient):
    """Factory: create a user directly in the DB and log it in."""

    async def _make(
        email: str,
        role: UserRole = UserRole.USER,
        password: str = DEFAULT_PASSWORD,
        must_change_password: bool = False,
    ) -> Actor:
        user = await create_user_with_role(email, password, role, must_change_password)
        assert user is not None
        headers = await login_headers(client, email, password)
        return Actor(id=user.id, email=user.email, password=password, headers=headers)

    return _make


@pytest.fixture
async def admin(make_user) -> Actor:
    return await make_user("admin@example.com", UserRole.ADMIN)


@pytest.fixture
async def dev(make_user) -> Actor:
    return await make_user("dev@example.com", UserRole.DEV)


@pytest.fixture
async def user(make_user) -> Actor:
    return await make_user("user@example.com", UserRole.USER)


async def _create_account(
    client: AsyncClient,
    headers: dict[str, str],
    email: str,
    *,
    password: str = "mailbox-secret",
    display_name: str = "Relay Mailbox",
    **fields,
) -> dict:
    response = await client.post(
        "/api/accounts",
        json={"email": email, "displayName": display_name, "password": password, **fields},
        headers=headers,
    )
    assert response.status_code == 201, response.text
    return response.json()


@pytest.fixture
def create_account(client: AsyncClient):
    """Factory: POST /api/accounts with the given headers and return the body."""

    async def _make(headers: dict[str, str], email: str, **kwargs) -> dict:
        return await _create_account(client, headers, email, **kwargs)

    return _make


@pytest.fixture
def login(client: AsyncClient):
    """Factory: log in and return Authorization headers."""

    async def _login(email: str, password: str = DEFAULT_PASSWORD) -> dict[str, str]:
        return await login_headers(client, email, password)

    return _login


@pytest.fixture
async def system_account(client: AsyncClient, admin: Actor) -> dict:
    """Active account configured as the default sender."""
    account = await _create_account(
        client, admin.headers, "noreply@example.com", display_name="Relay"
    )
    response = await client.put(
        "/api/settings/default-sender",
        json={"senderType": "account", "senderId": account["id"]},
        headers=admin.headers,
    )
    assert response.status_code == 200, response.text
    return account
