"""Pytest configuration and fixtures for Chirpy tests.

Every test gets its own record store file under pytest's tmp_path; the app's
``get_db`` dependency is overridden to point at it.
"""

import os
import tempfile
from collections.abc import AsyncGenerator
from pathlib import Path

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

# Set test environment variables before importing chirpy modules
_test_root = Path(tempfile.mkdtemp(prefix="chirpy-tests-"))
_static_dir = _test_root / "static"
_static_dir.mkdir()
(_static_dir / "index.html").write_text("<html><body>Welcome to Chirpy</body></html>")

os.environ["JWT_SECRET"] = "test-secret-" + "0" * 32
os.environ["DATABASE_PATH"] = str(_test_root / "database.json")
os.environ["STATIC_DIR"] = str(_static_dir)
os.environ.pop("POLKA_API_KEY", None)
# Cheap Argon2 parameters so hashing does not dominate test time
os.environ["ARGON2_TIME_COST"] = "1"
os.environ["ARGON2_MEMORY_COST"] = "1024"
os.environ["ARGON2_PARALLELISM"] = "1"

from chirpy.core.database import Database  # noqa: E402
from chirpy.services.auth import TokenKind, TokenService  # noqa: E402
from chirpy.services.revocation import RevocationLedger  # noqa: E402
from chirpy.services.user import UserService  # noqa: E402

# Test user credentials
TEST_EMAIL = "alice@example.com"
TEST_PASSWORD = "secret1"


def _reset_login_rate_limiter() -> None:
    """Clear failed login attempts tracked per IP by the auth module."""
    from chirpy.api.auth import _login_attempts

    _login_attempts.clear()


@pytest.fixture(autouse=True)
def reset_login_rate_limiter():
    """Reset the login rate limiter before and after each test."""
    _reset_login_rate_limiter()
    yield
    _reset_login_rate_limiter()


# --- Record Store Fixtures ---


@pytest.fixture
def db(tmp_path: Path) -> Database:
    """A fresh record store in the test's temporary directory."""
    return Database(tmp_path / "database.json")


@pytest.fixture
def user_service(db: Database) -> UserService:
    return UserService(db)


@pytest.fixture
def ledger(db: Database) -> RevocationLedger:
    return RevocationLedger(db)


@pytest.fixture
def token_service(ledger: RevocationLedger) -> TokenService:
    return TokenService(ledger)


@pytest.fixture
def test_user(user_service: UserService):
    """A registered user with TEST_EMAIL / TEST_PASSWORD."""
    return user_service.create(TEST_EMAIL, TEST_PASSWORD)


@pytest.fixture
def auth_headers(test_user, token_service: TokenService) -> dict[str, str]:
    """Authorization headers carrying an access token for test_user."""
    token = token_service.issue(TokenKind.ACCESS, test_user.id)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def refresh_headers(test_user, token_service: TokenService) -> dict[str, str]:
    """Authorization headers carrying a refresh token for test_user."""
    token = token_service.issue(TokenKind.REFRESH, test_user.id)
    return {"Authorization": f"Bearer {token}"}


# --- HTTP Client ---


@pytest_asyncio.fixture
async def async_client(db: Database) -> AsyncGenerator[AsyncClient, None]:
    """Create an async test client with record store override."""
    from chirpy.core.database import get_db
    from chirpy.main import app

    def override_get_db():
        yield db

    app.dependency_overrides[get_db] = override_get_db
    app.state.hit_counter.reset()

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client

    # Clean up
    app.dependency_overrides.clear()
    app.state.hit_counter.reset()
