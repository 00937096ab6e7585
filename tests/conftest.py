import inspect
import os
from unittest.mock import MagicMock

# Settings are read at import time by the engine module.
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("SESSION_SECRET_KEY", "test-secret-key")
os.environ.setdefault("ADMIN_USERNAME", "admin")
os.environ.setdefault("ADMIN_PASSWORD", "admin-password")
os.environ.setdefault("LOG_REQUESTS", "false")

import anyio  # noqa: E402
import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlmodel import Session, SQLModel, create_engine  # noqa: E402
from sqlmodel.pool import StaticPool  # noqa: E402

import wikiadmin.models  # noqa: E402, F401
from wikiadmin.auth.dependencies import get_current_user  # noqa: E402
from wikiadmin.auth.service import (  # noqa: E402
    FirebaseAuthService,
    FirebaseUser,
    TokenClaims,
    get_firebase_auth_service,
)
from wikiadmin.core.settings import Settings, get_settings  # noqa: E402
from wikiadmin.db.engine import enable_sqlite_foreign_keys, get_session  # noqa: E402
from wikiadmin.main import app  # noqa: E402
from wikiadmin.user.models import User, UserStatus  # noqa: E402


def pytest_configure(config: pytest.Config) -> None:
    # Tests use @pytest.mark.asyncio, but we intentionally rely on anyio.
    config.addinivalue_line(
        "markers",
        "asyncio: run async tests using anyio (project-local hook)",
    )


@pytest.hookimpl(tryfirst=True)
def pytest_pyfunc_call(pyfuncitem: pytest.Function) -> bool | None:
    """Run @pytest.mark.asyncio tests with anyio.

    This avoids adding an external pytest-asyncio dependency.
    """
    if pyfuncitem.get_closest_marker("asyncio") is None:
        return None

    test_func = pyfuncitem.obj
    if not inspect.iscoroutinefunction(test_func):
        return None

    funcargs = {
        name: pyfuncitem.funcargs[name] for name in pyfuncitem._fixtureinfo.argnames
    }

    async def _run_async_test() -> None:
        await test_func(**funcargs)

    anyio.run(_run_async_test)
    return True


@pytest.fixture(name="session")
def session_fixture():
    """Create an in-memory SQLite database for testing."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    enable_sqlite_foreign_keys(engine)
    SQLModel.metadata.create_all(engine)
    with Session(engine) as session:
        yield session


def make_user(session: Session, **fields) -> User:
    user = User(**fields)
    session.add(user)
    session.commit()
    session.refresh(user)
    return user


@pytest.fixture(name="user_factory")
def user_factory_fixture(session: Session):
    """Create users with a unique email by default."""
    counter = 0

    def factory(**fields) -> User:
        nonlocal counter
        counter += 1
        fields.setdefault("email", f"user{counter}@example.com")
        return make_user(session, **fields)

    return factory


@pytest.fixture(name="test_user")
def test_user_fixture(session: Session):
    """An active, non-admin user."""
    return make_user(
        session,
        external_id="test-firebase-uid-123",
        email="test@example.com",
        name="Test User",
        username="testuser",
        status=UserStatus.ACTIVE,
    )


@pytest.fixture(name="admin_user")
def admin_user_fixture(session: Session):
    return make_user(
        session,
        external_id="admin-firebase-uid",
        email="admin@example.com",
        name="Admin",
        username="admin",
        status=UserStatus.ACTIVE,
        is_admin=True,
    )


@pytest.fixture(name="inactive_user")
def inactive_user_fixture(session: Session):
    """A suspended user."""
    return make_user(
        session,
        external_id="inactive-uid-456",
        email="inactive@example.com",
        name="Inactive User",
        username="inactive",
        status=UserStatus.SUSPENDED,
    )


@pytest.fixture(name="mock_firebase_auth")
def mock_firebase_auth_fixture():
    """Create a mock FirebaseAuthService."""
    mock_service = MagicMock(spec=FirebaseAuthService)
    mock_service.verify_session_cookie.return_value = TokenClaims(uid="test-uid")
    mock_service.verify_id_token.return_value = TokenClaims(uid="test-uid")
    mock_service.create_user.side_effect = lambda email, _password: FirebaseUser(
        uid=f"uid-{email}", email=email
    )
    return mock_service


@pytest.fixture(name="mock_settings")
def mock_settings_fixture():
    """Create mock settings."""
    return Settings(
        env_name="test",
        database_url="sqlite://",
        session_secret_key="test-secret-key",
        admin_username="admin",
        admin_password="admin-password",
        app_site_url="https://env.example.com",
    )


def _override_dependencies(session, mock_firebase_auth, mock_settings, user=None):
    app.dependency_overrides[get_session] = lambda: session
    app.dependency_overrides[get_firebase_auth_service] = lambda: mock_firebase_auth
    app.dependency_overrides[get_settings] = lambda: mock_settings
    if user is not None:
        app.dependency_overrides[get_current_user] = lambda: user


@pytest.fixture(name="client")
def client_fixture(
    session: Session,
    test_user: User,
    mock_firebase_auth: MagicMock,
    mock_settings: Settings,
):
    """Client logged in as a regular active user."""
    _override_dependencies(session, mock_firebase_auth, mock_settings, test_user)
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture(name="admin_client")
def admin_client_fixture(
    session: Session,
    admin_user: User,
    mock_firebase_auth: MagicMock,
    mock_settings: Settings,
):
    """Client logged in as a wiki admin."""
    _override_dependencies(session, mock_firebase_auth, mock_settings, admin_user)
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture(name="unauthenticated_client")
def unauthenticated_client_fixture(
    session: Session,
    mock_firebase_auth: MagicMock,
    mock_settings: Settings,
):
    """Create a test client without auth override (for testing auth failures)."""
    _override_dependencies(session, mock_firebase_auth, mock_settings)
    yield TestClient(app)
    app.dependency_overrides.clear()
