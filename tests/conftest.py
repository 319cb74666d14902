import inspect
import os

# Settings are read at import time by enrollhub.db.engine.
os.environ.setdefault("ENV_NAME", "test")
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("SESSION_SECRET_KEY", "test-session-secret")
os.environ.setdefault("ADMIN_USERNAME", "admin")
os.environ.setdefault("ADMIN_PASSWORD", "admin-password")
os.environ.setdefault("ACTIVATION_SECRET", "test-activation-secret-0123456789abcdef")
os.environ.setdefault("JWT_SECRET_KEY", "test-jwt-secret-0123456789abcdef0123")
os.environ.setdefault("LOG_REQUESTS", "false")

from collections.abc import Callable  # noqa: E402

import anyio  # noqa: E402
import pytest  # noqa: E402
from fastapi import UploadFile  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlmodel import Session, SQLModel, create_engine  # noqa: E402
from sqlmodel.pool import StaticPool  # noqa: E402

from enrollhub.auth.passwords import hash_password  # noqa: E402
from enrollhub.auth.tokens import TokenIssuer  # noqa: E402
from enrollhub.core.email import MailMessage, get_mailer  # noqa: E402
from enrollhub.core.exceptions import ImageUploadError, MailDeliveryError  # noqa: E402
from enrollhub.core.images import UploadedImage, get_image_store  # noqa: E402
from enrollhub.core.settings import Settings, get_settings  # noqa: E402
from enrollhub.course.models import Course  # noqa: E402
from enrollhub.db.engine import get_session  # noqa: E402
from enrollhub.main import app  # noqa: E402
from enrollhub.user.models import ADMIN_ROLE, User  # noqa: E402

TEST_PASSWORD = "Abcdefg1"


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


class FakeMailer:
    """Records outgoing mail; raises MailDeliveryError when ``fail`` is set."""

    def __init__(self) -> None:
        self.sent: list[MailMessage] = []
        self.fail = False

    def send(self, mail: MailMessage) -> None:
        if self.fail:
            raise MailDeliveryError("mail provider down")
        self.sent.append(mail)

    @property
    def last(self) -> MailMessage:
        return self.sent[-1]


class FakeImageStore:
    """Pretends to store uploads and returns a predictable URL."""

    def __init__(self) -> None:
        self.uploads: list[tuple[str | None, str]] = []
        self.fail = False

    async def upload(self, file: UploadFile, folder: str) -> UploadedImage:
        if self.fail:
            raise ImageUploadError("image store down")
        self.uploads.append((file.filename, folder))
        return UploadedImage(
            secure_url=f"https://images.test/{folder}/{file.filename}",
            public_id=f"{folder}/{file.filename}",
        )


@pytest.fixture(name="session")
def session_fixture():
    """Create an in-memory SQLite database for testing."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    SQLModel.metadata.create_all(engine)
    with Session(engine) as session:
        yield session


@pytest.fixture(name="settings")
def settings_fixture() -> Settings:
    """Explicit settings so tests never depend on a local .env file."""
    return Settings(
        env_name="test",
        database_url="sqlite://",
        session_secret_key="test-session-secret",
        admin_username="admin",
        admin_password="admin-password",
        client_url="http://client.test",
        server_url="http://api.test",
        activation_secret="test-activation-secret-0123456789abcdef",
        jwt_secret_key="test-jwt-secret-0123456789abcdef0123",
        password_hash_rounds=4,
    )


@pytest.fixture(name="tokens")
def tokens_fixture(settings: Settings) -> TokenIssuer:
    return TokenIssuer(settings.token_config)


@pytest.fixture(name="mailer")
def mailer_fixture() -> FakeMailer:
    return FakeMailer()


@pytest.fixture(name="image_store")
def image_store_fixture() -> FakeImageStore:
    return FakeImageStore()


@pytest.fixture(name="make_user")
def make_user_fixture(session: Session) -> Callable[..., User]:
    """Factory for persisted users whose password is TEST_PASSWORD."""

    def _make_user(
        email: str = "test@example.com",
        first_name: str = "Test",
        role: str = "user",
        **fields: object,
    ) -> User:
        user = User(
            email=email,
            first_name=first_name,
            last_name=str(fields.pop("last_name", "User")),
            password=hash_password(TEST_PASSWORD, rounds=4),
            role=role,
            **fields,
        )
        session.add(user)
        session.commit()
        session.refresh(user)
        return user

    return _make_user


@pytest.fixture(name="test_user")
def test_user_fixture(make_user: Callable[..., User]) -> User:
    return make_user()


@pytest.fixture(name="admin_user")
def admin_user_fixture(make_user: Callable[..., User]) -> User:
    return make_user(email="admin@example.com", first_name="Admin", role=ADMIN_ROLE)


@pytest.fixture(name="course")
def course_fixture(session: Session) -> Course:
    course = Course(
        title="Introduction to Web Development",
        description="HTML, CSS and JavaScript basics.",
        category="Web Development",
        level="Beginner",
        instructor="John Doe",
        price=49.99,
        duration=30,
        status="Active",
        popularity=500,
    )
    session.add(course)
    session.commit()
    session.refresh(course)
    return course


@pytest.fixture(name="auth_headers")
def auth_headers_fixture(tokens: TokenIssuer) -> Callable[[User], dict[str, str]]:
    """Bearer header carrying a session token for ``user``."""

    def _auth_headers(user: User) -> dict[str, str]:
        return {"Authorization": f"Bearer {tokens.issue_session(user.id)}"}

    return _auth_headers


@pytest.fixture(name="client")
def client_fixture(
    session: Session,
    settings: Settings,
    mailer: FakeMailer,
    image_store: FakeImageStore,
):
    """Create a test client with overridden dependencies."""
    app.dependency_overrides[get_session] = lambda: session
    app.dependency_overrides[get_settings] = lambda: settings
    app.dependency_overrides[get_mailer] = lambda: mailer
    app.dependency_overrides[get_image_store] = lambda: image_store

    client = TestClient(app)
    yield client

    app.dependency_overrides.clear()
