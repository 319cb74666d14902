from collections.abc import Generator

from sqlmodel import Session, create_engine

from enrollhub.core.settings import get_settings

_settings = get_settings()

connect_args: dict[str, object] = {}
if _settings.database_url.startswith("sqlite"):
    # Required for SQLite when used with FastAPI across threads.
    connect_args = {"check_same_thread": False}

engine = create_engine(
    _settings.database_url,
    echo=False,
    connect_args=connect_args,
    pool_pre_ping=not _settings.database_url.startswith("sqlite"),
)


def get_session() -> Generator[Session, None, None]:
    """One session per request; every commit is its own transaction."""
    with Session(engine) as session:
        yield session
