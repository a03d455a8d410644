"""
Database configuration and session management for SQLAlchemy.
"""

from pathlib import Path

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.orm import sessionmaker, declarative_base
from growth_diary.core.config import DATABASE_URL


def _engine_kwargs(url: str) -> dict:
    if make_url(url).get_backend_name() == "sqlite":
        # Shared between request threads and the notification scheduler
        return {"connect_args": {"check_same_thread": False}}
    return {}


# Engine & Session
engine = create_engine(DATABASE_URL, **_engine_kwargs(DATABASE_URL))
SessionLocal = sessionmaker(
    autocommit=False, autoflush=False, expire_on_commit=False, bind=engine
)

# Declarative Base
Base = declarative_base()


@event.listens_for(Engine, "connect")
def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    """SQLite ignores ON DELETE CASCADE unless foreign keys are switched on per connection."""
    module = type(dbapi_connection).__module__
    if module.startswith("sqlite3") or module.startswith("pysqlite"):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


def import_models():
    """Import all models to register them with the Base metadata."""
    import growth_diary.auth.models  # noqa: F401
    import growth_diary.activity.models  # noqa: F401
    import growth_diary.journals.models  # noqa: F401
    import growth_diary.goals.models  # noqa: F401
    import growth_diary.todos.models  # noqa: F401
    import growth_diary.notifications.models  # noqa: F401


def init_database(bind=None):
    """
    Creates every table that does not exist yet. For file-backed SQLite the
    parent directory is created first.
    """
    bind = bind or engine
    url = bind.url
    if url.get_backend_name() == "sqlite" and url.database and url.database != ":memory:":
        Path(url.database).parent.mkdir(parents=True, exist_ok=True)

    import_models()
    Base.metadata.create_all(bind=bind)


def reset_database(bind=None):
    bind = bind or engine
    import_models()
    Base.metadata.drop_all(bind=bind)
    init_database(bind)


# Dependency for FastAPI Routes
def get_db():
    """
    Yields a database session for use in FastAPI dependency injection.
    Ensures the session is closed after the request lifecycle.
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
