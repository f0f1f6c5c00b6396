"""
SQLAlchemy engine, session factory and the FastAPI session dependency.

URL precedence: ``EXPENSYNC_TEST_DB``, then ``TEST_DATABASE_URL`` (container
tests), then in-memory SQLite when running under pytest, then
``DATABASE_URL`` or the ``POSTGRES_*`` parts.
"""
import logging
import os
import sys

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

logger = logging.getLogger(__name__)

SQLITE_MEMORY_URL = "sqlite+pysqlite:///:memory:"
_POSTGRES_PARTS = ("POSTGRES_USER", "POSTGRES_PASSWORD", "POSTGRES_HOST", "POSTGRES_PORT", "POSTGRES_DB")


def running_under_pytest() -> bool:
    return os.getenv("PYTEST_RUNNING") == "1" or "PYTEST_CURRENT_TEST" in os.environ or "pytest" in sys.modules


def _url_from_environment() -> str:
    url = os.getenv("DATABASE_URL")
    if url:
        return url
    values = {name: os.getenv(name) for name in _POSTGRES_PARTS}
    missing = sorted(name for name, value in values.items() if not value)
    if missing:
        raise ValueError(f"Set DATABASE_URL or all of: {', '.join(missing)}")
    return "postgresql://{POSTGRES_USER}:{POSTGRES_PASSWORD}@{POSTGRES_HOST}:{POSTGRES_PORT}/{POSTGRES_DB}".format(**values)


def resolve_database_url() -> str:
    for override in ("EXPENSYNC_TEST_DB", "TEST_DATABASE_URL"):
        if os.getenv(override):
            return os.getenv(override)
    if running_under_pytest():
        return SQLITE_MEMORY_URL
    return _url_from_environment()


def _engine_options(url: str) -> dict:
    if not url.startswith("sqlite"):
        return {"pool_pre_ping": True}
    options = {"connect_args": {"check_same_thread": False}}
    if ":memory:" in url:
        # One shared connection, otherwise each session sees an empty database
        options["poolclass"] = StaticPool
    return options


DATABASE_URL = resolve_database_url()
engine = create_engine(DATABASE_URL, **_engine_options(DATABASE_URL))
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

_sqlite_schema_ready = False


def _ensure_sqlite_schema() -> None:
    # Postgres schema comes from Alembic; SQLite is created on first use
    global _sqlite_schema_ready
    if _sqlite_schema_ready:
        return
    if engine.url.get_backend_name() == "sqlite":
        from expensync.db import models

        models.Base.metadata.create_all(bind=engine)
        logger.debug("sqlite_schema_created: url=%s", engine.url)
    _sqlite_schema_ready = True


def get_db():
    _ensure_sqlite_schema()
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
