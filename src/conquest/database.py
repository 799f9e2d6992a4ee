"""Engine and session helpers for the SQL game repository."""

import logging
from typing import Any

from sqlalchemy import create_engine, event, text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from conquest.config import get_settings
from conquest.models import Base

logger = logging.getLogger(__name__)


def _configure_sqlite_wal(
    dbapi_connection: Any, connection_record: Any  # noqa: ARG001
) -> None:
    """Switch each new SQLite connection to WAL journaling.

    Args:
        dbapi_connection: The DBAPI connection
        connection_record: Connection record (required by SQLAlchemy event API)
    """
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA journal_mode=WAL")
    cursor.execute("PRAGMA synchronous=NORMAL")
    cursor.close()


def create_db_engine(url: str | None = None, *, echo: bool | None = None) -> Engine:
    """Create an engine for ``url``.

    Args:
        url: SQLAlchemy URL; defaults to ``Settings.database_url``
        echo: Echo SQL; defaults to ``Settings.database_echo``

    Returns:
        Engine: Configured SQLAlchemy engine
    """
    if url is None or echo is None:
        settings = get_settings()
        url = url if url is not None else settings.database_url
        echo = echo if echo is not None else settings.database_echo

    if not url.startswith("sqlite"):
        return create_engine(url, echo=echo, pool_pre_ping=True)

    # Connections are shared with worker threads running CPU turns
    engine = create_engine(
        url,
        echo=echo,
        pool_pre_ping=True,
        connect_args={"check_same_thread": False},
    )
    event.listen(engine, "connect", _configure_sqlite_wal)
    return engine


def create_session_factory(engine: Engine) -> sessionmaker[Session]:
    """Build a session factory bound to ``engine``.

    Objects stay readable after commit since snapshots are decoded once the
    session has closed.
    """
    return sessionmaker(autocommit=False, autoflush=False, bind=engine, expire_on_commit=False)


def init_db(engine: Engine) -> None:
    """Create the ``games`` table if it does not exist yet."""
    Base.metadata.create_all(bind=engine)


def check_database_health(engine: Engine) -> bool:
    """Return True if a trivial query succeeds on ``engine``."""
    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
    except SQLAlchemyError as exc:
        logger.warning("database %s is not reachable: %s", engine.url, exc)
        return False
    return True

