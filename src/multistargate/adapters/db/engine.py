"""Engine factory for the chain's key-value store.

Every `SqlAlchemyUnitOfWork` opens its own connection, so the engine has to
make all of those connections see the same database:

- **In-memory SQLite** (``sqlite://`` or ``:memory:``): one connection shared
  through a `StaticPool`, otherwise each connection would get a private,
  empty database.
- **File SQLite**: WAL journal, ``synchronous=NORMAL`` and a busy timeout so
  that a second engine on the same file waits instead of failing.
- **Other backends**: used as given.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from sqlalchemy import create_engine, event
from sqlalchemy.engine import URL, make_url
from sqlalchemy.pool import StaticPool

from .schema import kv_store

if TYPE_CHECKING:
    from sqlite3 import Connection as SQLiteConnection

    from sqlalchemy.engine import Engine

logger = logging.getLogger(__name__)

SQLITE_NAMES = {"sqlite", "sqlite+pysqlite"}
SQLITE_BUSY_TIMEOUT_MS = 5_000


def is_sqlite(url: str | URL) -> bool:
    """Return True if the given SQLAlchemy URL or string corresponds to SQLite.

    Args:
        url: A database URL string or SQLAlchemy :class:`URL`.

    Returns:
        bool: True if the backend is SQLite, otherwise False.
    """
    u = make_url(str(url))
    return u.get_backend_name() in SQLITE_NAMES


def is_memory_sqlite(url: str | URL) -> bool:
    """Return True for SQLite URLs that name no file."""
    u = make_url(str(url))
    return is_sqlite(u) and u.database in (None, "", ":memory:")


def make_engine(url: str | URL, *, echo: bool = False) -> Engine:
    """Create the engine backing a chain store.

    Args:
        url: Database connection URL (str or :class:`URL`).
        echo: If True, log SQL statements.

    Returns:
        Engine: Configured SQLAlchemy Engine.
    """
    kwargs: dict[str, Any] = {"echo": echo}
    if is_memory_sqlite(url):
        kwargs["poolclass"] = StaticPool
        kwargs["connect_args"] = {"check_same_thread": False}

    engine = create_engine(url, **kwargs)

    if is_sqlite(url):
        in_memory = is_memory_sqlite(url)

        @event.listens_for(engine, "connect")
        def _sqlite_pragmas(dbapi_conn: SQLiteConnection, conn_record):  # type: ignore #pylint: disable=W0613
            cur = dbapi_conn.cursor()
            cur.execute(f"PRAGMA busy_timeout={SQLITE_BUSY_TIMEOUT_MS};")
            if not in_memory:
                cur.execute("PRAGMA journal_mode=WAL;")
                cur.execute("PRAGMA synchronous=NORMAL;")
            cur.close()

    logger.debug("Created engine for %s", engine.url.render_as_string(hide_password=True))
    return engine


def create_schema(engine: Engine) -> None:
    """Create the ``kv_store`` table if it does not exist yet."""
    kv_store.metadata.create_all(engine)
