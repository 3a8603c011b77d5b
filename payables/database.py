"""
Database plumbing: declarative base, bounded connection pool, schema provisioning.
"""
from __future__ import annotations

import logging
import threading
from contextlib import contextmanager
from typing import Iterator, Optional

from fastapi import Request
from sqlalchemy import create_engine
from sqlalchemy.engine import Connection
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import declarative_base
from sqlalchemy.pool import QueuePool

from payables.exceptions import PersistenceFailed

logger = logging.getLogger(__name__)

Base = declarative_base()

DEFAULT_POOL_SIZE = 10


class ConnectionPool:
    """A fixed-capacity set of database connections shared by all requests.

    Connections are opened lazily and reused. When every connection is in
    use, ``acquire`` waits until one is released (``timeout=None`` means
    there is no limit on how long, or on how many callers, may queue).
    """

    def __init__(
        self,
        url: str,
        size: int = DEFAULT_POOL_SIZE,
        timeout: Optional[float] = None,
        echo: bool = False,
    ) -> None:
        if size < 1:
            raise ValueError("pool size must be at least 1")

        # SQLite connections move between worker threads
        connect_args = {}
        if url.startswith("sqlite"):
            connect_args = {"check_same_thread": False}

        self.engine = create_engine(
            url,
            connect_args=connect_args,
            echo=echo,
            poolclass=QueuePool,
            pool_size=size,
            max_overflow=0,
            pool_timeout=timeout,
        )
        self.capacity = size
        self._lock = threading.Lock()
        self._held: set[int] = set()
        self._peak = 0

    # ── bookkeeping ──────────────────────────────────────────────────────
    @property
    def held(self) -> int:
        """Connections currently handed out."""
        with self._lock:
            return len(self._held)

    @property
    def peak_held(self) -> int:
        with self._lock:
            return self._peak

    def status(self) -> str:
        return self.engine.pool.status()

    # ── acquire / release ────────────────────────────────────────────────
    def checkout(self) -> Connection:
        """Take a connection for exclusive use; pair every call with ``release``."""
        try:
            conn = self.engine.connect()
        except SQLAlchemyError as exc:
            raise PersistenceFailed(exc) from exc
        with self._lock:
            self._held.add(id(conn))
            self._peak = max(self._peak, len(self._held))
        return conn

    def release(self, conn: Connection) -> None:
        """Return ``conn`` to the free set. Releasing twice is a no-op."""
        with self._lock:
            if id(conn) not in self._held:
                return
            self._held.discard(id(conn))
        conn.close()

    @contextmanager
    def acquire(self) -> Iterator[Connection]:
        conn = self.checkout()
        try:
            yield conn
        finally:
            self.release(conn)

    def dispose(self) -> None:
        self.engine.dispose()


def provision_schema(pool: ConnectionPool) -> None:
    """Create the tables that do not exist yet; existing tables are left untouched."""
    # Import models so Base.metadata knows about them
    import payables.models  # noqa: F401

    with pool.acquire() as conn:
        try:
            Base.metadata.create_all(bind=conn, checkfirst=True)
            conn.commit()
        except SQLAlchemyError as exc:
            raise PersistenceFailed(exc) from exc
    logger.info("Schema ready: %s", ", ".join(sorted(Base.metadata.tables)))


def get_pool(request: Request) -> ConnectionPool:
    """Connection pool dependency, owned by the application instance."""
    return request.app.state.pool
