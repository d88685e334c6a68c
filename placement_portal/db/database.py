"""
Database - SQLAlchemy engine + unit-of-work sessions.

Every multi-step mutation runs inside `session()`:
- one writer at a time (a re-entrant lock held for the whole unit)
- commit on success, rollback on any exception
so apply / confirm-acceptance / withdrawal-approve either fully happen
or leave no trace. Nested `session()` calls join the outermost one.

Default URL is an in-memory SQLite database (one per Database instance).
"""

import logging
import threading
from contextlib import contextmanager
from typing import Iterator, Optional

from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from placement_portal.core.config import get_settings
from placement_portal.models import Base

logger = logging.getLogger(__name__)

IN_MEMORY_URLS = ("sqlite://", "sqlite:///:memory:")


def _engine_options(url: str) -> dict:
    if url.startswith("sqlite"):
        options = {"connect_args": {"check_same_thread": False}}
        if url in IN_MEMORY_URLS:
            # One shared connection, otherwise every checkout sees an empty database
            options["poolclass"] = StaticPool
        return options
    # pool_size=5: maintain 5 connections ready
    # max_overflow=10: allow 10 extra connections under load
    return {"pool_size": 5, "max_overflow": 10}


class Database:
    def __init__(self, url: Optional[str] = None, echo: bool = False):
        self.url = url or get_settings().database_url
        self.engine = create_engine(self.url, echo=echo, **_engine_options(self.url))
        self.SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=self.engine)
        Base.metadata.create_all(self.engine)

        self._lock = threading.RLock()
        self._current: Optional[Session] = None

    @contextmanager
    def session(self) -> Iterator[Session]:
        """
        Unit of work.
        Usage:
            with db.session() as session:
                internship.approve()
                internships.save(internship)
        """
        with self._lock:
            if self._current is not None:
                yield self._current
                return

            session = self.SessionLocal()
            self._current = session
            try:
                yield session
                session.commit()
            except Exception:
                session.rollback()
                logger.debug("Session rolled back")
                raise
            finally:
                self._current = None
                session.close()


# Global database (one per process)
_database: Optional[Database] = None


def get_database() -> Database:
    """Get or create the process-wide database (singleton pattern)"""
    global _database
    if _database is None:
        settings = get_settings()
        _database = Database(settings.database_url, echo=settings.debug)
    return _database


def reset_database() -> Database:
    """Drop the process-wide database and start over (tests)."""
    global _database
    settings = get_settings()
    _database = Database(settings.database_url, echo=settings.debug)
    return _database
