"""
Database engine, session scopes and the declarative base.

The engine and its connection pool are owned by a ``Database`` instance
created at application startup and disposed at shutdown, rather than by
module-level globals.
"""

from contextlib import contextmanager
from typing import Any, Dict, Iterator, Optional
import math

from fastapi import Request
from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.exc import DBAPIError, IntegrityError
from sqlalchemy.orm import Session, declarative_base, sessionmaker

from app.config import Settings
from app.core.errors import (
    ConstraintViolation,
    TransientStorageError,
    is_connectivity_code,
    storage_error_code,
)

Base = declarative_base()


class _SampleStdDev:
    """stddev_samp aggregate for SQLite, which has no built-in equivalent."""

    def __init__(self):
        self.count = 0
        self.mean = 0.0
        self.m2 = 0.0

    def step(self, value):
        if value is None:
            return
        value = float(value)
        self.count += 1
        delta = value - self.mean
        self.mean += delta / self.count
        self.m2 += delta * (value - self.mean)

    def finalize(self):
        if self.count < 2:
            return None
        return math.sqrt(self.m2 / (self.count - 1))


def _configure_sqlite(dbapi_connection, connection_record):
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()
    dbapi_connection.create_aggregate("stddev_samp", 1, _SampleStdDev)


def translate_storage_error(exc: DBAPIError) -> Exception:
    """Map a SQLAlchemy DBAPI error onto the core exception taxonomy."""
    code = storage_error_code(exc)
    message = str(getattr(exc, "orig", exc))
    if isinstance(exc, IntegrityError):
        return ConstraintViolation(message, code=code)
    if exc.connection_invalidated or is_connectivity_code(code):
        return TransientStorageError(message, code=code)
    return exc


class Database:
    """Owns the engine (connection pool) and hands out scoped sessions."""

    def __init__(self, url: str, **engine_options: Any):
        self.url = url
        self.engine_options = engine_options
        self.engine: Optional[Engine] = None
        self._session_factory: Optional[sessionmaker] = None

    @classmethod
    def from_settings(cls, settings: Settings) -> "Database":
        options: Dict[str, Any] = {"echo": settings.db_echo, "pool_pre_ping": True}
        if settings.database_url.startswith("sqlite"):
            options["connect_args"] = {"check_same_thread": False}
        else:
            options.update(
                pool_size=settings.db_pool_size,
                max_overflow=settings.db_max_overflow,
                pool_timeout=settings.db_pool_timeout,
                pool_recycle=settings.db_pool_recycle,
            )
        return cls(settings.database_url, **options)

    def connect(self) -> Engine:
        """Create the engine. Safe to call more than once."""
        if self.engine is None:
            self.engine = create_engine(self.url, **self.engine_options)
            if self.engine.dialect.name == "sqlite":
                event.listen(self.engine, "connect", _configure_sqlite)
            self._session_factory = sessionmaker(
                bind=self.engine,
                autocommit=False,
                autoflush=False,
                expire_on_commit=False,
            )
        return self.engine

    def dispose(self) -> None:
        """Drain the pool and forget the engine."""
        if self.engine is not None:
            self.engine.dispose()
            self.engine = None
            self._session_factory = None

    def create_all(self) -> None:
        """Create all tables (development and tests; production uses Alembic)."""
        Base.metadata.create_all(bind=self.connect())

    def _new_session(self) -> Session:
        self.connect()
        return self._session_factory()

    @contextmanager
    def session(self) -> Iterator[Session]:
        """Read scope: a pooled connection released as soon as the block exits."""
        session = self._new_session()
        try:
            yield session
        except DBAPIError as exc:
            session.rollback()
            translated = translate_storage_error(exc)
            if translated is exc:
                raise
            raise translated from exc
        finally:
            session.close()

    @contextmanager
    def transaction(self) -> Iterator[Session]:
        """
        Write scope: commits when the block succeeds.

        Any exception rolls the whole transaction back before it propagates,
        so partial inserts are never visible. Storage errors are re-raised as
        ``ConstraintViolation`` or ``TransientStorageError``. The session is
        closed on every exit path.
        """
        session = self._new_session()
        try:
            yield session
            session.commit()
        except DBAPIError as exc:
            session.rollback()
            translated = translate_storage_error(exc)
            if translated is exc:
                raise
            raise translated from exc
        except BaseException:
            session.rollback()
            raise
        finally:
            session.close()


def get_database(request: Request) -> Database:
    """FastAPI dependency returning the Database created at startup."""
    return request.app.state.database
