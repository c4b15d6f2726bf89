"""Database engine and session factory."""

from __future__ import annotations

import threading
import weakref
from contextlib import AbstractContextManager, nullcontext

from sqlalchemy import Engine, create_engine
from sqlalchemy.orm import DeclarativeBase, sessionmaker
from sqlalchemy.pool import StaticPool

_connection_locks: weakref.WeakKeyDictionary[Engine, threading.RLock] = weakref.WeakKeyDictionary()
_registry_lock = threading.Lock()


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy models."""

    pass


def build_engine(url: str, echo: bool = False) -> Engine:
    """Create an engine for ``url``.

    SQLite connections may be used from any thread. An in-memory SQLite
    database is pinned to a single connection so every session sees the
    same data; use ``connection_guard`` to keep sessions on it from
    interleaving.
    """
    kwargs: dict = {"echo": echo, "pool_pre_ping": True}
    if url.startswith("sqlite"):
        kwargs["connect_args"] = {"check_same_thread": False}
        if ":memory:" in url or url in ("sqlite://", "sqlite+pysqlite://"):
            kwargs["poolclass"] = StaticPool
    return create_engine(url, **kwargs)


def connection_guard(engine: Engine) -> AbstractContextManager:
    """Return the lock that serializes work on ``engine``'s shared connection.

    Engines with a real pool hand each session its own connection, so they
    get a no-op context instead.
    """
    if not isinstance(engine.pool, StaticPool):
        return nullcontext()
    with _registry_lock:
        lock = _connection_locks.get(engine)
        if lock is None:
            lock = _connection_locks[engine] = threading.RLock()
        return lock


def build_session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(bind=engine, expire_on_commit=False)


def create_schema(engine: Engine) -> None:
    # Import models so Base.metadata knows them
    from sweetshop.infrastructure.persistence import orm  # noqa: F401

    Base.metadata.create_all(bind=engine)
