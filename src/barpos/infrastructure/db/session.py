from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager

from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import DBAPIError, IntegrityError
from sqlalchemy.orm import Session
from sqlalchemy.pool import StaticPool

from barpos.application.ports.repositories import StoreUnavailableError


def create_db_engine(database_url: str, timeout_seconds: float = 1.0) -> Engine:
    if database_url.startswith("sqlite"):
        options: dict[str, object] = {"connect_args": {"check_same_thread": False}}
        if ":memory:" in database_url or database_url in {"sqlite://", "sqlite+pysqlite://"}:
            # one shared connection, otherwise every checkout sees an empty database
            options["poolclass"] = StaticPool
        return create_engine(database_url, **options)

    return create_engine(
        database_url,
        pool_pre_ping=True,
        connect_args={"connect_timeout": max(1, int(timeout_seconds))},
    )


@contextmanager
def session_scope(engine: Engine) -> Iterator[Session]:
    """Session whose driver failures surface as ``StoreUnavailableError``.

    Integrity errors are re-raised untouched so repositories can translate
    them into their own conflicts.
    """
    session = Session(engine, expire_on_commit=False)
    try:
        yield session
    except IntegrityError:
        session.rollback()
        raise
    except DBAPIError as exc:
        session.rollback()
        raise StoreUnavailableError(f"store unavailable: {exc.orig}") from exc
    finally:
        session.close()


def ping_database(engine: Engine) -> bool:
    try:
        with engine.connect() as connection:
            connection.execute(text("SELECT 1"))
        return True
    except Exception:
        return False
