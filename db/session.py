from typing import Any, Optional

from sqlalchemy import create_engine, event
from sqlalchemy import exc as sa_exc
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker, Session
from collections.abc import Generator
from contextlib import contextmanager

from core.exceptions import DuplicateKeyError, IntegrityError, StorageError
from core.settings import settings


def build_engine(url: str, **kwargs) -> Engine:
    if url.startswith("sqlite"):
        kwargs.setdefault("connect_args", {"check_same_thread": False})
    else:
        kwargs.setdefault("pool_pre_ping", True)
    new_engine = create_engine(url, echo=settings.DATABASE_ECHO, **kwargs)
    if new_engine.dialect.name == "sqlite":
        event.listen(new_engine, "connect", enable_sqlite_foreign_keys)
    return new_engine


def enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    # SQLite ignores ON DELETE CASCADE unless foreign keys are switched on per connection
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


engine = build_engine(settings.DATABASE_URL)

SessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False)


def get_db() -> Generator[Session, None, None]:
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


@contextmanager
def db_context() -> Generator[Session, None, None]:
    db = SessionLocal()
    try:
        yield db
        db.commit()
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()


def commit_or_raise(session: Session, duplicate: Optional[tuple[str, Any]] = None) -> None:
    """
    Commit the session, translating database errors into domain errors.

    ``duplicate`` names the (field, value) that a unique violation refers to,
    for writes that passed an application-level uniqueness check but lost a race.
    """
    try:
        session.commit()
    except sa_exc.IntegrityError as e:
        session.rollback()
        if duplicate is not None:
            raise DuplicateKeyError(*duplicate) from e
        raise IntegrityError(f"Write rejected by the database: {e.orig}") from e
    except SQLAlchemyError as e:
        session.rollback()
        raise StorageError(f"Storage failure: {e}") from e
