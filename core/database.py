from __future__ import annotations
import functools
import logging
from contextlib import contextmanager
from typing import Iterator

from sqlalchemy import MetaData, create_engine
from sqlalchemy.exc import InterfaceError, OperationalError
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker

from .config import settings
from .errors import StoreUnavailableError

logger = logging.getLogger(__name__)

convention = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}
metadata = MetaData(naming_convention=convention)


class Base(DeclarativeBase):
    metadata = metadata


_connect_args = {"check_same_thread": False} if settings.DATABASE_URL.startswith("sqlite") else {}
engine = create_engine(settings.DATABASE_URL, future=True, pool_pre_ping=True, connect_args=_connect_args)

SessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False, future=True)


def get_db() -> Iterator[Session]:
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


@contextmanager
def store_errors(db: Session | None = None) -> Iterator[None]:
    """Translate connectivity failures of the backing store into StoreUnavailableError.

    No retry happens here; callers re-invoke (resolution is idempotent).
    """
    try:
        yield
    except (OperationalError, InterfaceError) as exc:
        logger.error("store unavailable: %s", exc.__class__.__name__)
        if db is not None:
            db.rollback()
        raise StoreUnavailableError("availability store is unreachable") from exc


def store_call(fn):
    """Decorator form of store_errors for service functions taking the session first."""

    @functools.wraps(fn)
    def wrapper(db: Session, *args, **kwargs):
        with store_errors(db):
            return fn(db, *args, **kwargs)

    return wrapper
