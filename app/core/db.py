from __future__ import annotations

from datetime import datetime, timezone
from typing import Generator, TypeVar

from sqlalchemy import create_engine
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker

from app.core.config import settings

engine = create_engine(settings.database_url, pool_pre_ping=True)

SessionLocal = sessionmaker(bind=engine, autocommit=False, autoflush=False, expire_on_commit=False)


class Base(DeclarativeBase):
    pass


class UniqueViolation(Exception):
    """Storage-level unique/check constraint hit. Services translate it."""


T = TypeVar("T")


def get_db() -> Generator[Session, None, None]:
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def insert_unique(db: Session, obj: T) -> T:
    """Insert a row and let the database arbitrate uniqueness.

    Two concurrent requests for the same key race here; exactly one commit
    succeeds and the other gets UniqueViolation instead of IntegrityError.
    """
    db.add(obj)
    try:
        db.commit()
    except IntegrityError as e:
        db.rollback()
        raise UniqueViolation(str(e.orig)) from e
    db.refresh(obj)
    return obj


def utcnow() -> datetime:
    return datetime.now(timezone.utc)
