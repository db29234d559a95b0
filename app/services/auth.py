from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone
from typing import Optional
from uuid import UUID

from jose import JWTError, jwt
from passlib.context import CryptContext
from sqlalchemy import select
from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.db import UniqueViolation, insert_unique
from app.core.errors import AlreadyExists
from app.models.user import User
from app.schemas.auth import RegisterIn

logger = logging.getLogger(__name__)

# bcrypt only looks at the first 72 bytes; RegisterIn caps passwords at 128 chars.
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain_password: str, password_hash: str) -> bool:
    return pwd_context.verify(plain_password, password_hash)


def create_access_token(*, subject: str, expires_minutes: Optional[int] = None) -> str:
    now = datetime.now(timezone.utc)
    exp_minutes = expires_minutes or settings.access_token_expire_minutes
    expire = now + timedelta(minutes=exp_minutes)

    payload = {
        "sub": subject,  # account id as a UUID string
        "iat": int(now.timestamp()),
        "exp": int(expire.timestamp()),
    }
    return jwt.encode(payload, settings.jwt_secret_key, algorithm=settings.jwt_algorithm)


def decode_token(token: str) -> dict:
    return jwt.decode(token, settings.jwt_secret_key, algorithms=[settings.jwt_algorithm])


def user_id_from_token(token: str) -> UUID | None:
    """Return the account id carried by a token, or None if it is unusable."""
    try:
        sub = decode_token(token).get("sub")
        return UUID(sub) if sub else None
    except (JWTError, ValueError, TypeError):
        return None


def register_user(db: Session, payload: RegisterIn) -> User:
    email = payload.email.lower()
    if db.scalar(select(User).where(User.email == email)):
        raise AlreadyExists("Email already registered")

    user = User(
        email=email,
        password_hash=hash_password(payload.password),
        name=payload.name,
        role=payload.role,
        bio=payload.bio,
        avatar=payload.avatar,
        certification=payload.certification,
        is_active=True,
    )
    try:
        user = insert_unique(db, user)
    except UniqueViolation:
        raise AlreadyExists("Email already registered")

    logger.info("Registered %s account %s", user.role.value, user.id)
    return user


def authenticate(db: Session, email: str, password: str) -> User | None:
    user = db.scalar(select(User).where(User.email == email.lower()))
    if not user or not user.is_active or not verify_password(password, user.password_hash):
        return None
    return user
