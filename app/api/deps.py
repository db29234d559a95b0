from __future__ import annotations

from typing import Callable

from fastapi import Depends
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.orm import Session

from app.core.db import get_db
from app.core.errors import Forbidden, Unauthenticated
from app.models import Role, User
from app.services.auth import user_id_from_token

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/auth/login")
optional_oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/auth/login", auto_error=False)

__all__ = ["get_db", "get_current_user", "get_optional_user", "require_role", "require_trainer"]


def _resolve(db: Session, token: str | None) -> User | None:
    if not token:
        return None
    user_id = user_id_from_token(token)
    if user_id is None:
        return None
    user = db.get(User, user_id)
    if not user or not user.is_active:
        return None
    return user


def get_current_user(
    token: str = Depends(oauth2_scheme),
    db: Session = Depends(get_db),
) -> User:
    user = _resolve(db, token)
    if user is None:
        raise Unauthenticated("Invalid authentication credentials")
    return user


def get_optional_user(
    token: str | None = Depends(optional_oauth2_scheme),
    db: Session = Depends(get_db),
) -> User | None:
    """Viewer for public routes: a missing or bad token just means anonymous."""
    return _resolve(db, token)


def require_role(role: Role) -> Callable[..., User]:
    def _guard(user: User = Depends(get_current_user)) -> User:
        if user.role is not role:
            raise Forbidden(f"User role {user.role.value} is not authorized to access this route")
        return user

    return _guard


require_trainer = require_role(Role.TRAINER)
