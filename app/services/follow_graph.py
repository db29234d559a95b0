"""Follower -> trainer edges. Only the follower creates or removes an edge."""
from __future__ import annotations

import logging
import uuid

from sqlalchemy import select
from sqlalchemy.orm import Session

from app.core.db import UniqueViolation, insert_unique
from app.core.errors import AlreadyExists, InvalidTarget, NotFound, SelfFollowRejected
from app.models import Follow, Role, User

logger = logging.getLogger(__name__)


def _ensure_trainer(account: User) -> None:
    if account.role is Role.TRAINER:
        return
    if account.role is Role.USER:
        raise InvalidTarget()
    raise ValueError(f"Unhandled role: {account.role!r}")


def follow(db: Session, follower_id: uuid.UUID, trainer_id: uuid.UUID) -> Follow:
    # checked before the lookup so self-follow is rejected the same way for any role
    if follower_id == trainer_id:
        raise SelfFollowRejected()

    trainer = db.get(User, trainer_id)
    if not trainer:
        raise NotFound("Trainer not found")
    _ensure_trainer(trainer)

    if is_following(db, follower_id, trainer_id):
        raise AlreadyExists("You are already following this trainer")

    try:
        edge = insert_unique(db, Follow(follower_id=follower_id, following_id=trainer_id))
    except UniqueViolation:
        # lost the race against a concurrent follow of the same pair
        raise AlreadyExists("You are already following this trainer")

    logger.info("Account %s followed trainer %s", follower_id, trainer_id)
    return edge


def unfollow(db: Session, follower_id: uuid.UUID, trainer_id: uuid.UUID) -> None:
    edge = db.scalar(
        select(Follow)
        .where(Follow.follower_id == follower_id)
        .where(Follow.following_id == trainer_id)
    )
    if not edge:
        raise NotFound("You are not following this trainer")

    db.delete(edge)
    db.commit()
    logger.info("Account %s unfollowed trainer %s", follower_id, trainer_id)


def is_following(db: Session, follower_id: uuid.UUID, trainer_id: uuid.UUID) -> bool:
    edge_id = db.scalar(
        select(Follow.id)
        .where(Follow.follower_id == follower_id)
        .where(Follow.following_id == trainer_id)
    )
    return edge_id is not None


def following_ids(db: Session, follower_id: uuid.UUID) -> list[uuid.UUID]:
    return list(db.scalars(select(Follow.following_id).where(Follow.follower_id == follower_id)))


def list_following(db: Session, follower_id: uuid.UUID) -> list[User]:
    """Trainers the account follows, most recently followed first."""
    return list(
        db.scalars(
            select(User)
            .join(Follow, Follow.following_id == User.id)
            .where(Follow.follower_id == follower_id)
            .order_by(Follow.created_at.desc())
        )
    )


def list_followers(db: Session, trainer_id: uuid.UUID) -> list[User]:
    """Accounts following a trainer, newest follower first."""
    trainer = db.get(User, trainer_id)
    if not trainer or trainer.role is not Role.TRAINER:
        raise NotFound("Trainer not found")

    return list(
        db.scalars(
            select(User)
            .join(Follow, Follow.follower_id == User.id)
            .where(Follow.following_id == trainer_id)
            .order_by(Follow.created_at.desc())
        )
    )
