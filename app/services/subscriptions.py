"""
Subscription lifecycle.

A (user, plan) pair owns at most one subscription row for good: cancelled or
expired rows still block a new purchase of the same plan. Status moves only
along ALLOWED_TRANSITIONS.

`has_active` trusts the stored status. `expires_at` is not compared against the
clock there; that happens only in `expire_overdue`, which the worker runs.
"""
from __future__ import annotations

import logging
import uuid
from datetime import datetime, timedelta

from sqlalchemy import func, select, update
from sqlalchemy.orm import Session, joinedload

from app.core.db import UniqueViolation, insert_unique, utcnow
from app.core.errors import DuplicateSubscription, Forbidden, InvalidTransition, NotFound
from app.models import Plan, Subscription, SubscriptionStatus

logger = logging.getLogger(__name__)

ALLOWED_TRANSITIONS: dict[SubscriptionStatus, frozenset[SubscriptionStatus]] = {
    SubscriptionStatus.ACTIVE: frozenset({SubscriptionStatus.EXPIRED, SubscriptionStatus.CANCELLED}),
    SubscriptionStatus.EXPIRED: frozenset(),
    SubscriptionStatus.CANCELLED: frozenset(),
}


def _joined():
    return select(Subscription).options(
        joinedload(Subscription.plan).joinedload(Plan.trainer),
        joinedload(Subscription.user),
    )


def _load(db: Session, subscription_id: uuid.UUID) -> Subscription | None:
    return db.scalar(_joined().where(Subscription.id == subscription_id))


def _existing(db: Session, user_id: uuid.UUID, plan_id: uuid.UUID) -> Subscription | None:
    return db.scalar(
        select(Subscription)
        .where(Subscription.user_id == user_id)
        .where(Subscription.plan_id == plan_id)
    )


def compute_expiry(purchased_at: datetime, duration_days: int) -> datetime:
    return purchased_at + timedelta(days=duration_days)


def subscribe(
    db: Session,
    user_id: uuid.UUID,
    plan_id: uuid.UUID,
    now: datetime | None = None,
) -> Subscription:
    """Purchase a plan. Payment is simulated and always succeeds."""
    plan = db.get(Plan, plan_id)
    if not plan:
        raise NotFound("Plan not found")

    existing = _existing(db, user_id, plan_id)
    if existing:
        if existing.status is SubscriptionStatus.ACTIVE:
            raise DuplicateSubscription("You already have an active subscription to this plan")
        raise DuplicateSubscription()

    purchased_at = now or utcnow()
    sub = Subscription(
        user_id=user_id,
        plan_id=plan.id,
        status=SubscriptionStatus.ACTIVE,
        purchased_at=purchased_at,
        expires_at=compute_expiry(purchased_at, plan.duration_days),
    )
    try:
        sub = insert_unique(db, sub)
    except UniqueViolation:
        raise DuplicateSubscription()

    logger.info("Account %s subscribed to plan %s until %s", user_id, plan_id, sub.expires_at)
    return _load(db, sub.id)


def list_mine(db: Session, user_id: uuid.UUID) -> list[Subscription]:
    return list(
        db.scalars(
            _joined()
            .where(Subscription.user_id == user_id)
            .order_by(Subscription.purchased_at.desc())
        ).unique()
    )


def get_one(db: Session, subscription_id: uuid.UUID, requester_id: uuid.UUID) -> Subscription:
    sub = _load(db, subscription_id)
    if not sub:
        raise NotFound("Subscription not found")
    if sub.user_id != requester_id:
        raise Forbidden("Not authorized to view this subscription")
    return sub


def has_active(db: Session, user_id: uuid.UUID, plan_id: uuid.UUID) -> bool:
    sub_id = db.scalar(
        select(Subscription.id)
        .where(Subscription.user_id == user_id)
        .where(Subscription.plan_id == plan_id)
        .where(Subscription.status == SubscriptionStatus.ACTIVE)
    )
    return sub_id is not None


def active_plan_ids(db: Session, user_id: uuid.UUID | None) -> set[uuid.UUID]:
    """Plans the user currently holds an active subscription to. Anonymous -> empty."""
    if user_id is None:
        return set()
    return set(
        db.scalars(
            select(Subscription.plan_id)
            .where(Subscription.user_id == user_id)
            .where(Subscription.status == SubscriptionStatus.ACTIVE)
        )
    )


def active_counts(db: Session, plan_ids: list[uuid.UUID]) -> dict[uuid.UUID, int]:
    if not plan_ids:
        return {}
    rows = db.execute(
        select(Subscription.plan_id, func.count(Subscription.id))
        .where(Subscription.plan_id.in_(plan_ids))
        .where(Subscription.status == SubscriptionStatus.ACTIVE)
        .group_by(Subscription.plan_id)
    ).all()
    return {plan_id: int(count) for plan_id, count in rows}


def transition(sub: Subscription, target: SubscriptionStatus) -> None:
    if target not in ALLOWED_TRANSITIONS[sub.status]:
        raise InvalidTransition(f"Cannot move subscription from {sub.status.value} to {target.value}")
    sub.status = target


def cancel(
    db: Session,
    subscription_id: uuid.UUID,
    requester_id: uuid.UUID,
    now: datetime | None = None,
) -> Subscription:
    sub = get_one(db, subscription_id, requester_id)
    transition(sub, SubscriptionStatus.CANCELLED)
    sub.cancelled_at = now or utcnow()
    db.commit()

    logger.info("Subscription %s cancelled by %s", sub.id, requester_id)
    return _load(db, sub.id)


def expire_overdue(db: Session, now: datetime | None = None) -> int:
    """Flip every active subscription whose expires_at has passed to expired."""
    now = now or utcnow()
    result = db.execute(
        update(Subscription)
        .where(Subscription.status == SubscriptionStatus.ACTIVE)
        .where(Subscription.expires_at <= now)
        .values(status=SubscriptionStatus.EXPIRED)
        .execution_options(synchronize_session="fetch")
    )
    db.commit()

    flipped = result.rowcount or 0
    if flipped:
        logger.info("Expired %d overdue subscription(s)", flipped)
    return flipped
