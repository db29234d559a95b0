from __future__ import annotations

import logging
import uuid

from sqlalchemy import select
from sqlalchemy.orm import Session, joinedload

from app.core.db import utcnow
from app.core.errors import Forbidden, NotFound
from app.models import Plan, Role, User
from app.schemas.plans import PlanIn, PlanOut, PlanUpdateIn, PlanView, TrainerPlanOut
from app.services import subscriptions
from app.services.visibility import reveal

logger = logging.getLogger(__name__)


def _with_trainer():
    return select(Plan).options(joinedload(Plan.trainer))


def _load(db: Session, plan_id: uuid.UUID) -> Plan | None:
    return db.scalar(_with_trainer().where(Plan.id == plan_id))


def _owned(db: Session, plan_id: uuid.UUID, trainer: User, action: str) -> Plan:
    plan = _load(db, plan_id)
    if not plan:
        raise NotFound("Plan not found")
    if plan.trainer_id != trainer.id:
        raise Forbidden(f"Not authorized to {action} this plan")
    return plan


def create_plan(db: Session, trainer: User, data: PlanIn) -> Plan:
    if trainer.role is not Role.TRAINER:
        raise Forbidden("Only trainers can create plans")

    plan = Plan(
        title=data.title,
        description=data.description,
        price=data.price,
        duration_days=data.duration_days,
        trainer_id=trainer.id,
        image=data.image,
        tags=data.tags,
        difficulty=data.difficulty,
    )
    db.add(plan)
    db.commit()

    logger.info("Trainer %s created plan %s", trainer.id, plan.id)
    return _load(db, plan.id)


def update_plan(db: Session, plan_id: uuid.UUID, trainer: User, data: PlanUpdateIn) -> Plan:
    plan = _owned(db, plan_id, trainer, "update")

    changes = data.model_dump(exclude_unset=True, exclude_none=True)
    for field, value in changes.items():
        setattr(plan, field, value)
    # bump updated_at even when nothing else changed
    plan.updated_at = utcnow()
    db.commit()
    db.refresh(plan)

    logger.info("Trainer %s updated plan %s (%s)", trainer.id, plan.id, ", ".join(sorted(changes)) or "no fields")
    return plan


def delete_plan(db: Session, plan_id: uuid.UUID, trainer: User) -> None:
    """Remove a plan. Existing subscriptions to it are left in place."""
    plan = _owned(db, plan_id, trainer, "delete")
    db.delete(plan)
    db.commit()
    logger.info("Trainer %s deleted plan %s", trainer.id, plan_id)


def gate(plans: list[Plan], covered: set[uuid.UUID]) -> list[PlanView]:
    return [reveal(plan, plan.id in covered) for plan in plans]


def list_plans(db: Session, viewer: User | None) -> list[PlanView]:
    plans = list(db.scalars(_with_trainer().order_by(Plan.created_at.desc())))
    covered = subscriptions.active_plan_ids(db, viewer.id if viewer else None)
    return gate(plans, covered)


def get_plan(db: Session, plan_id: uuid.UUID, viewer: User | None) -> PlanView:
    plan = _load(db, plan_id)
    if not plan:
        raise NotFound("Plan not found")
    is_subscribed = bool(viewer) and subscriptions.has_active(db, viewer.id, plan.id)
    return reveal(plan, is_subscribed)


def list_trainer_plans(db: Session, trainer: User) -> list[TrainerPlanOut]:
    plans = list(
        db.scalars(
            _with_trainer()
            .where(Plan.trainer_id == trainer.id)
            .order_by(Plan.created_at.desc())
        )
    )
    counts = subscriptions.active_counts(db, [p.id for p in plans])
    return [
        TrainerPlanOut(**PlanOut.model_validate(p).model_dump(), subscription_count=counts.get(p.id, 0))
        for p in plans
    ]
