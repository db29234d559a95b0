import uuid

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.api.deps import get_db, get_optional_user, require_trainer
from app.models import User
from app.schemas.plans import (
    MessageOut,
    PlanDetailOut,
    PlanIn,
    PlanListOut,
    PlanOut,
    PlanUpdateIn,
    PlanWriteOut,
    TrainerPlanListOut,
)
from app.services import plans as plan_service

router = APIRouter()


@router.get("", response_model=PlanListOut)
def list_plans(db: Session = Depends(get_db), viewer: User | None = Depends(get_optional_user)):
    return PlanListOut(plans=plan_service.list_plans(db, viewer))


# must stay above /{plan_id} so "trainer" is not parsed as a plan id
@router.get("/trainer/my-plans", response_model=TrainerPlanListOut)
def my_plans(db: Session = Depends(get_db), trainer: User = Depends(require_trainer)):
    """Trainer dashboard: own plans with active subscription counts."""
    return TrainerPlanListOut(plans=plan_service.list_trainer_plans(db, trainer))


@router.get("/{plan_id}", response_model=PlanDetailOut)
def get_plan(
    plan_id: uuid.UUID,
    db: Session = Depends(get_db),
    viewer: User | None = Depends(get_optional_user),
):
    return PlanDetailOut(plan=plan_service.get_plan(db, plan_id, viewer))


@router.post("", response_model=PlanWriteOut, status_code=201)
def create_plan(payload: PlanIn, db: Session = Depends(get_db), trainer: User = Depends(require_trainer)):
    plan = plan_service.create_plan(db, trainer, payload)
    return PlanWriteOut(plan=PlanOut.model_validate(plan))


@router.put("/{plan_id}", response_model=PlanWriteOut)
def update_plan(
    plan_id: uuid.UUID,
    payload: PlanUpdateIn,
    db: Session = Depends(get_db),
    trainer: User = Depends(require_trainer),
):
    plan = plan_service.update_plan(db, plan_id, trainer, payload)
    return PlanWriteOut(plan=PlanOut.model_validate(plan))


@router.delete("/{plan_id}", response_model=MessageOut)
def delete_plan(plan_id: uuid.UUID, db: Session = Depends(get_db), trainer: User = Depends(require_trainer)):
    plan_service.delete_plan(db, plan_id, trainer)
    return MessageOut(message="Plan deleted successfully")
