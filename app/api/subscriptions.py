import uuid

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.api.deps import get_db, get_current_user
from app.models import User
from app.schemas.subscriptions import (
    SubscribeIn,
    SubscriptionCreatedOut,
    SubscriptionDetailOut,
    SubscriptionListOut,
    SubscriptionOut,
)
from app.services import subscriptions as subscription_service

router = APIRouter()


@router.post("", response_model=SubscriptionCreatedOut, status_code=201)
def subscribe(payload: SubscribeIn, db: Session = Depends(get_db), user: User = Depends(get_current_user)):
    """Buy a plan. There is no payment gateway; the purchase always goes through."""
    sub = subscription_service.subscribe(db, user.id, payload.plan_id)
    return SubscriptionCreatedOut(
        message="Subscription created successfully",
        subscription=SubscriptionOut.model_validate(sub),
    )


@router.get("/my-subscriptions", response_model=SubscriptionListOut)
def my_subscriptions(db: Session = Depends(get_db), user: User = Depends(get_current_user)):
    subs = subscription_service.list_mine(db, user.id)
    return SubscriptionListOut(subscriptions=[SubscriptionOut.model_validate(s) for s in subs])


@router.get("/{subscription_id}", response_model=SubscriptionDetailOut)
def get_subscription(
    subscription_id: uuid.UUID,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    sub = subscription_service.get_one(db, subscription_id, user.id)
    return SubscriptionDetailOut(subscription=SubscriptionOut.model_validate(sub))


@router.post("/{subscription_id}/cancel", response_model=SubscriptionDetailOut)
def cancel_subscription(
    subscription_id: uuid.UUID,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    sub = subscription_service.cancel(db, subscription_id, user.id)
    return SubscriptionDetailOut(subscription=SubscriptionOut.model_validate(sub))
