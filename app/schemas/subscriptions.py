from __future__ import annotations

import uuid
from datetime import datetime

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

from app.models.subscription import SubscriptionStatus
from app.schemas.plans import PlanOut


class SubscribeIn(BaseModel):
    # older clients still post {"planId": ...}
    plan_id: uuid.UUID = Field(validation_alias=AliasChoices("plan_id", "planId"))


class SubscriberOut(BaseModel):
    id: uuid.UUID
    name: str
    email: str

    model_config = ConfigDict(from_attributes=True)


class SubscriptionOut(BaseModel):
    id: uuid.UUID
    user: SubscriberOut
    # null once the plan has been deleted by its trainer
    plan: PlanOut | None
    status: SubscriptionStatus
    purchased_at: datetime
    expires_at: datetime
    cancelled_at: datetime | None = None

    model_config = ConfigDict(from_attributes=True)


class SubscriptionCreatedOut(BaseModel):
    message: str
    subscription: SubscriptionOut


class SubscriptionListOut(BaseModel):
    subscriptions: list[SubscriptionOut]


class SubscriptionDetailOut(BaseModel):
    subscription: SubscriptionOut
