from __future__ import annotations

import uuid
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator

from app.models.plan import Difficulty


class TrainerSummaryOut(BaseModel):
    """Trainer fields joined onto a plan."""

    id: uuid.UUID
    name: str
    email: str
    avatar: str
    bio: str
    certification: str

    model_config = ConfigDict(from_attributes=True)


def _clean_tags(tags: list[str] | None) -> list[str] | None:
    if tags is None:
        return None
    return [t.strip() for t in tags if t and t.strip()]


class PlanIn(BaseModel):
    title: str = Field(min_length=1, max_length=100)
    description: str = Field(min_length=1, max_length=2000)
    price: float = Field(ge=0)
    duration_days: int = Field(ge=1)
    image: str = Field(default="", max_length=500)
    tags: list[str] = Field(default_factory=list)
    difficulty: Difficulty = Difficulty.BEGINNER

    @field_validator("title")
    @classmethod
    def _strip_title(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("title must not be blank")
        return v

    @field_validator("tags")
    @classmethod
    def _strip_tags(cls, v: list[str]) -> list[str]:
        return _clean_tags(v)


class PlanUpdateIn(BaseModel):
    """Partial update; fields left out (or null) keep their stored value."""

    title: str | None = Field(default=None, min_length=1, max_length=100)
    description: str | None = Field(default=None, min_length=1, max_length=2000)
    price: float | None = Field(default=None, ge=0)
    duration_days: int | None = Field(default=None, ge=1)
    image: str | None = Field(default=None, max_length=500)
    tags: list[str] | None = None
    difficulty: Difficulty | None = None

    @field_validator("title")
    @classmethod
    def _strip_title(cls, v: str | None) -> str | None:
        if v is None:
            return v
        v = v.strip()
        if not v:
            raise ValueError("title must not be blank")
        return v

    @field_validator("tags")
    @classmethod
    def _strip_tags(cls, v: list[str] | None) -> list[str] | None:
        return _clean_tags(v)


class PlanOut(BaseModel):
    id: uuid.UUID
    title: str
    description: str
    price: float
    duration_days: int
    trainer: TrainerSummaryOut
    image: str
    tags: list[str]
    difficulty: Difficulty
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class PlanView(PlanOut):
    """A plan as one particular viewer is allowed to see it."""

    is_subscribed: bool


class TrainerPlanOut(PlanOut):
    subscription_count: int


class PlanListOut(BaseModel):
    plans: list[PlanView]


class PlanDetailOut(BaseModel):
    plan: PlanView


class PlanWriteOut(BaseModel):
    plan: PlanOut


class TrainerPlanListOut(BaseModel):
    plans: list[TrainerPlanOut]


class MessageOut(BaseModel):
    message: str
