from __future__ import annotations

from pydantic import BaseModel

from app.schemas.plans import PlanView


class FeedOut(BaseModel):
    plans: list[PlanView]
    count: int
    message: str | None = None
