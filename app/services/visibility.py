"""
Content gating for plans.

A viewer without an active subscription to a plan gets a preview: the first
PREVIEW_LENGTH characters of the description followed by PREVIEW_SUFFIX. The
suffix is appended even when nothing was cut off, and clients rely on that.
Ownership is not consulted: a trainer looking at their own plan gets the
preview like everybody else.
"""
from __future__ import annotations

from app.models.plan import Plan
from app.schemas.plans import PlanOut, PlanView

PREVIEW_LENGTH = 150
PREVIEW_SUFFIX = "..."


def preview_description(description: str) -> str:
    # str slicing counts code points, not bytes
    return description[:PREVIEW_LENGTH] + PREVIEW_SUFFIX


def reveal(plan: Plan | PlanOut, viewer_has_active_subscription: bool) -> PlanView:
    base = plan if isinstance(plan, PlanOut) else PlanOut.model_validate(plan)
    data = base.model_dump()
    if not viewer_has_active_subscription:
        data["description"] = preview_description(base.description)
    return PlanView(**data, is_subscribed=viewer_has_active_subscription)
