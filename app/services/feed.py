"""
Personalized feed: plans by the trainers a viewer follows, newest first,
each gated by the viewer's own active subscriptions.

Recomputed from the store on every call; no caching, no pagination.
"""
from __future__ import annotations

import logging
import uuid

from sqlalchemy import select
from sqlalchemy.orm import Session, joinedload

from app.models import Plan
from app.schemas.feed import FeedOut
from app.services import follow_graph, subscriptions
from app.services.plans import gate

logger = logging.getLogger(__name__)

EMPTY_FEED_MESSAGE = "Follow some trainers to see their plans in your feed"


def personalized_feed(db: Session, viewer_id: uuid.UUID) -> FeedOut:
    trainer_ids = follow_graph.following_ids(db, viewer_id)
    if not trainer_ids:
        return FeedOut(plans=[], count=0, message=EMPTY_FEED_MESSAGE)

    plans = list(
        db.scalars(
            select(Plan)
            .options(joinedload(Plan.trainer))
            .where(Plan.trainer_id.in_(trainer_ids))
            .order_by(Plan.created_at.desc())
        )
    )
    covered = subscriptions.active_plan_ids(db, viewer_id)
    views = gate(plans, covered)

    logger.debug("Feed for %s: %d trainers, %d plans", viewer_id, len(trainer_ids), len(views))
    return FeedOut(plans=views, count=len(views))
