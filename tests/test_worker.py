from datetime import datetime, timedelta, timezone

from app import worker
from app.models import Subscription, SubscriptionStatus
from app.schemas.plans import PlanIn
from app.services import plans, subscriptions


def test_run_once_expires_overdue(monkeypatch, session_factory, db_session, member, trainer):
    plan = plans.create_plan(
        db_session, trainer, PlanIn(title="Sprint", description="Short block", price=5, duration_days=3)
    )
    sub = subscriptions.subscribe(
        db_session, member.id, plan.id, now=datetime.now(timezone.utc) - timedelta(days=4)
    )
    monkeypatch.setattr(worker, "SessionLocal", session_factory)

    assert worker.run_once() == 1
    assert worker.run_once() == 0

    db_session.expire_all()
    assert db_session.get(Subscription, sub.id).status is SubscriptionStatus.EXPIRED


def test_main_once(monkeypatch):
    calls = []
    monkeypatch.setattr(worker, "_run_with_retry", lambda: calls.append(1) or 0)
    monkeypatch.setattr(worker, "setup_logging", lambda: None)

    worker.main(["--once"])

    assert calls == [1]
