from app.models import Subscription, SubscriptionStatus
from app.scripts import demo_seed
from app.services import subscriptions


def test_demo_rerun_after_cancelled_subscription(monkeypatch, session_factory, db_session):
    monkeypatch.setattr(demo_seed, "SessionLocal", session_factory)

    demo_seed.main()
    sub = db_session.query(Subscription).one()
    subscriptions.cancel(db_session, sub.id, sub.user_id)

    demo_seed.main()

    db_session.expire_all()
    assert db_session.query(Subscription).count() == 1
    assert db_session.get(Subscription, sub.id).status is SubscriptionStatus.CANCELLED
