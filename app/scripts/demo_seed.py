"""
Walk one trainer/user scenario through the services against the configured DB.

Run after `alembic upgrade head`:

    python -m app.scripts.demo_seed
"""
from sqlalchemy import select

from app.core.db import SessionLocal
from app.models import Plan, Role, User
from app.schemas.auth import RegisterIn
from app.schemas.plans import PlanIn
from app.services import follow_graph, plans, subscriptions
from app.services.auth import register_user
from app.services.feed import personalized_feed

DEMO_PASSWORD = "demo1234"


def _account(db, email: str, name: str, role: Role) -> User:
    user = db.scalar(select(User).where(User.email == email))
    if user:
        print(f"[OK] Account exists: {user.email} ({user.role.value})")
        return user
    user = register_user(db, RegisterIn(email=email, password=DEMO_PASSWORD, name=name, role=role))
    print(f"[OK] Account created: {user.email} ({user.role.value}, id={user.id})")
    return user


def main() -> None:
    db = SessionLocal()
    try:
        trainer = _account(db, "demo_trainer@example.com", "Demo Trainer", Role.TRAINER)
        user = _account(db, "demo_user@example.com", "Demo User", Role.USER)

        plan = db.scalar(select(Plan).where(Plan.trainer_id == trainer.id))
        if not plan:
            plan = plans.create_plan(
                db,
                trainer,
                PlanIn(
                    title="30-day strength base",
                    description="Three full-body sessions a week. " * 10,
                    price=29.0,
                    duration_days=30,
                    tags=["strength", "full body"],
                ),
            )
        print(f"[OK] Plan: {plan.title} ({plan.duration_days}d, {plan.price})")

        if not follow_graph.is_following(db, user.id, trainer.id):
            follow_graph.follow(db, user.id, trainer.id)
        print(f"[OK] {user.email} follows {trainer.email}")

        feed = personalized_feed(db, user.id)
        print(f"\n=== Feed before purchase ({feed.count}) ===")
        for view in feed.plans:
            print(f"- {view.title} | subscribed={view.is_subscribed} | {view.description[:40]!r}...")

        existing = [s for s in subscriptions.list_mine(db, user.id) if s.plan_id == plan.id]
        if existing:
            sub = existing[0]
            print(f"\n[OK] Subscription exists: {sub.status.value} (expires {sub.expires_at})")
        else:
            sub = subscriptions.subscribe(db, user.id, plan.id)
            print(f"\n[OK] Subscribed: {sub.status.value} {sub.purchased_at} -> {sub.expires_at}")

        feed = personalized_feed(db, user.id)
        print(f"\n=== Feed after purchase ({feed.count}) ===")
        for view in feed.plans:
            print(f"- {view.title} | subscribed={view.is_subscribed} | {len(view.description)} chars")

        print("\n[ALL OK] Demo scenario completed successfully.")
    finally:
        db.close()


if __name__ == "__main__":
    main()
