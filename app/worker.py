"""
Subscription expiry sweeper.

Nothing in the request path compares expires_at with the clock; this process
does, flipping overdue active subscriptions to expired on a fixed interval.

    python -m app.worker           # loop forever
    python -m app.worker --once    # single pass, e.g. from cron
"""
from __future__ import annotations

import argparse
import logging
import time

from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.db import SessionLocal
from app.core.logging import setup_logging
from app.services.subscriptions import expire_overdue

logger = logging.getLogger("app.worker")


def _get_db() -> Session:
    return SessionLocal()


def run_once() -> int:
    db = _get_db()
    try:
        return expire_overdue(db)
    finally:
        db.close()


def _run_with_retry(max_attempts: int = 30, sleep_seconds: float = 1.0) -> int:
    last_exc: Exception | None = None
    for attempt in range(1, max_attempts + 1):
        try:
            return run_once()
        except OperationalError as e:
            last_exc = e
            logger.warning("Database unavailable (attempt %d/%d): %s", attempt, max_attempts, e)
            time.sleep(sleep_seconds)
    raise last_exc  # type: ignore[misc]


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Expire overdue subscriptions.")
    parser.add_argument("--once", action="store_true", help="run a single sweep and exit")
    args = parser.parse_args(argv)

    setup_logging()

    if args.once:
        flipped = _run_with_retry()
        logger.info("Sweep done, %d subscription(s) expired", flipped)
        return

    interval = settings.expiry_sweep_interval_seconds
    logger.info("Expiry sweeper started, interval=%ss", interval)
    while True:
        _run_with_retry()
        time.sleep(interval)


if __name__ == "__main__":
    main()
