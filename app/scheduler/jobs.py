"""APScheduler job definitions and scheduler management.

Runs the periodic sweep that evicts expired rate-limit buckets, and provides
start/shutdown/status helpers for the FastAPI lifespan.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping

from apscheduler.schedulers.background import BackgroundScheduler
from apscheduler.triggers.interval import IntervalTrigger

from app.services.rate_limiter import RateLimiter

logger = logging.getLogger(__name__)

# Module-level scheduler instance (singleton)
scheduler = BackgroundScheduler()

SWEEP_JOB_ID = "rate_limit_sweep"


def sweep_rate_limiters(limiters: Mapping[str, RateLimiter]) -> dict[str, int]:
    """Evict expired buckets from every limiter.

    Returns the number of buckets removed, per limiter name.
    """
    removed = {name: limiter.sweep() for name, limiter in limiters.items()}
    if any(removed.values()):
        logger.info("rate_limit_sweep", extra={"removed": removed})
    return removed


def start_scheduler(limiters: Mapping[str, RateLimiter], interval_minutes: int) -> None:
    """Schedule the bucket sweep and start the background scheduler."""
    scheduler.add_job(
        sweep_rate_limiters,
        IntervalTrigger(minutes=interval_minutes),
        args=[limiters],
        id=SWEEP_JOB_ID,
        replace_existing=True,
    )
    if scheduler.running:
        logger.info("scheduler_job_replaced", extra={"job_id": SWEEP_JOB_ID})
        return
    scheduler.start()
    logger.info(
        "scheduler_started",
        extra={
            "interval_minutes": interval_minutes,
        },
    )


def shutdown_scheduler() -> None:
    """Shutdown the scheduler gracefully; called during lifespan cleanup."""
    if scheduler.running:
        scheduler.shutdown(wait=False)
        logger.info("scheduler_stopped")


def is_scheduler_running() -> bool:
    """Check if the scheduler is currently running."""
    return scheduler.running
