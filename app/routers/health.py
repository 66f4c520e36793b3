"""Health check endpoint.

Reports scheduler state and how many rate-limit buckets each limiter is
currently tracking.
"""

import logging
from typing import Any

from fastapi import APIRouter, Depends

from app.core.context import AppContext, get_context
from app.scheduler.jobs import is_scheduler_running

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/health")
async def health_check(ctx: AppContext = Depends(get_context)) -> Any:
    """Return liveness plus scheduler and rate-limiter state."""
    scheduler_status = "running" if is_scheduler_running() else "stopped"

    return {
        "status": "ok",
        "scheduler": scheduler_status,
        "rate_limit_buckets": {
            name: len(limiter) for name, limiter in ctx.limiters().items()
        },
    }
