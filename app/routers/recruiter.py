"""Recruiter dashboard data endpoint.

GET /api/recruiter/data proxies the n8n read workflow and returns
normalized candidates.  Browser-only: cross-origin requests are refused
before the rate limiter or upstream are touched.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Request

from app.core.context import AppContext, get_context
from app.core.errors import RateLimited
from app.models.candidate import CandidatesResponse
from app.models.errors import ErrorResponse
from app.services.guard import client_ip, ensure_same_origin
from app.services.normalizer import utc_now_iso
from app.services.upstream import fetch_candidates

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get(
    "/data",
    response_model=CandidatesResponse,
    responses={
        403: {"model": ErrorResponse},
        429: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
        502: {"model": ErrorResponse},
    },
)
async def recruiter_data(
    request: Request,
    ctx: AppContext = Depends(get_context),
) -> CandidatesResponse:
    """Return the current candidate list from n8n."""
    ensure_same_origin(request, ctx.settings, check_referer=True)

    ip = client_ip(request) or "unknown"
    if not ctx.read_limiter.take(ip):
        logger.warning("rate_limited", extra={"route": "recruiter_data", "ip": ip})
        raise RateLimited()

    candidates = await fetch_candidates(ctx.http_client, ctx.settings)
    return CandidatesResponse(ok=True, updated_at=utc_now_iso(), data=candidates)
