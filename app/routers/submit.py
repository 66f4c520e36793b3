"""Resume intake endpoint.

POST /api/submit validates the multipart form, optionally verifies the
Turnstile token, signs the metadata, and forwards everything to the n8n
intake webhook.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Request

from app.core.context import AppContext, get_context
from app.core.errors import ClientError, ConfigError, RateLimited
from app.models.errors import ErrorResponse
from app.models.submission import SubmitResponse
from app.services.guard import client_ip, ensure_same_origin, validate_submission
from app.services.signer import sign_submission
from app.services.turnstile import verify_turnstile
from app.services.upstream import forward_submission

logger = logging.getLogger(__name__)

router = APIRouter()


def _ensure_configured(ctx: AppContext) -> None:
    missing = [
        name
        for name in ("N8N_WEBHOOK_URL", "N8N_WEBHOOK_SECRET")
        if not getattr(ctx.settings, name)
    ]
    if missing:
        logger.error("upstream_not_configured", extra={"settings": missing})
        raise ConfigError()


@router.post(
    "/submit",
    response_model=SubmitResponse,
    responses={
        400: {"model": ErrorResponse},
        403: {"model": ErrorResponse},
        413: {"model": ErrorResponse},
        429: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
        502: {"model": ErrorResponse},
    },
)
async def submit_resume(
    request: Request,
    ctx: AppContext = Depends(get_context),
) -> SubmitResponse:
    """Accept a resume submission and forward it to n8n."""
    ensure_same_origin(request, ctx.settings, message="Forbidden origin")
    _ensure_configured(ctx)

    try:
        raw_form = await request.form()
    except Exception as exc:
        logger.info("submission_form_unparseable", extra={"error_type": type(exc).__name__})
        raise ClientError("Invalid form submission") from exc

    try:
        form = await validate_submission(raw_form)
    finally:
        await raw_form.close()

    # Only submissions that pass the guard spend a token
    ip = client_ip(request)
    if not ctx.submit_limiter.take(ip or "unknown"):
        logger.warning("rate_limited", extra={"route": "submit_resume", "ip": ip})
        raise RateLimited()

    await verify_turnstile(ctx.http_client, ctx.settings, form.turnstile_token, ip)

    signed = sign_submission(
        name=form.name,
        email=form.email,
        job_title=form.job_title,
        ip=ip,
        secret=ctx.settings.N8N_WEBHOOK_SECRET,
    )
    await forward_submission(
        ctx.http_client,
        ctx.settings,
        form,
        signed,
        ip=ip,
        user_agent=request.headers.get("user-agent", ""),
    )
    return SubmitResponse(ok=True)
