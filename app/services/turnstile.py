"""Cloudflare Turnstile server-side verification.

Opt-in: the check only runs when ``TURNSTILE_SECRET_KEY`` is configured.
"""

from __future__ import annotations

import logging

import httpx

from app.core.config import Settings
from app.core.constants import TURNSTILE_VERIFY_URL
from app.core.errors import ClientError, UpstreamError

logger = logging.getLogger(__name__)


def verification_enabled(settings: Settings) -> bool:
    return bool(settings.TURNSTILE_SECRET_KEY)


async def verify_turnstile(
    client: httpx.AsyncClient,
    settings: Settings,
    token: str,
    remote_ip: str,
) -> None:
    """Verify *token* with Cloudflare, raising on anything but success.

    ``ClientError`` (400) for a missing token or a negative verdict,
    ``UpstreamError`` (502) when siteverify cannot be reached or answers
    with something other than JSON.
    """
    if not verification_enabled(settings):
        return
    if not token:
        raise ClientError("Turnstile token missing")

    try:
        response = await client.post(
            TURNSTILE_VERIFY_URL,
            data={
                "secret": settings.TURNSTILE_SECRET_KEY,
                "response": token,
                "remoteip": remote_ip,
            },
            timeout=settings.UPSTREAM_TIMEOUT_SECONDS,
        )
        verdict = response.json()
    except (httpx.HTTPError, ValueError) as exc:
        logger.error(
            "turnstile_verify_failed",
            extra={"error_type": type(exc).__name__, "error_message": str(exc)},
        )
        raise UpstreamError("Turnstile verification error") from exc

    if not isinstance(verdict, dict) or verdict.get("success") is not True:
        error_codes = verdict.get("error-codes") if isinstance(verdict, dict) else None
        logger.info("turnstile_rejected", extra={"error_codes": error_codes})
        raise ClientError("Turnstile verification failed")
