"""Outbound calls to the n8n workflows.

Read path: ``fetch_candidates`` proxies the recruiter data workflow and
returns normalized candidates.
Write path: ``forward_submission`` rebuilds the multipart submission and
posts it, signed, to the intake webhook.

Both are single-shot (no retry).  Every failure is mapped to
``UpstreamError`` (502), carrying the upstream status and a truncated body
when there is one.
"""

from __future__ import annotations

import logging
import re

import httpx

from app.core.config import Settings
from app.core.constants import (
    DEFAULT_RESUME_FILENAME,
    HEADER_PAYLOAD,
    HEADER_SIGNATURE,
    HEADER_TIMESTAMP,
    UPSTREAM_BODY_PREVIEW_CHARS,
)
from app.core.errors import ConfigError, UpstreamError
from app.models.candidate import Candidate
from app.models.submission import SignedSubmission, SubmissionForm
from app.services.normalizer import normalize_candidates

logger = logging.getLogger(__name__)

_UNSAFE_FILENAME_CHARS = re.compile(r"[^a-zA-Z0-9_.-]")
_REPEATED_UNDERSCORES = re.compile(r"_{2,}")


def _preview(text: str) -> str:
    return text[:UPSTREAM_BODY_PREVIEW_CHARS]


def sanitize_filename(name: str, timestamp: str) -> str:
    """``<timestamp>_<name>`` with anything outside ``[A-Za-z0-9_.-]`` replaced."""
    base = _UNSAFE_FILENAME_CHARS.sub("_", name or DEFAULT_RESUME_FILENAME)
    base = _REPEATED_UNDERSCORES.sub("_", base)
    return f"{timestamp}_{base}"


# ---------------------------------------------------------------------------
# Read proxy
# ---------------------------------------------------------------------------

async def fetch_candidates(client: httpx.AsyncClient, settings: Settings) -> list[Candidate]:
    """GET the recruiter data workflow and normalize its JSON array."""
    if not settings.N8N_READ_URL:
        logger.error("upstream_not_configured", extra={"setting": "N8N_READ_URL"})
        raise ConfigError()

    headers = {"Accept": "application/json", "Cache-Control": "no-store"}
    if settings.N8N_READ_AUTH:
        headers["Authorization"] = settings.N8N_READ_AUTH

    try:
        response = await client.get(
            settings.N8N_READ_URL,
            headers=headers,
            timeout=settings.UPSTREAM_TIMEOUT_SECONDS,
        )
    except httpx.HTTPError as exc:
        logger.error(
            "upstream_read_failed",
            extra={"error_type": type(exc).__name__, "error_message": str(exc)},
        )
        raise UpstreamError("Upstream error") from exc

    if not response.is_success:
        logger.warning(
            "upstream_read_error_status",
            extra={"upstream_status": response.status_code},
        )
        raise UpstreamError(
            "Upstream returned error",
            upstream_status=response.status_code,
            body=_preview(response.text),
        )

    try:
        payload = response.json()
    except ValueError as exc:
        logger.warning("upstream_read_invalid_json")
        raise UpstreamError("Invalid upstream JSON") from exc

    candidates = normalize_candidates(payload)
    logger.info("upstream_read_ok", extra={"count": len(candidates)})
    return candidates


# ---------------------------------------------------------------------------
# Write proxy
# ---------------------------------------------------------------------------

async def forward_submission(
    client: httpx.AsyncClient,
    settings: Settings,
    form: SubmissionForm,
    signed: SignedSubmission,
    ip: str,
    user_agent: str,
) -> None:
    """POST the signed multipart submission to the intake webhook."""
    filename = sanitize_filename(form.resume.filename, signed.timestamp)
    data = {
        "name": form.name,
        "email": form.email,
        "jobTitle": form.job_title,
        "timestamp": signed.timestamp,
        "ip": ip,
        "userAgent": user_agent,
    }
    files = {
        "resume": (filename, form.resume.content, form.resume.content_type),
    }
    # Names may be non-ASCII; the payload header goes out as raw UTF-8
    headers = {
        HEADER_PAYLOAD: signed.payload.encode("utf-8"),
        HEADER_SIGNATURE: signed.signature.encode("ascii"),
        HEADER_TIMESTAMP: signed.timestamp.encode("ascii"),
    }

    try:
        response = await client.post(
            settings.N8N_WEBHOOK_URL,
            data=data,
            files=files,
            headers=headers,
            timeout=settings.UPSTREAM_TIMEOUT_SECONDS,
        )
    except httpx.HTTPError as exc:
        logger.error(
            "submission_forward_failed",
            extra={"error_type": type(exc).__name__, "error_message": str(exc)},
        )
        raise UpstreamError("Failed to reach upstream") from exc

    if not response.is_success:
        detail = _preview(response.text) or response.reason_phrase
        logger.warning(
            "submission_forward_error_status",
            extra={"upstream_status": response.status_code},
        )
        raise UpstreamError(f"Upstream error: {detail}", upstream_status=response.status_code)

    logger.info(
        "submission_forwarded",
        extra={
            "resume_filename": filename,
            "size_bytes": form.resume.size,
            "timestamp": signed.timestamp,
        },
    )
