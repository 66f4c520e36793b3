"""Request guard: same-origin check, honeypot, and submission validation.

Everything here runs before the rate limiter or any upstream call, and
rejects by raising ``ClientError`` with a message that is safe to show.
"""

from __future__ import annotations

import logging
import re

from starlette.datastructures import FormData, UploadFile
from starlette.requests import Request

from app.core.config import Settings
from app.core.constants import (
    ALLOWED_RESUME_TYPES,
    DEFAULT_RESUME_FILENAME,
    EMAIL_PATTERN,
    HONEYPOT_FIELD,
    MAX_RESUME_BYTES,
)
from app.core.errors import ClientError
from app.models.submission import ResumeFile, SubmissionForm

logger = logging.getLogger(__name__)

_EMAIL_RE = re.compile(EMAIL_PATTERN, re.IGNORECASE)


# ---------------------------------------------------------------------------
# Client identity
# ---------------------------------------------------------------------------

def client_ip(request: Request) -> str:
    """Best-effort client IP: proxy headers first, then the socket peer.

    Returns ``""`` when nothing is known.
    """
    forwarded_for = request.headers.get("x-forwarded-for", "").strip()
    if forwarded_for:
        return forwarded_for.split(",")[0].strip()
    real_ip = request.headers.get("x-real-ip", "").strip()
    if real_ip:
        return real_ip
    if request.client and request.client.host:
        return request.client.host
    return ""


def server_origin(request: Request, settings: Settings) -> str:
    """The origin this server answers on (``scheme://host[:port]``)."""
    if settings.PUBLIC_ORIGIN:
        return settings.PUBLIC_ORIGIN.rstrip("/")
    return f"{request.url.scheme}://{request.url.netloc}"


# ---------------------------------------------------------------------------
# Same-origin
# ---------------------------------------------------------------------------

def is_same_origin(request: Request, settings: Settings, check_referer: bool = False) -> bool:
    """``Origin`` (and optionally ``Referer``), when present, must match us."""
    expected = server_origin(request, settings)
    origin = request.headers.get("origin")
    if origin and origin != expected:
        return False
    if check_referer:
        referer = request.headers.get("referer")
        if referer and not referer.startswith(expected):
            return False
    return True


def ensure_same_origin(
    request: Request,
    settings: Settings,
    check_referer: bool = False,
    message: str = "Forbidden",
) -> None:
    if not is_same_origin(request, settings, check_referer=check_referer):
        logger.warning(
            "cross_origin_rejected",
            extra={
                "path": request.url.path,
                "origin": request.headers.get("origin"),
            },
        )
        raise ClientError(message, status_code=403)


# ---------------------------------------------------------------------------
# Submission fields
# ---------------------------------------------------------------------------

def is_valid_email(email: str) -> bool:
    return bool(_EMAIL_RE.match(email))


def _text_field(form: FormData, key: str) -> str:
    value = form.get(key)
    if value is None or isinstance(value, UploadFile):
        return ""
    return str(value).strip()


async def validate_submission(form: FormData) -> SubmissionForm:
    """Validate the intake form and read the resume into memory.

    Checks run in a fixed order (honeypot, required fields, email, file
    type, file size); the first failure wins.
    """
    if _text_field(form, HONEYPOT_FIELD):
        logger.info("honeypot_triggered")
        raise ClientError("Bad request")

    name = _text_field(form, "name")
    email = _text_field(form, "email")
    job_title = _text_field(form, "jobTitle")
    turnstile_token = _text_field(form, "turnstileToken")
    resume = form.get("resume")

    if not name or not email or not job_title or not resume:
        raise ClientError("Missing required fields")

    if not is_valid_email(email):
        raise ClientError("Invalid email")

    if not isinstance(resume, UploadFile):
        raise ClientError("Invalid file")

    content_type = resume.content_type or ""
    if content_type not in ALLOWED_RESUME_TYPES:
        raise ClientError("Unsupported file type")

    if resume.size is not None and resume.size > MAX_RESUME_BYTES:
        raise ClientError("File too large (max 10MB)", status_code=413)
    content = await resume.read()
    if len(content) > MAX_RESUME_BYTES:
        raise ClientError("File too large (max 10MB)", status_code=413)

    return SubmissionForm(
        name=name,
        email=email,
        job_title=job_title,
        turnstile_token=turnstile_token,
        resume=ResumeFile(
            filename=resume.filename or DEFAULT_RESUME_FILENAME,
            content_type=content_type,
            content=content,
        ),
    )
