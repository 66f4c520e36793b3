"""Error taxonomy shared by services and routers.

Every failure a request can end in is one of these.  Services raise them;
``app.main`` registers a single handler that renders ``{"message": ...}``
(plus any ``extra`` fields) with the carried status code.
"""

from __future__ import annotations

from typing import Any


class AppError(Exception):
    """Base class for errors rendered directly to the client."""

    status_code: int = 500

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        extra: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code
        self.extra: dict[str, Any] = extra or {}

    def to_payload(self) -> dict[str, Any]:
        return {"message": self.message, **self.extra}


class ClientError(AppError):
    """Bad input, wrong origin, honeypot, oversized or unsupported file."""

    status_code = 400


class RateLimited(AppError):
    """Per-IP bucket exhausted."""

    status_code = 429

    def __init__(self, message: str = "Too many requests") -> None:
        super().__init__(message)


class ConfigError(AppError):
    """Server misconfiguration.

    The message is fixed; the missing variable is only ever logged.
    """

    status_code = 500

    def __init__(self, message: str = "Server not configured") -> None:
        super().__init__(message)


class UpstreamError(AppError):
    """Verification service or n8n unreachable, failing, or malformed."""

    status_code = 502

    def __init__(
        self,
        message: str,
        upstream_status: int | None = None,
        body: str | None = None,
    ) -> None:
        extra: dict[str, Any] = {}
        if upstream_status is not None:
            extra["upstreamStatus"] = upstream_status
        if body is not None:
            extra["body"] = body
        super().__init__(message, extra=extra)
        self.upstream_status = upstream_status
        self.body = body
