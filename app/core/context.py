"""Process-wide state, built once at startup.

The rate-limiter bucket maps and the shared HTTP client live here instead of
in module globals.  ``app.main`` builds an ``AppContext`` in its lifespan and
stores it on ``app.state``; routes receive it through the ``get_context``
dependency, which tests override.
"""

from __future__ import annotations

from dataclasses import dataclass

import httpx
from starlette.requests import Request

from app.core.config import Settings
from app.services.rate_limiter import RateLimiter


@dataclass
class AppContext:
    settings: Settings
    http_client: httpx.AsyncClient
    read_limiter: RateLimiter
    submit_limiter: RateLimiter

    def limiters(self) -> dict[str, RateLimiter]:
        return {"read": self.read_limiter, "submit": self.submit_limiter}

    async def aclose(self) -> None:
        await self.http_client.aclose()


def build_context(
    settings: Settings,
    http_client: httpx.AsyncClient | None = None,
) -> AppContext:
    """Create the context; *http_client* lets tests inject a mock transport."""
    def _limiter() -> RateLimiter:
        return RateLimiter(
            capacity=settings.RATE_LIMIT_TOKENS,
            window_seconds=settings.RATE_LIMIT_WINDOW_SECONDS,
        )

    if http_client is None:
        http_client = httpx.AsyncClient(timeout=settings.UPSTREAM_TIMEOUT_SECONDS)

    return AppContext(
        settings=settings,
        http_client=http_client,
        read_limiter=_limiter(),
        submit_limiter=_limiter(),
    )


def get_context(request: Request) -> AppContext:
    """FastAPI dependency returning the context built at startup."""
    return request.app.state.context
