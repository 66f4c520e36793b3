"""Application constants.

Upload policy, upstream diagnostics limits, and the headers applied to every
response.
"""

# ---------------------------------------------------------------------------
# Resume upload policy
# ---------------------------------------------------------------------------
MAX_RESUME_BYTES: int = 10 * 1024 * 1024

ALLOWED_RESUME_TYPES: frozenset[str] = frozenset({
    "application/pdf",
    "application/msword",
    "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
})

DEFAULT_RESUME_FILENAME: str = "resume"

# Honeypot field name; real visitors never see or fill it
HONEYPOT_FIELD: str = "company"

EMAIL_PATTERN: str = r"^[^\s@]+@[^\s@]+\.[^\s@]+$"

# ---------------------------------------------------------------------------
# Upstream
# ---------------------------------------------------------------------------
UPSTREAM_BODY_PREVIEW_CHARS: int = 500

TURNSTILE_VERIFY_URL: str = "https://challenges.cloudflare.com/turnstile/v0/siteverify"

# Signed metadata headers read by the n8n workflow
HEADER_PAYLOAD: str = "X-Payload"
HEADER_SIGNATURE: str = "X-Signature"
HEADER_TIMESTAMP: str = "X-Timestamp"

# ---------------------------------------------------------------------------
# Response hardening
# ---------------------------------------------------------------------------
SECURITY_HEADERS: dict[str, str] = {
    "X-Frame-Options": "DENY",
    "Referrer-Policy": "no-referrer",
    "X-Content-Type-Options": "nosniff",
}
