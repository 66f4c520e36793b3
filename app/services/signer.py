"""HMAC signing of forwarded submissions.

The n8n webhook is public, so every forwarded submission carries its
metadata as a JSON string (``X-Payload``), an HMAC-SHA256 over that string
(``X-Signature``) and the timestamp (``X-Timestamp``).  The workflow
recomputes the HMAC with the shared secret and drops anything that does not
match.

Serialization must be byte-for-byte reproducible: keys in a fixed order,
compact separators, non-ASCII kept as-is (the same output as
``JSON.stringify`` on the receiving side).
"""

from __future__ import annotations

import hashlib
import hmac
import json
import time

from app.models.submission import SignedSubmission


def current_timestamp_ms() -> str:
    """Milliseconds since the epoch, as text."""
    return str(int(time.time() * 1000))


def serialize_payload(
    name: str,
    email: str,
    job_title: str,
    timestamp: str,
    ip: str,
) -> str:
    payload = {
        "name": name,
        "email": email,
        "jobTitle": job_title,
        "timestamp": timestamp,
        "ip": ip,
    }
    return json.dumps(payload, ensure_ascii=False, separators=(",", ":"))


def compute_signature(payload: str, secret: str) -> str:
    """Hex HMAC-SHA256 of *payload* under *secret*."""
    return hmac.new(
        secret.encode("utf-8"),
        payload.encode("utf-8"),
        hashlib.sha256,
    ).hexdigest()


def verify_signature(payload: str, signature: str, secret: str) -> bool:
    """Constant-time check of a received signature."""
    expected = compute_signature(payload, secret)
    return hmac.compare_digest(expected, signature)


def sign_submission(
    name: str,
    email: str,
    job_title: str,
    ip: str,
    secret: str,
    timestamp: str | None = None,
) -> SignedSubmission:
    """Build and sign the submission metadata.

    Parameters
    ----------
    ip:
        Client IP as seen by the guard; empty when unknown.
    secret:
        ``N8N_WEBHOOK_SECRET``.  Never logged or returned.
    timestamp:
        Milliseconds since the epoch; defaults to now.
    """
    ts = timestamp if timestamp is not None else current_timestamp_ms()
    payload = serialize_payload(name, email, job_title, ts, ip)
    return SignedSubmission(
        payload=payload,
        signature=compute_signature(payload, secret),
        timestamp=ts,
    )
