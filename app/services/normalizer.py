"""Coerce untyped upstream JSON into ``Candidate`` records.

The n8n read workflow returns whatever its sheet/database step produced:
fields may be missing, null, stringly-typed, or of the wrong type entirely.
Each field goes through one explicit coerce-or-default helper so a bad value
degrades to an empty/zero default instead of failing the whole response.

``normalize_candidates`` never raises.
"""

from __future__ import annotations

import math
from collections.abc import Mapping
from datetime import datetime, timezone
from typing import Any

from app.models.candidate import Candidate

SCORE_MIN: float = 0.0
SCORE_MAX: float = 100.0


def utc_now_iso() -> str:
    """Current UTC time as ``2026-01-31T12:00:00.000Z``."""
    now = datetime.now(timezone.utc)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")


# ---------------------------------------------------------------------------
# Field coercion
# ---------------------------------------------------------------------------

def coerce_str(value: Any) -> str:
    """Return *value* as text; containers and unknown types become ``""``."""
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        if math.isfinite(value) and value.is_integer():
            return str(int(value))
        return str(value)
    return ""


def coerce_str_list(value: Any) -> list[str]:
    """Accept a list or a comma-separated string; trim and drop empties."""
    if isinstance(value, str):
        parts = value.split(",")
    elif isinstance(value, (list, tuple)):
        parts = [coerce_str(item) for item in value]
    else:
        return []
    return [p.strip() for p in parts if p.strip()]


def coerce_number(value: Any, default: float = 0.0) -> float:
    """Return a finite float, or *default* for anything non-numeric."""
    if isinstance(value, bool):
        return default
    if isinstance(value, (int, float)):
        # JSON integers are unbounded; past float range they degrade too
        try:
            number = float(value)
        except OverflowError:
            return default
    elif isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError:
            return default
    else:
        return default
    if not math.isfinite(number):
        return default
    return number


def coerce_non_negative(value: Any) -> float:
    return max(0.0, coerce_number(value))


def coerce_score(value: Any) -> float:
    """Clamp to the 0-100 score range."""
    return min(SCORE_MAX, max(SCORE_MIN, coerce_number(value)))


def coerce_timestamp(value: Any) -> str:
    """Keep a truthy upstream timestamp as text, otherwise use now."""
    if value:
        text = coerce_str(value)
        if text:
            return text
    return utc_now_iso()


# ---------------------------------------------------------------------------
# Records
# ---------------------------------------------------------------------------

def normalize_candidate(record: Any) -> Candidate:
    """Map one upstream record to a ``Candidate``.

    A record that is not a mapping is treated as empty, producing a
    candidate with every field at its default.
    """
    raw: Mapping[str, Any] = record if isinstance(record, Mapping) else {}

    highlights_source = raw.get("highlights")
    skills_source = raw.get("skills")
    if skills_source is None:
        skills_source = highlights_source

    return Candidate(
        id=coerce_str(raw.get("id")),
        name=coerce_str(raw.get("name")),
        email=coerce_str(raw.get("email")),
        job_title=coerce_str(raw.get("jobTitle")),
        drive_url=coerce_str(raw.get("driveUrl")),
        summary=coerce_str(raw.get("summary")),
        highlights=coerce_str_list(highlights_source),
        skills=coerce_str_list(skills_source),
        years_experience=coerce_non_negative(raw.get("yearsExperience")),
        credibility_score=coerce_score(raw.get("credibilityScore")),
        ats_score=coerce_score(raw.get("atsScore")),
        created_at=coerce_timestamp(raw.get("createdAt")),
    )


def normalize_candidates(raw: Any) -> list[Candidate]:
    """Normalize an upstream payload; anything but a list yields ``[]``."""
    if not isinstance(raw, list):
        return []
    return [normalize_candidate(record) for record in raw]
