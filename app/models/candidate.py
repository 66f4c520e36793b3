"""Pydantic models for recruiter dashboard data.

Field names are snake_case in Python and camelCase on the wire, matching the
shape the dashboard (and the n8n workflow) use.
"""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class Candidate(BaseModel):
    """A single normalized candidate record."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: str = ""
    name: str = ""
    email: str = ""
    job_title: str = ""
    drive_url: str = ""
    summary: str = ""
    highlights: list[str] = []  # legacy; prefer skills
    skills: list[str] = []
    years_experience: float = 0.0
    credibility_score: float = 0.0
    ats_score: float = 0.0
    created_at: str  # ISO-8601


class CandidatesResponse(BaseModel):
    """Response for GET /api/recruiter/data."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    ok: bool = True
    updated_at: str
    data: list[Candidate] = []
