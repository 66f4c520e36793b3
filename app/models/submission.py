"""Models for the resume intake path.

``SubmissionForm`` is what survives the request guard; ``SignedSubmission``
is the signed metadata attached to the forwarded webhook call.
"""

from dataclasses import dataclass

from pydantic import BaseModel


@dataclass(frozen=True)
class ResumeFile:
    """The uploaded resume, fully read into memory (max 10 MiB)."""
    filename: str
    content_type: str
    content: bytes

    @property
    def size(self) -> int:
        return len(self.content)


@dataclass(frozen=True)
class SubmissionForm:
    """Validated multipart submission."""
    name: str
    email: str
    job_title: str
    resume: ResumeFile
    turnstile_token: str = ""


@dataclass(frozen=True)
class SignedSubmission:
    """Serialized metadata, its HMAC-SHA256 hex signature, and timestamp."""
    payload: str
    signature: str
    timestamp: str


class SubmitResponse(BaseModel):
    """Response for POST /api/submit."""
    ok: bool = True
