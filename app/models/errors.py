"""Wire model shared by every error body."""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class ErrorResponse(BaseModel):
    """``{"message": ...}`` plus the upstream diagnostics on 502s."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    message: str
    upstream_status: int | None = None
    body: str | None = None
