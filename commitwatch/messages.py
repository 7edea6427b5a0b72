"""Boundary messages accepted by WatchEngine.handle().

A front end (panel, editor plugin, CLI) sends plain dicts tagged with a
"kind" field. They are validated into one of the models below before the
engine acts on them.
"""

from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, Field, TypeAdapter, field_validator


class RefreshRequest(BaseModel):
    """Re-run the size check now."""
    kind: Literal["refresh"] = "refresh"
    alert: bool = False


class ChangesRequest(BaseModel):
    """List the current change set."""
    kind: Literal["changes"] = "changes"


class PreviewRequest(BaseModel):
    """Describe the HEAD <-> working tree preview for one file."""
    kind: Literal["preview"] = "preview"
    path: str
    status: str = ""
    original_path: Optional[str] = None


class CommitRequest(BaseModel):
    """Stage, commit and push a bucket.

    The message is trimmed at this boundary; the pipeline then commits the
    trimmed string exactly as given.
    """
    kind: Literal["commit"] = "commit"
    files: list[str] = Field(min_length=1)
    message: str

    @field_validator("message")
    @classmethod
    def message_not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("commit message required")
        return value


Request = Annotated[
    Union[RefreshRequest, ChangesRequest, PreviewRequest, CommitRequest],
    Field(discriminator="kind"),
]

_request_adapter = TypeAdapter(Request)


def parse_request(payload: dict) -> Request:
    """Validate a raw payload into a request model.

    Raises:
        pydantic.ValidationError: unknown kind or bad fields
    """
    return _request_adapter.validate_python(payload)
