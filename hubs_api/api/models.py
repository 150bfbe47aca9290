"""
API response models.

Pydantic models for the JSON envelopes and OpenAPI schema generation.
The ``sucess`` spelling on HubCreatedResponse and ListErrorResponse is
part of the public contract: existing clients read that key.
"""

from typing import Any

from pydantic import BaseModel


class ErrorDetail(BaseModel):
    """Sanitized description of a storage failure."""

    name: str
    message: str
    code: str | None = None

    @classmethod
    def from_exception(cls, exc: BaseException) -> "ErrorDetail":
        code = getattr(exc, "code", None)
        return cls(
            name=type(exc).__name__,
            message=str(exc),
            code=str(code) if code is not None else None,
        )


class HubCreatedResponse(BaseModel):
    """Response model for POST /hubs."""

    sucess: bool = True
    hub: dict[str, Any]


class HubUpdatedResponse(BaseModel):
    """Response model for PUT /hubs/{id}."""

    success: bool = True
    updated: dict[str, Any]


class ErrorResponse(BaseModel):
    """Standard error envelope: not-found message or storage failure."""

    success: bool = False
    message: str | None = None
    err: ErrorDetail | None = None


class ListErrorResponse(BaseModel):
    """Storage failure envelope for GET /hubs and POST /hubs."""

    sucess: bool = False
    err: ErrorDetail
