"""
Uniform failure result for write operations.

Writes never let store exceptions escape; they return
`{"errors": [{"field": ..., "message": ...}]}` instead.
"""

from __future__ import annotations

from pydantic import BaseModel

GENERIC_ERROR_MESSAGE = "Something went wrong."


class FieldError(BaseModel):
    field: str
    message: str


def standard_error(exc: BaseException | None = None) -> list[FieldError]:
    message = str(exc).strip() if exc is not None else ""
    return [FieldError(field="general", message=message or GENERIC_ERROR_MESSAGE)]
