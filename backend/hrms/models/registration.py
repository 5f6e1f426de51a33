"""Registration wizard models."""

from __future__ import annotations

from pydantic import BaseModel, Field


class FieldError(BaseModel):
    field: str
    message: str


class StepValidationResponse(BaseModel):
    step: int
    valid: bool
    errors: list[FieldError] = Field(default_factory=list)
