"""API request and response schemas.

Pydantic v2 models for API serialization/deserialization.
"""

from pydantic import BaseModel, Field


class SaveFormResponse(BaseModel):
    """Response for the save endpoint."""

    filename: str = Field(description="Name the input was stored under")
    message: str = Field(default="Form data saved successfully")


class FormListResponse(BaseModel):
    """Saved input names, sorted."""

    forms: list[str]
    total: int


class ErrorResponse(BaseModel):
    """Standard error response."""

    detail: str
    error_code: str | None = None
