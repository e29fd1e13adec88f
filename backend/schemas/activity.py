"""Pydantic schemas for activity endpoints."""

from pydantic import BaseModel, Field, field_validator


class CommentCreateRequest(BaseModel):
    """Request body for writing a comment."""

    body: str = Field(min_length=1, max_length=2000)

    @field_validator("body")
    @classmethod
    def body_not_blank(cls, value: str) -> str:
        """Reject bodies made only of whitespace."""
        if not value.strip():
            raise ValueError("body must not be blank")
        return value
