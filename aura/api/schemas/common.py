"""Common schemas for the Aura Board API."""

from pydantic import BaseModel


class MessageResponse(BaseModel):
    """Standard success response."""
    message: str
