"""
API response models.

Pydantic models for OpenAPI schema generation. Requests arrive as form
fields and query parameters; successful responses carry no body.
"""

from pydantic import BaseModel


class ErrorResponse(BaseModel):
    """Standard error response model."""

    detail: str
