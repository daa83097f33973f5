"""
API response models.

Pydantic models for FastAPI endpoint serialization and OpenAPI schema generation.
The register-user endpoint answers in plain text and has no models here.
"""

from pydantic import BaseModel


class HealthResponse(BaseModel):
    """Response model for the health check."""

    status: str
