"""
Data Models Module

Pydantic models shared by the ingestor and both forwarders.
"""

from pydantic import BaseModel, Field


DEFAULT_PART_CONTENT_TYPE = "application/octet-stream"


class UploadedFile(BaseModel):
    """One image part, fully read into memory for the lifetime of a request."""

    filename: str = Field(..., description="Filename sent by the client")
    content: bytes = Field(..., description="Raw file bytes")
    content_type: str = Field(
        default=DEFAULT_PART_CONTENT_TYPE,
        description="Content type of the inbound part",
    )


class HealthResponse(BaseModel):
    """Health check response model."""

    status: str = Field(..., description="Service health status")
    service: str = Field(..., description="Service name")
    transport: str = Field(..., description="Backend transport in use (http or grpc)")
