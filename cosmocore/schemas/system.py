"""
System-level Pydantic schemas for the Cosmocore API.
"""

from typing import Literal

from pydantic import BaseModel


class HealthCheck(BaseModel):
    """
    Liveness response. Returned with HTTP 200 whether or not the database answered.

    Attributes:
        status: "healthy" or "unhealthy"
        database: "connected" or "disconnected"
    """

    status: Literal["healthy", "unhealthy"]
    database: Literal["connected", "disconnected"]

    @classmethod
    def from_probe(cls, connected: bool) -> "HealthCheck":
        """Build the response from the outcome of the database probe."""
        if connected:
            return cls(status="healthy", database="connected")
        return cls(status="unhealthy", database="disconnected")


class ServiceInfo(BaseModel):
    """Root endpoint response."""

    status: str
    service: str
    version: str
