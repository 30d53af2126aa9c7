"""
Pydantic v2 schemas for the Cosmocore API.

This module exports all schema classes used throughout the API
for request/response validation and documentation.
"""

from .signal import SignalPayload
from .system import HealthCheck, ServiceInfo

__all__ = [
    # Signal schemas
    "SignalPayload",
    # System schemas
    "HealthCheck",
    "ServiceInfo",
]
