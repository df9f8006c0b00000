"""Domain enums for the build server."""

from enum import Enum


class TaskStatus(str, Enum):
    """Build task status reported at submission."""

    QUEUED = "queued"


class HealthStatus(str, Enum):
    """Service health status enumeration."""

    HEALTHY = "healthy"
