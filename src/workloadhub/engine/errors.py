"""
Workload engine error kinds.

Routers translate these into HTTP status codes; nothing below the API layer
catches them.
"""

from typing import Optional


class WorkloadError(Exception):
    """Base class for all workload engine errors."""


class ValidationError(WorkloadError):
    """Raised for malformed records and rejected capacity values."""

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message)
        self.field = field


class NotFoundError(WorkloadError):
    """Raised when an operation references a member or group absent from the snapshot."""

    def __init__(self, kind: str, identifier: str):
        super().__init__(f"{kind} '{identifier}' not found")
        self.kind = kind
        self.identifier = identifier


class SourceUnavailable(WorkloadError):
    """Raised when a collaborator fetch or mutation call fails."""

    def __init__(self, source: str, reason: str):
        super().__init__(f"{source} unavailable: {reason}")
        self.source = source
        self.reason = reason


class SourceTimeout(SourceUnavailable):
    """A collaborator call exceeded its time budget."""
