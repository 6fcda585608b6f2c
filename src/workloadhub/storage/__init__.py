"""WorkloadHub Storage Layer - Team roster and capacity override persistence."""

from .base import StorageAdapter
from .postgres_adapter import PostgresAdapter, PostgresConfig
from .models import (
    Base,
    CapacityOverrideModel,
    TeamMemberModel,
)

__all__ = [
    "StorageAdapter",
    "PostgresAdapter",
    "PostgresConfig",
    "Base",
    "TeamMemberModel",
    "CapacityOverrideModel",
]
