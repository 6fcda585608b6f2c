"""
WorkloadHub Workload Aggregation Engine

Pure functions over immutable snapshots:
- compute_workload: committed effort per assignee for a group
- resolve_effective_capacity: override > roster default > fallback
- build_workload_view: dashboard rows joining both
- triage_tasks: tasks missing an assignee or effort

Store-backed services live in ``overrides``, ``roster`` and ``view_service``.
"""

from .errors import (
    NotFoundError,
    SourceTimeout,
    SourceUnavailable,
    ValidationError,
    WorkloadError,
)
from .models import (
    DONE_STATUS,
    FALLBACK_CAPACITY,
    Group,
    GroupId,
    Member,
    MemberId,
    MemberRole,
    OverrideKey,
    Roster,
    Task,
    TaskId,
    WorkloadResult,
)
from .workload import aggregate_effort, chargeable_tasks, compute_workload, filter_by_group
from .capacity import effective_capacities, resolve_effective_capacity
from .dashboard import WorkloadRow, WorkloadView, build_workload_view
from .triage import TriageReport, triage_tasks

__all__ = [
    # Errors
    "WorkloadError",
    "ValidationError",
    "NotFoundError",
    "SourceUnavailable",
    "SourceTimeout",
    # Models
    "DONE_STATUS",
    "FALLBACK_CAPACITY",
    "Group",
    "GroupId",
    "Member",
    "MemberId",
    "MemberRole",
    "OverrideKey",
    "Roster",
    "Task",
    "TaskId",
    "WorkloadResult",
    # Aggregation
    "filter_by_group",
    "chargeable_tasks",
    "aggregate_effort",
    "compute_workload",
    "resolve_effective_capacity",
    "effective_capacities",
    "build_workload_view",
    "WorkloadRow",
    "WorkloadView",
    "triage_tasks",
    "TriageReport",
]
