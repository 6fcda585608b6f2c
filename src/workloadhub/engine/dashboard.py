"""
Workload view for one group: roster, committed effort and effective
capacity joined into dashboard rows.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional, Sequence

from .capacity import GroupOverrides, resolve_effective_capacity
from .models import FALLBACK_CAPACITY, GroupId, MemberId, Roster, Task
from .workload import compute_workload


@dataclass(frozen=True)
class WorkloadRow:
    """One member's load against their effective capacity."""
    name: str
    capacity: float
    default_capacity: float
    workload: float
    overridden: bool = False
    member_id: Optional[MemberId] = None

    @property
    def overloaded(self) -> bool:
        return self.workload > self.capacity

    @property
    def utilization(self) -> float:
        """Workload as a percentage of effective capacity."""
        if self.capacity <= 0:
            return 0.0
        return round(self.workload / self.capacity * 100, 2)


@dataclass
class WorkloadView:
    """Dashboard rows for one group."""
    group_id: Optional[GroupId]
    rows: List[WorkloadRow]
    # Assignees with effort but no roster entry
    unrostered: List[WorkloadRow] = field(default_factory=list)
    generated_at: datetime = field(default_factory=datetime.utcnow)
    stale: bool = False

    @property
    def overloaded(self) -> List[WorkloadRow]:
        return [row for row in self.rows + self.unrostered if row.overloaded]


def build_workload_view(
    tasks: Sequence[Task],
    group_id: Optional[GroupId],
    roster: Roster,
    overrides_for_group: GroupOverrides,
    fallback: float = FALLBACK_CAPACITY,
) -> WorkloadView:
    """Join workload and effective capacity for every roster member, in roster order."""
    workload = compute_workload(tasks, group_id)

    rows = [
        WorkloadRow(
            member_id=member.id,
            name=member.name,
            capacity=resolve_effective_capacity(member.id, overrides_for_group, roster, fallback),
            default_capacity=member.capacity,
            workload=workload.effort_for(member.name),
            overridden=member.id in overrides_for_group,
        )
        for member in roster
    ]

    unrostered = [
        WorkloadRow(
            name=assignee,
            capacity=fallback,
            default_capacity=fallback,
            workload=effort,
        )
        for assignee, effort in workload.items()
        if roster.find_by_name(assignee) is None
    ]

    return WorkloadView(group_id=group_id, rows=rows, unrostered=unrostered)
