"""
Task triage: tasks in a group that cannot be charged to anyone yet.

Buckets are mutually exclusive. An explicit 0-hour estimate counts as
provided effort.
"""

from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from .models import GroupId, Task
from .workload import filter_by_group


@dataclass
class TriageReport:
    """Tasks needing attention, by issue."""
    both: List[Task] = field(default_factory=list)
    unassigned: List[Task] = field(default_factory=list)
    missing_effort: List[Task] = field(default_factory=list)

    @property
    def total(self) -> int:
        return len(self.both) + len(self.unassigned) + len(self.missing_effort)


def triage_tasks(tasks: Sequence[Task], group_id: Optional[GroupId]) -> TriageReport:
    report = TriageReport()
    for task in filter_by_group(tasks, group_id):
        if not task.has_assignee and not task.effort_provided:
            report.both.append(task)
        elif not task.has_assignee:
            report.unassigned.append(task)
        elif not task.effort_provided:
            report.missing_effort.append(task)
    return report
