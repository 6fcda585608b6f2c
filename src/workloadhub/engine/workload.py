"""
Workload Aggregation

Turns a board task snapshot into committed effort per assignee for one group.

Pipeline:
1. Group filter: keep the tasks of the selected group (identity when no
   group is selected)
2. Subitem dedup: drop a parent task when at least one of its subitems is
   in the filtered set, so effort broken out into subitems is not counted
   twice
3. Aggregation: sum effort per assignee, skipping tasks with status "Done"

Parent suppression only looks at the filtered set. A parent whose subitems
were tagged with another group keeps its full effort in its own group.

Usage:
    workload = compute_workload(tasks, selected_group_id="sprint_12")
    workload.effort_for("Alice")
"""

import logging
from typing import Dict, List, Optional, Sequence, Set

from .errors import ValidationError
from .models import GroupId, Task, TaskId, WorkloadResult

logger = logging.getLogger(__name__)


def filter_by_group(tasks: Sequence[Task], group_id: Optional[GroupId]) -> List[Task]:
    """Tasks belonging to ``group_id``, in source order. No selection keeps all tasks."""
    if not group_id:
        return list(tasks)
    return [task for task in tasks if task.group_id == group_id]


def _suppressed_parent_ids(tasks: Sequence[Task]) -> Set[TaskId]:
    parent_ids: Set[TaskId] = set()
    for task in tasks:
        if not task.is_subitem:
            continue
        if not task.parent_id:
            raise ValidationError(
                f"Subitem '{task.id}' has no parent_id", field="parent_id"
            )
        parent_ids.add(task.parent_id)
    return parent_ids


def chargeable_tasks(tasks: Sequence[Task]) -> List[Task]:
    """
    Apply the subitem dedup rule to an already group-filtered task list.

    Keeps every subitem, and every top-level task that has no subitem in
    ``tasks``. Applying it twice gives the same list.

    Raises:
        ValidationError: a subitem has no parent_id
    """
    parent_ids = _suppressed_parent_ids(tasks)
    return [
        task for task in tasks
        if task.is_subitem or task.id not in parent_ids
    ]


def aggregate_effort(tasks: Sequence[Task]) -> WorkloadResult:
    """
    Sum effort per assignee over chargeable tasks.

    Only the exact status "Done" is excluded. Assignees with nothing left
    to charge do not appear in the result.
    """
    efforts: Dict[str, float] = {}
    for task in tasks:
        if task.is_done:
            continue
        if task.effort < 0:
            raise ValidationError(
                f"Task '{task.id}' has negative effort {task.effort}", field="effort"
            )
        efforts[task.assignee] = efforts.get(task.assignee, 0.0) + task.effort
    return WorkloadResult(efforts)


def compute_workload(
    tasks: Sequence[Task],
    selected_group_id: Optional[GroupId] = None,
) -> WorkloadResult:
    """Committed effort per assignee for the selected group."""
    in_group = filter_by_group(tasks, selected_group_id)
    chargeable = chargeable_tasks(in_group)
    result = aggregate_effort(chargeable)

    logger.debug(
        "Computed workload for group %s: %d of %d tasks chargeable, %.1f hours",
        selected_group_id or "<all>", len(chargeable), len(in_group), result.total,
    )
    return result
