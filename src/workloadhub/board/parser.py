"""
monday.com item parsing.

Turns raw ``items_page`` items (with their ``subitems``) into engine Tasks.

An item whose subitems carry effort and an assignee is broken out into those
subitems and the item itself is not emitted; otherwise the item stands for
its own effort. Subitems take their own group when it is a board group and
fall back to the parent item's group.
"""

import re
from dataclasses import dataclass
from typing import Any, Collection, Dict, List, Optional

from workloadhub.engine.models import GroupId, Task, TaskId
from workloadhub.platform.config import Settings, settings

# Numeric prefix of a column text, e.g. "7.5" in "7.5 hours"
LEADING_NUMBER = re.compile(r"\s*[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?")


@dataclass(frozen=True)
class BoardColumns:
    """Column ids of the fields read from the board."""
    item_effort: str = "numeric_mksee97s"
    subitem_effort: str = "numeric_mksezpbh"
    assignee: str = "person"
    status: str = "status"
    item_due_date: str = "date4"
    # Subitem date columns are matched by prefix
    subitem_due_date_prefix: str = "date"

    @classmethod
    def from_settings(cls, config: Settings = settings) -> "BoardColumns":
        return cls(
            item_effort=config.MONDAY_ITEM_EFFORT_COLUMN,
            subitem_effort=config.MONDAY_SUBITEM_EFFORT_COLUMN,
            assignee=config.MONDAY_ASSIGNEE_COLUMN,
            status=config.MONDAY_STATUS_COLUMN,
            item_due_date=config.MONDAY_DUE_DATE_COLUMN,
        )


def _parse_effort(text: Optional[str]) -> tuple[float, bool]:
    """
    (effort, provided). The leading number counts, so "5 h" is 5 hours; text
    without one means no effort was provided.
    """
    match = LEADING_NUMBER.match(text or "")
    if not match:
        return 0.0, False
    return float(match.group(0)), True


def _column_texts(record: Dict[str, Any]) -> Dict[str, str]:
    return {
        col["id"]: col.get("text") or ""
        for col in record.get("column_values") or []
    }


def _group_of(record: Dict[str, Any]) -> str:
    return (record.get("group") or {}).get("id") or ""


def _to_task(
    record: Dict[str, Any],
    effort_column: str,
    due_date: str,
    columns: BoardColumns,
    group_id: str,
    parent_id: Optional[str] = None,
) -> Task:
    texts = _column_texts(record)
    effort, provided = _parse_effort(texts.get(effort_column))
    return Task(
        id=TaskId(str(record["id"])),
        name=record.get("name") or "",
        assignee=texts.get(columns.assignee, ""),
        effort=effort,
        status=texts.get(columns.status, ""),
        group_id=GroupId(group_id),
        is_subitem=parent_id is not None,
        parent_id=TaskId(parent_id) if parent_id is not None else None,
        due_date=due_date or None,
        effort_provided=provided,
    )


def _is_chargeable(task: Task) -> bool:
    return task.effort > 0 and task.has_assignee


def parse_board_items(
    items: List[Dict[str, Any]],
    valid_group_ids: Optional[Collection[str]] = None,
    columns: Optional[BoardColumns] = None,
    chargeable_only: bool = True,
) -> List[Task]:
    """
    Convert board items to Tasks.

    Args:
        items: Raw items, each with ``column_values`` and ``subitems``
        valid_group_ids: Board group ids; a subitem group outside this set is
            replaced by the parent's group. None skips the check.
        columns: Column ids, defaults to the configured board columns
        chargeable_only: Emit only records with positive effort and an
            assignee. False keeps incomplete records for triage.
    """
    columns = columns or BoardColumns.from_settings()
    tasks: List[Task] = []

    for item in items:
        item_group = _group_of(item)

        subitems = []
        for sub in item.get("subitems") or []:
            group_id = _group_of(sub) or item_group
            if valid_group_ids is not None and group_id not in valid_group_ids:
                group_id = item_group
            due_date = next(
                (text for col_id, text in _column_texts(sub).items()
                 if col_id.startswith(columns.subitem_due_date_prefix) and text),
                "",
            )
            subitems.append(_to_task(
                sub, columns.subitem_effort, due_date, columns, group_id,
                parent_id=str(item["id"]),
            ))

        valid_subitems = [s for s in subitems if _is_chargeable(s)]
        if valid_subitems:
            tasks.extend(valid_subitems if chargeable_only else subitems)
            continue

        item_due = _column_texts(item).get(columns.item_due_date, "")
        task = _to_task(item, columns.item_effort, item_due, columns, item_group)
        if not chargeable_only or _is_chargeable(task):
            tasks.append(task)

    return tasks
