"""
Core records for the Workload Aggregation Engine.

All records are immutable snapshots. The engine reads them and returns new
derived values; it never mutates a Task, Group, Member or override mapping.
"""

from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Dict, Iterable, Iterator, List, NewType, Optional

from .errors import NotFoundError, ValidationError

GroupId = NewType("GroupId", str)
MemberId = NewType("MemberId", str)
TaskId = NewType("TaskId", str)

# The only status value with special meaning
DONE_STATUS = "Done"

# Used when a member has neither an override nor a roster entry
FALLBACK_CAPACITY = 40.0


class MemberRole(str, Enum):
    """Roster roles."""
    ADMIN = "admin"
    USER = "user"


@dataclass(frozen=True)
class Task:
    """A board item or subitem with its effort estimate in hours."""
    id: TaskId
    name: str
    assignee: str
    effort: float
    status: str
    group_id: GroupId
    is_subitem: bool = False
    parent_id: Optional[TaskId] = None
    due_date: Optional[str] = None
    effort_provided: bool = True

    @property
    def is_done(self) -> bool:
        return self.status == DONE_STATUS

    @property
    def has_assignee(self) -> bool:
        return bool(self.assignee and self.assignee.strip())


@dataclass(frozen=True)
class Group:
    """A sprint/iteration on the board."""
    id: GroupId
    title: str


@dataclass(frozen=True)
class Member:
    """A roster entry with its default weekly capacity."""
    id: MemberId
    name: str
    capacity: float = FALLBACK_CAPACITY
    email: Optional[str] = None
    role: MemberRole = MemberRole.USER


@dataclass(frozen=True)
class OverrideKey:
    """Compound key of a capacity override: one value per (group, member)."""
    group_id: GroupId
    member_id: MemberId


class Roster:
    """
    Lookup table over the team roster.

    Members are addressed by their ``MemberId``; board assignees, which only
    carry a display name, are resolved through ``find_by_name``.
    """

    def __init__(self, members: Iterable[Member] = ()):
        self._members: List[Member] = []
        self._by_id: Dict[MemberId, Member] = {}
        self._by_name: Dict[str, Member] = {}

        for member in members:
            if member.id in self._by_id:
                raise ValidationError(f"Duplicate member id '{member.id}'", field="id")
            if member.name in self._by_name:
                raise ValidationError(f"Duplicate member name '{member.name}'", field="name")
            self._members.append(member)
            self._by_id[member.id] = member
            self._by_name[member.name] = member

    def __iter__(self) -> Iterator[Member]:
        return iter(self._members)

    def __len__(self) -> int:
        return len(self._members)

    def __contains__(self, member_id: object) -> bool:
        return member_id in self._by_id

    def get(self, member_id: MemberId) -> Optional[Member]:
        return self._by_id.get(member_id)

    def find_by_name(self, name: str) -> Optional[Member]:
        return self._by_name.get(name)

    def require(self, member_id: MemberId) -> Member:
        """Get a member or raise NotFoundError."""
        member = self._by_id.get(member_id)
        if member is None:
            raise NotFoundError("Member", member_id)
        return member


class WorkloadResult(Mapping):
    """
    Committed effort per assignee name for one evaluation.

    Members without chargeable effort are absent from the mapping;
    ``effort_for`` makes the "absent means zero" rule explicit.
    """

    def __init__(self, efforts: Optional[Dict[str, float]] = None):
        self._efforts = MappingProxyType(dict(efforts or {}))

    def __getitem__(self, name: str) -> float:
        return self._efforts[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._efforts)

    def __len__(self) -> int:
        return len(self._efforts)

    def __repr__(self) -> str:
        return f"WorkloadResult({dict(self._efforts)!r})"

    def effort_for(self, name: str) -> float:
        return self._efforts.get(name, 0.0)

    @property
    def total(self) -> float:
        return sum(self._efforts.values())

    def as_dict(self) -> Dict[str, float]:
        return dict(self._efforts)
