"""
Capacity override resolution.

Precedence is strict: group override > roster default > fallback constant.
An override wins even when it equals the roster default.
"""

from typing import Dict, Mapping

from .models import FALLBACK_CAPACITY, MemberId, Roster

GroupOverrides = Mapping[MemberId, float]


def resolve_effective_capacity(
    member_id: MemberId,
    overrides_for_group: GroupOverrides,
    roster: Roster,
    fallback: float = FALLBACK_CAPACITY,
) -> float:
    """Capacity used for ``member_id`` in the group whose overrides are given."""
    if member_id in overrides_for_group:
        return overrides_for_group[member_id]

    member = roster.get(member_id)
    if member is not None:
        return member.capacity

    return fallback


def effective_capacities(
    roster: Roster,
    overrides_for_group: GroupOverrides,
    fallback: float = FALLBACK_CAPACITY,
) -> Dict[MemberId, float]:
    """Effective capacity of every roster member for one group."""
    return {
        member.id: resolve_effective_capacity(member.id, overrides_for_group, roster, fallback)
        for member in roster
    }
