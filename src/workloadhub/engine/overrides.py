"""
Override Service - Set/Reset of sprint-local capacity overrides.

Per (group, member) an override is either absent (Default) or present with
a value (Overridden):

    Default    --set-->   Overridden
    Overridden --set-->   Overridden  (value replaced)
    Overridden --reset--> Default
    Default    --reset--> Default     (no-op)

Every mutation runs in its own transaction. The mapping handed back to the
caller is read inside the same transaction, so a failed read rolls the write
back and callers never see a value the store has not accepted. Mutations
touch exactly one group and never the roster.
"""

import logging
import math
from contextlib import contextmanager
from numbers import Real
from typing import Collection, Dict, Generator, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from workloadhub.platform.metrics import OVERRIDE_MUTATIONS
from workloadhub.storage.postgres_adapter import PostgresAdapter
from workloadhub.storage.repositories.member_repository import MemberRepository
from workloadhub.storage.repositories.override_repository import OverrideRepository

from .errors import NotFoundError, SourceUnavailable, ValidationError, WorkloadError
from .models import GroupId, MemberId, OverrideKey

logger = logging.getLogger(__name__)

STORE_NAME = "override store"


def validate_capacity(value: object) -> float:
    """Accept only finite positive numbers. Booleans are rejected."""
    if isinstance(value, bool) or not isinstance(value, Real):
        raise ValidationError("Capacity must be a number", field="capacity")
    value = float(value)
    if not math.isfinite(value) or value <= 0:
        raise ValidationError("Capacity must be a positive number", field="capacity")
    return value


class OverrideService:
    """Reads and mutates the per-group override mapping."""

    def __init__(
        self,
        db: PostgresAdapter,
        override_repo: OverrideRepository,
        member_repo: MemberRepository,
    ):
        self.db = db
        self.override_repo = override_repo
        self.member_repo = member_repo

    @contextmanager
    def _transaction(self) -> Generator[Session, None, None]:
        try:
            with self.db.get_session() as session:
                yield session
        except (SQLAlchemyError, ConnectionError) as e:
            logger.error(f"Override store call failed: {e}")
            raise SourceUnavailable(STORE_NAME, str(e)) from e

    def get_overrides(self, group_id: GroupId) -> Dict[MemberId, float]:
        """Current ``{member_id: capacity}`` mapping of one group."""
        with self._transaction() as session:
            return self.override_repo.for_group(session, group_id)

    def set_override(
        self,
        group_id: GroupId,
        member_id: MemberId,
        capacity: object,
        known_groups: Optional[Collection[GroupId]] = None,
    ) -> Dict[MemberId, float]:
        """
        Upsert the override of ``member_id`` in ``group_id``.

        Args:
            group_id: Group the override is scoped to
            member_id: Roster member to override
            capacity: New capacity in hours, must be positive
            known_groups: Group ids of the current board snapshot; when given,
                an unknown ``group_id`` is rejected

        Returns:
            The group's override mapping as committed

        Raises:
            ValidationError: capacity is not a positive number
            NotFoundError: unknown member, or group missing from ``known_groups``
            SourceUnavailable: the store failed; nothing was written
        """
        try:
            value = validate_capacity(capacity)
            if known_groups is not None and group_id not in known_groups:
                raise NotFoundError("Group", group_id)

            with self._transaction() as session:
                if self.member_repo.get(session, member_id) is None:
                    raise NotFoundError("Member", member_id)
                self.override_repo.upsert(session, OverrideKey(group_id, member_id), value)
                # Read back before commit so a failed read rolls the write back
                overrides = self.override_repo.for_group(session, group_id)
        except WorkloadError:
            OVERRIDE_MUTATIONS.labels(operation="set", outcome="rejected").inc()
            raise

        OVERRIDE_MUTATIONS.labels(operation="set", outcome="applied").inc()
        logger.info(f"Override set: group={group_id} member={member_id} capacity={value}")
        return overrides

    def reset_override(self, group_id: GroupId, member_id: MemberId) -> Dict[MemberId, float]:
        """
        Remove the override of ``member_id`` in ``group_id``.

        Resetting a pair that has no override is a no-op.
        """
        try:
            with self._transaction() as session:
                removed = self.override_repo.delete(session, OverrideKey(group_id, member_id))
                overrides = self.override_repo.for_group(session, group_id)
        except WorkloadError:
            OVERRIDE_MUTATIONS.labels(operation="reset", outcome="rejected").inc()
            raise

        OVERRIDE_MUTATIONS.labels(operation="reset", outcome="applied").inc()
        if removed:
            logger.info(f"Override reset: group={group_id} member={member_id}")
        else:
            logger.debug(f"No override to reset: group={group_id} member={member_id}")
        return overrides
