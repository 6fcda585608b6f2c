"""
Roster Service - team member CRUD over the roster store.

Members are upserted by name; the generated id is the key every other
component uses.
"""

import logging
import math
import re
import uuid
from contextlib import contextmanager
from numbers import Real
from typing import Any, Dict, Generator, List, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from workloadhub.platform.config import settings
from workloadhub.storage.models import TeamMemberModel
from workloadhub.storage.postgres_adapter import PostgresAdapter
from workloadhub.storage.repositories.member_repository import MemberRepository
from workloadhub.storage.repositories.override_repository import OverrideRepository

from .errors import NotFoundError, SourceUnavailable, ValidationError
from .models import Member, MemberId, MemberRole, Roster

logger = logging.getLogger(__name__)

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


def validate_member_data(data: Dict[str, Any]) -> List[str]:
    """Return a list of problems with a member payload; empty when valid."""
    errors = []

    name = data.get("name")
    if not name or not str(name).strip():
        errors.append("Name is required")

    email = data.get("email")
    if email is not None and not EMAIL_PATTERN.match(email):
        errors.append("Valid email is required")

    capacity = data.get("capacity")
    if capacity is not None:
        if isinstance(capacity, bool) or not isinstance(capacity, Real) \
                or not math.isfinite(capacity) or capacity < 0:
            errors.append("Capacity must be a non-negative number")

    role = data.get("role")
    if role is not None and role not in {r.value for r in MemberRole}:
        errors.append("Invalid role specified")

    return errors


class RosterService:
    """Team roster operations. Reads return engine ``Member`` snapshots."""

    def __init__(
        self,
        db: PostgresAdapter,
        member_repo: MemberRepository,
        override_repo: OverrideRepository,
    ):
        self.db = db
        self.member_repo = member_repo
        self.override_repo = override_repo

    @contextmanager
    def _transaction(self) -> Generator[Session, None, None]:
        try:
            with self.db.get_session() as session:
                yield session
        except (SQLAlchemyError, ConnectionError) as e:
            logger.error(f"Roster store call failed: {e}")
            raise SourceUnavailable("roster store", str(e)) from e

    def load_roster(self) -> Roster:
        with self._transaction() as session:
            return self.member_repo.load_roster(session)

    def list_members(self) -> List[Member]:
        return list(self.load_roster())

    def upsert_member(
        self,
        name: str,
        email: Optional[str] = None,
        capacity: Optional[float] = None,
        role: Optional[str] = None,
    ) -> Member:
        """
        Create a member or update the one with the same name.

        New members get the configured default capacity when none is given.
        Fields passed as None keep their stored value on update.
        """
        payload = {"name": name, "email": email, "capacity": capacity, "role": role}
        errors = validate_member_data(payload)
        if errors:
            raise ValidationError(f"Validation failed: {', '.join(errors)}")

        name = name.strip()
        with self._transaction() as session:
            existing = self.member_repo.get_by_name(session, name)
            if existing:
                model = self.member_repo.update(
                    session, existing.id, {"email": email, "capacity": capacity, "role": role}
                )
                logger.info(f"Updated team member {name}")
            else:
                model = self.member_repo.create(session, TeamMemberModel(
                    id=str(uuid.uuid4()),
                    name=name,
                    email=email,
                    capacity=settings.DEFAULT_MEMBER_CAPACITY if capacity is None else capacity,
                    role=role or MemberRole.USER.value,
                ))
                logger.info(f"Added team member {name}")
            return self.member_repo.to_member(model)

    def delete_member(self, member_id: MemberId) -> None:
        """Delete a member together with their overrides in every group."""
        with self._transaction() as session:
            removed_overrides = self.override_repo.delete_for_member(session, member_id)
            if not self.member_repo.delete(session, member_id):
                raise NotFoundError("Member", member_id)
        logger.info(f"Deleted team member {member_id} and {removed_overrides} override(s)")
