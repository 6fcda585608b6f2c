from typing import Dict, Optional
import uuid

from sqlalchemy.orm import Session
from sqlalchemy import select, delete

from workloadhub.engine.models import GroupId, MemberId, OverrideKey
from workloadhub.storage.models import CapacityOverrideModel

class OverrideRepository:
    """
    Capacity override persistence, addressed by ``OverrideKey``.

    Reads come back as a two-level view: one ``{member_id: capacity}`` mapping
    per group.
    """

    def get(self, session: Session, key: OverrideKey) -> Optional[CapacityOverrideModel]:
        stmt = select(CapacityOverrideModel).where(
            CapacityOverrideModel.group_id == key.group_id,
            CapacityOverrideModel.member_id == key.member_id,
        )
        return session.scalars(stmt).first()

    def upsert(self, session: Session, key: OverrideKey, capacity: float) -> CapacityOverrideModel:
        existing = self.get(session, key)
        if existing:
            existing.capacity = capacity
            session.flush()
            return existing

        row = CapacityOverrideModel(
            id=str(uuid.uuid4()),
            group_id=key.group_id,
            member_id=key.member_id,
            capacity=capacity,
        )
        session.add(row)
        session.flush()
        return row

    def delete(self, session: Session, key: OverrideKey) -> bool:
        existing = self.get(session, key)
        if not existing:
            return False
        session.delete(existing)
        session.flush()
        return True

    def delete_for_member(self, session: Session, member_id: MemberId) -> int:
        """Remove a member's overrides in every group."""
        result = session.execute(
            delete(CapacityOverrideModel).where(CapacityOverrideModel.member_id == member_id)
        )
        session.flush()
        return result.rowcount or 0

    def for_group(self, session: Session, group_id: GroupId) -> Dict[MemberId, float]:
        stmt = select(CapacityOverrideModel).where(CapacityOverrideModel.group_id == group_id)
        return {
            MemberId(row.member_id): row.capacity
            for row in session.scalars(stmt).all()
        }
