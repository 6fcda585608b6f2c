from typing import Optional, Dict, Any
from sqlalchemy.orm import Session
from sqlalchemy import select

from workloadhub.engine.models import Member, MemberId, MemberRole, Roster
from workloadhub.storage.models import TeamMemberModel
from .base import BaseRepository

class MemberRepository(BaseRepository[TeamMemberModel]):
    """Team roster persistence. Member names are unique."""

    model = TeamMemberModel
    order_by = "name"

    UPDATABLE_FIELDS = ("email", "capacity", "role")

    def create(self, session: Session, entity: TeamMemberModel) -> TeamMemberModel:
        session.add(entity)
        session.flush()
        return entity

    def get_by_name(self, session: Session, name: str) -> Optional[TeamMemberModel]:
        stmt = select(TeamMemberModel).where(TeamMemberModel.name == name)
        return session.scalars(stmt).first()

    def update(self, session: Session, id: str, updates: Dict[str, Any]) -> Optional[TeamMemberModel]:
        member = self.get(session, id)
        if not member:
            return None

        # None means "keep the stored value"
        for key in self.UPDATABLE_FIELDS:
            if updates.get(key) is not None:
                setattr(member, key, updates[key])

        session.flush()
        return member

    # --- Engine snapshot ---

    @staticmethod
    def to_member(model: TeamMemberModel) -> Member:
        return Member(
            id=MemberId(model.id),
            name=model.name,
            capacity=model.capacity,
            email=model.email,
            role=MemberRole(model.role),
        )

    def load_roster(self, session: Session) -> Roster:
        """Snapshot of the whole roster as an engine lookup table, ordered by name."""
        return Roster(self.to_member(m) for m in self.list(session))
