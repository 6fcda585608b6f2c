from abc import ABC, abstractmethod
from typing import Generic, TypeVar, Optional, List, Dict, Any, Type
from sqlalchemy import select
from sqlalchemy.orm import Session

from workloadhub.storage.models import Base

ModelT = TypeVar("ModelT", bound=Base)

class BaseRepository(Generic[ModelT], ABC):
    """
    CRUD over one table keyed by a string primary key.

    Subclasses set ``model`` and ``order_by``; every call runs inside the
    caller's session and only flushes.
    """

    model: Type[ModelT]
    order_by: str = "id"

    @abstractmethod
    def create(self, session: Session, entity: ModelT) -> ModelT:
        pass

    @abstractmethod
    def update(self, session: Session, id: str, updates: Dict[str, Any]) -> Optional[ModelT]:
        pass

    def get(self, session: Session, id: str) -> Optional[ModelT]:
        return session.get(self.model, id)

    def delete(self, session: Session, id: str) -> bool:
        entity = self.get(session, id)
        if entity is None:
            return False
        session.delete(entity)
        session.flush()
        return True

    def list(self, session: Session, limit: Optional[int] = None, offset: int = 0) -> List[ModelT]:
        stmt = select(self.model).order_by(getattr(self.model, self.order_by)).offset(offset)
        if limit is not None:
            stmt = stmt.limit(limit)
        return list(session.scalars(stmt).all())
