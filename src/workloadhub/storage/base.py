from abc import ABC, abstractmethod
from typing import ContextManager
from sqlalchemy.orm import Session

class StorageAdapter(ABC):
    """Backend holding the team roster and the capacity overrides."""

    @abstractmethod
    def connect(self) -> None:
        """Open the connection pool. Calling it twice is a no-op."""

    @abstractmethod
    def create_tables(self) -> None:
        """Create the roster and override tables when missing."""

    @abstractmethod
    def close(self) -> None:
        pass

    @abstractmethod
    def health_check(self) -> bool:
        """True when the backend answers a trivial query."""

    @abstractmethod
    def get_session(self) -> ContextManager[Session]:
        """One transaction: committed on normal exit, rolled back on error."""
