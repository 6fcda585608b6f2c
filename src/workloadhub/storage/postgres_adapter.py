from sqlalchemy import create_engine, text
from sqlalchemy.orm import sessionmaker, Session
from sqlalchemy.pool import StaticPool
from typing import Generator, Optional
from contextlib import contextmanager
import logging

from pydantic import SecretStr
from pydantic_settings import BaseSettings
from .base import StorageAdapter
from .models import Base

logger = logging.getLogger(__name__)

class PostgresConfig(BaseSettings):
    """Configuration for the roster/override database."""
    POSTGRES_USER: str = "postgres"
    POSTGRES_PASSWORD: SecretStr = "postgres"
    POSTGRES_HOST: str = "localhost"
    POSTGRES_PORT: int = 5432
    POSTGRES_DB: str = "workloadhub"
    POSTGRES_POOL_SIZE: int = 5
    POSTGRES_MAX_OVERFLOW: int = 10

    # Full SQLAlchemy URL; takes precedence over the POSTGRES_* parts (e.g. sqlite for local runs)
    DATABASE_URL: Optional[str] = None

    model_config = {"env_file": ".env", "extra": "ignore"}

    @property
    def connection_string(self) -> str:
        if self.DATABASE_URL:
            return self.DATABASE_URL
        return f"postgresql://{self.POSTGRES_USER}:{self.POSTGRES_PASSWORD.get_secret_value()}@{self.POSTGRES_HOST}:{self.POSTGRES_PORT}/{self.POSTGRES_DB}"

    @property
    def is_sqlite(self) -> bool:
        return self.connection_string.startswith("sqlite")

class PostgresAdapter(StorageAdapter):
    """
    SQLAlchemy-based adapter for the team roster and override store.
    """

    def __init__(self, config: PostgresConfig):
        self.config = config
        self._engine = None
        self._session_factory = None

    def connect(self) -> None:
        if self._engine:
            return

        try:
            if self.config.is_sqlite:
                logger.info("Connecting to SQLite database")
                self._engine = create_engine(
                    self.config.connection_string,
                    connect_args={"check_same_thread": False},
                    poolclass=StaticPool,
                )
            else:
                logger.info(f"Connecting to Postgres at {self.config.POSTGRES_HOST}:{self.config.POSTGRES_PORT}")
                self._engine = create_engine(
                    self.config.connection_string,
                    pool_size=self.config.POSTGRES_POOL_SIZE,
                    max_overflow=self.config.POSTGRES_MAX_OVERFLOW,
                    pool_pre_ping=True
                )

            self._session_factory = sessionmaker(bind=self._engine, expire_on_commit=False)
            logger.info("Database connection pool established.")

        except Exception as e:
            logger.error(f"Failed to connect to database: {e}")
            raise

    def create_tables(self) -> None:
        """Create roster and override tables if missing."""
        if not self._engine:
            raise ConnectionError("Database is not connected. Call connect() first.")
        Base.metadata.create_all(self._engine)

    def close(self) -> None:
        if self._engine:
            self._engine.dispose()
            self._engine = None
            self._session_factory = None
            logger.info("Database connection pool closed.")

    def health_check(self) -> bool:
        if not self._engine:
            return False
        try:
            with self._engine.connect() as conn:
                conn.execute(text("SELECT 1"))
            return True
        except Exception:
            logger.exception("database unhealthy")
            return False

    @contextmanager
    def get_session(self) -> Generator[Session, None, None]:
        """
        Provide a transactional scope around a series of operations.
        """
        if not self._session_factory:
            raise ConnectionError("Database is not connected. Call connect() first.")

        session = self._session_factory()
        try:
            yield session
            session.commit()
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()
