"""
Pytest configuration and shared fixtures.
"""

import os
import sys
import pytest

sys.path.append(os.path.join(os.getcwd(), "src"))

# Settings are read at import time, so the environment is prepared before any
# workloadhub module is imported.
os.environ.setdefault("APP_ENV", "test")
os.environ.setdefault("DEBUG", "true")
os.environ.setdefault("DATABASE_URL", "sqlite:///:memory:")
os.environ.setdefault("MONDAY_API_TOKEN", "test-token")
os.environ.setdefault("METRICS_ENABLED", "false")

from workloadhub.engine.overrides import OverrideService  # noqa: E402
from workloadhub.engine.roster import RosterService  # noqa: E402
from workloadhub.storage.postgres_adapter import PostgresAdapter, PostgresConfig  # noqa: E402
from workloadhub.storage.repositories.member_repository import MemberRepository  # noqa: E402
from workloadhub.storage.repositories.override_repository import OverrideRepository  # noqa: E402


@pytest.fixture
def db() -> PostgresAdapter:
    """A connected adapter over a private in-memory SQLite database."""
    adapter = PostgresAdapter(PostgresConfig(DATABASE_URL="sqlite:///:memory:"))
    adapter.connect()
    adapter.create_tables()
    yield adapter
    adapter.close()


@pytest.fixture
def roster_service(db: PostgresAdapter) -> RosterService:
    return RosterService(db=db, member_repo=MemberRepository(), override_repo=OverrideRepository())


@pytest.fixture
def override_service(db: PostgresAdapter) -> OverrideService:
    return OverrideService(db=db, override_repo=OverrideRepository(), member_repo=MemberRepository())
