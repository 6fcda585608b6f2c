from typing import Annotated
from fastapi import Depends

from workloadhub.board.client import MondayBoardClient
from workloadhub.engine.overrides import OverrideService
from workloadhub.engine.roster import RosterService
from workloadhub.engine.view_service import WorkloadViewService
from workloadhub.storage.postgres_adapter import PostgresAdapter, PostgresConfig
from workloadhub.storage.repositories.member_repository import MemberRepository
from workloadhub.storage.repositories.override_repository import OverrideRepository

# Singletons
_postgres_adapter: PostgresAdapter | None = None
_board_client: MondayBoardClient | None = None
_view_service: WorkloadViewService | None = None


def get_postgres_adapter() -> PostgresAdapter:
    global _postgres_adapter
    if not _postgres_adapter:
        _postgres_adapter = PostgresAdapter(PostgresConfig())
    return _postgres_adapter


def get_board_client() -> MondayBoardClient:
    global _board_client
    if not _board_client:
        _board_client = MondayBoardClient()
    return _board_client


def get_roster_service() -> RosterService:
    return RosterService(
        db=get_postgres_adapter(),
        member_repo=MemberRepository(),
        override_repo=OverrideRepository(),
    )


def get_override_service() -> OverrideService:
    return OverrideService(
        db=get_postgres_adapter(),
        override_repo=OverrideRepository(),
        member_repo=MemberRepository(),
    )


def get_view_service(
    board: Annotated[MondayBoardClient, Depends(get_board_client)],
    roster_service: Annotated[RosterService, Depends(get_roster_service)],
    override_service: Annotated[OverrideService, Depends(get_override_service)],
) -> WorkloadViewService:
    # One instance for the process so the last good view per group survives requests
    global _view_service
    if not _view_service:
        _view_service = WorkloadViewService(board, roster_service, override_service)
    return _view_service


async def init_resources() -> None:
    """Connect the roster/override database and make sure its tables exist."""
    adapter = get_postgres_adapter()
    adapter.connect()
    adapter.create_tables()


async def close_resources() -> None:
    """Close all resources."""
    global _postgres_adapter, _board_client, _view_service

    if _postgres_adapter:
        _postgres_adapter.close()
    _postgres_adapter = None
    _board_client = None
    _view_service = None
