"""
Router for sprint-local capacity overrides.

All endpoints return the group's override mapping as stored after the
operation, so clients only apply what the store accepted.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Path

from workloadhub.api import schemas
from workloadhub.api.dependencies import get_board_client, get_override_service
from workloadhub.api.errors import to_http_exception
from workloadhub.board.client import MondayBoardClient
from workloadhub.engine.errors import WorkloadError
from workloadhub.engine.models import GroupId, MemberId
from workloadhub.engine.overrides import OverrideService
from workloadhub.platform.logging import get_logger

logger = get_logger(__name__)

router = APIRouter()


@router.get("/{group_id}", response_model=schemas.GroupOverridesResponse)
async def get_group_overrides(
    group_id: Annotated[str, Path(...)],
    service: Annotated[OverrideService, Depends(get_override_service)],
):
    """
    Get all capacity overrides of a sprint/group.
    """
    try:
        overrides = service.get_overrides(GroupId(group_id))
    except WorkloadError as e:
        logger.error("Failed to read overrides", group_id=group_id, error=str(e))
        raise to_http_exception(e)
    return schemas.GroupOverridesResponse(group_id=group_id, overrides=overrides)


@router.post("/{group_id}", response_model=schemas.GroupOverridesResponse)
async def set_group_override(
    group_id: Annotated[str, Path(...)],
    body: schemas.OverrideSet,
    service: Annotated[OverrideService, Depends(get_override_service)],
    board: Annotated[MondayBoardClient, Depends(get_board_client)],
):
    """
    Set or replace a member's capacity override in a sprint/group.

    The group must exist on the board and the member in the roster.
    """
    try:
        groups = await board.list_groups()
        overrides = service.set_override(
            GroupId(group_id),
            MemberId(body.member_id),
            body.capacity,
            known_groups={g.id for g in groups},
        )
    except WorkloadError as e:
        logger.warning(
            "Failed to set override",
            group_id=group_id, member_id=body.member_id, error=str(e),
        )
        raise to_http_exception(e)
    return schemas.GroupOverridesResponse(group_id=group_id, overrides=overrides)


@router.delete("/{group_id}/{member_id}", response_model=schemas.GroupOverridesResponse)
async def reset_group_override(
    group_id: Annotated[str, Path(...)],
    member_id: Annotated[str, Path(...)],
    service: Annotated[OverrideService, Depends(get_override_service)],
):
    """
    Reset a member back to their roster capacity in a sprint/group.

    Resetting a member without an override is a no-op.
    """
    try:
        overrides = service.reset_override(GroupId(group_id), MemberId(member_id))
    except WorkloadError as e:
        logger.warning(
            "Failed to reset override",
            group_id=group_id, member_id=member_id, error=str(e),
        )
        raise to_http_exception(e)
    return schemas.GroupOverridesResponse(group_id=group_id, overrides=overrides)
