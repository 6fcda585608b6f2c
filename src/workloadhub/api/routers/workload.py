"""
Router for board groups and workload views.
"""

from typing import Annotated, List, Optional

from fastapi import APIRouter, Depends, Query

from workloadhub.api import schemas
from workloadhub.api.dependencies import get_view_service
from workloadhub.api.errors import to_http_exception
from workloadhub.engine.errors import WorkloadError
from workloadhub.engine.models import GroupId
from workloadhub.engine.view_service import WorkloadViewService
from workloadhub.platform.logging import get_logger

logger = get_logger(__name__)

router = APIRouter()


@router.get("/board/groups", response_model=List[schemas.GroupResponse])
async def list_groups(
    service: Annotated[WorkloadViewService, Depends(get_view_service)],
):
    """
    List the sprints/groups of the board.
    """
    try:
        groups = await service.list_groups()
    except WorkloadError as e:
        logger.error("Failed to fetch groups", error=str(e))
        raise to_http_exception(e)
    return [schemas.GroupResponse.model_validate(g) for g in groups]


@router.get("/workload", response_model=schemas.WorkloadViewResponse)
async def get_workload(
    service: Annotated[WorkloadViewService, Depends(get_view_service)],
    group_id: Optional[str] = Query(None, description="Sprint/group id; omit for the whole board"),
):
    """
    Committed effort against effective capacity per member.

    ``stale`` is true when the board was unavailable and the previous view of
    the group is returned unchanged.
    """
    try:
        view = await service.get_view(GroupId(group_id) if group_id else None)
    except WorkloadError as e:
        logger.error("Failed to compute workload", group_id=group_id, error=str(e))
        raise to_http_exception(e)
    return schemas.WorkloadViewResponse.model_validate(view)


@router.get("/workload/attention", response_model=schemas.TriageResponse)
async def get_tasks_needing_attention(
    service: Annotated[WorkloadViewService, Depends(get_view_service)],
    group_id: Optional[str] = Query(None, description="Sprint/group id; omit for the whole board"),
):
    """
    Tasks of a group that are missing an assignee, an effort value, or both.
    """
    try:
        report = await service.get_triage(GroupId(group_id) if group_id else None)
    except WorkloadError as e:
        logger.error("Failed to triage tasks", group_id=group_id, error=str(e))
        raise to_http_exception(e)

    return schemas.TriageResponse(
        group_id=group_id,
        total=report.total,
        both=[schemas.TaskResponse.model_validate(t) for t in report.both],
        unassigned=[schemas.TaskResponse.model_validate(t) for t in report.unassigned],
        missing_effort=[schemas.TaskResponse.model_validate(t) for t in report.missing_effort],
    )
