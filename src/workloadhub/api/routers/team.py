"""
Router for team roster endpoints.
"""

from typing import Annotated, List

from fastapi import APIRouter, Depends, Path

from workloadhub.api import schemas
from workloadhub.api.dependencies import get_roster_service
from workloadhub.api.errors import to_http_exception
from workloadhub.engine.errors import WorkloadError
from workloadhub.engine.models import Member, MemberId
from workloadhub.engine.roster import RosterService
from workloadhub.platform.logging import get_logger

logger = get_logger(__name__)

router = APIRouter()


def _roster_response(members: List[Member]) -> List[schemas.MemberResponse]:
    return [
        schemas.MemberResponse(
            id=m.id, name=m.name, email=m.email, capacity=m.capacity, role=m.role.value,
        )
        for m in members
    ]


@router.get("/", response_model=List[schemas.MemberResponse])
async def list_team(
    service: Annotated[RosterService, Depends(get_roster_service)],
):
    """
    List all team members with their default capacity.
    """
    try:
        return _roster_response(service.list_members())
    except WorkloadError as e:
        logger.error("Failed to read team", error=str(e))
        raise to_http_exception(e)


@router.post("/", response_model=List[schemas.MemberResponse])
async def upsert_member(
    member: schemas.MemberUpsert,
    service: Annotated[RosterService, Depends(get_roster_service)],
):
    """
    Add a team member, or update the member with the same name.

    Returns the full roster.
    """
    try:
        service.upsert_member(
            name=member.name,
            email=member.email,
            capacity=member.capacity,
            role=member.role,
        )
        return _roster_response(service.list_members())
    except WorkloadError as e:
        logger.warning("Failed to upsert team member", name=member.name, error=str(e))
        raise to_http_exception(e)


@router.delete("/{member_id}", response_model=List[schemas.MemberResponse])
async def delete_member(
    member_id: Annotated[str, Path(...)],
    service: Annotated[RosterService, Depends(get_roster_service)],
):
    """
    Delete a team member and their capacity overrides.

    Returns the full roster.
    """
    try:
        service.delete_member(MemberId(member_id))
        return _roster_response(service.list_members())
    except WorkloadError as e:
        logger.warning("Failed to delete team member", member_id=member_id, error=str(e))
        raise to_http_exception(e)
