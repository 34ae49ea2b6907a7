"""Roster API routes."""

import logging

from fastapi import APIRouter, Depends

from clanboard.api.auth import Principal, get_principal
from clanboard.api.dependencies import get_roster_service
from clanboard.models import Member
from clanboard.schemas import MemberUpdateRequest, MemberUpdateResponse, RosterOverviewResponse
from clanboard.services import RosterService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/user", tags=["Users"])


@router.get("/all", response_model=dict[str, Member])
async def get_all_members(
    principal: Principal = Depends(get_principal),
    roster: RosterService = Depends(get_roster_service),
):
    """Get every member keyed by member id."""
    return await roster.get_members()


@router.get("/overview", response_model=RosterOverviewResponse)
async def get_overview(roster: RosterService = Depends(get_roster_service)):
    """Get member counts by nationality and main troop type."""
    summary = await roster.get_overview()

    return RosterOverviewResponse(
        total_users=summary.total_count,
        main_troops=summary.counts_by_field.get("mainTroops", {}),
        nationality=summary.counts_by_field.get("nationality", {}),
    )


@router.put("/edit", response_model=MemberUpdateResponse)
async def edit_member(
    request: MemberUpdateRequest,
    principal: Principal = Depends(get_principal),
    roster: RosterService = Depends(get_roster_service),
):
    """Update a member's profile fields."""
    updated_fields, member = await roster.update_member(request.uid, request.updates())
    logger.info(f"Member {request.uid} updated by {principal.email or principal.uid}")

    return MemberUpdateResponse(
        message="User updated successfully",
        uid=request.uid,
        updated_fields=updated_fields,
        updated_by=principal.uid,
        data=member,
    )
