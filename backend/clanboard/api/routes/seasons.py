"""Season and schedule API routes."""

from fastapi import APIRouter, Depends, Query

from clanboard.api.auth import Principal, get_principal
from clanboard.api.dependencies import get_schedule_service, get_season_service
from clanboard.models import parse_metric_kind
from clanboard.schemas import (
    ScheduleResponse,
    ScheduleUpdateRequest,
    ScheduleUpdateResponse,
    SeasonNamesResponse,
)
from clanboard.services import ScheduleService, SeasonService, week_labels

router = APIRouter(prefix="/season", tags=["Seasons"])


@router.get("/names", response_model=SeasonNamesResponse)
async def get_season_names(seasons: SeasonService = Depends(get_season_service)):
    """Get all season names and the current season."""
    names, current = await seasons.names_and_current()
    return SeasonNamesResponse(total_seasons=names, current_season=current)


@router.get("/dates", response_model=list[str])
async def get_season_dates(
    season_name: str = Query(..., min_length=1),
    metric_type: str | None = None,
    seasons: SeasonService = Depends(get_season_service),
):
    """Get the week labels of a season, earliest first."""
    if metric_type is not None:
        parse_metric_kind(metric_type)

    return week_labels(await seasons.resolve_weeks(season_name))


@router.get("/schedule", response_model=ScheduleResponse)
async def get_schedule(schedule: ScheduleService = Depends(get_schedule_service)):
    """Get the clan schedule."""
    return ScheduleResponse(**await schedule.get_schedule())


@router.post("/schedule", response_model=ScheduleUpdateResponse)
async def replace_schedule(
    request: ScheduleUpdateRequest,
    principal: Principal = Depends(get_principal),
    schedule: ScheduleService = Depends(get_schedule_service),
):
    """Replace the whole clan schedule."""
    updated_at = await schedule.replace_events(request.events, updated_by=principal.uid)

    return ScheduleUpdateResponse(
        message="Schedule updated successfully",
        events_count=len(request.events),
        updated_at=updated_at,
    )
