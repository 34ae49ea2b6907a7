"""Metric API routes."""

from fastapi import APIRouter, Depends, Query

from clanboard.api.auth import Principal, get_principal
from clanboard.api.dependencies import get_metric_service, get_season_service
from clanboard.models import MetricKind, SeriesChart, parse_metric_kind
from clanboard.schemas import LeaderboardResponse
from clanboard.services import MetricService, SeasonService

router = APIRouter(prefix="/metrics", tags=["Metrics"])


@router.get("/series", response_model=SeriesChart)
async def get_series(
    metric_type: str | None = None,
    season_name: str | None = None,
    metrics: MetricService = Depends(get_metric_service),
    seasons: SeasonService = Depends(get_season_service),
):
    """Get one point per season week for a metric."""
    kind = parse_metric_kind(metric_type)
    season = season_name or await seasons.current_season()
    return await metrics.get_series(kind, season)


@router.get("/mana-spent", response_model=SeriesChart)
async def get_mana_spent(
    season_name: str | None = None,
    metrics: MetricService = Depends(get_metric_service),
    seasons: SeasonService = Depends(get_season_service),
):
    """Get weekly mana spent for a season."""
    season = season_name or await seasons.current_season()
    return await metrics.get_series(MetricKind.MANA_SPENT, season)


@router.get("/leaderboard", response_model=LeaderboardResponse)
async def get_leaderboard(
    season_name: str = Query(..., min_length=1),
    metric_type: str | None = None,
    start_date: str = Query(..., min_length=1),
    end_date: str | None = None,
    principal: Principal = Depends(get_principal),
    metrics: MetricService = Depends(get_metric_service),
):
    """Rank members by a metric for one week, or by change between two weeks."""
    kind = parse_metric_kind(metric_type)
    rows = await metrics.get_leaderboard(kind, season_name, start_date, end_date)

    return LeaderboardResponse(
        season=season_name,
        metric=kind.value,
        start_date=start_date,
        end_date=end_date,
        rows=rows,
    )
