"""Metric Pydantic schemas."""

from pydantic import Field

from clanboard.models import LeaderboardRow
from clanboard.schemas.common import BaseSchema


class LeaderboardResponse(BaseSchema):
    """Ranked members for one week, or the change between two weeks."""

    season: str
    metric: str
    start_date: str = Field(alias="startDate")
    end_date: str | None = Field(default=None, alias="endDate")
    rows: list[LeaderboardRow] = Field(default_factory=list)
