"""Pydantic schemas for API request/response validation."""

from clanboard.schemas.common import BaseSchema, ErrorResponse
from clanboard.schemas.metrics import LeaderboardResponse
from clanboard.schemas.seasons import (
    ScheduleResponse,
    ScheduleUpdateRequest,
    ScheduleUpdateResponse,
    SeasonNamesResponse,
)
from clanboard.schemas.users import (
    MemberUpdateRequest,
    MemberUpdateResponse,
    RosterOverviewResponse,
)

__all__ = [
    "BaseSchema",
    "ErrorResponse",
    "LeaderboardResponse",
    "MemberUpdateRequest",
    "MemberUpdateResponse",
    "RosterOverviewResponse",
    "ScheduleResponse",
    "ScheduleUpdateRequest",
    "ScheduleUpdateResponse",
    "SeasonNamesResponse",
]
