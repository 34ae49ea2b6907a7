"""Season and schedule Pydantic schemas."""

from typing import Any

from pydantic import Field

from clanboard.schemas.common import BaseSchema


class SeasonNamesResponse(BaseSchema):
    """Every stored season name plus the current one."""

    total_seasons: list[str] = Field(default_factory=list)
    current_season: str | None = None


class ScheduleResponse(BaseSchema):
    events: list[dict[str, Any]] = Field(default_factory=list)
    updated_at: str | None = Field(default=None, alias="updatedAt")
    updated_by: str | None = Field(default=None, alias="updatedBy")


class ScheduleUpdateRequest(BaseSchema):
    """Complete desired schedule; replaces the stored one."""

    events: list[Any] | None = None


class ScheduleUpdateResponse(BaseSchema):
    message: str
    events_count: int = Field(alias="eventsCount")
    updated_at: str = Field(alias="updatedAt")
