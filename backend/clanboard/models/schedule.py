"""Schedule events shown on the clan calendar."""

from datetime import date, datetime, time

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator, model_validator

from clanboard.models.coercion import to_date


class ScheduleEvent(BaseModel):
    """Validation shape for one calendar entry.

    Requires a ``title`` and a start, given either as ``datetime`` (or
    ``time``) or, for events saved by older dashboards, as ``date`` plus
    ``startTime``. Every other key (id, color, description) is allowed.
    """

    model_config = ConfigDict(
        extra="allow",
        populate_by_name=True,
        str_strip_whitespace=True,
    )

    title: str = Field(min_length=1)
    starts_at: datetime | None = Field(
        default=None, validation_alias=AliasChoices("datetime", "time")
    )
    event_date: date | None = Field(default=None, alias="date")
    start_time: time | None = Field(default=None, alias="startTime")

    @field_validator("event_date", mode="before")
    @classmethod
    def _date(cls, v):
        return to_date(v)

    @model_validator(mode="after")
    def require_start(self) -> "ScheduleEvent":
        if self.starts_at is None and (self.event_date is None or self.start_time is None):
            raise ValueError("datetime, or both date and startTime, is required")
        return self
