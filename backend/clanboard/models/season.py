"""Season definitions and their week boundaries."""

import logging
import re
from collections.abc import Mapping
from datetime import date, timedelta
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator

from clanboard.models.coercion import to_date, to_text
from clanboard.models.member import MemberSnapshot

logger = logging.getLogger(__name__)

# Legacy season documents keep one top-level key per uploaded week
DATE_KEY_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")
DEFAULT_WEEK_LENGTH = timedelta(days=7)


class WeekBoundary(BaseModel):
    """Inclusive calendar range of one season week."""

    model_config = ConfigDict(frozen=True)

    start: date
    end: date

    @model_validator(mode="after")
    def check_order(self) -> "WeekBoundary":
        if self.end < self.start:
            raise ValueError(f"week end {self.end} is before start {self.start}")
        return self

    def contains(self, day: date) -> bool:
        return self.start <= day <= self.end


class Season(BaseModel):
    """A named competitive period, with weeks sorted chronologically."""

    model_config = ConfigDict(frozen=True)

    name: str
    weeks: list[WeekBoundary] = Field(default_factory=list)
    current: bool = False
    season_end: date | None = None
    position: int = 0  # index in stored order
    doc_id: str | None = None

    @classmethod
    def from_record(cls, doc_id: str, record: Any, position: int = 0) -> "Season":
        """Build a season from a stored document.

        Weeks come from an explicit ``weeks`` list of ``{start, end}`` entries
        when present, otherwise from legacy ``YYYY-MM-DD`` top-level keys.
        """
        data = record if isinstance(record, Mapping) else {}
        name = to_text(data.get("season_name")) or str(doc_id)

        if isinstance(data.get("weeks"), list):
            weeks = _weeks_from_list(name, data["weeks"])
        else:
            weeks = _weeks_from_date_keys(data.keys())

        return cls(
            name=name,
            weeks=sorted(weeks, key=lambda week: week.start),
            current=data.get("current") is True,
            season_end=to_date(data.get("season_end")),
            position=position,
            doc_id=str(doc_id),
        )


def _weeks_from_list(season_name: str, entries: list) -> list[WeekBoundary]:
    weeks = []
    for index, entry in enumerate(entries):
        if not isinstance(entry, Mapping):
            logger.warning(f"Skipping malformed week {index} in season {season_name}")
            continue

        start = to_date(entry.get("start"))
        end = to_date(entry.get("end"))
        if start is None:
            logger.warning(f"Skipping week {index} without start in season {season_name}")
            continue
        if end is None:
            end = start + DEFAULT_WEEK_LENGTH - timedelta(days=1)
        if end < start:
            logger.warning(f"Skipping week {index} ending before it starts in season {season_name}")
            continue

        weeks.append(WeekBoundary(start=start, end=end))
    return weeks


def _weeks_from_date_keys(keys) -> list[WeekBoundary]:
    starts = sorted(
        day
        for day in (to_date(key) for key in keys if DATE_KEY_PATTERN.match(str(key)))
        if day is not None
    )

    weeks = []
    for index, start in enumerate(starts):
        if index + 1 < len(starts):
            end = starts[index + 1] - timedelta(days=1)
        else:
            end = start + DEFAULT_WEEK_LENGTH - timedelta(days=1)
        weeks.append(WeekBoundary(start=start, end=end))
    return weeks


def snapshots_from_date_keys(season_name: str, record: Any) -> list[MemberSnapshot]:
    """Member stats stored inside a season document under its week keys.

    Each ``YYYY-MM-DD`` key maps member ids to that week's stats; the
    ``total`` entry and non-object values are skipped.
    """
    if not isinstance(record, Mapping):
        return []

    snapshots = []
    for key, members in record.items():
        if not DATE_KEY_PATTERN.match(str(key)) or not isinstance(members, Mapping):
            continue
        for member_id, stats in members.items():
            if member_id == "total" or not isinstance(stats, Mapping):
                continue
            snapshots.append(
                MemberSnapshot.from_record(
                    str(member_id),
                    {**stats, "member_id": str(member_id), "date": key, "season_name": season_name},
                )
            )
    return snapshots
