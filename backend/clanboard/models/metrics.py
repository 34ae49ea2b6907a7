"""Metric kinds and chart/leaderboard output shapes."""

from enum import Enum
from typing import Literal

from pydantic import BaseModel, Field

from clanboard.exceptions import InvalidArgumentError

AggregationPolicy = Literal["sum", "max", "count"]


class MetricKind(str, Enum):
    """Tracked per-week statistics."""

    MANA_SPENT = "MANA_SPENT"
    KILLS = "KILLS"
    DEADS = "DEADS"
    MERITS = "MERITS"

    @property
    def field(self) -> str:
        """Snapshot key holding the value for this metric."""
        return _METRIC_FIELDS[self]

    @property
    def label(self) -> str:
        """Series name shown by the chart."""
        return _METRIC_LABELS[self]


_METRIC_FIELDS = {
    MetricKind.MANA_SPENT: "manaSpent",
    MetricKind.KILLS: "unitsKilled",
    MetricKind.DEADS: "unitsDead",
    MetricKind.MERITS: "merits",
}

_METRIC_LABELS = {
    MetricKind.MANA_SPENT: "Mana Spent",
    MetricKind.KILLS: "Units Killed",
    MetricKind.DEADS: "Units Dead",
    MetricKind.MERITS: "Merits",
}

# Names used by the dashboard tabs before the enum was shortened
_ALIASES = {
    "UNITS_KILLED": MetricKind.KILLS,
    "UNITS_DEAD": MetricKind.DEADS,
}


def parse_metric_kind(value: str | None) -> MetricKind:
    """Parse a metric kind from a query parameter, case-insensitively."""
    if value is None or not str(value).strip():
        raise InvalidArgumentError("Missing required parameter: metric_type")

    key = str(value).strip().upper().replace("-", "_")
    if key in _ALIASES:
        return _ALIASES[key]
    try:
        return MetricKind(key)
    except ValueError:
        allowed = ", ".join(kind.value for kind in MetricKind)
        raise InvalidArgumentError(
            f"Unknown metric_type '{value}'. Must be one of: {allowed}"
        ) from None


class MetricSeries(BaseModel):
    """One named line/bar series, aligned by index with the categories."""

    name: str
    data: list[float | int] = Field(default_factory=list)


class SeriesChart(BaseModel):
    """Chart-ready week series for one season."""

    categories: list[str] = Field(default_factory=list)
    series: list[MetricSeries] = Field(default_factory=list)


class LeaderboardRow(BaseModel):
    """Ranked member value for a single week or a week-to-week delta."""

    id: str
    rank: int
    name: str | None = None
    value: float | int
    highestPower: int | None = None
    currentPower: int | None = None
