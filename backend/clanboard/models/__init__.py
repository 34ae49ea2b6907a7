"""Domain records built from raw store documents."""

from clanboard.models.member import MAIN_TROOP_TYPES, Member, MemberSnapshot
from clanboard.models.metrics import (
    AggregationPolicy,
    LeaderboardRow,
    MetricKind,
    MetricSeries,
    SeriesChart,
    parse_metric_kind,
)
from clanboard.models.schedule import ScheduleEvent
from clanboard.models.season import Season, WeekBoundary, snapshots_from_date_keys

__all__ = [
    "AggregationPolicy",
    "LeaderboardRow",
    "MAIN_TROOP_TYPES",
    "Member",
    "MemberSnapshot",
    "MetricKind",
    "MetricSeries",
    "ScheduleEvent",
    "Season",
    "SeriesChart",
    "WeekBoundary",
    "parse_metric_kind",
    "snapshots_from_date_keys",
]
