"""Services module."""

from clanboard.services.metrics import MetricService, build_leaderboard, build_series
from clanboard.services.roster import RosterService, RosterSummary, project, summarize
from clanboard.services.schedule import ScheduleService, validate_events
from clanboard.services.seasons import SeasonService, pick_current_season, week_labels

__all__ = [
    "MetricService",
    "RosterService",
    "RosterSummary",
    "ScheduleService",
    "SeasonService",
    "build_leaderboard",
    "build_series",
    "pick_current_season",
    "project",
    "summarize",
    "validate_events",
    "week_labels",
]
