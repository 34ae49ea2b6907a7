"""Per-week metric series and member leaderboards."""

import logging
from collections.abc import Iterable, Mapping, Sequence
from datetime import date
from typing import Any

from clanboard.config import MetricsConfig, StoreConfig
from clanboard.exceptions import InvalidArgumentError, NotFoundError
from clanboard.models import (
    AggregationPolicy,
    LeaderboardRow,
    MemberSnapshot,
    MetricKind,
    MetricSeries,
    SeriesChart,
    Season,
    WeekBoundary,
    snapshots_from_date_keys,
)
from clanboard.models.coercion import to_date
from clanboard.services.seasons import SeasonService, week_labels
from clanboard.storage import DocumentStore

logger = logging.getLogger(__name__)


def aggregate(values: Sequence[int | float], policy: AggregationPolicy) -> int | float:
    """Collapse member values for one week; an empty week is 0."""
    if policy == "sum":
        return sum(values)
    if policy == "max":
        return max(values, default=0)
    if policy == "count":
        return sum(1 for value in values if value > 0)
    raise InvalidArgumentError(f"Unknown aggregation policy '{policy}'")


def bucket_by_week(
    weeks: Sequence[WeekBoundary],
    snapshots: Iterable[MemberSnapshot],
) -> list[list[MemberSnapshot]]:
    """Group snapshots under the week whose range holds their date.

    Snapshots without a date, or outside every week, are dropped.
    """
    buckets: list[list[MemberSnapshot]] = [[] for _ in weeks]
    for snapshot in snapshots:
        if snapshot.snapshot_date is None:
            continue
        for index, week in enumerate(weeks):
            if week.contains(snapshot.snapshot_date):
                buckets[index].append(snapshot)
                break
    return buckets


def filter_home_server(
    snapshots: Iterable[MemberSnapshot], home_server: int | None
) -> list[MemberSnapshot]:
    if home_server is None:
        return list(snapshots)
    return [snapshot for snapshot in snapshots if snapshot.home_server == home_server]


def build_series(
    kind: MetricKind,
    weeks: Sequence[WeekBoundary],
    snapshots: Iterable[MemberSnapshot],
    policy: AggregationPolicy = "sum",
) -> SeriesChart:
    """Chart data with exactly one point per week, aligned with the categories.

    A season without weeks has no categories and no series at all.
    """
    if not weeks:
        return SeriesChart(categories=[], series=[])

    buckets = bucket_by_week(weeks, snapshots)
    data = [
        aggregate([snapshot.value(kind.field) for snapshot in bucket], policy)
        for bucket in buckets
    ]
    return SeriesChart(
        categories=week_labels(weeks),
        series=[MetricSeries(name=kind.label, data=data)],
    )


def build_leaderboard(
    kind: MetricKind,
    start_snapshots: Iterable[MemberSnapshot],
    end_snapshots: Iterable[MemberSnapshot] | None = None,
) -> list[LeaderboardRow]:
    """Rank members by metric value, or by end-minus-start when comparing two weeks."""
    start_by_member = {snapshot.member_id: snapshot for snapshot in start_snapshots}

    entries: list[tuple[MemberSnapshot, int | float]] = []
    if end_snapshots is None:
        entries = [(snapshot, snapshot.value(kind.field)) for snapshot in start_by_member.values()]
    else:
        for snapshot in end_snapshots:
            start = start_by_member.get(snapshot.member_id)
            if start is None:
                continue
            entries.append((snapshot, snapshot.value(kind.field) - start.value(kind.field)))

    entries.sort(key=lambda entry: (-entry[1], entry[0].member_id))

    return [
        LeaderboardRow(
            id=snapshot.member_id,
            rank=rank,
            name=snapshot.name,
            value=value,
            highestPower=snapshot.highest_power,
            currentPower=snapshot.current_power,
        )
        for rank, (snapshot, value) in enumerate(entries, 1)
    ]


class MetricService:
    """Loads season snapshots and turns them into chart-ready data."""

    def __init__(
        self,
        store: DocumentStore,
        store_config: StoreConfig,
        metrics_config: MetricsConfig,
    ):
        self.store = store
        self.collection = store_config.snapshots_collection
        self.metrics_config = metrics_config
        self.seasons = SeasonService(store, store_config)

    async def load_snapshots(
        self, season: Season, record: Mapping[str, Any] | None = None
    ) -> list[MemberSnapshot]:
        """Week stats from the season document itself plus the snapshots collection.

        Snapshot documents may be tagged with the season name or the season's
        document id. A snapshot document replaces embedded stats for the same
        member and date.
        """
        by_member_date: dict[tuple, MemberSnapshot] = {}
        for snapshot in snapshots_from_date_keys(season.name, record):
            by_member_date[(snapshot.member_id, snapshot.snapshot_date)] = snapshot

        seen: set[str] = set()
        for name in dict.fromkeys(name for name in (season.name, season.doc_id) if name):
            for doc_id, snapshot_record in await self.store.scan(self.collection, {"season_name": name}):
                if doc_id in seen:
                    continue
                seen.add(doc_id)
                snapshot = MemberSnapshot.from_record(doc_id, snapshot_record)
                by_member_date[(snapshot.member_id, snapshot.snapshot_date)] = snapshot

        return filter_home_server(by_member_date.values(), self.metrics_config.home_server)

    async def _load_season(self, season_name: str) -> tuple[Season, list[MemberSnapshot]]:
        doc_id, record = await self.seasons.get_season_record(season_name)
        season = Season.from_record(doc_id, record)
        return season, await self.load_snapshots(season, record)

    async def get_series(self, kind: MetricKind, season_name: str) -> SeriesChart:
        season, snapshots = await self._load_season(season_name)
        policy = self.metrics_config.policy_for(kind)

        chart = build_series(kind, season.weeks, snapshots, policy)
        logger.debug(
            f"Built {kind.value} series for {season.name}: "
            f"{len(season.weeks)} weeks from {len(snapshots)} snapshots ({policy})"
        )
        return chart

    async def get_leaderboard(
        self,
        kind: MetricKind,
        season_name: str,
        start_date: str,
        end_date: str | None = None,
    ) -> list[LeaderboardRow]:
        _, snapshots = await self._load_season(season_name)
        start = _parse_week_date(start_date, "start_date")
        end = _parse_week_date(end_date, "end_date") if end_date else None

        start_snapshots = _snapshots_on(snapshots, start)
        if not start_snapshots:
            raise NotFoundError(f"No data found for date: {start.isoformat()}")

        end_snapshots = None
        if end is not None:
            end_snapshots = _snapshots_on(snapshots, end)
            if not end_snapshots:
                raise NotFoundError(f"No data found for date: {end.isoformat()}")

        return build_leaderboard(kind, start_snapshots, end_snapshots)


def _parse_week_date(value: str, parameter: str) -> date:
    parsed = to_date(value) if value and len(value.strip()) == 10 else None
    if parsed is None:
        raise InvalidArgumentError(f"Invalid {parameter} format. Please use YYYY-MM-DD")
    return parsed


def _snapshots_on(snapshots: Sequence[MemberSnapshot], day: date) -> list[MemberSnapshot]:
    return [snapshot for snapshot in snapshots if snapshot.snapshot_date == day]
