"""Unit tests for season parsing, current-season policy and week labels."""

import asyncio
from datetime import date

import pytest

from clanboard.config import StoreConfig
from clanboard.exceptions import NotFoundError
from clanboard.models import Season, WeekBoundary, snapshots_from_date_keys
from clanboard.services.seasons import SeasonService, pick_current_season, week_labels
from clanboard.storage import MemoryDocumentStore


def test_weeks_list_is_sorted_chronologically() -> None:
    season = Season.from_record(
        "S1",
        {
            "weeks": [
                {"start": "2024-01-08", "end": "2024-01-14"},
                {"start": "2024-01-01"},
                {"end": "2024-01-20"},
                "garbage",
            ]
        },
    )

    assert [week.start for week in season.weeks] == [date(2024, 1, 1), date(2024, 1, 8)]
    assert season.weeks[0].end == date(2024, 1, 7)


def test_legacy_date_keys_become_weeks() -> None:
    season = Season.from_record(
        "S0",
        {"2023-10-09": {}, "2023-10-02": {}, "season_end": "2023-11-01", "notes": "x"},
    )

    assert season.name == "S0"
    assert season.weeks == [
        WeekBoundary(start=date(2023, 10, 2), end=date(2023, 10, 8)),
        WeekBoundary(start=date(2023, 10, 9), end=date(2023, 10, 15)),
    ]
    assert season.season_end == date(2023, 11, 1)


def test_week_labels_format() -> None:
    weeks = [
        WeekBoundary(start=date(2024, 1, 1), end=date(2024, 1, 7)),
        WeekBoundary(start=date(2024, 1, 8), end=date(2024, 1, 14)),
    ]

    assert week_labels(weeks) == ["Week 1 (2024-01-01)", "Week 2 (2024-01-08)"]


def test_current_season_prefers_flag() -> None:
    seasons = [
        Season(name="A", season_end=date(2024, 5, 1)),
        Season(name="B", current=True),
        Season(name="C", current=True),
    ]

    assert pick_current_season(seasons).name == "B"


def test_current_season_falls_back_to_latest_end() -> None:
    seasons = [
        Season(name="A", season_end=date(2024, 5, 1)),
        Season(name="B", season_end=date(2023, 5, 1)),
        Season(name="C"),
    ]

    assert pick_current_season(seasons).name == "A"


def test_current_season_falls_back_to_last_stored() -> None:
    seasons = [Season(name="A"), Season(name="B")]

    assert pick_current_season(seasons).name == "B"


def test_current_season_without_seasons() -> None:
    with pytest.raises(NotFoundError):
        pick_current_season([])


def test_season_service_lookups(seed_data) -> None:
    seasons = SeasonService(MemoryDocumentStore(seed_data), StoreConfig(backend="memory"))

    async def run() -> None:
        assert await seasons.season_names() == ["S0", "S1"]
        assert await seasons.current_season() == "S1"
        assert await seasons.names_and_current() == (["S0", "S1"], "S1")

        weeks = await seasons.resolve_weeks("S1")
        assert [week.start.isoformat() for week in weeks] == ["2024-01-01", "2024-01-08"]

    asyncio.run(run())


def test_season_service_finds_by_season_name_field() -> None:
    store = MemoryDocumentStore({"sheets": {"abc123": {"season_name": "Winter", "weeks": []}}})
    seasons = SeasonService(store, StoreConfig(backend="memory"))

    season = asyncio.run(seasons.get_season("Winter"))

    assert season.name == "Winter"
    assert season.weeks == []


def test_season_service_unknown_season(seed_data) -> None:
    seasons = SeasonService(MemoryDocumentStore(seed_data), StoreConfig(backend="memory"))

    with pytest.raises(NotFoundError):
        asyncio.run(seasons.resolve_weeks("S9"))


def test_names_and_current_without_seasons() -> None:
    seasons = SeasonService(MemoryDocumentStore(), StoreConfig(backend="memory"))

    assert asyncio.run(seasons.names_and_current()) == ([], None)


def test_snapshots_from_date_keys() -> None:
    record = {
        "season_name": "S0",
        "2023-10-02": {
            "m1": {"manaSpent": "1,200", "name": "Aria"},
            "total": {"manaSpent": 9999},
            "m2": "not stats",
        },
        "2023-10-09": ["not", "a", "mapping"],
        "weeks": [],
    }

    snapshots = snapshots_from_date_keys("S0", record)

    assert len(snapshots) == 1
    assert snapshots[0].member_id == "m1"
    assert snapshots[0].season_name == "S0"
    assert snapshots[0].snapshot_date == date(2023, 10, 2)
    assert snapshots[0].value("manaSpent") == 1200
    assert snapshots_from_date_keys("S0", None) == []


def test_season_keeps_document_id() -> None:
    season = Season.from_record("kvk-7", {"season_name": "Season 7"})

    assert season.name == "Season 7"
    assert season.doc_id == "kvk-7"
