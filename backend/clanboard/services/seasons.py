"""Season lookup and week resolution."""

import logging
from collections.abc import Sequence

from clanboard.config import StoreConfig
from clanboard.exceptions import NotFoundError
from clanboard.models import Season, WeekBoundary
from clanboard.storage import DocumentStore, Record

logger = logging.getLogger(__name__)


def pick_current_season(seasons: Sequence[Season]) -> Season:
    """Choose the current season deterministically.

    1. the first season (stored order) flagged ``current``
    2. otherwise the season with the latest ``season_end``
    3. otherwise the last season in stored order
    """
    if not seasons:
        raise NotFoundError("No seasons defined")

    for season in seasons:
        if season.current:
            return season

    ended = [season for season in seasons if season.season_end is not None]
    if ended:
        # max() keeps the first of equal dates, i.e. the earliest stored
        return max(ended, key=lambda season: season.season_end)

    return seasons[-1]


def week_label(index: int, week: WeekBoundary) -> str:
    """Chart category for the week at 0-based ``index``."""
    return f"Week {index + 1} ({week.start.isoformat()})"


def week_labels(weeks: Sequence[WeekBoundary]) -> list[str]:
    return [week_label(index, week) for index, week in enumerate(weeks)]


class SeasonService:
    """Resolves season names into ordered week boundaries."""

    def __init__(self, store: DocumentStore, config: StoreConfig):
        self.store = store
        self.collection = config.seasons_collection

    async def list_seasons(self) -> list[Season]:
        records = await self.store.get_all(self.collection)
        return [
            Season.from_record(doc_id, record, position=position)
            for position, (doc_id, record) in enumerate(records)
        ]

    async def season_names(self) -> list[str]:
        return [season.name for season in await self.list_seasons()]

    async def get_season_record(self, name: str) -> tuple[str, Record]:
        """Raw season document, by document id first, then by its ``season_name`` field."""
        record = await self.store.get_by_id(self.collection, name)
        if record is not None:
            return name, record

        matches = await self.store.scan(self.collection, {"season_name": name})
        if matches:
            return matches[0]

        logger.info(f"Season not found: {name}")
        raise NotFoundError(f"No season found with the name '{name}'")

    async def get_season(self, name: str) -> Season:
        doc_id, record = await self.get_season_record(name)
        return Season.from_record(doc_id, record)

    async def resolve_weeks(self, name: str) -> list[WeekBoundary]:
        """Week boundaries of a season, earliest first."""
        season = await self.get_season(name)
        return list(season.weeks)

    async def current_season(self) -> str:
        return pick_current_season(await self.list_seasons()).name

    async def names_and_current(self) -> tuple[list[str], str | None]:
        """All season names plus the current one; no current season when none exist."""
        seasons = await self.list_seasons()
        current = pick_current_season(seasons).name if seasons else None
        return [season.name for season in seasons], current
