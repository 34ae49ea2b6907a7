"""Schedule store: the clan calendar kept as one replaceable list."""

import copy
import logging
from collections.abc import Mapping
from datetime import datetime, timezone
from typing import Any

from pydantic import ValidationError

from clanboard.config import StoreConfig
from clanboard.exceptions import InvalidArgumentError
from clanboard.models import ScheduleEvent
from clanboard.storage import DocumentStore

logger = logging.getLogger(__name__)


def validate_events(events: Any) -> list[dict[str, Any]]:
    """Check every event before anything is written.

    Returns the submitted dicts unchanged, in the submitted order.
    """
    if not isinstance(events, list):
        raise InvalidArgumentError("Events array is required")

    for index, event in enumerate(events):
        if not isinstance(event, Mapping):
            raise InvalidArgumentError(f"Event at index {index} must be an object")
        try:
            ScheduleEvent.model_validate(dict(event))
        except ValidationError as e:
            problems = "; ".join(
                f"{'.'.join(str(part) for part in error['loc']) or 'event'}: {error['msg']}"
                for error in e.errors()
            )
            raise InvalidArgumentError(f"Event at index {index} is invalid ({problems})") from None

    return [copy.deepcopy(dict(event)) for event in events]


class ScheduleService:
    """Full-read / full-replace access to the schedule document."""

    def __init__(self, store: DocumentStore, config: StoreConfig):
        self.store = store
        self.collection = config.home_collection
        self.document_id = config.schedule_document_id

    async def get_schedule(self) -> dict[str, Any]:
        record = await self.store.get_by_id(self.collection, self.document_id)
        if record is None:
            return {"events": [], "updatedAt": None, "updatedBy": None}

        events = record.get("events")
        return {
            "events": events if isinstance(events, list) else [],
            "updatedAt": _as_text(record.get("updatedAt")),
            "updatedBy": _as_text(record.get("updatedBy")),
        }

    async def get_events(self) -> list[dict[str, Any]]:
        return (await self.get_schedule())["events"]

    async def replace_events(self, events: Any, updated_by: str | None = None) -> str:
        """Validate the whole list, then replace the stored one in a single write.

        Returns the update timestamp. Nothing is written when validation fails.
        """
        validated = validate_events(events)
        updated_at = datetime.now(timezone.utc).isoformat()

        await self.store.put(
            self.collection,
            self.document_id,
            {"events": validated, "updatedAt": updated_at, "updatedBy": updated_by},
        )
        logger.info(f"Schedule replaced by {updated_by or 'anonymous'} with {len(validated)} events")
        return updated_at


def _as_text(value: Any) -> str | None:
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.isoformat()
    return str(value)
