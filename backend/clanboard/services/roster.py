"""Roster summaries and member projection."""

import logging
from collections import Counter
from collections.abc import Iterable, Mapping
from datetime import datetime, timezone
from typing import Any

from pydantic import BaseModel, Field

from clanboard.config import StoreConfig
from clanboard.exceptions import InvalidArgumentError, NotFoundError
from clanboard.models import MAIN_TROOP_TYPES, Member
from clanboard.storage import DocumentStore

logger = logging.getLogger(__name__)

UNKNOWN_CATEGORY = "unknown"
CATEGORICAL_FIELDS = ("nationality", "mainTroops")
EDITABLE_FIELDS = ("nationality", "mainTroops", "isInfantryGroup", "labels")


class RosterSummary(BaseModel):
    """Record count plus per-field category counts."""

    total_count: int = 0
    counts_by_field: dict[str, dict[str, int]] = Field(default_factory=dict)


def summarize(records: Iterable[Member]) -> RosterSummary:
    """Count members per category of every categorical field.

    A missing value is counted under ``"unknown"``, so each field's counts
    add up to the total.
    """
    total = 0
    counters = {field_name: Counter() for field_name in CATEGORICAL_FIELDS}

    for member in records:
        total += 1
        for field_name, counter in counters.items():
            counter[member.category(field_name) or UNKNOWN_CATEGORY] += 1

    return RosterSummary(
        total_count=total,
        counts_by_field={name: dict(counter) for name, counter in counters.items()},
    )


def project(record: Any) -> Member:
    """Map a raw stored record to the public member shape."""
    return Member.from_record(record)


def validate_member_update(payload: Mapping[str, Any]) -> dict[str, Any]:
    """Check an edit payload and return only the fields to write."""
    updates: dict[str, Any] = {}

    nationality = payload.get("nationality")
    if nationality is not None:
        if not isinstance(nationality, str) or not nationality.strip():
            raise InvalidArgumentError("nationality must be a non-empty string")
        updates["nationality"] = nationality.strip()

    main_troops = payload.get("mainTroops")
    if main_troops is not None:
        if main_troops not in MAIN_TROOP_TYPES:
            raise InvalidArgumentError(
                f"Invalid mainTroops value. Must be one of: {', '.join(MAIN_TROOP_TYPES)}"
            )
        updates["mainTroops"] = main_troops

    is_infantry_group = payload.get("isInfantryGroup")
    if is_infantry_group is not None:
        if not isinstance(is_infantry_group, bool):
            raise InvalidArgumentError("isInfantryGroup must be a boolean value")
        updates["isInfantryGroup"] = is_infantry_group

    labels = payload.get("labels")
    if labels is not None:
        if not isinstance(labels, list) or not all(isinstance(label, str) for label in labels):
            raise InvalidArgumentError("labels must be an array of strings")
        updates["labels"] = labels

    if not updates:
        raise InvalidArgumentError(
            "No valid fields provided for update. "
            f"Allowed fields: {', '.join(EDITABLE_FIELDS)}"
        )
    return updates


class RosterService:
    """Reads member records from the store and summarizes them."""

    def __init__(self, store: DocumentStore, config: StoreConfig):
        self.store = store
        self.collection = config.users_collection

    async def get_members(self) -> dict[str, Member]:
        """Every member keyed by id, projected to the public shape."""
        records = await self.store.get_all(self.collection)
        return {doc_id: project(record) for doc_id, record in records}

    async def get_overview(self) -> RosterSummary:
        records = await self.store.get_all(self.collection)
        summary = summarize(project(record) for _, record in records)
        logger.debug(f"Summarized {summary.total_count} members")
        return summary

    async def update_member(self, member_id: str, payload: Mapping[str, Any]) -> tuple[list[str], Member]:
        """Apply an edit to one member; returns the written fields and the new projection."""
        updates = validate_member_update(payload)

        record = await self.store.get_by_id(self.collection, member_id)
        if record is None:
            raise NotFoundError(f"Member {member_id} not found")

        record.update(updates)
        record["updatedAt"] = datetime.now(timezone.utc).isoformat()
        await self.store.put(self.collection, member_id, record)

        logger.info(f"Updated member {member_id}: {', '.join(updates)}")
        return list(updates), project(record)
