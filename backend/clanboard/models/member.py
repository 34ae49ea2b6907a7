"""Roster member and per-week member snapshot records."""

from collections.abc import Mapping
from datetime import date
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from clanboard.models.coercion import (
    to_count,
    to_date,
    to_flag,
    to_labels,
    to_number,
    to_text,
)

MAIN_TROOP_TYPES = ("infantry", "archer", "cavalry", "mage")


class Member(BaseModel):
    """Externally visible member shape with every field defaulted."""

    model_config = ConfigDict(
        populate_by_name=True,
        extra="ignore",
        frozen=True,
    )

    nationality: str | None = None
    main_troops: str | None = Field(default=None, alias="mainTroops")
    nickname: str | None = None
    highest_power: int | float | None = Field(default=None, alias="highestPower")
    units_killed: int | None = Field(default=None, alias="unitsKilled")
    units_dead: int | None = Field(default=None, alias="unitsDead")
    mana_spent: int | None = Field(default=None, alias="manaSpent")
    is_infantry_group: bool = Field(default=False, alias="isInfantryGroup")
    labels: list[str] = Field(default_factory=list)

    @field_validator("nationality", "main_troops", "nickname", mode="before")
    @classmethod
    def _text(cls, v: Any) -> str | None:
        return to_text(v)

    @field_validator("highest_power", mode="before")
    @classmethod
    def _power(cls, v: Any) -> int | float | None:
        return to_number(v)

    @field_validator("units_killed", "units_dead", "mana_spent", mode="before")
    @classmethod
    def _count(cls, v: Any) -> int | None:
        return to_count(v)

    @field_validator("is_infantry_group", mode="before")
    @classmethod
    def _flag(cls, v: Any) -> bool:
        return to_flag(v)

    @field_validator("labels", mode="before")
    @classmethod
    def _labels(cls, v: Any) -> list[str]:
        return to_labels(v)

    @classmethod
    def from_record(cls, record: Any) -> "Member":
        """Build a member from a raw store record, never failing on dirty data."""
        if not isinstance(record, Mapping):
            return cls()
        return cls.model_validate(dict(record))

    def category(self, field_name: str) -> str | None:
        """Value of a categorical field looked up by its stored (camelCase) key."""
        return {
            "nationality": self.nationality,
            "mainTroops": self.main_troops,
        }.get(field_name)


class MemberSnapshot(BaseModel):
    """One member's stats as uploaded for a single week of a season."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore", frozen=True)

    member_id: str
    season_name: str | None = None
    snapshot_date: date | None = Field(default=None, alias="date")
    name: str | None = None
    home_server: int | None = Field(default=None, alias="homeServer")
    current_power: int | None = Field(default=None, alias="currentPower")
    highest_power: int | None = Field(default=None, alias="highestPower")
    merits: int | float | None = None
    units_killed: int | float | None = Field(default=None, alias="unitsKilled")
    units_dead: int | float | None = Field(default=None, alias="unitsDead")
    mana_spent: int | float | None = Field(default=None, alias="manaSpent")

    @field_validator("season_name", "name", mode="before")
    @classmethod
    def _text(cls, v: Any) -> str | None:
        return to_text(v)

    @field_validator("snapshot_date", mode="before")
    @classmethod
    def _date(cls, v: Any) -> date | None:
        return to_date(v)

    @field_validator("home_server", "current_power", "highest_power", mode="before")
    @classmethod
    def _count(cls, v: Any) -> int | None:
        return to_count(v)

    @field_validator("merits", "units_killed", "units_dead", "mana_spent", mode="before")
    @classmethod
    def _number(cls, v: Any) -> int | float | None:
        return to_number(v)

    @classmethod
    def from_record(cls, doc_id: str, record: Any) -> "MemberSnapshot":
        """Build a snapshot; the member id falls back to the document id."""
        data = dict(record) if isinstance(record, Mapping) else {}
        member_id = data.get("member_id") or data.get("memberId") or doc_id
        data["member_id"] = str(member_id)
        return cls.model_validate(data)

    def value(self, field_name: str) -> int | float:
        """Metric value by stored key; missing values count as 0."""
        attribute = {
            "merits": "merits",
            "unitsKilled": "units_killed",
            "unitsDead": "units_dead",
            "manaSpent": "mana_spent",
        }[field_name]
        return getattr(self, attribute) or 0
