"""Roster Pydantic schemas."""

from typing import Any

from pydantic import ConfigDict, Field

from clanboard.models import Member
from clanboard.schemas.common import BaseSchema


class RosterOverviewResponse(BaseSchema):
    """Categorical roster counts."""

    total_users: int = Field(alias="totalUsers")
    main_troops: dict[str, int] = Field(default_factory=dict, alias="mainTroops")
    nationality: dict[str, int] = Field(default_factory=dict)


class MemberUpdateRequest(BaseSchema):
    """Edit payload; field values are checked by the roster service."""

    model_config = ConfigDict(extra="ignore")

    uid: str = Field(min_length=1)
    nationality: Any = None
    mainTroops: Any = None
    isInfantryGroup: Any = None
    labels: Any = None

    def updates(self) -> dict[str, Any]:
        return self.model_dump(exclude={"uid"})


class MemberUpdateResponse(BaseSchema):
    """Result of a member edit."""

    message: str
    uid: str
    updated_fields: list[str] = Field(alias="updatedFields")
    updated_by: str = Field(alias="updatedBy")
    data: Member
