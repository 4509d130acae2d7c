"""Household schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class HouseholdCreate(BaseModel):
    """Create a household."""

    name: str = Field(..., min_length=1, max_length=50)


class HouseholdUpdate(BaseModel):
    """Rename a household."""

    name: str | None = Field(None, min_length=1, max_length=50)


class JoinHouseholdRequest(BaseModel):
    """Join a household with an invite code."""

    invite_code: str = Field(..., min_length=1, max_length=16)


class HouseholdMemberResponse(BaseModel):
    """Household member response."""

    model_config = ConfigDict(from_attributes=True)

    user_id: int
    role: str
    joined_at: datetime
    name: str


class HouseholdResponse(BaseModel):
    """Household with its members."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    invite_code: str
    invite_code_expires_at: datetime
    created_by: int
    members: list[HouseholdMemberResponse]
    created_at: datetime
    updated_at: datetime


class ActiveHouseholdResponse(HouseholdResponse):
    """The caller's active household and their role in it."""

    user_role: str


class HouseholdSummary(BaseModel):
    """One entry of the caller's household list."""

    id: int
    name: str
    role: str
    member_count: int


class InviteCodeResponse(BaseModel):
    """A freshly generated invite code."""

    invite_code: str
    expires_at: datetime
