"""Pydantic schemas for Group API."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator


class GroupCreate(BaseModel):
    """Schema for creating a group."""

    name: str = Field(..., min_length=1, max_length=100)

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("Group name must not be blank")
        return value


class GroupResponse(BaseModel):
    """Schema for Group response."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    name: str
    owner_id: UUID
    join_code: str
    created_at: datetime


class GroupCreatedResponse(GroupResponse):
    """Group response plus where the client should go next."""

    redirect_to: str
    redirect_after_ms: int


class GroupDetailResponse(BaseModel):
    """Schema for single Group response."""

    data: GroupResponse


class GroupCreatedDetailResponse(BaseModel):
    """Schema for the create-group response."""

    data: GroupCreatedResponse
