"""Pydantic schemas for Group API."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field

from api.v1.schemas.common import CamelModel


class GroupCreate(CamelModel):
    """Schema for creating a group."""

    name: str = Field(..., max_length=255)
    description: str | None = None


class GroupUpdate(CamelModel):
    """Schema for updating a group."""

    name: str = Field(..., max_length=255)
    description: str | None = None


class GroupMemberRequest(CamelModel):
    """Schema naming the user added to or removed from a group."""

    user_id: str


class GroupResponse(CamelModel):
    """Schema for Group response."""

    id: str
    name: str
    description: str | None
    member_ids: list[str] = Field(default_factory=list)
    created_at: datetime
    updated_at: datetime


class GroupListResponse(BaseModel):
    """Schema for list of Groups response."""

    data: list[GroupResponse]
    meta: dict[str, Any] = Field(default_factory=dict)
