"""Pydantic schemas for User API."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field

from api.v1.schemas.common import CamelModel


class UserCreate(CamelModel):
    """Schema for creating a user."""

    name: str = Field(..., max_length=255)
    email: str = Field(..., max_length=255)
    role: str


class UserUpdate(CamelModel):
    """Schema for updating a user's profile."""

    name: str = Field(..., max_length=255)
    email: str = Field(..., max_length=255)


class RoleChange(CamelModel):
    """Schema for assigning a role."""

    role: str


class GroupMembershipRequest(CamelModel):
    """Schema naming the group a user joins or leaves."""

    group_id: str


class UserResponse(CamelModel):
    """Schema for User response."""

    id: str
    name: str
    email: str
    role: str
    group_ids: list[str] = Field(default_factory=list)
    created_at: datetime
    updated_at: datetime


class UserListResponse(BaseModel):
    """Schema for list of Users response."""

    data: list[UserResponse]
    meta: dict[str, Any] = Field(default_factory=dict)
