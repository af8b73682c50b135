"""Group API routes."""

from fastapi import APIRouter, Depends, Request, status

from api.v1.dependencies import get_group_service
from api.v1.schemas.common import DeletedResponse
from api.v1.schemas.group import (
    GroupCreate,
    GroupListResponse,
    GroupMemberRequest,
    GroupResponse,
    GroupUpdate,
)
from core.rate_limit import READ_LIMIT, WRITE_LIMIT, limiter
from domain.entities.group import Group
from domain.services.group_service import GroupService

router = APIRouter(prefix="/groups", tags=["groups"])

user_groups_router = APIRouter(prefix="/users/{user_id}/groups", tags=["groups"])


@router.get(
    "",
    response_model=GroupListResponse,
    summary="List groups",
    responses={200: {"description": "List of groups"}},
)
@limiter.limit(READ_LIMIT)  # type: ignore[untyped-decorator]
async def list_groups(
    request: Request,
    service: GroupService = Depends(get_group_service),
) -> GroupListResponse:
    """Get all groups, newest first."""
    groups = await service.get_all()
    data = [_build_group_response(g) for g in groups]
    return GroupListResponse(data=data, meta={"total": len(data)})


@router.post(
    "",
    response_model=GroupResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a group",
    responses={
        201: {"description": "Group created"},
        400: {"description": "Invalid name"},
    },
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def create_group(
    request: Request,
    body: GroupCreate,
    service: GroupService = Depends(get_group_service),
) -> GroupResponse:
    """Create a new, empty group."""
    group = await service.create(name=body.name, description=body.description)
    return _build_group_response(group)


@router.get(
    "/{group_id}",
    response_model=GroupResponse,
    summary="Get a group",
    responses={
        200: {"description": "Group details"},
        404: {"description": "Group not found"},
    },
)
@limiter.limit(READ_LIMIT)  # type: ignore[untyped-decorator]
async def get_group(
    request: Request,
    group_id: str,
    service: GroupService = Depends(get_group_service),
) -> GroupResponse:
    """Get a single group by ID."""
    group = await service.get_by_id(group_id)
    return _build_group_response(group)


@router.put(
    "/{group_id}",
    response_model=GroupResponse,
    summary="Update a group",
    responses={
        200: {"description": "Group updated"},
        400: {"description": "Invalid name"},
        404: {"description": "Group not found"},
    },
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def update_group(
    request: Request,
    group_id: str,
    body: GroupUpdate,
    service: GroupService = Depends(get_group_service),
) -> GroupResponse:
    """Replace a group's name and description."""
    group = await service.update(group_id, name=body.name, description=body.description)
    return _build_group_response(group)


@router.delete(
    "/{group_id}",
    response_model=DeletedResponse,
    summary="Delete a group",
    responses={
        200: {"description": "Group deleted"},
        404: {"description": "Group not found"},
    },
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def delete_group(
    request: Request,
    group_id: str,
    service: GroupService = Depends(get_group_service),
) -> DeletedResponse:
    """Delete a group and all of its memberships."""
    await service.delete(group_id)
    return DeletedResponse(message="Group deleted successfully", id=group_id)


# --- Group Member Management ---


@router.post(
    "/{group_id}/members",
    response_model=GroupResponse,
    summary="Add group member",
    responses={
        200: {"description": "Member added to group"},
        404: {"description": "Group or user not found"},
        409: {"description": "Already a group member"},
    },
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def add_group_member(
    request: Request,
    group_id: str,
    body: GroupMemberRequest,
    service: GroupService = Depends(get_group_service),
) -> GroupResponse:
    """Add a user to the group."""
    group = await service.add_member(group_id, body.user_id)
    return _build_group_response(group)


@router.delete(
    "/{group_id}/members",
    response_model=GroupResponse,
    summary="Remove group member",
    responses={
        200: {"description": "Member removed from group"},
        404: {"description": "Group or user not found"},
        409: {"description": "Not a group member"},
    },
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def remove_group_member(
    request: Request,
    group_id: str,
    body: GroupMemberRequest,
    service: GroupService = Depends(get_group_service),
) -> GroupResponse:
    """Remove a user from the group."""
    group = await service.remove_member(group_id, body.user_id)
    return _build_group_response(group)


# --- Groups of a User ---


@user_groups_router.get(
    "",
    response_model=GroupListResponse,
    summary="List a user's groups",
    responses={
        200: {"description": "Groups the user belongs to"},
        404: {"description": "User not found"},
    },
)
@limiter.limit(READ_LIMIT)  # type: ignore[untyped-decorator]
async def list_user_groups(
    request: Request,
    user_id: str,
    service: GroupService = Depends(get_group_service),
) -> GroupListResponse:
    """Get every group the user is a member of."""
    groups = await service.get_by_member_id(user_id)
    data = [_build_group_response(g) for g in groups]
    return GroupListResponse(data=data, meta={"total": len(data)})


def _build_group_response(group: Group) -> GroupResponse:
    """Convert domain entity to response schema."""
    return GroupResponse(
        id=group.id.value,
        name=group.name,
        description=group.description,
        member_ids=[m.value for m in group.member_ids],
        created_at=group.created_at,
        updated_at=group.updated_at,
    )
