"""User API routes."""

from fastapi import APIRouter, Depends, Request, status

from api.v1.dependencies import get_user_service
from api.v1.schemas.common import DeletedResponse
from api.v1.schemas.user import (
    GroupMembershipRequest,
    RoleChange,
    UserCreate,
    UserListResponse,
    UserResponse,
    UserUpdate,
)
from core.rate_limit import READ_LIMIT, WRITE_LIMIT, limiter
from domain.entities.user import User
from domain.services.user_service import UserService

router = APIRouter(prefix="/users", tags=["users"])


@router.get(
    "",
    response_model=UserListResponse,
    summary="List users",
    responses={200: {"description": "List of users"}},
)
@limiter.limit(READ_LIMIT)  # type: ignore[untyped-decorator]
async def list_users(
    request: Request,
    service: UserService = Depends(get_user_service),
) -> UserListResponse:
    """Get all users, newest first."""
    users = await service.get_all()
    data = [_build_user_response(u) for u in users]
    return UserListResponse(data=data, meta={"total": len(data)})


@router.post(
    "",
    response_model=UserResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a user",
    responses={
        201: {"description": "User created"},
        400: {"description": "Invalid name, email or role"},
        409: {"description": "Email already registered"},
    },
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def create_user(
    request: Request,
    body: UserCreate,
    service: UserService = Depends(get_user_service),
) -> UserResponse:
    """Register a new user with a role of `admin` or `user`."""
    user = await service.create(name=body.name, email=body.email, role=body.role)
    return _build_user_response(user)


@router.get(
    "/{user_id}",
    response_model=UserResponse,
    summary="Get a user",
    responses={
        200: {"description": "User details"},
        404: {"description": "User not found"},
    },
)
@limiter.limit(READ_LIMIT)  # type: ignore[untyped-decorator]
async def get_user(
    request: Request,
    user_id: str,
    service: UserService = Depends(get_user_service),
) -> UserResponse:
    """Get a single user by ID."""
    user = await service.get_by_id(user_id)
    return _build_user_response(user)


@router.put(
    "/{user_id}",
    response_model=UserResponse,
    summary="Update a user",
    responses={
        200: {"description": "User updated"},
        400: {"description": "Invalid name or email"},
        404: {"description": "User not found"},
        409: {"description": "Email already registered"},
    },
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def update_user(
    request: Request,
    user_id: str,
    body: UserUpdate,
    service: UserService = Depends(get_user_service),
) -> UserResponse:
    """Replace a user's name and email."""
    user = await service.update(user_id, name=body.name, email=body.email)
    return _build_user_response(user)


@router.delete(
    "/{user_id}",
    response_model=DeletedResponse,
    summary="Delete a user",
    responses={
        200: {"description": "User deleted"},
        404: {"description": "User not found"},
    },
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def delete_user(
    request: Request,
    user_id: str,
    service: UserService = Depends(get_user_service),
) -> DeletedResponse:
    """Delete a user and all of its group memberships."""
    await service.delete(user_id)
    return DeletedResponse(message="User deleted successfully", id=user_id)


@router.put(
    "/{user_id}/role",
    response_model=UserResponse,
    summary="Change a user's role",
    responses={
        200: {"description": "Role changed"},
        400: {"description": "Invalid role"},
        404: {"description": "User not found"},
    },
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def change_user_role(
    request: Request,
    user_id: str,
    body: RoleChange,
    service: UserService = Depends(get_user_service),
) -> UserResponse:
    """Assign the `admin` or `user` role."""
    user = await service.change_role(user_id, body.role)
    return _build_user_response(user)


# --- Group Membership ---


@router.post(
    "/{user_id}/groups",
    response_model=UserResponse,
    summary="Join a group",
    responses={
        200: {"description": "User joined the group"},
        404: {"description": "User or group not found"},
        409: {"description": "Already a member"},
    },
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def join_group(
    request: Request,
    user_id: str,
    body: GroupMembershipRequest,
    service: UserService = Depends(get_user_service),
) -> UserResponse:
    """Add the user to a group."""
    user = await service.join_group(user_id, body.group_id)
    return _build_user_response(user)


@router.delete(
    "/{user_id}/groups",
    response_model=UserResponse,
    summary="Leave a group",
    responses={
        200: {"description": "User left the group"},
        404: {"description": "User or group not found"},
        409: {"description": "Not a member"},
    },
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def leave_group(
    request: Request,
    user_id: str,
    body: GroupMembershipRequest,
    service: UserService = Depends(get_user_service),
) -> UserResponse:
    """Remove the user from a group."""
    user = await service.leave_group(user_id, body.group_id)
    return _build_user_response(user)


def _build_user_response(user: User) -> UserResponse:
    """Convert domain entity to response schema."""
    return UserResponse(
        id=user.id.value,
        name=user.name,
        email=user.email.value,
        role=user.role.value,
        group_ids=[g.value for g in user.group_ids],
        created_at=user.created_at,
        updated_at=user.updated_at,
    )
