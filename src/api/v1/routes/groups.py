"""Group API routes."""

from fastapi import APIRouter, Depends, Request, status

from api.dependencies.auth import CurrentUser, OptionalUser
from api.v1.dependencies import get_group_service
from api.v1.schemas.common import ErrorResponse
from api.v1.schemas.group import (
    GroupCreate,
    GroupCreatedDetailResponse,
    GroupCreatedResponse,
    GroupDetailResponse,
    GroupResponse,
)
from core.config import settings
from core.rate_limit import limiter
from domain.services.group_service import GroupService

router = APIRouter(prefix="/groups", tags=["groups"])


@router.post(
    "",
    response_model=GroupCreatedDetailResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a group",
    responses={
        201: {"description": "Group created with a fresh join code"},
        401: {"model": ErrorResponse, "description": "No user found"},
        404: {"model": ErrorResponse, "description": "Profile not found"},
        500: {"model": ErrorResponse, "description": "Store rejected a write"},
    },
)
@limiter.limit(settings.group_create_rate_limit)  # type: ignore[untyped-decorator]
async def create_group(
    request: Request,
    body: GroupCreate,
    user: OptionalUser,
    service: GroupService = Depends(get_group_service),
) -> GroupCreatedDetailResponse:
    """Create a group and enroll the caller as its teacher.

    A missing or invalid token is reported by the service itself as
    "No user found".
    """
    group = await service.create(user.id if user else None, body.name)
    return GroupCreatedDetailResponse(
        data=GroupCreatedResponse(
            id=group.id,
            name=group.name,
            owner_id=group.owner_id,
            join_code=group.join_code,
            created_at=group.created_at,
            redirect_to=settings.redirect_path_for(group.id),
            redirect_after_ms=int(settings.redirect_delay_seconds * 1000),
        )
    )


@router.get(
    "/by-code/{join_code}",
    response_model=GroupDetailResponse,
    summary="Find a group by join code",
    responses={
        200: {"description": "The group holding this code"},
        401: {"model": ErrorResponse, "description": "Sign-in required"},
        404: {"model": ErrorResponse, "description": "Group not found"},
    },
)
@limiter.limit(settings.group_lookup_rate_limit)  # type: ignore[untyped-decorator]
async def get_group_by_code(
    request: Request,
    join_code: str,
    user: CurrentUser,
    service: GroupService = Depends(get_group_service),
) -> GroupDetailResponse:
    """Resolve a join code typed by a signed-in prospective member."""
    group = await service.get_by_join_code(join_code)
    return GroupDetailResponse(data=GroupResponse.model_validate(group))
