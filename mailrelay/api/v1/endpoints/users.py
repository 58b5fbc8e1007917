"""Users API (admin only): list, create, update, delete."""

from typing import Annotated

from fastapi import APIRouter, Depends, Request

from mailrelay.api.v1.dependencies import (
    CurrentPrincipal,
    get_user_admin_service,
    get_user_admin_service_for_write,
)
from mailrelay.application.services import UserAdminService
from mailrelay.core.limiter import limit_writes
from mailrelay.schemas.user import UserCreateRequest, UserResponse, UserUpdate

router = APIRouter()


@router.get("", response_model=list[UserResponse])
async def list_users(
    principal: CurrentPrincipal,
    service: Annotated[UserAdminService, Depends(get_user_admin_service)],
):
    """List all users, newest first."""
    return await service.list_users(principal)


@router.post("", response_model=UserResponse, status_code=201)
@limit_writes
async def create_user(
    request: Request,
    body: UserCreateRequest,
    principal: CurrentPrincipal,
    service: Annotated[UserAdminService, Depends(get_user_admin_service_for_write)],
):
    """Create a user with any role."""
    return await service.create_user(
        principal,
        email=body.email,
        password=body.password,
        role=body.role,
        must_change_password=body.must_change_password,
    )


@router.patch("/{user_id}", response_model=UserResponse)
@limit_writes
async def update_user(
    request: Request,
    user_id: str,
    body: UserUpdate,
    principal: CurrentPrincipal,
    service: Annotated[UserAdminService, Depends(get_user_admin_service_for_write)],
):
    """Update password, role or mustChangePassword. An admin cannot change its own role."""
    return await service.update_user(principal, user_id, body.model_dump(exclude_unset=True))


@router.delete("/{user_id}", status_code=204)
@limit_writes
async def delete_user(
    request: Request,
    user_id: str,
    principal: CurrentPrincipal,
    service: Annotated[UserAdminService, Depends(get_user_admin_service_for_write)],
):
    """Delete a user. An admin cannot delete itself."""
    await service.delete_user(principal, user_id)
