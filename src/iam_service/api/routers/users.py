"""
iam_service.api.routers.users

User administration endpoints (administrative roles only).

Responsibilities:
- Validate payloads and hand the raw bearer token to `UserAdminService`.
- Shape domain results into response models.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends

from iam_service.api.deps import user_admin_service
from iam_service.api.schemas import (
    ERROR_RESPONSES,
    CreatedResponse,
    CreateUserRequest,
    EditUserProfileRequest,
    UserDetailsResponse,
    UserRolesRequest,
    UserSummaryResponse,
)
from iam_service.auth.deps import bearer_token
from iam_service.services.user_admin import UserAdminService

router = APIRouter(prefix="/api/user", tags=["users"], responses=ERROR_RESPONSES)


@router.post("/create", response_model=CreatedResponse)
async def create_user(
    body: CreateUserRequest,
    token: str | None = Depends(bearer_token),
    service: UserAdminService = Depends(user_admin_service),
) -> CreatedResponse:
    user_id = await service.create_user(
        token,
        username=body.username,
        password=body.password,
        email=body.email,
        full_name=body.full_name,
        roles=body.roles,
    )
    return CreatedResponse(id=user_id)


@router.get("/get-all", response_model=list[UserSummaryResponse])
async def get_all_users(
    token: str | None = Depends(bearer_token),
    service: UserAdminService = Depends(user_admin_service),
) -> list[UserSummaryResponse]:
    users = await service.list_users(token)
    return [UserSummaryResponse.model_validate(u) for u in users]


@router.get("/all-details", response_model=list[UserDetailsResponse])
async def get_all_user_details(
    token: str | None = Depends(bearer_token),
    service: UserAdminService = Depends(user_admin_service),
) -> list[UserDetailsResponse]:
    users = await service.list_user_details(token)
    return [UserDetailsResponse.model_validate(u) for u in users]


@router.delete("/delete/{user_id}", response_model=int)
async def delete_user(
    user_id: str,
    token: str | None = Depends(bearer_token),
    service: UserAdminService = Depends(user_admin_service),
) -> int:
    return await service.delete_user(token, user_id)


@router.get("/details/{user_id}", response_model=UserDetailsResponse)
async def get_user_details(
    user_id: str,
    token: str | None = Depends(bearer_token),
    service: UserAdminService = Depends(user_admin_service),
) -> UserDetailsResponse:
    return UserDetailsResponse.model_validate(await service.get_user_details(token, user_id))


@router.get("/details/by-username/{username}", response_model=UserDetailsResponse)
async def get_user_details_by_username(
    username: str,
    token: str | None = Depends(bearer_token),
    service: UserAdminService = Depends(user_admin_service),
) -> UserDetailsResponse:
    identity = await service.get_user_details_by_username(token, username)
    return UserDetailsResponse.model_validate(identity)


@router.post("/assign-roles", response_model=int)
async def assign_roles(
    body: UserRolesRequest,
    token: str | None = Depends(bearer_token),
    service: UserAdminService = Depends(user_admin_service),
) -> int:
    return await service.assign_roles(token, body.username, body.roles)


@router.put("/edit-roles", response_model=int)
async def edit_user_roles(
    body: UserRolesRequest,
    token: str | None = Depends(bearer_token),
    service: UserAdminService = Depends(user_admin_service),
) -> int:
    return await service.edit_user_roles(token, body.username, body.roles)


@router.put("/edit-profile/{user_id}", response_model=int)
async def edit_user_profile(
    user_id: str,
    body: EditUserProfileRequest,
    token: str | None = Depends(bearer_token),
    service: UserAdminService = Depends(user_admin_service),
) -> int:
    return await service.edit_user_profile(token, user_id, body.to_domain())


# --- Module Notes -----------------------------------------------------------
# No pagination on the list endpoints; they return every user.
