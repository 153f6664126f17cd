"""
iam_service.api.routers.roles

Role administration endpoints (administrative roles only).

Responsibilities:
- Validate payloads and hand the raw bearer token to `RoleAdminService`.
- Shape domain results into response models.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends

from iam_service.api.deps import role_admin_service
from iam_service.api.schemas import (
    ERROR_RESPONSES,
    CreatedResponse,
    CreateRoleRequest,
    EditRoleRequest,
    RoleResponse,
)
from iam_service.auth.deps import bearer_token
from iam_service.services.role_admin import RoleAdminService

router = APIRouter(prefix="/api/role", tags=["roles"], responses=ERROR_RESPONSES)


@router.post("/create", response_model=CreatedResponse)
async def create_role(
    body: CreateRoleRequest,
    token: str | None = Depends(bearer_token),
    service: RoleAdminService = Depends(role_admin_service),
) -> CreatedResponse:
    return CreatedResponse(id=await service.create_role(token, body.name))


@router.get("/get-all", response_model=list[RoleResponse])
async def get_roles(
    token: str | None = Depends(bearer_token),
    service: RoleAdminService = Depends(role_admin_service),
) -> list[RoleResponse]:
    return [RoleResponse.model_validate(r) for r in await service.get_roles(token)]


@router.get("/{role_id}", response_model=RoleResponse)
async def get_role_by_id(
    role_id: str,
    token: str | None = Depends(bearer_token),
    service: RoleAdminService = Depends(role_admin_service),
) -> RoleResponse:
    return RoleResponse.model_validate(await service.get_role_by_id(token, role_id))


@router.delete("/{role_id}", response_model=int)
async def delete_role(
    role_id: str,
    token: str | None = Depends(bearer_token),
    service: RoleAdminService = Depends(role_admin_service),
) -> int:
    return await service.delete_role(token, role_id)


@router.put("/{role_id}", response_model=int)
async def edit_role(
    role_id: str,
    body: EditRoleRequest,
    token: str | None = Depends(bearer_token),
    service: RoleAdminService = Depends(role_admin_service),
) -> int:
    return await service.edit_role(token, role_id, body.to_domain())


# --- Module Notes -----------------------------------------------------------
# `/get-all` is declared before `/{role_id}` so it is not captured as an id.
