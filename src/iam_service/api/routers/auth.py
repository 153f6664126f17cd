"""
iam_service.api.routers.auth

Login and "who am I" endpoints.

Responsibilities:
- Exchange username/password for a bearer token.
- Echo the claims of a valid token back to its holder.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends

from iam_service.api.deps import auth_service
from iam_service.api.schemas import ERROR_RESPONSES, AuthResponse, LoginRequest, PrincipalResponse
from iam_service.auth.deps import get_principal
from iam_service.auth.models import Principal
from iam_service.identity.models import Credential
from iam_service.services.auth_service import AuthService

router = APIRouter(prefix="/api/auth", tags=["auth"], responses=ERROR_RESPONSES)


@router.post("/login", response_model=AuthResponse)
async def login(
    body: LoginRequest,
    service: AuthService = Depends(auth_service),
) -> AuthResponse:
    result = await service.authenticate(Credential(username=body.username, password=body.password))
    return AuthResponse(user_id=result.user_id, name=result.name, token=result.token.value)


@router.get("/me", response_model=PrincipalResponse)
async def me(principal: Principal = Depends(get_principal)) -> PrincipalResponse:
    # Authenticated-only: any valid token, whatever its roles.
    return PrincipalResponse.model_validate(principal)


# --- Module Notes -----------------------------------------------------------
# Failed logins surface as 401 `invalid_credentials` via the app-level error handler.
