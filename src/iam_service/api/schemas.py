"""
iam_service.api.schemas

Request/response models for the HTTP boundary.

Responsibilities:
- Validate inbound payloads (lengths, required fields).
- Shape outbound JSON from the domain dataclasses.
"""

from __future__ import annotations

from typing import Annotated, Any

from pydantic import AfterValidator, BaseModel, ConfigDict, Field

from iam_service.auth.passwords import MAX_PASSWORD_BYTES, password_fits
from iam_service.identity.models import MAX_ROLE_NAME_LENGTH, ProfileUpdate, RoleUpdate


def _check_password_bytes(value: str) -> str:
    # The limit is bcrypt's, counted in encoded bytes.
    if not password_fits(value):
        raise ValueError(f"must be at most {MAX_PASSWORD_BYTES} bytes (UTF-8)")
    return value


Password = Annotated[str, Field(min_length=1, repr=False), AfterValidator(_check_password_bytes)]


class LoginRequest(BaseModel):
    username: str = Field(min_length=1, max_length=256)
    password: Password


class AuthResponse(BaseModel):
    user_id: str
    name: str
    token: str
    token_type: str = "bearer"


class PrincipalResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    subject: str
    username: str
    roles: list[str]


class CreateUserRequest(BaseModel):
    username: str = Field(min_length=1, max_length=256)
    password: Password
    email: str = Field(default="", max_length=320)
    full_name: str = Field(default="", max_length=256)
    roles: list[str] = Field(default_factory=list)


class CreatedResponse(BaseModel):
    id: str


class UserSummaryResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    username: str
    full_name: str
    email: str


class UserDetailsResponse(UserSummaryResponse):
    roles: list[str]


class UserRolesRequest(BaseModel):
    username: str = Field(min_length=1, max_length=256)
    roles: list[str] = Field(default_factory=list)


class EditUserProfileRequest(BaseModel):
    id: str
    full_name: str = Field(default="", max_length=256)
    email: str = Field(default="", max_length=320)
    roles: list[str] = Field(default_factory=list)

    def to_domain(self) -> ProfileUpdate:
        return ProfileUpdate(
            id=self.id,
            full_name=self.full_name,
            email=self.email,
            roles=tuple(self.roles),
        )


class CreateRoleRequest(BaseModel):
    name: str = Field(min_length=1, max_length=MAX_ROLE_NAME_LENGTH)


class EditRoleRequest(BaseModel):
    id: str
    name: str = Field(min_length=1, max_length=MAX_ROLE_NAME_LENGTH)

    def to_domain(self) -> RoleUpdate:
        return RoleUpdate(id=self.id, name=self.name)


class RoleResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str


class ErrorDetail(BaseModel):
    code: str
    message: str


class ErrorResponse(BaseModel):
    detail: ErrorDetail


# Documents the error body `api.app` renders for `IamError`.
ERROR_RESPONSES: dict[int | str, dict[str, Any]] = {
    status: {"model": ErrorResponse} for status in (400, 401, 403, 404, 409)
}


# --- Module Notes -----------------------------------------------------------
# Request models validate shape only; domain rules live in the services.
