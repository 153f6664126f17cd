"""
iam_service.auth.deps

FastAPI dependency functions for authentication.

Responsibilities:
- Extract the raw bearer token from the Authorization header.
- Convert it into a typed `Principal` through the app's `AccessGate`.
"""

from __future__ import annotations

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from iam_service.auth.gate import AUTHENTICATED_ONLY, AccessGate
from iam_service.auth.models import Principal

_bearer = HTTPBearer(auto_error=False)


def bearer_token(
    creds: HTTPAuthorizationCredentials | None = Depends(_bearer),
) -> str | None:
    # The gate decides what a missing token means; no decoding happens here.
    if creds is None or not creds.credentials:
        return None
    return creds.credentials


def access_gate(request: Request) -> AccessGate:
    return request.app.state.gate  # type: ignore[attr-defined]


def get_principal(
    token: str | None = Depends(bearer_token),
    gate: AccessGate = Depends(access_gate),
) -> Principal:
    return gate.authorize(token, AUTHENTICATED_ONLY)


# --- Module Notes -----------------------------------------------------------
# Admin routes hand `bearer_token` to the admin services, which call the gate with
# the administrative role set themselves.
