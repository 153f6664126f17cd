"""
iam_service.errors

Domain error taxonomy.

Responsibilities:
- Give every failure of the auth flow and the administration operations a kind.
- Carry the HTTP status the boundary layer should present for each kind.

Services raise these and never catch them; `api.app` maps them to responses.
"""

from __future__ import annotations


class IamError(Exception):
    code = "error"
    status_code = 500
    message = "Unexpected error"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.message
        super().__init__(self.message)


class InvalidCredentials(IamError):
    # No hint about which of username/password was wrong.
    code = "invalid_credentials"
    status_code = 401
    message = "Invalid username or password"


class Unauthenticated(IamError):
    code = "unauthenticated"
    status_code = 401
    message = "Authentication required"


class Forbidden(IamError):
    code = "forbidden"
    status_code = 403
    message = "Insufficient role"


class NotFound(IamError):
    code = "not_found"
    status_code = 404
    message = "Not found"


class Conflict(IamError):
    code = "conflict"
    status_code = 409
    message = "Already exists"


class BadRequest(IamError):
    code = "bad_request"
    status_code = 400
    message = "Bad request"


class IdentityNotFound(IamError):
    # Credentials verified but the identity vanished before lookup.
    code = "identity_not_found"
    status_code = 500
    message = "Identity lookup failed after successful verification"


# --- Module Notes -----------------------------------------------------------
# Keep `code` values stable; API clients switch on them.
