"""
iam_service.auth

Authentication/authorization package.

Responsibilities:
- JWT issuing and validation (`TokenIssuer`).
- Role-gated authorization of bearer tokens (`AccessGate`).
- Password hashing helpers.
- FastAPI auth dependencies.
"""

# Package marker.


# --- Module Notes -----------------------------------------------------------
# Only `auth.deps` imports FastAPI; the rest is usable from services and tests directly.
