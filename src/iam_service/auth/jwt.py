"""
iam_service.auth.jwt

JWT issuing and validation.

Responsibilities:
- Issue signed, time-bounded tokens asserting subject id, username and roles.
- Decode and validate tokens with strict claim requirements (iss/aud/exp/iat/sub).

Note:
- HS256 with a shared secret by default; `jwt_alg` is configurable.
- The signing key is held by one `TokenIssuer` built at startup. No rotation.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta
from typing import Any

import jwt
from jwt import InvalidTokenError

from iam_service.auth.models import Token, TokenClaims
from iam_service.errors import Unauthenticated
from iam_service.settings import Settings

Clock = Callable[[], datetime]

_REQUIRED_CLAIMS = ["exp", "iat", "iss", "aud", "sub"]


@dataclass(frozen=True, slots=True)
class JwtConfig:
    # Algorithm/issuer/audience are enforced during decoding.
    alg: str
    issuer: str
    audience: str
    secret: str = field(repr=False)

    @classmethod
    def from_settings(cls, settings: Settings) -> JwtConfig:
        return cls(
            alg=settings.jwt_alg,
            issuer=settings.jwt_issuer,
            audience=settings.jwt_audience,
            secret=settings.jwt_secret,
        )


class JwtValidationError(Exception):
    pass


def utcnow() -> datetime:
    return datetime.now(tz=UTC)


def encode_token(
    *,
    cfg: JwtConfig,
    subject: str,
    username: str,
    roles: Sequence[str],
    issued_at: datetime,
    expires_at: datetime,
) -> str:
    # Keep payload minimal and stable; consumers should not parse arbitrary fields.
    payload: dict[str, Any] = {
        "iss": cfg.issuer,
        "aud": cfg.audience,
        "sub": subject,
        "username": username,
        "roles": list(roles),
        "iat": int(issued_at.timestamp()),
        "exp": int(expires_at.timestamp()),
    }
    return jwt.encode(payload, cfg.secret, algorithm=cfg.alg)


def decode_and_validate(*, cfg: JwtConfig, token: str, now: datetime) -> dict[str, Any]:
    try:
        # Signature, issuer and audience are checked by PyJWT; time checks use `now`
        # so that issuance and verification share one clock.
        payload = jwt.decode(
            token,
            cfg.secret,
            algorithms=[cfg.alg],
            issuer=cfg.issuer,
            audience=cfg.audience,
            options={
                "require": _REQUIRED_CLAIMS,
                "verify_exp": False,
                "verify_iat": False,
            },
        )
    except InvalidTokenError as e:
        raise JwtValidationError(str(e)) from e

    if not isinstance(payload["exp"], int) or not isinstance(payload["iat"], int):
        raise JwtValidationError("Invalid time claims")
    if payload["exp"] <= int(now.timestamp()):
        raise JwtValidationError("Signature has expired")
    return payload


def _claims_from_payload(payload: dict[str, Any]) -> TokenClaims:
    subject = payload.get("sub")
    username = payload.get("username", "")
    roles_raw = payload.get("roles", [])
    if not isinstance(subject, str) or not subject:
        raise JwtValidationError("Invalid token subject")
    if not isinstance(username, str):
        raise JwtValidationError("Invalid token username")
    if not isinstance(roles_raw, list) or not all(isinstance(r, str) for r in roles_raw):
        raise JwtValidationError("Invalid token roles")
    return TokenClaims(
        subject=subject,
        username=username,
        roles=tuple(roles_raw),
        issued_at=datetime.fromtimestamp(payload["iat"], tz=UTC),
        expires_at=datetime.fromtimestamp(payload["exp"], tz=UTC),
    )


class TokenIssuer:
    """
    Mints and verifies session tokens with one signing key.

    Output is deterministic for a given key, claims and clock reading.
    """

    def __init__(
        self,
        *,
        cfg: JwtConfig,
        lifetime: timedelta = timedelta(hours=1),
        clock: Clock = utcnow,
    ) -> None:
        if lifetime <= timedelta(0):
            raise ValueError("token lifetime must be positive")
        self._cfg = cfg
        self._lifetime = lifetime
        self._clock = clock

    @classmethod
    def from_settings(cls, settings: Settings, *, clock: Clock = utcnow) -> TokenIssuer:
        return cls(
            cfg=JwtConfig.from_settings(settings),
            lifetime=settings.token_lifetime,
            clock=clock,
        )

    def issue(self, user_id: str, username: str, roles: Sequence[str]) -> Token:
        # JWT time claims have one-second resolution.
        issued_at = self._clock().astimezone(UTC).replace(microsecond=0)
        expires_at = issued_at + self._lifetime
        value = encode_token(
            cfg=self._cfg,
            subject=user_id,
            username=username,
            roles=roles,
            issued_at=issued_at,
            expires_at=expires_at,
        )
        claims = TokenClaims(
            subject=user_id,
            username=username,
            roles=tuple(roles),
            issued_at=issued_at,
            expires_at=expires_at,
        )
        return Token(value=value, claims=claims)

    def verify(self, token: str) -> TokenClaims:
        """
        Decode `token` and return its claims.

        Raises Unauthenticated for a malformed, tampered, foreign or expired token.
        """

        try:
            payload = decode_and_validate(cfg=self._cfg, token=token, now=self._clock())
            return _claims_from_payload(payload)
        except JwtValidationError as e:
            raise Unauthenticated(f"Invalid token: {e}") from e


# --- Module Notes -----------------------------------------------------------
# Used by:
# - `services/auth_service.py` (issue at login)
# - `auth/gate.py` (verify on every protected call)
