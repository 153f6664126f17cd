"""
tests.test_token_issuer

Token issuance and verification.

Responsibilities:
- Round-trip claims through a signed token.
- Reject expired, tampered and foreign tokens with `Unauthenticated`.
"""

from __future__ import annotations

from datetime import timedelta

import jwt
import pytest

from iam_service.auth.jwt import JwtConfig, TokenIssuer
from iam_service.errors import Unauthenticated
from iam_service.settings import Settings


def test_round_trip_recovers_identity_and_roles(issuer: TokenIssuer) -> None:
    token = issuer.issue("1", "testuser", ["Admin", "user"])

    claims = issuer.verify(token.value)

    assert claims.subject == "1"
    assert claims.username == "testuser"
    assert claims.roles == ("Admin", "user")
    assert claims == token.claims


def test_expiry_is_issued_at_plus_configured_lifetime(issuer: TokenIssuer, clock) -> None:
    token = issuer.issue("1", "testuser", [])

    assert token.claims.issued_at == clock.now
    assert token.claims.expires_at - token.claims.issued_at == timedelta(hours=1)


def test_issuance_is_deterministic_for_same_key_claims_and_time(
    settings: Settings, clock
) -> None:
    first = TokenIssuer.from_settings(settings, clock=clock).issue("1", "u", ["a"])
    second = TokenIssuer.from_settings(settings, clock=clock).issue("1", "u", ["a"])

    assert first.value == second.value


def test_subsecond_clock_reading_is_truncated(issuer: TokenIssuer, clock) -> None:
    clock.now = clock.now.replace(microsecond=987654)

    token = issuer.issue("1", "u", [])

    assert token.claims.issued_at.microsecond == 0
    assert issuer.verify(token.value) == token.claims


def test_token_valid_until_lifetime_elapses(issuer: TokenIssuer, clock) -> None:
    token = issuer.issue("1", "testuser", ["Admin"])

    clock.advance(timedelta(minutes=59, seconds=59))
    assert issuer.verify(token.value).subject == "1"

    clock.advance(timedelta(seconds=1))
    with pytest.raises(Unauthenticated):
        issuer.verify(token.value)


def test_token_signed_with_other_key_is_rejected(settings: Settings, clock) -> None:
    foreign = TokenIssuer(
        cfg=JwtConfig(
            alg="HS256",
            issuer=settings.jwt_issuer,
            audience=settings.jwt_audience,
            secret="another-secret-0123456789abcdef0123456789",
        ),
        clock=clock,
    )
    ours = TokenIssuer.from_settings(settings, clock=clock)

    with pytest.raises(Unauthenticated):
        ours.verify(foreign.issue("1", "u", ["admin"]).value)


def test_token_for_other_audience_is_rejected(settings: Settings, clock) -> None:
    other = TokenIssuer(
        cfg=JwtConfig(
            alg=settings.jwt_alg,
            issuer=settings.jwt_issuer,
            audience="someone-else",
            secret=settings.jwt_secret,
        ),
        clock=clock,
    )
    ours = TokenIssuer.from_settings(settings, clock=clock)

    with pytest.raises(Unauthenticated):
        ours.verify(other.issue("1", "u", []).value)


def test_tampered_payload_is_rejected(issuer: TokenIssuer) -> None:
    header, _payload, signature = issuer.issue("1", "u", ["user"]).value.split(".")
    forged_payload = jwt.encode(
        {"sub": "1", "roles": ["admin"]}, "irrelevant-key-0123456789abcdef01234", algorithm="HS256"
    ).split(".")[1]

    with pytest.raises(Unauthenticated):
        issuer.verify(f"{header}.{forged_payload}.{signature}")


@pytest.mark.parametrize("garbage", ["", "not-a-jwt", "a.b.c"])
def test_malformed_token_is_rejected(issuer: TokenIssuer, garbage: str) -> None:
    with pytest.raises(Unauthenticated):
        issuer.verify(garbage)


def test_token_without_required_claims_is_rejected(settings: Settings, issuer: TokenIssuer) -> None:
    bare = jwt.encode({"sub": "1"}, settings.jwt_secret, algorithm=settings.jwt_alg)

    with pytest.raises(Unauthenticated):
        issuer.verify(bare)


def test_non_positive_lifetime_is_refused(settings: Settings) -> None:
    with pytest.raises(ValueError):
        TokenIssuer(cfg=JwtConfig.from_settings(settings), lifetime=timedelta(0))


def test_secret_is_not_in_repr(settings: Settings) -> None:
    assert settings.jwt_secret not in repr(JwtConfig.from_settings(settings))


# --- Module Notes -----------------------------------------------------------
# Expiry is checked against the issuer's own clock, so these tests never sleep.
