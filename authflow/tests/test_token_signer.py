from __future__ import annotations

from datetime import UTC, datetime, timedelta

import pytest
from jose import jwt

from authflow.domain.users.exceptions import InvalidTokenError
from authflow.infrastructure.tokens import JoseTokenSigner
from authflow.shared.config import TokenConfig

SECRET = "unit-test-secret"


@pytest.fixture()
def signer() -> JoseTokenSigner:
    return JoseTokenSigner(TokenConfig(secret=SECRET, expires_in="1h"))


def test_sign_embeds_user_id_and_expiry(signer: JoseTokenSigner) -> None:
    token = signer.sign(7)

    payload = jwt.decode(token.token, SECRET, algorithms=["HS256"])
    assert payload["userId"] == 7
    assert payload["exp"] - payload["iat"] == 3600
    assert token.expires_at - token.issued_at == timedelta(hours=1)


def test_verify_round_trip(signer: JoseTokenSigner) -> None:
    token = signer.sign(7)

    claims = signer.verify(token.token)

    assert claims.user_id == 7
    assert claims.expires_at == token.expires_at
    assert claims.issued_at == token.issued_at


def test_verify_rejects_other_secret(signer: JoseTokenSigner) -> None:
    other = JoseTokenSigner(TokenConfig(secret="another-secret", expires_in=3600))

    with pytest.raises(InvalidTokenError):
        signer.verify(other.sign(7).token)


def test_verify_rejects_expired_token() -> None:
    two_days_ago = datetime.now(UTC) - timedelta(days=2)
    stale = JoseTokenSigner(
        TokenConfig(secret=SECRET, expires_in=60), clock=lambda: two_days_ago
    )
    token = stale.sign(7)

    with pytest.raises(InvalidTokenError) as excinfo:
        JoseTokenSigner(TokenConfig(secret=SECRET)).verify(token.token)

    assert excinfo.value.context == {"reason": "expired"}


def test_verify_rejects_tampered_token(signer: JoseTokenSigner) -> None:
    header, _, signature = signer.sign(7).token.split(".")
    forged_payload = jwt.encode({"userId": 1, "exp": 4102444800}, "guess").split(".")[1]

    with pytest.raises(InvalidTokenError):
        signer.verify(f"{header}.{forged_payload}.{signature}")


@pytest.mark.parametrize(
    "claims",
    [
        {"exp": 4102444800},
        {"userId": "7", "exp": 4102444800},
        {"userId": 7},
    ],
)
def test_verify_rejects_bad_claims(signer: JoseTokenSigner, claims: dict) -> None:
    token = jwt.encode(claims, SECRET, algorithm="HS256")

    with pytest.raises(InvalidTokenError):
        signer.verify(token)


@pytest.mark.parametrize("token", ["", "not-a-token", "a.b.c"])
def test_verify_rejects_garbage(signer: JoseTokenSigner, token: str) -> None:
    with pytest.raises(InvalidTokenError):
        signer.verify(token)
