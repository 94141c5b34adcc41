"""Unit tests for session token verification."""

from datetime import UTC, datetime, timedelta

import jwt
import pytest

from countdown_timers.infrastructure.auth import ShopSessionTokenVerifier, bearer_token

SECRET = "test-secret"


def _token(secret: str = SECRET, **claims) -> str:
    payload = {
        "dest": "https://demo.myshopify.com",
        "exp": datetime.now(UTC) + timedelta(minutes=1),
        "iat": datetime.now(UTC),
    }
    payload.update(claims)
    return jwt.encode(payload, secret, algorithm="HS256")


@pytest.fixture
def verifier() -> ShopSessionTokenVerifier:
    return ShopSessionTokenVerifier(secret_key=SECRET)


def test_valid_token_yields_shop_from_dest(verifier: ShopSessionTokenVerifier):
    assert verifier.verify(_token()) == "demo.myshopify.com"


def test_shop_claim_is_used_without_dest(verifier: ShopSessionTokenVerifier):
    assert verifier.verify(_token(dest=None, shop="other.myshopify.com")) == "other.myshopify.com"


def test_missing_token_means_no_session(verifier: ShopSessionTokenVerifier):
    assert verifier.verify(None) is None
    assert verifier.verify("") is None


def test_wrong_signature_is_rejected(verifier: ShopSessionTokenVerifier):
    assert verifier.verify(_token(secret="someone-else")) is None


def test_expired_token_is_rejected(verifier: ShopSessionTokenVerifier):
    expired = _token(exp=datetime.now(UTC) - timedelta(minutes=5))
    assert verifier.verify(expired) is None


def test_no_secret_configured_never_authenticates():
    assert ShopSessionTokenVerifier(secret_key="").verify(_token()) is None


@pytest.mark.parametrize(
    ("header", "expected"),
    [
        ("Bearer abc.def.ghi", "abc.def.ghi"),
        ("bearer   tok  ", "tok"),
        ("Basic dXNlcjpwYXNz", None),
        ("Bearer", None),
        (None, None),
    ],
)
def test_bearer_token_parsing(header: str | None, expected: str | None):
    assert bearer_token(header) == expected
