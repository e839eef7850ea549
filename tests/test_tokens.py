from datetime import datetime, timedelta, timezone

import jwt
import pytest

from feedback_api.core.security import TokenService

SECRET = "token-test-secret-0123456789abcdef-0123456789abcdef-0123456789abcd"


@pytest.fixture()
def tokens():
    return TokenService(secret=SECRET, algorithm="HS256", expire_minutes=24 * 60, leeway_seconds=0)


def _claims(**overrides):
    now = datetime.now(timezone.utc)
    claims = {"sub": "7", "email": "a@b.com", "iat": int(now.timestamp()), "exp": now + timedelta(hours=1)}
    claims.update(overrides)
    return {k: v for k, v in claims.items() if v is not None}


def test_issued_token_validates_to_user_id(tokens):
    token = tokens.issue(42, "user@example.com")
    assert tokens.validate(token) == 42


def test_issued_token_claims(tokens):
    payload = tokens.decode(tokens.issue(42, "user@example.com"))
    assert payload["sub"] == "42"
    assert payload["email"] == "user@example.com"
    assert payload["exp"] - payload["iat"] == pytest.approx(24 * 3600, abs=2)


def test_expired_token_is_invalid(tokens):
    token = tokens.issue(42, "user@example.com", expires_minutes=-5)
    assert tokens.validate(token) is None


def test_tampered_payload_is_invalid(tokens):
    header, _, signature = tokens.issue(42, "user@example.com").split(".")
    forged_payload = jwt.encode(_claims(sub="1"), SECRET, algorithm="HS256").split(".")[1]
    assert tokens.validate(f"{header}.{forged_payload}.{signature}") is None


def test_other_secret_is_invalid(tokens):
    rotated = TokenService(secret=SECRET[::-1])
    assert rotated.validate(tokens.issue(42, "user@example.com")) is None


def test_unexpected_algorithm_is_invalid(tokens):
    assert tokens.validate(jwt.encode(_claims(), SECRET, algorithm="HS512")) is None
    assert tokens.validate(jwt.encode(_claims(), None, algorithm="none")) is None


def test_non_numeric_subject_is_invalid(tokens):
    assert tokens.validate(jwt.encode(_claims(sub="abc"), SECRET, algorithm="HS256")) is None


def test_missing_required_claims_are_invalid(tokens):
    assert tokens.validate(jwt.encode(_claims(exp=None), SECRET, algorithm="HS256")) is None
    assert tokens.validate(jwt.encode(_claims(sub=None), SECRET, algorithm="HS256")) is None


@pytest.mark.parametrize("token", [None, "", "not-a-token", "a.b.c", "Bearer abc"])
def test_malformed_tokens_are_invalid(tokens, token):
    assert tokens.validate(token) is None
