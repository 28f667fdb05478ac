from datetime import datetime, timedelta, timezone

import pytest
from jose import jwt

from snsfeed.core import security
from snsfeed.core.config import settings
from snsfeed.core.durations import parse_duration


@pytest.mark.parametrize(
    "value, expected",
    [
        ("30m", timedelta(minutes=30)),
        ("2h", timedelta(hours=2)),
        ("7d", timedelta(days=7)),
        ("1w", timedelta(weeks=1)),
        ("45s", timedelta(seconds=45)),
        ("500ms", timedelta(milliseconds=500)),
        ("90", timedelta(seconds=90)),
        ("1.5h", timedelta(minutes=90)),
        ("10 minutes", timedelta(minutes=10)),
    ],
)
def test_parse_duration(value, expected):
    assert parse_duration(value) == expected


@pytest.mark.parametrize("value", ["", "abc", "10 parsecs", "-5m"])
def test_parse_duration_rejects_garbage(value):
    with pytest.raises(ValueError):
        parse_duration(value)


def test_generate_refresh_token_shape_and_uniqueness():
    tokens = {security.generate_refresh_token() for _ in range(50)}
    assert len(tokens) == 50
    for token in tokens:
        assert len(token) == 128
        assert token == token.lower()
        int(token, 16)


def test_password_hash_roundtrip():
    hashed = security.get_password_hash("password123!")
    assert security.verify_password("password123!", hashed)
    assert not security.verify_password("password124!", hashed)


def test_verify_password_with_malformed_hash():
    assert security.verify_password("password123!", "not-a-hash") is False


def test_access_token_decodes():
    token = security.create_access_token({"sub": 7, "loginId": "user123"}, expires_in="5m")
    payload = security.decode_access_token(token)
    assert payload["sub"] == "7"
    assert payload["loginId"] == "user123"
    assert payload["exp"] - payload["iat"] == 300


def test_expired_access_token_is_rejected():
    now = datetime.now(timezone.utc)
    token = jwt.encode(
        {
            "sub": "1",
            "iss": settings.JWT_ISSUER,
            "aud": settings.JWT_AUDIENCE,
            "iat": now - timedelta(hours=1),
            "exp": now - timedelta(minutes=1),
            "token_type": "access",
        },
        settings.SECRET_KEY,
        algorithm=settings.ALGORITHM,
    )
    assert security.decode_access_token(token) is None


def test_access_token_signed_with_another_key_is_rejected():
    token = jwt.encode(
        {"sub": "1", "iss": settings.JWT_ISSUER, "aud": settings.JWT_AUDIENCE, "token_type": "access"},
        "some-other-secret",
        algorithm=settings.ALGORITHM,
    )
    assert security.decode_access_token(token) is None
