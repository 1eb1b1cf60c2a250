# tests/test_security.py
"""Tests for password hashing and session tokens."""

from datetime import timedelta

import pytest
from jose import jwt

from inkpost.core.security import (
    InvalidTokenError,
    create_access_token,
    decode_access_token,
    hash_password,
    verify_password,
)


class TestPasswordHashing:
    def test_hash_is_salted_bcrypt(self):
        first = hash_password("hunter2")
        second = hash_password("hunter2")
        assert first != second
        assert first.startswith("$2b$")
        assert "hunter2" not in first

    def test_verify_password(self):
        digest = hash_password("hunter2")
        assert verify_password("hunter2", digest)
        assert not verify_password("hunter3", digest)

    def test_rounds_come_from_settings(self, test_settings):
        digest = hash_password("hunter2")
        assert digest.split("$")[2] == f"{test_settings.bcrypt_rounds:02d}"


class TestAccessTokens:
    def test_round_trip(self):
        token = create_access_token(42)
        assert decode_access_token(token) == 42

    def test_token_carries_only_subject_and_times(self, test_settings):
        token = create_access_token(7)
        claims = jwt.decode(token, test_settings.secret_key, algorithms=[test_settings.jwt_algorithm])
        assert set(claims) == {"sub", "iat", "exp"}
        assert claims["sub"] == "7"

    def test_default_expiry_is_24_hours(self, test_settings):
        token = create_access_token(7)
        claims = jwt.get_unverified_claims(token)
        assert claims["exp"] - claims["iat"] == pytest.approx(24 * 60 * 60, abs=2)
        assert test_settings.access_token_expire_minutes == 24 * 60

    def test_expired_token_is_rejected(self):
        token = create_access_token(42, expires_delta=timedelta(seconds=-5))
        with pytest.raises(InvalidTokenError):
            decode_access_token(token)

    def test_wrong_secret_is_rejected(self):
        token = jwt.encode({"sub": "42"}, "some-other-secret", algorithm="HS256")
        with pytest.raises(InvalidTokenError):
            decode_access_token(token)

    def test_malformed_token_is_rejected(self):
        with pytest.raises(InvalidTokenError):
            decode_access_token("not.a.jwt")

    def test_missing_subject_is_rejected(self, test_settings):
        token = jwt.encode({"iat": 1}, test_settings.secret_key, algorithm=test_settings.jwt_algorithm)
        with pytest.raises(InvalidTokenError):
            decode_access_token(token)

    def test_non_numeric_subject_is_rejected(self, test_settings):
        token = jwt.encode({"sub": "alice"}, test_settings.secret_key, algorithm=test_settings.jwt_algorithm)
        with pytest.raises(InvalidTokenError):
            decode_access_token(token)
