"""
Unit Tests for Security Module
Tests for: password hashing, JWT tokens
"""
import pytest
from datetime import timedelta
from types import SimpleNamespace
from jose import jwt
from fastapi import HTTPException

from syllabus_hub.core.config import settings
from syllabus_hub.core.security import (
    ACCESS_TOKEN_TYPE,
    REFRESH_TOKEN_TYPE,
    create_access_token,
    create_refresh_token,
    create_token_pair,
    decode_token,
    get_password_hash,
    verify_password,
)
from syllabus_hub.models.user import UserRole


class TestPasswordHashing:
    """Test password hashing functions"""

    def test_hash_is_not_plaintext(self):
        hashed = get_password_hash("testpassword123")

        assert hashed != "testpassword123"
        assert hashed.startswith("$2")

    def test_hash_password_different_each_time(self):
        """Bcrypt salts every hash"""
        assert get_password_hash("testpassword123") != get_password_hash("testpassword123")

    def test_verify_password_correct(self):
        hashed = get_password_hash("testpassword123")

        assert verify_password("testpassword123", hashed) is True

    def test_verify_password_incorrect(self):
        hashed = get_password_hash("testpassword123")

        assert verify_password("wrongpassword", hashed) is False

    def test_verify_password_empty_hash(self):
        assert verify_password("anything", "") is False
        assert verify_password("anything", None) is False

    def test_hash_long_password_truncated(self):
        """Only the first 72 bytes take part in the hash"""
        hashed = get_password_hash("a" * 100)

        assert verify_password("a" * 100, hashed) is True
        assert verify_password("a" * 72 + "different-tail", hashed) is True


class TestTokens:
    """Test JWT creation and decoding"""

    def test_access_token_carries_type_and_subject(self):
        token = create_access_token({"sub": "user-1"})
        payload = decode_token(token)

        assert payload["sub"] == "user-1"
        assert payload["type"] == ACCESS_TOKEN_TYPE
        assert "exp" in payload

    def test_refresh_token_type(self):
        payload = decode_token(create_refresh_token({"sub": "user-1"}))

        assert payload["type"] == REFRESH_TOKEN_TYPE

    def test_refresh_outlives_access(self):
        access = decode_token(create_access_token({"sub": "u"}))
        refresh = decode_token(create_refresh_token({"sub": "u"}))

        assert refresh["exp"] > access["exp"]

    def test_expired_token_rejected(self):
        token = create_access_token({"sub": "user-1"}, expires_delta=timedelta(seconds=-5))

        with pytest.raises(HTTPException) as exc_info:
            decode_token(token)

        assert exc_info.value.status_code == 401

    def test_token_signed_with_other_key_rejected(self):
        forged = jwt.encode({"sub": "user-1", "type": "access"}, "not-the-key", algorithm=settings.JWT_ALGORITHM)

        with pytest.raises(HTTPException) as exc_info:
            decode_token(forged)

        assert exc_info.value.detail == "Could not validate credentials"

    def test_garbage_token_rejected(self):
        with pytest.raises(HTTPException):
            decode_token("not.a.jwt")

    def test_token_pair(self):
        user = SimpleNamespace(id="abc", email="a@b.com", role=UserRole.MODERATOR)

        pair = create_token_pair(user)

        assert pair["token_type"] == "bearer"
        access = decode_token(pair["access_token"])
        refresh = decode_token(pair["refresh_token"])
        assert access["sub"] == refresh["sub"] == "abc"
        assert access["role"] == "moderator"
        assert access["type"] == ACCESS_TOKEN_TYPE
        assert refresh["type"] == REFRESH_TOKEN_TYPE
