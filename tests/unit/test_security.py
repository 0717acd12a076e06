"""
Unit Tests for Security Module
Tests for: password hashing, JWT tokens, token subjects
"""
import pytest
from datetime import timedelta
from jose import jwt

from app.core.config import settings
from app.core.exceptions import InvalidTokenError, TokenExpiredError
from app.core.security import (
    verify_password,
    get_password_hash,
    create_access_token,
    create_refresh_token,
    decode_token,
    token_subject,
    issue_token_pair,
)
from app.models.user import UserRole


class TestPasswordHashing:
    """Test password hashing functions"""

    def test_hash_password_returns_different_value(self):
        """Test that hashing returns a different value than input"""
        password = "testpassword123"
        hashed = get_password_hash(password)

        assert hashed != password
        assert hashed.startswith("$2")

    def test_hash_password_different_each_time(self):
        """Test that hashing same password returns different hashes"""
        hash1 = get_password_hash("testpassword123")
        hash2 = get_password_hash("testpassword123")

        # Bcrypt generates different salts
        assert hash1 != hash2

    def test_verify_password_correct(self):
        hashed = get_password_hash("testpassword123")

        assert verify_password("testpassword123", hashed) is True

    def test_verify_password_incorrect(self):
        hashed = get_password_hash("testpassword123")

        assert verify_password("wrongpassword", hashed) is False

    def test_verify_against_non_bcrypt_value(self):
        """A stored plaintext value never verifies"""
        assert verify_password("secret", "secret") is False

    def test_hash_long_password_truncated(self):
        """Bcrypt has a 72 byte limit"""
        long_password = "a" * 100
        hashed = get_password_hash(long_password)

        assert verify_password(long_password, hashed) is True


class TestTokens:
    """Test JWT creation and decoding"""

    def test_access_token_round_trip(self):
        token = create_access_token({"sub": "7"})
        payload = decode_token(token)

        assert payload["sub"] == "7"
        assert payload["type"] == "access"
        assert "exp" in payload

    def test_refresh_token_type(self):
        payload = decode_token(create_refresh_token({"sub": "7"}))

        assert payload["type"] == "refresh"

    def test_expired_token_raises(self):
        token = create_access_token({"sub": "7"}, expires_delta=timedelta(seconds=-10))

        with pytest.raises(TokenExpiredError):
            decode_token(token)

    def test_token_signed_with_other_key_rejected(self):
        token = jwt.encode({"sub": "7", "type": "access"}, "another-key", algorithm=settings.JWT_ALGORITHM)

        with pytest.raises(InvalidTokenError):
            decode_token(token)

    def test_garbage_token_rejected(self):
        with pytest.raises(InvalidTokenError):
            decode_token("not.a.token")


class TestTokenSubject:

    def test_returns_integer_user_id(self):
        assert token_subject({"sub": "42", "type": "access"}, "access") == 42

    def test_wrong_type_rejected(self):
        with pytest.raises(InvalidTokenError):
            token_subject({"sub": "42", "type": "refresh"}, "access")

    @pytest.mark.parametrize("sub", [None, "abc", ""])
    def test_bad_subject_rejected(self, sub):
        with pytest.raises(InvalidTokenError):
            token_subject({"sub": sub, "type": "access"}, "access")


def test_issue_token_pair_carries_user_claims():
    user = {"id": 3, "username": "asha", "role": UserRole.FINANCE}

    pair = issue_token_pair(user)
    access = decode_token(pair["access_token"])
    refresh = decode_token(pair["refresh_token"])

    assert pair["token_type"] == "bearer"
    assert access["sub"] == "3"
    assert access["role"] == "finance"
    assert access["username"] == "asha"
    assert refresh["type"] == "refresh"
