"""
Tests for password hashing and session tokens.
"""
from datetime import datetime, timedelta, timezone

import jwt
import pytest

from devsync.security import (
    check_password,
    decode_token,
    hash_password,
    issue_token,
)

TEST_SECRET = "test-secret-0123456789abcdef0123456789abcdef"


class TestPasswords:
    """Tests for hash_password() / check_password()."""

    def test_hash_is_not_plaintext(self):
        """Stored hash never equals the password."""
        hashed = hash_password("hunter22")
        assert hashed != "hunter22"

    def test_correct_password_matches(self):
        assert check_password(hash_password("hunter22"), "hunter22") is True

    def test_wrong_password_rejected(self):
        assert check_password(hash_password("hunter22"), "hunter23") is False

    def test_missing_hash_rejected(self):
        """An empty stored hash never matches."""
        assert check_password("", "anything") is False


class TestTokens:
    """Tests for issue_token() / decode_token()."""

    def test_token_binds_account_id(self):
        """A freshly issued token decodes to its account id."""
        assert decode_token(issue_token(42)) == 42

    def test_bearer_prefix_accepted(self):
        """'Bearer <jwt>' values are accepted."""
        assert decode_token(f"Bearer {issue_token(7)}") == 7

    def test_expired_token_rejected(self):
        """A token past its exp is rejected."""
        token = issue_token(42, ttl_seconds=-10)
        assert decode_token(token) is None

    def test_wrong_signature_rejected(self):
        """A token signed with another secret is rejected."""
        payload = {
            "sub": "42",
            "exp": datetime.now(timezone.utc) + timedelta(hours=1),
        }
        forged = jwt.encode(payload, "another-secret-0123456789abcdef0123456789", algorithm="HS256")
        assert decode_token(forged) is None

    def test_tampered_token_rejected(self):
        """Altering the payload invalidates the signature."""
        token = issue_token(42)
        header, payload, signature = token.split(".")
        tampered = ".".join([header, payload[:-2] + ("AA" if payload[-2:] != "AA" else "BB"), signature])
        assert decode_token(tampered) is None

    @pytest.mark.parametrize("token", [None, "", "   ", "not-a-jwt", "Bearer ", 12345])
    def test_missing_or_malformed_rejected(self, token):
        assert decode_token(token) is None

    def test_non_integer_subject_rejected(self):
        """A validly signed token whose subject is not an account id is rejected."""
        payload = {
            "sub": "alice",
            "exp": datetime.now(timezone.utc) + timedelta(hours=1),
        }
        token = jwt.encode(payload, TEST_SECRET, algorithm="HS256")
        assert decode_token(token) is None

    def test_token_without_expiry_rejected(self):
        """Tokens must carry an expiry."""
        token = jwt.encode({"sub": "42"}, TEST_SECRET, algorithm="HS256")
        assert decode_token(token) is None
