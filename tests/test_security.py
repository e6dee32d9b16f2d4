"""
Unit tests for security utilities.
"""
import pytest
from datetime import timedelta

from pizza_service.core.security import (
    hash_password,
    verify_password,
    create_access_token,
    decode_token,
    token_signature,
    issue_token,
    is_token_valid,
    revoke_token,
)


class TestPasswordHashing:
    """Tests for password hashing functions."""

    def test_hash_password(self):
        """Test that password hashing produces a hash."""
        password = "mysecretpassword"
        hashed = hash_password(password)

        assert hashed != password
        assert len(hashed) > 20  # bcrypt hashes are long

    def test_hash_password_different_each_time(self):
        """Test that hashing same password produces different hashes."""
        password = "mysecretpassword"
        hash1 = hash_password(password)
        hash2 = hash_password(password)

        assert hash1 != hash2  # Different salts

    def test_verify_password_correct(self):
        password = "mysecretpassword"
        hashed = hash_password(password)

        assert verify_password(password, hashed) is True

    def test_verify_password_incorrect(self):
        password = "mysecretpassword"
        hashed = hash_password(password)

        assert verify_password("wrongpassword", hashed) is False

    def test_verify_password_too_long(self):
        """bcrypt refuses more than 72 bytes; such a password simply does not match."""
        hashed = hash_password("p" * 72)

        assert verify_password("p" * 80, hashed) is False


class TestJWTTokens:
    """Tests for JWT token functions."""

    claims = {"id": 7, "name": "pizza diner", "email": "d@jwt.com", "roles": [{"role": "diner"}]}

    def test_create_access_token(self):
        token = create_access_token(self.claims)

        assert token is not None
        assert token.count(".") == 2

    def test_decode_access_token(self):
        """Test decoding an access token returns the user claims."""
        payload = decode_token(create_access_token(self.claims))

        assert payload is not None
        assert payload["id"] == 7
        assert payload["sub"] == "7"
        assert payload["email"] == "d@jwt.com"
        assert payload["roles"] == [{"role": "diner"}]

    def test_tokens_for_same_claims_differ(self):
        """Two tokens for the same user must be distinguishable."""
        first = create_access_token(self.claims)
        second = create_access_token(self.claims)

        assert first != second
        assert token_signature(first) != token_signature(second)

    def test_decode_invalid_token(self):
        """Test decoding an invalid token returns None."""
        payload = decode_token("invalid.token.here")

        assert payload is None

    def test_decode_expired_token(self):
        token = create_access_token(self.claims, expires_delta=timedelta(minutes=-5))

        assert decode_token(token) is None


class TestTokenSignature:

    def test_extracts_third_segment(self):
        assert token_signature("header.payload.signature") == "signature"

    @pytest.mark.parametrize("token", ["", "no-dots", "header.payload"])
    def test_missing_signature(self, token):
        assert token_signature(token) == ""


class TestSessionTracking:
    """Tests for the auth table backing login state."""

    def test_issue_then_valid(self, db, diner):
        token = create_access_token({"id": diner.id})
        assert is_token_valid(token, db) is False

        issue_token(diner.id, token, db)

        assert is_token_valid(token, db) is True

    def test_revoke_invalidates(self, db, diner):
        token = create_access_token({"id": diner.id})
        issue_token(diner.id, token, db)

        revoke_token(token, db)

        assert is_token_valid(token, db) is False

    def test_revoke_is_idempotent(self, db, diner):
        token = create_access_token({"id": diner.id})
        issue_token(diner.id, token, db)

        revoke_token(token, db)
        revoke_token(token, db)

        assert is_token_valid(token, db) is False

    def test_revoking_one_token_keeps_sibling(self, db, diner):
        first = create_access_token({"id": diner.id})
        second = create_access_token({"id": diner.id})
        issue_token(diner.id, first, db)
        issue_token(diner.id, second, db)

        revoke_token(first, db)

        assert is_token_valid(first, db) is False
        assert is_token_valid(second, db) is True

    def test_malformed_token_is_never_valid(self, db):
        assert is_token_valid("not-a-jwt", db) is False
