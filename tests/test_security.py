"""
Inkpost Backend — Password Hashing & Token Tests
=================================================

What:  Tests for the bcrypt helpers and the identity token codec.

What we test:
    ✅ Hashes are salted and verify only the original password
    ✅ Token round trip yields the same id and username
    ✅ Tampered, expired, foreign-key and empty tokens are rejected
"""

import uuid
from datetime import timedelta

import pytest
from jose import jwt

from inkpost.config import settings
from inkpost.exceptions import AuthenticationError
from inkpost.security import (
    create_access_token,
    decode_access_token,
    hash_password,
    verify_password,
)


class TestPasswordHashing:

    def test_hash_is_not_plaintext(self):
        hashed = hash_password("s3cret-pass")
        assert hashed != "s3cret-pass"
        assert hashed.startswith("$2")

    def test_same_password_gets_different_salt(self):
        assert hash_password("s3cret-pass") != hash_password("s3cret-pass")

    def test_verify_accepts_original(self):
        hashed = hash_password("s3cret-pass")
        assert verify_password("s3cret-pass", hashed) is True

    def test_verify_rejects_other_password(self):
        hashed = hash_password("s3cret-pass")
        assert verify_password("S3cret-pass", hashed) is False


class TestIdentityToken:

    def setup_method(self):
        self.user_id = uuid.uuid4()

    def test_round_trip(self):
        token = create_access_token(self.user_id, "alice")

        identity = decode_access_token(token)

        assert identity.user_id == self.user_id
        assert identity.username == "alice"

    def test_claims_layout(self):
        token = create_access_token(self.user_id, "alice")
        claims = jwt.get_unverified_claims(token)

        assert claims["username"] == "alice"
        assert claims["id"] == str(self.user_id)
        assert "exp" in claims

    def test_tampered_token_rejected(self):
        token = create_access_token(self.user_id, "alice")
        header, payload, signature = token.split(".")
        forged = jwt.encode(
            {"username": "mallory", "id": str(self.user_id)},
            "not-the-server-secret",
            algorithm="HS256",
        )

        with pytest.raises(AuthenticationError):
            decode_access_token(f"{header}.{forged.split('.')[1]}.{signature}")

    def test_wrong_secret_rejected(self):
        token = jwt.encode(
            {"username": "alice", "id": str(self.user_id)},
            "not-the-server-secret",
            algorithm=settings.jwt_algorithm,
        )
        with pytest.raises(AuthenticationError):
            decode_access_token(token)

    def test_expired_token_rejected(self):
        token = create_access_token(self.user_id, "alice", expires_delta=timedelta(seconds=-30))
        with pytest.raises(AuthenticationError):
            decode_access_token(token)

    def test_missing_claims_rejected(self):
        token = jwt.encode(
            {"username": "alice"}, settings.jwt_secret_key, algorithm=settings.jwt_algorithm
        )
        with pytest.raises(AuthenticationError):
            decode_access_token(token)

    def test_non_uuid_id_rejected(self):
        token = jwt.encode(
            {"username": "alice", "id": "42"},
            settings.jwt_secret_key,
            algorithm=settings.jwt_algorithm,
        )
        with pytest.raises(AuthenticationError):
            decode_access_token(token)

    @pytest.mark.parametrize("token", [None, "", "not-a-jwt"])
    def test_empty_or_garbage_rejected(self, token):
        with pytest.raises(AuthenticationError):
            decode_access_token(token)
