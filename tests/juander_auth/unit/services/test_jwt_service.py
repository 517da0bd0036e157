"""Unit tests for JWTService."""

from datetime import datetime, timedelta, timezone
from uuid import uuid4

import jwt
import pytest

from juander_auth.exceptions import InvalidTokenError
from juander_auth.services import JWTService

SECRET = "test-secret-key-12345"


class TestJWTServiceInit:
    def test_init_with_empty_secret_raises(self):
        with pytest.raises(ValueError, match="cannot be empty"):
            JWTService(secret_key="")


class TestAccessTokens:
    """Tests for token creation and verification."""

    def setup_method(self):
        self.service = JWTService(secret_key=SECRET)
        self.user_id = uuid4()

    def test_token_carries_id_role_and_names(self):
        token = self.service.create_access_token(
            user_id=self.user_id,
            role="tourist",
            first_name="Juan",
            last_name="Dela Cruz",
        )

        payload = self.service.verify_token(token)

        assert payload.user_id == self.user_id
        assert payload.role == "tourist"
        assert payload.first_name == "Juan"
        assert payload.last_name == "Dela Cruz"

    def test_raw_claims_use_camel_case_names(self):
        token = self.service.create_access_token(
            user_id=self.user_id,
            role="admin",
            first_name="Ana",
        )

        claims = jwt.decode(token, SECRET, algorithms=["HS256"])

        assert claims["id"] == str(self.user_id)
        assert claims["firstName"] == "Ana"
        assert "exp" in claims
        assert "iat" in claims

    def test_default_expiry_is_one_day(self):
        before = datetime.now(tz=timezone.utc)
        token = self.service.create_access_token(user_id=self.user_id, role="tourist")

        payload = self.service.verify_token(token)

        lifetime = payload.exp - before
        assert timedelta(hours=23, minutes=59) <= lifetime <= timedelta(hours=24, seconds=5)

    def test_expired_token_raises(self):
        token = self.service.create_access_token(
            user_id=self.user_id,
            role="tourist",
            expires_delta=timedelta(seconds=-1),
        )

        with pytest.raises(InvalidTokenError, match="expired"):
            self.service.verify_token(token)

    def test_token_signed_with_other_secret_raises(self):
        other = JWTService(secret_key="another-secret")
        token = other.create_access_token(user_id=self.user_id, role="tourist")

        with pytest.raises(InvalidTokenError):
            self.service.verify_token(token)

    def test_garbage_token_raises(self):
        with pytest.raises(InvalidTokenError):
            self.service.verify_token("not.a.token")

    def test_token_without_id_raises(self):
        token = jwt.encode(
            {"exp": datetime.now(tz=timezone.utc) + timedelta(hours=1)},
            SECRET,
            algorithm="HS256",
        )

        with pytest.raises(InvalidTokenError):
            self.service.verify_token(token)

    def test_token_with_non_uuid_id_raises(self):
        token = jwt.encode(
            {"id": "not-a-uuid", "exp": datetime.now(tz=timezone.utc) + timedelta(hours=1)},
            SECRET,
            algorithm="HS256",
        )

        with pytest.raises(InvalidTokenError, match="Malformed"):
            self.service.verify_token(token)

    def test_unsigned_token_is_rejected(self):
        token = jwt.encode(
            {"id": str(self.user_id), "exp": datetime.now(tz=timezone.utc) + timedelta(hours=1)},
            None,
            algorithm="none",
        )

        with pytest.raises(InvalidTokenError):
            self.service.verify_token(token)
