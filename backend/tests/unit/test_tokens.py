"""
Unit tests for JWT issuing/verification and bearer header parsing.
"""

from datetime import UTC, datetime, timedelta

import pytest
from jose import jwt

from core.exceptions import InvalidTokenError
from core.security.tokens import TokenService, extract_bearer_token

SECRET = "unit-test-secret-key-with-enough-length"


@pytest.fixture
def service() -> TokenService:
    return TokenService(secret_key=SECRET, access_token_expire_minutes=60)


class TestTokenService:
    """Tests for issuing and verifying access tokens."""

    def test_round_trip_returns_publisher_id(self, service: TokenService):
        token = service.create_access_token("pub-123")
        assert service.verify_access_token(token) == "pub-123"

    def test_payload_carries_type_and_expiry(self, service: TokenService):
        before = datetime.now(UTC).replace(microsecond=0)
        payload = service.decode_token(service.create_access_token("pub-123"))

        assert payload.sub == "pub-123"
        assert payload.type == "access"
        assert payload.exp >= before + timedelta(minutes=59)

    def test_expires_in_seconds(self, service: TokenService):
        assert service.expires_in_seconds == 3600

    def test_expired_token_rejected(self):
        expired = TokenService(secret_key=SECRET, access_token_expire_minutes=-1)
        token = expired.create_access_token("pub-123")

        with pytest.raises(InvalidTokenError):
            expired.verify_access_token(token)

    def test_token_signed_with_other_secret_rejected(self, service: TokenService):
        forged = TokenService(secret_key="another-secret-entirely-0123456789")
        token = forged.create_access_token("pub-123")

        with pytest.raises(InvalidTokenError):
            service.verify_access_token(token)

    def test_tampered_token_rejected(self, service: TokenService):
        header, _, signature = service.create_access_token("pub-123").split(".")
        _, other_payload, _ = service.create_access_token("pub-999").split(".")
        tampered = f"{header}.{other_payload}.{signature}"

        with pytest.raises(InvalidTokenError):
            service.verify_access_token(tampered)

    def test_garbage_rejected(self, service: TokenService):
        with pytest.raises(InvalidTokenError):
            service.verify_access_token("not.a.jwt")

    def test_missing_subject_rejected(self, service: TokenService):
        token = jwt.encode(
            {"exp": datetime.now(UTC) + timedelta(minutes=5), "type": "access"},
            SECRET,
            algorithm="HS256",
        )
        with pytest.raises(InvalidTokenError, match="sub"):
            service.verify_access_token(token)

    def test_wrong_token_type_rejected(self, service: TokenService):
        token = jwt.encode(
            {
                "sub": "pub-123",
                "exp": datetime.now(UTC) + timedelta(minutes=5),
                "type": "refresh",
            },
            SECRET,
            algorithm="HS256",
        )
        with pytest.raises(InvalidTokenError, match="type"):
            service.verify_access_token(token)


class TestExtractBearerToken:
    """Tests for Authorization header parsing."""

    def test_valid_header(self):
        assert extract_bearer_token("Bearer abc.def.ghi") == "abc.def.ghi"

    def test_extra_whitespace_tolerated(self):
        assert extract_bearer_token("Bearer   abc.def.ghi ") == "abc.def.ghi"

    @pytest.mark.parametrize(
        "header",
        [
            None,
            "",
            "Bearer",
            "bearer abc.def.ghi",
            "Basic dXNlcjpwYXNz",
            "Bearer abc def",
            "abc.def.ghi",
        ],
    )
    def test_malformed_headers_yield_none(self, header):
        assert extract_bearer_token(header) is None
