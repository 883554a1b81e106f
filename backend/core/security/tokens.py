"""
JWT token service for authentication.
"""

from dataclasses import dataclass
from datetime import UTC, datetime, timedelta

from jose import JWTError, jwt

from core.exceptions import InvalidTokenError

ACCESS_TOKEN_TYPE = "access"
BEARER_SCHEME = "Bearer"


@dataclass
class TokenPayload:
    """JWT token payload structure."""

    sub: str  # Subject (publisher ID)
    exp: datetime  # Expiration time
    iat: datetime  # Issued at
    type: str  # Token type


class TokenService:
    """Service for creating and validating JWT tokens."""

    def __init__(
        self,
        secret_key: str,
        algorithm: str = "HS256",
        access_token_expire_minutes: int = 7 * 24 * 60,
    ):
        """
        Initialize the token service.

        Args:
            secret_key: Secret key for signing tokens
            algorithm: JWT algorithm (default: HS256)
            access_token_expire_minutes: Access token lifetime in minutes
        """
        self._secret_key = secret_key
        self._algorithm = algorithm
        self._access_token_expire_minutes = access_token_expire_minutes

    @property
    def expires_in_seconds(self) -> int:
        """Lifetime of newly issued access tokens, in seconds."""
        return self._access_token_expire_minutes * 60

    def create_access_token(self, publisher_id: str) -> str:
        """
        Create an access token.

        Args:
            publisher_id: Publisher ID to encode as the token subject

        Returns:
            Encoded JWT access token
        """
        now = datetime.now(UTC)
        expire = now + timedelta(minutes=self._access_token_expire_minutes)

        payload = {
            "sub": str(publisher_id),
            "exp": expire,
            "iat": now,
            "type": ACCESS_TOKEN_TYPE,
        }

        return jwt.encode(payload, self._secret_key, algorithm=self._algorithm)

    def decode_token(self, token: str) -> TokenPayload:
        """
        Decode and validate a JWT token.

        Args:
            token: JWT token to decode

        Returns:
            TokenPayload for a correctly signed, unexpired token

        Raises:
            InvalidTokenError: If the token is malformed, has a bad
                signature, lacks required claims, or has expired
        """
        try:
            payload = jwt.decode(
                token,
                self._secret_key,
                algorithms=[self._algorithm],
            )
        except JWTError as exc:
            raise InvalidTokenError(str(exc)) from exc

        for field in ("sub", "exp", "type"):
            if not payload.get(field):
                raise InvalidTokenError(f"Missing required field: {field}")

        try:
            return TokenPayload(
                sub=str(payload["sub"]),
                exp=datetime.fromtimestamp(payload["exp"], tz=UTC),
                iat=datetime.fromtimestamp(payload.get("iat", 0), tz=UTC),
                type=payload["type"],
            )
        except (TypeError, ValueError, OverflowError) as exc:
            raise InvalidTokenError(f"Malformed claims: {exc}") from exc

    def verify_access_token(self, token: str) -> str:
        """
        Verify an access token.

        Args:
            token: JWT token to verify

        Returns:
            The publisher ID the token was issued to

        Raises:
            InvalidTokenError: If the token is not a valid access token
        """
        payload = self.decode_token(token)
        if payload.type != ACCESS_TOKEN_TYPE:
            raise InvalidTokenError(f"Unexpected token type: {payload.type}")
        return payload.sub


def extract_bearer_token(authorization: str | None) -> str | None:
    """
    Pull the token out of an ``Authorization: Bearer <token>`` header.

    The header must split on whitespace into exactly two parts, the first
    being ``Bearer`` (case-sensitive). Any other shape means "no token".
    """
    if not authorization:
        return None
    parts = authorization.split()
    if len(parts) == 2 and parts[0] == BEARER_SCHEME:
        return parts[1]
    return None
