"""Session token service.

Provides JWT creation and verification for authentication.
"""

from datetime import datetime, timedelta, timezone
from uuid import UUID

import jwt

from juander_auth.exceptions import InvalidTokenError
from juander_auth.schemas import TokenPayload


class JWTService:
    """Service for session token creation and verification.

    Tokens carry the principal id plus a snapshot of role and name, and
    expire a fixed time after issuance. There are no refresh tokens.

    Examples
    --------
    >>> service = JWTService(secret_key="your-secret-key")
    >>> token = service.create_access_token(user_id, "tourist", "Ana", "Cruz")
    >>> payload = service.verify_token(token)
    >>> print(payload.user_id)
    """

    DEFAULT_ACCESS_EXPIRE_HOURS = 24
    ALGORITHM = "HS256"

    def __init__(
        self,
        secret_key: str,
        access_token_expire_hours: int = DEFAULT_ACCESS_EXPIRE_HOURS,
    ):
        """Initialize the JWT service.

        Parameters
        ----------
        secret_key
            Secret key for signing tokens. Must be kept secure.
        access_token_expire_hours
            Hours until a token expires (default 24)
        """
        if not secret_key:
            msg = "JWT secret key cannot be empty"
            raise ValueError(msg)

        self._secret_key = secret_key
        self._access_expire = timedelta(hours=access_token_expire_hours)

    def create_access_token(
        self,
        user_id: UUID,
        role: str,
        first_name: str | None = None,
        last_name: str | None = None,
        expires_delta: timedelta | None = None,
    ) -> str:
        """Create a session token.

        Parameters
        ----------
        user_id
            The user's unique identifier
        role
            The user's role at issuance
        first_name
            The user's first name at issuance
        last_name
            The user's last name at issuance
        expires_delta
            Custom expiration time (optional)

        Returns
        -------
        The encoded JWT token string
        """
        now = datetime.now(tz=timezone.utc)
        expire = now + (expires_delta or self._access_expire)

        payload = {
            "id": str(user_id),
            "role": role,
            "firstName": first_name,
            "lastName": last_name,
            "iat": now,
            "exp": expire,
        }

        return jwt.encode(payload, self._secret_key, algorithm=self.ALGORITHM)

    def verify_token(self, token: str) -> TokenPayload:
        """Verify and decode a session token.

        Parameters
        ----------
        token
            The JWT token string to verify

        Returns
        -------
        TokenPayload containing the decoded data

        Raises
        ------
        InvalidTokenError
            If token is invalid, expired, or malformed
        """
        try:
            payload = jwt.decode(
                token,
                self._secret_key,
                algorithms=[self.ALGORITHM],
                options={"require": ["exp", "id"]},
            )

            return TokenPayload(
                user_id=UUID(payload["id"]),
                exp=datetime.fromtimestamp(payload["exp"], tz=timezone.utc),
                role=payload.get("role"),
                first_name=payload.get("firstName"),
                last_name=payload.get("lastName"),
            )

        except jwt.ExpiredSignatureError as e:
            raise InvalidTokenError("Token has expired") from e
        except jwt.InvalidTokenError as e:
            raise InvalidTokenError(f"Invalid token: {e}") from e
        except (KeyError, ValueError, TypeError, AttributeError) as e:
            raise InvalidTokenError(f"Malformed token payload: {e}") from e
