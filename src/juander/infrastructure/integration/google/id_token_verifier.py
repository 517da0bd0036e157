"""Verification of Google Sign-In ID tokens."""

from __future__ import annotations

import logging
import time

import httpx
import jwt

from juander_auth.exceptions import FederationVerificationError
from juander_auth.schemas import FederatedIdentity

logger = logging.getLogger(__name__)

GOOGLE_CERTS_URL = "https://www.googleapis.com/oauth2/v3/certs"
GOOGLE_ISSUERS = ("accounts.google.com", "https://accounts.google.com")


class GoogleIdTokenVerifier:
    """Check a Google ID token against Google's published signing keys.

    The key set is fetched with httpx and cached for ``cache_seconds``. An
    unknown key id triggers a refetch, which covers Google's key rotation,
    but at most once every ``min_refetch_seconds`` so forged key ids cannot
    turn each request into a call to Google.
    """

    ALGORITHMS = ["RS256"]

    def __init__(  # NOQA: PLR0913
        self,
        client_id: str,
        certs_url: str = GOOGLE_CERTS_URL,
        timeout: float = 10.0,
        cache_seconds: int = 3600,
        min_refetch_seconds: float = 60.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self._client_id = client_id
        self._certs_url = certs_url
        self._timeout = timeout
        self._cache_seconds = cache_seconds
        self._min_refetch_seconds = min_refetch_seconds
        self._transport = transport
        self._client: httpx.AsyncClient | None = None
        self._keys: dict[str, jwt.PyJWK] = {}
        self._keys_fetched_at: float | None = None

    async def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(
                timeout=self._timeout,
                transport=self._transport,
            )
        return self._client

    async def close(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def _fetch_keys(self) -> None:
        client = await self._get_client()
        try:
            response = await client.get(self._certs_url)
            response.raise_for_status()
            key_set = jwt.PyJWKSet.from_dict(response.json())
        except httpx.HTTPError as e:
            logger.warning("Could not fetch Google signing keys: %s", e)
            raise FederationVerificationError from e
        except (jwt.PyJWTError, ValueError) as e:
            logger.warning("Google returned an unusable key set: %s", e)
            raise FederationVerificationError from e

        self._keys = {key.key_id: key for key in key_set.keys if key.key_id}
        self._keys_fetched_at = time.monotonic()

    async def _get_signing_key(self, key_id: str) -> jwt.PyJWK:
        if self._keys_fetched_at is None:
            await self._fetch_keys()
        else:
            age = time.monotonic() - self._keys_fetched_at
            if age > self._cache_seconds or (
                key_id not in self._keys and age >= self._min_refetch_seconds
            ):
                await self._fetch_keys()

        key = self._keys.get(key_id)
        if key is None:
            logger.warning("Google token signed with unknown key id %s", key_id)
            raise FederationVerificationError
        return key

    async def verify(self, token: str) -> FederatedIdentity:
        """Verify signature, audience, issuer and expiry of an ID token.

        Parameters
        ----------
        token
            The raw ID token sent by the client

        Returns
        -------
        The identity asserted by Google

        Raises
        ------
        FederationVerificationError
            On any verification failure, or when no client id is configured
        """
        if not self._client_id:
            logger.error("Google sign-in attempted but GOOGLE_CLIENT_ID is not set")
            raise FederationVerificationError

        try:
            header = jwt.get_unverified_header(token)
        except jwt.PyJWTError as e:
            raise FederationVerificationError from e

        key_id = header.get("kid")
        if not key_id:
            raise FederationVerificationError

        signing_key = await self._get_signing_key(key_id)

        try:
            claims = jwt.decode(
                token,
                signing_key.key,
                algorithms=self.ALGORITHMS,
                audience=self._client_id,
                options={"require": ["exp", "iat", "aud", "iss", "sub"]},
            )
        except jwt.PyJWTError as e:
            logger.info("Rejected Google ID token: %s", e)
            raise FederationVerificationError from e

        if claims.get("iss") not in GOOGLE_ISSUERS:
            logger.info("Rejected Google ID token from issuer %s", claims.get("iss"))
            raise FederationVerificationError

        email = claims.get("email")
        if not email or claims.get("email_verified") not in (True, "true"):
            raise FederationVerificationError("Google account email is not verified")

        return FederatedIdentity(
            subject=str(claims["sub"]),
            email=email,
            name=claims.get("name"),
            picture=claims.get("picture"),
        )
