"""Unit tests for GoogleIdTokenVerifier.

Tokens are signed with a throwaway RSA key whose public half is served by
an httpx mock transport in place of Google's certs endpoint.
"""

import json
from datetime import datetime, timedelta, timezone

import httpx
import jwt
import pytest
from cryptography.hazmat.primitives.asymmetric import rsa
from jwt.algorithms import RSAAlgorithm

from juander.infrastructure.integration.google import GoogleIdTokenVerifier
from juander_auth import FederationVerificationError

CLIENT_ID = "juander-web.apps.googleusercontent.com"
CERTS_URL = "https://certs.test/oauth2/v3/certs"
KEY_ID = "test-key-1"


@pytest.fixture(scope="module")
def private_key():
    return rsa.generate_private_key(public_exponent=65537, key_size=2048)


@pytest.fixture(scope="module")
def jwks(private_key) -> dict:
    jwk = json.loads(RSAAlgorithm.to_jwk(private_key.public_key()))
    jwk.update({"kid": KEY_ID, "alg": "RS256", "use": "sig"})
    return {"keys": [jwk]}


@pytest.fixture
def certs_requests() -> list[httpx.Request]:
    return []


@pytest.fixture
async def verifier(jwks, certs_requests):
    def handler(request: httpx.Request) -> httpx.Response:
        certs_requests.append(request)
        return httpx.Response(200, json=jwks)

    verifier = GoogleIdTokenVerifier(
        client_id=CLIENT_ID,
        certs_url=CERTS_URL,
        transport=httpx.MockTransport(handler),
    )
    yield verifier
    await verifier.close()


def _claims(**overrides) -> dict:
    now = datetime.now(tz=timezone.utc)
    claims = {
        "iss": "https://accounts.google.com",
        "aud": CLIENT_ID,
        "sub": "1234567890",
        "email": "juan@gmail.com",
        "email_verified": True,
        "name": "Juan Dela Cruz",
        "picture": "https://lh3.googleusercontent.com/juan.png",
        "iat": now,
        "exp": now + timedelta(hours=1),
    }
    claims.update(overrides)
    return claims


def _sign(private_key, claims: dict, key_id: str = KEY_ID) -> str:
    return jwt.encode(claims, private_key, algorithm="RS256", headers={"kid": key_id})


class TestGoogleIdTokenVerifier:
    async def test_valid_token(self, verifier, private_key):
        identity = await verifier.verify(_sign(private_key, _claims()))

        assert identity.subject == "1234567890"
        assert identity.email == "juan@gmail.com"
        assert identity.name == "Juan Dela Cruz"
        assert identity.picture == "https://lh3.googleusercontent.com/juan.png"

    async def test_keys_are_cached(self, verifier, private_key, certs_requests):
        await verifier.verify(_sign(private_key, _claims()))
        await verifier.verify(_sign(private_key, _claims()))

        assert len(certs_requests) == 1

    async def test_wrong_audience(self, verifier, private_key):
        token = _sign(private_key, _claims(aud="someone-else"))

        with pytest.raises(FederationVerificationError):
            await verifier.verify(token)

    async def test_wrong_issuer(self, verifier, private_key):
        token = _sign(private_key, _claims(iss="https://evil.example.com"))

        with pytest.raises(FederationVerificationError):
            await verifier.verify(token)

    async def test_expired_token(self, verifier, private_key):
        past = datetime.now(tz=timezone.utc) - timedelta(hours=2)
        token = _sign(private_key, _claims(iat=past, exp=past + timedelta(hours=1)))

        with pytest.raises(FederationVerificationError):
            await verifier.verify(token)

    async def test_unverified_email(self, verifier, private_key):
        token = _sign(private_key, _claims(email_verified=False))

        with pytest.raises(FederationVerificationError, match="not verified"):
            await verifier.verify(token)

    async def test_token_signed_by_other_key(self, verifier):
        other_key = rsa.generate_private_key(public_exponent=65537, key_size=2048)

        with pytest.raises(FederationVerificationError):
            await verifier.verify(_sign(other_key, _claims()))

    async def test_unknown_key_id_refetches_once(self, verifier, private_key, certs_requests):
        with pytest.raises(FederationVerificationError):
            await verifier.verify(_sign(private_key, _claims(), key_id="rotated"))

        assert len(certs_requests) == 1

    async def test_unknown_key_ids_do_not_refetch_within_interval(
        self, verifier, private_key, certs_requests
    ):
        await verifier.verify(_sign(private_key, _claims()))

        for key_id in ("forged-1", "forged-2", "forged-3"):
            with pytest.raises(FederationVerificationError):
                await verifier.verify(_sign(private_key, _claims(), key_id=key_id))

        assert len(certs_requests) == 1

    async def test_unknown_key_id_refetches_after_interval(self, private_key, jwks):
        requests = []

        def handler(request: httpx.Request) -> httpx.Response:
            requests.append(request)
            return httpx.Response(200, json=jwks)

        verifier = GoogleIdTokenVerifier(
            client_id=CLIENT_ID,
            certs_url=CERTS_URL,
            min_refetch_seconds=0,
            transport=httpx.MockTransport(handler),
        )
        await verifier.verify(_sign(private_key, _claims()))

        with pytest.raises(FederationVerificationError):
            await verifier.verify(_sign(private_key, _claims(), key_id="rotated"))

        assert len(requests) == 2
        await verifier.close()

    async def test_garbage_token(self, verifier):
        with pytest.raises(FederationVerificationError):
            await verifier.verify("not-a-jwt")

    async def test_missing_client_id(self, private_key, jwks):
        verifier = GoogleIdTokenVerifier(
            client_id="",
            transport=httpx.MockTransport(lambda request: httpx.Response(200, json=jwks)),
        )

        with pytest.raises(FederationVerificationError):
            await verifier.verify(_sign(private_key, _claims()))

    async def test_certs_endpoint_down(self, private_key):
        verifier = GoogleIdTokenVerifier(
            client_id=CLIENT_ID,
            certs_url=CERTS_URL,
            transport=httpx.MockTransport(lambda request: httpx.Response(503)),
        )

        with pytest.raises(FederationVerificationError):
            await verifier.verify(_sign(private_key, _claims()))

        await verifier.close()
