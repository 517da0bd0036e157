from juander.infrastructure.integration.google.id_token_verifier import (
    GoogleIdTokenVerifier,
)

__all__ = ["GoogleIdTokenVerifier"]
