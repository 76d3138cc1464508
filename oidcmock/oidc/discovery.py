"""OpenID Connect Discovery document builder."""

from pydantic import BaseModel

from oidcmock.crypto.types import Algorithm

RESPONSE_TYPES_SUPPORTED = ["code", "code id_token", "id_token", "token id_token"]
SUBJECT_TYPES_SUPPORTED = ["public"]


class DiscoveryDocument(BaseModel):
    """OIDC .well-known/openid-configuration response."""

    issuer: str
    authorization_endpoint: str
    token_endpoint: str
    jwks_uri: str
    response_types_supported: list[str]
    subject_types_supported: list[str]
    id_token_signing_alg_values_supported: list[str]
    end_session_endpoint: str


def build_discovery(issuer: str, base_url: str) -> DiscoveryDocument:
    """Build the discovery document for one resolved issuer.

    The algorithm list names every algorithm the mock can sign with, not
    the one algorithm of the running instance.
    """
    issuer = issuer.rstrip("/")
    base_url = base_url.rstrip("/")
    return DiscoveryDocument(
        issuer=issuer,
        authorization_endpoint=f"{base_url}/authenticate",
        token_endpoint=f"{issuer}/protocol/openid-connect/token",
        jwks_uri=f"{issuer}/protocol/openid-connect/certs",
        response_types_supported=list(RESPONSE_TYPES_SUPPORTED),
        subject_types_supported=list(SUBJECT_TYPES_SUPPORTED),
        id_token_signing_alg_values_supported=[a.value for a in Algorithm],
        end_session_endpoint=f"{base_url}/logout",
    )
