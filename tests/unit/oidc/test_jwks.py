"""Tests for JWKS rendering."""

import jwt

from oidcmock.crypto.keys import KeyMaterial
from oidcmock.crypto.types import Algorithm
from oidcmock.oidc.jwks import JwkSetProvider


class TestRender:
    """Tests for JwkSetProvider.render."""

    def test_rsa_key_set(self) -> None:
        km = KeyMaterial(Algorithm.RS256)
        jwks = JwkSetProvider(km).render()
        assert len(jwks.keys) == 1
        assert jwks.keys[0].kid == km.kid
        assert jwks.keys[0].kty == "RSA"

    def test_idempotent(self) -> None:
        provider = JwkSetProvider(KeyMaterial(Algorithm.ES256))
        assert provider.render() == provider.render()

    def test_hmac_key_set_is_empty(self) -> None:
        assert JwkSetProvider(KeyMaterial(Algorithm.HS256)).render().keys == []

    def test_published_key_verifies_token(self) -> None:
        km = KeyMaterial(Algorithm.ES256)
        token = km.sign({"sub": "alice"})
        entry = JwkSetProvider(km).render().keys[0]
        assert entry.kid == jwt.get_unverified_header(token)["kid"]
        key = jwt.PyJWK(entry.model_dump(exclude_none=True))
        claims = jwt.decode(token, key.key, algorithms=["ES256"])
        assert claims["sub"] == "alice"
