"""JSON Web Key Set rendering."""

from oidcmock.crypto.keys import KeyMaterial
from oidcmock.crypto.types import JWKSResponse


class JwkSetProvider:
    """Publishes the public half of a mock's signing key.

    HMAC keys have nothing publishable, so an HS256 mock serves an empty
    key set and its tokens can only be checked with the shared secret.
    """

    def __init__(self, key_material: KeyMaterial) -> None:
        self._key_material = key_material

    def render(self) -> JWKSResponse:
        entry = self._key_material.to_jwk_entry()
        return JWKSResponse(keys=[] if entry is None else [entry])
