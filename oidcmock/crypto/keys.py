"""Signing key generation, key identifiers, and JWK conversion."""

import base64
import hashlib
import json
import logging
import secrets
from collections.abc import Mapping
from typing import Any

import jwt
from cryptography.exceptions import UnsupportedAlgorithm
from cryptography.hazmat.primitives.asymmetric import ec, rsa
from jwt.types import Options

from oidcmock.core.errors import ConfigurationError, KeyGenerationError, SigningError
from oidcmock.crypto.types import Algorithm, JWKEntry

logger = logging.getLogger(__name__)

RSA_KEY_SIZE = 2048
RSA_PUBLIC_EXPONENT = 65537
HMAC_SECRET_BYTES = 64
EC_CURVE_NAME = "P-256"
EC_COORDINATE_BYTES = 32

PublicKey = rsa.RSAPublicKey | ec.EllipticCurvePublicKey


def _bytes_to_base64url(raw: bytes) -> str:
    """Encode bytes as base64url without padding."""
    return base64.urlsafe_b64encode(raw).rstrip(b"=").decode()


def _int_to_base64url(value: int, byte_length: int | None = None) -> str:
    """Encode an integer as base64url without padding."""
    if byte_length is None:
        byte_length = (value.bit_length() + 7) // 8
    return _bytes_to_base64url(value.to_bytes(byte_length, byteorder="big"))


def jwk_thumbprint(members: Mapping[str, str]) -> str:
    """RFC 7638 SHA-256 thumbprint over the required JWK members."""
    canonical = json.dumps(dict(members), sort_keys=True, separators=(",", ":"))
    return _bytes_to_base64url(hashlib.sha256(canonical.encode("utf-8")).digest())


def _generate(algorithm: Algorithm) -> tuple[Any, PublicKey | None]:
    if algorithm is Algorithm.RS256:
        private_key = rsa.generate_private_key(
            public_exponent=RSA_PUBLIC_EXPONENT,
            key_size=RSA_KEY_SIZE,
        )
        return private_key, private_key.public_key()
    if algorithm is Algorithm.ES256:
        private_key = ec.generate_private_key(ec.SECP256R1())
        return private_key, private_key.public_key()
    return secrets.token_bytes(HMAC_SECRET_BYTES), None


class KeyMaterial:
    """The single signing key of a mock instance.

    The key is generated on construction and never rotated. The private key
    (or HMAC secret) stays inside this object: callers can sign and verify
    through it, but only the public half is ever exported.
    """

    def __init__(self, algorithm: Algorithm | str = Algorithm.RS256) -> None:
        try:
            self._algorithm = Algorithm(algorithm)
        except ValueError as exc:
            raise ConfigurationError(
                f"Unsupported signing algorithm: {algorithm!r}"
            ) from exc
        try:
            self._signing_key, self._public_key = _generate(self._algorithm)
        except (ValueError, TypeError, OSError, UnsupportedAlgorithm) as exc:
            raise KeyGenerationError(
                f"Could not generate {self._algorithm} signing key"
            ) from exc
        self._kid = jwk_thumbprint(self._thumbprint_members())
        logger.info("Generated %s signing key kid=%s", self._algorithm, self._kid)

    @property
    def algorithm(self) -> Algorithm:
        return self._algorithm

    @property
    def kid(self) -> str:
        return self._kid

    @property
    def public_key(self) -> PublicKey | None:
        """Public key, or None for symmetric algorithms."""
        return self._public_key

    def _thumbprint_members(self) -> dict[str, str]:
        if self._algorithm.is_symmetric:
            return {"kty": "oct", "k": _bytes_to_base64url(self._signing_key)}
        return self._public_members()

    def _public_members(self) -> dict[str, str]:
        if isinstance(self._public_key, rsa.RSAPublicKey):
            numbers = self._public_key.public_numbers()
            return {
                "kty": "RSA",
                "n": _int_to_base64url(numbers.n),
                "e": _int_to_base64url(numbers.e),
            }
        ec_numbers = self._public_key.public_numbers()
        return {
            "kty": "EC",
            "crv": EC_CURVE_NAME,
            "x": _int_to_base64url(ec_numbers.x, EC_COORDINATE_BYTES),
            "y": _int_to_base64url(ec_numbers.y, EC_COORDINATE_BYTES),
        }

    def to_jwk_entry(self) -> JWKEntry | None:
        """Convert the public key to JWK format; None for HMAC keys."""
        if self._algorithm.is_symmetric:
            return None
        return JWKEntry(
            alg=self._algorithm.value,
            kid=self._kid,
            **self._public_members(),
        )

    def sign(self, payload: Mapping[str, Any]) -> str:
        """Sign a claim set into a compact JWS carrying this key's kid."""
        try:
            return jwt.encode(
                dict(payload),
                self._signing_key,
                algorithm=self._algorithm.value,
                headers={"kid": self._kid},
            )
        except (jwt.PyJWTError, TypeError, ValueError) as exc:
            raise SigningError(f"Could not sign token: {exc}") from exc

    def verify(
        self,
        token: str,
        audience: str | None = None,
        issuer: str | None = None,
        verify_exp: bool = True,
    ) -> dict[str, Any]:
        """Verify and decode a token signed with this key."""
        opts: Options = {}
        if audience is None:
            opts["verify_aud"] = False
        if not verify_exp:
            opts["verify_exp"] = False
        if self._algorithm.is_symmetric:
            verification_key = self._signing_key
        else:
            verification_key = self._public_key
        return jwt.decode(
            token,
            verification_key,
            algorithms=[self._algorithm.value],
            audience=audience,
            issuer=issuer,
            options=opts,
        )
