"""Type definitions for signing keys and JWKS documents."""

from enum import StrEnum

from pydantic import BaseModel


class Algorithm(StrEnum):
    """Signing algorithms the mock is able to produce."""

    RS256 = "RS256"
    ES256 = "ES256"
    HS256 = "HS256"

    @property
    def is_symmetric(self) -> bool:
        return self is Algorithm.HS256


class JWKEntry(BaseModel):
    """Single JWK entry in a JWKS response."""

    kty: str
    use: str = "sig"
    alg: str
    kid: str
    n: str | None = None
    e: str | None = None
    crv: str | None = None
    x: str | None = None
    y: str | None = None


class JWKSResponse(BaseModel):
    """JSON Web Key Set response."""

    keys: list[JWKEntry]
