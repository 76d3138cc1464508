"""Access token construction and signing."""

import logging
from datetime import UTC, datetime, timedelta
from typing import Any

import uuid_utils

from oidcmock.core.errors import ConfigurationError
from oidcmock.core.settings import TOKEN_LIFETIME_DEFAULT
from oidcmock.crypto.keys import KeyMaterial
from oidcmock.token.types import TokenConfig

logger = logging.getLogger(__name__)

TOKEN_TYPE = "Bearer"
REALM_ACCESS_CLAIM = "realm_access"
RESOURCE_ACCESS_CLAIM = "resource_access"


class TokenGenerator:
    """Creates signed access tokens shaped like Keycloak's."""

    def __init__(
        self,
        key_material: KeyMaterial,
        token_lifetime: int = TOKEN_LIFETIME_DEFAULT,
    ) -> None:
        self._key_material = key_material
        self._token_lifetime = timedelta(seconds=token_lifetime)

    @property
    def key_material(self) -> KeyMaterial:
        return self._key_material

    def issue(self, config: TokenConfig, issuer: str) -> str:
        """Build the claim set for ``config`` and sign it as a compact JWT."""
        payload = self.build_claims(config, issuer)
        token = self._key_material.sign(payload)
        logger.debug(
            "Issued token sub=%s kid=%s jti=%s",
            payload.get("sub"),
            self._key_material.kid,
            payload.get("jti"),
        )
        return token

    def build_claims(self, config: TokenConfig, issuer: str) -> dict[str, Any]:
        """Assemble the unsigned claim set; custom claims are applied last."""
        issued_at = config.issued_at or datetime.now(UTC)
        expiration = config.expiration or issued_at + self._token_lifetime
        if expiration < issued_at:
            raise ConfigurationError(
                f"Token expiration {expiration.isoformat()} is before issuance "
                f"{issued_at.isoformat()}"
            )
        payload: dict[str, Any] = {
            "jti": str(uuid_utils.uuid4()),
            "iss": issuer,
            "sub": config.subject,
            "iat": issued_at,
            "exp": expiration,
            "typ": TOKEN_TYPE,
        }
        if config.audience:
            payload["aud"] = list(config.audience)
        optional = {
            "azp": config.authorized_party,
            "scope": config.scope,
            "auth_time": config.authentication_time,
            "acr": config.authentication_context_class_reference,
            "name": config.name,
            "given_name": config.given_name,
            "family_name": config.family_name,
            "email": config.email,
            "preferred_username": config.preferred_username,
        }
        payload.update({k: v for k, v in optional.items() if v is not None})
        if isinstance(payload.get("auth_time"), datetime):
            payload["auth_time"] = int(payload["auth_time"].timestamp())
        payload[REALM_ACCESS_CLAIM] = {"roles": sorted(config.realm_roles)}
        payload[RESOURCE_ACCESS_CLAIM] = {
            resource: {"roles": sorted(roles)}
            for resource, roles in sorted(config.resource_roles.items())
        }
        payload.update(config.claims)
        return payload
