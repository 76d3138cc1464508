"""Realm-scoped OIDC discovery and JWKS endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, Request

from oidcmock.core.settings import ServerSettings
from oidcmock.crypto.types import JWKSResponse
from oidcmock.oidc.discovery import DiscoveryDocument, build_discovery
from oidcmock.oidc.issuer import build_issuer, resolve_base_url
from oidcmock.oidc.jwks import JwkSetProvider

router = APIRouter(prefix="/auth/realms/{realm}")


def _load_settings(request: Request) -> ServerSettings:
    return request.app.state.settings


def _load_jwks_provider(request: Request) -> JwkSetProvider:
    return request.app.state.jwks_provider


def request_base_url(
    request: Request,
    settings: Annotated[ServerSettings, Depends(_load_settings)],
) -> str:
    """Base URL as seen by the client, from the Host header and scheme."""
    return resolve_base_url(
        request.headers.get("host"),
        settings.base_url,
        request.url.scheme == "https",
    )


@router.get(
    "/protocol/openid-connect/certs",
    response_model=JWKSResponse,
    response_model_exclude_none=True,
)
async def jwks(
    realm: str,
    provider: Annotated[JwkSetProvider, Depends(_load_jwks_provider)],
) -> JWKSResponse:
    """JSON Web Key Set endpoint."""
    return provider.render()


@router.get("/.well-known/openid-configuration")
async def openid_configuration(
    realm: str,
    base_url: Annotated[str, Depends(request_base_url)],
) -> DiscoveryDocument:
    """OpenID Connect Discovery 1.0."""
    return build_discovery(build_issuer(base_url, realm), base_url)
