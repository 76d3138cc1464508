"""FastAPI application factory for the mock's HTTP endpoints."""

import logging

from fastapi import FastAPI, Request
from starlette.responses import JSONResponse

from oidcmock.core.errors import ConfigurationError, MockError
from oidcmock.core.settings import ServerSettings
from oidcmock.oidc.jwks import JwkSetProvider
from oidcmock.oidc.routes_discovery import router as discovery_router

logger = logging.getLogger(__name__)

HTTP_BAD_REQUEST = 400
HTTP_SERVER_ERROR = 500


async def _mock_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error("Exception while processing %s", request.url.path, exc_info=exc)
    if isinstance(exc, ConfigurationError):
        error, status = "invalid_request", HTTP_BAD_REQUEST
    else:
        error, status = "server_error", HTTP_SERVER_ERROR
    return JSONResponse(
        {"error": error, "error_description": str(exc)},
        status_code=status,
    )


def create_app(settings: ServerSettings, jwks_provider: JwkSetProvider) -> FastAPI:
    """Build and configure the FastAPI application."""
    app = FastAPI(title="OIDC mock", version="0.1.0")
    app.state.settings = settings
    app.state.jwks_provider = jwks_provider
    app.add_exception_handler(MockError, _mock_error_handler)
    app.include_router(discovery_router)
    return app
