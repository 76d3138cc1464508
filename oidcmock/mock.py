"""A mock OpenID Connect provider that issues tokens on demand.

The mock owns one signing key for its lifetime. Tests call
:meth:`OidcMock.get_access_token` directly to obtain a token for an
``Authorization`` header, while the relying party under test fetches the
discovery document and the JWKS over HTTP to validate it.
"""

import logging
import threading
import time
from types import TracebackType
from typing import Any, Self

import uvicorn
from fastapi import FastAPI

from oidcmock.core.app import create_app
from oidcmock.core.errors import ConfigurationError, ServerError
from oidcmock.core.settings import ServerSettings
from oidcmock.crypto.keys import KeyMaterial
from oidcmock.crypto.types import Algorithm, JWKSResponse
from oidcmock.oidc.discovery import DiscoveryDocument, build_discovery
from oidcmock.oidc.issuer import build_issuer, resolve_base_url
from oidcmock.oidc.jwks import JwkSetProvider
from oidcmock.token.generator import TokenGenerator
from oidcmock.token.types import TokenConfig

logger = logging.getLogger(__name__)

STARTUP_TIMEOUT = 10.0
SHUTDOWN_TIMEOUT = 5.0
POLL_INTERVAL = 0.01


class OidcMock:
    """One mock identity provider: a signing key, its JWKS, and an HTTP server.

    Several instances can live in one process; each has its own key.
    """

    def __init__(self, settings: ServerSettings | None = None) -> None:
        self._settings = settings or ServerSettings()
        self._key_material = KeyMaterial(self._settings.algorithm)
        self._token_generator = TokenGenerator(
            self._key_material, self._settings.token_lifetime
        )
        self._jwks_provider = JwkSetProvider(self._key_material)
        self._app = create_app(self._settings, self._jwks_provider)
        self._server: uvicorn.Server | None = None
        self._thread: threading.Thread | None = None

    @property
    def settings(self) -> ServerSettings:
        return self._settings

    @property
    def app(self) -> FastAPI:
        return self._app

    @property
    def kid(self) -> str:
        return self._key_material.kid

    @property
    def algorithm(self) -> Algorithm:
        return self._key_material.algorithm

    @property
    def is_running(self) -> bool:
        return self._server is not None

    def issuer(self, base_url: str | None = None, realm: str | None = None) -> str:
        """Issuer URL for ``realm`` under ``base_url`` (defaults from settings)."""
        if base_url is None:
            base_url = self._settings.base_url
        if realm is None:
            realm = self._settings.realm
        return build_issuer(
            resolve_base_url(None, base_url, self._settings.tls), realm
        )

    def get_access_token(self, config: TokenConfig) -> str:
        """Get a signed access token for the given configuration.

        ``config.hostname`` and ``config.realm`` select the issuer when set,
        otherwise the configured base URL and realm are used.
        """
        base_url = resolve_base_url(
            config.hostname, self._settings.base_url, self._settings.tls
        )
        return self._token_generator.issue(
            config, self.issuer(base_url, config.realm)
        )

    def get_access_token_for(
        self, config: TokenConfig, base_url: str, realm: str
    ) -> str:
        """Get a signed access token for an explicit base URL and realm."""
        return self._token_generator.issue(config, build_issuer(base_url, realm))

    def jwks(self) -> JWKSResponse:
        return self._jwks_provider.render()

    def discovery(
        self, base_url: str | None = None, realm: str | None = None
    ) -> DiscoveryDocument:
        if base_url is None:
            base_url = self._settings.base_url
        return build_discovery(self.issuer(base_url, realm), base_url)

    def verify(
        self,
        token: str,
        audience: str | None = None,
        issuer: str | None = None,
        verify_exp: bool = True,
    ) -> dict[str, Any]:
        """Verify a token against this instance's key and return its claims.

        Pass ``verify_exp=False`` to read back tokens issued already expired.
        """
        return self._key_material.verify(
            token, audience=audience, issuer=issuer, verify_exp=verify_exp
        )

    def _server_config(self) -> uvicorn.Config:
        ssl: dict[str, Any] = {}
        if self._settings.tls:
            if not self._settings.tls_certfile or not self._settings.tls_keyfile:
                raise ConfigurationError(
                    "TLS requires both tls_certfile and tls_keyfile"
                )
            ssl = {
                "ssl_certfile": self._settings.tls_certfile,
                "ssl_keyfile": self._settings.tls_keyfile,
            }
        return uvicorn.Config(
            self._app,
            host=self._settings.bind_address,
            port=self._settings.port,
            log_level="warning",
            **ssl,
        )

    def start(self) -> None:
        """Start the HTTP server in a background thread (blocking until ready)."""
        if self._server is not None:
            logger.warning("Start request ignored as server is already running")
            return
        server = uvicorn.Server(self._server_config())
        thread = threading.Thread(
            target=server.run, name="oidcmock-server", daemon=True
        )
        thread.start()
        deadline = time.monotonic() + STARTUP_TIMEOUT
        while not server.started:
            if not thread.is_alive():
                raise ServerError(
                    f"Error while starting mock server on port {self._settings.port}"
                )
            if time.monotonic() > deadline:
                server.should_exit = True
                thread.join(SHUTDOWN_TIMEOUT)
                raise ServerError("Timed out while starting mock server")
            time.sleep(POLL_INTERVAL)
        self._server = server
        self._thread = thread
        logger.info(
            "Mock server listening on %s (realm %s, %s)",
            self._settings.base_url,
            self._settings.realm,
            self.algorithm,
        )

    def stop(self) -> None:
        """Stop the HTTP server (blocking); a no-op when it is not running."""
        if self._server is None or self._thread is None:
            return
        self._server.should_exit = True
        self._thread.join(SHUTDOWN_TIMEOUT)
        if self._thread.is_alive():
            raise ServerError("Timed out while stopping mock server")
        self._server = None
        self._thread = None
        logger.info("Mock server on port %d stopped", self._settings.port)

    def __enter__(self) -> Self:
        self.start()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.stop()
