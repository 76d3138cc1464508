"""Per-request base URL and issuer resolution."""

from oidcmock.core.errors import ConfigurationError

HTTP = "http://"
HTTPS = "https://"
REALMS_PATH = "/auth/realms/"


def resolve_base_url(
    request_host: str | None,
    configured_default: str | None,
    tls_active: bool,
) -> str:
    """Resolve the base URL a client used to reach the mock.

    A host indicator on the request wins over the configured default, so
    one mock reachable under several hostnames answers each client with
    URLs for the hostname it actually used.
    """
    if request_host:
        return (HTTPS if tls_active else HTTP) + request_host
    if configured_default:
        return configured_default.rstrip("/")
    raise ConfigurationError(
        "Cannot resolve issuer: no request host and no configured base URL"
    )


def build_issuer(base_url: str, realm: str) -> str:
    """Build the issuer URL of ``realm`` under ``base_url``."""
    if not realm:
        raise ConfigurationError("Cannot resolve issuer: realm is empty")
    return base_url.rstrip("/") + REALMS_PATH + realm
