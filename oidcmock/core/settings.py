"""Mock server settings loaded from environment variables."""

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from oidcmock.crypto.types import Algorithm

PORT_DEFAULT = 8000
REALM_DEFAULT = "master"
TOKEN_LIFETIME_DEFAULT = 36_000


class ServerSettings(BaseSettings):
    """Network, realm and signing settings of one mock instance."""

    model_config = SettingsConfigDict(env_prefix="OIDCMOCK_")

    hostname: str = "localhost"
    bind_address: str = "0.0.0.0"
    port: int = Field(default=PORT_DEFAULT, ge=1, le=65535)
    realm: str = REALM_DEFAULT
    tls: bool = False
    algorithm: Algorithm = Algorithm.RS256
    token_lifetime: int = Field(default=TOKEN_LIFETIME_DEFAULT, gt=0)
    tls_certfile: str | None = None
    tls_keyfile: str | None = None

    @field_validator("hostname", "realm")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("must not be empty")
        return value

    @property
    def scheme(self) -> str:
        return "https" if self.tls else "http"

    @property
    def base_url(self) -> str:
        """Build the default externally visible base URL."""
        return f"{self.scheme}://{self.hostname}:{self.port}"
