"""Token configuration supplied by callers of the mock."""

import copy
from collections.abc import Mapping
from datetime import UTC, datetime
from typing import Any, Self

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

DEFAULT_SUBJECT = "user"
DEFAULT_AUTHORIZED_PARTY = "client"
DEFAULT_SCOPE = "openid"


class TokenConfig(BaseModel):
    """Immutable description of one access token.

    Unset ``issued_at`` means "now" at issuance time, unset ``expiration``
    means the mock's token lifetime after ``issued_at``. Entries in
    ``claims`` are written last and replace any generated claim of the same
    name, including ``iss`` and ``sub``.
    """

    model_config = ConfigDict(frozen=True)

    subject: str = DEFAULT_SUBJECT
    audience: tuple[str, ...] = ()
    authorized_party: str | None = DEFAULT_AUTHORIZED_PARTY
    scope: str | None = DEFAULT_SCOPE
    issued_at: datetime | None = None
    expiration: datetime | None = None
    authentication_time: datetime | None = None
    authentication_context_class_reference: str | None = None
    name: str | None = None
    given_name: str | None = None
    family_name: str | None = None
    email: str | None = None
    preferred_username: str | None = None
    realm_roles: frozenset[str] = frozenset()
    resource_roles: dict[str, frozenset[str]] = Field(default_factory=dict)
    claims: dict[str, Any] = Field(default_factory=dict)
    hostname: str | None = None
    realm: str | None = None

    @field_validator("audience", mode="before")
    @classmethod
    def _single_audience(cls, value: Any) -> Any:
        if isinstance(value, str):
            return (value,)
        return value

    @field_validator("issued_at", "expiration", "authentication_time")
    @classmethod
    def _assume_utc(cls, value: datetime | None) -> datetime | None:
        if value is not None and value.tzinfo is None:
            return value.replace(tzinfo=UTC)
        return value

    @field_validator("claims", mode="after")
    @classmethod
    def _detach_claims(cls, value: dict[str, Any]) -> dict[str, Any]:
        return copy.deepcopy(value)

    @model_validator(mode="after")
    def _check_lifetime(self) -> Self:
        if (
            self.issued_at is not None
            and self.expiration is not None
            and self.expiration < self.issued_at
        ):
            raise ValueError("expiration must not be before issued_at")
        return self

    def with_claim(self, name: str, value: Any) -> "TokenConfig":
        """Return a copy carrying one additional custom claim."""
        return self.with_claims({name: value})

    def with_claims(self, claims: Mapping[str, Any]) -> "TokenConfig":
        """Return a copy with ``claims`` merged over the existing custom claims."""
        merged = {**self.claims, **claims}
        return self.model_validate({**self._fields(), "claims": merged})

    def _fields(self) -> dict[str, Any]:
        return {name: getattr(self, name) for name in type(self).model_fields}
