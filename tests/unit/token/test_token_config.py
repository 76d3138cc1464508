"""Tests for token configuration values."""

from datetime import UTC, datetime, timedelta

import pytest
from pydantic import ValidationError

from oidcmock.token.types import TokenConfig


class TestTokenConfig:
    """Tests for defaults, validation and immutability."""

    def test_defaults(self) -> None:
        config = TokenConfig()
        assert config.subject == "user"
        assert config.audience == ()
        assert config.authorized_party == "client"
        assert config.scope == "openid"
        assert config.realm_roles == frozenset()
        assert dict(config.claims) == {}

    def test_single_audience_string(self) -> None:
        assert TokenConfig(audience="server").audience == ("server",)

    def test_expiration_before_issuance_rejected(self) -> None:
        now = datetime.now(UTC)
        with pytest.raises(ValidationError, match="expiration"):
            TokenConfig(issued_at=now, expiration=now - timedelta(seconds=1))

    def test_naive_datetimes_are_utc(self) -> None:
        config = TokenConfig(issued_at=datetime(2024, 1, 1, 12, 0))
        assert config.issued_at == datetime(2024, 1, 1, 12, 0, tzinfo=UTC)

    def test_is_frozen(self) -> None:
        config = TokenConfig()
        with pytest.raises(ValidationError):
            config.subject = "mallory"

    def test_claims_detached_from_caller(self) -> None:
        groups = ["a"]
        claims = {"tenant": "a", "groups": groups}
        config = TokenConfig(claims=claims)
        claims["tenant"] = "b"
        groups.append("b")
        assert config.claims == {"tenant": "a", "groups": ["a"]}

    def test_roles_from_lists(self) -> None:
        config = TokenConfig(
            realm_roles=["admin", "user"],
            resource_roles={"server": ["read"]},
        )
        assert config.realm_roles == {"admin", "user"}
        assert config.resource_roles["server"] == {"read"}


class TestWithClaims:
    """Tests for copy-on-write claim helpers."""

    def test_with_claim_returns_new_config(self) -> None:
        base = TokenConfig(subject="alice")
        extended = base.with_claim("tenant", "acme")
        assert extended.claims["tenant"] == "acme"
        assert extended.subject == "alice"
        assert "tenant" not in base.claims

    def test_with_claims_overrides_existing(self) -> None:
        config = TokenConfig(claims={"a": 1, "b": 2}).with_claims({"b": 3})
        assert dict(config.claims) == {"a": 1, "b": 3}
