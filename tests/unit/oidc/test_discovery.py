"""Tests for OIDC discovery document."""

from oidcmock.oidc.discovery import build_discovery

BASE_URL = "https://auth.example.com"
ISSUER = f"{BASE_URL}/auth/realms/master"


class TestBuildDiscovery:
    """Tests for discovery document generation."""

    def test_has_all_required_fields(self) -> None:
        doc = build_discovery(ISSUER, BASE_URL)
        assert doc.issuer == ISSUER
        assert doc.authorization_endpoint == f"{BASE_URL}/authenticate"
        assert doc.token_endpoint == f"{ISSUER}/protocol/openid-connect/token"
        assert doc.jwks_uri == f"{ISSUER}/protocol/openid-connect/certs"
        assert doc.end_session_endpoint == f"{BASE_URL}/logout"

    def test_supported_values(self) -> None:
        doc = build_discovery(ISSUER, BASE_URL)
        assert doc.response_types_supported == [
            "code",
            "code id_token",
            "id_token",
            "token id_token",
        ]
        assert doc.subject_types_supported == ["public"]
        assert doc.id_token_signing_alg_values_supported == [
            "RS256",
            "ES256",
            "HS256",
        ]

    def test_trailing_slash_stripped(self) -> None:
        doc = build_discovery(ISSUER + "/", BASE_URL + "/")
        assert doc.issuer == ISSUER
        assert doc.end_session_endpoint == f"{BASE_URL}/logout"

    def test_serialized_field_set(self) -> None:
        doc = build_discovery(ISSUER, BASE_URL).model_dump()
        assert set(doc) == {
            "issuer",
            "authorization_endpoint",
            "token_endpoint",
            "jwks_uri",
            "response_types_supported",
            "subject_types_supported",
            "id_token_signing_alg_values_supported",
            "end_session_endpoint",
        }
