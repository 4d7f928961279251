"""
Unit tests for the authentication context.
"""

import pytest
from fastapi import HTTPException

from aboga.api.deps import get_auth_context
from aboga.core.config import BackendConfig
from aboga.core.exceptions import AuthenticationError
from aboga.core.security import AuthContext, AuthUser, InputValidator, get_token_safe, resolve_auth_context


@pytest.fixture
def backend_config(config):
    return config.backend


class TestTokenExtraction:
    def test_bearer(self):
        assert get_token_safe("Bearer abc") == "abc"

    @pytest.mark.parametrize("header", [None, "", "Basic abc", "Bearer", "Bearer a b"])
    def test_invalid_headers(self, header):
        assert get_token_safe(header) is None


class TestResolveAuthContext:
    def test_no_token_is_visitor(self, backend_config):
        auth = resolve_auth_context(None, backend_config)
        assert auth.user is None
        assert auth.is_authenticated is False
        assert auth.is_anonymous is False
        assert auth.user_id is None

    def test_non_bearer_header_is_visitor(self, backend_config):
        assert resolve_auth_context("Basic abc", backend_config).user is None

    def test_valid_token(self, backend_config, token_factory):
        auth = resolve_auth_context(f"Bearer {token_factory('user-7')}", backend_config)
        assert auth.user_id == "user-7"
        assert auth.user.email == "user-7@example.com"
        assert auth.is_authenticated is True

    def test_anonymous_sign_in_is_not_authenticated(self, backend_config, token_factory):
        auth = resolve_auth_context(f"Bearer {token_factory('anon-1', is_anonymous=True)}", backend_config)
        assert auth.user_id == "anon-1"
        assert auth.is_anonymous is True
        assert auth.is_authenticated is False

    def test_wrong_secret(self, backend_config, token_factory):
        with pytest.raises(AuthenticationError):
            resolve_auth_context(f"Bearer {token_factory(secret='other-secret')}", backend_config)

    def test_wrong_audience(self, backend_config, token_factory):
        with pytest.raises(AuthenticationError):
            resolve_auth_context(f"Bearer {token_factory(aud='service_role')}", backend_config)

    def test_secret_not_configured(self, token_factory):
        config = BackendConfig(data_backend="sql", supabase_jwt_secret="")
        with pytest.raises(AuthenticationError):
            resolve_auth_context(f"Bearer {token_factory()}", config)


class TestSignOut:
    def test_clears_user_and_runs_callbacks(self):
        cleared = []
        auth = AuthContext(user=AuthUser(id="user-1"), access_token="token")
        auth.on_sign_out(lambda: cleared.append("aboga_session_id"))

        auth.sign_out()

        assert auth.user is None
        assert auth.access_token is None
        assert auth.is_authenticated is False
        assert cleared == ["aboga_session_id"]

        auth.sign_out()
        assert cleared == ["aboga_session_id"]


class TestInputValidator:
    def test_trims(self):
        assert InputValidator.validate_query("  hola  ") == "hola"

    def test_truncates(self):
        assert len(InputValidator.validate_query("a" * 3000, max_length=2000)) == 2000

    def test_blank(self):
        assert InputValidator.validate_query("   ") == ""


class TestResolvedContextTeardown:
    def test_sign_out_clears_cached_session_key(self, config):
        auth = get_auth_context(authorization=None, config=config)
        assert auth.cleared_storage_keys == []

        auth.sign_out()

        assert auth.cleared_storage_keys == ["aboga_session_id"]

    def test_invalid_token_is_a_401_envelope(self, config, token_factory):
        with pytest.raises(HTTPException) as exc_info:
            get_auth_context(authorization=f"Bearer {token_factory(secret='other-secret')}", config=config)
        assert exc_info.value.status_code == 401
        assert exc_info.value.detail["metadata"]["statusCode"] == 401
