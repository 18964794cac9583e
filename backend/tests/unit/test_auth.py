"""
Unit tests for authentication functions.

Tests JWT token generation, validation, password hashing,
role-based authentication and startup configuration checks.
"""

from datetime import datetime, timedelta, timezone
from types import SimpleNamespace

import bcrypt
import jwt
import pytest
from core import reset_settings
from domain.exceptions import ConfigurationError
from domain.value_objects.enums import UserRole
from fastapi import HTTPException
from infrastructure.auth import (
    JWT_ALGORITHM,
    generate_jwt_token,
    get_jwt_secret,
    get_user_role,
    hash_password,
    require_admin,
    validate_auth_configuration,
    validate_jwt_token,
    validate_password_with_role,
)


def request_with_role(role):
    return SimpleNamespace(state=SimpleNamespace(user_role=role))


class TestPasswordValidation:
    """Tests for password validation functions."""

    @pytest.mark.auth
    def test_validate_password_with_role_admin(self, mock_env_vars):
        """Test validating admin password returns admin role."""
        assert validate_password_with_role(mock_env_vars["test_password"]) == UserRole.ADMIN

    @pytest.mark.auth
    def test_validate_password_with_role_invalid(self, mock_env_vars):
        """Test validating invalid password returns None."""
        assert validate_password_with_role("wrong_password") is None
        assert validate_password_with_role("") is None

    @pytest.mark.auth
    def test_validate_password_with_role_guest(self, mock_env_vars, monkeypatch):
        """Test validating guest password returns guest role."""
        guest_hash = bcrypt.hashpw("guest_password".encode(), bcrypt.gensalt()).decode()
        monkeypatch.setenv("GUEST_PASSWORD_HASH", guest_hash)
        monkeypatch.setenv("ENABLE_GUEST_LOGIN", "true")

        assert validate_password_with_role("guest_password") == UserRole.GUEST
        assert validate_password_with_role(mock_env_vars["test_password"]) == UserRole.ADMIN

    @pytest.mark.auth
    def test_guest_password_rejected_when_disabled(self, mock_env_vars, monkeypatch):
        """Test the guest hash is ignored unless guest login is enabled."""
        monkeypatch.setenv("GUEST_PASSWORD_HASH", hash_password("guest_password"))

        assert validate_password_with_role("guest_password") is None

    @pytest.mark.auth
    def test_malformed_hash(self, mock_env_vars, monkeypatch):
        """Test a malformed stored hash fails closed."""
        monkeypatch.setenv("API_KEY_HASH", "not-a-bcrypt-hash")

        assert validate_password_with_role("anything") is None

    @pytest.mark.auth
    def test_hash_password(self):
        hashed = hash_password("s3cret")
        assert bcrypt.checkpw(b"s3cret", hashed.encode())


class TestJWTTokens:
    """Tests for JWT token generation and validation."""

    @pytest.mark.auth
    def test_generate_and_validate(self, mock_env_vars):
        """Test a generated token validates and carries the role."""
        token = generate_jwt_token(role=UserRole.GUEST)

        payload = validate_jwt_token(token)

        assert payload["role"] == "guest"
        assert payload["type"] == "access_token"

    @pytest.mark.auth
    def test_default_expiration(self, mock_env_vars):
        """Test tokens expire after seven days by default."""
        payload = validate_jwt_token(generate_jwt_token())

        lifetime = payload["exp"] - payload["iat"]
        assert lifetime == int(timedelta(hours=168).total_seconds())

    @pytest.mark.auth
    def test_expired_token(self, mock_env_vars):
        """Test expired tokens are rejected."""
        now = datetime.now(timezone.utc)
        token = jwt.encode(
            {"exp": now - timedelta(hours=1), "iat": now - timedelta(hours=2), "role": "admin"},
            mock_env_vars["jwt_secret"],
            algorithm=JWT_ALGORITHM,
        )

        assert validate_jwt_token(token) is None

    @pytest.mark.auth
    def test_wrong_secret(self, mock_env_vars):
        """Test tokens signed with another secret are rejected."""
        token = jwt.encode({"role": "admin"}, "some_other_secret_value_long_enough", algorithm=JWT_ALGORITHM)

        assert validate_jwt_token(token) is None

    @pytest.mark.auth
    def test_garbage_token(self, mock_env_vars):
        assert validate_jwt_token("not.a.token") is None


class TestConfiguration:
    """Tests for fail-fast auth configuration."""

    @pytest.mark.auth
    def test_valid_configuration(self, mock_env_vars):
        validate_auth_configuration()

    @pytest.mark.auth
    def test_missing_admin_hash(self, monkeypatch):
        """Test a missing admin hash is a configuration error."""
        monkeypatch.setenv("API_KEY_HASH", "")
        monkeypatch.setenv("JWT_SECRET", "secret")
        reset_settings()

        with pytest.raises(ConfigurationError, match="API_KEY_HASH"):
            validate_auth_configuration()

        reset_settings()

    @pytest.mark.auth
    def test_missing_jwt_secret(self, mock_env_vars, monkeypatch):
        """Test a missing JWT secret is a configuration error."""
        monkeypatch.setenv("JWT_SECRET", "")

        with pytest.raises(ConfigurationError, match="JWT_SECRET"):
            get_jwt_secret()


class TestRoles:
    """Tests for role lookup and the admin guard."""

    @pytest.mark.auth
    def test_admin_role(self):
        assert get_user_role(request_with_role("admin")) == UserRole.ADMIN

    @pytest.mark.auth
    def test_unknown_role_is_guest(self):
        """Test missing or unknown roles are treated as guests."""
        assert get_user_role(request_with_role("superuser")) == UserRole.GUEST
        assert get_user_role(SimpleNamespace(state=SimpleNamespace())) == UserRole.GUEST

    @pytest.mark.auth
    def test_require_admin(self):
        """Test guests get a 403 and admins pass."""
        require_admin(request_with_role("admin"))

        with pytest.raises(HTTPException) as exc_info:
            require_admin(request_with_role("guest"))
        assert exc_info.value.status_code == 403
