"""
Authentication middleware and utilities for JWT token-based authentication.

SECURITY NOTES:
- Passwords are hashed using bcrypt before comparison
- JWT tokens are issued upon successful login
- Tokens are sent via X-API-Key header for all endpoints
- Guests get read-only access: they can list, search and export entries
- Rate limiting via slowapi on the login route to slow down brute force attempts
"""

import logging
import os
from datetime import datetime, timedelta, timezone
from typing import Optional

import bcrypt
import jwt
from core import get_settings
from domain.exceptions import ConfigurationError
from domain.value_objects.enums import UserRole
from fastapi import HTTPException, Request, status

logger = logging.getLogger("Auth")

JWT_ALGORITHM = "HS256"
TOKEN_EXPIRATION_HOURS = 168  # 7 days


def get_api_key_hash() -> str:
    """
    Get the bcrypt hash of the admin password.

    Environment variables win over the settings object so tests can override
    them at runtime. Generate a hash with scripts/setup/setup_env.py.

    Raises:
        ConfigurationError: If API_KEY_HASH is not configured
    """
    api_key_hash = os.getenv("API_KEY_HASH") or get_settings().api_key_hash
    if not api_key_hash:
        raise ConfigurationError("API_KEY_HASH is not set. Run scripts/setup/setup_env.py to create one.")
    return api_key_hash


def get_guest_password_hash() -> Optional[str]:
    """Get the bcrypt hash of the guest password, if one is configured."""
    return os.getenv("GUEST_PASSWORD_HASH") or get_settings().guest_password_hash


def is_guest_login_enabled() -> bool:
    env_value = os.getenv("ENABLE_GUEST_LOGIN")
    if env_value is not None:
        return str(env_value).lower() in {"1", "true", "yes", "on"}
    return get_settings().enable_guest_login


def get_jwt_secret() -> str:
    """
    Get the JWT signing secret.

    Raises:
        ConfigurationError: If JWT_SECRET is not configured
    """
    jwt_secret = os.getenv("JWT_SECRET") or get_settings().jwt_secret
    if not jwt_secret:
        raise ConfigurationError("JWT_SECRET is not set. Without a stable secret, tokens break on every restart.")
    return jwt_secret


def validate_auth_configuration() -> None:
    """Fail fast at startup when the admin hash or JWT secret is missing."""
    get_api_key_hash()
    get_jwt_secret()
    if is_guest_login_enabled() and not get_guest_password_hash():
        logger.warning("⚠️  ENABLE_GUEST_LOGIN is set but GUEST_PASSWORD_HASH is empty; guest login disabled")


def hash_password(password: str) -> str:
    """Hash a plaintext password with bcrypt."""
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt()).decode("utf-8")


def _check_password(password: str, password_hash: str) -> bool:
    try:
        return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))
    except ValueError as e:
        logger.error(f"❌ Malformed password hash: {e}")
        return False


def validate_password_with_role(password: str) -> Optional[UserRole]:
    """
    Check a password against the admin and (if enabled) guest hashes.

    Args:
        password: The plaintext password provided by the user

    Returns:
        UserRole.ADMIN or UserRole.GUEST for a match, None otherwise
    """
    if _check_password(password, get_api_key_hash()):
        return UserRole.ADMIN

    if is_guest_login_enabled():
        guest_hash = get_guest_password_hash()
        if guest_hash and _check_password(password, guest_hash):
            return UserRole.GUEST

    return None


def generate_jwt_token(role: UserRole = UserRole.ADMIN, expiration_hours: int = TOKEN_EXPIRATION_HOURS) -> str:
    """
    Generate a JWT token for authentication.

    Args:
        role: User role (UserRole.ADMIN or UserRole.GUEST)
        expiration_hours: Hours until token expires (default: 168 = 7 days)

    Returns:
        str: Encoded JWT token
    """
    now = datetime.now(timezone.utc)
    payload = {
        "exp": now + timedelta(hours=expiration_hours),
        "iat": now,
        "type": "access_token",
        "role": role.value,
    }
    return jwt.encode(payload, get_jwt_secret(), algorithm=JWT_ALGORITHM)


def validate_jwt_token(token: str) -> Optional[dict]:
    """
    Validate a JWT token and return its payload.

    Returns:
        dict | None: Token payload if valid, None otherwise
    """
    try:
        return jwt.decode(token, get_jwt_secret(), algorithms=[JWT_ALGORITHM])
    except jwt.ExpiredSignatureError:
        logger.warning("⚠️  JWT token has expired")
        return None
    except jwt.InvalidTokenError as e:
        logger.warning(f"⚠️  Invalid JWT token: {e}")
        return None


class AuthMiddleware:
    """
    Pure ASGI middleware for JWT token authentication.

    Authentication methods:
    - REST API: X-API-Key header (contains JWT token)

    Excluded paths (no auth required):
    - /auth/login - Login endpoint
    - /auth/health - Health check
    - /docs, /openapi.json, /redoc - API documentation
    """

    EXCLUDED_PATHS = {
        "/",
        "/docs",
        "/openapi.json",
        "/redoc",
        "/auth/login",
        "/auth/health",
    }

    def __init__(self, app):
        self.app = app

    async def _reject(self, send, headers: dict) -> None:
        origin = headers.get(b"origin", b"").decode("utf-8")
        response_headers = [(b"content-type", b"application/json")]
        if origin:
            response_headers.extend(
                [
                    (b"access-control-allow-origin", origin.encode()),
                    (b"access-control-allow-credentials", b"true"),
                    (b"access-control-allow-methods", b"*"),
                    (b"access-control-allow-headers", b"*"),
                ]
            )

        body = b'{"detail":"Invalid or missing authentication token"}'
        response_headers.append((b"content-length", str(len(body)).encode()))

        await send({"type": "http.response.start", "status": 401, "headers": response_headers})
        await send({"type": "http.response.body", "body": body})

    async def __call__(self, scope, receive, send):
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        if scope["path"] in self.EXCLUDED_PATHS or scope["method"] == "OPTIONS":
            await self.app(scope, receive, send)
            return

        headers = dict(scope.get("headers", []))
        token = headers.get(b"x-api-key", b"").decode("utf-8") or None
        token_payload = validate_jwt_token(token) if token else None
        if not token_payload:
            await self._reject(send, headers)
            return

        scope.setdefault("state", {})
        scope["state"]["user_role"] = token_payload.get("role", UserRole.GUEST.value)

        await self.app(scope, receive, send)


def get_user_role(request: Request) -> UserRole:
    """Role attached to the request by AuthMiddleware. Unknown roles are treated as guests."""
    role_str = getattr(request.state, "user_role", None)
    return UserRole.ADMIN if role_str == UserRole.ADMIN.value else UserRole.GUEST


def require_admin(request: Request):
    """
    Dependency function to require admin role for an endpoint.

    Raises:
        HTTPException: 403 Forbidden if user is not an admin

    Usage:
        @router.delete("/{entry_id}", dependencies=[Depends(require_admin)])
        async def delete_entry(entry_id: int):
            ...
    """
    if get_user_role(request) != UserRole.ADMIN:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="This action requires admin privileges. Guests can read, search and export entries.",
        )
