"""Authentication routes for login and token verification."""

from domain.value_objects.enums import UserRole
from fastapi import APIRouter, HTTPException, Request
from infrastructure.auth import generate_jwt_token, get_user_role, validate_password_with_role
from pydantic import BaseModel
from slowapi import Limiter
from slowapi.util import get_remote_address

router = APIRouter()

limiter = Limiter(key_func=get_remote_address)


class LoginRequest(BaseModel):
    password: str = ""


@router.post("/login")
@limiter.limit("20/minute")  # Rate limit: 20 attempts per minute per IP
async def login(request: Request, body: LoginRequest):
    """
    Validate password and return a JWT token for session storage.
    The client should store the returned api_key (JWT token) and send it as
    X-API-Key on every subsequent request.

    Supports both admin and guest passwords:
    - Admin password: Full access
    - Guest password: Read-only access (list, search, export)

    Returns:
        - 400: Missing password
        - 401: Invalid password
        - 429: Too many requests (rate limited)
    """
    if not body.password:
        raise HTTPException(status_code=400, detail="Password is required")

    role = validate_password_with_role(body.password)
    if role is None:
        raise HTTPException(status_code=401, detail="Invalid password")

    token = generate_jwt_token(role=role)
    return {
        "success": True,
        "api_key": token,
        "role": role.value,
        "message": f"Login successful as {role.value}",
    }


@router.get("/verify")
async def verify_auth(request: Request):
    """
    Verify that the current API key is valid and return the user's role.
    This endpoint is protected by the auth middleware, so if we reach here, auth is valid.
    """
    role = get_user_role(request)
    return {
        "success": True,
        "message": "Authentication valid",
        "role": role.value,
        "can_write": role == UserRole.ADMIN,
    }


@router.get("/health")
async def health_check():
    """Health check endpoint (no auth required)."""
    return {"status": "healthy"}
