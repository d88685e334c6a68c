"""
Authentication Routes

POST /auth/login - Exchange a login id for a JWT token
GET /auth/me - Get current user info
"""

from fastapi import APIRouter, Depends, Request

from placement_portal.api.deps import get_auth_service
from placement_portal.core.auth import create_access_token, get_current_user
from placement_portal.schemas.schemas import LoginRequest, TokenResponse, UserResponse
from placement_portal.services.auth_service import AuthService

router = APIRouter(prefix="/auth", tags=["Authentication"])


@router.post("/login", response_model=TokenResponse)
async def login(body: LoginRequest, request: Request, auth: AuthService = Depends(get_auth_service)):
    """
    Login and receive JWT access token.

    Include token in requests: Authorization: Bearer <token>
    """
    identity = auth.login(body.login_id)
    token = create_access_token(
        {"sub": identity["user_id"], "role": identity["role"]},
        request.app.state.settings,
    )
    return TokenResponse(access_token=token, **identity)


@router.get("/me", response_model=UserResponse)
async def me(user: dict = Depends(get_current_user)):
    """Get current authenticated user."""
    return UserResponse(user_id=user["user_id"], role=user["role"])
