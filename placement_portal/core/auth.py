"""
Authentication Utility - JWT handling and role dependencies.

Provides:
- JWT token creation/verification
- FastAPI dependencies for protected routes (per role)
"""

from datetime import datetime, timedelta, timezone
from typing import Optional

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt

from placement_portal.core.config import Settings
from placement_portal.services.auth_service import AuthService, Role

# Bearer token extractor
bearer_scheme = HTTPBearer()


def create_access_token(data: dict, settings: Settings, expires_delta: Optional[timedelta] = None) -> str:
    """Create JWT access token."""
    to_encode = data.copy()
    expire = datetime.now(timezone.utc) + (expires_delta or timedelta(minutes=settings.jwt_expire_minutes))
    to_encode.update({"exp": expire})
    return jwt.encode(to_encode, settings.jwt_secret_key, algorithm=settings.jwt_algorithm)


def decode_token(token: str, settings: Settings) -> Optional[dict]:
    """Decode and verify JWT token."""
    try:
        return jwt.decode(token, settings.jwt_secret_key, algorithms=[settings.jwt_algorithm])
    except JWTError:
        return None


async def get_current_user(
    request: Request,
    credentials: HTTPAuthorizationCredentials = Depends(bearer_scheme),
) -> dict:
    """
    FastAPI dependency - Get current authenticated user.

    Usage:
        @router.get("/protected")
        async def route(user: dict = Depends(get_current_user)):
            return user
    """
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Invalid or expired token",
        headers={"WWW-Authenticate": "Bearer"},
    )

    settings: Settings = request.app.state.settings
    payload = decode_token(credentials.credentials, settings)
    if not payload:
        raise credentials_exception

    user_id = payload.get("sub")
    role = payload.get("role")
    if not user_id or role not in Role.__members__:
        raise credentials_exception

    # Verify user still exists (and, for reps, is still approved)
    auth = AuthService(request.app.state.db, settings=settings)
    if not auth.user_exists(Role(role), user_id):
        raise credentials_exception

    return {"user_id": user_id, "role": role}


def _require_role(user: dict, role: Role, detail: str) -> dict:
    if user["role"] != role.value:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=detail)
    return user


async def get_current_student(user: dict = Depends(get_current_user)) -> dict:
    """Dependency - Require student role."""
    return _require_role(user, Role.STUDENT, "Students only")


async def get_current_company_rep(user: dict = Depends(get_current_user)) -> dict:
    """Dependency - Require company representative role."""
    return _require_role(user, Role.COMPANY_REP, "Company representatives only")


async def get_current_staff(user: dict = Depends(get_current_user)) -> dict:
    """Dependency - Require career center staff role."""
    return _require_role(user, Role.STAFF, "Career Center staff only")
