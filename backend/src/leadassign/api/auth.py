"""Authentication and authorization for the lead assignment API.

Provides JWT-based authentication and role-based access control.
"""

from datetime import datetime, timedelta, timezone
from typing import Annotated

import jwt
from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from pydantic import BaseModel

from ..config import get_settings
from . import AuthenticationError, AuthorizationError

# Security scheme
security = HTTPBearer(auto_error=False)


# =========================
# User Models
# =========================


class User(BaseModel):
    """Authenticated user information."""

    id: str
    email: str
    name: str
    roles: list[str] = []

    def has_role(self, role: str) -> bool:
        """Check if user has a specific role (admins have every role)."""
        return role in self.roles or self.is_admin()

    def is_admin(self) -> bool:
        """Check if user is an admin."""
        return "admin" in self.roles

    def is_staff(self) -> bool:
        """Check if user is a staff member."""
        return "staff" in self.roles or self.is_admin()


class TokenPayload(BaseModel):
    """JWT token payload."""

    sub: str  # Subject (user ID)
    email: str
    name: str
    roles: list[str] = []
    exp: datetime
    iat: datetime


# =========================
# JWT Functions
# =========================


def create_access_token(user: User, expires_in: timedelta | None = None) -> str:
    """Create a JWT access token for a user.

    Args:
        user: User to create token for
        expires_in: Token lifetime; defaults to the configured hours

    Returns:
        Encoded JWT token
    """
    settings = get_settings()

    now = datetime.now(timezone.utc)
    if expires_in is None:
        expires_in = timedelta(hours=settings.jwt_expiration_hours)

    payload = TokenPayload(
        sub=user.id,
        email=user.email,
        name=user.name,
        roles=user.roles,
        exp=now + expires_in,
        iat=now,
    )

    return jwt.encode(
        payload.model_dump(),
        settings.jwt_secret,
        algorithm=settings.jwt_algorithm,
    )


def decode_access_token(token: str) -> TokenPayload:
    """Decode and validate a JWT access token.

    Args:
        token: JWT token to decode

    Returns:
        Token payload

    Raises:
        AuthenticationError: If token is invalid or expired
    """
    settings = get_settings()

    try:
        payload = jwt.decode(
            token,
            settings.jwt_secret,
            algorithms=[settings.jwt_algorithm],
        )
        return TokenPayload(**payload)
    except jwt.ExpiredSignatureError:
        raise AuthenticationError("Token has expired")
    except jwt.InvalidTokenError as e:
        raise AuthenticationError(f"Invalid token: {e}")


def _payload_to_user(payload: TokenPayload) -> User:
    return User(
        id=payload.sub,
        email=payload.email,
        name=payload.name,
        roles=payload.roles,
    )


# =========================
# Dependency Injection
# =========================


async def get_current_user(
    request: Request,
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
) -> User:
    """Get the current authenticated user.

    Use this dependency when authentication is required.

    Raises:
        AuthenticationError: If not authenticated
    """
    if not credentials:
        raise AuthenticationError("Authentication required")

    user = _payload_to_user(decode_access_token(credentials.credentials))
    request.state.user_id = user.id
    return user


def require_role(role: str):
    """Create a dependency that requires a specific role.

    Usage:
        @router.get("/admin", dependencies=[Depends(require_role("admin"))])
        async def admin_endpoint():
            ...
    """

    async def role_checker(user: User = Depends(get_current_user)) -> User:
        if not user.has_role(role):
            raise AuthorizationError(f"Role '{role}' required")
        return user

    return role_checker


def require_staff():
    """Dependency that requires staff or admin role."""
    return require_role("staff")


def require_admin():
    """Dependency that requires admin role."""
    return require_role("admin")


# Type aliases for cleaner dependency injection
CurrentUser = Annotated[User, Depends(get_current_user)]
StaffUser = Annotated[User, Depends(require_staff())]
