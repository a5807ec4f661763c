"""
FastAPI dependencies for authentication and authorization.

Every protected route declares one of these gates. They resolve before the
route body runs, so a denied request never reaches the CRUD layer:

- require_authenticated: any valid token
- require_admin: valid token with the admin flag
- require_self_or_admin: admin, or the user named by the {username} path segment

Claims are attached to request.state.claims only once the gate allows the request.
"""

import logging
from typing import Optional

from fastapi import Depends, Request
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

from app.core.exceptions import AccessDeniedError, AuthError
from app.core.security import TokenClaims, decode_access_token

logger = logging.getLogger(__name__)

# HTTP Bearer token scheme (Authorization: Bearer <token>); missing header is not an error here
security = HTTPBearer(auto_error=False)


def check_admin(claims: TokenClaims) -> None:
    """Raise AccessDeniedError unless the claims carry the admin flag."""
    if not claims.is_admin:
        raise AccessDeniedError("Admin privileges required")


def check_self_or_admin(claims: TokenClaims, username: str) -> None:
    """Raise AccessDeniedError unless the claims are admin or belong to ``username``."""
    if not (claims.is_admin or claims.username == username):
        raise AccessDeniedError("Not permitted to act on another user's account")


async def get_current_claims(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> Optional[TokenClaims]:
    """
    Verify the bearer token, if one was sent.

    Returns None when no token is present. A token that is present but
    invalid or expired raises AuthError (401).
    """
    if credentials is None:
        return None
    return decode_access_token(credentials.credentials)


async def _authenticated_claims(
    claims: Optional[TokenClaims] = Depends(get_current_claims),
) -> TokenClaims:
    if claims is None:
        raise AuthError("Authentication required")
    return claims


async def require_authenticated(
    request: Request,
    claims: TokenClaims = Depends(_authenticated_claims),
) -> TokenClaims:
    """
    Require a valid token.

    Raises:
        AuthError 401: No token or an invalid one
    """
    request.state.claims = claims
    return claims


async def require_admin(
    request: Request,
    claims: TokenClaims = Depends(_authenticated_claims),
) -> TokenClaims:
    """
    Require a valid token belonging to an admin.

    Raises:
        AuthError 401: Not authenticated
        AccessDeniedError 403: Authenticated but not an admin
    """
    try:
        check_admin(claims)
    except AccessDeniedError:
        logger.warning(f"Admin access denied for {claims.username}")
        raise
    request.state.claims = claims
    return claims


async def require_self_or_admin(
    username: str,
    request: Request,
    claims: TokenClaims = Depends(_authenticated_claims),
) -> TokenClaims:
    """
    Require the caller to be an admin or the user named in the route path.

    ``username`` is bound from the {username} path parameter of the route.

    Raises:
        AuthError 401: Not authenticated
        AccessDeniedError 403: Neither admin nor the named user
    """
    try:
        check_self_or_admin(claims, username)
    except AccessDeniedError:
        logger.warning(f"User {claims.username} denied access to account {username}")
        raise
    request.state.claims = claims
    return claims
