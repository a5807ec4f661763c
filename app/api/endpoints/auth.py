"""
Authentication endpoints for user registration and login.

Implements JWT-based stateless authentication:
- POST /token: Exchange username/password for a token
- POST /register: Create a new (non-admin) account and receive a token
"""

import logging
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app import crud
from app.core.database import get_db
from app.core.security import create_access_token
from app.schemas.user import UserLoginRequest, UserRegisterRequest, TokenResponse

router = APIRouter(prefix="/auth", tags=["Authentication"])
logger = logging.getLogger(__name__)


@router.post("/token", response_model=TokenResponse)
def login(
    request: UserLoginRequest,
    db: Session = Depends(get_db)
):
    """
    Authenticate a user and return a JWT.

    Raises 401 on an unknown username or wrong password.
    """
    user = crud.user.authenticate(db, request.username, request.password)
    logger.info(f"User logged in: {user['username']}")
    return TokenResponse(token=create_access_token(user["username"], bool(user["is_admin"])))


@router.post("/register", status_code=status.HTTP_201_CREATED, response_model=TokenResponse)
def register(
    request: UserRegisterRequest,
    db: Session = Depends(get_db)
):
    """
    Register a new user account.

    Self-registered accounts are never admins. Returns a JWT for immediate use.
    """
    user = crud.user.register(db, request, is_admin=False)
    return TokenResponse(token=create_access_token(user["username"], False))
