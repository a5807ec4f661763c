"""
User endpoints.

- POST / and GET /: admin only
- GET, PATCH, DELETE /{username} and POST /{username}/jobs/{job_id}: that user or an admin
"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app import crud
from app.core.database import get_db
from app.core.deps import require_admin, require_self_or_admin
from app.core.security import create_access_token
from app.schemas.base import DeletedResponse
from app.schemas.user import (
    ApplicationResponse,
    UserCreateRequest,
    UserDetailEnvelope,
    UserEnvelope,
    UserListResponse,
    UserTokenResponse,
    UserUpdateRequest,
)

router = APIRouter(prefix="/users", tags=["Users"])


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model=UserTokenResponse,
    dependencies=[Depends(require_admin)],
)
def create_user(
    user_data: UserCreateRequest,
    db: Session = Depends(get_db)
):
    """
    Add a user. Not the registration endpoint: admins use this to create
    accounts, which may themselves be admins.

    Returns the new user and a token for them.
    """
    user = crud.user.register(db, user_data, is_admin=user_data.is_admin)
    token = create_access_token(user["username"], bool(user["is_admin"]))
    return {"user": user, "token": token}


@router.get("", response_model=UserListResponse, dependencies=[Depends(require_admin)])
def list_users(db: Session = Depends(get_db)):
    """List all users. Admin only."""
    return {"users": crud.user.find_all(db)}


@router.get(
    "/{username}",
    response_model=UserDetailEnvelope,
    dependencies=[Depends(require_self_or_admin)],
)
def get_user(username: str, db: Session = Depends(get_db)):
    """Get a user and the ids of the jobs they applied to."""
    return {"user": crud.user.get(db, username)}


@router.patch(
    "/{username}",
    response_model=UserEnvelope,
    dependencies=[Depends(require_self_or_admin)],
)
def update_user(
    username: str,
    user_data: UserUpdateRequest,
    db: Session = Depends(get_db)
):
    """Partially update a user (firstName, lastName, password, email)."""
    return {"user": crud.user.update(db, username, user_data.to_field_set())}


@router.delete(
    "/{username}",
    response_model=DeletedResponse,
    dependencies=[Depends(require_self_or_admin)],
)
def delete_user(username: str, db: Session = Depends(get_db)):
    """Delete a user."""
    crud.user.remove(db, username)
    return {"deleted": username}


@router.post(
    "/{username}/jobs/{job_id}",
    response_model=ApplicationResponse,
    dependencies=[Depends(require_self_or_admin)],
)
def apply_to_job(username: str, job_id: int, db: Session = Depends(get_db)):
    """Apply to a job on behalf of ``username``. 400 if already applied."""
    return {"applied": crud.user.apply_to_job(db, username, job_id)}
