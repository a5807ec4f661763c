"""
CRUD operations for users and their job applications.

Passwords are stored as bcrypt hashes and never returned.
"""

import logging
from typing import Any, Dict, List, Sequence, Tuple
from sqlalchemy.orm import Session

from app.core.database import run_query
from app.core.exceptions import AuthError, InvalidRequestError, NotFoundError
from app.core.security import get_password_hash, verify_password
from app.core.sql import sql_for_partial_update
from app.models.user import USER_COLUMNS
from app.schemas.user import UserRegisterRequest

logger = logging.getLogger(__name__)

USER_FIELDS = "username, first_name, last_name, email, is_admin"


def authenticate(db: Session, username: str, password: str) -> Dict[str, Any]:
    """
    Check a username/password pair.

    Raises:
        AuthError: If the user does not exist or the password is wrong
    """
    row = run_query(
        db, f"SELECT {USER_FIELDS}, password FROM users WHERE username = $1", [username]
    ).mappings().first()

    if row is None or not verify_password(password, row["password"]):
        logger.warning(f"Failed login for {username}")
        raise AuthError("Invalid username/password")

    user = dict(row)
    del user["password"]
    return user


def register(db: Session, data: UserRegisterRequest, is_admin: bool = False) -> Dict[str, Any]:
    """
    Create a user with a hashed password.

    Raises:
        InvalidRequestError: If the username is taken
    """
    duplicate = run_query(db, "SELECT username FROM users WHERE username = $1", [data.username]).first()
    if duplicate:
        raise InvalidRequestError(f"Duplicate username: {data.username}")

    row = run_query(
        db,
        f"""INSERT INTO users (username, password, first_name, last_name, email, is_admin)
            VALUES ($1, $2, $3, $4, $5, $6)
            RETURNING {USER_FIELDS}""",
        [
            data.username,
            get_password_hash(data.password),
            data.first_name,
            data.last_name,
            data.email,
            is_admin,
        ],
    ).mappings().one()
    db.commit()

    logger.info(f"New user registered: {data.username} (admin: {is_admin})")
    return dict(row)


def find_all(db: Session) -> List[Dict[str, Any]]:
    """List all users, ordered by username."""
    rows = run_query(db, f"SELECT {USER_FIELDS} FROM users ORDER BY username").mappings().all()
    return [dict(row) for row in rows]


def get(db: Session, username: str) -> Dict[str, Any]:
    """
    Get a user with the ids of the jobs they applied to.

    Raises:
        NotFoundError: If no such user
    """
    row = run_query(db, f"SELECT {USER_FIELDS} FROM users WHERE username = $1", [username]).mappings().first()
    if row is None:
        raise NotFoundError(f"No user: {username}")

    applications = run_query(
        db, "SELECT job_id FROM applications WHERE username = $1 ORDER BY job_id", [username]
    ).scalars().all()

    user = dict(row)
    user["jobs"] = list(applications)
    return user


def update(db: Session, username: str, field_set: Sequence[Tuple[str, Any]]) -> Dict[str, Any]:
    """
    Partially update a user. A new password is hashed before it is stored.

    Raises:
        InvalidRequestError: If field_set is empty
        NotFoundError: If no such user
    """
    field_set = [
        (field, get_password_hash(value) if field == "password" else value)
        for field, value in field_set
    ]
    set_cols, values = sql_for_partial_update(field_set, USER_COLUMNS)
    username_idx = len(values) + 1

    query = f"""UPDATE users
                SET {set_cols}
                WHERE username = ${username_idx}
                RETURNING {USER_FIELDS}"""
    row = run_query(db, query, [*values, username]).mappings().first()
    if row is None:
        db.rollback()
        raise NotFoundError(f"No user: {username}")

    db.commit()
    logger.info(f"Updated user {username}: {[field for field, _ in field_set]}")
    return dict(row)


def remove(db: Session, username: str) -> None:
    """
    Delete a user and, by cascade, their applications.

    Raises:
        NotFoundError: If no such user
    """
    row = run_query(db, "DELETE FROM users WHERE username = $1 RETURNING username", [username]).first()
    if row is None:
        db.rollback()
        raise NotFoundError(f"No user: {username}")

    db.commit()
    logger.info(f"Deleted user {username}")


def apply_to_job(db: Session, username: str, job_id: int) -> int:
    """
    Record that ``username`` applied to ``job_id``.

    Returns:
        The job id applied to

    Raises:
        NotFoundError: If the user or the job does not exist
        InvalidRequestError: If the user already applied to this job
    """
    if run_query(db, "SELECT username FROM users WHERE username = $1", [username]).first() is None:
        raise NotFoundError(f"No user: {username}")
    if run_query(db, "SELECT id FROM jobs WHERE id = $1", [job_id]).first() is None:
        raise NotFoundError(f"No job: {job_id}")

    duplicate = run_query(
        db, "SELECT job_id FROM applications WHERE username = $1 AND job_id = $2", [username, job_id]
    ).first()
    if duplicate:
        raise InvalidRequestError(f"{username} has already applied for job {job_id}")

    run_query(db, "INSERT INTO applications (username, job_id) VALUES ($1, $2)", [username, job_id])
    db.commit()

    logger.info(f"User {username} applied to job {job_id}")
    return job_id
