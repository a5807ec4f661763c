"""
CRUD operations for companies.

All statements are parameterized SQL executed through run_query(); partial
updates and search filters are compiled by app.core.sql / app.core.filters.
"""

import logging
from typing import Any, Dict, List, Sequence, Tuple
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.database import run_query
from app.core.exceptions import InvalidRequestError, NotFoundError
from app.core.filters import sql_for_company_filter
from app.core.sql import sql_for_partial_update
from app.models.company import COMPANY_COLUMNS
from app.schemas.company import CompanyCreateRequest
from app.schemas.filters import CompanyFilter

logger = logging.getLogger(__name__)

COMPANY_FIELDS = "handle, name, description, num_employees, logo_url"
BASE_SELECT = f"SELECT {COMPANY_FIELDS} FROM companies"


def create(db: Session, data: CompanyCreateRequest) -> Dict[str, Any]:
    """
    Create a company.

    Raises:
        InvalidRequestError: If the handle or name is already taken
    """
    duplicate = run_query(
        db,
        "SELECT handle FROM companies WHERE handle = $1 OR name = $2",
        [data.handle, data.name],
    ).first()
    if duplicate:
        raise InvalidRequestError(f"Duplicate company: {data.handle}")

    row = run_query(
        db,
        f"""INSERT INTO companies (handle, name, description, num_employees, logo_url)
            VALUES ($1, $2, $3, $4, $5)
            RETURNING {COMPANY_FIELDS}""",
        [data.handle, data.name, data.description, data.num_employees, data.logo_url],
    ).mappings().one()
    db.commit()

    logger.info(f"Created company {data.handle}")
    return dict(row)


def find_all(db: Session, criteria: CompanyFilter) -> List[Dict[str, Any]]:
    """
    List companies matching the optional criteria, ordered by name.

    Raises:
        InvalidRequestError: If minEmployees > maxEmployees
    """
    query, values = sql_for_company_filter(BASE_SELECT, criteria)
    return [dict(row) for row in run_query(db, query, values).mappings().all()]


def get(db: Session, handle: str) -> Dict[str, Any]:
    """
    Get a company with the jobs it has posted.

    Raises:
        NotFoundError: If no such company
    """
    row = run_query(db, f"{BASE_SELECT} WHERE handle = $1", [handle]).mappings().first()
    if row is None:
        raise NotFoundError(f"No company: {handle}")

    jobs = run_query(
        db,
        "SELECT id, title, salary, equity FROM jobs WHERE company_handle = $1 ORDER BY id",
        [handle],
    ).mappings().all()

    company = dict(row)
    company["jobs"] = [dict(job) for job in jobs]
    return company


def update(db: Session, handle: str, field_set: Sequence[Tuple[str, Any]]) -> Dict[str, Any]:
    """
    Partially update a company; only the given fields change.

    Raises:
        InvalidRequestError: If field_set is empty or the new name is taken
        NotFoundError: If no such company
    """
    set_cols, values = sql_for_partial_update(field_set, COMPANY_COLUMNS)
    handle_idx = len(values) + 1

    query = f"""UPDATE companies
                SET {set_cols}
                WHERE handle = ${handle_idx}
                RETURNING {COMPANY_FIELDS}"""
    try:
        row = run_query(db, query, [*values, handle]).mappings().first()
    except IntegrityError as exc:
        db.rollback()
        raise InvalidRequestError("Company name already in use") from exc

    if row is None:
        db.rollback()
        raise NotFoundError(f"No company: {handle}")

    db.commit()
    logger.info(f"Updated company {handle}: {[field for field, _ in field_set]}")
    return dict(row)


def remove(db: Session, handle: str) -> None:
    """
    Delete a company and, by cascade, its jobs.

    Raises:
        NotFoundError: If no such company
    """
    row = run_query(db, "DELETE FROM companies WHERE handle = $1 RETURNING handle", [handle]).first()
    if row is None:
        db.rollback()
        raise NotFoundError(f"No company: {handle}")

    db.commit()
    logger.info(f"Deleted company {handle}")
