"""
CRUD operations for jobs.

Jobs are keyed by an integer id and always belong to a company.
"""

import logging
from typing import Any, Dict, List, Sequence, Tuple
from sqlalchemy.orm import Session

from app.core.database import run_query
from app.core.exceptions import NotFoundError
from app.core.filters import sql_for_job_filter
from app.core.sql import sql_for_partial_update
from app.models.job import JOB_COLUMNS
from app.schemas.filters import JobFilter
from app.schemas.job import JobCreateRequest

logger = logging.getLogger(__name__)

JOB_FIELDS = "id, title, salary, equity, company_handle"
BASE_SELECT = f"SELECT {JOB_FIELDS} FROM jobs"


def create(db: Session, job_data: JobCreateRequest) -> Dict[str, Any]:
    """
    Create a new job.

    Args:
        db: Database session
        job_data: Validated job creation data

    Returns:
        The created job row, including its generated id

    Raises:
        NotFoundError: If the company does not exist
    """
    company = run_query(
        db, "SELECT handle FROM companies WHERE handle = $1", [job_data.company_handle]
    ).first()
    if company is None:
        raise NotFoundError(f"No company: {job_data.company_handle}")

    row = run_query(
        db,
        f"""INSERT INTO jobs (title, salary, equity, company_handle)
            VALUES ($1, $2, $3, $4)
            RETURNING {JOB_FIELDS}""",
        [job_data.title, job_data.salary, job_data.equity, job_data.company_handle],
    ).mappings().one()
    db.commit()

    logger.info(f"Created job {row['id']} for company {job_data.company_handle}")
    return dict(row)


def find_all(db: Session, criteria: JobFilter) -> List[Dict[str, Any]]:
    """List jobs matching the optional criteria, ordered by title."""
    query, values = sql_for_job_filter(BASE_SELECT, criteria)
    return [dict(row) for row in run_query(db, query, values).mappings().all()]


def get(db: Session, job_id: int) -> Dict[str, Any]:
    """
    Retrieve a job by its ID.

    Raises:
        NotFoundError: If no such job
    """
    row = run_query(db, f"{BASE_SELECT} WHERE id = $1", [job_id]).mappings().first()
    if row is None:
        raise NotFoundError(f"No job: {job_id}")
    return dict(row)


def update(db: Session, job_id: int, field_set: Sequence[Tuple[str, Any]]) -> Dict[str, Any]:
    """
    Partially update a job (title, salary, equity).

    Raises:
        InvalidRequestError: If field_set is empty
        NotFoundError: If no such job
    """
    set_cols, values = sql_for_partial_update(field_set, JOB_COLUMNS)
    id_idx = len(values) + 1

    query = f"""UPDATE jobs
                SET {set_cols}
                WHERE id = ${id_idx}
                RETURNING {JOB_FIELDS}"""
    row = run_query(db, query, [*values, job_id]).mappings().first()
    if row is None:
        db.rollback()
        raise NotFoundError(f"No job: {job_id}")

    db.commit()
    logger.info(f"Updated job {job_id}: {[field for field, _ in field_set]}")
    return dict(row)


def remove(db: Session, job_id: int) -> None:
    """
    Delete a job.

    Raises:
        NotFoundError: If no such job
    """
    row = run_query(db, "DELETE FROM jobs WHERE id = $1 RETURNING id", [job_id]).first()
    if row is None:
        db.rollback()
        raise NotFoundError(f"No job: {job_id}")

    db.commit()
    logger.info(f"Deleted job {job_id}")
