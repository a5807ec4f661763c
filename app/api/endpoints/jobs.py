"""
Job endpoints.

Reads are public; creating, updating and deleting require an admin token.
"""

from typing import Optional
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from app import crud
from app.core.database import get_db
from app.core.deps import require_admin
from app.schemas.base import DeletedResponse
from app.schemas.filters import JobFilter
from app.schemas.job import JobCreateRequest, JobEnvelope, JobListResponse, JobUpdateRequest

router = APIRouter(prefix="/jobs", tags=["Jobs"])


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model=JobEnvelope,
    dependencies=[Depends(require_admin)],
)
def create_job(
    job_data: JobCreateRequest,
    db: Session = Depends(get_db)
):
    """Create a job for an existing company. Admin only."""
    return {"job": crud.job.create(db, job_data)}


@router.get("", response_model=JobListResponse)
def list_jobs(
    title: Optional[str] = Query(None, description="Case-insensitive substring of the title"),
    min_salary: Optional[int] = Query(None, alias="minSalary", ge=0),
    has_equity: Optional[bool] = Query(None, alias="hasEquity"),
    db: Session = Depends(get_db)
):
    """
    List jobs, optionally filtered.

    hasEquity=true keeps only jobs offering non-zero equity; false is the same
    as leaving it out. Unrecognized query parameters are ignored.
    """
    criteria = JobFilter(title=title, min_salary=min_salary, has_equity=has_equity)
    return {"jobs": crud.job.find_all(db, criteria)}


@router.get("/{job_id}", response_model=JobEnvelope)
def get_job(job_id: int, db: Session = Depends(get_db)):
    """Get a job by id."""
    return {"job": crud.job.get(db, job_id)}


@router.patch(
    "/{job_id}",
    response_model=JobEnvelope,
    dependencies=[Depends(require_admin)],
)
def update_job(
    job_id: int,
    job_data: JobUpdateRequest,
    db: Session = Depends(get_db)
):
    """Partially update a job. Admin only."""
    return {"job": crud.job.update(db, job_id, job_data.to_field_set())}


@router.delete(
    "/{job_id}",
    response_model=DeletedResponse,
    dependencies=[Depends(require_admin)],
)
def delete_job(job_id: int, db: Session = Depends(get_db)):
    """Delete a job. Admin only."""
    crud.job.remove(db, job_id)
    return {"deleted": str(job_id)}
