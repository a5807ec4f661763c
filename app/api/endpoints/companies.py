"""
Company endpoints.

Reads are public; creating, updating and deleting require an admin token.
"""

from typing import Optional
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from app import crud
from app.core.database import get_db
from app.core.deps import require_admin
from app.schemas.base import DeletedResponse
from app.schemas.company import (
    CompanyCreateRequest,
    CompanyDetailEnvelope,
    CompanyEnvelope,
    CompanyListResponse,
    CompanyUpdateRequest,
)
from app.schemas.filters import CompanyFilter

router = APIRouter(prefix="/companies", tags=["Companies"])


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model=CompanyEnvelope,
    dependencies=[Depends(require_admin)],
)
def create_company(
    company_data: CompanyCreateRequest,
    db: Session = Depends(get_db)
):
    """Create a company. Admin only."""
    return {"company": crud.company.create(db, company_data)}


@router.get("", response_model=CompanyListResponse)
def list_companies(
    name: Optional[str] = Query(None, description="Case-insensitive substring of the name"),
    min_employees: Optional[int] = Query(None, alias="minEmployees", ge=0),
    max_employees: Optional[int] = Query(None, alias="maxEmployees", ge=0),
    db: Session = Depends(get_db)
):
    """
    List companies, optionally filtered.

    Unrecognized query parameters are ignored. 400 if minEmployees > maxEmployees.
    """
    criteria = CompanyFilter(name=name, min_employees=min_employees, max_employees=max_employees)
    return {"companies": crud.company.find_all(db, criteria)}


@router.get("/{handle}", response_model=CompanyDetailEnvelope)
def get_company(handle: str, db: Session = Depends(get_db)):
    """Get a company and its jobs."""
    return {"company": crud.company.get(db, handle)}


@router.patch(
    "/{handle}",
    response_model=CompanyEnvelope,
    dependencies=[Depends(require_admin)],
)
def update_company(
    handle: str,
    company_data: CompanyUpdateRequest,
    db: Session = Depends(get_db)
):
    """Partially update a company. Admin only."""
    return {"company": crud.company.update(db, handle, company_data.to_field_set())}


@router.delete(
    "/{handle}",
    response_model=DeletedResponse,
    dependencies=[Depends(require_admin)],
)
def delete_company(handle: str, db: Session = Depends(get_db)):
    """Delete a company and its jobs. Admin only."""
    crud.company.remove(db, handle)
    return {"deleted": handle}
