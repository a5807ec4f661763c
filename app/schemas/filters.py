"""
Search criteria for the company and job listings.

Unrecognized keys are dropped on validation so they never reach the compiled
WHERE clause.
"""

from typing import Optional
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CompanyFilter(BaseModel):
    """Optional company search criteria (all combined with AND)."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")

    name: Optional[str] = Field(None, description="Case-insensitive substring of the company name")
    min_employees: Optional[int] = Field(None, ge=0)
    max_employees: Optional[int] = Field(None, ge=0)


class JobFilter(BaseModel):
    """Optional job search criteria (all combined with AND)."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")

    title: Optional[str] = Field(None, description="Case-insensitive substring of the job title")
    min_salary: Optional[int] = Field(None, ge=0)
    has_equity: Optional[bool] = Field(None, description="True keeps only jobs with non-zero equity")
