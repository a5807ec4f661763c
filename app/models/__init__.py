"""
Database models package.
"""

from app.models.company import Company, COMPANY_COLUMNS
from app.models.job import Job, JOB_COLUMNS
from app.models.user import User, USER_COLUMNS
from app.models.application import Application

__all__ = ["Company", "COMPANY_COLUMNS", "Job", "JOB_COLUMNS", "User", "USER_COLUMNS", "Application"]
