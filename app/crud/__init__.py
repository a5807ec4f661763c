"""
CRUD operations (Create, Read, Update, Delete) for database models.

This layer provides a clean separation between API routes and database operations,
following the Repository pattern. Every statement is parameterized SQL.
"""

from app.crud import company, job, user

__all__ = ["company", "job", "user"]
