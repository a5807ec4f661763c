"""
User model for authentication and authorization.

Each User is identified by username. Non-admin users may only read and modify
their own account and applications; admins may act on any account.
"""

from sqlalchemy import Column, String, Text, Boolean, false
from app.core.database import Base
from app.core.sql import ColumnMap


class User(Base):
    """User account."""
    __tablename__ = "users"

    username = Column(String(25), primary_key=True)

    # bcrypt hash, never the plain password
    password = Column(Text, nullable=False)

    first_name = Column(Text, nullable=False)
    last_name = Column(Text, nullable=False)
    email = Column(Text, nullable=False)

    is_admin = Column(Boolean, nullable=False, default=False, server_default=false())

    def __repr__(self):
        return f"<User(username='{self.username}', is_admin={self.is_admin})>"


# Fields a user PATCH may touch; username and isAdmin are not editable there
USER_COLUMNS = ColumnMap(
    "user",
    fields=("firstName", "lastName", "password", "email"),
    renames={"firstName": "first_name", "lastName": "last_name"},
)
