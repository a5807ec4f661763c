from sqlalchemy import Column, Integer, String, Text, CheckConstraint
from sqlalchemy.orm import relationship
from app.core.database import Base
from app.core.sql import ColumnMap


class Company(Base):
    """
    Company that posts jobs.

    Identified by a short, user-chosen handle (e.g. "anderson-arias-morrow").
    """
    __tablename__ = "companies"
    __table_args__ = (
        CheckConstraint("num_employees >= 0", name="ck_companies_num_employees"),
    )

    handle = Column(String(25), primary_key=True)
    name = Column(Text, unique=True, nullable=False)
    num_employees = Column(Integer, nullable=True)
    description = Column(Text, nullable=False)
    logo_url = Column(Text, nullable=True)

    # Relationships
    jobs = relationship("Job", back_populates="company", cascade="all, delete-orphan", passive_deletes=True)

    def __repr__(self):
        return f"<Company(handle='{self.handle}', name='{self.name}')>"


# Fields a company PATCH may touch; handle is immutable
COMPANY_COLUMNS = ColumnMap(
    "company",
    fields=("name", "description", "numEmployees", "logoUrl"),
    renames={"numEmployees": "num_employees", "logoUrl": "logo_url"},
)
