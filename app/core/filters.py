"""
Search query compilation for company and job listings.

Turns optional search criteria into a WHERE clause with ``$n`` placeholders.
Predicates are appended in a fixed order so the same criteria always produce
the same SQL text; the listing is always ordered by name (companies) or
title (jobs).
"""

from typing import Any, List

from app.core.exceptions import InvalidRequestError
from app.core.sql import CompiledSql
from app.schemas.filters import CompanyFilter, JobFilter


def escape_like(term: str) -> str:
    """Escape LIKE wildcards so ``%`` and ``_`` in a search term match literally."""
    return term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


class WhereBuilder:
    """Accumulates AND-ed predicates and their positional values."""

    def __init__(self):
        self.predicates: List[str] = []
        self.values: List[Any] = []

    def add(self, template: str, *values: Any) -> None:
        """
        Append a predicate. ``{}`` markers in the template are filled with the
        next placeholder numbers, one per value.
        """
        params = []
        for value in values:
            self.values.append(value)
            params.append(f"${len(self.values)}")
        self.predicates.append(template.format(*params))

    def add_contains(self, column: str, term: str) -> None:
        """Case-insensitive substring match against a text column."""
        self.add(f"LOWER({column}) LIKE {{}} ESCAPE '\\'", f"%{escape_like(term.lower())}%")

    def compile(self, base_select: str, order_by: str) -> CompiledSql:
        query = base_select
        if self.predicates:
            query += " WHERE " + " AND ".join(self.predicates)
        query += f" ORDER BY {order_by}"
        return CompiledSql(query, list(self.values))


def sql_for_company_filter(base_select: str, criteria: CompanyFilter) -> CompiledSql:
    """
    Compile company search criteria onto ``base_select``.

    Raises:
        InvalidRequestError: If minEmployees is greater than maxEmployees
    """
    if (
        criteria.min_employees is not None
        and criteria.max_employees is not None
        and criteria.min_employees > criteria.max_employees
    ):
        raise InvalidRequestError("minEmployees cannot be greater than maxEmployees")

    where = WhereBuilder()
    if criteria.name is not None:
        where.add_contains("name", criteria.name)
    if criteria.min_employees is not None:
        where.add("num_employees >= {}", criteria.min_employees)
    if criteria.max_employees is not None:
        where.add("num_employees <= {}", criteria.max_employees)

    return where.compile(base_select, order_by="name")


def sql_for_job_filter(base_select: str, criteria: JobFilter) -> CompiledSql:
    """Compile job search criteria onto ``base_select``."""
    where = WhereBuilder()
    if criteria.title is not None:
        where.add_contains("title", criteria.title)
    if criteria.min_salary is not None:
        where.add("salary >= {}", criteria.min_salary)
    # hasEquity=false means "don't care", not "no equity"
    if criteria.has_equity:
        where.add("equity IS NOT NULL AND equity > 0")

    return where.compile(base_select, order_by="title")
