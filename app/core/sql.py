"""
SQL fragment helpers shared by the CRUD layer.

- ColumnMap: per-entity table from API field names (camelCase) to stored columns
- sql_for_partial_update: builds the SET clause of a partial UPDATE

Nothing here touches the database; the output is handed to run_query().
"""

import re
from types import MappingProxyType
from typing import Any, Iterable, List, Mapping, NamedTuple, Sequence, Tuple

from app.core.exceptions import InvalidRequestError

IDENTIFIER = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")


class CompiledSql(NamedTuple):
    """SQL text with ``$n`` placeholders and the values they refer to, index-aligned."""
    sql: str
    values: List[Any]


class ColumnMap:
    """
    Exhaustive declaration of an entity's updatable fields and their columns.

    ``fields`` lists every API field name; ``renames`` gives the stored column
    for the ones whose column name differs. Validated on construction, so a
    bad table fails at import time rather than on a request.
    """

    def __init__(self, entity: str, fields: Iterable[str], renames: Mapping[str, str] = None):
        renames = dict(renames or {})
        fields = tuple(fields)

        unknown = set(renames) - set(fields)
        if unknown:
            raise ValueError(f"{entity}: renames for undeclared fields {sorted(unknown)}")

        columns = {name: renames.get(name, name) for name in fields}
        bad = [col for col in columns.values() if not IDENTIFIER.match(col)]
        if bad:
            raise ValueError(f"{entity}: invalid column names {bad}")
        if len(set(columns.values())) != len(columns):
            raise ValueError(f"{entity}: two fields map to the same column")

        self.entity = entity
        self._columns = MappingProxyType(columns)

    def column_for(self, field: str) -> str:
        """Stored column for ``field``; fields outside the table pass through under their own name."""
        column = self._columns.get(field, field)
        if not IDENTIFIER.match(column):
            raise InvalidRequestError(f"Invalid field name: {field!r}")
        return column

    def __contains__(self, field: str) -> bool:
        return field in self._columns

    def __repr__(self):
        return f"<ColumnMap({self.entity}: {dict(self._columns)})>"


def sql_for_partial_update(
    field_set: Sequence[Tuple[str, Any]],
    column_map: ColumnMap,
) -> CompiledSql:
    """
    Build the SET clause for a partial update.

    Args:
        field_set: Ordered (field, value) pairs, e.g. [("firstName", "Aliya"), ("age", 32)]
        column_map: Entity column table used to resolve stored column names

    Returns:
        CompiledSql('"first_name"=$1, "age"=$2', ["Aliya", 32])

    Raises:
        InvalidRequestError: If field_set is empty

    Placeholders are numbered in the order the pairs are given. Callers append
    keying values after these (``$len(values) + 1`` onwards).
    """
    if isinstance(field_set, Mapping):
        raise TypeError("field_set must be a sequence of (field, value) pairs, not a mapping")

    pairs = list(field_set)
    if not pairs:
        raise InvalidRequestError("No data")

    cols = []
    values = []
    for idx, (field, value) in enumerate(pairs, start=1):
        cols.append(f'"{column_map.column_for(field)}"=${idx}')
        values.append(value)

    return CompiledSql(", ".join(cols), values)
