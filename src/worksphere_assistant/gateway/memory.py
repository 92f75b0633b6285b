"""
In-memory gateway for local development and tests.

Evaluates TableQuery against seeded rows. Embedded relations (e.g. a
message's ``sender``) are stored on the row already joined, and the
select list is not applied.
"""
import copy
from typing import Dict, Iterable, List, Optional

from .base import DataGateway, Row
from .query import Filter, TableQuery


def _matches(f: Filter, row: Row) -> bool:
    value = row.get(f.column)
    if f.operator == "eq":
        return value == f.value
    if f.operator == "neq":
        # SQL semantics: NULL <> x is not true
        return value is not None and value != f.value
    if f.operator == "is":
        return value is None
    if f.operator == "in":
        return value in f.value
    if f.operator == "cs":
        return isinstance(value, (list, tuple)) and all(v in value for v in f.value)
    raise ValueError(f"Unsupported operator: {f.operator}")


class InMemoryGateway(DataGateway):
    """Gateway over plain dict rows keyed by table name."""

    def __init__(self, tables: Optional[Dict[str, Iterable[Row]]] = None):
        self._tables: Dict[str, List[Row]] = {
            name: [dict(row) for row in rows] for name, rows in (tables or {}).items()
        }

    def insert(self, table: str, *rows: Row) -> None:
        self._tables.setdefault(table, []).extend(dict(row) for row in rows)

    def fetch(self, query: TableQuery) -> List[Row]:
        rows = self._select(query)

        if query.ordering is not None:
            column = query.ordering.column
            present = [r for r in rows if r.get(column) is not None]
            missing = [r for r in rows if r.get(column) is None]
            present.sort(key=lambda r: r[column], reverse=query.ordering.descending)
            rows = present + missing

        if query.row_limit is not None:
            rows = rows[:query.row_limit]

        return copy.deepcopy(rows)

    def count(self, query: TableQuery) -> int:
        return len(self._select(query))

    def _select(self, query: TableQuery) -> List[Row]:
        return [
            row for row in self._tables.get(query.table, [])
            if all(_matches(f, row) for f in query.filters)
            and all(any(_matches(f, row) for f in group) for group in query.alternatives)
        ]
