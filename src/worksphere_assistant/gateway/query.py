"""
Read query description shared by every gateway.

A TableQuery names a table, the columns to select, AND-ed filters,
optional OR groups, an ordering and a row limit. It renders to PostgREST
query parameters; the in-memory gateway evaluates it directly.
"""
from dataclasses import dataclass
from typing import Any, List, Optional, Sequence, Tuple

# Characters that force PostgREST to see a value as several tokens
_RESERVED = set(',.:()"{} ')


def _render_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    text = str(value)
    if any(ch in _RESERVED for ch in text):
        escaped = text.replace("\\", "\\\\").replace('"', '\\"')
        return f'"{escaped}"'
    return text


@dataclass(frozen=True)
class Filter:
    column: str
    operator: str  # eq, neq, is, in, cs
    value: Any = None

    def render(self) -> str:
        """Operator and value part, e.g. ``eq.42`` or ``in.(a,b)``."""
        if self.operator == "is":
            return "is.null"
        if self.operator == "in":
            return f"in.({','.join(_render_value(v) for v in self.value)})"
        if self.operator == "cs":
            return f"cs.{{{','.join(_render_value(v) for v in self.value)}}}"
        return f"{self.operator}.{_render_value(self.value)}"


@dataclass(frozen=True)
class Ordering:
    column: str
    descending: bool = False

    def render(self) -> str:
        direction = "desc" if self.descending else "asc"
        return f"{self.column}.{direction}.nullslast"


class TableQuery:
    """Fluent builder for one read over a named table."""

    def __init__(self, table: str):
        self.table = table
        self.columns = "*"
        self.filters: List[Filter] = []
        self.alternatives: List[Tuple[Filter, ...]] = []
        self.ordering: Optional[Ordering] = None
        self.row_limit: Optional[int] = None

    def select(self, columns: str) -> "TableQuery":
        # PostgREST rejects whitespace inside the select list
        self.columns = "".join(columns.split())
        return self

    def eq(self, column: str, value: Any) -> "TableQuery":
        self.filters.append(Filter(column, "eq", value))
        return self

    def neq(self, column: str, value: Any) -> "TableQuery":
        self.filters.append(Filter(column, "neq", value))
        return self

    def is_null(self, column: str) -> "TableQuery":
        self.filters.append(Filter(column, "is"))
        return self

    def contains(self, column: str, values: Sequence[Any]) -> "TableQuery":
        self.filters.append(Filter(column, "cs", tuple(values)))
        return self

    def any_of(self, *filters: Filter) -> "TableQuery":
        """Require at least one of ``filters`` to match."""
        self.alternatives.append(tuple(filters))
        return self

    def order(self, column: str, descending: bool = False) -> "TableQuery":
        self.ordering = Ordering(column, descending)
        return self

    def limit(self, count: int) -> "TableQuery":
        self.row_limit = count
        return self

    def to_params(self, include_columns: bool = True) -> List[Tuple[str, str]]:
        params: List[Tuple[str, str]] = []
        if include_columns:
            params.append(("select", self.columns))
        for f in self.filters:
            params.append((f.column, f.render()))
        for group in self.alternatives:
            inner = ",".join(f"{f.column}.{f.render()}" for f in group)
            params.append(("or", f"({inner})"))
        if self.ordering is not None:
            params.append(("order", self.ordering.render()))
        if self.row_limit is not None:
            params.append(("limit", str(self.row_limit)))
        return params

    def __repr__(self) -> str:
        return f"TableQuery({self.table!r}, {self.to_params()!r})"
