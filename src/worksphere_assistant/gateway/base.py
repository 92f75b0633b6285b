"""
Abstract read-only gateway over the relational store.
"""
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

from .query import TableQuery

Row = Dict[str, Any]


class DataGateway(ABC):
    """
    Read-only query facade.

    Implementations raise GatewayError when the store cannot answer.
    """

    @abstractmethod
    def fetch(self, query: TableQuery) -> List[Row]:
        """Return the rows matching ``query``, ordered and limited."""

    @abstractmethod
    def count(self, query: TableQuery) -> int:
        """Return how many rows match ``query`` (ignores limit and ordering)."""

    def get_by_id(self, table: str, record_id: str, columns: str = "*") -> Optional[Row]:
        """Return one row by primary key, or None when it does not exist."""
        rows = self.fetch(TableQuery(table).select(columns).eq("id", record_id).limit(1))
        return rows[0] if rows else None
