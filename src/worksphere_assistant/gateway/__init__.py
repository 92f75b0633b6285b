"""
Data access gateways.

The assistant only reads; every gateway answers TableQuery objects.
"""
from .base import DataGateway, Row
from .memory import InMemoryGateway
from .query import Filter, TableQuery
from .supabase import SupabaseGateway

__all__ = [
    "DataGateway",
    "Row",
    "Filter",
    "TableQuery",
    "InMemoryGateway",
    "SupabaseGateway",
]
