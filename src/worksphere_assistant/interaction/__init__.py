"""
Interaction layer for intent classification.

Deterministic, keyword-based routing of free-text assistant queries.
"""
from .intent_types import IntentType
from .intent_router import IntentRouter

__all__ = ["IntentType", "IntentRouter"]
