"""
Intent types for query classification.
"""
from enum import Enum


class IntentType(Enum):
    """Types of assistant intents."""
    TASK = "task"
    MESSAGE = "message"
    FILE = "file"
    APPROVAL = "approval"
    MEETING = "meeting"
    SUMMARY = "summary"
    UNKNOWN = "unknown"
