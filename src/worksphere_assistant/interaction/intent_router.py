"""
Deterministic intent router for assistant queries.

Rules are checked in a fixed order and the first rule with a keyword
contained in the query wins. "pending" appears in both the task and the
approval rule; the task rule comes first, so it always wins that keyword.
"""
from typing import FrozenSet, Tuple

from .intent_types import IntentType


class IntentRouter:
    """
    Keyword-containment intent router.

    Pure function of the query string: no I/O, no state.
    """

    TASK_KEYWORDS = frozenset({"task", "todo", "pending"})
    MESSAGE_KEYWORDS = frozenset({"message", "chat", "unread"})
    FILE_KEYWORDS = frozenset({"file", "document", "find"})
    APPROVAL_KEYWORDS = frozenset({"approval", "approve", "pending"})
    MEETING_KEYWORDS = frozenset({"meeting", "schedule", "calendar"})
    SUMMARY_KEYWORDS = frozenset({"summary", "overview", "status"})

    RULES: Tuple[Tuple[IntentType, FrozenSet[str]], ...] = (
        (IntentType.TASK, TASK_KEYWORDS),
        (IntentType.MESSAGE, MESSAGE_KEYWORDS),
        (IntentType.FILE, FILE_KEYWORDS),
        (IntentType.APPROVAL, APPROVAL_KEYWORDS),
        (IntentType.MEETING, MEETING_KEYWORDS),
        (IntentType.SUMMARY, SUMMARY_KEYWORDS),
    )

    def route(self, query: str) -> IntentType:
        """
        Route a query to an intent type.

        :param query: User query string (any case)
        :return: IntentType enum value
        """
        q = query.lower()

        for intent, keywords in self.RULES:
            if any(keyword in q for keyword in keywords):
                return intent

        return IntentType.UNKNOWN
