"""
Response assembly: envelope -> wire JSON.
"""
from typing import Any, Dict

from .schemas import AssistantResponse, action_to_wire


class ResponseAssembler:
    """Serializes handler envelopes and provides the unknown-intent fallback."""

    FALLBACK_SUGGESTIONS = [
        "Show my pending tasks",
        "Summarize unread messages",
        "Find recent files",
        "Check pending approvals",
        "Schedule team meeting",
    ]

    def fallback(self, query: str) -> AssistantResponse:
        return AssistantResponse(
            text=(
                f'I understand you\'re asking about "{query}". As WorkSphere AI, I can help '
                "you with tasks, messages, files, approvals, and meetings. Could you be more "
                "specific about what you need?"
            ),
            suggestions=list(self.FALLBACK_SUGGESTIONS),
        )

    def serialize(self, response: AssistantResponse) -> Dict[str, Any]:
        """Empty ``actions`` and missing ``suggestions`` are left out of the payload."""
        body: Dict[str, Any] = {"response": response.text}
        if response.actions:
            body["actions"] = [action_to_wire(action) for action in response.actions]
        if response.suggestions:
            body["suggestions"] = list(response.suggestions)
        return body
