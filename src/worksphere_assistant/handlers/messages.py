from typing import Optional

from ..interaction import IntentType
from ..models import Message, User
from ..schemas import AssistantResponse, MarkAllRead, RequestContext
from . import queries
from .base import IntentHandler
from .formatting import bullet_list, truncate


class MessageHandler(IntentHandler):
    """Digest of unread direct and channel messages, newest first."""

    intent = IntentType.MESSAGE

    EMPTY_SUGGESTIONS = ["View recent messages", "Start new conversation", "Check team channels"]

    def respond(
        self,
        user: User,
        query: str,
        context: Optional[RequestContext],
    ) -> AssistantResponse:
        rows = self.gateway.fetch(
            queries.unread_messages(self.gateway, user)
            .select(queries.MESSAGE_COLUMNS)
            .order("created_at", descending=True)
            .limit(self.config.page_size)
        )
        messages = [Message.from_row(row) for row in rows]

        if not messages:
            return AssistantResponse(
                text="You don't have any unread messages. Your inbox is clean!",
                suggestions=list(self.EMPTY_SUGGESTIONS),
            )

        preview = messages[:self.config.digest_preview_size]
        lines = (f"{m.sender_name or 'Unknown sender'}: {truncate(m.content)}" for m in preview)

        return AssistantResponse(
            text=f"You have {len(messages)} unread messages:\n\n{bullet_list(lines)}",
            actions=[MarkAllRead()],
        )
