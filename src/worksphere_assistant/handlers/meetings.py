from typing import Optional

from ..interaction import IntentType
from ..models import User
from ..schemas import AssistantResponse, RequestContext, ScheduleMeeting
from .base import IntentHandler
from .formatting import bullet_list


class MeetingHandler(IntentHandler):
    """Static scheduling menu; no calendar backend is queried."""

    intent = IntentType.MEETING

    MENU = ["Schedule a team meeting", "Set up a 1-on-1", "Book a client call", "Check your calendar"]
    SUGGESTIONS = ["Schedule team standup", "Book meeting room", "Send calendar invite", "Check availability"]

    def respond(
        self,
        user: User,
        query: str,
        context: Optional[RequestContext],
    ) -> AssistantResponse:
        return AssistantResponse(
            text=f"I can help you schedule meetings. Would you like me to:\n\n{bullet_list(self.MENU)}",
            actions=[
                ScheduleMeeting(meeting_type="team", duration_minutes=60),
                ScheduleMeeting(meeting_type="one-on-one", duration_minutes=30),
            ],
            suggestions=list(self.SUGGESTIONS),
        )
