from concurrent.futures import ThreadPoolExecutor
from typing import Optional

from ..interaction import IntentType
from ..models import User
from ..schemas import AssistantResponse, RequestContext
from . import queries
from .base import IntentHandler


def productivity_label(pending_tasks: int) -> str:
    if pending_tasks == 0:
        return "Excellent"
    if pending_tasks < 3:
        return "Good"
    return "Needs attention"


class SummaryHandler(IntentHandler):
    """
    Aggregate counts across tasks, messages and approvals.

    Counts run in parallel; the response is built once all have returned.
    Team size is added for CEOs and managers.
    """

    intent = IntentType.SUMMARY

    SUGGESTIONS = [
        "Focus on high-priority tasks",
        "Clear unread messages",
        "Review pending approvals",
        "Check team status",
    ]

    def respond(
        self,
        user: User,
        query: str,
        context: Optional[RequestContext],
    ) -> AssistantResponse:
        with ThreadPoolExecutor(max_workers=4) as pool:
            tasks_future = pool.submit(self.gateway.count, queries.pending_tasks(user))
            messages_future = pool.submit(self._count_unread, user)
            approvals_future = pool.submit(self.gateway.count, queries.pending_approvals(user))
            team_future = None
            if user.leads_team:
                team_future = pool.submit(self.gateway.count, queries.team_members(user))

            pending_tasks = tasks_future.result()
            unread_messages = messages_future.result()
            pending_approvals = approvals_future.result()
            team_size = team_future.result() if team_future is not None else None

        text = "**Your WorkSphere Summary**\n\n"
        text += f"**Tasks**: {pending_tasks} pending\n"
        text += f"**Messages**: {unread_messages} unread\n"
        text += f"**Approvals**: {pending_approvals} pending\n"
        if team_size is not None:
            text += f"**Team Members**: {team_size}\n"
        text += f"\n**Productivity**: {productivity_label(pending_tasks)}"

        return AssistantResponse(text=text, suggestions=list(self.SUGGESTIONS))

    def _count_unread(self, user: User) -> int:
        return self.gateway.count(queries.unread_messages(self.gateway, user))
