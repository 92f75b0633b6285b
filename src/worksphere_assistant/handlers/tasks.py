from datetime import datetime, timezone
from typing import Callable, Optional

from ..config import AssistantConfig
from ..gateway import DataGateway
from ..interaction import IntentType
from ..models import Task, User
from ..schemas import AssistantResponse, CompleteTask, RequestContext
from . import queries
from .base import IntentHandler
from .formatting import bullet_list, format_date


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class TaskHandler(IntentHandler):
    """Lists the caller's open tasks, soonest due first."""

    intent = IntentType.TASK

    EMPTY_SUGGESTIONS = ["Create a new task", "View completed tasks", "Check team tasks"]

    def __init__(
        self,
        gateway: DataGateway,
        config: AssistantConfig,
        clock: Callable[[], datetime] = _utcnow,
    ):
        super().__init__(gateway, config)
        self._clock = clock

    def respond(
        self,
        user: User,
        query: str,
        context: Optional[RequestContext],
    ) -> AssistantResponse:
        rows = self.gateway.fetch(
            queries.pending_tasks(user)
            .select(queries.TASK_COLUMNS)
            .order("due_date")
            .limit(self.config.page_size)
        )
        tasks = [Task.from_row(row) for row in rows]

        if not tasks:
            return AssistantResponse(
                text="You don't have any pending tasks. Great job staying on top of your work!",
                suggestions=list(self.EMPTY_SUGGESTIONS),
            )

        text = f"You have {len(tasks)} pending tasks:\n\n{bullet_list(self._describe(t) for t in tasks)}"

        now = self._clock()
        overdue = sum(1 for t in tasks if t.is_overdue(now))
        if overdue:
            text += f"\n\n{overdue} overdue."

        return AssistantResponse(
            text=text,
            actions=[CompleteTask(task_id=t.id) for t in tasks],
        )

    @staticmethod
    def _describe(task: Task) -> str:
        details = f"{task.priority or 'no'} priority"
        if task.due_date is not None:
            details += f", due {format_date(task.due_date)}"
        return f"{task.title} ({details})"
