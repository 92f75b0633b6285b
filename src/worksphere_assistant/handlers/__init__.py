"""
Intent handlers, one per classified intent.
"""
from typing import Dict

from ..config import AssistantConfig
from ..gateway import DataGateway
from ..interaction import IntentType
from .approvals import ApprovalHandler
from .base import IntentHandler
from .files import FileHandler
from .meetings import MeetingHandler
from .messages import MessageHandler
from .summary import SummaryHandler, productivity_label
from .tasks import TaskHandler

HANDLER_CLASSES = (
    TaskHandler,
    MessageHandler,
    FileHandler,
    ApprovalHandler,
    MeetingHandler,
    SummaryHandler,
)


def build_handlers(gateway: DataGateway, config: AssistantConfig) -> Dict[IntentType, IntentHandler]:
    """Instantiate every handler against one request-scoped gateway."""
    return {cls.intent: cls(gateway, config) for cls in HANDLER_CLASSES}


__all__ = [
    "IntentHandler",
    "TaskHandler",
    "MessageHandler",
    "FileHandler",
    "ApprovalHandler",
    "MeetingHandler",
    "SummaryHandler",
    "productivity_label",
    "build_handlers",
]
