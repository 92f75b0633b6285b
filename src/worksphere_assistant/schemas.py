"""
Request and response shapes for the assistant endpoint.

Actions are advisory: each variant carries exactly the payload its kind
needs and is converted to the ``{"type", "data"}`` wire form only at the
HTTP boundary.
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, ClassVar, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .exceptions import InvalidRequestError

MAX_QUERY_LENGTH = 500


class RequestContext(BaseModel):
    """Optional client context forwarded to handlers."""
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    department_id: Optional[str] = Field(default=None, alias="departmentId")
    channel_id: Optional[str] = Field(default=None, alias="channelId")
    task_id: Optional[str] = Field(default=None, alias="taskId")


class AssistantRequest(BaseModel):
    """Body of ``POST /ai-assistant``."""
    model_config = ConfigDict(
        populate_by_name=True,
        str_strip_whitespace=True,
        extra="ignore",
    )

    query: str = Field(min_length=1, max_length=MAX_QUERY_LENGTH)
    user_id: str = Field(alias="userId", min_length=1)
    organization_id: str = Field(alias="organizationId", min_length=1)
    context: Optional[RequestContext] = None

    @classmethod
    def parse(cls, payload: Any) -> "AssistantRequest":
        """
        Validate a decoded JSON body.

        :raises InvalidRequestError: If required fields are missing, empty or
            of the wrong type, or the query is too long
        """
        if not isinstance(payload, dict):
            raise InvalidRequestError("Missing required parameters")

        try:
            return cls.model_validate(payload)
        except ValidationError as e:
            if any(err["type"] == "string_too_long" for err in e.errors()):
                raise InvalidRequestError(
                    f"Query exceeds maximum length of {MAX_QUERY_LENGTH} characters"
                ) from e
            raise InvalidRequestError("Missing required parameters") from e


class ActionKind(str, Enum):
    CREATE_TASK = "create_task"
    SEND_MESSAGE = "send_message"
    SCHEDULE_MEETING = "schedule_meeting"
    SEARCH_FILES = "search_files"


@dataclass(frozen=True)
class CompleteTask:
    task_id: str
    kind: ClassVar[ActionKind] = ActionKind.CREATE_TASK

    def data(self) -> Dict[str, Any]:
        return {"taskId": self.task_id, "action": "complete"}


@dataclass(frozen=True)
class ReviewApproval:
    approval_id: str
    kind: ClassVar[ActionKind] = ActionKind.CREATE_TASK

    def data(self) -> Dict[str, Any]:
        return {"approvalId": self.approval_id, "action": "review"}


@dataclass(frozen=True)
class MarkAllRead:
    kind: ClassVar[ActionKind] = ActionKind.SEND_MESSAGE

    def data(self) -> Dict[str, Any]:
        return {"action": "mark_all_read"}


@dataclass(frozen=True)
class PreviewFile:
    file_id: str
    kind: ClassVar[ActionKind] = ActionKind.SEARCH_FILES

    def data(self) -> Dict[str, Any]:
        return {"fileId": self.file_id, "action": "preview"}


@dataclass(frozen=True)
class ScheduleMeeting:
    meeting_type: str
    duration_minutes: int
    kind: ClassVar[ActionKind] = ActionKind.SCHEDULE_MEETING

    def data(self) -> Dict[str, Any]:
        return {"type": self.meeting_type, "duration": self.duration_minutes}


Action = Union[CompleteTask, ReviewApproval, MarkAllRead, PreviewFile, ScheduleMeeting]


def action_to_wire(action: Action) -> Dict[str, Any]:
    return {"type": action.kind.value, "data": action.data()}


def action_from_wire(payload: Dict[str, Any]) -> Action:
    """
    Decode a wire action back into its variant.

    :raises InvalidRequestError: If the type/payload pair is not a known variant
    """
    if not isinstance(payload, dict):
        raise InvalidRequestError("Action must be an object")

    kind = payload.get("type")
    data = payload.get("data") or {}
    if not isinstance(data, dict):
        raise InvalidRequestError(f"Malformed '{kind}' action payload")

    verb = data.get("action")

    try:
        if kind == ActionKind.CREATE_TASK.value and verb == "complete":
            return CompleteTask(task_id=data["taskId"])
        if kind == ActionKind.CREATE_TASK.value and verb == "review":
            return ReviewApproval(approval_id=data["approvalId"])
        if kind == ActionKind.SEND_MESSAGE.value and verb == "mark_all_read":
            return MarkAllRead()
        if kind == ActionKind.SEARCH_FILES.value and verb == "preview":
            return PreviewFile(file_id=data["fileId"])
        if kind == ActionKind.SCHEDULE_MEETING.value:
            return ScheduleMeeting(
                meeting_type=data["type"],
                duration_minutes=int(data["duration"]),
            )
    except (KeyError, TypeError, ValueError) as e:
        raise InvalidRequestError(f"Malformed '{kind}' action payload") from e

    raise InvalidRequestError(f"Unknown action: type={kind!r}, action={verb!r}")


@dataclass
class AssistantResponse:
    text: str
    actions: List[Action] = field(default_factory=list)
    suggestions: Optional[List[str]] = None
