"""
Read-only views of the rows the assistant consumes.

Rows come back from the data store as plain dicts, with embedded relations
(e.g. ``sender``) nested as dicts. Each ``from_row`` tolerates missing
optional columns.
"""
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, Optional


class UserRole(Enum):
    CEO = "ceo"
    ADMIN = "admin"
    MANAGER = "manager"
    EMPLOYEE = "employee"
    CUSTOMER = "customer"


def parse_timestamp(value: Any) -> Optional[datetime]:
    """Parse an ISO-8601 timestamp; naive values are taken as UTC."""
    if not value:
        return None
    if isinstance(value, datetime):
        parsed = value
    else:
        text = str(value).strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        try:
            parsed = datetime.fromisoformat(text)
        except ValueError:
            return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def _embedded_name(row: Dict[str, Any], key: str) -> Optional[str]:
    embedded = row.get(key)
    if isinstance(embedded, dict):
        return embedded.get("full_name")
    return None


@dataclass
class User:
    id: str
    organization_id: Optional[str]
    department_id: Optional[str]
    role: Optional[UserRole]
    full_name: Optional[str] = None

    @classmethod
    def from_row(cls, row: Dict[str, Any]) -> "User":
        try:
            role = UserRole(row.get("role"))
        except ValueError:
            role = None
        return cls(
            id=row["id"],
            organization_id=row.get("organization_id"),
            department_id=row.get("department_id"),
            role=role,
            full_name=row.get("full_name"),
        )

    @property
    def leads_team(self) -> bool:
        return self.role in (UserRole.CEO, UserRole.MANAGER)


@dataclass
class Task:
    id: str
    title: str
    priority: Optional[str]
    status: Optional[str]
    due_date: Optional[datetime]
    assigned_to: Optional[str]
    assigned_by_name: Optional[str] = None

    @classmethod
    def from_row(cls, row: Dict[str, Any]) -> "Task":
        return cls(
            id=row["id"],
            title=row.get("title") or "Untitled task",
            priority=row.get("priority"),
            status=row.get("status"),
            due_date=parse_timestamp(row.get("due_date")),
            assigned_to=row.get("assigned_to"),
            assigned_by_name=_embedded_name(row, "assigned_by_user"),
        )

    def is_overdue(self, now: datetime) -> bool:
        return self.due_date is not None and self.due_date < now


@dataclass
class Message:
    id: str
    sender_name: Optional[str]
    content: str
    recipient_id: Optional[str]
    channel_id: Optional[str]
    created_at: Optional[datetime]

    @classmethod
    def from_row(cls, row: Dict[str, Any]) -> "Message":
        return cls(
            id=row["id"],
            sender_name=_embedded_name(row, "sender"),
            content=row.get("content") or "",
            recipient_id=row.get("recipient_id"),
            channel_id=row.get("channel_id"),
            created_at=parse_timestamp(row.get("created_at")),
        )


@dataclass
class FileRecord:
    id: str
    name: str
    size: int
    uploader_name: Optional[str]
    created_at: Optional[datetime]

    @classmethod
    def from_row(cls, row: Dict[str, Any]) -> "FileRecord":
        return cls(
            id=row["id"],
            name=row.get("name") or "unnamed",
            size=int(row.get("size") or 0),
            uploader_name=_embedded_name(row, "uploaded_by_user"),
            created_at=parse_timestamp(row.get("created_at")),
        )

    @property
    def size_mb(self) -> float:
        return self.size / 1024 / 1024


@dataclass
class ApprovalRequest:
    id: str
    type: str
    status: str
    priority: Optional[str]
    requester_id: Optional[str]
    approver_id: Optional[str]
    requester_name: Optional[str]
    created_at: Optional[datetime]

    @classmethod
    def from_row(cls, row: Dict[str, Any]) -> "ApprovalRequest":
        return cls(
            id=row["id"],
            type=row.get("type") or "approval",
            status=row.get("status") or "pending",
            priority=row.get("priority"),
            requester_id=row.get("requester_id"),
            approver_id=row.get("approver_id"),
            requester_name=_embedded_name(row, "requester"),
            created_at=parse_timestamp(row.get("created_at")),
        )
