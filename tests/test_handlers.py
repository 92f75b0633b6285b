"""
Tests for the per-intent handlers.
"""
from datetime import datetime, timedelta, timezone

import pytest

from worksphere_assistant.assembler import ResponseAssembler
from worksphere_assistant.exceptions import InternalError
from worksphere_assistant.handlers import (
    ApprovalHandler,
    FileHandler,
    MeetingHandler,
    MessageHandler,
    SummaryHandler,
    TaskHandler,
    build_handlers,
    productivity_label,
)
from worksphere_assistant.handlers.formatting import format_date
from worksphere_assistant.interaction import IntentType
from worksphere_assistant.models import User
from worksphere_assistant.schemas import (
    CompleteTask,
    MarkAllRead,
    PreviewFile,
    ReviewApproval,
    ScheduleMeeting,
)

FIXED_NOW = datetime(2026, 10, 18, 12, 0, tzinfo=timezone.utc)


def make_user(gateway, user_id):
    return User.from_row(gateway.get_by_id("users", user_id))


class TestTaskHandler:
    """Tests for TaskHandler."""

    def test_lists_open_tasks_soonest_first(self, gateway, config):
        """Test digest lines, ordering and one complete action per task."""
        handler = TaskHandler(gateway, config, clock=lambda: FIXED_NOW)
        response = handler.handle(make_user(gateway, "u1"), "show my pending tasks")

        assert "You have 3 pending tasks:" in response.text
        assert "• Ship quarterly report (high priority, due 1/15/2020)" in response.text
        assert "• Update onboarding docs (medium priority, due 3/1/2099)" in response.text
        assert response.text.index("Ship quarterly report") < response.text.index("Plan offsite")
        assert "Old cleanup" not in response.text
        assert "Someone else's task" not in response.text
        assert response.actions == [
            CompleteTask(task_id="t1"),
            CompleteTask(task_id="t2"),
            CompleteTask(task_id="t3"),
        ]

    def test_overdue_trailer(self, gateway, config):
        """Test the overdue count is appended when a due date has passed."""
        handler = TaskHandler(gateway, config, clock=lambda: FIXED_NOW)
        response = handler.handle(make_user(gateway, "u1"), "tasks")

        assert response.text.endswith("1 overdue.")

    def test_no_overdue_trailer_when_all_future(self, gateway, config):
        """Test no overdue line when nothing is late."""
        early = datetime(2000, 1, 1, tzinfo=timezone.utc)
        handler = TaskHandler(gateway, config, clock=lambda: early)
        response = handler.handle(make_user(gateway, "u1"), "tasks")

        assert "overdue" not in response.text

    def test_task_without_due_date_listed_last(self, gateway, config):
        """Test tasks with no due date sort after dated ones."""
        gateway.insert("tasks", {
            "id": "t9", "title": "Someday", "priority": "low",
            "status": "todo", "due_date": None, "assigned_to": "u1",
        })
        handler = TaskHandler(gateway, config, clock=lambda: FIXED_NOW)
        response = handler.handle(make_user(gateway, "u1"), "tasks")

        assert "• Someday (low priority)" in response.text
        assert response.actions[-1] == CompleteTask(task_id="t9")

    def test_zero_state(self, gateway, config):
        """Test empty result returns encouragement and suggestions, no actions."""
        handler = TaskHandler(gateway, config)
        response = handler.handle(make_user(gateway, "u3"), "tasks")

        assert "don't have any pending tasks" in response.text
        assert response.actions == []
        assert 2 <= len(response.suggestions) <= 4

        body = ResponseAssembler().serialize(response)
        assert "actions" not in body

    def test_page_size_limit(self, gateway, config):
        """Test at most page_size tasks are listed."""
        gateway.insert("tasks", *[
            {"id": f"bulk{i}", "title": f"Bulk {i}", "priority": "low",
             "status": "todo", "due_date": f"2098-01-{i + 1:02d}T00:00:00Z",
             "assigned_to": "u2"}
            for i in range(12)
        ])
        handler = TaskHandler(gateway, config)
        response = handler.handle(make_user(gateway, "u2"), "tasks")

        assert "You have 10 pending tasks" in response.text
        assert len(response.actions) == 10


class TestMessageHandler:
    """Tests for MessageHandler."""

    @pytest.fixture
    def inbox(self, gateway):
        gateway.insert("channels", {"id": "c1", "name": "general", "members": ["u1", "u2"]})
        gateway.insert("channels", {"id": "c2", "name": "execs", "members": ["u3"]})
        gateway.insert(
            "messages",
            {"id": "m1", "recipient_id": "u1", "channel_id": None, "read_by": None,
             "content": "Can you review the draft?", "created_at": "2026-10-17T10:00:00Z",
             "sender": {"full_name": "Ben Manager"}},
            {"id": "m2", "recipient_id": None, "channel_id": "c1", "read_by": None,
             "content": "x" * 80, "created_at": "2026-10-17T11:00:00Z",
             "sender": {"full_name": "Cleo Ceo"}},
            {"id": "m3", "recipient_id": "u1", "channel_id": None, "read_by": ["u1"],
             "content": "Already read", "created_at": "2026-10-17T12:00:00Z",
             "sender": {"full_name": "Ben Manager"}},
            {"id": "m4", "recipient_id": None, "channel_id": "c2", "read_by": None,
             "content": "Exec only", "created_at": "2026-10-17T13:00:00Z",
             "sender": {"full_name": "Cleo Ceo"}},
        )
        return gateway

    def test_unread_direct_and_channel_messages(self, inbox, config):
        """Test visibility, newest-first order and truncation."""
        response = MessageHandler(inbox, config).handle(make_user(inbox, "u1"), "unread messages")

        assert "You have 2 unread messages:" in response.text
        assert f"• Cleo Ceo: {'x' * 50}..." in response.text
        assert "• Ben Manager: Can you review the draft?" in response.text
        assert response.text.index("Cleo Ceo") < response.text.index("Ben Manager")
        assert "Already read" not in response.text
        assert "Exec only" not in response.text
        assert response.actions == [MarkAllRead()]

    def test_preview_shows_five_but_counts_all(self, inbox, config):
        """Test only the first five are shown while all are counted."""
        inbox.insert("messages", *[
            {"id": f"bulk{i}", "recipient_id": "u1", "channel_id": None, "read_by": None,
             "content": f"note {i}", "created_at": f"2026-10-18T0{i}:00:00Z",
             "sender": {"full_name": "Bot"}}
            for i in range(6)
        ])
        response = MessageHandler(inbox, config).handle(make_user(inbox, "u1"), "chat")

        assert "You have 8 unread messages:" in response.text
        assert response.text.count("• ") == 5

    def test_user_without_channels(self, inbox, config):
        """Test direct messages only when the user belongs to no channel."""
        inbox.insert("messages", {
            "id": "m9", "recipient_id": "u4", "channel_id": None, "read_by": None,
            "content": "Welcome!", "created_at": "2026-10-18T08:00:00Z", "sender": None,
        })
        response = MessageHandler(inbox, config).handle(make_user(inbox, "u4"), "messages")

        assert "You have 1 unread messages:" in response.text
        assert "• Unknown sender: Welcome!" in response.text

    def test_zero_state(self, gateway, config):
        """Test empty inbox."""
        response = MessageHandler(gateway, config).handle(make_user(gateway, "u2"), "messages")

        assert "inbox is clean" in response.text
        assert response.actions == []
        assert len(response.suggestions) == 3


class TestFileHandler:
    """Tests for FileHandler."""

    def test_recent_files(self, gateway, config):
        """Test digest shows five files and proposes a preview for each file found."""
        gateway.insert("files", *[
            {"id": f"f{i}", "name": f"report-{i}.pdf", "size": 1572864,
             "organization_id": "o1", "created_at": f"2026-10-1{i}T09:00:00Z",
             "uploaded_by_user": {"full_name": "Ana Employee"}}
            for i in range(7)
        ])
        gateway.insert("files", {
            "id": "other", "name": "secret.pdf", "size": 10,
            "organization_id": "o2", "created_at": "2026-10-18T09:00:00Z",
        })
        response = FileHandler(gateway, config).handle(make_user(gateway, "u1"), "find files")

        assert "Found 7 recent files in your organization:" in response.text
        assert "• report-6.pdf (1.50 MB, uploaded by Ana Employee)" in response.text
        assert "report-1.pdf" not in response.text
        assert "secret.pdf" not in response.text
        assert response.text.count("• ") == 5
        assert len(response.actions) == 7
        assert response.actions[0] == PreviewFile(file_id="f6")

    def test_zero_state(self, gateway, config):
        """Test organization without files."""
        response = FileHandler(gateway, config).handle(make_user(gateway, "u1"), "files")

        assert response.text == "No files found in your organization."
        assert response.actions == []
        assert "Upload a file" in response.suggestions


class TestApprovalHandler:
    """Tests for ApprovalHandler."""

    @pytest.fixture
    def approvals(self, gateway):
        gateway.insert(
            "approvals",
            {"id": "a1", "type": "expense", "status": "pending", "priority": "high",
             "requester_id": "u1", "approver_id": "u2", "created_at": "2026-10-10T09:00:00Z",
             "requester": {"full_name": "Ana Employee"}},
            {"id": "a2", "type": "leave", "status": "pending", "priority": "low",
             "requester_id": "u2", "approver_id": "u3", "created_at": "2026-10-12T09:00:00Z",
             "requester": {"full_name": "Ben Manager"}},
            {"id": "a3", "type": "purchase", "status": "approved", "priority": "low",
             "requester_id": "u1", "approver_id": "u2", "created_at": "2026-10-13T09:00:00Z",
             "requester": {"full_name": "Ana Employee"}},
        )
        return gateway

    def test_approver_gets_review_actions(self, approvals, config):
        """Test trailer and actions only for approvals awaiting the caller."""
        response = ApprovalHandler(approvals, config).handle(make_user(approvals, "u2"), "approvals")

        assert "Found 2 pending approvals:" in response.text
        assert "• leave request from Ben Manager (10/12/2026)" in response.text
        assert "• expense request from Ana Employee (10/10/2026)" in response.text
        assert response.text.endswith("1 require your action.")
        assert response.actions == [ReviewApproval(approval_id="a1")]

    def test_requester_only(self, approvals, config):
        """Test no trailer or actions when the caller only requested."""
        response = ApprovalHandler(approvals, config).handle(make_user(approvals, "u1"), "approve")

        assert "Found 1 pending approvals:" in response.text
        assert "require your action" not in response.text
        assert response.actions == []

    def test_page_cap(self, gateway, config):
        """Test approvals are capped at approval_page_size."""
        gateway.insert("approvals", *[
            {"id": f"bulk{i}", "type": "expense", "status": "pending",
             "requester_id": "u1", "approver_id": "u3",
             "created_at": f"2026-09-{(i % 28) + 1:02d}T09:00:00Z"}
            for i in range(60)
        ])
        response = ApprovalHandler(gateway, config).handle(make_user(gateway, "u3"), "approval")

        assert f"Found {config.approval_page_size} pending approvals:" in response.text
        assert len(response.actions) == config.approval_page_size

    def test_zero_state(self, gateway, config):
        """Test no pending approvals."""
        response = ApprovalHandler(gateway, config).handle(make_user(gateway, "u1"), "approval")

        assert response.text == "You don't have any pending approvals."
        assert response.actions == []


class TestMeetingHandler:
    """Tests for MeetingHandler."""

    def test_static_menu(self, failing_gateway, config):
        """Test the menu needs no data access."""
        user = make_user(failing_gateway, "u1")
        response = MeetingHandler(failing_gateway, config).handle(user, "schedule")

        assert "I can help you schedule meetings" in response.text
        assert response.actions == [
            ScheduleMeeting(meeting_type="team", duration_minutes=60),
            ScheduleMeeting(meeting_type="one-on-one", duration_minutes=30),
        ]
        assert len(response.suggestions) == 4


class TestSummaryHandler:
    """Tests for SummaryHandler."""

    @pytest.mark.parametrize("pending,label", [
        (0, "Excellent"),
        (1, "Good"),
        (2, "Good"),
        (3, "Needs attention"),
        (5, "Needs attention"),
    ])
    def test_productivity_label(self, pending, label):
        """Test productivity thresholds."""
        assert productivity_label(pending) == label

    def test_employee_summary(self, gateway, config):
        """Test counts without team size for employees."""
        gateway.insert("messages", {"id": "m1", "recipient_id": "u1", "read_by": None})
        gateway.insert("approvals", {"id": "a1", "status": "pending",
                                     "requester_id": "u1", "approver_id": "u2"})
        response = SummaryHandler(gateway, config).handle(make_user(gateway, "u1"), "summary")

        assert "**Tasks**: 3 pending" in response.text
        assert "**Messages**: 1 unread" in response.text
        assert "**Approvals**: 1 pending" in response.text
        assert "Team Members" not in response.text
        assert response.text.endswith("**Productivity**: Needs attention")
        assert response.actions == []
        assert len(response.suggestions) == 4

    def test_manager_sees_team_size(self, gateway, config):
        """Test managers get the department headcount."""
        response = SummaryHandler(gateway, config).handle(make_user(gateway, "u2"), "overview")

        assert "**Team Members**: 2" in response.text
        assert "**Tasks**: 1 pending" in response.text
        assert response.text.endswith("**Productivity**: Good")

    def test_ceo_with_no_work(self, gateway, config):
        """Test CEO summary with nothing pending."""
        response = SummaryHandler(gateway, config).handle(make_user(gateway, "u3"), "status")

        assert "**Team Members**: 1" in response.text
        assert response.text.endswith("**Productivity**: Excellent")


class TestHandlerFailures:
    """Tests for store failures inside handlers."""

    @pytest.mark.parametrize("handler_cls", [
        TaskHandler, MessageHandler, FileHandler, ApprovalHandler, SummaryHandler,
    ])
    def test_gateway_failure_becomes_internal_error(self, failing_gateway, config, handler_cls):
        """Test failures surface as an opaque InternalError."""
        handler = handler_cls(failing_gateway, config)

        with pytest.raises(InternalError, match="Internal server error"):
            handler.handle(make_user(failing_gateway, "u1"), "query")


def test_build_handlers_covers_every_intent(gateway, config):
    handlers = build_handlers(gateway, config)

    assert set(handlers) == set(IntentType) - {IntentType.UNKNOWN}
    for intent, handler in handlers.items():
        assert handler.intent is intent


class TestFormatting:
    """Tests for digest date rendering."""

    def test_offset_timestamp_rendered_in_utc(self):
        """Test an instant just past midnight at +05:00 renders as the UTC day."""
        value = datetime(2024, 3, 1, 0, 30, tzinfo=timezone(timedelta(hours=5)))

        assert format_date(value) == "2/29/2024"

    def test_naive_timestamp_taken_as_utc(self):
        """Test naive values are not shifted."""
        assert format_date(datetime(2024, 12, 31, 23, 59)) == "12/31/2024"

    def test_missing_date(self):
        assert format_date(None) == "unknown date"
