"""
Visibility-scoped queries shared by the handlers.

Counting and listing go through the same builders so the summary numbers
agree with the per-intent digests.
"""
from ..gateway import DataGateway, Filter, TableQuery
from ..models import User

TASK_COLUMNS = "*, assigned_by_user:assigned_by (full_name), department:department_id (name)"
MESSAGE_COLUMNS = "*, sender:sender_id (full_name, avatar_url), channel:channel_id (name, type)"
FILE_COLUMNS = "*, uploaded_by_user:uploaded_by (full_name)"
APPROVAL_COLUMNS = "*, requester:requester_id (full_name), approver:approver_id (full_name)"


def pending_tasks(user: User) -> TableQuery:
    return (
        TableQuery("tasks")
        .eq("assigned_to", user.id)
        .neq("status", "completed")
    )


def unread_messages(gateway: DataGateway, user: User) -> TableQuery:
    """Unread messages sent to the user directly or to a channel they belong to."""
    channels = gateway.fetch(
        TableQuery("channels").select("id").contains("members", [user.id])
    )
    channel_ids = [row["id"] for row in channels]

    query = TableQuery("messages").is_null("read_by")
    if channel_ids:
        return query.any_of(
            Filter("recipient_id", "eq", user.id),
            Filter("channel_id", "in", tuple(channel_ids)),
        )
    return query.eq("recipient_id", user.id)


def organization_files(user: User) -> TableQuery:
    return TableQuery("files").eq("organization_id", user.organization_id)


def pending_approvals(user: User) -> TableQuery:
    return (
        TableQuery("approvals")
        .any_of(
            Filter("requester_id", "eq", user.id),
            Filter("approver_id", "eq", user.id),
        )
        .eq("status", "pending")
    )


def team_members(user: User) -> TableQuery:
    query = TableQuery("users").eq("organization_id", user.organization_id)
    if user.department_id is None:
        return query.is_null("department_id")
    return query.eq("department_id", user.department_id)
