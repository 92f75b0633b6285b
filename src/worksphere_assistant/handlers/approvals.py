from typing import Optional

from ..interaction import IntentType
from ..models import ApprovalRequest, User
from ..schemas import AssistantResponse, RequestContext, ReviewApproval
from . import queries
from .base import IntentHandler
from .formatting import bullet_list, format_date


class ApprovalHandler(IntentHandler):
    """
    Pending approvals the caller requested or must decide.

    Only approvals where the caller is the approver produce a review action.
    """

    intent = IntentType.APPROVAL

    EMPTY_SUGGESTIONS = ["View approval history", "Create approval request", "Check team approvals"]

    def respond(
        self,
        user: User,
        query: str,
        context: Optional[RequestContext],
    ) -> AssistantResponse:
        rows = self.gateway.fetch(
            queries.pending_approvals(user)
            .select(queries.APPROVAL_COLUMNS)
            .order("created_at", descending=True)
            .limit(self.config.approval_page_size)
        )
        approvals = [ApprovalRequest.from_row(row) for row in rows]

        if not approvals:
            return AssistantResponse(
                text="You don't have any pending approvals.",
                suggestions=list(self.EMPTY_SUGGESTIONS),
            )

        lines = (
            f"{a.type} request from {a.requester_name or 'unknown'} ({format_date(a.created_at)})"
            for a in approvals
        )
        text = f"Found {len(approvals)} pending approvals:\n\n{bullet_list(lines)}"

        awaiting_me = [a for a in approvals if a.approver_id == user.id]
        if awaiting_me:
            text += f"\n\n{len(awaiting_me)} require your action."

        return AssistantResponse(
            text=text,
            actions=[ReviewApproval(approval_id=a.id) for a in awaiting_me],
        )
