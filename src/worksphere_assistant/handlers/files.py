from typing import Optional

from ..interaction import IntentType
from ..models import FileRecord, User
from ..schemas import AssistantResponse, PreviewFile, RequestContext
from . import queries
from .base import IntentHandler
from .formatting import bullet_list


class FileHandler(IntentHandler):
    """Most recent uploads in the caller's organization."""

    intent = IntentType.FILE

    EMPTY_SUGGESTIONS = ["Upload a file", "Check shared documents", "Search by filename"]

    def respond(
        self,
        user: User,
        query: str,
        context: Optional[RequestContext],
    ) -> AssistantResponse:
        files = []
        if user.organization_id is not None:
            rows = self.gateway.fetch(
                queries.organization_files(user)
                .select(queries.FILE_COLUMNS)
                .order("created_at", descending=True)
                .limit(self.config.page_size)
            )
            files = [FileRecord.from_row(row) for row in rows]

        if not files:
            return AssistantResponse(
                text="No files found in your organization.",
                suggestions=list(self.EMPTY_SUGGESTIONS),
            )

        preview = files[:self.config.digest_preview_size]
        lines = (
            f"{f.name} ({f.size_mb:.2f} MB, uploaded by {f.uploader_name or 'unknown'})"
            for f in preview
        )

        return AssistantResponse(
            text=f"Found {len(files)} recent files in your organization:\n\n{bullet_list(lines)}",
            actions=[PreviewFile(file_id=f.id) for f in files],
        )
