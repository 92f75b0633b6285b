from datetime import datetime, timezone
from typing import Iterable, Optional


def format_date(value: Optional[datetime]) -> str:
    """Render a date as M/D/YYYY in UTC."""
    if value is None:
        return "unknown date"
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    value = value.astimezone(timezone.utc)
    return f"{value.month}/{value.day}/{value.year}"


def truncate(text: str, limit: int = 50) -> str:
    if len(text) > limit:
        return f"{text[:limit]}..."
    return text


def bullet_list(lines: Iterable[str]) -> str:
    return "\n".join(f"• {line}" for line in lines)
