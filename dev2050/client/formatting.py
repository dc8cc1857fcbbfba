from datetime import datetime, timezone
from typing import Optional


def _plural(count: int, unit: str) -> str:
    return f"{count} {unit}" if count == 1 else f"{count} {unit}s"


def relative_time(then: datetime, now: Optional[datetime] = None) -> str:
    """
    Human readable age of an upload, e.g. "just now", "last 5 minutes", "2 days ago".
    """
    now = now or datetime.now(timezone.utc)
    if then.tzinfo is None:
        then = then.replace(tzinfo=timezone.utc)
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)

    seconds = max(int((now - then).total_seconds()), 0)
    minutes = seconds // 60
    hours = minutes // 60
    days = hours // 24
    months = days // 30
    years = days // 365

    if years > 0:
        return f"{_plural(years, 'year')} ago"
    if months > 0:
        return f"{_plural(months, 'month')} ago"
    if days > 0:
        return f"{_plural(days, 'day')} ago"
    if hours > 0:
        return f"last {_plural(hours, 'hour')}"
    if minutes > 0:
        return f"last {_plural(minutes, 'minute')}"
    return "just now"


def format_size(size: Optional[int]) -> Optional[str]:
    if size is None:
        return None
    return f"{size / 1024:.2f} KB"
