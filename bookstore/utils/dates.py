"""일시 유틸리티 — UTC 정규화.

Datetime helpers. Timestamps are stored in UTC; SQLite hands them back
naive, and query parameters may arrive naive, so both are read as UTC.
"""

from datetime import date, datetime, time, timezone


def as_utc(value: datetime) -> datetime:
    """naive 일시를 UTC로 간주, aware 일시는 UTC로 변환 — Normalize to aware UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def day_bounds(start: date, end: date) -> tuple[datetime, datetime]:
    """날짜 구간을 UTC 일시 구간으로 변환 — [start 00:00, end 23:59:59.999999] in UTC."""
    return (
        datetime.combine(start, time.min, tzinfo=timezone.utc),
        datetime.combine(end, time.max, tzinfo=timezone.utc),
    )
