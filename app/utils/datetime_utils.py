"""
Timezone-aware datetime helpers.
- Timestamps are stored and computed in UTC.
- The work date and the lateness wall clock use the organization zone (settings.TIMEZONE).
- API responses expose timestamps as ISO-8601 UTC with a Z suffix.
"""
from datetime import date, datetime, timezone
from typing import Optional
from zoneinfo import ZoneInfo

from app.core.config import settings

UTC = timezone.utc


def local_zone() -> ZoneInfo:
    return ZoneInfo(settings.TIMEZONE)


def now_utc() -> datetime:
    """Current time in UTC (timezone-aware)."""
    return datetime.now(UTC)


def ensure_utc(dt: Optional[datetime]) -> Optional[datetime]:
    """If dt is naive, treat as UTC and return timezone-aware UTC. If already aware, convert to UTC."""
    if dt is None:
        return None
    if dt.tzinfo is None:
        return dt.replace(tzinfo=UTC)
    return dt.astimezone(UTC)


def to_local(dt: Optional[datetime]) -> Optional[datetime]:
    """Convert to the organization zone. Naive datetimes are treated as UTC."""
    if dt is None:
        return None
    return ensure_utc(dt).astimezone(local_zone())


def local_today(now: Optional[datetime] = None) -> date:
    """Work date in the organization zone."""
    return to_local(now or now_utc()).date()


def iso_utc(dt: Optional[datetime]) -> Optional[str]:
    """ISO-8601 with Z for UTC. Used for every API datetime field and CSV export."""
    if dt is None:
        return None
    s = ensure_utc(dt).isoformat()
    if s.endswith("+00:00"):
        s = s[:-6] + "Z"
    return s
