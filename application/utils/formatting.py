"""Display formatting shared by the admin listings."""
from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional
from zoneinfo import ZoneInfo

from core.config import settings


EMPTY_PLACEHOLDER = "-"


def format_admin_datetime(value: Optional[datetime], tz: Optional[ZoneInfo] = None) -> str:
    """Render as ``YYYY-MM-DD HH:MM (<zone>)``; naive values are treated as UTC."""
    if value is None:
        return EMPTY_PLACEHOLDER
    zone = tz or ZoneInfo(settings.ADMIN_TIMEZONE)
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    local = value.astimezone(zone)
    return f"{local:%Y-%m-%d %H:%M} ({zone.key})"
