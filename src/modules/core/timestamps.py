from __future__ import annotations

from datetime import datetime, timezone as dt_timezone

from django.utils import timezone


def to_iso(moment: datetime) -> str:
    """UTC ISO-8601 with millisecond precision and a ``Z`` suffix."""
    moment = moment.astimezone(dt_timezone.utc)
    return moment.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def now_iso() -> str:
    return to_iso(timezone.now())
