"""Rental duration in billable hours and days."""

from __future__ import annotations

import math
from datetime import datetime, timezone
from typing import Optional

from rental_billing.config import HOURS_PER_DAY
from rental_billing.domain.models import Duration

SECONDS_PER_HOUR = 3600
MINIMUM_DURATION = Duration(hours=1, days=1)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def as_aware(value: datetime) -> datetime:
    """Treat naive datetimes as UTC so they compare with aware ones."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def resolve_duration(
    start_at: Optional[datetime],
    end_at: Optional[datetime] = None,
    *,
    now: Optional[datetime] = None,
) -> Duration:
    """Return the billable duration between two instants.

    Both units are rounded up and never drop below one: an open rental is
    measured against ``now`` (the current UTC time by default), and a missing
    start or an end before the start yields one hour and one day.
    """
    if start_at is None:
        return MINIMUM_DURATION
    end = end_at if end_at is not None else (now or utc_now())
    elapsed = (as_aware(end) - as_aware(start_at)).total_seconds()
    if elapsed <= 0:
        return MINIMUM_DURATION
    hours = max(1, math.ceil(elapsed / SECONDS_PER_HOUR))
    days = max(1, math.ceil(hours / HOURS_PER_DAY))
    return Duration(hours=hours, days=days)
