from __future__ import annotations

import logging
from datetime import datetime
from typing import Sequence

from ..catalog.models import WEEKDAYS, WeeklyHours
from .models import Candidate

logger = logging.getLogger(__name__)


def _to_minutes(value: str) -> int:
    """Parse ``HH:MM`` into minutes since midnight."""
    hour, minute = value.strip().split(":")
    return int(hour) * 60 + int(minute)


def is_open_now(hours: WeeklyHours | None, now: datetime) -> bool:
    """
    Whether a business is open at ``now`` (local time).

    Fails closed: no schedule, no slot for today, a ``closed`` slot, missing
    or malformed times all count as not open. Spans that cross midnight
    (close earlier than open) are not treated specially, so they only match
    the literal open..close minute range and read as closed otherwise.
    """
    if hours is None:
        return False

    today = hours.for_day(WEEKDAYS[now.weekday()])
    if today is None or today.closed or not today.open or not today.close:
        return False

    try:
        open_time = _to_minutes(today.open)
        close_time = _to_minutes(today.close)
    except ValueError:
        logger.debug("Unparseable hours %r-%r", today.open, today.close)
        return False

    current = now.hour * 60 + now.minute
    return open_time <= current <= close_time


def filter_open_now(candidates: Sequence[Candidate], now: datetime) -> list[Candidate]:
    return [c for c in candidates if is_open_now(c.business.hours, now)]
