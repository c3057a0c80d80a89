"""Mileage projection from driving pace."""

import logging
import math
from typing import Optional

from .calculations import DateLike, days_between

logger = logging.getLogger(__name__)

# Beyond this many days since the last update the projection is not trusted
MAX_ESTIMATION_DAYS = 60
# Ask for a fresh odometer reading after this many days
PROMPT_AFTER_DAYS = 14


def days_since_update(updated_at: Optional[DateLike], now: DateLike) -> Optional[int]:
    """Whole days since mileage was last updated, or None if never updated."""
    if updated_at is None:
        return None
    return days_between(updated_at, now)


def project_mileage(
    pace: Optional[float],
    last_miles: int,
    updated_at: Optional[DateLike],
    now: DateLike,
) -> Optional[int]:
    """
    Project the current odometer from the last confirmed value.

    Returns None without a pace, without an update timestamp, when the
    update is less than a day old, or when it is more than 60 days old.
    """
    if pace is None:
        return None
    days = days_since_update(updated_at, now)
    if days is None or days <= 0:
        return None
    if days > MAX_ESTIMATION_DAYS:
        logger.debug("Mileage update is %d days old, not projecting", days)
        return None

    driven = pace * days
    return last_miles + int(math.floor(driven + 0.5))


def effective_mileage(
    pace: Optional[float],
    last_miles: int,
    updated_at: Optional[DateLike],
    now: DateLike,
) -> int:
    """Projected mileage if available, otherwise the last confirmed value."""
    projected = project_mileage(pace, last_miles, updated_at, now)
    return projected if projected is not None else last_miles


def should_prompt_update(
    current_miles: int, updated_at: Optional[DateLike], now: DateLike
) -> bool:
    """Prompt when mileage was never set, never updated, or is 14+ days old."""
    if current_miles == 0:
        return True
    days = days_since_update(updated_at, now)
    if days is None:
        return True
    return days >= PROMPT_AFTER_DAYS
