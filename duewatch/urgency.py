"""
Urgency scoring and due date prediction.

Date and mileage deadlines are both converted to "days remaining" so
services and date-only items (registration renewal) can share one sorted
list. Lower score = more urgent.
"""

import math
import sys
from datetime import date, timedelta
from typing import Optional

from .calculations import DateLike, as_date, days_between
from .interval import DueDeadlines

# Score for items with no deadline at all
URGENCY_MAX = sys.maxsize
# Assumed miles per day when no pace history exists
DEFAULT_DAILY_PACE = 40.0
# Decimal places kept before rounding days, to absorb float drift in the pace
DAYS_PRECISION = 9


def _days_at_pace(miles_remaining: int, pace: float) -> float:
    return round(miles_remaining / pace, DAYS_PRECISION)


def urgency_score(
    deadlines: DueDeadlines,
    current_miles: int,
    now: DateLike,
    pace: Optional[float] = None,
) -> int:
    """Days until the more urgent deadline (negative if overdue)."""
    score = URGENCY_MAX

    if deadlines.due_date is not None:
        score = min(score, days_between(now, deadlines.due_date))

    if deadlines.due_miles is not None:
        effective_pace = pace if pace is not None and pace > 0 else DEFAULT_DAILY_PACE
        miles_remaining = deadlines.due_miles - current_miles
        score = min(score, math.floor(_days_at_pace(miles_remaining, effective_pace)))

    return score


def predicted_due_date(
    deadlines: DueDeadlines,
    current_miles: int,
    now: DateLike,
    pace: Optional[float],
) -> Optional[date]:
    """Date the due mileage will be reached at the given pace."""
    if pace is None or pace <= 0 or deadlines.due_miles is None:
        return None
    miles_remaining = deadlines.due_miles - current_miles
    if miles_remaining <= 0:
        return None
    return as_date(now) + timedelta(days=math.ceil(_days_at_pace(miles_remaining, pace)))


def effective_due_date(
    deadlines: DueDeadlines,
    current_miles: int,
    now: DateLike,
    pace: Optional[float],
) -> Optional[date]:
    """The earlier of the calendar due date and the predicted mileage date."""
    candidates = [
        d
        for d in (
            deadlines.due_date,
            predicted_due_date(deadlines, current_miles, now, pace),
        )
        if d is not None
    ]
    if not candidates:
        return None
    return min(candidates)
