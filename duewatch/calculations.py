"""Helper functions for day arithmetic, due derivation and status checks."""

from datetime import date, datetime
from dateutil.relativedelta import relativedelta
from typing import Optional, Union

from .interval import DueDeadlines, RecurrenceInterval
from .status import ServiceStatus

DateLike = Union[date, datetime]


def as_date(value: DateLike) -> date:
    """Calendar day of a timestamp (dates pass through)."""
    if isinstance(value, datetime):
        return value.date()
    return value


def days_between(start: DateLike, end: DateLike) -> int:
    """
    Whole calendar days from start to end (negative if end is earlier).

    Counts day boundaries crossed rather than elapsed hours, so 23:00 and
    01:00 the next morning are one day apart.
    """
    return (as_date(end) - as_date(start)).days


def calc_due_miles(anchor_miles: int, interval_miles: Optional[int]) -> Optional[int]:
    """Calculate next due mileage: anchor + interval, or None without an interval."""
    if interval_miles is None or interval_miles <= 0:
        return None
    return anchor_miles + interval_miles


def calc_due_date(anchor_date: DateLike, interval_months: Optional[int]) -> Optional[date]:
    """Calculate next due date: anchor + interval calendar months."""
    if interval_months is None or interval_months <= 0:
        return None
    return as_date(anchor_date) + relativedelta(months=interval_months)


def derive_due(
    interval: RecurrenceInterval, anchor_date: DateLike, anchor_miles: int
) -> DueDeadlines:
    """
    Derive due deadlines from an interval anchored at (date, mileage).

    Both axes are recomputed from scratch; an axis without a positive
    interval comes back as None. Never looks at previous deadlines.
    """
    return DueDeadlines(
        due_date=calc_due_date(anchor_date, interval.months),
        due_miles=calc_due_miles(anchor_miles, interval.miles),
    )


def check_status(
    deadlines: DueDeadlines,
    current_miles: int,
    today: DateLike,
    mileage_threshold: int,
    days_threshold: int,
) -> ServiceStatus:
    """
    Classify a service by its deadlines.

    Order matters:
    - OVERDUE if past the due date, or past the due mileage
    - DUE_SOON by mileage when a due mileage exists, otherwise by date
    - GOOD if any deadline exists
    - NEUTRAL otherwise
    """
    due_date = deadlines.due_date
    due_miles = deadlines.due_miles

    if due_date is not None and as_date(today) > due_date:
        return ServiceStatus.OVERDUE
    if due_miles is not None and current_miles > due_miles:
        return ServiceStatus.OVERDUE

    # Mileage governs "soon" exclusively when present
    if due_miles is not None:
        miles_until_due = due_miles - current_miles
        if 0 <= miles_until_due <= mileage_threshold:
            return ServiceStatus.DUE_SOON
    elif due_date is not None:
        days_until_due = days_between(today, due_date)
        if 0 <= days_until_due <= days_threshold:
            return ServiceStatus.DUE_SOON

    if deadlines.has_due_tracking:
        return ServiceStatus.GOOD
    return ServiceStatus.NEUTRAL
