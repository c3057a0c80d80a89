"""Recurrence intervals and the due deadlines derived from them."""

from dataclasses import dataclass
from datetime import date
from typing import Optional


@dataclass(frozen=True)
class RecurrenceInterval:
    """
    How often a service repeats.

    Zero or None on an axis means no recurrence on that axis.
    """

    months: Optional[int] = None
    miles: Optional[int] = None

    @property
    def has_months(self) -> bool:
        return self.months is not None and self.months > 0

    @property
    def has_miles(self) -> bool:
        return self.miles is not None and self.miles > 0

    @property
    def is_recurring(self) -> bool:
        return self.has_months or self.has_miles


@dataclass
class DueDeadlines:
    """Concrete deadlines for a service. None means no deadline on that axis."""

    due_date: Optional[date] = None
    due_miles: Optional[int] = None

    @property
    def has_due_tracking(self) -> bool:
        return self.due_date is not None or self.due_miles is not None
