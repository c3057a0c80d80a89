"""Service class for a tracked maintenance item."""

from datetime import date
from typing import Optional

from .calculations import DateLike, as_date, check_status, derive_due
from .interval import DueDeadlines, RecurrenceInterval
from .status import ServiceStatus
from .urgency import effective_due_date, predicted_due_date, urgency_score


class Service:
    """A maintenance item with an optional interval and its current deadlines."""

    def __init__(
            self,
            name: str,
            interval_months: Optional[int] = None,
            interval_miles: Optional[int] = None,
            last_performed: Optional[date] = None,
            last_miles: Optional[int] = None,
            due_date: Optional[date] = None,
            due_miles: Optional[int] = None,
            notes: Optional[str] = None,
    ):
        self.name = name
        self.interval_months = interval_months
        self.interval_miles = interval_miles
        self.last_performed = last_performed
        self.last_miles = last_miles
        self.due_date = due_date
        self.due_miles = due_miles
        self.notes = notes

    @property
    def key(self) -> str:
        """Case-insensitive natural key."""
        return self.name.lower()

    @property
    def interval(self) -> RecurrenceInterval:
        return RecurrenceInterval(months=self.interval_months, miles=self.interval_miles)

    @property
    def deadlines(self) -> DueDeadlines:
        return DueDeadlines(due_date=self.due_date, due_miles=self.due_miles)

    @property
    def has_due_tracking(self) -> bool:
        """Services without deadlines are log-only (neutral)."""
        return self.deadlines.has_due_tracking

    def derive_due_from_intervals(self, anchor_date: DateLike, anchor_miles: int) -> None:
        """Replace both deadlines with ones derived from the interval."""
        due = derive_due(self.interval, anchor_date, anchor_miles)
        self.due_date = due.due_date
        self.due_miles = due.due_miles

    def recalculate_due(self, performed_date: DateLike, miles: int) -> None:
        """
        Re-anchor after the service was performed.

        Recurring services move to their next occurrence; non-recurring
        ones lose both deadlines and become neutral.
        """
        self.last_performed = as_date(performed_date)
        self.last_miles = miles
        self.derive_due_from_intervals(performed_date, miles)

    def status(
        self,
        current_miles: int,
        today: DateLike,
        mileage_threshold: int,
        days_threshold: int,
    ) -> ServiceStatus:
        return check_status(
            self.deadlines, current_miles, today, mileage_threshold, days_threshold
        )

    def urgency_score(
        self, current_miles: int, now: DateLike, pace: Optional[float] = None
    ) -> int:
        return urgency_score(self.deadlines, current_miles, now, pace)

    def predicted_due_date(
        self, current_miles: int, now: DateLike, pace: Optional[float]
    ) -> Optional[date]:
        return predicted_due_date(self.deadlines, current_miles, now, pace)

    def effective_due_date(
        self, current_miles: int, now: DateLike, pace: Optional[float]
    ) -> Optional[date]:
        return effective_due_date(self.deadlines, current_miles, now, pace)
