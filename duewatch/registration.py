"""RegistrationRenewal class for the yearly registration tag deadline."""

import calendar
from datetime import date
from dateutil.relativedelta import relativedelta

from .calculations import DateLike, days_between
from .status import ServiceStatus

# Registration is flagged earlier than services
DUE_SOON_DAYS = 60


class RegistrationRenewal:
    """
    Registration tag expiration, tracked by month and year only.

    The tag is valid through the last day of its expiration month. This is
    a date-only item: it has no mileage and sorts alongside services by
    urgency score.
    """

    def __init__(self, month: int, year: int):
        if not 1 <= month <= 12:
            raise ValueError(f"Expiration month must be 1..12, got {month}")
        self.month = month
        self.year = year

    @property
    def expiration_date(self) -> date:
        """Last day of the expiration month."""
        return date(self.year, self.month, 1) + relativedelta(months=1, days=-1)

    @property
    def display_name(self) -> str:
        return f"{calendar.month_name[self.month]} {self.year}"

    def days_until_expiration(self, now: DateLike) -> int:
        """Days until expiration (negative once expired)."""
        return days_between(now, self.expiration_date)

    def status(self, now: DateLike) -> ServiceStatus:
        days = self.days_until_expiration(now)
        if days < 0:
            return ServiceStatus.OVERDUE
        if days <= DUE_SOON_DAYS:
            return ServiceStatus.DUE_SOON
        return ServiceStatus.GOOD

    def urgency_score(self, now: DateLike) -> int:
        return self.days_until_expiration(now)
