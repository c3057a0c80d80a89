"""ServiceDue dataclass for calculated service status."""

from dataclasses import dataclass
from datetime import date
from typing import Optional, TYPE_CHECKING

from .status import ServiceStatus

if TYPE_CHECKING:
    from .service import Service


@dataclass
class ServiceDue:
    """Calculated service due information, evaluated at one point in time."""

    service: "Service"
    status: ServiceStatus
    due_miles: Optional[int] = None
    due_date: Optional[date] = None
    effective_due_date: Optional[date] = None
    miles_remaining: Optional[int] = None
    time_remaining_days: Optional[int] = None
    urgency_score: Optional[int] = None

    @property
    def is_due(self) -> bool:
        return self.status.is_actionable
