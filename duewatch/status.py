"""ServiceStatus enum for maintenance urgency levels."""

from enum import Enum


class ServiceStatus(Enum):
    """Service status categories. Lower value = more urgent."""

    OVERDUE = 1
    DUE_SOON = 2
    GOOD = 3
    NEUTRAL = 4  # No deadlines configured (log-only service)

    @property
    def label(self) -> str:
        """Short uppercase label; empty for NEUTRAL."""
        labels = {
            ServiceStatus.OVERDUE: "OVERDUE",
            ServiceStatus.DUE_SOON: "DUE SOON",
            ServiceStatus.GOOD: "GOOD",
            ServiceStatus.NEUTRAL: "",
        }
        return labels[self]

    @property
    def is_actionable(self) -> bool:
        return self in (ServiceStatus.OVERDUE, ServiceStatus.DUE_SOON)
