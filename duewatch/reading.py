"""OdometerReading class for timestamped mileage history."""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Optional


class ReadingOrigin(Enum):
    """Where an odometer reading came from."""

    MANUAL = "manual"
    SERVICE_COMPLETION = "service_completion"


@dataclass(frozen=True)
class OdometerReading:
    """A single odometer value recorded at a point in time. Never mutated."""

    miles: int
    recorded_at: datetime
    origin: ReadingOrigin = ReadingOrigin.MANUAL
    id: Optional[str] = None
