"""
User-configurable settings.

Settings are owned by the caller and passed into the engine as plain
values; nothing in the engine reads them globally.
"""

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Tuple


class SettingsError(ValueError):
    """A setting value is not one of its allowed options."""


class DistanceUnit(Enum):
    """Display unit for distances. Storage is always miles."""

    MILES = "miles"
    KILOMETERS = "kilometers"

    @property
    def abbreviation(self) -> str:
        return "mi" if self is DistanceUnit.MILES else "km"

    def from_miles(self, miles: float) -> int:
        """Convert stored miles to the display unit."""
        if self is DistanceUnit.MILES:
            return int(math.floor(miles + 0.5))
        return int(math.floor(miles * KM_PER_MILE + 0.5))

    def to_miles(self, value: float) -> int:
        """Convert a value in the display unit back to stored miles."""
        if self is DistanceUnit.MILES:
            return int(math.floor(value + 0.5))
        return int(math.floor(value / KM_PER_MILE + 0.5))


KM_PER_MILE = 1.60934


def _check_option(name: str, value: int, options: Tuple[int, ...]) -> None:
    if value not in options:
        allowed = ", ".join(str(o) for o in options)
        raise SettingsError(f"{name} must be one of {allowed}, got {value}")


@dataclass(frozen=True)
class DueSoonSettings:
    """Thresholds for the DUE_SOON status tier."""

    MILEAGE_OPTIONS = (500, 750, 1000, 1500)
    DAYS_OPTIONS = (14, 30, 45, 60)

    mileage_threshold: int = 750
    days_threshold: int = 30

    def __post_init__(self):
        _check_option("mileageThreshold", self.mileage_threshold, self.MILEAGE_OPTIONS)
        _check_option("daysThreshold", self.days_threshold, self.DAYS_OPTIONS)


@dataclass(frozen=True)
class ClusteringSettings:
    """Windows used to bundle services into a single shop visit."""

    MILEAGE_WINDOW_OPTIONS = (500, 1000, 1500, 2000)
    DAYS_WINDOW_OPTIONS = (14, 30, 45, 60)

    mileage_window: int = 1000
    days_window: int = 30
    enabled: bool = True
    minimum_cluster_size: int = 2

    def __post_init__(self):
        _check_option("mileageWindow", self.mileage_window, self.MILEAGE_WINDOW_OPTIONS)
        _check_option("daysWindow", self.days_window, self.DAYS_WINDOW_OPTIONS)


@dataclass(frozen=True)
class Settings:
    """All user settings in one bundle."""

    due_soon: DueSoonSettings = field(default_factory=DueSoonSettings)
    clustering: ClusteringSettings = field(default_factory=ClusteringSettings)
    distance_unit: DistanceUnit = DistanceUnit.MILES
