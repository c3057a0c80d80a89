"""
Driving pace estimation from odometer history.

The estimate is a recency-weighted average of the pace over each pair of
consecutive readings. A pair centred `d` days ago carries weight
exp(-d / 30), so recent changes in driving habits show up quickly while
a single old outlier cannot dominate.
"""

import logging
import math
from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Iterable, List, Optional

from .calculations import DateLike, as_date, days_between
from .reading import OdometerReading

logger = logging.getLogger(__name__)

MIN_READINGS = 2
MIN_SPAN_DAYS = 7
DECAY_DAYS = 30.0


class PaceConfidence(Enum):
    """How much to trust a pace estimate."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


@dataclass(frozen=True)
class PaceResult:
    """A pace estimate together with the data that supports it."""

    miles_per_day: float
    confidence: PaceConfidence
    sample_count: int
    date_span_days: int
    first_recorded: date
    last_recorded: date


def _sorted_readings(readings: Iterable[OdometerReading]) -> List[OdometerReading]:
    return sorted(readings, key=lambda r: r.recorded_at)


def _span_days(ordered: List[OdometerReading]) -> int:
    return days_between(ordered[0].recorded_at, ordered[-1].recorded_at)


def estimate_pace(readings: Iterable[OdometerReading], now: DateLike) -> Optional[float]:
    """
    Estimate miles per day from odometer readings.

    Returns None with fewer than 2 readings, less than 7 days between the
    oldest and newest reading, or when no consecutive pair is usable.
    Pairs recorded on the same day or with non-increasing mileage (odometer
    corrections) are skipped.
    """
    ordered = _sorted_readings(readings)
    if len(ordered) < MIN_READINGS:
        return None
    if _span_days(ordered) < MIN_SPAN_DAYS:
        return None

    weighted_sum = 0.0
    total_weight = 0.0
    for earlier, later in zip(ordered, ordered[1:]):
        days = days_between(earlier.recorded_at, later.recorded_at)
        if days <= 0:
            logger.debug("Skipping same-day pair at %s", later.recorded_at)
            continue
        miles = later.miles - earlier.miles
        if miles <= 0:
            logger.debug(
                "Skipping non-increasing pair %d -> %d", earlier.miles, later.miles
            )
            continue

        midpoint = earlier.recorded_at + (later.recorded_at - earlier.recorded_at) / 2
        weight = math.exp(-days_between(midpoint, now) / DECAY_DAYS)
        weighted_sum += (miles / days) * weight
        total_weight += weight

    if total_weight <= 0:
        return None
    return weighted_sum / total_weight


def classify_confidence(sample_count: int, date_span_days: int) -> PaceConfidence:
    """Confidence tier for a given amount of data, most demanding tier first."""
    if date_span_days >= 30 and sample_count >= 5:
        return PaceConfidence.HIGH
    if date_span_days >= 14 and sample_count >= 3:
        return PaceConfidence.MEDIUM
    return PaceConfidence.LOW


def calculate_pace_result(
    readings: Iterable[OdometerReading], now: DateLike
) -> Optional[PaceResult]:
    """Pace estimate with confidence metadata, or None when there is no estimate."""
    ordered = _sorted_readings(readings)
    pace = estimate_pace(ordered, now)
    if pace is None:
        return None

    span = _span_days(ordered)
    return PaceResult(
        miles_per_day=pace,
        confidence=classify_confidence(len(ordered), span),
        sample_count=len(ordered),
        date_span_days=span,
        first_recorded=as_date(ordered[0].recorded_at),
        last_recorded=as_date(ordered[-1].recorded_at),
    )


def has_reading_on(readings: Iterable[OdometerReading], day: DateLike) -> bool:
    """Check whether a reading already exists for the given calendar day."""
    target = as_date(day)
    return any(as_date(r.recorded_at) == target for r in readings)
