"""
Predictive vehicle maintenance engine.

This package provides pure calculations for tracking maintenance:
- OdometerReading: Timestamped mileage history
- estimate_pace / calculate_pace_result: Recency-weighted daily pace + confidence
- project_mileage: Pace-extrapolated current odometer
- derive_due: Recurrence interval + anchor -> due date / due mileage
- check_status: OVERDUE, DUE_SOON, GOOD or NEUTRAL
- urgency_score / effective_due_date: Date and mileage deadlines merged
- Service, Vehicle: Entities tying the calculations together
- detect_clusters: Bundling suggestions for services due together
"""

from .status import ServiceStatus
from .reading import OdometerReading, ReadingOrigin
from .interval import RecurrenceInterval, DueDeadlines
from .calculations import (
    days_between,
    calc_due_miles,
    calc_due_date,
    derive_due,
    check_status,
)
from .pace import (
    PaceConfidence,
    PaceResult,
    estimate_pace,
    classify_confidence,
    calculate_pace_result,
    has_reading_on,
)
from .projection import (
    project_mileage,
    effective_mileage,
    days_since_update,
    should_prompt_update,
)
from .urgency import (
    URGENCY_MAX,
    urgency_score,
    predicted_due_date,
    effective_due_date,
)
from .service import Service
from .service_due import ServiceDue
from .registration import RegistrationRenewal
from .upcoming import ItemKind, UpcomingItem, upcoming_items
from .clustering import ServiceCluster, detect_clusters, primary_cluster
from .settings import (
    Settings,
    SettingsError,
    DueSoonSettings,
    ClusteringSettings,
    DistanceUnit,
)
from .vehicle import Vehicle
from .loader import load_vehicle, load_settings

__all__ = [
    "ServiceStatus",
    "OdometerReading",
    "ReadingOrigin",
    "RecurrenceInterval",
    "DueDeadlines",
    "days_between",
    "calc_due_miles",
    "calc_due_date",
    "derive_due",
    "check_status",
    "PaceConfidence",
    "PaceResult",
    "estimate_pace",
    "classify_confidence",
    "calculate_pace_result",
    "has_reading_on",
    "project_mileage",
    "effective_mileage",
    "days_since_update",
    "should_prompt_update",
    "URGENCY_MAX",
    "urgency_score",
    "predicted_due_date",
    "effective_due_date",
    "Service",
    "ServiceDue",
    "RegistrationRenewal",
    "ItemKind",
    "UpcomingItem",
    "upcoming_items",
    "ServiceCluster",
    "detect_clusters",
    "primary_cluster",
    "Settings",
    "SettingsError",
    "DueSoonSettings",
    "ClusteringSettings",
    "DistanceUnit",
    "Vehicle",
    "load_vehicle",
    "load_settings",
]
