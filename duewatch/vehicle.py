"""Vehicle class - the main aggregate for vehicle data and calculations."""

from datetime import datetime
from typing import List, Optional

from .calculations import DateLike, days_between
from .clustering import ServiceCluster, detect_clusters
from .pace import PaceResult, calculate_pace_result, estimate_pace
from .projection import (
    days_since_update,
    effective_mileage,
    project_mileage,
    should_prompt_update,
)
from .reading import OdometerReading
from .registration import RegistrationRenewal
from .service import Service
from .service_due import ServiceDue
from .settings import ClusteringSettings, DueSoonSettings
from .upcoming import UpcomingItem, upcoming_items


class Vehicle:
    """
    Snapshot of one vehicle: last confirmed mileage, odometer history,
    services and optional registration deadline.

    Every calculation takes `now` explicitly; the vehicle never reads
    the clock.
    """

    def __init__(
        self,
        name: str,
        current_miles: int,
        mileage_updated_at: Optional[datetime] = None,
        readings: Optional[List[OdometerReading]] = None,
        services: Optional[List[Service]] = None,
        registration: Optional[RegistrationRenewal] = None,
    ):
        self.name = name
        self.current_miles = current_miles
        self.mileage_updated_at = mileage_updated_at
        self.readings = readings or []
        self.services = services or []
        self.registration = registration

    @property
    def is_mileage_initialized(self) -> bool:
        """Whether an initial mileage has been entered (0 = not yet set)."""
        return self.current_miles > 0

    def get_service(self, name: str) -> Optional[Service]:
        """Find a service by name (case-insensitive)."""
        key = name.lower()
        for service in self.services:
            if service.key == key:
                return service
        return None

    # -------------------------------------------------------------------------
    # Mileage
    # -------------------------------------------------------------------------

    def pace(self, now: DateLike) -> Optional[float]:
        """Daily miles pace, or None with insufficient history."""
        return estimate_pace(self.readings, now)

    def pace_result(self, now: DateLike) -> Optional[PaceResult]:
        return calculate_pace_result(self.readings, now)

    def estimated_miles(self, now: DateLike) -> Optional[int]:
        return project_mileage(
            self.pace(now), self.current_miles, self.mileage_updated_at, now
        )

    def effective_miles(self, now: DateLike) -> int:
        """Estimated mileage if available, otherwise the last confirmed value."""
        return effective_mileage(
            self.pace(now), self.current_miles, self.mileage_updated_at, now
        )

    def is_using_estimated_miles(self, now: DateLike) -> bool:
        return self.estimated_miles(now) is not None

    def days_since_mileage_update(self, now: DateLike) -> Optional[int]:
        return days_since_update(self.mileage_updated_at, now)

    def should_prompt_mileage_update(self, now: DateLike) -> bool:
        return should_prompt_update(self.current_miles, self.mileage_updated_at, now)

    # -------------------------------------------------------------------------
    # Services
    # -------------------------------------------------------------------------

    def calculate_service_due(
        self,
        service: Service,
        now: DateLike,
        due_soon: Optional[DueSoonSettings] = None,
    ) -> ServiceDue:
        """
        Evaluate one service against the effective mileage and `now`.

        Remaining miles/days are None when the matching deadline is absent.
        """
        due_soon = due_soon or DueSoonSettings()
        pace = self.pace(now)
        current_miles = self.effective_miles(now)

        miles_remaining = None
        if service.due_miles is not None:
            miles_remaining = service.due_miles - current_miles

        time_remaining_days = None
        if service.due_date is not None:
            time_remaining_days = days_between(now, service.due_date)

        return ServiceDue(
            service=service,
            status=service.status(
                current_miles, now, due_soon.mileage_threshold, due_soon.days_threshold
            ),
            due_miles=service.due_miles,
            due_date=service.due_date,
            effective_due_date=service.effective_due_date(current_miles, now, pace),
            miles_remaining=miles_remaining,
            time_remaining_days=time_remaining_days,
            urgency_score=service.urgency_score(current_miles, now, pace),
        )

    def get_all_service_status(
        self, now: DateLike, due_soon: Optional[DueSoonSettings] = None
    ) -> List[ServiceDue]:
        """Calculate service status for every service."""
        return [self.calculate_service_due(s, now, due_soon) for s in self.services]

    def upcoming_items(
        self, now: DateLike, due_soon: Optional[DueSoonSettings] = None
    ) -> List[UpcomingItem]:
        """Services plus registration renewal, most urgent first."""
        due_soon = due_soon or DueSoonSettings()
        return upcoming_items(
            self.services,
            self.effective_miles(now),
            now,
            self.pace(now),
            due_soon.mileage_threshold,
            due_soon.days_threshold,
            registration=self.registration,
        )

    def next_up_item(
        self, now: DateLike, due_soon: Optional[DueSoonSettings] = None
    ) -> Optional[UpcomingItem]:
        items = self.upcoming_items(now, due_soon)
        return items[0] if items else None

    def clusters(
        self,
        now: DateLike,
        due_soon: Optional[DueSoonSettings] = None,
        clustering: Optional[ClusteringSettings] = None,
    ) -> List[ServiceCluster]:
        """Bundling suggestions for overdue and due-soon services."""
        return detect_clusters(
            self.services,
            self.effective_miles(now),
            now,
            self.pace(now),
            due_soon or DueSoonSettings(),
            clustering or ClusteringSettings(),
        )
