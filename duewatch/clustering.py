"""
Service bundling: group actionable services due around the same time.

Clusters are built greedily from the most urgent service outward, so a
service belongs to at most one cluster and each cluster's anchor is its
most urgent member.
"""

import logging
from dataclasses import dataclass
from datetime import date
from typing import List, Optional, Sequence

from .calculations import DateLike, days_between
from .service import Service
from .settings import ClusteringSettings, DueSoonSettings
from .status import ServiceStatus

logger = logging.getLogger(__name__)


@dataclass
class ServiceCluster:
    """Services that can be handled in a single shop visit."""

    services: List[Service]
    anchor: Service
    status: ServiceStatus
    urgency_score: int
    mileage_window: int
    days_window: int

    @property
    def service_count(self) -> int:
        return len(self.services)

    @property
    def suggested_miles(self) -> Optional[int]:
        return self.anchor.due_miles

    @property
    def suggested_date(self) -> Optional[date]:
        return self.anchor.due_date

    @property
    def content_key(self) -> str:
        """Order-independent identity, used to remember dismissed suggestions."""
        return "|".join(sorted(s.key for s in self.services))

    @property
    def window_description(self) -> str:
        return f"{self.mileage_window:,} mi"


def _within_days(first: Optional[date], second: Optional[date], window: int) -> bool:
    if first is None or second is None:
        return False
    return abs(days_between(first, second)) <= window


def is_within_window(
    anchor: Service,
    candidate: Service,
    current_miles: int,
    now: DateLike,
    pace: Optional[float],
    mileage_window: int,
    days_window: int,
) -> bool:
    """Check whether a candidate is close enough to the anchor to bundle."""
    if anchor.due_miles is not None and candidate.due_miles is not None:
        if abs(anchor.due_miles - candidate.due_miles) <= mileage_window:
            return True

    if _within_days(
        anchor.effective_due_date(current_miles, now, pace),
        candidate.effective_due_date(current_miles, now, pace),
        days_window,
    ):
        return True

    return _within_days(anchor.due_date, candidate.due_date, days_window)


def detect_clusters(
    services: Sequence[Service],
    current_miles: int,
    now: DateLike,
    pace: Optional[float],
    due_soon: DueSoonSettings,
    clustering: ClusteringSettings,
) -> List[ServiceCluster]:
    """Find clusters of 2+ overdue or due-soon services, most urgent first."""
    if not clustering.enabled:
        return []

    def status_of(service: Service) -> ServiceStatus:
        return service.status(
            current_miles, now, due_soon.mileage_threshold, due_soon.days_threshold
        )

    actionable = [s for s in services if status_of(s).is_actionable]
    if len(actionable) < clustering.minimum_cluster_size:
        return []

    scores = {id(s): s.urgency_score(current_miles, now, pace) for s in actionable}
    ordered = sorted(actionable, key=lambda s: scores[id(s)])

    clusters = []
    assigned = set()
    for anchor in ordered:
        if id(anchor) in assigned:
            continue

        members = [anchor]
        for candidate in ordered:
            if candidate is anchor or id(candidate) in assigned:
                continue
            if is_within_window(
                anchor,
                candidate,
                current_miles,
                now,
                pace,
                clustering.mileage_window,
                clustering.days_window,
            ):
                members.append(candidate)

        if len(members) >= clustering.minimum_cluster_size:
            clusters.append(
                ServiceCluster(
                    services=members,
                    anchor=anchor,
                    status=status_of(anchor),
                    urgency_score=scores[id(anchor)],
                    mileage_window=clustering.mileage_window,
                    days_window=clustering.days_window,
                )
            )
            assigned.update(id(s) for s in members)

    logger.debug("Found %d cluster(s) among %d actionable services",
                 len(clusters), len(actionable))
    return clusters


def primary_cluster(
    services: Sequence[Service],
    current_miles: int,
    now: DateLike,
    pace: Optional[float],
    due_soon: DueSoonSettings,
    clustering: ClusteringSettings,
) -> Optional[ServiceCluster]:
    """The most urgent cluster, if any."""
    clusters = detect_clusters(services, current_miles, now, pace, due_soon, clustering)
    return clusters[0] if clusters else None
