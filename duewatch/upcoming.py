"""Upcoming items: services and date-only deadlines in one urgency-sorted list."""

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, List, Optional

from .calculations import DateLike, days_between
from .registration import RegistrationRenewal
from .service import Service
from .status import ServiceStatus


class ItemKind(Enum):
    SERVICE = "service"
    REGISTRATION = "registration"


@dataclass
class UpcomingItem:
    """Anything that can show up in a "next up" list."""

    name: str
    kind: ItemKind
    status: ServiceStatus
    days_remaining: Optional[int]
    urgency_score: int


def service_item(
    service: Service,
    current_miles: int,
    now: DateLike,
    pace: Optional[float],
    mileage_threshold: int,
    days_threshold: int,
) -> UpcomingItem:
    effective_date = service.effective_due_date(current_miles, now, pace)
    return UpcomingItem(
        name=service.name,
        kind=ItemKind.SERVICE,
        status=service.status(current_miles, now, mileage_threshold, days_threshold),
        days_remaining=days_between(now, effective_date) if effective_date else None,
        urgency_score=service.urgency_score(current_miles, now, pace),
    )


def registration_item(registration: RegistrationRenewal, now: DateLike) -> UpcomingItem:
    return UpcomingItem(
        name="Registration Renewal",
        kind=ItemKind.REGISTRATION,
        status=registration.status(now),
        days_remaining=registration.days_until_expiration(now),
        urgency_score=registration.urgency_score(now),
    )


def upcoming_items(
    services: Iterable[Service],
    current_miles: int,
    now: DateLike,
    pace: Optional[float],
    mileage_threshold: int,
    days_threshold: int,
    registration: Optional[RegistrationRenewal] = None,
) -> List[UpcomingItem]:
    """All items sorted by urgency score (most urgent first, stable on ties)."""
    items = [
        service_item(s, current_miles, now, pace, mileage_threshold, days_threshold)
        for s in services
    ]
    if registration is not None:
        items.append(registration_item(registration, now))
    return sorted(items, key=lambda item: item.urgency_score)
