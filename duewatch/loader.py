"""YAML loading utilities for vehicle snapshots and settings."""

import json
import logging
from datetime import date, datetime
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml
from dateutil.parser import isoparse

from .reading import OdometerReading, ReadingOrigin
from .registration import RegistrationRenewal
from .service import Service
from .settings import (
    ClusteringSettings,
    DistanceUnit,
    DueSoonSettings,
    Settings,
    SettingsError,
)
from .vehicle import Vehicle

logger = logging.getLogger(__name__)


def _parse_datetime(value: Optional[str]) -> Optional[datetime]:
    """Parse an ISO timestamp as naive local time (offsets are converted)."""
    if value is None:
        return None
    parsed = isoparse(value)
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone().replace(tzinfo=None)
    return parsed


def _parse_date(value: Optional[str]) -> Optional[date]:
    if value is None:
        return None
    return isoparse(value).date()


def _parse_int(value: Optional[float]) -> Optional[int]:
    return int(value) if value is not None else None


def _parse_service(dct: Dict[str, Any]) -> Service:
    """
    Build a service and derive its deadlines.

    Deadlines are derived from the interval when the service has been
    performed before; an explicit dueDate/dueMiles then overrides the
    derived value for that axis.
    """
    service = Service(
        dct["name"],
        _parse_int(dct.get("intervalMonths")),
        _parse_int(dct.get("intervalMiles")),
        _parse_date(dct.get("lastPerformed")),
        _parse_int(dct.get("lastMiles")),
        notes=dct.get("notes"),
    )
    if service.last_performed is not None:
        service.derive_due_from_intervals(service.last_performed, service.last_miles or 0)

    # One-off overrides
    if dct.get("dueDate") is not None:
        service.due_date = _parse_date(dct["dueDate"])
    if dct.get("dueMiles") is not None:
        service.due_miles = _parse_int(dct["dueMiles"])
    return service


def _parse_object(dct: Dict[str, Any]) -> Any:
    """Parse dictionary into appropriate object type."""
    # Odometer reading
    if "recordedAt" in dct:
        return OdometerReading(
            int(dct["miles"]),
            _parse_datetime(dct["recordedAt"]),
            ReadingOrigin(dct.get("origin", ReadingOrigin.MANUAL.value)),
            dct.get("id"),
        )
    # Registration renewal (inside 'vehicle' key)
    elif "month" in dct and "year" in dct:
        return RegistrationRenewal(int(dct["month"]), int(dct["year"]))
    # Top-level snapshot
    elif "vehicle" in dct:
        info = dct["vehicle"]
        return Vehicle(
            info["name"],
            int(info["currentMiles"]),
            _parse_datetime(info.get("mileageUpdatedAt")),
            dct.get("readings"),
            dct.get("services"),
            info.get("registration"),
        )
    # Service
    elif "name" in dct and "currentMiles" not in dct:
        return _parse_service(dct)
    else:
        # Return dict as-is for the vehicle block; it is consumed above
        return dct


def load_vehicle(filename: Union[str, Path]) -> Vehicle:
    """Load a vehicle snapshot from a YAML file."""
    with open(filename, "rb") as fp:
        json_data = json.dumps(
            yaml.load(fp, Loader=yaml.SafeLoader), indent=4, default=str
        )
        vehicle = json.loads(json_data, object_hook=_parse_object)
    logger.debug(
        "Loaded %s: %d readings, %d services",
        vehicle.name,
        len(vehicle.readings),
        len(vehicle.services),
    )
    return vehicle


def load_settings(filename: Optional[Union[str, Path]] = None) -> Settings:
    """
    Load settings from a YAML file.

    Missing file or keys fall back to defaults. Values outside their
    option sets raise SettingsError.
    """
    if filename is None or not Path(filename).exists():
        return Settings()

    with open(filename, "r") as fp:
        data = yaml.load(fp, Loader=yaml.SafeLoader) or {}

    due_soon = data.get("dueSoon") or {}
    clustering = data.get("clustering") or {}
    unit = data.get("distanceUnit", DistanceUnit.MILES.value)

    try:
        distance_unit = DistanceUnit(unit)
    except ValueError:
        raise SettingsError(f"distanceUnit must be miles or kilometers, got {unit}")

    return Settings(
        due_soon=DueSoonSettings(
            mileage_threshold=due_soon.get("mileageThreshold", 750),
            days_threshold=due_soon.get("daysThreshold", 30),
        ),
        clustering=ClusteringSettings(
            mileage_window=clustering.get("mileageWindow", 1000),
            days_window=clustering.get("daysWindow", 30),
            enabled=clustering.get("enabled", True),
        ),
        distance_unit=distance_unit,
    )
