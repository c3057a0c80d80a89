#!/usr/bin/env python3
"""
Unified CLI for predictive vehicle maintenance.

Commands:
  status   - Show which services are overdue, due soon, or good
  pace     - Show driving pace, confidence and estimated mileage
  upcoming - List services and registration renewal by urgency
  bundles  - Suggest services to handle in a single shop visit
"""

import argparse
import logging
import sys
from datetime import date, datetime
from pathlib import Path
from tabulate import tabulate
from typing import List, Optional

from duewatch import (
    DistanceUnit,
    ServiceCluster,
    ServiceDue,
    ServiceStatus,
    Settings,
    SettingsError,
    UpcomingItem,
    Vehicle,
    load_settings,
    load_vehicle,
)
from duewatch.settings import KM_PER_MILE

# =============================================================================
# Formatting helpers
# =============================================================================


def format_miles(miles: Optional[float], unit: DistanceUnit = DistanceUnit.MILES) -> str:
    """Format a stored mileage in the display unit."""
    return f"{unit.from_miles(miles):,}" if miles is not None else "-"


def format_remaining(miles: Optional[float], unit: DistanceUnit = DistanceUnit.MILES) -> str:
    """Format remaining distance, keeping the sign when overdue."""
    if miles is None:
        return "-"
    if miles < 0:
        return f"-{unit.from_miles(abs(miles)):,}"
    return f"{unit.from_miles(miles):,}"


def format_date(value: Optional[date]) -> str:
    """Format date for display."""
    return value.isoformat() if value is not None else "-"


def format_days(days: Optional[int]) -> str:
    """Format a day count for display (e.g., '3mo 15d' or '-2mo 5d')."""
    if days is None:
        return "-"

    sign = "-" if days < 0 else ""
    days = abs(days)
    months = days // 30
    remaining_days = days % 30
    if months > 0:
        return f"{sign}{months}mo {remaining_days}d"
    return f"{sign}{days}d"


def format_pace(pace: Optional[float], unit: DistanceUnit = DistanceUnit.MILES) -> str:
    """Format a daily pace in the display unit."""
    if pace is None:
        return "-"
    if unit is DistanceUnit.KILOMETERS:
        pace = pace * KM_PER_MILE
    return f"{pace:,.1f} {unit.abbreviation}/day"


def format_interval(svc: ServiceDue, unit: DistanceUnit = DistanceUnit.MILES) -> str:
    """Format a service's recurrence interval (e.g., '5,000 mi / 6 mo')."""
    interval = svc.service.interval
    parts = []
    if interval.has_miles:
        parts.append(f"{format_miles(interval.miles, unit)} {unit.abbreviation}")
    if interval.has_months:
        parts.append(f"{interval.months} mo")
    return " / ".join(parts) if parts else "-"


# =============================================================================
# Status command
# =============================================================================


def make_status_table(
    services: List[ServiceDue], unit: DistanceUnit = DistanceUnit.MILES
) -> List[List[str]]:
    """Convert service status list to table rows."""
    rows = []
    for svc in services:
        rows.append(
            [
                svc.service.name,
                format_interval(svc, unit),
                format_miles(svc.due_miles, unit),
                format_date(svc.due_date),
                format_remaining(svc.miles_remaining, unit),
                format_days(svc.time_remaining_days),
            ]
        )
    return rows


def print_header(vehicle: Vehicle, now: datetime, settings: Settings) -> None:
    unit = settings.distance_unit
    miles = vehicle.effective_miles(now)
    suffix = " (estimated)" if vehicle.is_using_estimated_miles(now) else ""
    print(f"Vehicle: {vehicle.name}")
    print(f"Mileage: {format_miles(miles, unit)} {unit.abbreviation}{suffix}")
    print(f"As of: {now.date().isoformat()}")
    print()


def cmd_status(args, vehicle: Vehicle, now: datetime, settings: Settings):
    """Show which services are overdue, due soon, or good."""
    unit = settings.distance_unit
    print_header(vehicle, now, settings)

    statuses = vehicle.get_all_service_status(now, settings.due_soon)
    headers = [
        "Service",
        "Interval",
        f"Due ({unit.abbreviation})",
        "Due (date)",
        f"Remaining ({unit.abbreviation})",
        "Remaining (time)",
    ]

    for status in (ServiceStatus.OVERDUE, ServiceStatus.DUE_SOON, ServiceStatus.GOOD):
        group = sorted(
            [s for s in statuses if s.status == status],
            key=lambda s: s.urgency_score,
        )
        if group:
            print(f"{status.label}:")
            print(tabulate(make_status_table(group, unit), headers=headers, tablefmt="simple"))
            print()

    neutral = [s for s in statuses if s.status == ServiceStatus.NEUTRAL]
    if neutral:
        print(f"LOG ONLY ({len(neutral)} services with no schedule):")
        for svc in neutral:
            print(f"  {svc.service.name}")
        print()

    return 0


# =============================================================================
# Pace command
# =============================================================================


def cmd_pace(args, vehicle: Vehicle, now: datetime, settings: Settings):
    """Show driving pace, confidence and estimated mileage."""
    unit = settings.distance_unit
    print_header(vehicle, now, settings)

    result = vehicle.pace_result(now)
    if result is None:
        print(f"Pace: not enough data ({len(vehicle.readings)} readings, need 7+ days)")
    else:
        rows = [
            ["Pace", format_pace(result.miles_per_day, unit)],
            ["Confidence", result.confidence.value],
            ["Readings", result.sample_count],
            ["Span", f"{result.date_span_days} days"],
            ["First reading", format_date(result.first_recorded)],
            ["Last reading", format_date(result.last_recorded)],
        ]
        print(tabulate(rows, tablefmt="plain"))
    print()

    days = vehicle.days_since_mileage_update(now)
    print(f"Confirmed mileage: {format_miles(vehicle.current_miles, unit)} {unit.abbreviation}"
          f" ({'never updated' if days is None else f'{days} days ago'})")
    estimated = vehicle.estimated_miles(now)
    if estimated is not None:
        print(f"Estimated mileage: {format_miles(estimated, unit)} {unit.abbreviation}")
    if vehicle.should_prompt_mileage_update(now):
        print("Mileage is out of date - consider recording a new reading.")

    return 0


# =============================================================================
# Upcoming command
# =============================================================================


def make_upcoming_table(items: List[UpcomingItem]) -> List[List[str]]:
    """Convert upcoming items to table rows."""
    return [
        [
            item.name,
            item.kind.value,
            item.status.label or "-",
            format_days(item.days_remaining),
        ]
        for item in items
    ]


def cmd_upcoming(args, vehicle: Vehicle, now: datetime, settings: Settings):
    """List services and registration renewal by urgency."""
    print_header(vehicle, now, settings)

    items = vehicle.upcoming_items(now, settings.due_soon)
    if not args.all:
        items = [i for i in items if i.status != ServiceStatus.NEUTRAL]

    if not items:
        print("Nothing upcoming.")
        return 0

    headers = ["Item", "Type", "Status", "Due in"]
    print(tabulate(make_upcoming_table(items), headers=headers, tablefmt="simple"))
    return 0


# =============================================================================
# Bundles command
# =============================================================================


def describe_cluster(cluster: ServiceCluster, unit: DistanceUnit = DistanceUnit.MILES) -> str:
    """One-line summary of a bundle."""
    target = []
    if cluster.suggested_miles is not None:
        target.append(f"{format_miles(cluster.suggested_miles, unit)} {unit.abbreviation}")
    if cluster.suggested_date is not None:
        target.append(format_date(cluster.suggested_date))
    target_str = " / ".join(target) if target else "-"
    return (
        f"{cluster.service_count} services ({cluster.status.label}), "
        f"target {target_str}"
    )


def cmd_bundles(args, vehicle: Vehicle, now: datetime, settings: Settings):
    """Suggest services to handle in a single shop visit."""
    unit = settings.distance_unit
    print_header(vehicle, now, settings)

    if not settings.clustering.enabled:
        print("Bundling is disabled in settings.")
        return 0

    clusters = vehicle.clusters(now, settings.due_soon, settings.clustering)
    if not clusters:
        print("No bundling opportunities.")
        return 0

    for i, cluster in enumerate(clusters, start=1):
        print(f"Bundle {i}: {describe_cluster(cluster, unit)}")
        for service in cluster.services:
            marker = "*" if service is cluster.anchor else " "
            print(f"  {marker} {service.name}")
        print()

    return 0


# =============================================================================
# Main
# =============================================================================


def parse_as_of(value: Optional[str]) -> datetime:
    """Evaluation time: end of the given day, or the current time."""
    if value is None:
        return datetime.now()
    return datetime.combine(date.fromisoformat(value), datetime.max.time())


def main():
    parser = argparse.ArgumentParser(
        description="Predictive vehicle maintenance tracker",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s vehicles/civic.yaml status
  %(prog)s vehicles/civic.yaml --as-of 2025-03-01 status
  %(prog)s vehicles/civic.yaml --settings settings.yaml upcoming --all
  %(prog)s vehicles/civic.yaml pace
  %(prog)s vehicles/civic.yaml bundles
""",
    )
    parser.add_argument(
        "vehicle_file",
        type=Path,
        help="Path to vehicle YAML file",
    )
    parser.add_argument(
        "--settings",
        type=Path,
        help="Path to settings YAML file (defaults apply when omitted)",
    )
    parser.add_argument(
        "--as-of",
        type=str,
        help="Evaluate as of date YYYY-MM-DD (default: now)",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser(
        "status", help="Show which services are overdue, due soon, or good"
    )
    subparsers.add_parser(
        "pace", help="Show driving pace, confidence and estimated mileage"
    )
    upcoming_parser = subparsers.add_parser(
        "upcoming", help="List services and registration renewal by urgency"
    )
    upcoming_parser.add_argument(
        "--all",
        action="store_true",
        help="Include log-only services with no schedule",
    )
    subparsers.add_parser(
        "bundles", help="Suggest services to handle in a single shop visit"
    )

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    # Validate vehicle file exists
    if not args.vehicle_file.exists():
        print(f"Error: File not found: {args.vehicle_file}")
        return 1

    try:
        settings = load_settings(args.settings)
    except SettingsError as e:
        print(f"Error: {e}")
        return 1

    vehicle = load_vehicle(args.vehicle_file)
    now = parse_as_of(args.as_of)

    # Dispatch to command handler
    handlers = {
        "status": cmd_status,
        "pace": cmd_pace,
        "upcoming": cmd_upcoming,
        "bundles": cmd_bundles,
    }
    return handlers[args.command](args, vehicle, now, settings)


if __name__ == "__main__":
    sys.exit(main() or 0)
