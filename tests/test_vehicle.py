#!/usr/bin/env python3
"""
Tests for Vehicle class.

Integration tests for the whole engine working from one snapshot:
1. Pace - recency-weighted miles/day from odometer readings
2. Effective mileage - projected from pace when the last update is fresh
3. Status - deadlines judged against effective (not confirmed) mileage
4. Upcoming - services and registration renewal in one urgency order
5. Bundles - overdue and due-soon services grouped for one visit
"""

import pytest
from datetime import date, datetime, timedelta

from duewatch import (
    ItemKind,
    OdometerReading,
    PaceConfidence,
    RegistrationRenewal,
    Service,
    ServiceStatus,
    Vehicle,
    effective_mileage,
)

BASE = datetime(2025, 2, 1, 9, 0)
NOW = BASE + timedelta(days=35)  # 2025-03-08


@pytest.fixture
def readings():
    """40 miles/day for 30 days."""
    return [
        OdometerReading(40000 + 40 * d, BASE + timedelta(days=d)) for d in (0, 10, 20, 30)
    ]


@pytest.fixture
def services():
    oil = Service(
        "Engine oil",
        interval_months=6,
        interval_miles=5000,
        last_performed=date(2024, 11, 1),
        last_miles=36600,
    )
    oil.derive_due_from_intervals(oil.last_performed, oil.last_miles)
    return [
        oil,
        Service("Tire rotation", due_miles=41300),
        Service("Battery"),
    ]


@pytest.fixture
def vehicle(readings, services):
    return Vehicle(
        "2019 Honda Civic",
        41200,
        mileage_updated_at=BASE + timedelta(days=30),
        readings=readings,
        services=services,
        registration=RegistrationRenewal(4, 2025),
    )


class TestVehicleMileage:
    """Tests for pace and effective mileage."""

    def test_pace(self, vehicle):
        assert vehicle.pace(NOW) == pytest.approx(40.0)

    def test_pace_result(self, vehicle):
        result = vehicle.pace_result(NOW)
        assert result.confidence == PaceConfidence.MEDIUM
        assert result.sample_count == 4
        assert result.date_span_days == 30

    def test_effective_miles_projected(self, vehicle):
        assert vehicle.estimated_miles(NOW) == 41400
        assert vehicle.effective_miles(NOW) == 41400
        assert vehicle.is_using_estimated_miles(NOW)

    def test_effective_miles_matches_projection(self, vehicle):
        for now in (NOW, NOW + timedelta(days=60), BASE + timedelta(days=30)):
            assert vehicle.effective_miles(now) == effective_mileage(
                vehicle.pace(now), 41200, vehicle.mileage_updated_at, now
            )

    def test_effective_miles_without_history(self):
        vehicle = Vehicle("Truck", 88000, mileage_updated_at=BASE)
        assert vehicle.pace(NOW) is None
        assert vehicle.effective_miles(NOW) == 88000
        assert not vehicle.is_using_estimated_miles(NOW)

    def test_effective_miles_stale(self, vehicle):
        stale = BASE + timedelta(days=30 + 61)
        assert vehicle.effective_miles(stale) == 41200

    def test_update_prompt(self, vehicle):
        assert vehicle.days_since_mileage_update(NOW) == 5
        assert not vehicle.should_prompt_mileage_update(NOW)
        assert vehicle.should_prompt_mileage_update(NOW + timedelta(days=9))

    def test_mileage_initialized(self, vehicle):
        assert vehicle.is_mileage_initialized
        assert not Vehicle("New", 0).is_mileage_initialized


class TestVehicleServices:
    """Tests for service evaluation."""

    def test_get_service_case_insensitive(self, vehicle):
        assert vehicle.get_service("engine OIL").name == "Engine oil"
        assert vehicle.get_service("coolant") is None

    def test_calculate_service_due(self, vehicle):
        oil = vehicle.get_service("Engine oil")
        result = vehicle.calculate_service_due(oil, NOW)

        assert result.status == ServiceStatus.DUE_SOON
        assert result.due_miles == 41600
        assert result.due_date == date(2025, 5, 1)
        assert result.miles_remaining == 200
        assert result.time_remaining_days == 54
        assert result.urgency_score == 5
        assert result.effective_due_date == date(2025, 3, 13)

    def test_overdue_by_projected_mileage(self, vehicle):
        """Confirmed 41,200 is under the due mileage; projected 41,400 is not."""
        tires = vehicle.get_service("Tire rotation")
        result = vehicle.calculate_service_due(tires, NOW)
        assert result.status == ServiceStatus.OVERDUE
        assert result.miles_remaining == -100
        assert result.time_remaining_days is None

    def test_log_only_service(self, vehicle):
        battery = vehicle.get_service("Battery")
        result = vehicle.calculate_service_due(battery, NOW)
        assert result.status == ServiceStatus.NEUTRAL
        assert result.miles_remaining is None
        assert not result.is_due

    def test_get_all_service_status(self, vehicle):
        statuses = vehicle.get_all_service_status(NOW)
        assert [s.status for s in statuses] == [
            ServiceStatus.DUE_SOON,
            ServiceStatus.OVERDUE,
            ServiceStatus.NEUTRAL,
        ]


class TestVehicleUpcoming:
    """Tests for upcoming items and bundles."""

    def test_upcoming_order(self, vehicle):
        items = vehicle.upcoming_items(NOW)
        assert [i.name for i in items] == [
            "Tire rotation",
            "Engine oil",
            "Registration Renewal",
            "Battery",
        ]
        assert items[2].kind == ItemKind.REGISTRATION
        assert items[2].days_remaining == 53

    def test_next_up_item(self, vehicle):
        assert vehicle.next_up_item(NOW).name == "Tire rotation"
        assert Vehicle("Empty", 100).next_up_item(NOW) is None

    def test_clusters(self, vehicle):
        clusters = vehicle.clusters(NOW)
        assert len(clusters) == 1
        assert clusters[0].anchor.name == "Tire rotation"
        assert [s.name for s in clusters[0].services] == ["Tire rotation", "Engine oil"]
