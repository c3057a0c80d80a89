#!/usr/bin/env python3
"""Tests for settings and distance units."""
import pytest

from duewatch import (
    ClusteringSettings,
    DistanceUnit,
    DueSoonSettings,
    Settings,
    SettingsError,
)


class TestDueSoonSettings:
    """Tests for DueSoonSettings."""

    def test_defaults(self):
        settings = DueSoonSettings()
        assert settings.mileage_threshold == 750
        assert settings.days_threshold == 30

    def test_accepts_options(self):
        settings = DueSoonSettings(mileage_threshold=1500, days_threshold=14)
        assert settings.mileage_threshold == 1500

    def test_rejects_unknown_values(self):
        with pytest.raises(SettingsError):
            DueSoonSettings(mileage_threshold=800)
        with pytest.raises(SettingsError):
            DueSoonSettings(days_threshold=0)

    def test_error_is_value_error(self):
        with pytest.raises(ValueError, match="mileageThreshold"):
            DueSoonSettings(mileage_threshold=-1)


class TestClusteringSettings:
    """Tests for ClusteringSettings."""

    def test_defaults(self):
        settings = ClusteringSettings()
        assert settings.mileage_window == 1000
        assert settings.days_window == 30
        assert settings.enabled is True
        assert settings.minimum_cluster_size == 2

    def test_rejects_unknown_values(self):
        with pytest.raises(SettingsError):
            ClusteringSettings(mileage_window=750)
        with pytest.raises(SettingsError):
            ClusteringSettings(days_window=7)


class TestDistanceUnit:
    """Tests for DistanceUnit conversions."""

    def test_abbreviation(self):
        assert DistanceUnit.MILES.abbreviation == "mi"
        assert DistanceUnit.KILOMETERS.abbreviation == "km"

    def test_miles_passthrough(self):
        assert DistanceUnit.MILES.from_miles(12345) == 12345
        assert DistanceUnit.MILES.to_miles(12345) == 12345

    def test_kilometers(self):
        assert DistanceUnit.KILOMETERS.from_miles(100) == 161
        assert DistanceUnit.KILOMETERS.to_miles(161) == 100


class TestSettings:
    """Tests for the Settings bundle."""

    def test_defaults(self):
        settings = Settings()
        assert settings.due_soon == DueSoonSettings()
        assert settings.clustering == ClusteringSettings()
        assert settings.distance_unit == DistanceUnit.MILES
