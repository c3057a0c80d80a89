#!/usr/bin/env python3
"""Tests for service bundling (clusters)."""
import pytest
from datetime import date, timedelta

from duewatch import (
    ClusteringSettings,
    DueSoonSettings,
    Service,
    ServiceStatus,
    detect_clusters,
    primary_cluster,
)

TODAY = date(2025, 6, 1)
CURRENT_MILES = 10000


def clusters_for(services, pace=None, clustering=None):
    return detect_clusters(
        services,
        CURRENT_MILES,
        TODAY,
        pace,
        DueSoonSettings(),
        clustering or ClusteringSettings(),
    )


class TestDetectClusters:
    """Tests for detect_clusters."""

    def test_within_mileage_window(self):
        oil = Service("Engine oil", due_miles=10300)
        tires = Service("Tire rotation", due_miles=10600)
        clusters = clusters_for([tires, oil])
        assert len(clusters) == 1
        assert clusters[0].anchor is oil
        assert clusters[0].services == [oil, tires]

    def test_within_days_window(self):
        wipers = Service("Wiper blades", due_date=TODAY + timedelta(days=5))
        cabin = Service("Cabin filter", due_date=TODAY + timedelta(days=20))
        clusters = clusters_for([wipers, cabin])
        assert len(clusters) == 1
        assert clusters[0].anchor is wipers

    def test_within_effective_date_window(self):
        """Mileage service predicted 10 days out bundles with a date 25 days out."""
        oil = Service("Engine oil", due_miles=10400)
        wipers = Service("Wiper blades", due_date=TODAY + timedelta(days=25))
        assert len(clusters_for([oil, wipers], pace=40.0)) == 1
        assert clusters_for([oil, wipers], pace=None) == []

    def test_outside_window(self):
        oil = Service("Engine oil", due_miles=10100)
        wipers = Service("Wiper blades", due_date=TODAY + timedelta(days=25))
        assert clusters_for([oil, wipers]) == []

    def test_single_service(self):
        assert clusters_for([Service("Engine oil", due_miles=10100)]) == []

    def test_empty(self):
        assert clusters_for([]) == []

    def test_good_and_neutral_services_excluded(self):
        oil = Service("Engine oil", due_miles=10300)
        tires = Service("Tire rotation", due_miles=10500)
        coolant = Service("Coolant", due_miles=10800)  # GOOD, though within window
        battery = Service("Battery")
        clusters = clusters_for([oil, tires, coolant, battery])
        assert len(clusters) == 1
        assert clusters[0].services == [oil, tires]

    def test_all_good(self):
        services = [Service("a", due_miles=15000), Service("b", due_miles=15500)]
        assert clusters_for(services) == []

    def test_disabled(self):
        services = [Service("a", due_miles=10300), Service("b", due_miles=10600)]
        assert clusters_for(services, clustering=ClusteringSettings(enabled=False)) == []

    def test_custom_mileage_window(self):
        services = [Service("a", due_miles=9400), Service("b", due_miles=10100)]
        assert clusters_for(services, clustering=ClusteringSettings(mileage_window=500)) == []
        assert len(clusters_for(services, clustering=ClusteringSettings(mileage_window=1000))) == 1

    def test_each_service_in_one_cluster(self):
        a = Service("a", due_miles=9000)
        b = Service("b", due_miles=9500)
        c = Service("c", due_miles=10600)
        d = Service("d", due_miles=10700)
        clusters = clusters_for([d, c, b, a])
        assert [cl.services for cl in clusters] == [[a, b], [c, d]]

    def test_greedy_skips_lonely_anchor(self):
        lonely = Service("lonely", due_miles=9000)
        oil = Service("oil", due_miles=10100)
        tires = Service("tires", due_miles=10700)
        clusters = clusters_for([lonely, oil, tires])
        assert len(clusters) == 1
        assert clusters[0].anchor is oil

    def test_primary_cluster(self):
        a = Service("a", due_miles=9000)
        b = Service("b", due_miles=9500)
        c = Service("c", due_miles=10600)
        d = Service("d", due_miles=10700)
        cluster = primary_cluster(
            [a, b, c, d], CURRENT_MILES, TODAY, None, DueSoonSettings(), ClusteringSettings()
        )
        assert cluster.anchor is a

    def test_primary_cluster_none(self):
        assert primary_cluster(
            [], CURRENT_MILES, TODAY, None, DueSoonSettings(), ClusteringSettings()
        ) is None


class TestServiceCluster:
    """Tests for ServiceCluster properties."""

    @pytest.fixture
    def cluster(self):
        oil = Service("Engine oil", due_miles=9900, due_date=TODAY + timedelta(days=40))
        tires = Service("Tire rotation", due_miles=10600)
        return clusters_for([tires, oil])[0]

    def test_anchor_properties(self, cluster):
        assert cluster.anchor.name == "Engine oil"
        assert cluster.status == ServiceStatus.OVERDUE
        assert cluster.urgency_score == -3
        assert cluster.suggested_miles == 9900
        assert cluster.suggested_date == TODAY + timedelta(days=40)
        assert cluster.service_count == 2

    def test_content_key_order_independent(self, cluster):
        assert cluster.content_key == "engine oil|tire rotation"
        reversed_cluster = clusters_for(list(reversed(cluster.services)))[0]
        assert reversed_cluster.content_key == cluster.content_key

    def test_window_description(self, cluster):
        assert cluster.window_description == "1,000 mi"
