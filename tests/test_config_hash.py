"""
Unit Tests for the Config Hash Metric

Author: Blockstore Ingester Project
License: MIT
"""

from blockstore_ingester.monitoring.config_hash import ConfigHashMetric


class TestConfigHashMetric:
    """Test suite for ConfigHashMetric."""

    def test_initially_empty(self, registry, metric, active_hashes):
        assert metric.current() is None
        assert active_hashes(registry) == []

    def test_record_replaces_previous(self, registry, metric, active_hashes):
        """Test that each record clears the previous label."""
        metric.record("aaa")
        metric.record("bbb")
        metric.record("bbb")

        assert metric.current() == "bbb"
        assert active_hashes(registry) == ["bbb"]

    def test_reset(self, registry, metric, active_hashes):
        metric.record("aaa")
        metric.reset()

        assert metric.current() is None
        assert active_hashes(registry) == []

    def test_isolated_registries(self, registry, metric, active_hashes):
        """Test that separate registries don't share state."""
        from prometheus_client import CollectorRegistry

        other_registry = CollectorRegistry()
        other = ConfigHashMetric(other_registry)
        metric.record("aaa")
        other.record("bbb")

        assert active_hashes(registry) == ["aaa"]
        assert active_hashes(other_registry) == ["bbb"]

    def test_for_registry_reuses_metric(self, active_hashes):
        """Test that one metric exists per registry."""
        from prometheus_client import CollectorRegistry

        registry = CollectorRegistry()
        first = ConfigHashMetric.for_registry(registry)
        second = ConfigHashMetric.for_registry(registry)
        first.record("aaa")
        second.record("bbb")

        assert first is second
        assert active_hashes(registry) == ["bbb"]
