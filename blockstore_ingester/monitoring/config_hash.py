"""
Config Hash Metric

Exposes the SHA-256 of the currently active configuration file as a
Prometheus gauge. Only one hash label is active at a time.

Author: Blockstore Ingester Project
License: MIT
"""

import weakref
from typing import Optional

from prometheus_client import CollectorRegistry, Gauge

from ..utils.logger import get_logger

logger = get_logger(__name__)

CONFIG_HASH_METRIC_NAME = "blockstore_ingester_config_hash"

_metrics_by_registry: "weakref.WeakKeyDictionary[CollectorRegistry, ConfigHashMetric]" = weakref.WeakKeyDictionary()


class ConfigHashMetric:
    """
    Gauge labeled by the hash of the loaded config file.

    Each call to record() clears every previous label before setting the new
    one, so repeated loads never leave stale hashes behind.
    """

    def __init__(self, registry: CollectorRegistry):
        """
        Initialize the metric.

        Args:
            registry: Registry to register the gauge on
        """
        self.registry = registry
        self._gauge = Gauge(
            CONFIG_HASH_METRIC_NAME,
            "Hash of the currently active config file.",
            ["sha256"],
            registry=registry,
        )
        self._current: Optional[str] = None

    def record(self, config_hash: str) -> None:
        """Replace the active hash with config_hash."""
        self._gauge.clear()
        self._gauge.labels(sha256=config_hash).set(1)
        self._current = config_hash
        logger.debug(f"Config hash recorded: {config_hash}")

    def reset(self) -> None:
        """Drop the active hash."""
        self._gauge.clear()
        self._current = None

    def current(self) -> Optional[str]:
        """Get the currently active hash, if any."""
        return self._current

    @classmethod
    def for_registry(cls, registry: CollectorRegistry) -> "ConfigHashMetric":
        """
        Get the metric registered on registry, creating it on first use.

        A gauge name can only be registered once per registry, so repeated
        startups in one process share the same metric.
        """
        metric = _metrics_by_registry.get(registry)
        if metric is None:
            metric = cls(registry)
            _metrics_by_registry[registry] = metric
        return metric
