"""
Shared fixtures for the test suite.

Author: Blockstore Ingester Project
License: MIT
"""

import logging
import pytest
from prometheus_client import CollectorRegistry

from blockstore_ingester.monitoring.config_hash import ConfigHashMetric, CONFIG_HASH_METRIC_NAME
from blockstore_ingester.utils.logger import ROOT_LOGGER_NAME


@pytest.fixture(autouse=True)
def reset_logging():
    """Drop handlers installed by setup_logging during a test."""
    yield
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    logger.handlers.clear()
    logger.setLevel(logging.NOTSET)
    logger.propagate = True


@pytest.fixture
def registry():
    """Isolated Prometheus registry."""
    return CollectorRegistry()


@pytest.fixture
def metric(registry):
    """Config hash metric on an isolated registry."""
    return ConfigHashMetric(registry)


@pytest.fixture
def active_hashes():
    """Return the sha256 label values a registry exports with value 1."""
    def collect(registry):
        hashes = []
        for family in registry.collect():
            for sample in family.samples:
                if sample.name == CONFIG_HASH_METRIC_NAME and sample.value == 1:
                    hashes.append(sample.labels["sha256"])
        return hashes
    return collect
