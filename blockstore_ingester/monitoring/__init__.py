"""
Monitoring Module

Prometheus metrics exported by the ingester.

Author: Blockstore Ingester Project
License: MIT
"""

from .config_hash import ConfigHashMetric, CONFIG_HASH_METRIC_NAME

__all__ = ['ConfigHashMetric', 'CONFIG_HASH_METRIC_NAME']
