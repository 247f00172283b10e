"""
Configuration Loader

Reads the YAML configuration file, records its hash, optionally expands
environment placeholders and merges the document into a configuration
model with strict validation.

Author: Blockstore Ingester Project
License: MIT
"""

import copy
import hashlib
import yaml
from pathlib import Path
from typing import Any, Dict
from pydantic import BaseModel, ValidationError

from ..monitoring.config_hash import ConfigHashMetric
from ..utils.logger import get_logger
from .env_expander import expand_env
from .errors import ConfigParseError, ConfigReadError

logger = get_logger(__name__)


class StrictSafeLoader(yaml.SafeLoader):
    """SafeLoader that rejects duplicate mapping keys."""

    def construct_mapping(self, node, deep=False):
        if isinstance(node, yaml.MappingNode):
            seen = set()
            for key_node, _ in node.value:
                if key_node.tag == "tag:yaml.org,2002:merge":
                    continue
                key = self.construct_object(key_node, deep=deep)
                try:
                    duplicate = key in seen
                except TypeError:
                    # unhashable keys are rejected by the base implementation
                    continue
                if duplicate:
                    raise yaml.constructor.ConstructorError(
                        "while constructing a mapping", node.start_mark,
                        f"found duplicate key {key!r}", key_node.start_mark
                    )
                seen.add(key)
        return super().construct_mapping(node, deep=deep)


def merge_config_data(base: Dict[str, Any], overlay: Dict[str, Any]) -> Dict[str, Any]:
    """
    Overlay a config document on existing values.

    Nested mappings are merged key by key; any other value replaces the
    existing one.

    Args:
        base: Current configuration values
        overlay: Values from the config file

    Returns:
        New merged dictionary (inputs are not modified)
    """
    merged = copy.deepcopy(base)
    for key, value in overlay.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = merge_config_data(merged[key], value)
        else:
            merged[key] = copy.deepcopy(value)
    return merged


def config_hash(buf: bytes) -> str:
    """Hex SHA-256 of raw config bytes."""
    return hashlib.sha256(buf).hexdigest()


class ConfigLoader:
    """
    Configuration file loader.

    Loading always happens in the same order: read the file, record its
    hash, expand placeholders if requested, then parse and validate. The
    hash is published before parsing, so it is current even when parsing
    fails.
    """

    def __init__(self, metric: ConfigHashMetric):
        """
        Initialize the loader.

        Args:
            metric: Sink for the hash of the loaded file
        """
        self.metric = metric

    def load(self, path: str, target: BaseModel, expand_env_vars: bool = False) -> str:
        """
        Load a YAML config file into target.

        Args:
            path: Path to the config file
            target: Configuration model updated in place
            expand_env_vars: Expand ${var}, $var and ${var:default} before parsing

        Returns:
            Hex SHA-256 of the file contents as read from disk

        Raises:
            ConfigReadError: If the file can't be read
            ConfigParseError: If the file is not valid YAML or doesn't match the schema
        """
        buf = self._read(path)

        digest = config_hash(buf)
        self.metric.record(digest)

        if expand_env_vars:
            buf = expand_env(buf)

        self._apply(path, buf, target)
        logger.info(f"Loaded config from {path} (sha256={digest})")
        return digest

    def _read(self, path: str) -> bytes:
        try:
            return Path(path).read_bytes()
        except OSError as e:
            raise ConfigReadError(path, e) from e

    def _apply(self, path: str, buf: bytes, target: BaseModel) -> None:
        """Parse buf and copy the validated result onto target."""
        try:
            data = yaml.load(buf, Loader=StrictSafeLoader)
        except yaml.YAMLError as e:
            raise ConfigParseError(path, e) from e

        if data is None:
            logger.debug(f"Config file {path} is empty, keeping current values")
            return
        if not isinstance(data, dict):
            e = ValueError(f"top-level document must be a mapping, got {type(data).__name__}")
            raise ConfigParseError(path, e) from e

        merged = merge_config_data(target.model_dump(), data)
        try:
            validated = type(target).model_validate(merged)
        except ValidationError as e:
            raise ConfigParseError(path, e) from e

        for name in type(target).model_fields:
            setattr(target, name, getattr(validated, name))


def load_config(
    path: str,
    expand_env_vars: bool,
    target: BaseModel,
    metric: ConfigHashMetric
) -> str:
    """
    Convenience function to load a config file.

    Args:
        path: Path to the config file
        expand_env_vars: Expand environment placeholders before parsing
        target: Configuration model updated in place
        metric: Sink for the config hash

    Returns:
        Hex SHA-256 of the file contents
    """
    loader = ConfigLoader(metric)
    return loader.load(path, target, expand_env_vars=expand_env_vars)
