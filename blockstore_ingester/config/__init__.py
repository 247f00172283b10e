"""
Blockstore Ingester Configuration Module

Locates, loads, expands and validates the YAML configuration file and
registers configuration flags on the command line.

Author: Blockstore Ingester Project
License: MIT
"""

from .schema import Config
from .errors import ConfigLoadError, ConfigReadError, ConfigParseError, LoadErrorKind
from .locator import BootstrapOptions, parse_config_file_parameter
from .config_loader import ConfigLoader, load_config
from .env_expander import expand_env

__all__ = [
    'Config',
    'ConfigLoadError',
    'ConfigReadError',
    'ConfigParseError',
    'LoadErrorKind',
    'BootstrapOptions',
    'parse_config_file_parameter',
    'ConfigLoader',
    'load_config',
    'expand_env',
]
