"""
Bootstrap

Startup sequence establishing the configuration before the ingester
starts: locate the config file among the raw arguments, load it into the
configuration (whose defaults are already set by its owner), and declare
the bootstrap options as ignored on the main parser.

Author: Blockstore Ingester Project
License: MIT
"""

import argparse
import sys
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Sequence, TextIO
from pydantic import BaseModel

from ..config.config_loader import ConfigLoader
from ..config.errors import ConfigLoadError, LoadErrorKind
from ..config.flags import register_ignored_bootstrap_flags
from ..config.locator import BootstrapOptions, parse_config_file_parameter
from ..monitoring.config_hash import ConfigHashMetric
from ..utils.logger import get_logger

logger = get_logger(__name__)

EXIT_CONFIG_ERROR = 1


class BootstrapState(Enum):
    """Terminal states of the bootstrap sequence."""
    DEFAULTS_ONLY = "defaults_only"
    DEFAULTS_MERGED = "defaults_merged"
    FAILED = "failed"


@dataclass
class BootstrapResult:
    """Outcome of bootstrap()."""
    state: BootstrapState
    options: BootstrapOptions = field(default_factory=BootstrapOptions)
    fingerprint: Optional[str] = None
    error: Optional[ConfigLoadError] = None

    @property
    def ok(self) -> bool:
        return self.state is not BootstrapState.FAILED


def bootstrap(
    argv: Sequence[str],
    config: BaseModel,
    parser: argparse.ArgumentParser,
    metric: ConfigHashMetric,
    *,
    test_mode: bool = False,
    stream: Optional[TextIO] = None
) -> BootstrapResult:
    """
    Run the configuration bootstrap.

    Args:
        argv: Process arguments without the program name
        config: Configuration with defaults already applied, updated in place
        parser: Main argument parser; the bootstrap options are declared on it
        metric: Sink for the config file hash
        test_mode: Return a FAILED result instead of exiting on load errors
        stream: Diagnostic stream for load errors (defaults to stderr)

    Returns:
        BootstrapResult describing the terminal state

    Raises:
        SystemExit: On a load error, unless test_mode is set
    """
    options = parse_config_file_parameter(argv)
    result = BootstrapResult(state=BootstrapState.DEFAULTS_ONLY, options=options)

    if options.config_file:
        loader = ConfigLoader(metric)
        try:
            result.fingerprint = loader.load(
                options.config_file,
                config,
                expand_env_vars=options.expand_env
            )
            result.state = BootstrapState.DEFAULTS_MERGED
        except ConfigLoadError as e:
            return _handle_failure(options, e, metric, test_mode, stream)
    else:
        logger.debug("No config file specified, using defaults")

    register_ignored_bootstrap_flags(parser)
    return result


def _handle_failure(
    options: BootstrapOptions,
    error: ConfigLoadError,
    metric: ConfigHashMetric,
    test_mode: bool,
    stream: Optional[TextIO]
) -> BootstrapResult:
    """Report a load error, then exit or return a FAILED result."""
    message = f"error loading config from {options.config_file}: {error}"
    print(message, file=stream or sys.stderr)
    logger.error(message)

    if not test_mode:
        sys.exit(EXIT_CONFIG_ERROR)

    return BootstrapResult(
        state=BootstrapState.FAILED,
        options=options,
        fingerprint=metric.current() if error.kind is LoadErrorKind.PARSE_FAILURE else None,
        error=error,
    )
