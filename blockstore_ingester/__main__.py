"""
Blockstore Ingester Entry Point

Bootstraps the configuration, parses the remaining command-line flags and
sets up logging and metrics.

Author: Blockstore Ingester Project
License: MIT
"""

import argparse
import sys
from typing import Optional, Sequence
from dotenv import load_dotenv
from prometheus_client import REGISTRY, CollectorRegistry, start_http_server
from pydantic import ValidationError

from . import __version__
from .config.flags import apply_flags, register_flags
from .config.schema import Config
from .core.bootstrap import bootstrap
from .monitoring.config_hash import ConfigHashMetric
from .utils.logger import get_logger, setup_logging

logger = get_logger(__name__)


def build_parser() -> argparse.ArgumentParser:
    """Create the main argument parser with all configuration flags."""
    parser = argparse.ArgumentParser(
        prog="blockstore-ingester",
        description="Block storage ingester.",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    register_flags(parser, Config)
    return parser


def main(
    argv: Optional[Sequence[str]] = None,
    registry: Optional[CollectorRegistry] = None,
    test_mode: bool = False
) -> int:
    """
    Run the ingester startup.

    Args:
        argv: Arguments without the program name (defaults to sys.argv[1:])
        registry: Prometheus registry (defaults to the global registry)
        test_mode: Return instead of exiting when the config file fails to load

    Returns:
        Process exit code
    """
    # values from a local .env become visible to ${var} expansion
    load_dotenv()

    argv = list(sys.argv[1:] if argv is None else argv)
    registry = registry or REGISTRY

    cfg = Config()
    parser = build_parser()
    metric = ConfigHashMetric.for_registry(registry)

    result = bootstrap(argv, cfg, parser, metric, test_mode=test_mode)
    if not result.ok:
        return 1

    args = parser.parse_args(argv)
    try:
        apply_flags(cfg, args)
    except ValidationError as e:
        parser.error(str(e))

    setup_logging(
        log_level=cfg.log.level,
        log_format=cfg.log.format,
        log_file_path=cfg.log.file,
        log_rotation_size=cfg.log.rotation_size,
        log_retention_count=cfg.log.retention_count,
    )

    if result.fingerprint:
        logger.info(f"Using config file {result.options.config_file} (sha256={result.fingerprint})")
    else:
        logger.info("No config file given, using defaults")

    if cfg.server.metrics_port:
        start_http_server(cfg.server.metrics_port, registry=registry)
        logger.info(f"Serving metrics on port {cfg.server.metrics_port}")

    logger.info(f"Starting blockstore ingester {__version__}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
