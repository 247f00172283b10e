"""
Config File Locator

Finds the --config.file and --config.expand-env options among the raw
process arguments before the main argument parser runs.

Author: Blockstore Ingester Project
License: MIT
"""

import argparse
from dataclasses import dataclass
from typing import Sequence

from ..utils.logger import get_logger

logger = get_logger(__name__)

CONFIG_FILE_OPTION = "config.file"
CONFIG_EXPAND_ENV_OPTION = "config.expand-env"


@dataclass(frozen=True)
class BootstrapOptions:
    """Options needed before the main parse."""
    config_file: str = ""
    expand_env: bool = False


def parse_bool(value: str) -> bool:
    """Parse a boolean flag value."""
    lowered = value.strip().lower()
    if lowered in ("1", "t", "true", "yes", "on"):
        return True
    if lowered in ("0", "f", "false", "no", "off"):
        return False
    raise argparse.ArgumentTypeError(f"invalid boolean value: {value!r}")


class _BoolSwitch(argparse.Action):
    """
    Boolean option given bare (true) or as =true / =false.

    A following token that is not a boolean is not a value of the switch;
    it is left for the main parse.
    """

    def __init__(self, option_strings, dest, **kwargs):
        super().__init__(option_strings, dest, nargs="?", const=True, **kwargs)

    def __call__(self, parser, namespace, values, option_string=None):
        if not isinstance(values, str):
            # bare switch: argparse passes const
            setattr(namespace, self.dest, bool(values))
            return
        try:
            setattr(namespace, self.dest, parse_bool(values))
        except argparse.ArgumentTypeError:
            setattr(namespace, self.dest, True)


class _BootstrapParseError(Exception):
    """Raised instead of printing usage and exiting."""


class _TolerantParser(argparse.ArgumentParser):
    """Argument parser that never writes output or exits."""

    def error(self, message):
        raise _BootstrapParseError(message)

    def exit(self, status=0, message=None):
        raise _BootstrapParseError(message or "")

    def _print_message(self, message, file=None):
        pass


def _build_parser() -> argparse.ArgumentParser:
    parser = _TolerantParser(add_help=False, allow_abbrev=False, exit_on_error=False)
    parser.add_argument(
        f"-{CONFIG_FILE_OPTION}", f"--{CONFIG_FILE_OPTION}",
        dest="config_file", default="",
    )
    parser.add_argument(
        f"-{CONFIG_EXPAND_ENV_OPTION}", f"--{CONFIG_EXPAND_ENV_OPTION}",
        dest="expand_env", action=_BoolSwitch, default=False,
    )
    return parser


def parse_config_file_parameter(args: Sequence[str]) -> BootstrapOptions:
    """
    Extract the config file path and expand-env switch from raw arguments.

    The main parser knows many more options than these two, and parsing can
    stop at the first token it does not understand. So parsing is retried on
    every suffix of the argument list until none is left; values found by
    each pass accumulate in one namespace. Errors and output are discarded,
    the main parse reports them later.

    Args:
        args: Process arguments without the program name

    Returns:
        BootstrapOptions with the located values (empty path if absent)
    """
    parser = _build_parser()
    namespace = argparse.Namespace(config_file="", expand_env=False)

    remaining = list(args)
    while remaining:
        try:
            parser.parse_known_args(remaining, namespace)
        except (_BootstrapParseError, argparse.ArgumentError):
            pass
        remaining = remaining[1:]

    options = BootstrapOptions(
        config_file=namespace.config_file or "",
        expand_env=bool(namespace.expand_env),
    )
    logger.debug(f"Located bootstrap options: {options}")
    return options
