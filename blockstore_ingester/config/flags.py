"""
Command-Line Flags

Registers every configuration field as a --<section>.<field> flag on the
main argument parser and applies the flags given explicitly on the command
line. Also declares the bootstrap options as ignored flags, since they are
handled before the main parse.

Author: Blockstore Ingester Project
License: MIT
"""

import argparse
import typing
from enum import Enum
from typing import Any, Dict, Optional, Type
from pydantic import BaseModel

from .locator import CONFIG_EXPAND_ENV_OPTION, CONFIG_FILE_OPTION, parse_bool

CONFIG_FILE_HELP = "Configuration file to load."
CONFIG_EXPAND_ENV_HELP = (
    "Expands ${var} or $var in config according to the values of the "
    "environment variables."
)


class IgnoredFlag(argparse.Action):
    """Flag that is accepted on the command line and otherwise does nothing."""

    def __init__(self, option_strings, dest, nargs=None, **kwargs):
        kwargs["default"] = argparse.SUPPRESS
        super().__init__(option_strings, argparse.SUPPRESS, nargs=nargs, **kwargs)

    def __call__(self, parser, namespace, values, option_string=None):
        pass


def register_ignored_bootstrap_flags(parser: argparse.ArgumentParser) -> None:
    """
    Declare the bootstrap options on the main parser as no-ops.

    They were already consumed before the main parse but are still present
    on the command line.
    """
    parser.add_argument(
        f"--{CONFIG_FILE_OPTION}", f"-{CONFIG_FILE_OPTION}",
        action=IgnoredFlag, metavar="PATH", help=CONFIG_FILE_HELP,
    )
    parser.add_argument(
        f"--{CONFIG_EXPAND_ENV_OPTION}", f"-{CONFIG_EXPAND_ENV_OPTION}",
        action=IgnoredFlag, nargs="?", const=True, type=parse_bool,
        metavar="BOOL", help=CONFIG_EXPAND_ENV_HELP,
    )


def _unwrap_optional(annotation: Any) -> Any:
    if typing.get_origin(annotation) is typing.Union:
        args = [a for a in typing.get_args(annotation) if a is not type(None)]
        if len(args) == 1:
            return args[0]
    return annotation


def _flag_name(dest: str) -> str:
    return "--" + dest.replace("_", "-")


def _enum_type(enum_cls: Type[Enum]):
    """Map a flag value to an enum member value, ignoring case."""
    values = {str(member.value).lower(): member.value for member in enum_cls}

    def convert(value: str):
        return values.get(value.lower(), value)

    convert.__name__ = enum_cls.__name__
    return convert


def register_flags(
    parser: argparse.ArgumentParser,
    model: Type[BaseModel],
    prefix: str = ""
) -> None:
    """
    Register a flag for every scalar field of model, recursing into sections.

    Flag defaults are suppressed: only flags present on the command line end
    up in the parsed namespace, so the schema and config file values stay in
    effect otherwise. The namespace attribute is the dotted field path.

    Args:
        parser: Main argument parser
        model: Configuration model class
        prefix: Dotted section prefix (used when recursing)
    """
    for name, field in model.model_fields.items():
        annotation = _unwrap_optional(field.annotation)
        dest = f"{prefix}{name}"

        if isinstance(annotation, type) and issubclass(annotation, BaseModel):
            register_flags(parser, annotation, prefix=f"{dest}.")
            continue

        kwargs: Dict[str, Any] = {
            "dest": dest,
            "default": argparse.SUPPRESS,
            "help": field.description,
        }
        origin = typing.get_origin(annotation)

        if origin in (list, typing.List):
            item_type = (typing.get_args(annotation) or (str,))[0]
            kwargs.update(nargs="+", type=item_type)
        elif annotation is bool:
            kwargs.update(nargs="?", const=True, type=parse_bool)
        elif isinstance(annotation, type) and issubclass(annotation, Enum):
            kwargs.update(
                type=_enum_type(annotation),
                choices=[member.value for member in annotation],
            )
        elif annotation in (int, float, str):
            kwargs.update(type=annotation)
        else:
            continue

        parser.add_argument(_flag_name(dest), **kwargs)


def apply_flags(config: BaseModel, namespace: argparse.Namespace) -> Dict[str, Any]:
    """
    Apply explicitly given flags onto config.

    Args:
        config: Configuration model updated in place
        namespace: Result of the main parse

    Returns:
        Mapping of dotted field path to applied value

    Raises:
        pydantic.ValidationError: If a flag value fails field validation
    """
    applied: Dict[str, Any] = {}
    for dest, value in sorted(vars(namespace).items()):
        *sections, field_name = dest.split(".")
        obj: Optional[BaseModel] = config
        for section in sections:
            obj = getattr(obj, section, None)
            if obj is None:
                break
        if obj is None or field_name not in type(obj).model_fields:
            continue
        setattr(obj, field_name, value)
        applied[dest] = value
    return applied
