"""
Environment Variable Expansion

Replaces ${var}, $var and ${var:default} placeholders in raw configuration
bytes with values from the process environment.

Author: Blockstore Ingester Project
License: MIT
"""

import os
import re
from typing import Mapping, Optional

# ${anything-but-brace} or a bare $name; a leading digit is part of the name,
# so $10 looks up "10" rather than $1 followed by "0"
PLACEHOLDER_PATTERN = re.compile(rb"\$(?:\{(?P<braced>[^}]*)\}|(?P<bare>[A-Za-z0-9_]+))")


def expand_env(config: bytes, environ: Optional[Mapping[str, str]] = None) -> bytes:
    """
    Expand environment placeholders in configuration bytes.

    The replacement is case-sensitive and single-pass. References to undefined
    (or empty) variables are replaced by the empty string, unless a default is
    given with the form ${var:default value}. Syntax that is not a recognized
    placeholder, such as ``${}``, an unclosed ``${`` or a lone ``$``, is kept
    verbatim.

    Args:
        config: Raw configuration file contents
        environ: Environment snapshot to resolve names against (defaults to os.environ)

    Returns:
        Expanded configuration contents
    """
    if environ is None:
        environ = os.environ

    def replace(match: "re.Match[bytes]") -> bytes:
        token = match.group("braced")
        if token is None:
            token = match.group("bare")
        elif not token:
            return match.group(0)

        name, sep, default = token.partition(b":")
        value = environ.get(name.decode("utf-8", "surrogateescape"), "")
        if value:
            return value.encode("utf-8", "surrogateescape")
        if sep:
            return default
        return b""

    return PLACEHOLDER_PATTERN.sub(replace, config)
