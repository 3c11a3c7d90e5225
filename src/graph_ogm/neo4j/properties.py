"""Helpers for rendering property names into Cypher fragments.

Used by the relation query builder for RETURN projections and ORDER BY
lists, and by ``Where`` for property access.
"""

import re
from typing import Any, Sequence, Union

PropertyNames = Union[str, Sequence[str]]

_IDENTIFIER = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")


def escape_name(name: str) -> str:
    """Return ``name`` usable as a label, type or property key.

    Plain identifiers pass through untouched; anything else is back-tick
    quoted with embedded back-ticks doubled.
    """
    if _IDENTIFIER.match(name):
        return name
    return "`" + name.replace("`", "``") + "`"


def is_valid_properties_array(value: Any) -> bool:
    """True for a non-empty string or a non-empty sequence of non-empty strings."""
    if isinstance(value, str):
        return value != ""
    if isinstance(value, (list, tuple)):
        return len(value) > 0 and all(isinstance(v, str) and v for v in value)
    return False


def parse_properties_array(value: PropertyNames, variable: str) -> str:
    """Render ``value`` as comma separated ``variable.property`` tokens.

    Input order is preserved. Callers are expected to check the value with
    ``is_valid_properties_array`` first.
    """
    names = [value] if isinstance(value, str) else list(value)
    return ", ".join(f"{variable}.{escape_name(name)}" for name in names)
