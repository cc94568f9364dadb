"""Tabset record name validation."""

from __future__ import annotations

import re

from tabsets.errors import TabsetNameError

_NAME_PATTERN = re.compile(r"[A-Za-z0-9+._ -]+")


def is_valid_tabset_name(name: object) -> bool:
    """Return True if ``name`` only holds letters, digits, spaces and ``+ . - _``."""
    if not isinstance(name, str):
        return False
    return _NAME_PATTERN.fullmatch(name) is not None


def validate_tabset_name(name: object) -> str:
    if not is_valid_tabset_name(name):
        raise TabsetNameError(
            f"Invalid tabset name '{name}'",
            hint="Use letters, digits, spaces and + . - _ only.",
        )
    return str(name)
