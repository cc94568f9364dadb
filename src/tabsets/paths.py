"""Path, URI and shell-name helpers shared by capture and reconstruction."""

from __future__ import annotations

import re
from enum import Enum
from urllib.parse import unquote, urlsplit

SHELL_NAMES: frozenset[str] = frozenset({"sh", "bash", "zsh", "fish", "nu", "dash", "csh", "ksh"})

_DRIVE_PATH = re.compile(r"^/[A-Za-z]:")


class PathStyle(str, Enum):
    POSIX = "posix"
    WINDOWS = "windows"


def basename(path: str) -> str:
    """Final component of a ``/`` or ``\\`` separated path."""
    return re.split(r"[/\\]", path)[-1]


def is_shell(command: str) -> bool:
    """True if ``command`` names an interactive shell, by final path component.

    Login shells report themselves with a leading ``-`` (``-zsh``); that prefix
    is ignored.
    """
    name = basename(command.strip()).lstrip("-")
    return name in SHELL_NAMES


def uri_to_path(value: str, *, style: PathStyle = PathStyle.POSIX) -> str:
    """Turn a ``file://`` working-directory URI into a local path.

    ``file://host/home/u/x`` becomes ``/home/u/x``; with ``PathStyle.WINDOWS``,
    ``file:///C:/work`` becomes ``C:/work``. Plain paths are returned as is.
    """
    raw = value.strip()
    parts = urlsplit(raw)
    if parts.scheme.lower() != "file":
        return raw
    path = unquote(parts.path) or "/"
    if style is PathStyle.WINDOWS and _DRIVE_PATH.match(path):
        path = path[1:]
    return path
