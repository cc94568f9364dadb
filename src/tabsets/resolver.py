"""Best-effort resolution of recorded foreground commands."""

from __future__ import annotations

import logging as py_logging
import os
import shutil
from collections.abc import Callable

logger = py_logging.getLogger(__name__)


def is_executable_file(path: str) -> bool:
    return os.path.isfile(path) and os.access(path, os.X_OK)


class ExecutableResolver:
    """Map a recorded command name or path to something runnable now.

    A command seen at capture time may be gone or relocated at restore time;
    that case yields ``None`` and the caller skips the command.
    """

    def __init__(
        self,
        *,
        is_executable: Callable[[str], bool] = is_executable_file,
        which: Callable[[str], str | None] = shutil.which,
    ) -> None:
        self._is_executable = is_executable
        self._which = which

    def resolve(self, command: str) -> str | None:
        if not command:
            logger.error("Failed to resolve executable: empty command name")
            return None
        if self._is_executable(command):
            return command
        found = self._which(command)
        if found:
            logger.debug("Resolved executable command=%s path=%s", command, found)
            return found
        logger.error("Failed to resolve executable '%s'", command)
        return None
