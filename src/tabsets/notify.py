"""User-visible outcome notifications."""

from __future__ import annotations

import logging as py_logging
import shutil
import subprocess
from collections.abc import Callable

from tabsets.errors import HostError
from tabsets.host.protocol import HostWindow
from tabsets.host.tmux import SubprocessRunner

logger = py_logging.getLogger(__name__)

APP_NAME = "tabsets"
NOTIFY_TIMEOUT_MS = 4000


class Notifier:
    """Log a message and show it to the user.

    ``notify-send`` is preferred when installed because its notifications
    expire; otherwise the host window's own toast is used.
    """

    def __init__(
        self,
        *,
        runner: SubprocessRunner = subprocess.run,
        which: Callable[[str], str | None] = shutil.which,
    ) -> None:
        self._runner = runner
        self._which = which

    def notify(self, window: HostWindow | None, message: str, *, error: bool = False) -> None:
        if error:
            logger.error(message)
            message = f"FAILED: {message}"
        else:
            logger.info(message)

        if self._which("notify-send") and self._send_desktop(message):
            return
        if window is None:
            return
        try:
            window.toast(APP_NAME, message)
        except HostError as exc:
            logger.warning("Unable to show notification: %s", exc)

    def _send_desktop(self, message: str) -> bool:
        command = [
            "notify-send",
            "-a",
            APP_NAME,
            "-t",
            str(NOTIFY_TIMEOUT_MS),
            "-u",
            "normal",
            message,
        ]
        try:
            result = self._runner(command, capture_output=True, text=True, check=False)
        except OSError as exc:
            logger.warning("notify-send could not be executed: %s", exc)
            return False
        if result.returncode != 0:
            logger.warning("notify-send failed: %s", (result.stderr or "").strip())
            return False
        return True
