"""tmux host adapter: a tmux session is the window, tmux windows are its tabs."""

from __future__ import annotations

import logging as py_logging
import subprocess
from collections.abc import Mapping
from typing import Any, Protocol

from tabsets.errors import HostError
from tabsets.host.protocol import HostPane, PaneInfo, SplitDirection, WindowDimensions

logger = py_logging.getLogger(__name__)

SESSION_STYLE_OPTIONS = ("status-style",)
WINDOW_STYLE_OPTIONS = (
    "window-style",
    "window-active-style",
    "pane-border-style",
    "pane-active-border-style",
)
COLOR_OPTIONS = WINDOW_STYLE_OPTIONS + SESSION_STYLE_OPTIONS

_SPLIT_FLAGS = {SplitDirection.RIGHT: "-h", SplitDirection.BOTTOM: "-v"}


class SubprocessRunner(Protocol):
    def __call__(
        self,
        args: list[str],
        *,
        capture_output: bool = False,
        text: bool = False,
        check: bool = False,
    ) -> subprocess.CompletedProcess[str]: ...


class TmuxClient:
    def __init__(self, runner: SubprocessRunner = subprocess.run, binary: str = "tmux") -> None:
        self.runner = runner
        self.binary = binary

    def run(self, *args: str) -> str:
        command = [self.binary, *args]
        logger.debug("Running tmux command: %s", command)
        try:
            result = self.runner(command, capture_output=True, text=True, check=False)
        except OSError as exc:
            raise HostError(
                "tmux could not be executed.",
                hint="Install tmux and make sure it is on PATH.",
            ) from exc
        if result.returncode != 0:
            stderr = (result.stderr or "").strip()
            logger.error("tmux command failed command=%s stderr=%s", command, stderr)
            raise HostError(
                f"tmux {args[0]} failed.", hint=stderr or "Inspect tmux output and retry."
            )
        return result.stdout or ""

    def display(self, target: str, fmt: str) -> str:
        return self.run("display-message", "-p", "-t", target, fmt).rstrip("\n")


def _lines(output: str) -> list[str]:
    return [line for line in output.splitlines() if line.strip()]


def _format(*names: str) -> str:
    return "\t".join("#{" + name + "}" for name in names)


class TmuxPane:
    def __init__(self, client: TmuxClient, pane_id: str) -> None:
        self.client = client
        self.pane_id = pane_id

    def __repr__(self) -> str:
        return f"TmuxPane({self.pane_id!r})"

    def get_current_working_dir(self) -> str:
        return self.client.display(self.pane_id, "#{pane_current_path}")

    def get_foreground_process_name(self) -> str:
        return self.client.display(self.pane_id, "#{pane_current_command}")

    def send_text(self, text: str) -> None:
        body = text.rstrip("\r\n")
        if body:
            self.client.run("send-keys", "-t", self.pane_id, "-l", body)
        if body != text:
            self.client.run("send-keys", "-t", self.pane_id, "Enter")

    def activate(self) -> None:
        self.client.run("select-pane", "-t", self.pane_id)

    def split(self, direction: SplitDirection, cwd: str) -> TmuxPane:
        output = self.client.run(
            "split-window",
            _SPLIT_FLAGS[direction],
            "-t",
            self.pane_id,
            "-c",
            cwd,
            "-P",
            "-F",
            "#{pane_id}",
        )
        return TmuxPane(self.client, output.strip())


class TmuxTab:
    def __init__(self, client: TmuxClient, window_id: str) -> None:
        self.client = client
        self.window_id = window_id

    def __repr__(self) -> str:
        return f"TmuxTab({self.window_id!r})"

    def get_title(self) -> str:
        return self.client.display(self.window_id, "#{window_name}")

    def set_title(self, title: str) -> None:
        self.client.run("rename-window", "-t", self.window_id, "--", title)

    def activate(self) -> None:
        self.client.run("select-window", "-t", self.window_id)

    def panes_with_info(self) -> list[PaneInfo]:
        output = self.client.run(
            "list-panes", "-t", self.window_id, "-F", _format("pane_id", "pane_left")
        )
        panes: list[PaneInfo] = []
        for line in _lines(output):
            pane_id, _, left = line.partition("\t")
            try:
                left_value = int(left)
            except ValueError as exc:
                raise HostError(f"Unexpected tmux pane listing: {line!r}") from exc
            panes.append(PaneInfo(pane=TmuxPane(self.client, pane_id), left=left_value))
        return panes

    def panes(self) -> list[HostPane]:
        return [info.pane for info in self.panes_with_info()]

    def active_pane(self) -> TmuxPane:
        return TmuxPane(self.client, self.client.display(self.window_id, "#{pane_id}"))

    def apply_styles(self, styles: Mapping[str, str]) -> None:
        for option, value in styles.items():
            self.client.run("set-option", "-w", "-t", self.window_id, option, value)


class TmuxWindow:
    """Host window backed by one tmux session.

    Dimensions are tmux cell counts. Colors are tmux style options; window
    scoped styles set through :meth:`set_colors` are also applied to every tab
    spawned afterwards, since tmux windows do not inherit them from the session.
    """

    def __init__(
        self,
        session: str,
        *,
        runner: SubprocessRunner = subprocess.run,
        client: TmuxClient | None = None,
    ) -> None:
        self.session = session
        self.client = client or TmuxClient(runner)
        self._window_styles: dict[str, str] = {}

    def __repr__(self) -> str:
        return f"TmuxWindow({self.session!r})"

    def get_dimensions(self) -> WindowDimensions:
        output = self.client.display(self.session, _format("window_width", "window_height"))
        width, _, height = output.partition("\t")
        try:
            return WindowDimensions(pixel_width=int(width), pixel_height=int(height))
        except ValueError as exc:
            raise HostError(f"Unexpected tmux window size: {output!r}") from exc

    def get_colors(self) -> dict[str, str]:
        output = self.client.display(self.session, _format(*COLOR_OPTIONS))
        values = output.split("\t")
        return {option: value for option, value in zip(COLOR_OPTIONS, values) if value}

    def set_colors(self, colors: Mapping[str, Any]) -> None:
        window_styles: dict[str, str] = {}
        for option, value in colors.items():
            if not isinstance(value, str):
                logger.warning("Ignoring non-string color option %s=%r", option, value)
                continue
            if option in SESSION_STYLE_OPTIONS:
                self.client.run("set-option", "-t", self.session, option, value)
            elif option in WINDOW_STYLE_OPTIONS:
                window_styles[option] = value
            else:
                logger.warning("Ignoring unsupported color option: %s", option)
        self._window_styles.update(window_styles)
        for tab in self.tabs():
            tab.apply_styles(window_styles)

    def set_inner_size(self, width: int, height: int) -> None:
        self.client.run("resize-window", "-t", self.session, "-x", str(width), "-y", str(height))

    def tabs(self) -> list[TmuxTab]:
        output = self.client.run("list-windows", "-t", self.session, "-F", "#{window_id}")
        return [TmuxTab(self.client, window_id.strip()) for window_id in _lines(output)]

    def active_pane(self) -> TmuxPane:
        return TmuxPane(self.client, self.client.display(self.session, "#{pane_id}"))

    def spawn_tab(self, cwd: str) -> TmuxTab:
        output = self.client.run(
            "new-window", "-t", f"{self.session}:", "-c", cwd, "-P", "-F", "#{window_id}"
        )
        tab = TmuxTab(self.client, output.strip())
        if self._window_styles:
            tab.apply_styles(self._window_styles)
        return tab

    def toast(self, title: str, message: str) -> None:
        self.client.run("display-message", "-t", self.session, f"{title}: {message}")


def current_window(
    target: str | None = None,
    *,
    runner: SubprocessRunner = subprocess.run,
) -> TmuxWindow:
    """Return the window for ``target``, or the session of the attached tmux client."""
    client = TmuxClient(runner)
    if target:
        session = client.display(target, "#{session_id}")
    else:
        try:
            session = client.run("display-message", "-p", "#{session_id}").strip()
        except HostError as exc:
            raise HostError(
                "No tmux session to operate on.",
                hint="Run inside tmux or pass --target SESSION.",
            ) from exc
    if not session:
        raise HostError("tmux did not report a session id.", hint="Pass --target SESSION.")
    return TmuxWindow(session, client=client)
