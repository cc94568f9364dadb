"""Rebuild a recorded tab/pane layout inside a live host window.

Only the split sequence is reproduced: each pane after the first is split off
the tab's active pane, downward when it shares the previous pane's ``left``
and to the right otherwise. Exact pane rectangles are not restored.

Foreground commands are replayed by typing the resolved command into the new
pane. That re-launches the program; it cannot bring back shell history,
environment or any in-flight program state.
"""

from __future__ import annotations

import logging as py_logging
from collections.abc import Sequence
from dataclasses import dataclass, field

from tabsets.config import AppConfig
from tabsets.errors import HostError, InvalidSnapshotError
from tabsets.host.protocol import HostPane, HostTab, HostWindow, SplitDirection
from tabsets.models import Snapshot, TabRecord
from tabsets.paths import PathStyle, is_shell, uri_to_path
from tabsets.resolver import ExecutableResolver

logger = py_logging.getLogger(__name__)

EXIT_COMMAND = "exit\r"


@dataclass
class ReconstructionReport:
    window_was_empty: bool = False
    tabs_created: int = 0
    panes_created: int = 0
    commands_sent: list[str] = field(default_factory=list)
    failures: list[str] = field(default_factory=list)

    @property
    def partial(self) -> bool:
        return bool(self.failures)


def split_directions(lefts: Sequence[int]) -> list[SplitDirection | None]:
    """Split direction for each pane given the recorded ``left`` positions.

    The first pane needs no split and maps to ``None``.
    """
    directions: list[SplitDirection | None] = []
    for index, left in enumerate(lefts):
        if index == 0:
            directions.append(None)
        elif left == lefts[index - 1]:
            directions.append(SplitDirection.BOTTOM)
        else:
            directions.append(SplitDirection.RIGHT)
    return directions


def validate_snapshot(snapshot: Snapshot) -> None:
    if not snapshot.tabs:
        raise InvalidSnapshotError("Invalid or empty tabset data: no tabs recorded")
    for index, tab in enumerate(snapshot.tabs, start=1):
        if not tab.panes:
            raise InvalidSnapshotError(f"Invalid tabset data: tab {index} has no panes")


class LayoutReconstructor:
    def __init__(
        self,
        config: AppConfig,
        *,
        resolver: ExecutableResolver | None = None,
        path_style: PathStyle | None = None,
    ) -> None:
        self.config = config
        self.resolver = resolver or ExecutableResolver()
        self.path_style = path_style if path_style is not None else config.path_style_enum

    def reconstruct(self, window: HostWindow, snapshot: Snapshot) -> ReconstructionReport:
        validate_snapshot(snapshot)

        report = ReconstructionReport()
        idle_pane = self.find_idle_pane(window)
        report.window_was_empty = idle_pane is not None
        if report.window_was_empty:
            self._restore_chrome(window, snapshot, report)

        for tab_index, tab_data in enumerate(snapshot.tabs, start=1):
            cwd = uri_to_path(tab_data.panes[0].cwd, style=self.path_style)
            try:
                new_tab = window.spawn_tab(cwd)
            except HostError as exc:
                logger.error("Failed to create a new tab index=%s cwd=%s: %s", tab_index, cwd, exc)
                report.failures.append(f"tab {tab_index}: {exc}")
                break
            report.tabs_created += 1
            if idle_pane is not None:
                self._close_idle_pane(idle_pane, report)
                idle_pane = None
            try:
                new_tab.set_title(tab_data.title)
            except HostError as exc:
                logger.error("Failed to set title of tab index=%s: %s", tab_index, exc)
                report.failures.append(f"tab {tab_index} title: {exc}")
            try:
                new_tab.activate()
            except HostError as exc:
                logger.error("Failed to activate tab index=%s: %s", tab_index, exc)
                report.failures.append(f"tab {tab_index} focus: {exc}")
            self._replay_panes(new_tab, tab_data, tab_index, report)

        if report.partial:
            logger.warning(
                "Tabset partially recreated tabs=%s panes=%s failures=%s",
                report.tabs_created,
                report.panes_created,
                report.failures,
            )
        else:
            logger.info(
                "Tabset recreated tabs=%s panes=%s", report.tabs_created, report.panes_created
            )
        return report

    def find_idle_pane(self, window: HostWindow) -> HostPane | None:
        """Return the lone idle shell pane that the recorded tabs replace.

        ``None`` means the window is not empty: it has more than one pane, or
        its only pane runs something other than a shell. The pane must outlive
        the first spawned tab: closing the last pane ends the host window.
        """
        tabs = window.tabs()
        if len(tabs) != 1 or len(tabs[0].panes()) != 1:
            return None

        initial_pane = window.active_pane()
        foreground = initial_pane.get_foreground_process_name()
        if not is_shell(foreground):
            logger.info("Initial tab left open because '%s' is running", foreground)
            return None
        return initial_pane

    def _close_idle_pane(self, pane: HostPane, report: ReconstructionReport) -> None:
        try:
            pane.send_text(EXIT_COMMAND)
        except HostError as exc:
            logger.error("Failed to close the initial empty tab: %s", exc)
            report.failures.append(f"initial tab: {exc}")
            return
        logger.info("Existing single empty tab closed")

    def _restore_chrome(
        self, window: HostWindow, snapshot: Snapshot, report: ReconstructionReport
    ) -> None:
        if self.config.restore_colors:
            try:
                window.set_colors(snapshot.colors or {})
            except HostError as exc:
                logger.error("Failed to restore window colors: %s", exc)
                report.failures.append(f"colors: {exc}")
        if self.config.restore_dimensions:
            try:
                window.set_inner_size(snapshot.window_width, snapshot.window_height)
            except HostError as exc:
                logger.error("Failed to restore window dimensions: %s", exc)
                report.failures.append(f"dimensions: {exc}")

    def _replay_panes(
        self,
        tab: HostTab,
        tab_data: TabRecord,
        tab_index: int,
        report: ReconstructionReport,
    ) -> None:
        directions = split_directions([pane.left for pane in tab_data.panes])
        first_pane: HostPane | None = None

        for pane_index, (pane_data, direction) in enumerate(
            zip(tab_data.panes, directions), start=1
        ):
            try:
                if direction is None:
                    new_pane = tab.active_pane()
                    first_pane = new_pane
                else:
                    new_pane = tab.active_pane().split(
                        direction, uri_to_path(pane_data.cwd, style=self.path_style)
                    )
            except HostError as exc:
                logger.error(
                    "Failed to create a new pane tab=%s pane=%s: %s", tab_index, pane_index, exc
                )
                report.failures.append(f"tab {tab_index} pane {pane_index}: {exc}")
                continue

            report.panes_created += 1
            self._replay_command(new_pane, pane_data.exe, report)

        if first_pane is not None:
            try:
                first_pane.activate()
            except HostError as exc:
                logger.error("Failed to activate first pane of tab=%s: %s", tab_index, exc)
                report.failures.append(f"tab {tab_index} focus: {exc}")

    def _replay_command(self, pane: HostPane, command: str, report: ReconstructionReport) -> None:
        if is_shell(command):
            return
        executable = self.resolver.resolve(command)
        if executable is None:
            return
        try:
            pane.send_text(executable + "\n")
        except HostError as exc:
            logger.error("Failed to send command '%s': %s", executable, exc)
            report.failures.append(f"command {executable}: {exc}")
            return
        report.commands_sent.append(executable)
