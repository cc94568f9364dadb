"""Read a live host window into a :class:`~tabsets.models.Snapshot`."""

from __future__ import annotations

import logging as py_logging

from tabsets.host.protocol import HostWindow
from tabsets.models import PaneRecord, Snapshot, TabRecord

logger = py_logging.getLogger(__name__)


def capture_snapshot(window: HostWindow) -> Snapshot:
    """Capture dimensions, colors, tab titles and per-pane cwd/command.

    Never mutates the window. Host failures propagate to the caller.
    """
    dims = window.get_dimensions()
    colors = dict(window.get_colors() or {})

    tabs: list[TabRecord] = []
    for tab in window.tabs():
        panes = tuple(
            PaneRecord(
                left=int(info.left),
                cwd=str(info.pane.get_current_working_dir()),
                exe=str(info.pane.get_foreground_process_name()),
            )
            for info in tab.panes_with_info()
        )
        tabs.append(TabRecord(title=tab.get_title(), panes=panes))

    logger.debug(
        "Captured window width=%s height=%s tabs=%s panes=%s",
        dims.pixel_width,
        dims.pixel_height,
        len(tabs),
        sum(len(tab.panes) for tab in tabs),
    )
    return Snapshot(
        window_width=dims.pixel_width,
        window_height=dims.pixel_height,
        colors=colors,
        tabs=tuple(tabs),
    )
