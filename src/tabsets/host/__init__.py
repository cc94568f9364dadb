"""Host terminal capability interface and adapters."""

from .protocol import HostPane, HostTab, HostWindow, PaneInfo, SplitDirection, WindowDimensions
from .tmux import TmuxPane, TmuxTab, TmuxWindow, current_window

__all__ = [
    "current_window",
    "HostPane",
    "HostTab",
    "HostWindow",
    "PaneInfo",
    "SplitDirection",
    "TmuxPane",
    "TmuxTab",
    "TmuxWindow",
    "WindowDimensions",
]
