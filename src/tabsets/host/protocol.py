from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from enum import Enum
from typing import Any, Protocol


class SplitDirection(str, Enum):
    RIGHT = "right"
    BOTTOM = "bottom"


@dataclass(frozen=True)
class WindowDimensions:
    pixel_width: int
    pixel_height: int
    is_full_screen: bool = False


@dataclass(frozen=True)
class PaneInfo:
    pane: "HostPane"
    left: int


class HostPane(Protocol):
    def get_current_working_dir(self) -> str: ...

    def get_foreground_process_name(self) -> str: ...

    def send_text(self, text: str) -> None: ...

    def activate(self) -> None: ...

    def split(self, direction: SplitDirection, cwd: str) -> "HostPane": ...


class HostTab(Protocol):
    def get_title(self) -> str: ...

    def set_title(self, title: str) -> None: ...

    def activate(self) -> None: ...

    def panes(self) -> Sequence[HostPane]: ...

    def panes_with_info(self) -> Sequence[PaneInfo]: ...

    def active_pane(self) -> HostPane: ...


class HostWindow(Protocol):
    def get_dimensions(self) -> WindowDimensions: ...

    def get_colors(self) -> Mapping[str, Any]: ...

    def set_colors(self, colors: Mapping[str, Any]) -> None: ...

    def set_inner_size(self, width: int, height: int) -> None: ...

    def tabs(self) -> Sequence[HostTab]: ...

    def active_pane(self) -> HostPane: ...

    def spawn_tab(self, cwd: str) -> HostTab: ...

    def toast(self, title: str, message: str) -> None: ...
