from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import pytest

from tabsets.errors import HostError
from tabsets.host.protocol import PaneInfo, SplitDirection, WindowDimensions

_CRITICAL_TEST_FILES = {
    "test_reconstruct.py",
    "test_store.py",
}


@pytest.hookimpl(trylast=True)
def pytest_collection_modifyitems(config: pytest.Config, items: list[pytest.Item]) -> None:
    del config
    for item in items:
        path = Path(str(getattr(item, "path", item.fspath)))
        name = path.name

        if "integration" in path.parts:
            item.add_marker(pytest.mark.integration)
            item.add_marker(pytest.mark.slow)

        if name in _CRITICAL_TEST_FILES:
            item.add_marker(pytest.mark.critical_regression)


@dataclass(eq=False)
class FakePane:
    cwd: str = "/home/u"
    exe: str = "bash"
    left: int = 0
    tab: FakeTab | None = field(default=None, repr=False)
    sent: list[str] = field(default_factory=list)
    fail_split: bool = False
    fail_send: bool = False

    def get_current_working_dir(self) -> str:
        return self.cwd

    def get_foreground_process_name(self) -> str:
        return self.exe

    def send_text(self, text: str) -> None:
        if self.fail_send:
            raise HostError("send-keys failed")
        self.sent.append(text)
        if text.rstrip("\r\n") == "exit":
            self._exit()

    def _exit(self) -> None:
        assert self.tab is not None
        self.tab.pane_list.remove(self)
        if not self.tab.pane_list and self.tab.window is not None:
            self.tab.window.tab_list.remove(self.tab)

    def activate(self) -> None:
        assert self.tab is not None
        self.tab.active = self

    def split(self, direction: SplitDirection, cwd: str) -> FakePane:
        if self.fail_split:
            raise HostError("split-window failed")
        assert self.tab is not None
        left = self.left + 40 if direction is SplitDirection.RIGHT else self.left
        pane = FakePane(cwd=cwd, exe="bash", left=left, tab=self.tab)
        self.tab.splits.append((direction, cwd))
        self.tab.pane_list.append(pane)
        self.tab.active = pane
        return pane


@dataclass(eq=False)
class FakeTab:
    title: str = "bash"
    pane_list: list[FakePane] = field(default_factory=list)
    active: FakePane | None = field(default=None, repr=False)
    splits: list[tuple[SplitDirection, str]] = field(default_factory=list)
    activated: int = 0
    window: FakeWindow | None = field(default=None, repr=False)
    fail_title: bool = False

    @classmethod
    def with_panes(cls, title: str, *panes: FakePane) -> FakeTab:
        tab = cls(title=title)
        for pane in panes:
            pane.tab = tab
            tab.pane_list.append(pane)
        tab.active = tab.pane_list[0] if tab.pane_list else None
        return tab

    def get_title(self) -> str:
        return self.title

    def set_title(self, title: str) -> None:
        if self.fail_title:
            raise HostError("rename-window failed")
        self.title = title

    def activate(self) -> None:
        self.activated += 1

    def panes(self) -> list[FakePane]:
        return list(self.pane_list)

    def panes_with_info(self) -> list[PaneInfo]:
        return [PaneInfo(pane=pane, left=pane.left) for pane in self.pane_list]

    def active_pane(self) -> FakePane:
        assert self.active is not None
        return self.active


@dataclass(eq=False)
class FakeWindow:
    width: int = 1200
    height: int = 800
    colors: dict[str, Any] = field(default_factory=dict)
    tab_list: list[FakeTab] = field(default_factory=list)
    toasts: list[tuple[str, str]] = field(default_factory=list)
    set_colors_calls: list[Mapping[str, Any]] = field(default_factory=list)
    resize_calls: list[tuple[int, int]] = field(default_factory=list)
    spawned_cwds: list[str] = field(default_factory=list)
    fail_spawn_after: int | None = None
    spawned_exe: str = "bash"

    def __post_init__(self) -> None:
        for tab in self.tab_list:
            tab.window = self

    @classmethod
    def single_shell(cls, exe: str = "bash") -> FakeWindow:
        return cls(tab_list=[FakeTab.with_panes("shell", FakePane(exe=exe))])

    def get_dimensions(self) -> WindowDimensions:
        return WindowDimensions(pixel_width=self.width, pixel_height=self.height)

    def get_colors(self) -> dict[str, Any]:
        return dict(self.colors)

    def set_colors(self, colors: Mapping[str, Any]) -> None:
        self.set_colors_calls.append(dict(colors))
        self.colors = dict(colors)

    def set_inner_size(self, width: int, height: int) -> None:
        self.resize_calls.append((width, height))
        self.width, self.height = width, height

    def tabs(self) -> list[FakeTab]:
        return list(self.tab_list)

    def active_pane(self) -> FakePane:
        return self.tab_list[0].active_pane()

    def spawn_tab(self, cwd: str) -> FakeTab:
        if not self.tab_list:
            raise HostError("no server running")
        if self.fail_spawn_after is not None and len(self.spawned_cwds) >= self.fail_spawn_after:
            raise HostError("new-window failed")
        self.spawned_cwds.append(cwd)
        tab = FakeTab.with_panes(self.spawned_exe, FakePane(cwd=cwd, exe=self.spawned_exe))
        tab.window = self
        self.tab_list.append(tab)
        return tab

    def toast(self, title: str, message: str) -> None:
        self.toasts.append((title, message))


@dataclass
class RecordingNotifier:
    messages: list[tuple[str, bool]] = field(default_factory=list)

    def notify(self, window: object, message: str, *, error: bool = False) -> None:
        del window
        self.messages.append((message, error))


@pytest.fixture
def fake_window() -> FakeWindow:
    return FakeWindow.single_shell()


@pytest.fixture
def notifier() -> RecordingNotifier:
    return RecordingNotifier()
