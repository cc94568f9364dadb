"""Tabset snapshot domain models and their JSON-compatible codec."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from tabsets.errors import TabsetParseError


@dataclass(frozen=True)
class PaneRecord:
    left: int
    cwd: str
    exe: str


@dataclass(frozen=True)
class TabRecord:
    title: str
    panes: tuple[PaneRecord, ...]


@dataclass(frozen=True)
class Snapshot:
    window_width: int
    window_height: int
    tabs: tuple[TabRecord, ...]
    colors: Mapping[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, object]:
        return {
            "window_width": self.window_width,
            "window_height": self.window_height,
            "colors": dict(self.colors),
            "tabs": [
                {
                    "title": tab.title,
                    "panes": [
                        {"left": pane.left, "cwd": pane.cwd, "exe": pane.exe}
                        for pane in tab.panes
                    ],
                }
                for tab in self.tabs
            ],
        }


def _require_int(raw: Mapping[str, Any], key: str, where: str) -> int:
    value = raw.get(key)
    if isinstance(value, bool) or not isinstance(value, int):
        raise TabsetParseError(f"Field '{key}' in {where} must be an integer")
    return value


def _require_str(raw: Mapping[str, Any], key: str, where: str) -> str:
    value = raw.get(key)
    if not isinstance(value, str):
        raise TabsetParseError(f"Field '{key}' in {where} must be a string")
    return value


def _require_list(raw: Mapping[str, Any], key: str, where: str) -> list[Any]:
    value = raw.get(key)
    if not isinstance(value, list):
        raise TabsetParseError(f"Field '{key}' in {where} must be a list")
    return value


def _parse_pane(raw: Any, where: str) -> PaneRecord:
    if not isinstance(raw, dict):
        raise TabsetParseError(f"{where} must be an object")
    return PaneRecord(
        left=_require_int(raw, "left", where),
        cwd=_require_str(raw, "cwd", where),
        exe=_require_str(raw, "exe", where),
    )


def _parse_tab(raw: Any, where: str) -> TabRecord:
    if not isinstance(raw, dict):
        raise TabsetParseError(f"{where} must be an object")
    panes = _require_list(raw, "panes", where)
    return TabRecord(
        title=_require_str(raw, "title", where),
        panes=tuple(
            _parse_pane(item, f"{where} pane {index}") for index, item in enumerate(panes, start=1)
        ),
    )


def parse_snapshot(raw: Any) -> Snapshot:
    """Build a :class:`Snapshot` from decoded JSON.

    Empty ``tabs`` or ``panes`` lists are accepted here; rejecting them is the
    reconstructor's job.
    """
    if not isinstance(raw, dict):
        raise TabsetParseError("Tabset data must be a JSON object")

    colors = raw.get("colors")
    if colors is None:
        colors = {}
    elif not isinstance(colors, dict):
        raise TabsetParseError("Field 'colors' must be an object")

    tabs = _require_list(raw, "tabs", "tabset")
    return Snapshot(
        window_width=_require_int(raw, "window_width", "tabset"),
        window_height=_require_int(raw, "window_height", "tabset"),
        colors=colors,
        tabs=tuple(_parse_tab(item, f"tab {index}") for index, item in enumerate(tabs, start=1)),
    )
