from __future__ import annotations

import pytest

from tabsets.errors import TabsetParseError
from tabsets.models import PaneRecord, Snapshot, TabRecord, parse_snapshot


def _raw() -> dict[str, object]:
    return {
        "window_width": 1200,
        "window_height": 800,
        "colors": {"window-style": "bg=black"},
        "tabs": [
            {
                "title": "dev",
                "panes": [
                    {"left": 0, "cwd": "/home/u/p", "exe": "bash"},
                    {"left": 40, "cwd": "/home/u/p", "exe": "top"},
                ],
            }
        ],
    }


def test_parse_snapshot_builds_records() -> None:
    snapshot = parse_snapshot(_raw())

    assert snapshot.window_width == 1200
    assert snapshot.colors == {"window-style": "bg=black"}
    assert snapshot.tabs == (
        TabRecord(
            title="dev",
            panes=(
                PaneRecord(left=0, cwd="/home/u/p", exe="bash"),
                PaneRecord(left=40, cwd="/home/u/p", exe="top"),
            ),
        ),
    )


def test_to_dict_matches_file_layout() -> None:
    assert parse_snapshot(_raw()).to_dict() == _raw()


def test_missing_or_null_colors_read_as_empty() -> None:
    raw = _raw()
    raw["colors"] = None
    assert parse_snapshot(raw).colors == {}

    del raw["colors"]
    assert parse_snapshot(raw).colors == {}


def test_empty_tabs_and_panes_are_parsed() -> None:
    assert parse_snapshot({"window_width": 1, "window_height": 1, "tabs": []}).tabs == ()

    raw = _raw()
    raw["tabs"] = [{"title": "x", "panes": []}]
    assert parse_snapshot(raw).tabs[0].panes == ()


@pytest.mark.parametrize(
    "mutate",
    [
        lambda raw: raw.pop("window_width"),
        lambda raw: raw.update(window_height="800"),
        lambda raw: raw.update(window_width=True),
        lambda raw: raw.update(colors=["red"]),
        lambda raw: raw.update(tabs={"title": "x"}),
        lambda raw: raw["tabs"][0].pop("title"),
        lambda raw: raw["tabs"][0]["panes"].append("pane"),
        lambda raw: raw["tabs"][0]["panes"][0].update(left=1.5),
        lambda raw: raw["tabs"][0]["panes"][0].update(exe=None),
    ],
)
def test_structural_errors_raise_parse_error(mutate) -> None:
    raw = _raw()
    mutate(raw)

    with pytest.raises(TabsetParseError):
        parse_snapshot(raw)


def test_non_object_root_raises_parse_error() -> None:
    with pytest.raises(TabsetParseError):
        parse_snapshot([1, 2, 3])


def test_snapshot_defaults_to_empty_colors() -> None:
    snapshot = Snapshot(window_width=1, window_height=2, tabs=())

    assert snapshot.to_dict() == {"window_width": 1, "window_height": 2, "colors": {}, "tabs": []}
