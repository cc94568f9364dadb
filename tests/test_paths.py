from __future__ import annotations

import pytest

from tabsets.paths import PathStyle, basename, is_shell, uri_to_path


@pytest.mark.parametrize(
    ("path", "expected"),
    [
        ("/usr/bin/zsh", "zsh"),
        ("C:\\Windows\\System32\\cmd.exe", "cmd.exe"),
        ("vim", "vim"),
        ("", ""),
    ],
)
def test_basename_splits_both_separators(path: str, expected: str) -> None:
    assert basename(path) == expected


@pytest.mark.parametrize("command", ["bash", "/bin/zsh", "/usr/local/bin/fish", "nu", "-zsh"])
def test_shells_are_detected(command: str) -> None:
    assert is_shell(command)


@pytest.mark.parametrize("command", ["vim", "top", "/usr/bin/htop", "bashtop", ""])
def test_non_shells_are_not_detected(command: str) -> None:
    assert not is_shell(command)


def test_file_uri_with_host_becomes_local_path() -> None:
    assert uri_to_path("file://myhost/home/u/x") == "/home/u/x"


def test_file_uri_is_percent_decoded() -> None:
    assert uri_to_path("file:///home/u/my%20dir") == "/home/u/my dir"


def test_plain_path_is_returned_unchanged() -> None:
    assert uri_to_path("/srv/app") == "/srv/app"


def test_windows_style_drops_leading_slash_before_drive() -> None:
    assert uri_to_path("file:///C:/work", style=PathStyle.WINDOWS) == "C:/work"


def test_posix_style_keeps_leading_slash_before_drive() -> None:
    assert uri_to_path("file:///C:/work") == "/C:/work"


def test_file_uri_without_path_maps_to_root() -> None:
    assert uri_to_path("file://host") == "/"
