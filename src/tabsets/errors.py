"""Deterministic error model and exit code contract."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum


class ExitCode(IntEnum):
    SUCCESS = 0
    INVALID_ARGS = 2
    CONFIG_ERROR = 3
    RUNTIME_ERROR = 4
    STORE_ERROR = 5
    HOST_ERROR = 6
    VALIDATION_ERROR = 7
    NOT_FOUND = 8
    PARSE_ERROR = 9


@dataclass
class TabsetError(Exception):
    message: str
    code: ExitCode = ExitCode.RUNTIME_ERROR
    hint: str = ""

    def __str__(self) -> str:
        if self.hint:
            return f"{self.message} Hint: {self.hint}"
        return self.message


@dataclass
class ConfigError(TabsetError):
    code: ExitCode = ExitCode.CONFIG_ERROR


@dataclass
class TabsetNameError(TabsetError):
    code: ExitCode = ExitCode.VALIDATION_ERROR


@dataclass
class TabsetNotFoundError(TabsetError):
    code: ExitCode = ExitCode.NOT_FOUND


@dataclass
class TabsetParseError(TabsetError):
    code: ExitCode = ExitCode.PARSE_ERROR


@dataclass
class TabsetIOError(TabsetError):
    code: ExitCode = ExitCode.STORE_ERROR


@dataclass
class TabsetExistsError(TabsetError):
    code: ExitCode = ExitCode.STORE_ERROR


@dataclass
class StoreUnavailableError(TabsetError):
    code: ExitCode = ExitCode.STORE_ERROR


@dataclass
class InvalidSnapshotError(TabsetError):
    code: ExitCode = ExitCode.VALIDATION_ERROR


@dataclass
class HostError(TabsetError):
    code: ExitCode = ExitCode.HOST_ERROR


@dataclass
class PromptClosedError(TabsetError):
    code: ExitCode = ExitCode.RUNTIME_ERROR


def user_facing_error(message: str, *, hint: str = "") -> str:
    if hint:
        return f"Error: {message}. Next step: {hint}"
    return f"Error: {message}."
