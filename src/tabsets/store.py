"""Tabset persistence: one JSON file per named record."""

from __future__ import annotations

import json
import logging as py_logging
import os
import tempfile
from pathlib import Path

from tabsets.errors import (
    StoreUnavailableError,
    TabsetExistsError,
    TabsetIOError,
    TabsetNotFoundError,
    TabsetParseError,
)
from tabsets.models import Snapshot, parse_snapshot
from tabsets.names import is_valid_tabset_name, validate_tabset_name

logger = py_logging.getLogger(__name__)

TABSET_SUFFIX = ".tabset.json"


class TabsetStore:
    """Maps tabset names to ``{directory}/{name}.tabset.json`` files.

    The directory is the only source of truth; nothing is cached between calls.
    """

    def __init__(self, directory: str | Path) -> None:
        self.directory = Path(directory).expanduser()

    def path_for(self, name: str) -> Path:
        return self.directory / f"{name}{TABSET_SUFFIX}"

    def ensure_directory(self) -> bool:
        if self.directory.is_dir():
            return False
        try:
            self.directory.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            logger.error("Failed to create tabsets directory '%s': %s", self.directory, exc)
            raise TabsetIOError(
                f"Failed to create tabsets directory '{self.directory}'",
                hint="Check permissions or set tabsets_dir in the config file.",
            ) from exc
        logger.info("Created tabsets directory '%s'", self.directory)
        return True

    def exists(self, name: str) -> bool:
        return self.path_for(validate_tabset_name(name)).exists()

    def save(self, snapshot: Snapshot, name: str) -> Path:
        path = self.path_for(validate_tabset_name(name))
        payload = json.dumps(snapshot.to_dict(), ensure_ascii=False, indent=2) + "\n"

        try:
            fd, temp_path = tempfile.mkstemp(
                prefix=".tabset_", suffix=".tmp", dir=self.directory
            )
        except OSError as exc:
            logger.error("Failed to write tabset file '%s': %s", path, exc)
            raise TabsetIOError(f"Unable to save '{path}'") from exc

        try:
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                handle.write(payload)
            os.replace(temp_path, path)
        except OSError as exc:
            if os.path.exists(temp_path):
                os.unlink(temp_path)
            logger.error("Failed to write tabset file '%s': %s", path, exc)
            raise TabsetIOError(f"Unable to save '{path}'") from exc

        logger.debug("Saved tabset name=%s tabs=%s path=%s", name, len(snapshot.tabs), path)
        return path

    def load(self, name: str) -> Snapshot:
        path = self.path_for(validate_tabset_name(name))
        try:
            content = path.read_text(encoding="utf-8")
        except FileNotFoundError as exc:
            logger.error("Failed to open file '%s'", path)
            raise TabsetNotFoundError(f"Tabset file not found '{path}'") from exc
        except (OSError, UnicodeDecodeError) as exc:
            logger.error("Failed to read file '%s': %s", path, exc)
            raise TabsetIOError(f"Unable to read '{path}'") from exc

        try:
            raw = json.loads(content)
        except json.JSONDecodeError as exc:
            logger.error("Failed to parse JSON data from tabset file '%s': %s", path, exc)
            raise TabsetParseError(f"Failed to parse tabset file '{path}'") from exc

        try:
            return parse_snapshot(raw)
        except TabsetParseError as exc:
            logger.error("Invalid tabset data in '%s': %s", path, exc.message)
            raise TabsetParseError(
                f"Failed to parse tabset file '{path}'", hint=exc.message
            ) from exc

    def list(self) -> list[str]:
        try:
            entries = list(self.directory.iterdir())
        except OSError as exc:
            logger.error("Could not read tabsets directory '%s': %s", self.directory, exc)
            raise StoreUnavailableError(
                f"Could not read tabsets directory '{self.directory}'"
            ) from exc

        names: list[str] = []
        for entry in entries:
            if not entry.name.endswith(TABSET_SUFFIX) or not entry.is_file():
                continue
            name = entry.name[: -len(TABSET_SUFFIX)]
            if not is_valid_tabset_name(name):
                logger.debug("Skipping tabset file with unusable name: %s", entry.name)
                continue
            names.append(name)
        return sorted(names)

    def delete(self, name: str) -> None:
        path = self.path_for(validate_tabset_name(name))
        try:
            path.unlink()
        except FileNotFoundError as exc:
            raise TabsetNotFoundError(f"Tabset '{name}' does not exist") from exc
        except OSError as exc:
            logger.error("Failed to delete '%s': %s", path, exc)
            raise TabsetIOError(f"Unable to delete tabsets file '{path}'") from exc
        logger.debug("Deleted tabset file '%s'", path)

    def rename(self, old_name: str, new_name: str) -> None:
        old_path = self.path_for(validate_tabset_name(old_name))
        new_path = self.path_for(validate_tabset_name(new_name))
        if new_path.exists():
            raise TabsetExistsError(f"Tabset '{new_name}' already exists")
        if not old_path.is_file():
            raise TabsetNotFoundError(f"Tabset '{old_name}' does not exist")
        try:
            os.rename(old_path, new_path)
        except OSError as exc:
            logger.error("Failed to rename '%s' to '%s': %s", old_path, new_path, exc)
            raise TabsetIOError(f"Unable to rename '{old_path}' to '{new_path}'") from exc
        logger.debug("Renamed tabset file '%s' -> '%s'", old_path, new_path)
