"""Save, load, delete and rename tabsets against a host window."""

from __future__ import annotations

import logging as py_logging
from collections.abc import Callable

from tabsets.capture import capture_snapshot
from tabsets.config import AppConfig
from tabsets.errors import ExitCode, TabsetError
from tabsets.host.protocol import HostWindow
from tabsets.models import Snapshot
from tabsets.names import is_valid_tabset_name
from tabsets.notify import Notifier
from tabsets.prompts import Outcome, Prompt, PromptKind, Step
from tabsets.reconstruct import LayoutReconstructor
from tabsets.store import TabsetStore

logger = py_logging.getLogger(__name__)


class TabsetService:
    """Each public call mutates the store at most once and reports one outcome."""

    def __init__(
        self,
        config: AppConfig,
        *,
        store: TabsetStore | None = None,
        reconstructor: LayoutReconstructor | None = None,
        notifier: Notifier | None = None,
    ) -> None:
        self.config = config
        self.store = store or TabsetStore(config.tabsets_dir)
        self.reconstructor = reconstructor or LayoutReconstructor(config)
        self.notifier = notifier or Notifier()

    def save(self, window: HostWindow) -> Step:
        """Capture now, then ask for the name to store the capture under."""
        try:
            snapshot = capture_snapshot(window)
        except TabsetError as exc:
            return self._failed(window, f"Unable to read window layout: {exc.message}", exc.code)

        return Prompt(
            kind=PromptKind.TEXT,
            description="Enter tabset name:",
            continuation=lambda name: self.save_as(window, name, snapshot=snapshot),
        )

    def save_as(
        self, window: HostWindow, name: str, *, snapshot: Snapshot | None = None
    ) -> Outcome:
        if not is_valid_tabset_name(name):
            return self._invalid_name(window, name)
        try:
            data = snapshot if snapshot is not None else capture_snapshot(window)
            self.store.save(data, name)
        except TabsetError as exc:
            return self._failed(window, exc.message, exc.code)
        return self._succeeded(window, f"Tabset '{name}' saved successfully.")

    def load(self, window: HostWindow, name: str) -> Outcome:
        if not is_valid_tabset_name(name):
            return self._invalid_name(window, name)
        try:
            snapshot = self.store.load(name)
        except TabsetError as exc:
            return self._failed(window, exc.message, exc.code)

        try:
            report = self.reconstructor.reconstruct(window, snapshot)
        except TabsetError as exc:
            logger.error("Tabset loading failed name=%s: %s", name, exc)
            return self._failed(window, f"Tabset loading failed '{name}'.", exc.code)

        if report.tabs_created == 0:
            logger.error("Tabset loading failed name=%s: %s", name, report.failures)
            return self._failed(window, f"Tabset loading failed '{name}'.", ExitCode.HOST_ERROR)
        if report.partial:
            logger.warning("Tabset '%s' loaded with %s failure(s)", name, len(report.failures))
        return self._succeeded(window, f"Tabset loaded '{name}'.")

    def delete(self, window: HostWindow, name: str) -> Outcome:
        try:
            self.store.delete(name)
        except TabsetError as exc:
            return self._failed(window, exc.message, exc.code)
        return self._succeeded(window, f"Deleted tabset '{name}'.")

    def rename(self, window: HostWindow, old_name: str, new_name: str) -> Outcome:
        if not is_valid_tabset_name(new_name):
            return self._invalid_name(window, new_name)
        try:
            self.store.rename(old_name, new_name)
        except TabsetError as exc:
            return self._failed(window, exc.message, exc.code)
        return self._succeeded(
            window, f"Tabset '{old_name}' successfully renamed to '{new_name}'."
        )

    def list_names(self, window: HostWindow) -> list[str]:
        try:
            return self.store.list()
        except TabsetError as exc:
            self._failed(window, exc.message, exc.code)
            return []

    def choose_and_load(self, window: HostWindow) -> Step:
        return self._choose(
            window,
            "Select tabset to load:",
            lambda name: self.load(window, name),
        )

    def choose_and_delete(self, window: HostWindow) -> Step:
        return self._choose(
            window,
            "Select tabset to delete:",
            lambda name: self.delete(window, name),
        )

    def choose_and_rename(self, window: HostWindow) -> Step:
        def ask_new_name(old_name: str) -> Step:
            return Prompt(
                kind=PromptKind.TEXT,
                description="Enter new tabset name:",
                continuation=lambda new_name: self.rename(window, old_name, new_name),
            )

        return self._choose(window, "Select tabset to rename:", ask_new_name)

    def _choose(
        self,
        window: HostWindow,
        description: str,
        continuation: Callable[[str], Step],
    ) -> Step:
        try:
            names = self.store.list()
        except TabsetError as exc:
            return self._failed(window, exc.message, exc.code)
        if not names:
            return self._succeeded(window, "No saved tabsets found.")
        return Prompt(
            kind=PromptKind.SELECT,
            description=description,
            continuation=continuation,
            choices=tuple(names),
            fuzzy=self.config.fuzzy_selector,
        )

    def _succeeded(self, window: HostWindow, message: str) -> Outcome:
        self.notifier.notify(window, message)
        return Outcome(ok=True, message=message)

    def _failed(self, window: HostWindow, message: str, code: ExitCode) -> Outcome:
        self.notifier.notify(window, message, error=True)
        return Outcome(ok=False, message=message, code=code)

    def _invalid_name(self, window: HostWindow, name: str) -> Outcome:
        return self._failed(
            window, f"Invalid tabset name '{name}'.", ExitCode.VALIDATION_ERROR
        )
