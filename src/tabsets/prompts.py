"""User prompts as request/continuation pairs.

An operation that needs user input returns a :class:`Prompt` instead of
blocking. Whatever UI shows it later calls :meth:`Prompt.resume` with the
answer, or :meth:`Prompt.cancel`, which drops the operation.
"""

from __future__ import annotations

import logging as py_logging
from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum
from typing import Union

from tabsets.errors import ExitCode, PromptClosedError

logger = py_logging.getLogger(__name__)


class PromptKind(str, Enum):
    SELECT = "select"
    TEXT = "text"


@dataclass(frozen=True)
class Outcome:
    ok: bool
    message: str
    code: ExitCode = ExitCode.SUCCESS


Step = Union[Outcome, "Prompt"]


@dataclass
class Prompt:
    kind: PromptKind
    description: str
    continuation: Callable[[str], Step] = field(repr=False)
    choices: tuple[str, ...] = ()
    fuzzy: bool = False
    _closed: bool = field(default=False, init=False, repr=False)

    @property
    def closed(self) -> bool:
        return self._closed

    def resume(self, answer: str | None) -> Step | None:
        if self._closed:
            raise PromptClosedError(f"Prompt already answered: {self.description}")
        self._closed = True
        if answer is None:
            logger.debug("Prompt cancelled: %s", self.description)
            return None
        return self.continuation(answer)

    def cancel(self) -> None:
        self.resume(None)
