"""Public CLI contract and entrypoint."""

from __future__ import annotations

import argparse
import logging as py_logging
import sys
from collections.abc import Callable, Sequence
from pathlib import Path
from typing import TextIO

from .config import load_config
from .errors import ExitCode, TabsetError, user_facing_error
from .host import HostWindow, current_window
from .logging import configure_logging, default_log_path
from .prompts import Outcome, Prompt, PromptKind, Step
from .selector import filter_and_rank
from .service import TabsetService

_VALID_LOG_LEVELS = ("DEBUG", "INFO", "WARN", "ERROR")
_COMMANDS = ("save", "load", "delete", "rename", "list")

InputFn = Callable[[str], str]
WindowFactory = Callable[[str | None], HostWindow]


def _log_level_type(value: str) -> str:
    normalized = value.upper()
    if normalized == "WARNING":
        normalized = "WARN"
    if normalized not in _VALID_LOG_LEVELS:
        accepted = ", ".join(_VALID_LOG_LEVELS)
        raise argparse.ArgumentTypeError(f"--log-level must be one of: {accepted}")
    return normalized


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="tabsets",
        description="Save and restore tmux tab/pane layouts.",
    )
    parser.add_argument("--config", type=Path, default=None, help="Config file path")
    parser.add_argument(
        "--target",
        default=None,
        help="tmux session to operate on (defaults to the attached session)",
    )
    parser.add_argument("--log-level", type=_log_level_type, default=None)
    parser.add_argument("--log-file", type=Path, default=None)
    parser.add_argument("command", choices=_COMMANDS)
    parser.add_argument("names", nargs="*", metavar="NAME")
    return parser


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = build_parser()
    return parser.parse_args(argv)


def _read(input_fn: InputFn, label: str) -> str | None:
    try:
        answer = input_fn(label).strip()
    except (EOFError, KeyboardInterrupt):
        return None
    return answer or None


def _pick_numbered(
    choices: Sequence[str], input_fn: InputFn, output: TextIO, label: str
) -> str | None:
    for index, choice in enumerate(choices, start=1):
        print(f"{index:>3}) {choice}", file=output)
    answer = _read(input_fn, label)
    if answer is None:
        return None
    if answer in choices:
        return answer
    if answer.isdigit() and 1 <= int(answer) <= len(choices):
        return choices[int(answer) - 1]
    print(f"Invalid selection: {answer}", file=output)
    return None


def ask(prompt: Prompt, input_fn: InputFn, output: TextIO) -> str | None:
    """Answer ``prompt`` from the terminal; ``None`` means the user cancelled."""
    if prompt.kind is PromptKind.TEXT:
        return _read(input_fn, f"{prompt.description} ")

    print(prompt.description, file=output)
    choices = list(prompt.choices)
    if not prompt.fuzzy:
        return _pick_numbered(choices, input_fn, output, "Number: ")

    query = _read(input_fn, "Search: ")
    if query is None:
        return None
    if query in choices:
        return query
    matches = filter_and_rank(choices, query)
    if not matches:
        print(f"No tabset matches '{query}'", file=output)
        return None
    if len(matches) == 1:
        return matches[0]
    return _pick_numbered(matches, input_fn, output, "Number: ")


def drive(step: Step, input_fn: InputFn, output: TextIO) -> Outcome | None:
    """Resolve prompts until an outcome is reached, or ``None`` on cancel."""
    current: Step | None = step
    while isinstance(current, Prompt):
        current = current.resume(ask(current, input_fn, output))
    return current


def _rename_step(service: TabsetService, window: HostWindow, names: list[str]) -> Step:
    if len(names) >= 2:
        return service.rename(window, names[0], names[1])
    if names:
        old_name = names[0]
        return Prompt(
            kind=PromptKind.TEXT,
            description="Enter new tabset name:",
            continuation=lambda new_name: service.rename(window, old_name, new_name),
        )
    return service.choose_and_rename(window)


def run_command(
    namespace: argparse.Namespace,
    service: TabsetService,
    window: HostWindow,
    *,
    input_fn: InputFn,
    output: TextIO,
) -> int:
    names = list(namespace.names)
    command = namespace.command
    if command == "list":
        for name in service.list_names(window):
            print(name, file=output)
        return int(ExitCode.SUCCESS)

    if command == "save":
        step: Step = service.save_as(window, names[0]) if names else service.save(window)
    elif command == "load":
        step = service.load(window, names[0]) if names else service.choose_and_load(window)
    elif command == "delete":
        step = service.delete(window, names[0]) if names else service.choose_and_delete(window)
    else:
        step = _rename_step(service, window, names)

    outcome = drive(step, input_fn, output)
    if outcome is None:
        print("Cancelled.", file=output)
        return int(ExitCode.SUCCESS)
    if outcome.ok:
        print(outcome.message, file=output)
    else:
        print(user_facing_error(outcome.message.rstrip(".")), file=sys.stderr)
    return int(outcome.code)


def main(
    argv: Sequence[str] | None = None,
    *,
    window_factory: WindowFactory | None = None,
    input_fn: InputFn = input,
    output: TextIO | None = None,
) -> int:
    log_path = default_log_path()
    logger = configure_logging(log_file=log_path)
    parser = build_parser()
    try:
        namespace = parser.parse_args(argv)
    except SystemExit as exc:
        if exc.code not in (None, 0):
            logger.warning("Argument parsing failed with exit code %s", exc.code)
        return int(exc.code or 0)

    if namespace.log_file is not None:
        log_path = namespace.log_file.expanduser()
    logger = configure_logging(level=namespace.log_level or "INFO", log_file=log_path)

    stream = output or sys.stdout
    try:
        config = load_config(namespace.config, required=namespace.config is not None)
        if namespace.log_level is None:
            logger = configure_logging(level=config.log_level, log_file=log_path)
        service = TabsetService(config)
        service.store.ensure_directory()
        factory = window_factory or current_window
        logger.debug("Running command=%s names=%s", namespace.command, namespace.names)
        window = factory(namespace.target)
        return run_command(namespace, service, window, input_fn=input_fn, output=stream)
    except TabsetError as exc:
        logger.error(
            "Handled TabsetError (code=%s): %s",
            int(exc.code),
            exc.message,
            exc_info=logger.isEnabledFor(py_logging.DEBUG),
        )
        print(user_facing_error(exc.message, hint=exc.hint), file=sys.stderr)
        return int(exc.code)
    except Exception:
        logger.exception("Unhandled exception in CLI entrypoint")
        hint = f"Inspect logs: {log_path}"
        print(user_facing_error("Unexpected runtime failure", hint=hint), file=sys.stderr)
        return int(ExitCode.RUNTIME_ERROR)


def run(argv: Sequence[str] | None = None) -> int:
    return main(argv)
