"""Module entrypoint for `python -m tabsets`."""

from tabsets.cli import run

if __name__ == "__main__":
    raise SystemExit(run())
