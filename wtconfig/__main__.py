"""
Module entrypoint for the wtconfig CLI.

This file exists so that `python -m wtconfig ...` works consistently in all
environments, including when the console-script wrapper is not installed.

Notes
-----
This module contains no business logic. It delegates to the CLI module.
"""

from __future__ import annotations

from wtconfig.cli import main


def _run() -> None:
    """
    Execute the wtconfig command line interface.

    Raises
    ------
    SystemExit
        Carries the CLI exit code.
    """
    raise SystemExit(main())


if __name__ == "__main__":
    _run()
