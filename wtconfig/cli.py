"""
Command-line interface for wtconfig.

Notes
-----
The CLI is intentionally thin. It parses arguments, opens a store and
delegates to engine modules. Domain and I/O errors are reported as
``ERROR: ...`` with exit code 2.
"""

from __future__ import annotations

import argparse
import logging
from pathlib import Path

from config_engine.codecs import color_to_hex
from config_engine.errors import ConfigEngineError
from config_engine.languages import Language, default_registry
from config_engine.paths import default_config_path
from config_engine.store import DEFAULT_PROFILE_LABEL, ConfigStore, open_config_store

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def _add_common_options(parser: argparse.ArgumentParser, *, with_language: bool = True) -> None:
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Configuration file. If omitted, the default location is used.",
    )
    if with_language:
        parser.add_argument(
            "--language",
            default=None,
            help="Document language code, for example en_US. Selects language-specific rule settings.",
        )


def build_parser() -> argparse.ArgumentParser:
    """
    Build and return the top-level argument parser.

    Returns
    -------
    argparse.ArgumentParser
        Configured parser.
    """
    parser = argparse.ArgumentParser(
        prog="wtconfig",
        description="Inspect and exchange writing tool configuration profiles",
    )
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    sub = parser.add_subparsers(dest="command", required=True)

    show_p = sub.add_parser("show", help="Print the non-default settings of a profile")
    _add_common_options(show_p)
    show_p.add_argument("--profile", default=None, help="Profile to show (default: the stored current profile)")

    profiles_p = sub.add_parser("profiles", help="List defined profiles; the current one is marked with '*'")
    _add_common_options(profiles_p, with_language=False)

    export_p = sub.add_parser("export", help="Write one profile to a standalone file")
    _add_common_options(export_p)
    export_p.add_argument("--profile", required=True, help="Profile to export")
    export_p.add_argument("--out", required=True, type=Path, help="Target file (overwritten)")

    import_p = sub.add_parser("import", help="Import the profile stored in a file and save it")
    _add_common_options(import_p)
    import_p.add_argument("path", type=Path, help="File written by 'export'")

    underline_p = sub.add_parser("underline", help="Resolve underline color and style for a category or rule")
    _add_common_options(underline_p)
    underline_p.add_argument("--category", required=True, help="Category name")
    underline_p.add_argument("--rule", default=None, help="Rule id")
    underline_p.add_argument("--profile", default=None, help="Profile to use")

    return parser


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(level=logging.DEBUG if verbose else logging.WARNING, format=LOG_FORMAT)


def _resolve_language(code: str | None) -> Language | None:
    if code is None:
        return None
    return default_registry().require(code)


def _open(args: argparse.Namespace, profile: str | None = None) -> ConfigStore:
    config_path = args.config or default_config_path()
    language = _resolve_language(getattr(args, "language", None))
    return open_config_store(config_path, language, profile=profile)


def _cmd_show(args: argparse.Namespace) -> int:
    store = _open(args, profile=args.profile)
    print(f"profile: {store.current_profile or DEFAULT_PROFILE_LABEL}")
    for key, value in sorted(store.encoded_settings().items()):
        print(f"{key}={value}")
    return 0


def _cmd_profiles(args: argparse.Namespace) -> int:
    store = _open(args)
    current = store.current_profile
    print(f"{'*' if not current else ' '} {DEFAULT_PROFILE_LABEL}")
    for name in store.defined_profiles:
        print(f"{'*' if name == current else ' '} {name}")
    return 0


def _cmd_export(args: argparse.Namespace) -> int:
    store = _open(args, profile=args.profile)
    store.export_profile(args.profile, args.out)
    print(f"Exported profile {args.profile!r} to {args.out}")
    return 0


def _cmd_import(args: argparse.Namespace) -> int:
    store = _open(args)
    if not store.import_profile(args.path):
        print(f"Nothing imported: {args.path} names no profile")
        return 0
    store.save()
    print(f"Imported profile {store.current_profile!r}")
    return 0


def _cmd_underline(args: argparse.Namespace) -> int:
    store = _open(args, profile=args.profile)
    color = store.underline_color(args.category, args.rule)
    style = store.underline_type(args.category, args.rule)
    print(f"color={color_to_hex(color)} type={style}")
    return 0


_COMMANDS = {
    "show": _cmd_show,
    "profiles": _cmd_profiles,
    "export": _cmd_export,
    "import": _cmd_import,
    "underline": _cmd_underline,
}


def main(argv: list[str] | None = None) -> int:
    """
    CLI entry point.

    Parameters
    ----------
    argv:
        Optional argument vector. If None, argparse uses sys.argv.

    Returns
    -------
    int
        Process exit code.
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    _configure_logging(args.verbose)

    handler = _COMMANDS.get(args.command)
    if handler is None:
        parser.print_help()
        return 0

    try:
        return handler(args)
    except (ConfigEngineError, OSError) as exc:
        print(f"ERROR: {exc}")
        return 2


if __name__ == "__main__":
    raise SystemExit(main())
