"""CLI entrypoint for the UserCSS compiler."""

from __future__ import annotations

import argparse
import logging
from pathlib import Path

from usercss import __version__
from usercss.cli.handlers import handle_compile, handle_match, handle_validate_config
from usercss.constants.branding import CLI_DESCRIPTION
from usercss.constants.reporting import DEFAULT_OUTPUT_FORMAT, VALID_OUTPUT_FORMATS


def build_parser() -> argparse.ArgumentParser:
    """Build top-level CLI parser."""
    parser = argparse.ArgumentParser(
        prog="usercss",
        description=CLI_DESCRIPTION,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    subparsers = parser.add_subparsers(dest="command", required=True)

    compile_cmd = subparsers.add_parser("compile", help="Compile a .user.css file with variable values applied")
    compile_cmd.add_argument("file", type=Path, help="UserCSS source file")
    compile_cmd.add_argument(
        "-s",
        "--set",
        dest="assignments",
        action="append",
        default=[],
        metavar="NAME=VALUE",
        help="Variable value override; use --set=--name=value for custom properties (repeatable)",
    )
    compile_cmd.add_argument("--values", type=Path, help="JSON file mapping variable names to values")
    compile_cmd.add_argument("-r", "--root", type=Path, default=Path("."), help="Directory searched for usercss.yaml")
    compile_cmd.add_argument("-c", "--config", type=Path, help="Explicit config file")
    compile_cmd.add_argument("-o", "--output", type=Path, default=None, help="Output file (nothing written if omitted)")
    compile_cmd.add_argument(
        "--format",
        dest="output_format",
        choices=sorted(VALID_OUTPUT_FORMATS),
        default=DEFAULT_OUTPUT_FORMAT,
        help="Output file format: compiled css or a json style record (default: css)",
    )
    compile_cmd.add_argument("--no-stdout", action="store_true", help="Silence stdout output")
    compile_cmd.add_argument("--no-color", action="store_true", help="Disable colored output")
    compile_cmd.add_argument("-v", "--verbose", action="store_true", help="List variables and debug logging")

    match_cmd = subparsers.add_parser("match", help="Check which page URLs a style applies to")
    match_cmd.add_argument(
        "targets",
        nargs="+",
        metavar="FILE URL",
        help="UserCSS source file followed by page URLs (only URLs when --record is given)",
    )
    match_cmd.add_argument("--record", type=Path, default=None, help="Stored JSON style record to match against")
    match_cmd.add_argument("-r", "--root", type=Path, default=Path("."), help="Directory searched for usercss.yaml")
    match_cmd.add_argument("-c", "--config", type=Path, help="Explicit config file")
    match_cmd.add_argument("--no-stdout", action="store_true", help="Silence stdout output")
    match_cmd.add_argument("--no-color", action="store_true", help="Disable colored output")
    match_cmd.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")

    validate = subparsers.add_parser("validate-config", help="Validate configuration without compiling")
    validate.add_argument("-r", "--root", type=Path, default=Path("."), help="Directory searched for usercss.yaml")
    validate.add_argument("-c", "--config", type=Path, help="Explicit config file")

    return parser


def main(argv: list[str] | None = None) -> int:
    """CLI entrypoint."""
    parser = build_parser()
    args = parser.parse_args(argv)

    verbose = getattr(args, "verbose", False)
    logging.basicConfig(level=logging.DEBUG if verbose else logging.INFO, format="%(levelname)s %(message)s")

    if args.command == "validate-config":
        return handle_validate_config(args)
    if args.command == "compile":
        return handle_compile(args)
    if args.command == "match":
        if args.record is None and len(args.targets) < 2:
            parser.error("match needs a FILE followed by at least one URL")
        return handle_match(args)

    parser.error(f"Unsupported command: {args.command}")
    return 2


if __name__ == "__main__":
    raise SystemExit(main())
