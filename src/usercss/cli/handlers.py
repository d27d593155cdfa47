"""CLI subcommand handlers."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

from usercss.compiler import parse_usercss
from usercss.config import EngineConfig, load_config
from usercss.constants.reporting import OUTPUT_TEMP_PREFIX, OUTPUT_TEMP_SUFFIX
from usercss.exceptions import ConfigError, RecordValidationError
from usercss.exceptions.validation import format_errors
from usercss.io import load_json_file, read_source, write_json_atomic, write_text_atomic
from usercss.matching import matches
from usercss.model import DomainRule
from usercss.reporting import StyleReporter, render_match_results
from usercss.serialization import rules_from_record, style_to_record
from usercss.validation import preflight_validate

logger = logging.getLogger(__name__)


class UsageError(ValueError):
    """Raised for malformed command-line input; reported with exit code 2."""


def handle_validate_config(args: argparse.Namespace) -> int:
    """Run config validation and report results."""
    errors = preflight_validate(root=args.root, config_path=args.config)
    if errors:
        print(format_errors(errors), file=sys.stderr)
        return 2

    print("Configuration is valid.")
    return 0


def handle_compile(args: argparse.Namespace) -> int:
    """Compile one stylesheet; exit 1 when the style has errors."""
    try:
        config = _load_engine_config(args)
        values = collect_values(args.assignments, args.values)
        source = read_source(args.file)
    except ConfigError as exc:
        print(f"Configuration error: {exc}", file=sys.stderr)
        return 2
    except UsageError as exc:
        print(f"Usage error: {exc}", file=sys.stderr)
        return 2
    except OSError as exc:
        print(f"Input error: {exc}", file=sys.stderr)
        return 2

    parsed = parse_usercss(source, values, config=config)

    if args.output is not None:
        if args.output_format == "json":
            write_json_atomic(
                path=args.output,
                payload=style_to_record(parsed),
                temp_prefix=OUTPUT_TEMP_PREFIX,
                temp_suffix=OUTPUT_TEMP_SUFFIX,
            )
        else:
            write_text_atomic(
                path=args.output,
                text=parsed.compiled_css,
                temp_prefix=OUTPUT_TEMP_PREFIX,
                temp_suffix=OUTPUT_TEMP_SUFFIX,
            )
        logger.debug("Wrote %s output to %s", args.output_format, args.output)

    if not args.no_stdout:
        use_color = not args.no_color and sys.stdout.isatty()
        print(StyleReporter(parsed, color=use_color, verbose=args.verbose).render())

    return 0 if parsed.ok else 1


def handle_match(args: argparse.Namespace) -> int:
    """Evaluate page URLs against a style; exit 0 only when every URL matches."""
    try:
        if args.record is not None:
            rules = rules_from_record(load_json_file(args.record))
            urls = list(args.targets)
        else:
            config = _load_engine_config(args)
            parsed = parse_usercss(read_source(Path(args.targets[0])), config=config)
            rules = parsed.domains
            urls = list(args.targets[1:])
    except ConfigError as exc:
        print(f"Configuration error: {exc}", file=sys.stderr)
        return 2
    except RecordValidationError as exc:
        print(f"Record error: {exc}", file=sys.stderr)
        return 2
    except (OSError, json.JSONDecodeError) as exc:
        print(f"Input error: {exc}", file=sys.stderr)
        return 2

    results = evaluate_urls(rules, urls)
    if not args.no_stdout:
        use_color = not args.no_color and sys.stdout.isatty()
        print(render_match_results(results, color=use_color))
    return 0 if all(matched for _, matched in results) else 1


def evaluate_urls(rules: tuple[DomainRule, ...], urls: list[str]) -> list[tuple[str, bool]]:
    """Pair each URL with the matcher's verdict, in input order."""
    return [(url, matches(rules, url)) for url in urls]


def collect_values(assignments: list[str], values_path: Path | None) -> dict[str, str]:
    """Merge ``--values`` file entries with ``--set`` flags; flags win."""
    values: dict[str, str] = {}
    if values_path is not None:
        try:
            raw = load_json_file(values_path)
        except json.JSONDecodeError as exc:
            raise UsageError(f"--values file {values_path} is not valid JSON: {exc}") from exc
        if not isinstance(raw, dict):
            raise UsageError(f"--values file {values_path} must contain a JSON object")
        for name, value in raw.items():
            if isinstance(value, (dict, list)) or value is None:
                raise UsageError(f"--values entry {name!r} must be a string, number or boolean")
            values[str(name)] = _scalar_text(value)

    for assignment in assignments:
        name, separator, value = assignment.partition("=")
        if not separator or not name.strip():
            raise UsageError(f"--set expects NAME=VALUE, got {assignment!r}")
        values[name.strip()] = value
    return values


def _scalar_text(value: object) -> str:
    if isinstance(value, bool):
        return "1" if value else "0"
    return str(value)


def _load_engine_config(args: argparse.Namespace) -> EngineConfig:
    errors = preflight_validate(root=args.root, config_path=args.config)
    if errors:
        raise ConfigError(format_errors(errors))
    return load_config(args.root, args.config)
