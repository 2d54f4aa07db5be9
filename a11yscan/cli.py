"""CLI entrypoints for a11yscan commands."""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

from .config import REPORT_FORMATS, ConfigError, load_config
from .logging import configure_logging, get_logger
from .pipeline import AuditPipeline
from .report import render_report
from .scanner import extract_class_regions

_LOGGER = get_logger("cli")


def _add_logging_options(
    parser: argparse.ArgumentParser, *, suppress_default: bool = False
) -> None:
    """Logging flags, accepted both before and after the subcommand.

    Subparsers suppress their defaults so they never clobber a value given
    before the subcommand.
    """
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        default=argparse.SUPPRESS if suppress_default else False,
        help="Log per-file extraction details.",
    )
    parser.add_argument(
        "-q",
        "--quiet",
        action="store_true",
        default=argparse.SUPPRESS if suppress_default else False,
        help="Only log warnings and errors.",
    )
    parser.add_argument(
        "--log-file",
        default=argparse.SUPPRESS if suppress_default else None,
        help="Also write log records (with worker thread names) to this file.",
    )


def _add_config_option(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--config",
        default=None,
        help="Path to .a11y-audit.yml (defaults to the one in the project root).",
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="a11yscan",
        description="Extract colour pairs from JSX sources for contrast auditing.",
    )
    _add_logging_options(parser)
    subparsers = parser.add_subparsers(dest="command", required=True)

    regions_parser = subparsers.add_parser(
        "regions",
        help="Print the class regions extracted from source files as JSON.",
    )
    _add_logging_options(regions_parser, suppress_default=True)
    _add_config_option(regions_parser)
    regions_parser.add_argument("files", nargs="+", help="Source files to scan.")

    audit_parser = subparsers.add_parser(
        "audit",
        help="Scan a project and report colour pairs per theme.",
    )
    _add_logging_options(audit_parser, suppress_default=True)
    _add_config_option(audit_parser)
    audit_parser.add_argument(
        "path",
        nargs="?",
        default=".",
        help="Path to the project root (defaults to current directory).",
    )
    audit_parser.add_argument(
        "--format",
        choices=REPORT_FORMATS,
        default=None,
        help="Report format (overrides report.format in the config).",
    )
    audit_parser.add_argument(
        "--no-dark",
        action="store_true",
        help="Only resolve the light theme.",
    )
    audit_parser.add_argument(
        "--all-variants",
        action="store_true",
        help="Expand every non-default cva() variant option.",
    )
    audit_parser.add_argument(
        "--output",
        default=None,
        help="Write the report to this file instead of stdout.",
    )

    return parser


def _run_regions(args: argparse.Namespace, parser: argparse.ArgumentParser) -> None:
    config_path = Path(args.config) if args.config else Path.cwd()
    try:
        config = load_config(config_path)
    except ConfigError as exc:
        parser.exit(1, f"{exc}\n")

    payload = []
    for name in args.files:
        path = Path(name)
        try:
            text = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            parser.exit(1, f"Cannot read {name}: {exc}\n")
        regions = extract_class_regions(text, config.containers, config.default_bg, config.portals)
        _LOGGER.debug("%s: %d region(s)", name, len(regions))
        payload.append({"file": name, "regions": [region.to_dict() for region in regions]})
    print(json.dumps(payload, indent=2))


def _run_audit(args: argparse.Namespace, parser: argparse.ArgumentParser) -> None:
    root = Path(args.path)
    if not root.is_dir():
        parser.exit(1, f"Project path not found: {args.path}\n")
    try:
        config = load_config(Path(args.config) if args.config else root)
    except ConfigError as exc:
        parser.exit(1, f"{exc}\n")
    config.root = root.resolve()

    if args.no_dark:
        config.dark = False
    if args.all_variants:
        config.check_all_variants = True
    report_format = args.format or config.report.format

    results = AuditPipeline(config).run()
    report = render_report(results, report_format)

    if args.output:
        output = Path(args.output)
        output.write_text(report, encoding="utf-8")
        print(f"Report written to {_relativize(output.resolve())}")
    else:
        sys.stdout.write(report)
        if not report.endswith("\n"):
            sys.stdout.write("\n")


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for a11yscan commands."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    configure_logging(
        verbose=bool(args.verbose),
        quiet=bool(args.quiet),
        log_file=Path(args.log_file) if args.log_file else None,
    )

    if args.command == "regions":
        _run_regions(args, parser)
    elif args.command == "audit":
        _run_audit(args, parser)
    else:  # pragma: no cover - argparse enforces choices
        parser.exit(1, "Unknown command\n")


def _relativize(path: Path) -> str:
    try:
        return str(path.relative_to(Path.cwd()))
    except ValueError:
        return str(path)


if __name__ == "__main__":
    main(sys.argv[1:])
