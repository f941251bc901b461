"""CLI entrypoints for apiaudit commands."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from .auditor import Auditor
from .config import REPORT_FORMATS, ConfigError, load_config
from .loader import SnapshotError
from .logging import configure_logging
from .reachability import RootSetError
from .report import render
from .rules import discover_rules

EXIT_VIOLATIONS = 1
EXIT_FATAL = 2


def _add_verbose_option(
    parser: argparse.ArgumentParser, *, suppress_default: bool = False
) -> None:
    kwargs: dict[str, object] = {
        "action": "store_true",
        "help": "Increase log verbosity for troubleshooting.",
    }
    if suppress_default:
        kwargs["default"] = argparse.SUPPRESS
    else:
        kwargs["default"] = False
    parser.add_argument(
        "-v",
        "--verbose",
        **kwargs,
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="apiaudit",
        description="Audit a compiled module's public declarations for dead API and convention breaks.",
    )
    _add_verbose_option(parser)
    subparsers = parser.add_subparsers(dest="command", required=True)

    check_parser = subparsers.add_parser(
        "check",
        help="Audit a declaration snapshot and exit non-zero on any violation.",
    )
    _add_verbose_option(check_parser, suppress_default=True)
    check_parser.add_argument(
        "snapshot",
        nargs="?",
        default=None,
        help="Path to the snapshot document (defaults to the `snapshot` config entry).",
    )
    check_parser.add_argument(
        "--config",
        default=".",
        help="Path to .apiaudit.yml or the directory holding it (defaults to current directory).",
    )
    check_parser.add_argument(
        "--format",
        choices=REPORT_FORMATS,
        default=None,
        help="Report output format.",
    )
    check_parser.add_argument(
        "--rules",
        default=None,
        help="Comma-separated convention rule names to run (defaults to all).",
    )

    rules_parser = subparsers.add_parser("rules", help="List available convention rules.")
    _add_verbose_option(rules_parser, suppress_default=True)

    serve_parser = subparsers.add_parser("serve", help="Run the audit HTTP service.")
    _add_verbose_option(serve_parser, suppress_default=True)
    serve_parser.add_argument("--host", default="127.0.0.1", help="Interface to bind.")
    serve_parser.add_argument("--port", type=int, default=8000, help="Port to bind.")

    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for apiaudit commands."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.command == "check":
        _run_check(parser, args)
    elif args.command == "rules":
        configure_logging(verbose=bool(args.verbose))
        for rule in discover_rules():
            print(f"{rule.name}: {rule.description}")
    elif args.command == "serve":
        configure_logging(verbose=bool(args.verbose))
        from .service import run_service

        run_service(host=args.host, port=args.port)
    else:  # pragma: no cover - argparse enforces choices
        parser.exit(EXIT_FATAL, "Unknown command\n")


def _run_check(parser: argparse.ArgumentParser, args: argparse.Namespace) -> None:
    try:
        config = load_config(Path(args.config))
    except ConfigError as exc:
        parser.exit(EXIT_FATAL, f"apiaudit: {exc}\n")

    report_format = args.format or config.report_format
    configure_logging(
        verbose=bool(args.verbose),
        quiet=report_format == "json",
        log_file=config.log_file,
    )

    snapshot_path = Path(args.snapshot) if args.snapshot else config.snapshot
    if snapshot_path is None:
        parser.exit(EXIT_FATAL, "apiaudit: no snapshot given and none configured\n")

    enabled = config.rules.enabled
    if args.rules is not None:
        enabled = [name.strip() for name in args.rules.split(",") if name.strip()]

    try:
        auditor = Auditor(rules=discover_rules(enabled))
        report = auditor.run_path(snapshot_path)
    except ValueError as exc:
        parser.exit(EXIT_FATAL, f"apiaudit: {exc}\n")
    except (SnapshotError, RootSetError) as exc:
        parser.exit(EXIT_FATAL, f"apiaudit check failed: {exc}\n")

    sys.stdout.write(render(report, report_format))
    if not report.passed:
        parser.exit(EXIT_VIOLATIONS)


if __name__ == "__main__":
    main(sys.argv[1:])
