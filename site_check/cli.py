"""CLI entry points for running site checks."""

import argparse
import asyncio
import json
import logging
import os
import sys
from collections.abc import Sequence
from pathlib import Path

import yaml
from pydantic import ValidationError

from site_check.config import SiteCheckConfig
from site_check.models.result import AggregateReport
from site_check.orchestrator import SuiteOrchestrator
from site_check.report import Palette, ReportFormatter
from site_check.suites.base import (
    CONFIG_ERROR_EXIT_CODE,
    build_standalone_parser,
    config_from_args,
    configure_logging,
    run_standalone,
)
from site_check.suites.registry import SuiteNotFoundError, default_registry


def parse_suite_names(value: str | None) -> Sequence[str] | None:
    """Parse comma-separated suite names; None means every suite."""
    if value is None:
        return None
    return tuple(s.strip() for s in value.split(",") if s.strip())


def use_color(no_color_flag: bool) -> bool:
    """Decide whether the report should use ANSI colors."""
    if no_color_flag or os.environ.get("NO_COLOR"):
        return False
    return sys.stdout.isatty()


async def run(
    config: SiteCheckConfig,
    suite_names: Sequence[str] | None = None,
    *,
    quiet: bool = False,
    color: bool = True,
    json_path: Path | None = None,
) -> int:
    """Run the selected suites and return the exit code."""
    log = logging.getLogger("site_check")

    suites = default_registry().select(suite_names)
    log.info("Selected suites: %s", ", ".join(s.name for s in suites) or "none")

    orchestrator = SuiteOrchestrator(
        config=config,
        suites=suites,
        formatter=ReportFormatter(
            palette=Palette() if color else Palette.plain(),
            warning_limit=config.report.warning_limit,
        ),
        verbose=not quiet,
    )
    report = await orchestrator.run()

    if json_path is not None:
        write_json_report(report, json_path)

    return report.exit_code


def write_json_report(report: AggregateReport, path: Path) -> None:
    """Write the aggregate report as JSON."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(report.to_dict(), indent=2, default=str) + "\n")
    logging.getLogger("site_check").info("JSON report written to %s", path)


def build_parser() -> argparse.ArgumentParser:
    """Argument parser for ``site-check``."""
    parser = build_standalone_parser("Run headless browser checks against a site")
    parser.add_argument(
        "--suite",
        default=None,
        help="Comma-separated suite names to run (default: all)",
    )
    parser.add_argument(
        "--quiet",
        action="store_true",
        help="Only print suite tallies and the final report",
    )
    parser.add_argument(
        "--no-color",
        action="store_true",
        help="Disable ANSI colors in the report",
    )
    parser.add_argument(
        "--json",
        type=Path,
        default=None,
        dest="json_path",
        help="Also write the aggregate report as JSON to this path",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable debug logging on stderr",
    )
    return parser


def main(argv: Sequence[str] | None = None) -> None:
    """CLI entry point."""
    args = build_parser().parse_args(argv)
    configure_logging(args.verbose)
    log = logging.getLogger("site_check")

    try:
        config = config_from_args(args)
    except (OSError, ValueError, yaml.YAMLError, ValidationError) as e:
        log.error("Invalid configuration: %s", e)
        sys.exit(CONFIG_ERROR_EXIT_CODE)

    try:
        exit_code = asyncio.run(
            run(
                config,
                parse_suite_names(args.suite),
                quiet=args.quiet,
                color=use_color(args.no_color),
                json_path=args.json_path,
            )
        )
    except Exception:
        log.exception("Check runner failed")
        exit_code = 1
    sys.exit(exit_code)


def suite_main(argv: Sequence[str] | None = None) -> None:
    """Entry point running one suite standalone and printing its JSON summary."""
    argv = list(sys.argv[1:] if argv is None else argv)
    registry = default_registry()
    if not argv or argv[0].startswith("-"):
        print(
            f"usage: site-check-suite {{{','.join(registry.names)}}} [options]",
            file=sys.stderr,
        )
        sys.exit(CONFIG_ERROR_EXIT_CODE)

    name, rest = argv[0], argv[1:]
    try:
        manifest = registry.get(name)
    except SuiteNotFoundError as e:
        print(str(e), file=sys.stderr)
        sys.exit(CONFIG_ERROR_EXIT_CODE)

    sys.exit(run_standalone(manifest.runner, manifest.name, rest))


if __name__ == "__main__":  # pragma: no cover
    main()
