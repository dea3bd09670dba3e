"""Abstract base class for browser-driven check suites."""

import argparse
import asyncio
import json
import logging
import sys
from abc import ABC, abstractmethod
from collections.abc import Awaitable, Callable, Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import ClassVar

import yaml
from playwright.async_api import Browser
from pydantic import ValidationError

from site_check.browser import BrowserLauncher, launch_browser
from site_check.config import SiteCheckConfig, load_config
from site_check.models.result import SuiteSummary
from site_check.results import TestResults

log = logging.getLogger(__name__)

SuiteRunner = Callable[[SiteCheckConfig, BrowserLauncher], Awaitable[SuiteSummary]]


@dataclass(frozen=True, kw_only=True)
class BrowserSuite(ABC):
    """A themed group of checks sharing one browser instance.

    Subclasses implement :meth:`run_checks`, wrapping every check in
    ``results.check(...)``. Anything escaping ``run_checks`` (browser launch,
    page creation, the first navigation) is a setup failure and is recorded
    as a single FAIL; the browser is released on every path.
    """

    title: ClassVar[str]

    config: SiteCheckConfig
    launcher: BrowserLauncher = launch_browser

    @classmethod
    async def execute(
        cls, config: SiteCheckConfig, launcher: BrowserLauncher = launch_browser
    ) -> SuiteSummary:
        """Run the suite with the given configuration and browser launcher."""
        return await cls(config=config, launcher=launcher).run()

    async def run(self) -> SuiteSummary:
        """Run every check and return the frozen summary."""
        results = TestResults(self.title)
        log.info("Starting suite: %s", self.title)
        try:
            async with self.launcher(self.config.browser) as browser:
                await self.run_checks(browser, results)
        except Exception as e:
            log.exception("Suite setup failed: %s", self.title)
            results.add_fail(f"{self.title} setup", e)

        summary = results.get_summary()
        log.info(
            "Finished suite: %s (%d passed, %d failed, %d warned, %d skipped)",
            self.title,
            summary.counts.passed,
            summary.counts.failed,
            summary.counts.warned,
            summary.counts.skipped,
        )
        return summary

    @abstractmethod
    async def run_checks(self, browser: Browser, results: TestResults) -> None:
        """Perform the suite's checks, recording each into ``results``.

        Args:
            browser: Browser owned by this suite for the duration of the call
            results: Accumulator for this run

        """


CONFIG_ERROR_EXIT_CODE = 2


def configure_logging(verbose: bool = False) -> None:
    """Send logs to stderr so they stay out of reports printed on stdout."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )


def build_standalone_parser(description: str) -> argparse.ArgumentParser:
    """Create the argument parser shared by standalone suite entry points."""
    parser = argparse.ArgumentParser(description=description)
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="YAML file overriding the default configuration",
    )
    parser.add_argument(
        "--site-root",
        type=Path,
        default=None,
        help="Directory holding index.html (default: current directory)",
    )
    parser.add_argument("--url", default=None, help="Override the main site URL")
    parser.add_argument(
        "--offline",
        action="store_true",
        help="Skip checks that reach external hosts",
    )
    return parser


def config_from_args(args: argparse.Namespace) -> SiteCheckConfig:
    """Build configuration from the standalone/CLI arguments."""
    overrides: dict[str, object] = {}
    if args.url:
        overrides["targets"] = {"main_site": args.url}
    if args.offline:
        overrides["check_external_links"] = False
    return load_config(args.config, site_root=args.site_root, overrides=overrides)


def run_standalone(
    runner: SuiteRunner, name: str, argv: Sequence[str] | None = None
) -> int:
    """Run one suite, print its JSON summary and return the exit code.

    The exit code is 0 when the suite recorded no failures, 1 otherwise, and
    CONFIG_ERROR_EXIT_CODE when the configuration could not be loaded.
    """
    args = build_standalone_parser(f"Run the {name} checks").parse_args(argv)
    configure_logging()

    try:
        config = config_from_args(args)
    except (OSError, ValueError, yaml.YAMLError, ValidationError) as e:
        log.error("Invalid configuration: %s", e)
        return CONFIG_ERROR_EXIT_CODE

    summary = asyncio.run(runner(config, launch_browser))
    print(json.dumps(summary.to_dict(), indent=2, default=str))
    return 1 if summary.counts.failed > 0 else 0
