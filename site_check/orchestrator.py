"""Suite orchestrator for running every requested suite in order."""

import logging
import time
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field

from site_check.browser import BrowserLauncher, launch_browser
from site_check.config import SiteCheckConfig
from site_check.models.result import AggregateReport, Outcome, SuiteSummary
from site_check.report import ReportFormatter
from site_check.suites.registry import SuiteManifest

log = logging.getLogger(__name__)


def failed_suite_summary(
    suite_name: str, error: BaseException, duration_ms: int = 0
) -> SuiteSummary:
    """Summary standing in for a suite whose runner raised."""
    return SuiteSummary.from_outcomes(
        suite_name,
        [
            Outcome(
                name="Suite execution",
                status="FAIL",
                error=str(error) or type(error).__name__,
            )
        ],
        duration_ms,
    )


@dataclass(frozen=True, kw_only=True)
class SuiteOrchestrator:
    """Runs suites strictly one after another and reports as it goes."""

    config: SiteCheckConfig
    suites: Sequence[SuiteManifest]
    formatter: ReportFormatter = field(default_factory=ReportFormatter)
    launcher: BrowserLauncher = launch_browser
    verbose: bool = True
    echo: Callable[[str], None] = print

    def _emit(self, lines: Sequence[str]) -> None:
        for line in lines:
            self.echo(line)

    async def run(self) -> AggregateReport:
        """Run every suite and render the final report.

        Each suite contributes exactly one summary: a runner that raises is
        replaced by a single-outcome failed summary and the run continues.

        Returns:
            The aggregate report; its ``exit_code`` is the process status

        """
        self._emit(self.formatter.header())
        log.info("Running %d suite(s)", len(self.suites))

        summaries: list[SuiteSummary] = []
        for manifest in self.suites:
            summaries.append(await self._run_suite(manifest))

        report = AggregateReport(summaries=tuple(summaries))
        self._emit(self.formatter.final_report(report))
        log.info(
            "Run completed: %d checks, %d failed, exit code %d",
            report.totals.total,
            report.totals.failed,
            report.exit_code,
        )
        return report

    async def _run_suite(self, manifest: SuiteManifest) -> SuiteSummary:
        """Run one suite, converting a runner exception into a failed summary."""
        self._emit(self.formatter.suite_header(manifest.name))
        started = time.monotonic()
        try:
            summary = await manifest.runner(self.config, self.launcher)
        except Exception as e:
            log.error("Suite %s failed to run: %s", manifest.name, e, exc_info=e)
            self._emit(self.formatter.suite_failed_to_run(str(e)))
            summary = failed_suite_summary(
                manifest.name, e, int((time.monotonic() - started) * 1000)
            )

        if self.verbose:
            self.echo("")
            for outcome in summary.outcomes:
                self._emit(self.formatter.outcome(outcome))
        self._emit(self.formatter.suite_tally(summary))
        return summary
