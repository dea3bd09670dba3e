"""Tests for the suite orchestrator."""

import asyncio
from unittest.mock import AsyncMock

import pytest

from site_check.config import SiteCheckConfig
from site_check.orchestrator import SuiteOrchestrator, failed_suite_summary
from site_check.report import Palette, ReportFormatter
from site_check.suites.registry import SuiteManifest
from site_check.testing.factories import build_summary
from site_check.testing.fakes import FakeLauncher


@pytest.fixture
def lines() -> list[str]:
    """Collect emitted report lines."""
    return []


@pytest.fixture
def launcher() -> FakeLauncher:
    """Create a fake browser launcher."""
    return FakeLauncher()


def make_orchestrator(
    config: SiteCheckConfig,
    suites: list[SuiteManifest],
    lines: list[str],
    launcher: FakeLauncher,
    *,
    verbose: bool = True,
) -> SuiteOrchestrator:
    """Create an orchestrator writing plain lines into ``lines``."""
    return SuiteOrchestrator(
        config=config,
        suites=suites,
        formatter=ReportFormatter(palette=Palette.plain()),
        launcher=launcher,
        verbose=verbose,
        echo=lines.append,
    )


async def test_returns_clear_report_for_no_suites(
    config: SiteCheckConfig, lines: list[str], launcher: FakeLauncher
) -> None:
    """An empty selection still prints a report and exits 0."""
    report = await make_orchestrator(config, [], lines, launcher).run()

    assert report.summaries == ()
    assert report.exit_code == 0
    assert report.pass_rate is None
    assert any("Pass Rate: n/a" in line for line in lines)


async def test_all_suites_pass(
    config: SiteCheckConfig, lines: list[str], launcher: FakeLauncher
) -> None:
    """Seven passing suites produce a clear report with exit code 0."""
    suites = [
        SuiteManifest(
            name=f"Suite {i}",
            runner=AsyncMock(return_value=build_summary(f"Suite {i}", passed=3)),
        )
        for i in range(7)
    ]

    report = await make_orchestrator(config, suites, lines, launcher).run()

    assert report.totals.total == 21
    assert report.totals.passed == 21
    assert report.pass_rate == 1.0
    assert report.exit_code == 0
    assert any("ALL CHECKS PASSED" in line for line in lines)


async def test_runner_receives_config_and_launcher(
    config: SiteCheckConfig, lines: list[str], launcher: FakeLauncher
) -> None:
    """Runners are called with the shared config and the injected launcher."""
    runner = AsyncMock(return_value=build_summary("A", passed=1))

    await make_orchestrator(
        config, [SuiteManifest(name="A", runner=runner)], lines, launcher
    ).run()

    runner.assert_awaited_once_with(config, launcher)


async def test_warnings_do_not_fail_run(
    config: SiteCheckConfig, lines: list[str], launcher: FakeLauncher
) -> None:
    """A suite with warnings only keeps exit code 0."""
    suites = [
        SuiteManifest(
            name="Navigation",
            runner=AsyncMock(
                return_value=build_summary("Navigation", passed=4, warned=1)
            ),
        )
    ]

    report = await make_orchestrator(config, suites, lines, launcher).run()

    assert report.exit_code == 0
    assert report.status == "warnings"
    assert any("WARNINGS TO CONSIDER" in line for line in lines)
    assert any("REVIEW RECOMMENDED" in line for line in lines)


async def test_failure_sets_exit_code(
    config: SiteCheckConfig, lines: list[str], launcher: FakeLauncher
) -> None:
    """A FAIL outcome in any suite makes the run exit 1."""
    suites = [
        SuiteManifest(
            name="Structure",
            runner=AsyncMock(return_value=build_summary("Structure", passed=5)),
        ),
        SuiteManifest(
            name="Forms",
            runner=AsyncMock(return_value=build_summary("Forms", failed=1)),
        ),
    ]

    report = await make_orchestrator(config, suites, lines, launcher).run()

    assert report.exit_code == 1
    assert [f.suite_name for f in report.failures] == ["Forms"]
    assert any("CRITICAL ISSUES" in line for line in lines)


async def test_runner_exception_is_isolated(
    config: SiteCheckConfig, lines: list[str], launcher: FakeLauncher
) -> None:
    """A runner that raises becomes one failed summary and later suites run."""
    later = AsyncMock(return_value=build_summary("Later", passed=2))
    suites = [
        SuiteManifest(
            name="Broken", runner=AsyncMock(side_effect=RuntimeError("boom"))
        ),
        SuiteManifest(name="Later", runner=later),
    ]

    report = await make_orchestrator(config, suites, lines, launcher).run()

    broken, after = report.summaries
    assert broken.suite_name == "Broken"
    assert broken.counts.failed == 1
    assert broken.outcomes[0].name == "Suite execution"
    assert broken.outcomes[0].error == "boom"
    assert after.counts.passed == 2
    later.assert_awaited_once()
    assert report.exit_code == 1
    assert "  ✗ Suite failed to run: boom" in lines


async def test_suites_run_sequentially(
    config: SiteCheckConfig, lines: list[str], launcher: FakeLauncher
) -> None:
    """A suite does not start until the previous one has finished."""
    events: list[str] = []

    def make_runner(name: str):
        async def runner(config, launcher):
            events.append(f"start {name}")
            await asyncio.sleep(0)
            events.append(f"end {name}")
            return build_summary(name, passed=1)

        return runner

    suites = [
        SuiteManifest(name=name, runner=make_runner(name)) for name in ("A", "B", "C")
    ]

    report = await make_orchestrator(config, suites, lines, launcher).run()

    assert events == ["start A", "end A", "start B", "end B", "start C", "end C"]
    assert [s.suite_name for s in report.summaries] == ["A", "B", "C"]


async def test_verbose_prints_each_outcome(
    config: SiteCheckConfig, lines: list[str], launcher: FakeLauncher
) -> None:
    """Verbose mode prints every outcome of every suite."""
    suites = [
        SuiteManifest(
            name="A", runner=AsyncMock(return_value=build_summary("A", passed=2))
        )
    ]

    await make_orchestrator(config, suites, lines, launcher).run()

    assert "  ✓ pass 0" in lines
    assert "  ✓ pass 1" in lines


async def test_quiet_prints_only_tallies(
    config: SiteCheckConfig, lines: list[str], launcher: FakeLauncher
) -> None:
    """Quiet mode omits individual outcomes but keeps tallies and the report."""
    suites = [
        SuiteManifest(
            name="A",
            runner=AsyncMock(return_value=build_summary("A", passed=2, failed=1)),
        )
    ]

    orchestrator = make_orchestrator(config, suites, lines, launcher, verbose=False)

    report = await orchestrator.run()

    assert "  ✓ pass 0" not in lines
    assert "  2 passed, 1 failed (100ms)" in lines
    assert report.exit_code == 1


def test_failed_suite_summary() -> None:
    """The stand-in summary holds exactly one failure."""
    summary = failed_suite_summary("Forms", TimeoutError(), duration_ms=12)

    assert summary.suite_name == "Forms"
    assert summary.counts.total == 1
    assert summary.counts.failed == 1
    assert summary.outcomes[0].error == "TimeoutError"
    assert summary.duration_ms == 12
