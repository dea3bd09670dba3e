"""Tests for the browser suite base class and standalone runner."""

import json
from pathlib import Path

import pytest
from playwright.async_api import Browser

from site_check.config import SiteCheckConfig
from site_check.results import TestResults
from site_check.suites import base
from site_check.suites.base import BrowserSuite, run_standalone
from site_check.testing.factories import build_summary
from site_check.testing.fakes import FakeLauncher


class PassingSuite(BrowserSuite):
    """Suite recording two outcomes."""

    title = "Passing"

    async def run_checks(self, browser: Browser, results: TestResults) -> None:
        results.add_pass("First")
        with results.check("Second"):
            raise AssertionError("broken")


class ExplodingSuite(BrowserSuite):
    """Suite whose setup raises before any check."""

    title = "Exploding"

    async def run_checks(self, browser: Browser, results: TestResults) -> None:
        await browser.new_page()
        raise TimeoutError("navigation timed out")


async def test_run_collects_outcomes(config: SiteCheckConfig) -> None:
    """Checks run against a launched browser and produce a summary."""
    launcher = FakeLauncher()

    summary = await PassingSuite.execute(config, launcher)

    assert summary.suite_name == "Passing"
    assert [(o.name, o.status) for o in summary.outcomes] == [
        ("First", "PASS"),
        ("Second", "FAIL"),
    ]
    assert launcher.options == [config.browser]
    assert (launcher.launches, launcher.closes) == (1, 1)


async def test_setup_failure_is_single_fail(config: SiteCheckConfig) -> None:
    """An exception escaping the checks is recorded as one setup failure."""
    launcher = FakeLauncher()

    summary = await ExplodingSuite.execute(config, launcher)

    (outcome,) = summary.outcomes
    assert outcome.name == "Exploding setup"
    assert outcome.status == "FAIL"
    assert outcome.error == "navigation timed out"
    launcher.browsers[0].new_page.assert_awaited_once()
    assert (launcher.launches, launcher.closes) == (1, 1)


async def test_launch_failure_is_single_fail(config: SiteCheckConfig) -> None:
    """A browser that can not start yields one failure and nothing to close."""
    launcher = FakeLauncher(launch_error=RuntimeError("chromium not installed"))

    summary = await PassingSuite.execute(config, launcher)

    assert summary.counts.total == 1
    assert summary.counts.failed == 1
    assert summary.outcomes[0].error == "chromium not installed"
    assert (launcher.launches, launcher.closes) == (0, 0)


class TestRunStandalone:
    """Tests for the standalone suite entry point."""

    async def _runner(self, config, launcher):
        return build_summary("Standalone", passed=1, failed=self.failed)

    @pytest.fixture(autouse=True)
    def _no_logging_config(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr(base, "configure_logging", lambda verbose=False: None)

    @pytest.mark.parametrize(("failed", "exit_code"), [(0, 0), (2, 1)])
    def test_prints_json_and_exit_code(
        self,
        tmp_path: Path,
        capsys: pytest.CaptureFixture[str],
        failed: int,
        exit_code: int,
    ) -> None:
        """The summary is printed as JSON and failures set the exit code."""
        self.failed = failed

        code = run_standalone(
            self._runner, "Standalone", ["--site-root", str(tmp_path)]
        )

        assert code == exit_code
        data = json.loads(capsys.readouterr().out)
        assert data["suite"] == "Standalone"
        assert data["failed"] == failed

    def test_config_error_exit_code(self, tmp_path: Path) -> None:
        """A broken config file exits with the configuration error code."""
        path = tmp_path / "broken.yaml"
        path.write_text("timing: [1, 2\n")
        self.failed = 0

        code = run_standalone(self._runner, "Standalone", ["--config", str(path)])

        assert code == base.CONFIG_ERROR_EXIT_CODE


def test_config_from_args_applies_flags(tmp_path: Path) -> None:
    """--url and --offline override the loaded configuration."""
    args = base.build_standalone_parser("x").parse_args(
        ["--site-root", str(tmp_path), "--url", "http://localhost:8000/", "--offline"]
    )

    config = base.config_from_args(args)

    assert config.targets.main_site == "http://localhost:8000/"
    assert config.check_external_links is False
