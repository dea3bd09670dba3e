"""Console report formatting.

Everything here is pure: functions return lines of text and never write to
the terminal. Styling comes from a :class:`Palette` chosen by the caller, so
disabling color is a matter of passing :meth:`Palette.plain`.
"""

from dataclasses import dataclass, field, fields

from site_check.models.result import AggregateReport, Outcome, Status, SuiteSummary

RULE_WIDTH = 70
BOX_INNER_WIDTH = 66

STATUS_SYMBOLS: dict[Status, str] = {
    "PASS": "✓",
    "FAIL": "✗",
    "WARN": "⚠",
    "SKIP": "○",
}

BANNERS = {
    "clear": "  ✨ ALL CHECKS PASSED - SITE IS STABLE! ✨  ",
    "warnings": "  ⚠️  CHECKS PASSED WITH WARNINGS - REVIEW RECOMMENDED  ",
    "failures": "  ❌ CHECKS FAILED - FIXES REQUIRED BEFORE DEPLOYMENT  ",
}


@dataclass(frozen=True, kw_only=True)
class Palette:
    """ANSI escape sequences used by the formatter."""

    reset: str = "\x1b[0m"
    bright: str = "\x1b[1m"
    dim: str = "\x1b[2m"
    red: str = "\x1b[31m"
    green: str = "\x1b[32m"
    yellow: str = "\x1b[33m"
    blue: str = "\x1b[34m"
    cyan: str = "\x1b[36m"
    bg_red: str = "\x1b[41m"
    bg_green: str = "\x1b[42m"
    bg_yellow: str = "\x1b[43m"

    @classmethod
    def plain(cls) -> "Palette":
        """Palette with every sequence empty."""
        return cls(**{f.name: "" for f in fields(cls)})


def format_duration(ms: int) -> str:
    """Format milliseconds as ``450ms`` or ``1.25s``."""
    if ms < 1000:
        return f"{ms}ms"
    return f"{ms / 1000:.2f}s"


def format_pass_rate(rate: float | None) -> str:
    """Format a pass rate as a percentage, or ``n/a`` when undefined."""
    if rate is None:
        return "n/a"
    return f"{rate * 100:.1f}%"


@dataclass(frozen=True, kw_only=True)
class ReportFormatter:
    """Renders suite progress and the final report as lines of text."""

    palette: Palette = field(default_factory=Palette)
    warning_limit: int = 10

    def _status_color(self, status: Status) -> str:
        p = self.palette
        return {"PASS": p.green, "FAIL": p.red, "WARN": p.yellow, "SKIP": p.dim}[
            status
        ]

    def _box(self, title: str, subtitle: str | None = None) -> list[str]:
        p = self.palette
        lines = [
            f"{p.cyan}╔{'═' * BOX_INNER_WIDTH}╗{p.reset}",
            f"{p.cyan}║{p.reset}{p.bright}{title.center(BOX_INNER_WIDTH)}{p.reset}"
            f"{p.cyan}║{p.reset}",
        ]
        if subtitle:
            lines.append(
                f"{p.cyan}║{p.reset}{subtitle.center(BOX_INNER_WIDTH)}"
                f"{p.cyan}║{p.reset}"
            )
        lines.append(f"{p.cyan}╚{'═' * BOX_INNER_WIDTH}╝{p.reset}")
        return lines

    def header(self) -> list[str]:
        """Opening banner."""
        return ["", *self._box("Site Check", "Headless Browser UX Checks"), ""]

    def suite_header(self, name: str) -> list[str]:
        """Banner printed before a suite runs."""
        p = self.palette
        return [
            "",
            f"{p.blue}{'━' * RULE_WIDTH}{p.reset}",
            f"{p.bright}{p.blue}  📋 {name}{p.reset}",
            f"{p.blue}{'━' * RULE_WIDTH}{p.reset}",
        ]

    def outcome(self, outcome: Outcome) -> list[str]:
        """One outcome line, plus its error or warning when present."""
        p = self.palette
        color = self._status_color(outcome.status)
        lines = [f"  {color}{STATUS_SYMBOLS[outcome.status]}{p.reset} {outcome.name}"]
        if outcome.status == "FAIL":
            lines.append(f"    {p.red}└─ Error: {outcome.error}{p.reset}")
        elif outcome.status == "WARN":
            lines.append(f"    {p.yellow}└─ {outcome.warning}{p.reset}")
        return lines

    def suite_tally(self, summary: SuiteSummary) -> list[str]:
        """Per-suite counts and duration."""
        p = self.palette
        counts = summary.counts
        parts = [
            f"{color}{count} {label}{p.reset}"
            for count, label, color in (
                (counts.passed, "passed", p.green),
                (counts.failed, "failed", p.red),
                (counts.warned, "warnings", p.yellow),
                (counts.skipped, "skipped", p.dim),
            )
            if count > 0
        ]
        return [
            "",
            f"  {p.dim}{'─' * 50}{p.reset}",
            f"  {', '.join(parts) or 'no checks'} "
            f"{p.dim}({format_duration(summary.duration_ms)}){p.reset}",
        ]

    def suite_failed_to_run(self, error: str) -> list[str]:
        """Line shown when a suite runner raised."""
        p = self.palette
        return [f"  {p.red}✗ Suite failed to run: {error}{p.reset}"]

    def final_report(self, report: AggregateReport) -> list[str]:
        """Aggregate section closing the run."""
        p = self.palette
        totals = report.totals
        lines = ["", "", *self._box("FINAL REPORT")]

        lines += ["", f"  {p.bright}Suites:{p.reset}", "  " + "─" * 60]
        for summary in report.summaries:
            counts = summary.counts
            if counts.failed > 0:
                status = f"{p.red}FAIL{p.reset}"
            elif counts.warned > 0:
                status = f"{p.yellow}WARN{p.reset}"
            else:
                status = f"{p.green}PASS{p.reset}"
            lines.append(f"  {status}  {summary.suite_name}")
            lines.append(
                f"       {p.dim}{counts.passed}/{counts.total} passed, "
                f"{counts.failed} failed, {counts.warned} warnings{p.reset}"
            )

        lines += [
            "",
            f"  {p.bright}Overall Statistics:{p.reset}",
            "  " + "─" * 60,
            f"  Total Checks:   {totals.total}",
            f"  {p.green}Passed:         {totals.passed}{p.reset}",
            f"  {p.red}Failed:         {totals.failed}{p.reset}",
            f"  {p.yellow}Warnings:       {totals.warned}{p.reset}",
            f"  {p.dim}Skipped:        {totals.skipped}{p.reset}",
            f"  Duration:       {format_duration(report.duration_ms)}",
        ]

        rate = report.pass_rate
        if rate is None:
            rate_color = p.dim
        elif rate >= 0.9:
            rate_color = p.green
        elif rate >= 0.7:
            rate_color = p.yellow
        else:
            rate_color = p.red
        lines += [
            "",
            f"  {p.bright}Pass Rate: {rate_color}{format_pass_rate(rate)}{p.reset}",
        ]

        lines += self._failures(report)
        lines += self._warnings(report)
        lines += ["", self.banner(report), ""]
        return lines

    def _failures(self, report: AggregateReport) -> list[str]:
        p = self.palette
        failures = report.failures
        if not failures:
            return []
        lines = [
            "",
            f"  {p.red}{p.bright}🚨 CRITICAL ISSUES REQUIRING ATTENTION:{p.reset}",
            "  " + "─" * 60,
        ]
        for i, flagged in enumerate(failures, start=1):
            lines.append(
                f"  {i}. {p.red}[{flagged.suite_name}]{p.reset} {flagged.outcome.name}"
            )
            lines.append(f"     {p.dim}{flagged.outcome.error}{p.reset}")
        return lines

    def _warnings(self, report: AggregateReport) -> list[str]:
        p = self.palette
        warnings = report.warnings
        if not warnings:
            return []
        lines = [
            "",
            f"  {p.yellow}{p.bright}⚠️  WARNINGS TO CONSIDER:{p.reset}",
            "  " + "─" * 60,
        ]
        shown = warnings[: self.warning_limit]
        for i, flagged in enumerate(shown, start=1):
            lines.append(
                f"  {i}. {p.yellow}[{flagged.suite_name}]{p.reset} "
                f"{flagged.outcome.name}"
            )
        if (hidden := len(warnings) - len(shown)) > 0:
            lines.append(f"  {p.dim}... and {hidden} more warnings{p.reset}")
        return lines

    def banner(self, report: AggregateReport) -> str:
        """Closing banner reflecting the overall status."""
        p = self.palette
        background = {
            "clear": p.bg_green,
            "warnings": p.bg_yellow,
            "failures": p.bg_red,
        }[report.status]
        return f"{background}{p.bright}{BANNERS[report.status]}{p.reset}"
