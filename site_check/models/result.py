"""Models for check outcomes, suite summaries and the aggregate report."""

from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any, Literal

Status = Literal["PASS", "FAIL", "WARN", "SKIP"]
ReportStatus = Literal["clear", "warnings", "failures"]


@dataclass(frozen=True, kw_only=True)
class Outcome:
    """Recorded result of a single check.

    Exactly one of ``error``, ``warning`` and ``reason`` is set for FAIL, WARN
    and SKIP respectively; a PASS carries none of them. ``details`` is an
    opaque diagnostic payload that is passed through untouched.
    """

    name: str
    status: Status
    error: str | None = None
    warning: str | None = None
    reason: str | None = None
    details: Mapping[str, Any] | None = None
    elapsed_ms: int = 0

    def __post_init__(self) -> None:
        expected = {
            "error": self.status == "FAIL",
            "warning": self.status == "WARN",
            "reason": self.status == "SKIP",
        }
        for attr, required in expected.items():
            if (getattr(self, attr) is not None) != required:
                raise ValueError(
                    f"Outcome {self.name!r} with status {self.status} "
                    f"{'requires' if required else 'must not set'} {attr!r}"
                )
        if self.elapsed_ms < 0:
            raise ValueError(f"elapsed_ms must be non-negative, got {self.elapsed_ms}")

    @property
    def message(self) -> str | None:
        """Return whichever of error, warning or reason is set."""
        return self.error or self.warning or self.reason

    def to_dict(self) -> dict[str, Any]:
        """Return a JSON-ready mapping, omitting unset message fields."""
        data: dict[str, Any] = {"name": self.name, "status": self.status}
        for attr in ("error", "warning", "reason"):
            if (value := getattr(self, attr)) is not None:
                data[attr] = value
        data["details"] = dict(self.details) if self.details is not None else None
        data["elapsed_ms"] = self.elapsed_ms
        return data


@dataclass(frozen=True, kw_only=True)
class SuiteCounts:
    """Outcome tallies partitioned by status."""

    passed: int = 0
    failed: int = 0
    warned: int = 0
    skipped: int = 0
    total: int = 0

    @classmethod
    def from_outcomes(cls, outcomes: Iterable[Outcome]) -> "SuiteCounts":
        """Count outcomes by status."""
        statuses = [outcome.status for outcome in outcomes]
        return cls(
            passed=statuses.count("PASS"),
            failed=statuses.count("FAIL"),
            warned=statuses.count("WARN"),
            skipped=statuses.count("SKIP"),
            total=len(statuses),
        )

    def __add__(self, other: "SuiteCounts") -> "SuiteCounts":
        return SuiteCounts(
            passed=self.passed + other.passed,
            failed=self.failed + other.failed,
            warned=self.warned + other.warned,
            skipped=self.skipped + other.skipped,
            total=self.total + other.total,
        )


@dataclass(frozen=True, kw_only=True)
class SuiteSummary:
    """Frozen view of one suite run."""

    suite_name: str
    outcomes: tuple[Outcome, ...]
    counts: SuiteCounts
    duration_ms: int

    @classmethod
    def from_outcomes(
        cls, suite_name: str, outcomes: Iterable[Outcome], duration_ms: int
    ) -> "SuiteSummary":
        """Build a summary, deriving the counts from the outcomes."""
        frozen = tuple(outcomes)
        return cls(
            suite_name=suite_name,
            outcomes=frozen,
            counts=SuiteCounts.from_outcomes(frozen),
            duration_ms=duration_ms,
        )

    def to_dict(self) -> dict[str, Any]:
        """Return a JSON-ready mapping of the summary."""
        return {
            "suite": self.suite_name,
            "total": self.counts.total,
            "passed": self.counts.passed,
            "failed": self.counts.failed,
            "warned": self.counts.warned,
            "skipped": self.counts.skipped,
            "duration_ms": self.duration_ms,
            "outcomes": [outcome.to_dict() for outcome in self.outcomes],
        }


@dataclass(frozen=True, kw_only=True)
class FlaggedOutcome:
    """An outcome tagged with the suite it came from."""

    suite_name: str
    outcome: Outcome


@dataclass(frozen=True, kw_only=True)
class AggregateReport:
    """Combination of every suite summary produced by one orchestrator run."""

    summaries: Sequence[SuiteSummary] = field(default_factory=tuple)

    @property
    def totals(self) -> SuiteCounts:
        """Grand totals across all suites."""
        return sum((s.counts for s in self.summaries), SuiteCounts())

    @property
    def duration_ms(self) -> int:
        """Sum of suite durations."""
        return sum(s.duration_ms for s in self.summaries)

    @property
    def pass_rate(self) -> float | None:
        """Passed share of non-skipped checks, None when nothing was checked."""
        totals = self.totals
        denominator = totals.total - totals.skipped
        if denominator <= 0:
            return None
        return totals.passed / denominator

    @property
    def failures(self) -> Sequence[FlaggedOutcome]:
        """Every FAIL outcome, flattened in suite then check order."""
        return self._flagged("FAIL")

    @property
    def warnings(self) -> Sequence[FlaggedOutcome]:
        """Every WARN outcome, flattened in suite then check order."""
        return self._flagged("WARN")

    @property
    def exit_code(self) -> int:
        """1 if any suite recorded a failure, else 0."""
        return 1 if any(s.counts.failed > 0 for s in self.summaries) else 0

    @property
    def status(self) -> ReportStatus:
        """Overall status used for the closing banner."""
        totals = self.totals
        if totals.failed > 0:
            return "failures"
        if totals.warned > 0:
            return "warnings"
        return "clear"

    def _flagged(self, status: Status) -> Sequence[FlaggedOutcome]:
        return [
            FlaggedOutcome(suite_name=summary.suite_name, outcome=outcome)
            for summary in self.summaries
            for outcome in summary.outcomes
            if outcome.status == status
        ]

    def to_dict(self) -> dict[str, Any]:
        """Return a JSON-ready mapping of the report."""
        totals = self.totals
        return {
            "total": totals.total,
            "passed": totals.passed,
            "failed": totals.failed,
            "warned": totals.warned,
            "skipped": totals.skipped,
            "pass_rate": self.pass_rate,
            "duration_ms": self.duration_ms,
            "exit_code": self.exit_code,
            "suites": [summary.to_dict() for summary in self.summaries],
        }
