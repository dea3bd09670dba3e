"""Per-suite accumulator for check outcomes."""

import logging
import time
from collections.abc import Callable, Iterator, Mapping
from contextlib import contextmanager
from typing import Any

from site_check.models.result import Outcome, SuiteSummary

log = logging.getLogger(__name__)


class TestResults:
    """Collects outcomes while a single suite runs.

    Recording methods never raise so that reporting can not itself crash a
    suite. Outcomes keep the order in which they were recorded.
    """

    __test__ = False

    def __init__(
        self, suite_name: str, clock: Callable[[], float] = time.monotonic
    ) -> None:
        self.suite_name = suite_name
        self._clock = clock
        self._start = clock()
        self._outcomes: list[Outcome] = []

    def _elapsed_ms(self) -> int:
        return max(0, int((self._clock() - self._start) * 1000))

    def add_pass(self, name: str, details: Mapping[str, Any] | None = None) -> None:
        """Record a passing check."""
        self._outcomes.append(
            Outcome(
                name=name,
                status="PASS",
                details=details,
                elapsed_ms=self._elapsed_ms(),
            )
        )

    def add_fail(
        self, name: str, error: object, details: Mapping[str, Any] | None = None
    ) -> None:
        """Record a failed check; ``error`` is stored as its string form."""
        self._outcomes.append(
            Outcome(
                name=name,
                status="FAIL",
                error=str(error) or type(error).__name__,
                details=details,
                elapsed_ms=self._elapsed_ms(),
            )
        )

    def add_warn(
        self, name: str, warning: object, details: Mapping[str, Any] | None = None
    ) -> None:
        """Record a non-blocking advisory."""
        self._outcomes.append(
            Outcome(
                name=name,
                status="WARN",
                warning=str(warning),
                details=details,
                elapsed_ms=self._elapsed_ms(),
            )
        )

    def add_skip(self, name: str, reason: object) -> None:
        """Record a check whose precondition was absent."""
        self._outcomes.append(
            Outcome(name=name, status="SKIP", reason=str(reason), elapsed_ms=0)
        )

    @contextmanager
    def check(self, name: str) -> Iterator[None]:
        """Run one check, recording any exception it raises as a failure.

        This is the single catch point for a check body: assertion failures
        and browser errors alike become a FAIL named ``name`` and execution
        continues with the next check.
        """
        try:
            yield
        except Exception as e:
            log.debug("Check %r failed in %s: %s", name, self.suite_name, e)
            self.add_fail(name, e)

    def get_summary(self) -> SuiteSummary:
        """Project the recorded outcomes into a frozen summary."""
        return SuiteSummary.from_outcomes(
            self.suite_name, self._outcomes, self._elapsed_ms()
        )
