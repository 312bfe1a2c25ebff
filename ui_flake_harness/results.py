"""Aggregation of step outcomes into run results."""

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field

from ui_flake_harness.models.outcome import Failure, Outcome, Success
from ui_flake_harness.models.result import FailureRecord, RunSummary

log = logging.getLogger(__name__)


@dataclass(kw_only=True)
class RunResults:
    """Pass/fail counts and failure records for one run.

    Each run owns its own instance; ``record`` is the only mutator.
    """

    passed: int = 0
    failed: int = 0
    _failures: list[FailureRecord] = field(default_factory=list, repr=False)

    @property
    def failures(self) -> Sequence[FailureRecord]:
        """Failure records in the order they were observed."""
        return tuple(self._failures)

    def record(self, outcome: Outcome, iteration: int, step_name: str) -> None:
        """Count an outcome, keeping a record of it if it is a failure."""
        match outcome:
            case Success():
                self.passed += 1
            case Failure(message=message):
                self.failed += 1
                self._failures.append(
                    FailureRecord(
                        iteration=iteration, step_name=step_name, message=message
                    )
                )
                log.debug(
                    "Step failed: iteration=%d step=%s message=%s",
                    iteration,
                    step_name,
                    message,
                )

    def summarize(self) -> RunSummary:
        """Group failures by step name and return a read-only summary."""
        groups: dict[str, list[FailureRecord]] = {}
        for failure in self._failures:
            groups.setdefault(failure.step_name, []).append(failure)

        return RunSummary(
            passed=self.passed,
            failed=self.failed,
            groups={name: tuple(records) for name, records in groups.items()},
        )
