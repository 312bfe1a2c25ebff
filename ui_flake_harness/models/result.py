"""Models for aggregated run results."""

from collections.abc import Mapping, Sequence
from dataclasses import dataclass


@dataclass(frozen=True, kw_only=True)
class FailureRecord:
    """A failed step observed during a run."""

    iteration: int
    step_name: str
    message: str


@dataclass(frozen=True, kw_only=True)
class RunSummary:
    """Read-only view of a run's results, with failures grouped by step name.

    ``groups`` preserves the order in which each step name first failed.
    """

    passed: int
    failed: int
    groups: Mapping[str, Sequence[FailureRecord]]

    @property
    def total(self) -> int:
        """Number of step outcomes recorded."""
        return self.passed + self.failed

    @property
    def failure_rate(self) -> float:
        """Fraction of outcomes that failed, 0.0 when nothing ran."""
        if self.total == 0:
            return 0.0
        return self.failed / self.total

    @property
    def failure_percentage(self) -> float:
        """Failure rate expressed as a percentage."""
        return self.failure_rate * 100
