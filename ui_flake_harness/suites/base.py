"""Abstract base class for test suite strategies."""

from abc import ABC, abstractmethod
from collections.abc import AsyncIterator
from dataclasses import dataclass

from ui_flake_harness.clients.base import AutomationClient
from ui_flake_harness.config import PacingConfig
from ui_flake_harness.models.outcome import Outcome


@dataclass(frozen=True, kw_only=True)
class SuiteContext[TabT]:
    """The tab under test and, for live applications, its base URL."""

    tab: TabT
    base_url: str | None = None


@dataclass(frozen=True, kw_only=True)
class StepOutcome:
    """Outcome of a step, labelled with the step's name."""

    step_name: str
    outcome: Outcome


@dataclass(frozen=True, kw_only=True)
class TestSuite[TabT](ABC):
    """A scenario of browser interactions repeated once per iteration.

    Suites never raise from ``run_iteration``: every client error is turned
    into a failed outcome by the step that hit it.
    """

    __test__ = False

    client: AutomationClient[TabT]
    context: SuiteContext[TabT]
    pacing: PacingConfig

    async def prepare(self, iteration: int) -> None:
        """Reset page state before an iteration. Does nothing by default."""

    @abstractmethod
    def run_iteration(self, iteration: int) -> AsyncIterator[StepOutcome]:
        """Run one iteration, yielding each step's outcome as it completes.

        Args:
            iteration: 1-based iteration index, used to vary typed text

        """
