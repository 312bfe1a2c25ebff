"""Iteration driver repeating a suite against one browser tab."""

import asyncio
import enum
import logging
import time
from dataclasses import dataclass, field

from ui_flake_harness.clients.base import AutomationClient
from ui_flake_harness.clients.errors import AutomationError
from ui_flake_harness.config import HarnessConfig
from ui_flake_harness.results import RunResults
from ui_flake_harness.suites.factory import build_suite

log = logging.getLogger(__name__)


class DriverState(enum.Enum):
    """Lifecycle of a single harness run."""

    IDLE = "idle"
    CONNECTING = "connecting"
    CONNECTED = "connected"
    NAVIGATED = "navigated"
    RUNNING = "running"
    DONE = "done"


class SetupError(Exception):
    """Raised when the run cannot start: no browser or no test page."""


@dataclass(frozen=True, kw_only=True)
class RunReport:
    """What a completed run produced."""

    results: RunResults
    iterations: int
    duration: float


@dataclass(kw_only=True)
class IterationDriver[TabT]:
    """Connects to the browser, loads the target page and repeats a suite.

    Errors while connecting or loading the page abort the run with
    ``SetupError``. Once iterations start, step failures are only recorded.
    """

    client: AutomationClient[TabT]
    state: DriverState = field(default=DriverState.IDLE, init=False)

    def _transition(self, state: DriverState) -> None:
        log.debug("Driver state: %s -> %s", self.state.value, state.value)
        self.state = state

    async def connect(self) -> TabT:
        """Acquire the tab every iteration will run in."""
        self._transition(DriverState.CONNECTING)
        try:
            tab = await self.client.initialize_session()
        except AutomationError as e:
            raise SetupError(f"Failed to connect to browser: {e}") from e
        self._transition(DriverState.CONNECTED)
        log.info("Connected to browser (tab: %s)", tab)
        return tab

    async def load(self, tab: TabT, url: str, settle: float) -> None:
        """Navigate to the page under test and give it time to initialize."""
        try:
            await self.client.navigate(tab, url)
        except AutomationError as e:
            raise SetupError(f"Failed to load test page: {e}") from e
        await asyncio.sleep(settle)
        self._transition(DriverState.NAVIGATED)
        log.info("Loaded test page: %s", url)

    async def run(
        self, config: HarnessConfig, results: RunResults | None = None
    ) -> RunReport:
        """Run ``config.iterations`` iterations of the configured suite.

        Args:
            config: Target page, suite selection, iteration count and pacing
            results: Results to record into; a fresh instance when omitted

        Returns:
            The recorded results and how long the iterations took

        Raises:
            SetupError: If the browser or the target page is unreachable

        """
        results = results if results is not None else RunResults()
        pacing = config.pacing

        tab = await self.connect()
        await self.load(tab, config.target_url, pacing.load_settle)

        suite = build_suite(config.suite, self.client, tab, pacing)
        self._transition(DriverState.RUNNING)
        started = time.monotonic()

        for iteration in range(1, config.iterations + 1):
            log.info("Running iteration %d/%d", iteration, config.iterations)
            await suite.prepare(iteration)
            async for step_outcome in suite.run_iteration(iteration):
                results.record(step_outcome.outcome, iteration, step_outcome.step_name)
            await asyncio.sleep(pacing.iteration_pause)

        duration = time.monotonic() - started
        self._transition(DriverState.DONE)

        return RunReport(
            results=results, iterations=config.iterations, duration=duration
        )
