"""Suite exercising every input variant on the bundled test page."""

import asyncio
import logging
from collections.abc import AsyncIterator, Sequence
from dataclasses import dataclass

from ui_flake_harness.clients.base import ENTER
from ui_flake_harness.steps import TestStep, click_step, type_step
from ui_flake_harness.suites.base import StepOutcome, TestSuite

log = logging.getLogger(__name__)

RESET_INPUTS_SCRIPT = """
document.querySelectorAll('input, textarea').forEach(el => {
  el.value = '';
  el.dispatchEvent(new Event('input', { bubbles: true }));
});
"""


@dataclass(frozen=True, kw_only=True)
class FixedPageSuite[TabT](TestSuite[TabT]):
    """Click the test button, then type into each input variant on the page."""

    def steps(self, iteration: int) -> Sequence[TestStep]:
        """Build this iteration's steps.

        Most payloads embed the iteration index so a value left over from the
        previous iteration cannot pass for a fresh one.
        """
        tab = self.context.tab
        settle = self.pacing.type_settle

        def typing(name: str, selector: str, text: str) -> TestStep:
            return type_step(
                self.client, tab, name=name, selector=selector, text=text, settle=settle
            )

        return [
            click_step(
                self.client,
                tab,
                name="Click button",
                selector="#test-button",
                settle=self.pacing.click_settle,
            ),
            typing("Type in controlled input", "#controlled-input", f"test{iteration}"),
            typing(
                "Type in uncontrolled input", "#uncontrolled-input", f"test{iteration}"
            ),
            typing("Type in validated input", "#validated-input", "abc"),
            typing("Type in nested input", "#nested-input", f"test{iteration}"),
            typing("Type in transform input", "#transform-input", "hello"),
            typing("Type in debounced input", "#debounced-input", f"test{iteration}"),
            typing("Type in email input", "#email-input", "test@example.com"),
            typing("Type in textarea", "#controlled-textarea", f"line1{ENTER}line2"),
        ]

    async def prepare(self, iteration: int) -> None:
        """Empty every input and textarea, notifying the page of each change."""
        log.debug("Clearing inputs before iteration %d", iteration)
        await self.client.eval(self.context.tab, RESET_INPUTS_SCRIPT)
        await asyncio.sleep(self.pacing.reset_settle)

    async def run_iteration(self, iteration: int) -> AsyncIterator[StepOutcome]:
        """Run every step in order; a failed step does not stop the rest."""
        for step in self.steps(iteration):
            yield StepOutcome(step_name=step.name, outcome=await step.run())
