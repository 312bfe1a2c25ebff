"""Suite walking through the organization form of a live application."""

import logging
from collections.abc import AsyncIterator
from dataclasses import dataclass

from ui_flake_harness.models.outcome import Success
from ui_flake_harness.steps import (
    click_step,
    fill_step,
    navigate_step,
    xpath_click_step,
)
from ui_flake_harness.suites.base import StepOutcome, TestSuite

log = logging.getLogger(__name__)

SETTINGS_PATH = "/settings"
NEW_ORGANIZATION_XPATH = (
    "//a[text()='New Organization'] | //button[text()='New Organization']"
)
ORG_NAME_INPUT = 'form input[type="text"]'
CANCEL_BUTTON = "button[type='button']"


@dataclass(frozen=True, kw_only=True)
class LiveAppSuite[TabT](TestSuite[TabT]):
    """Open the new organization form, type a name, then cancel.

    Cancelling keeps repeated runs from creating organizations. Navigation is
    a precondition for the other steps: if it fails, the iteration ends there.
    The remaining steps are independent and all run even when one fails.
    """

    async def run_iteration(self, iteration: int) -> AsyncIterator[StepOutcome]:
        """Run the workflow once."""
        client, tab, pacing = self.client, self.context.tab, self.pacing

        navigate = navigate_step(
            client,
            tab,
            name="Navigate to settings",
            url=f"{self.context.base_url}{SETTINGS_PATH}",
            settle=pacing.navigation_settle,
        )
        outcome = await navigate.run()
        yield StepOutcome(step_name=navigate.name, outcome=outcome)
        if not isinstance(outcome, Success):
            log.debug("Skipping remaining steps of iteration %d", iteration)
            return

        steps = [
            xpath_click_step(
                client,
                tab,
                name="Click New Organization (XPath)",
                xpath=NEW_ORGANIZATION_XPATH,
                settle=pacing.live_click_settle,
            ),
            fill_step(
                client,
                tab,
                name="Type org name",
                selector=ORG_NAME_INPUT,
                text=f"TestOrg{iteration}",
                settle=pacing.live_type_settle,
            ),
            click_step(
                client,
                tab,
                name="Click Cancel",
                selector=CANCEL_BUTTON,
                settle=pacing.live_cancel_settle,
            ),
        ]
        for step in steps:
            yield StepOutcome(step_name=step.name, outcome=await step.run())
