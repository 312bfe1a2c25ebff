"""Test steps: one browser interaction plus its success judgment."""

import asyncio
import json
from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from ui_flake_harness.clients.base import ENTER, AutomationClient
from ui_flake_harness.clients.errors import AutomationError
from ui_flake_harness.config import PacingConfig
from ui_flake_harness.models.outcome import Failure, Outcome, Success


@dataclass(frozen=True, kw_only=True)
class TestStep:
    """A named browser interaction.

    ``name`` is the key failures are grouped under, so it must stay the same
    across iterations even when the action's payload changes.
    """

    __test__ = False

    name: str
    action: Callable[[], Awaitable[Outcome]]

    async def run(self) -> Outcome:
        """Execute the action and return its outcome."""
        return await self.action()


def failure_from(error: AutomationError) -> Failure:
    """Convert an automation client error into a failed outcome."""
    return Failure(message=str(error), error_type=type(error).__name__)


def value_script(selector: str) -> str:
    """Return an expression reading the value of the element at ``selector``."""
    return f"document.querySelector({json.dumps(selector)})?.value || ''"


def click_step[TabT](
    client: AutomationClient[TabT],
    tab: TabT,
    *,
    name: str,
    selector: str,
    settle: float,
) -> TestStep:
    """Click ``selector``; succeeds if the click is dispatched."""

    async def action() -> Outcome:
        try:
            await client.click(tab, selector)
        except AutomationError as e:
            return failure_from(e)
        await asyncio.sleep(settle)
        return Success()

    return TestStep(name=name, action=action)


def xpath_click_step[TabT](
    client: AutomationClient[TabT],
    tab: TabT,
    *,
    name: str,
    xpath: str,
    settle: float,
) -> TestStep:
    """Click the element matched by an XPath expression.

    The expression may be a union of alternatives; resolving it is left to
    the client.
    """
    return click_step(client, tab, name=name, selector=xpath, settle=settle)


def type_step[TabT](
    client: AutomationClient[TabT],
    tab: TabT,
    *,
    name: str,
    selector: str,
    text: str,
    settle: float,
) -> TestStep:
    """Type ``text`` into ``selector`` and verify the element holds a value.

    Any non-empty read-back counts as success so inputs that transform or
    mask what is typed still pass.
    """

    async def action() -> Outcome:
        try:
            await client.fill(tab, text, selector)
            await asyncio.sleep(settle)
            value = await client.eval(tab, value_script(selector))
        except AutomationError as e:
            return failure_from(e)

        if value:
            return Success(value=str(value))
        return Failure(message=f'Value not set. Expected text, got: "{value or ""}"')

    return TestStep(name=name, action=action)


def type_and_submit_step[TabT](
    client: AutomationClient[TabT],
    tab: TabT,
    *,
    name: str,
    selector: str,
    text: str,
    pacing: PacingConfig,
) -> TestStep:
    """Type ``text`` followed by Enter; succeeds if the keystrokes are sent.

    The pause after submitting is ``pacing.submit_settle``.
    """

    async def action() -> Outcome:
        try:
            await client.fill(tab, text + ENTER, selector)
        except AutomationError as e:
            return failure_from(e)
        await asyncio.sleep(pacing.submit_settle)
        return Success()

    return TestStep(name=name, action=action)


def fill_step[TabT](
    client: AutomationClient[TabT],
    tab: TabT,
    *,
    name: str,
    selector: str,
    text: str,
    settle: float,
) -> TestStep:
    """Type ``text`` into ``selector`` without reading the value back."""

    async def action() -> Outcome:
        try:
            await client.fill(tab, text, selector)
        except AutomationError as e:
            return failure_from(e)
        await asyncio.sleep(settle)
        return Success()

    return TestStep(name=name, action=action)


def navigate_step[TabT](
    client: AutomationClient[TabT],
    tab: TabT,
    *,
    name: str,
    url: str,
    settle: float,
) -> TestStep:
    """Navigate the tab to ``url``; succeeds if navigation completes."""

    async def action() -> Outcome:
        try:
            await client.navigate(tab, url)
        except AutomationError as e:
            return failure_from(e)
        await asyncio.sleep(settle)
        return Success()

    return TestStep(name=name, action=action)
