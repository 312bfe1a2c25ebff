"""Tests for test steps."""

from unittest.mock import AsyncMock, Mock, patch

import pytest

from ui_flake_harness.clients.base import ENTER, AutomationClient
from ui_flake_harness.clients.errors import (
    InteractionError,
    NavigationError,
    SelectorNotFoundError,
)
from ui_flake_harness.models.outcome import Failure, Success
from ui_flake_harness.steps import (
    click_step,
    fill_step,
    navigate_step,
    type_and_submit_step,
    type_step,
    value_script,
    xpath_click_step,
)
from ui_flake_harness.testing.factories import PacingConfigFactory


@pytest.fixture
def client_mock() -> Mock:
    """Create mock automation client."""
    return Mock(spec=AutomationClient)


def test_value_script_quotes_selector() -> None:
    """Selector is embedded as a JSON string literal."""
    script = value_script('form input[type="text"]')

    assert script == (
        "document.querySelector(\"form input[type=\\\"text\\\"]\")?.value || ''"
    )


class TestClickStep:
    """Tests for click_step."""

    async def test_succeeds_when_click_completes(self, client_mock: Mock) -> None:
        """Completed click is a success."""
        client_mock.click = AsyncMock()
        step = click_step(
            client_mock, "tab", name="Click button", selector="#b", settle=0
        )

        outcome = await step.run()

        assert step.name == "Click button"
        assert outcome == Success()
        client_mock.click.assert_awaited_once_with("tab", "#b")

    async def test_converts_client_error_to_failure(self, client_mock: Mock) -> None:
        """Client errors become failures carrying the message."""
        client_mock.click = AsyncMock(
            side_effect=SelectorNotFoundError("Element not found: #b")
        )
        step = click_step(
            client_mock, "tab", name="Click button", selector="#b", settle=0
        )

        outcome = await step.run()

        assert outcome == Failure(
            message="Element not found: #b", error_type="SelectorNotFoundError"
        )

    async def test_xpath_click_passes_expression_through(
        self, client_mock: Mock
    ) -> None:
        """XPath unions are handed to the client unchanged."""
        client_mock.click = AsyncMock()
        xpath = "//a[text()='Go'] | //button[text()='Go']"
        step = xpath_click_step(client_mock, "tab", name="Go", xpath=xpath, settle=0)

        assert await step.run() == Success()
        client_mock.click.assert_awaited_once_with("tab", xpath)


class TestTypeStep:
    """Tests for type_step."""

    async def test_succeeds_with_read_back_value(self, client_mock: Mock) -> None:
        """Non-empty read-back is a success carrying the value."""
        client_mock.fill = AsyncMock()
        client_mock.eval = AsyncMock(return_value="HELLO")
        step = type_step(
            client_mock, "tab", name="Type", selector="#t", text="hello", settle=0
        )

        outcome = await step.run()

        assert outcome == Success(value="HELLO")
        client_mock.fill.assert_awaited_once_with("tab", "hello", "#t")
        client_mock.eval.assert_awaited_once_with("tab", value_script("#t"))

    @pytest.mark.parametrize("read_back", ["", None])
    async def test_fails_when_value_is_empty(
        self, client_mock: Mock, read_back: str | None
    ) -> None:
        """Empty read-back is a failure."""
        client_mock.fill = AsyncMock()
        client_mock.eval = AsyncMock(return_value=read_back)
        step = type_step(
            client_mock, "tab", name="Type", selector="#t", text="abc", settle=0
        )

        outcome = await step.run()

        assert outcome == Failure(message='Value not set. Expected text, got: ""')

    async def test_fill_error_skips_read_back(self, client_mock: Mock) -> None:
        """A failed fill is reported without reading the value."""
        client_mock.fill = AsyncMock(side_effect=InteractionError("detached"))
        client_mock.eval = AsyncMock()
        step = type_step(
            client_mock, "tab", name="Type", selector="#t", text="abc", settle=0
        )

        outcome = await step.run()

        assert isinstance(outcome, Failure)
        assert outcome.message == "detached"
        client_mock.eval.assert_not_awaited()


class TestTypeAndSubmitStep:
    """Tests for type_and_submit_step."""

    async def test_appends_enter(self, client_mock: Mock) -> None:
        """Submit step types the text followed by Enter."""
        client_mock.fill = AsyncMock()
        step = type_and_submit_step(
            client_mock,
            "tab",
            name="Search",
            selector="#q",
            text="query",
            pacing=PacingConfigFactory.build(),
        )

        assert await step.run() == Success()
        client_mock.fill.assert_awaited_once_with("tab", "query" + ENTER, "#q")

    async def test_pauses_for_submit_settle(self, client_mock: Mock) -> None:
        """The pause after submitting follows the configured submit_settle."""
        client_mock.fill = AsyncMock()
        step = type_and_submit_step(
            client_mock,
            "tab",
            name="Search",
            selector="#q",
            text="query",
            pacing=PacingConfigFactory.build(submit_settle=2.0),
        )

        with patch("ui_flake_harness.steps.asyncio.sleep") as sleep_mock:
            await step.run()

        sleep_mock.assert_awaited_once_with(2.0)

    async def test_failed_fill_skips_pause(self, client_mock: Mock) -> None:
        """No pause is taken when typing fails."""
        client_mock.fill = AsyncMock(side_effect=InteractionError("detached"))
        step = type_and_submit_step(
            client_mock,
            "tab",
            name="Search",
            selector="#q",
            text="query",
            pacing=PacingConfigFactory.build(submit_settle=2.0),
        )

        with patch("ui_flake_harness.steps.asyncio.sleep") as sleep_mock:
            outcome = await step.run()

        assert isinstance(outcome, Failure)
        sleep_mock.assert_not_awaited()


async def test_fill_step_does_not_read_back(client_mock: Mock) -> None:
    """Fill step succeeds as soon as typing completes."""
    client_mock.fill = AsyncMock()
    client_mock.eval = AsyncMock()
    step = fill_step(client_mock, "tab", name="Name", selector="#n", text="x", settle=0)

    assert await step.run() == Success()
    client_mock.eval.assert_not_awaited()


async def test_navigate_step_reports_navigation_error(client_mock: Mock) -> None:
    """Navigation errors become failures."""
    client_mock.navigate = AsyncMock(side_effect=NavigationError("net::ERR_FAILED"))
    step = navigate_step(client_mock, "tab", name="Nav", url="http://x/", settle=0)

    outcome = await step.run()

    assert outcome == Failure(message="net::ERR_FAILED", error_type="NavigationError")
