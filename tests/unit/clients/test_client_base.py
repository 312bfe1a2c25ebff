"""Tests for the automation client interface helpers."""

import pytest

from ui_flake_harness.clients.base import is_xpath


@pytest.mark.parametrize(
    "selector",
    [
        "//button[text()='Save']",
        "//a[text()='New Organization'] | //button[text()='New Organization']",
        "(//input)[2]",
        "/html/body/div",
        "  //div",
        "//a[contains(@href, '//cdn')]",
    ],
)
def test_recognizes_xpath(selector: str) -> None:
    """XPath expressions are detected."""
    assert is_xpath(selector)


@pytest.mark.parametrize(
    "selector",
    [
        "#test-button",
        'form input[type="text"]',
        "button[type='button']",
        "div > span.label",
        "[lang|=en]",
        'a[href^="https://"]',
        "img[src*='//cdn.example.com']",
        'option[value="a | b"]',
    ],
)
def test_treats_everything_else_as_css(selector: str) -> None:
    """CSS selectors are not mistaken for XPath."""
    assert not is_xpath(selector)
