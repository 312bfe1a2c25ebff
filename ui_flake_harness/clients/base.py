"""Abstract base class for browser automation clients."""

import re
from abc import ABC, abstractmethod
from typing import Any

ENTER = "\n"

QUOTED = re.compile(r"'[^']*'|\"[^\"]*\"")


def is_xpath(selector: str) -> bool:
    """Return True when the selector should be resolved as an XPath expression.

    Expressions rooted at ``/`` or ``(``, or containing ``//`` or a ``|``
    union, are XPath. Everything else is treated as a CSS selector. Quoted
    strings are ignored when looking for ``//`` and ``|``, so a CSS attribute
    selector such as ``a[href^="https://"]`` stays CSS.
    """
    stripped = selector.strip()
    unquoted = QUOTED.sub("", stripped)
    return (
        stripped.startswith(("/", "("))
        or "//" in unquoted
        or " | " in unquoted
    )


class AutomationClient[TabT](ABC):
    """Abstract capability interface for driving one browser tab.

    Generic type TabT is the tab handle - whatever the client needs to
    address the tab it opened in ``initialize_session``. Callers treat it as
    opaque and pass it back on every call.
    """

    @abstractmethod
    async def initialize_session(self) -> TabT:
        """Attach to a debuggable browser and return a tab handle.

        Raises:
            BrowserConnectionError: If no browser instance is reachable

        """

    @abstractmethod
    async def navigate(self, tab: TabT, url: str) -> None:
        """Navigate the tab to ``url``.

        Raises:
            NavigationError: If the navigation fails

        """

    @abstractmethod
    async def click(self, tab: TabT, selector: str) -> None:
        """Click the element matched by a CSS selector or XPath expression.

        Raises:
            SelectorNotFoundError: If nothing matches the selector
            InteractionError: If the click cannot be dispatched

        """

    @abstractmethod
    async def fill(self, tab: TabT, text: str, selector: str) -> None:
        """Replace the element's content with ``text``.

        Each ``ENTER`` inside ``text`` is sent as an Enter key press.

        Raises:
            SelectorNotFoundError: If nothing matches the selector
            InteractionError: If typing cannot be dispatched

        """

    @abstractmethod
    async def eval(self, tab: TabT, expression: str) -> Any:
        """Evaluate ``expression`` in the page and return its value.

        Raises:
            EvaluationError: If the expression throws

        """
