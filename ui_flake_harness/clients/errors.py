"""Errors raised by browser automation clients."""


class AutomationError(Exception):
    """Base class for every error an automation client may raise."""


class BrowserConnectionError(AutomationError):
    """Raised when no debuggable browser instance is reachable."""


class NavigationError(AutomationError):
    """Raised when a tab cannot be navigated to a URL."""


class SelectorNotFoundError(AutomationError):
    """Raised when a selector matches no element on the page."""


class InteractionError(AutomationError):
    """Raised when a click or keyboard interaction cannot be performed."""


class EvaluationError(AutomationError):
    """Raised when a script expression throws in the page context."""
