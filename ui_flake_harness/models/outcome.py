"""Models for the outcome of a single test step."""

from dataclasses import dataclass


@dataclass(frozen=True, kw_only=True)
class Success:
    """Step completed and its post-condition held.

    ``value`` carries whatever the step read back from the page, if anything.
    """

    value: str | None = None


@dataclass(frozen=True, kw_only=True)
class Failure:
    """Step raised an automation error or its post-condition did not hold."""

    message: str
    error_type: str | None = None


type Outcome = Success | Failure
