"""Configuration for a harness run."""

from typing import Annotated, Literal

from pydantic import Field

from ui_flake_harness.models.base import Model

DEFAULT_ITERATIONS = 50

Seconds = Annotated[float, Field(ge=0)]


class PacingConfig(Model):
    """Pauses inserted between browser interactions, in seconds.

    These give the page time to apply pending state updates. They are a
    best-effort heuristic and do not guarantee the page has settled.
    """

    load_settle: Seconds = 1.0
    reset_settle: Seconds = 0.05
    iteration_pause: Seconds = 0.1
    click_settle: Seconds = 0.05
    type_settle: Seconds = 0.05
    submit_settle: Seconds = 0.1
    navigation_settle: Seconds = 0.5
    live_click_settle: Seconds = 0.2
    live_type_settle: Seconds = 0.1
    live_cancel_settle: Seconds = 0.1


class FixedPageSuiteConfig(Model):
    """Run the fixed input suite against the bundled test page."""

    kind: Literal["fixed-page"] = "fixed-page"


class LiveAppSuiteConfig(Model):
    """Run the settings workflow against a live application."""

    kind: Literal["live-app"] = "live-app"
    base_url: str = Field(..., description="Application origin, without a trailing /")


SuiteConfig = Annotated[
    FixedPageSuiteConfig | LiveAppSuiteConfig, Field(discriminator="kind")
]


class HarnessConfig(Model):
    """Everything the iteration driver needs for one run."""

    iterations: int = Field(default=DEFAULT_ITERATIONS, ge=0)
    target_url: str = Field(..., description="Page loaded before the first iteration")
    suite: SuiteConfig = Field(default_factory=FixedPageSuiteConfig)
    pacing: PacingConfig = Field(default_factory=PacingConfig)
