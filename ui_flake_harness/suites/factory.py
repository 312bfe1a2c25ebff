"""Construction of suite strategies from their configuration."""

from ui_flake_harness.clients.base import AutomationClient
from ui_flake_harness.config import (
    FixedPageSuiteConfig,
    LiveAppSuiteConfig,
    PacingConfig,
    SuiteConfig,
)
from ui_flake_harness.suites.base import SuiteContext, TestSuite
from ui_flake_harness.suites.fixed_page import FixedPageSuite
from ui_flake_harness.suites.live_app import LiveAppSuite


def build_suite[TabT](
    config: SuiteConfig,
    client: AutomationClient[TabT],
    tab: TabT,
    pacing: PacingConfig,
) -> TestSuite[TabT]:
    """Create the suite strategy selected by ``config`` for the given tab."""
    match config:
        case FixedPageSuiteConfig():
            return FixedPageSuite(
                client=client, context=SuiteContext(tab=tab), pacing=pacing
            )
        case LiveAppSuiteConfig(base_url=base_url):
            return LiveAppSuite(
                client=client,
                context=SuiteContext(tab=tab, base_url=base_url.rstrip("/")),
                pacing=pacing,
            )
