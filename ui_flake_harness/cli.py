"""CLI entry point for the UI flake harness."""

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path

from yarl import URL

from ui_flake_harness.clients.errors import BrowserConnectionError
from ui_flake_harness.clients.loading import load_client_manifest
from ui_flake_harness.config import (
    DEFAULT_ITERATIONS,
    FixedPageSuiteConfig,
    HarnessConfig,
    LiveAppSuiteConfig,
    PacingConfig,
    SuiteConfig,
)
from ui_flake_harness.driver import IterationDriver, SetupError
from ui_flake_harness.reporter import exit_code, log_report

DEFAULT_FIXTURE = "test-react-inputs.html"
LOCAL_HOSTS = frozenset({"localhost", "127.0.0.1"})
RULE = "━" * 48


class SuiteSelectionError(ValueError):
    """Raised when no suite is given and none can be inferred from the URL."""


def default_target_url() -> str:
    """Return the file URL of the test page in the working directory."""
    return (Path.cwd() / DEFAULT_FIXTURE).as_uri()


def derive_base_url(url: str) -> str:
    """Drop the last path segment, query and fragment from ``url``.

    ``http://localhost:8080/settings`` becomes ``http://localhost:8080``.
    """
    parsed = URL(url)
    parent = parsed.path.rsplit("/", 1)[0]
    return str(parsed.with_path(parent).with_query(None).with_fragment(None)).rstrip(
        "/"
    )


def select_suite(url: str, kind: str | None = None) -> SuiteConfig:
    """Pick the suite for a target URL.

    An explicit ``kind`` always wins. Otherwise file URLs select the fixed
    page suite and http(s) URLs on the local host select the live app suite.

    Raises:
        SuiteSelectionError: If ``kind`` is None and the URL matches neither

    """
    if kind == "fixed-page":
        return FixedPageSuiteConfig()
    if kind == "live-app":
        return LiveAppSuiteConfig(base_url=derive_base_url(url))

    parsed = URL(url)
    if parsed.scheme == "file":
        return FixedPageSuiteConfig()
    if parsed.scheme in {"http", "https"} and parsed.host in LOCAL_HOSTS:
        return LiveAppSuiteConfig(base_url=derive_base_url(url))

    raise SuiteSelectionError(
        f"Cannot infer the suite for {url}; pass --suite fixed-page or --suite live-app"
    )


def non_negative_int(value: str) -> int:
    """Parse an iteration count."""
    number = int(value)
    if number < 0:
        raise argparse.ArgumentTypeError(f"must be >= 0, got {number}")
    return number


def log_run_header(log: logging.Logger, config: HarnessConfig) -> None:
    """Log what is about to run."""
    mode = "Live App" if isinstance(config.suite, LiveAppSuiteConfig) else "Test Page"
    log.info(RULE)
    log.info("UI flake harness")
    log.info("Iterations: %d", config.iterations)
    log.info("Test URL: %s", config.target_url)
    log.info("Mode: %s", mode)
    log.info(RULE)


async def run(
    config: HarnessConfig, client_key: str = "cdp", client_config_json: str = "{}"
) -> int:
    """Run the harness and return exit code."""
    log = logging.getLogger("ui_flake_harness")

    log.info("Loading client: %s", client_key)
    manifest = load_client_manifest(client_key)
    client_config = manifest.config_cls(**json.loads(client_config_json))

    log_run_header(log, config)

    async with manifest.client_factory(client_config) as client:
        driver = IterationDriver(client=client)
        try:
            report = await driver.run(config)
        except SetupError as e:
            log.error("✗ %s", e)
            if isinstance(e.__cause__, BrowserConnectionError):
                log.error(
                    "  Make sure Chrome is running with --remote-debugging-port=9222"
                )
            return 1

    summary = report.results.summarize()
    log_report(log, summary, report.duration)
    return exit_code(summary)


def main() -> None:
    """CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Repeat browser interactions to catch intermittent failures"
    )
    parser.add_argument(
        "iterations",
        nargs="?",
        type=non_negative_int,
        default=DEFAULT_ITERATIONS,
        help=f"Number of iterations (default: {DEFAULT_ITERATIONS})",
    )
    parser.add_argument(
        "url",
        nargs="?",
        default=None,
        help=f"Page to test (default: ./{DEFAULT_FIXTURE})",
    )
    parser.add_argument(
        "--suite",
        choices=["fixed-page", "live-app"],
        default=None,
        help="Suite to run (default: inferred from the URL)",
    )
    parser.add_argument(
        "--client",
        default="cdp",
        help="Automation client key (default: cdp)",
    )
    parser.add_argument(
        "--client-config",
        default="{}",
        help="JSON configuration for the client",
    )
    parser.add_argument(
        "--pacing",
        default="{}",
        help="JSON overrides for the pauses between interactions, in seconds",
    )
    parser.add_argument("--verbose", action="store_true", help="Enable debug logs")

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )
    log = logging.getLogger("ui_flake_harness")

    try:
        target_url = args.url or default_target_url()
        config = HarnessConfig(
            iterations=args.iterations,
            target_url=target_url,
            suite=select_suite(target_url, args.suite),
            pacing=PacingConfig.model_validate_json(args.pacing),
        )
        code = asyncio.run(run(config, args.client, args.client_config))
    except Exception as e:
        log.exception("Fatal error: %s", e)
        code = 1
    sys.exit(code)


if __name__ == "__main__":  # pragma: no cover
    main()
