"""Rendering of run results for the operator."""

import logging
from collections.abc import Sequence

from ui_flake_harness.models.result import RunSummary

EXAMPLES_PER_GROUP = 3
RULE = "=" * 60


def render_failure_groups(
    summary: RunSummary, limit: int = EXAMPLES_PER_GROUP
) -> Sequence[str]:
    """Render each failing step with up to ``limit`` example failures."""
    lines: list[str] = []
    for step_name, records in summary.groups.items():
        lines.append(f"  {step_name}: {len(records)} failures")
        for record in records[:limit]:
            lines.append(f"    - Iteration {record.iteration}: {record.message}")
        if len(records) > limit:
            lines.append(f"    ... and {len(records) - limit} more")
    return lines


def render_report(summary: RunSummary, duration: float) -> Sequence[str]:
    """Render the full report as a list of lines."""
    lines = [RULE, f"Results ({duration:.1f}s)", RULE, f"✓ Passed: {summary.passed}"]

    if summary.failed > 0:
        lines.append(f"✗ Failed: {summary.failed}")
        lines.append("Failures:")
        lines.extend(render_failure_groups(summary))
    else:
        lines.append("All tests passed!")

    lines.append(f"Failure rate: {summary.failure_percentage:.1f}%")
    return lines


def log_report(log: logging.Logger, summary: RunSummary, duration: float) -> None:
    """Log the report one line at a time."""
    for line in render_report(summary, duration):
        log.info("%s", line)


def exit_code(summary: RunSummary) -> int:
    """Return the process exit status for a run: 1 if any step failed."""
    return 1 if summary.failed > 0 else 0
