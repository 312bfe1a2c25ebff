"""Discovery of automation clients registered as entry points."""

from collections.abc import Sequence
from importlib.metadata import entry_points
from typing import Any

from ui_flake_harness.clients.manifest import ClientManifest

ENTRY_POINT_GROUP = "ui_flake_harness.clients"


class ClientNotFoundError(Exception):
    """Raised when no client is registered under the requested key."""


def available_clients() -> Sequence[str]:
    """Return the sorted keys of every registered client."""
    return sorted({entry.name for entry in entry_points(group=ENTRY_POINT_GROUP)})


def load_client_manifest(key: str) -> ClientManifest[Any, Any]:
    """Load a client manifest by key.

    Args:
        key: The client key as registered in pyproject.toml (e.g., "cdp")

    Returns:
        The manifest object the entry point refers to

    Raises:
        ClientNotFoundError: If no client with the given key is registered

    """
    matches = entry_points(group=ENTRY_POINT_GROUP, name=key)
    for entry in matches:
        manifest: ClientManifest[Any, Any] = entry.load()
        return manifest

    raise ClientNotFoundError(
        f"Client '{key}' not found. Available clients: {list(available_clients())}"
    )
