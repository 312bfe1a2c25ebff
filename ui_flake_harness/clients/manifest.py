"""Client manifest definition for the plugin system."""

from collections.abc import Callable
from contextlib import AbstractAsyncContextManager
from dataclasses import dataclass

from pydantic import BaseModel

from ui_flake_harness.clients.base import AutomationClient


@dataclass(frozen=True, kw_only=True)
class ClientManifest[ConfigT: BaseModel, TabT]:
    """Manifest describing an automation client plugin.

    The manifest contains references to the configuration class and the
    client factory function so clients can be loaded lazily by key.
    """

    config_cls: type[ConfigT]
    client_factory: Callable[
        [ConfigT], AbstractAsyncContextManager[AutomationClient[TabT]]
    ]
