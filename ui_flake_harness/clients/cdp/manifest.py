"""Chrome DevTools Protocol client manifest."""

from ui_flake_harness.clients.cdp.client import CdpAutomationClient
from ui_flake_harness.clients.cdp.config import CdpConfig
from ui_flake_harness.clients.manifest import ClientManifest

cdp_manifest = ClientManifest(
    config_cls=CdpConfig,
    client_factory=CdpAutomationClient.from_config,
)
