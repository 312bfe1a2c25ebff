"""Chrome DevTools Protocol client module."""

from ui_flake_harness.clients.cdp.client import CdpAutomationClient
from ui_flake_harness.clients.cdp.config import CdpConfig
from ui_flake_harness.clients.cdp.manifest import cdp_manifest
from ui_flake_harness.clients.cdp.models import CdpTab, CdpTarget

__all__ = ["CdpAutomationClient", "CdpConfig", "CdpTab", "CdpTarget", "cdp_manifest"]
