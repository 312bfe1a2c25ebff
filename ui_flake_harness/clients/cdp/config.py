"""Configuration for the Chrome DevTools Protocol client."""

from pydantic import BaseModel, Field


class CdpConfig(BaseModel):
    """Configuration for the Chrome DevTools Protocol client."""

    # Chrome started with --remote-debugging-port=9222 listens here
    debugger_url: str = "http://127.0.0.1:9222"
    command_timeout: float = Field(default=30.0, gt=0)
    load_timeout: float = Field(default=10.0, gt=0)
    load_poll_interval: float = Field(default=0.05, gt=0)
