"""Pydantic models for Chrome DevTools HTTP endpoint responses."""

from dataclasses import dataclass

from pydantic import BaseModel, Field


class CdpTarget(BaseModel):
    """A debuggable target listed by the /json/list endpoint."""

    id: str
    type: str
    title: str = ""
    url: str = ""
    # Absent when another debugger is already attached to the target
    web_socket_debugger_url: str | None = Field(
        default=None, alias="webSocketDebuggerUrl"
    )


@dataclass(frozen=True, kw_only=True)
class CdpTab:
    """Handle to a page target the client holds a websocket for."""

    index: int
    target_id: str

    def __str__(self) -> str:
        return f"{self.index} ({self.target_id})"
