"""Automation client speaking the Chrome DevTools Protocol."""

import asyncio
import itertools
import json
import logging
from collections.abc import AsyncGenerator, Iterator, Mapping, Sequence
from contextlib import asynccontextmanager
from dataclasses import dataclass, field
from typing import Any

import aiohttp
from yarl import URL

from ui_flake_harness.clients.base import ENTER, AutomationClient, is_xpath
from ui_flake_harness.clients.cdp.config import CdpConfig
from ui_flake_harness.clients.cdp.models import CdpTab, CdpTarget
from ui_flake_harness.clients.errors import (
    AutomationError,
    BrowserConnectionError,
    EvaluationError,
    InteractionError,
    NavigationError,
    SelectorNotFoundError,
)

log = logging.getLogger(__name__)

ENTER_KEY_EVENT: Mapping[str, Any] = {
    "key": "Enter",
    "code": "Enter",
    "windowsVirtualKeyCode": 13,
    "nativeVirtualKeyCode": 13,
}


class CdpCommandError(AutomationError):
    """Raised when the browser answers a command with an error."""


def element_expression(selector: str) -> str:
    """Return a JavaScript expression resolving ``selector`` to an element."""
    literal = json.dumps(selector)
    if is_xpath(selector):
        return (
            f"document.evaluate({literal}, document, null, "
            "XPathResult.FIRST_ORDERED_NODE_TYPE, null).singleNodeValue"
        )
    return f"document.querySelector({literal})"


def locate_script(selector: str) -> str:
    """Return a script scrolling to the element and returning its centre."""
    return f"""(() => {{
  const el = {element_expression(selector)};
  if (!el) return null;
  el.scrollIntoView({{ block: 'center', inline: 'center' }});
  const rect = el.getBoundingClientRect();
  return {{ x: rect.left + rect.width / 2, y: rect.top + rect.height / 2 }};
}})()"""


def focus_script(selector: str) -> str:
    """Return a script focusing the element and selecting its content."""
    return f"""(() => {{
  const el = {element_expression(selector)};
  if (!el) return false;
  el.focus();
  if (typeof el.select === 'function') el.select();
  return true;
}})()"""


def describe_exception(details: Mapping[str, Any]) -> str:
    """Extract a readable message from Runtime.evaluate exceptionDetails."""
    exception = details.get("exception") or {}
    return str(exception.get("description") or details.get("text") or "Script threw")


@dataclass(frozen=True, kw_only=True)
class CdpAutomationClient(AutomationClient[CdpTab]):
    """Drives Chrome tabs over the DevTools websocket protocol."""

    config: CdpConfig
    session: aiohttp.ClientSession = field(repr=False)
    _sockets: dict[str, aiohttp.ClientWebSocketResponse] = field(
        default_factory=dict, repr=False
    )
    _ids: Iterator[int] = field(default_factory=lambda: itertools.count(1), repr=False)

    @classmethod
    @asynccontextmanager
    async def from_config(
        cls, config: CdpConfig
    ) -> AsyncGenerator["CdpAutomationClient", None]:
        """Create client with managed session and websocket lifecycle."""
        async with aiohttp.ClientSession() as session:
            client = cls(config=config, session=session)
            try:
                yield client
            finally:
                await client.close()

    def endpoint(self, path: str) -> URL:
        """Return the URL of an HTTP endpoint of the debugger."""
        return URL(self.config.debugger_url).with_path(path)

    async def close(self) -> None:
        """Close every websocket opened by ``initialize_session``."""
        for socket in self._sockets.values():
            await socket.close()
        self._sockets.clear()

    async def list_targets(self) -> Sequence[CdpTarget]:
        """List the page targets of the browser."""
        try:
            async with self.session.get(self.endpoint("/json/list")) as response:
                if response.status != 200:
                    text = await response.text()
                    raise BrowserConnectionError(
                        f"Failed to list targets: {response.status} {text}"
                    )
                data = await response.json(content_type=None)
        except aiohttp.ClientError as e:
            raise BrowserConnectionError(
                f"Cannot reach browser at {self.config.debugger_url}: {e}"
            ) from e

        targets = [CdpTarget.model_validate(item) for item in data]
        return [target for target in targets if target.type == "page"]

    async def open_target(self) -> CdpTarget:
        """Open a blank tab."""
        try:
            async with self.session.put(
                self.endpoint("/json/new").with_query("about:blank")
            ) as response:
                if response.status != 200:
                    text = await response.text()
                    raise BrowserConnectionError(
                        f"Failed to open tab: {response.status} {text}"
                    )
                data = await response.json(content_type=None)
        except aiohttp.ClientError as e:
            raise BrowserConnectionError(f"Failed to open tab: {e}") from e
        return CdpTarget.model_validate(data)

    async def initialize_session(self) -> CdpTab:
        """Attach to the first page target, opening one if there is none."""
        targets = await self.list_targets()
        target = targets[0] if targets else await self.open_target()

        if target.web_socket_debugger_url is None:
            raise BrowserConnectionError(
                f"Tab {target.id} is already attached to another debugger"
            )

        log.debug("Attaching to tab %s (%s)", target.id, target.url)
        try:
            socket = await self.session.ws_connect(
                target.web_socket_debugger_url, max_msg_size=0
            )
        except aiohttp.ClientError as e:
            raise BrowserConnectionError(f"Failed to attach to tab: {e}") from e

        self._sockets[target.id] = socket
        return CdpTab(index=0, target_id=target.id)

    async def send(
        self, tab: CdpTab, method: str, params: Mapping[str, Any] | None = None
    ) -> Mapping[str, Any]:
        """Send a protocol command and wait for its reply.

        Events arriving before the reply are discarded.

        Raises:
            CdpCommandError: If the browser rejects the command
            BrowserConnectionError: If the tab's websocket fails or times out

        """
        socket = self._sockets.get(tab.target_id)
        if socket is None:
            raise BrowserConnectionError(f"Tab {tab} is not attached")

        message_id = next(self._ids)
        try:
            async with asyncio.timeout(self.config.command_timeout):
                await socket.send_json(
                    {"id": message_id, "method": method, "params": dict(params or {})}
                )
                while True:
                    message = await socket.receive()
                    if message.type != aiohttp.WSMsgType.TEXT:
                        raise BrowserConnectionError(
                            f"Connection to tab {tab} closed during {method}"
                        )
                    reply = json.loads(message.data)
                    if reply.get("id") == message_id:
                        break
        except TimeoutError as e:
            raise BrowserConnectionError(
                f"{method} timed out after {self.config.command_timeout}s"
            ) from e
        except (aiohttp.ClientError, ConnectionError) as e:
            raise BrowserConnectionError(f"{method} failed: {e}") from e

        if (error := reply.get("error")) is not None:
            raise CdpCommandError(f"{method} failed: {error.get('message', error)}")
        result: Mapping[str, Any] = reply.get("result", {})
        return result

    async def navigate(self, tab: CdpTab, url: str) -> None:
        """Navigate and wait for the new document to finish loading."""
        try:
            result = await self.send(tab, "Page.navigate", {"url": url})
        except CdpCommandError as e:
            raise NavigationError(str(e)) from e

        if error_text := result.get("errorText"):
            raise NavigationError(f"Navigation to {url} failed: {error_text}")

        await self.wait_for_load(tab, url)

    async def wait_for_load(self, tab: CdpTab, url: str) -> None:
        """Poll document.readyState until the page reports complete."""
        deadline = asyncio.get_running_loop().time() + self.config.load_timeout

        while True:
            try:
                if await self.eval(tab, "document.readyState") == "complete":
                    return
            except EvaluationError:
                # Execution context is replaced while the new document loads
                pass

            if asyncio.get_running_loop().time() >= deadline:
                raise NavigationError(
                    f"{url} did not finish loading within {self.config.load_timeout}s"
                )
            await asyncio.sleep(self.config.load_poll_interval)

    async def click(self, tab: CdpTab, selector: str) -> None:
        """Scroll the element into view and click its centre."""
        try:
            point = await self.eval(tab, locate_script(selector))
        except EvaluationError as e:
            raise InteractionError(f"Cannot resolve {selector}: {e}") from e
        if point is None:
            raise SelectorNotFoundError(f"Element not found: {selector}")

        try:
            for event_type in ("mousePressed", "mouseReleased"):
                await self.send(
                    tab,
                    "Input.dispatchMouseEvent",
                    {
                        "type": event_type,
                        "x": point["x"],
                        "y": point["y"],
                        "button": "left",
                        "clickCount": 1,
                    },
                )
        except CdpCommandError as e:
            raise InteractionError(f"Click on {selector} failed: {e}") from e

    async def fill(self, tab: CdpTab, text: str, selector: str) -> None:
        """Focus the element, select its content and type over it."""
        try:
            found = await self.eval(tab, focus_script(selector))
        except EvaluationError as e:
            raise InteractionError(f"Cannot resolve {selector}: {e}") from e
        if not found:
            raise SelectorNotFoundError(f"Element not found: {selector}")

        try:
            for index, line in enumerate(text.split(ENTER)):
                if index > 0:
                    await self.press_enter(tab)
                if line:
                    await self.send(tab, "Input.insertText", {"text": line})
        except CdpCommandError as e:
            raise InteractionError(f"Typing into {selector} failed: {e}") from e

    async def press_enter(self, tab: CdpTab) -> None:
        """Send a full Enter key press."""
        await self.send(
            tab,
            "Input.dispatchKeyEvent",
            {"type": "keyDown", "text": "\r", **ENTER_KEY_EVENT},
        )
        await self.send(
            tab, "Input.dispatchKeyEvent", {"type": "keyUp", **ENTER_KEY_EVENT}
        )

    async def eval(self, tab: CdpTab, expression: str) -> Any:
        """Evaluate an expression, returning its JSON-serializable value."""
        try:
            result = await self.send(
                tab,
                "Runtime.evaluate",
                {"expression": expression, "returnByValue": True, "awaitPromise": True},
            )
        except CdpCommandError as e:
            raise EvaluationError(str(e)) from e

        if (details := result.get("exceptionDetails")) is not None:
            raise EvaluationError(describe_exception(details))
        return result.get("result", {}).get("value")
