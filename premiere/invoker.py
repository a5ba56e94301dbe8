"""Host-script invocation from the MCP server side."""

from __future__ import annotations

import json
import logging
import re
from typing import Any, Optional, Protocol, Sequence
from urllib.parse import urlparse

import httpx

from .config import RELAY_URL, REQUEST_TIMEOUT
from .errors import InvocationError, ParseError, TransportError

logger = logging.getLogger(__name__)

RELAY_PATH = "/run-extendscript"

_IDENTIFIER = re.compile(r"^[A-Za-z_$][A-Za-z0-9_$]*$")


def is_script_identifier(name: str) -> bool:
    """Only bare function names may be sent to the host engine."""
    return isinstance(name, str) and bool(_IDENTIFIER.match(name))


def build_script_call(function_name: str, args: Sequence[Any]) -> str:
    """Build ``fn(arg1,arg2,...)`` with every argument JSON-encoded."""
    if not is_script_identifier(function_name):
        raise ValueError(f"Invalid script function name: {function_name!r}")
    return f"{function_name}({','.join(json.dumps(a) for a in args)})"


class HostScriptInvoker(Protocol):
    """Calls a named procedure inside the host's scripting engine."""

    async def invoke(self, function_name: str, args: Sequence[Any]) -> dict:
        ...


class RelayInvoker:
    """Invokes host procedures through the scripting relay over HTTP."""

    def __init__(
        self,
        relay_url: str = RELAY_URL,
        timeout: float = REQUEST_TIMEOUT,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.relay_url = relay_url.rstrip("/")
        self.timeout = timeout
        self._transport = transport

    @property
    def guidance(self) -> list[str]:
        port = urlparse(self.relay_url).port or 80
        return [
            "Ensure Premiere Pro is running with the panel extension loaded",
            f"Check that the scripting relay is listening on port {port}",
        ]

    async def invoke(self, function_name: str, args: Sequence[Any]) -> dict:
        if not is_script_identifier(function_name):
            raise InvocationError(f"Invalid script function name: {function_name!r}")
        payload = {"functionName": function_name, "args": list(args)}
        logger.debug("relay %s(%s)", function_name, payload["args"])
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                resp = await client.post(f"{self.relay_url}{RELAY_PATH}", json=payload)
        except httpx.HTTPError as e:
            raise TransportError(
                f"Scripting relay unreachable: {str(e) or type(e).__name__}",
                guidance=self.guidance,
            ) from e

        try:
            data = resp.json()
        except ValueError as e:
            if not resp.is_success:
                raise InvocationError(f"Relay error: HTTP {resp.status_code}") from e
            raise ParseError("Failed to parse relay response", raw=resp.text) from e

        if not resp.is_success:
            message = data.get("error") if isinstance(data, dict) else None
            raise InvocationError(message or f"Relay error: HTTP {resp.status_code}")
        if not isinstance(data, dict):
            raise ParseError("Unexpected relay response: expected a JSON object", raw=resp.text)
        return data
