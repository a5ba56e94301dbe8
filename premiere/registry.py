"""
Tool registry and dispatcher.

The registry is an immutable, ordered catalog of tool descriptors paired
with their handlers. It is built once at startup and handed to the
``Dispatcher``, which routes calls by name and wraps every handler
invocation in a uniform error envelope.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Awaitable, Callable, Iterable, Sequence, Union

from mcp.types import CallToolResult, TextContent, Tool

from .errors import ErrorKind, PremiereError, UnknownToolError, render_error

logger = logging.getLogger(__name__)

HandlerResult = Union[CallToolResult, Sequence[TextContent]]
Handler = Callable[[dict], Awaitable[HandlerResult]]


@dataclass(frozen=True)
class ToolSpec:
    """A tool descriptor and the coroutine that serves it."""
    tool: Tool
    handler: Handler

    @property
    def name(self) -> str:
        return self.tool.name


class ToolRegistry:
    """Immutable ordered catalog of tools."""

    def __init__(self, specs: Iterable[ToolSpec]):
        ordered = tuple(specs)
        by_name: dict[str, ToolSpec] = {}
        for spec in ordered:
            if spec.name in by_name:
                raise ValueError(f"Duplicate tool name: {spec.name}")
            by_name[spec.name] = spec
        self._specs = ordered
        self._by_name = MappingProxyType(by_name)

    def __len__(self) -> int:
        return len(self._specs)

    def __contains__(self, name: object) -> bool:
        return name in self._by_name

    @property
    def names(self) -> list[str]:
        return [spec.name for spec in self._specs]

    def tools(self) -> list[Tool]:
        return [spec.tool for spec in self._specs]

    def get(self, name: str) -> ToolSpec:
        try:
            return self._by_name[name]
        except KeyError:
            raise UnknownToolError(name) from None


class Dispatcher:
    """Routes tool calls to handlers; never lets a failure escape."""

    def __init__(self, registry: ToolRegistry):
        self.registry = registry

    def list_tools(self) -> list[Tool]:
        return self.registry.tools()

    async def call_tool(self, name: str, arguments: dict[str, Any] | None) -> CallToolResult:
        arguments = arguments or {}
        try:
            spec = self.registry.get(name)
            result = await spec.handler(arguments)
        except PremiereError as e:
            if e.kind == ErrorKind.SEMANTIC:
                logger.info("%s: server reported: %s", name, e.message)
            else:
                logger.warning("%s failed (%s): %s", name, e.kind.value, e.message)
            return render_error(name, e)
        except Exception as e:
            logger.exception("Error in tool %s", name)
            return render_error(name, e)

        if isinstance(result, CallToolResult):
            return result
        return CallToolResult(content=list(result), isError=False)
