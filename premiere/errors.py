"""
Error kinds raised by tool handlers and their caller-visible rendering.

Every failure a handler can produce maps onto one ``ErrorKind``. The
dispatcher converts them to ``CallToolResult`` objects through
``render_error`` so no handler formats its own failure text.
"""

from enum import Enum
from typing import Optional

from mcp.types import CallToolResult, TextContent


class ErrorKind(Enum):
    """Closed set of failure categories."""
    UNKNOWN_TOOL = "unknown_tool"
    TRANSPORT = "transport"
    SEMANTIC = "semantic"
    PARSE = "parse"
    NOT_FOUND = "not_found"
    INVOCATION = "invocation"

    @property
    def is_error(self) -> bool:
        """Semantic conditions are warnings, everything else is a failure."""
        return self != ErrorKind.SEMANTIC


class PremiereError(Exception):
    """Base class for all handler-level failures."""
    kind = ErrorKind.INVOCATION

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class UnknownToolError(PremiereError):
    kind = ErrorKind.UNKNOWN_TOOL

    def __init__(self, name: str):
        super().__init__(f"Unknown tool: {name}")
        self.name = name


class TransportError(PremiereError):
    """Outbound call failed or returned a non-2xx status."""
    kind = ErrorKind.TRANSPORT

    def __init__(self, message: str, status_code: Optional[int] = None,
                 guidance: Optional[list[str]] = None):
        super().__init__(message)
        self.status_code = status_code
        self.guidance = guidance or []


class SemanticError(PremiereError):
    """The server answered, but reported a domain-level condition."""
    kind = ErrorKind.SEMANTIC

    def __init__(self, message: str, hints: Optional[list[str]] = None):
        super().__init__(message)
        self.hints = hints or []


class ParseError(PremiereError):
    """A scripting-engine response could not be parsed as JSON."""
    kind = ErrorKind.PARSE

    def __init__(self, message: str, raw: str = ""):
        super().__init__(message)
        self.raw = raw


class InvocationError(PremiereError):
    """A host-script invocation failed."""
    kind = ErrorKind.INVOCATION


class NotFoundError(PremiereError):
    """A host procedure could not find its target sequence or clip."""
    kind = ErrorKind.NOT_FOUND


def _text_result(text: str, is_error: bool) -> CallToolResult:
    return CallToolResult(content=[TextContent(type="text", text=text)], isError=is_error)


def render_error(tool_name: str, error: Exception) -> CallToolResult:
    """Render any handler failure as a caller-visible tool result."""
    if not isinstance(error, PremiereError):
        return _text_result(f"❌ Error executing {tool_name}: {error}", True)

    if error.kind == ErrorKind.SEMANTIC:
        text = f"⚠️  {error.message}"
        if error.hints:
            steps = "\n".join(f"{i}. {hint}" for i, hint in enumerate(error.hints, 1))
            text += f"\n\n🔧 **Troubleshooting Steps:**\n{steps}"
        return _text_result(text, False)

    text = f"❌ Error executing {tool_name}: {error.message}"
    if error.kind == ErrorKind.TRANSPORT and error.guidance:
        text += "\n\n**Troubleshooting:**\n" + "\n".join(f"- {g}" for g in error.guidance)
    elif error.kind == ErrorKind.PARSE and error.raw:
        text += f"\n\nRaw response:\n{error.raw}"
    return _text_result(text, error.kind.is_error)
