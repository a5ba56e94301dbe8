"""
premiere - Bridge between MCP clients and a running Adobe Premiere Pro.

This package provides:
- An async client for the local control-plane server (project, sequence,
  timeline, media, playback and export queries and commands)
- Text renderers for every control-plane payload
- An immutable tool registry and an error-enveloping dispatcher
- The scripting relay that forwards timeline edits to ExtendScript
"""

__version__ = "0.1.0"

from .client import PremiereClient
from .errors import (
    ErrorKind,
    InvocationError,
    NotFoundError,
    ParseError,
    PremiereError,
    SemanticError,
    TransportError,
    UnknownToolError,
    render_error,
)
from .invoker import HostScriptInvoker, RelayInvoker, build_script_call
from .registry import Dispatcher, ToolRegistry, ToolSpec
from .trim import HostClip, HostProject, HostSequence, HostTime, HostTrack, trim_clip_by_frames

__all__ = [
    "__version__",
    "Dispatcher",
    "ErrorKind",
    "HostClip",
    "HostProject",
    "HostScriptInvoker",
    "HostSequence",
    "HostTime",
    "HostTrack",
    "InvocationError",
    "NotFoundError",
    "ParseError",
    "PremiereClient",
    "PremiereError",
    "RelayInvoker",
    "SemanticError",
    "ToolRegistry",
    "ToolSpec",
    "TransportError",
    "UnknownToolError",
    "build_script_call",
    "render_error",
    "trim_clip_by_frames",
]
