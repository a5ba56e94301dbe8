#!/usr/bin/env python3
"""
Premiere Pro MCP Server — Query and edit a running Premiere Pro project.

Provides 15 tools: read-only queries against the local control-plane server
(project, sequences, timeline, media, bins, playback, export presets, render
queue), two commands (create sequence, export), and a frame-accurate trim
relayed to ExtendScript through the scripting relay.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Sequence

from mcp.server import Server
from mcp.server.stdio import stdio_server
from mcp.types import CallToolResult, TextContent, Tool

from premiere import __version__
from premiere.client import (
    DEFAULT_EXPORT_PRESET,
    DEFAULT_FRAMERATE,
    DEFAULT_HEIGHT,
    DEFAULT_WIDTH,
    PremiereClient,
)
from premiere.config import configure_logging
from premiere.errors import InvocationError, NotFoundError, ParseError
from premiere.formatting import (
    format_active_sequence,
    format_export_presets,
    format_export_result,
    format_playhead,
    format_project_bins,
    format_project_info,
    format_project_media,
    format_render_queue,
    format_selection,
    format_sequence_created,
    format_sequence_details,
    format_sequence_list,
    format_timeline_clips,
    format_timeline_structure,
)
from premiere.invoker import HostScriptInvoker, RelayInvoker
from premiere.registry import Dispatcher, ToolRegistry, ToolSpec

logger = logging.getLogger("premiere-mcp")

SERVER_NAME = "premiere-pro-mcp"

_NO_ARGS = {"type": "object", "properties": {}, "required": []}

# Structured failures reported by host editing procedures
NOT_FOUND_ERRORS = ("Sequence not found", "Clip not found")


def _text(text: str) -> list[TextContent]:
    return [TextContent(type="text", text=text)]


# ============================================================================
# TOOL DEFINITIONS
# ============================================================================

def build_tools() -> list[Tool]:
    """Return the tool catalog in its fixed advertised order."""
    return [
        # ===== PROJECT & SEQUENCES =====
        Tool(
            name="get_project_info",
            description="Get basic information about the current Premiere Pro project",
            inputSchema=_NO_ARGS,
        ),
        Tool(
            name="get_active_sequence_info",
            description="Get detailed information about the currently active sequence",
            inputSchema=_NO_ARGS,
        ),
        Tool(
            name="list_all_sequences",
            description="List all sequences in the current project with basic info",
            inputSchema=_NO_ARGS,
        ),
        Tool(
            name="get_sequence_details",
            description="Get detailed information about a specific sequence including tracks, effects, and markers",
            inputSchema={
                "type": "object",
                "properties": {
                    "sequence_name": {"type": "string", "description": "Name of the sequence to get details for"}
                },
                "required": ["sequence_name"]
            }
        ),
        # ===== TIMELINE =====
        Tool(
            name="get_timeline_structure",
            description="Get the track structure of the active sequence",
            inputSchema=_NO_ARGS,
        ),
        Tool(
            name="get_timeline_clips",
            description="Get all clips in the active sequence with detailed information",
            inputSchema=_NO_ARGS,
        ),
        # ===== MEDIA & BINS =====
        Tool(
            name="get_project_media",
            description="Get all media items in the project browser with file information",
            inputSchema=_NO_ARGS,
        ),
        Tool(
            name="get_project_bins",
            description="Get project bin structure and organization",
            inputSchema=_NO_ARGS,
        ),
        # ===== PLAYBACK & SELECTION =====
        Tool(
            name="get_playhead_info",
            description="Get current playhead position and playback state",
            inputSchema=_NO_ARGS,
        ),
        Tool(
            name="get_selection_info",
            description="Get information about currently selected clips or time range",
            inputSchema=_NO_ARGS,
        ),
        # ===== EXPORT & RENDER =====
        Tool(
            name="get_export_presets",
            description="Get available export presets and their settings",
            inputSchema=_NO_ARGS,
        ),
        Tool(
            name="get_render_queue",
            description="Get current render queue status and items",
            inputSchema=_NO_ARGS,
        ),
        # ===== EDITING =====
        Tool(
            name="trim_clip_by_frames",
            description="Trim or extend the in/out point of a video or audio clip by a number of frames.",
            inputSchema={
                "type": "object",
                "properties": {
                    "sequenceId": {"type": "integer", "minimum": 0, "description": "Index of the sequence (0-based)"},
                    "clipId": {"type": "string", "description": "ID of the clip to trim"},
                    "framesDelta": {"type": "integer", "description": "Number of frames to trim (positive or negative)"},
                    "direction": {"type": "string", "enum": ["in", "out"], "description": "Which edit point to trim"},
                    "trackType": {"type": "string", "enum": ["video", "audio"], "description": "Track type"}
                },
                "required": ["sequenceId", "clipId", "framesDelta", "direction", "trackType"]
            }
        ),
        Tool(
            name="create_sequence",
            description="Create a new sequence in Premiere Pro",
            inputSchema={
                "type": "object",
                "properties": {
                    "name": {"type": "string", "description": "Name of the new sequence"},
                    "width": {"type": "integer", "description": f"Width in pixels (default: {DEFAULT_WIDTH})"},
                    "height": {"type": "integer", "description": f"Height in pixels (default: {DEFAULT_HEIGHT})"},
                    "framerate": {"type": "number", "description": f"Frame rate (default: {DEFAULT_FRAMERATE})"}
                },
                "required": ["name"]
            }
        ),
        Tool(
            name="export_project",
            description="Export the current project or sequence",
            inputSchema={
                "type": "object",
                "properties": {
                    "output_path": {"type": "string", "description": "Output file path"},
                    "preset_name": {"type": "string", "description": f"Export preset name (default: {DEFAULT_EXPORT_PRESET})"},
                    "include_audio": {"type": "boolean", "description": "Include audio in export (default: true)"}
                },
                "required": ["output_path"]
            }
        ),
    ]


# ============================================================================
# TOOL HANDLERS — One method per tool, named after it
# ============================================================================

class PremiereToolHandlers:
    """Serves each tool through the control-plane client or the script invoker.

    Failures are raised, not formatted: the dispatcher renders them.
    """

    def __init__(self, client: PremiereClient, invoker: HostScriptInvoker):
        self.client = client
        self.invoker = invoker

    # ----- READ HANDLERS -----

    async def get_project_info(self, arguments: dict) -> Sequence[TextContent]:
        return _text(format_project_info(await self.client.get_project_stats()))

    async def get_active_sequence_info(self, arguments: dict) -> Sequence[TextContent]:
        return _text(format_active_sequence(await self.client.get_active_sequence()))

    async def list_all_sequences(self, arguments: dict) -> Sequence[TextContent]:
        return _text(format_sequence_list(await self.client.list_sequences()))

    async def get_sequence_details(self, arguments: dict) -> Sequence[TextContent]:
        data = await self.client.get_sequence_details(arguments["sequence_name"])
        return _text(format_sequence_details(data))

    async def get_timeline_structure(self, arguments: dict) -> Sequence[TextContent]:
        return _text(format_timeline_structure(await self.client.get_timeline_structure()))

    async def get_timeline_clips(self, arguments: dict) -> Sequence[TextContent]:
        return _text(format_timeline_clips(await self.client.get_timeline_clips()))

    async def get_project_media(self, arguments: dict) -> Sequence[TextContent]:
        return _text(format_project_media(await self.client.get_project_media()))

    async def get_project_bins(self, arguments: dict) -> Sequence[TextContent]:
        return _text(format_project_bins(await self.client.get_project_bins()))

    async def get_playhead_info(self, arguments: dict) -> Sequence[TextContent]:
        return _text(format_playhead(await self.client.get_playhead()))

    async def get_selection_info(self, arguments: dict) -> Sequence[TextContent]:
        return _text(format_selection(await self.client.get_selection()))

    async def get_export_presets(self, arguments: dict) -> Sequence[TextContent]:
        return _text(format_export_presets(await self.client.get_export_presets()))

    async def get_render_queue(self, arguments: dict) -> Sequence[TextContent]:
        return _text(format_render_queue(await self.client.get_render_queue()))

    # ----- WRITE HANDLERS -----

    async def trim_clip_by_frames(self, arguments: dict) -> CallToolResult:
        clip_id = arguments["clipId"]
        frames = arguments["framesDelta"]
        direction = arguments["direction"]
        result = await self.invoker.invoke("trimClipByFrames", [
            arguments["sequenceId"],
            clip_id,
            frames,
            direction,
            arguments["trackType"],
        ])
        if result.get("success"):
            return CallToolResult(
                content=_text(
                    f"✅ Clip trimmed successfully.\n\n**Clip:** {clip_id}\n"
                    f"**Edit Point:** {direction} ({frames:+} frames)"
                ),
                isError=False,
            )
        error = result.get("error") or "Unknown error"
        if "raw" in result:
            raise ParseError(f"Failed to trim clip: {error}", raw=str(result["raw"]))
        if error in NOT_FOUND_ERRORS:
            raise NotFoundError(f"Failed to trim clip: {error}")
        raise InvocationError(f"Failed to trim clip: {error}")

    async def create_sequence(self, arguments: dict) -> Sequence[TextContent]:
        requested = {
            "name": arguments["name"],
            "width": arguments.get("width", DEFAULT_WIDTH),
            "height": arguments.get("height", DEFAULT_HEIGHT),
            "framerate": arguments.get("framerate", DEFAULT_FRAMERATE),
        }
        data = await self.client.create_sequence(**requested)
        return _text(format_sequence_created(data, requested))

    async def export_project(self, arguments: dict) -> Sequence[TextContent]:
        data = await self.client.export_project(
            output_path=arguments["output_path"],
            preset_name=arguments.get("preset_name", DEFAULT_EXPORT_PRESET),
            include_audio=arguments.get("include_audio", True),
        )
        return _text(format_export_result(data))


# ============================================================================
# TOOL DISPATCH
# ============================================================================

def build_registry(client: PremiereClient, invoker: HostScriptInvoker) -> ToolRegistry:
    """Pair every advertised tool with the handler method of the same name."""
    handlers = PremiereToolHandlers(client, invoker)
    return ToolRegistry(ToolSpec(tool, getattr(handlers, tool.name)) for tool in build_tools())


def create_server(dispatcher: Dispatcher) -> Server:
    server = Server(SERVER_NAME, version=__version__)

    @server.list_tools()
    async def list_tools() -> list[Tool]:
        return dispatcher.list_tools()

    @server.call_tool()
    async def call_tool(name: str, arguments: dict[str, Any]) -> CallToolResult:
        return await dispatcher.call_tool(name, arguments)

    return server


# ============================================================================
# MAIN
# ============================================================================

async def main():
    configure_logging()
    dispatcher = Dispatcher(build_registry(PremiereClient(), RelayInvoker()))
    server = create_server(dispatcher)
    async with stdio_server() as (read_stream, write_stream):
        logger.info("Premiere Pro MCP server running on stdio")
        await server.run(read_stream, write_stream, server.create_initialization_options())


def main_sync():
    """Synchronous entry point for use as a console script."""
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        logger.info("Interrupted, shutting down")


if __name__ == "__main__":
    main_sync()
