"""HTTP client for the Premiere Pro control-plane server."""

from __future__ import annotations

import logging
from typing import Any, Optional
from urllib.parse import urlparse

import httpx

from .config import API_BASE_URL, REQUEST_TIMEOUT
from .errors import SemanticError, TransportError

logger = logging.getLogger(__name__)

DEFAULT_WIDTH = 1920
DEFAULT_HEIGHT = 1080
DEFAULT_FRAMERATE = 23.976
DEFAULT_EXPORT_PRESET = "H.264 High Quality"

ACTIVE_SEQUENCE_HINTS = [
    "Make sure Premiere Pro is running",
    "Open a project with an active sequence",
    "Ensure the CEP extension is loaded",
    'Click "Refresh Project Info" in the extension',
]


def _port_of(base_url: str) -> str:
    parsed = urlparse(base_url)
    if parsed.port:
        return str(parsed.port)
    return "443" if parsed.scheme == "https" else "80"


class PremiereClient:
    """One method per control-plane endpoint.

    Each call opens its own ``httpx.AsyncClient``; nothing is shared between
    calls. Methods return the parsed JSON payload, raise ``TransportError``
    when the server is unreachable or answers with a non-2xx status, and
    raise ``SemanticError`` when the payload carries an ``error`` field.
    """

    def __init__(
        self,
        base_url: str = API_BASE_URL,
        timeout: float = REQUEST_TIMEOUT,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._transport = transport

    @property
    def guidance(self) -> list[str]:
        return [
            "Ensure Premiere Pro is running",
            f"Check that HTTP server is running on port {_port_of(self.base_url)}",
            "Verify the MCP extension is loaded in Premiere Pro",
            "Make sure a project is open in Premiere Pro",
        ]

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url=self.base_url,
            timeout=self.timeout,
            transport=self._transport,
        )

    async def _request(
        self,
        method: str,
        path: str,
        params: Optional[dict[str, Any]] = None,
        body: Optional[dict[str, Any]] = None,
        hints: Optional[list[str]] = None,
    ) -> dict:
        logger.debug("%s %s", method, path)
        try:
            async with self._client() as client:
                resp = await client.request(method, path, params=params, json=body)
        except httpx.HTTPError as e:
            raise TransportError(
                f"{type(e).__name__}: {str(e) or 'request failed'}", guidance=self.guidance
            ) from e

        if not resp.is_success:
            raise TransportError(
                f"HTTP {resp.status_code}: {resp.reason_phrase}",
                status_code=resp.status_code,
                guidance=self.guidance,
            )
        try:
            data = resp.json()
        except ValueError as e:
            raise TransportError(
                f"Invalid JSON response from {path}", status_code=resp.status_code,
                guidance=self.guidance,
            ) from e
        if not isinstance(data, dict):
            raise TransportError(
                f"Unexpected response from {path}: expected a JSON object",
                status_code=resp.status_code, guidance=self.guidance,
            )
        if data.get("error"):
            raise SemanticError(str(data["error"]), hints=hints)
        return data

    # ----- Queries -----

    async def get_project_stats(self) -> dict:
        return await self._request("GET", "/api/project-stats")

    async def get_active_sequence(self) -> dict:
        return await self._request("GET", "/api/active-sequence", hints=ACTIVE_SEQUENCE_HINTS)

    async def list_sequences(self) -> dict:
        return await self._request("GET", "/api/sequences")

    async def get_sequence_details(self, name: str) -> dict:
        """Fetch tracks, effects and markers of the sequence called ``name``."""
        return await self._request("GET", "/api/sequence-details", params={"name": name})

    async def get_timeline_structure(self) -> dict:
        return await self._request("GET", "/api/timeline-structure")

    async def get_timeline_clips(self) -> dict:
        return await self._request("GET", "/api/timeline-clips")

    async def get_project_media(self) -> dict:
        return await self._request("GET", "/api/project-media")

    async def get_project_bins(self) -> dict:
        return await self._request("GET", "/api/project-bins")

    async def get_playhead(self) -> dict:
        return await self._request("GET", "/api/playhead")

    async def get_selection(self) -> dict:
        return await self._request("GET", "/api/selection")

    async def get_export_presets(self) -> dict:
        return await self._request("GET", "/api/export-presets")

    async def get_render_queue(self) -> dict:
        return await self._request("GET", "/api/render-queue")

    # ----- Commands -----

    async def create_sequence(
        self,
        name: str,
        width: int = DEFAULT_WIDTH,
        height: int = DEFAULT_HEIGHT,
        framerate: float = DEFAULT_FRAMERATE,
    ) -> dict:
        """Create a new sequence in the open project."""
        return await self._request(
            "POST",
            "/api/create-sequence",
            body={"name": name, "width": width, "height": height, "framerate": framerate},
        )

    async def export_project(
        self,
        output_path: str,
        preset_name: str = DEFAULT_EXPORT_PRESET,
        include_audio: bool = True,
    ) -> dict:
        """Start (or queue) an export of the active sequence."""
        return await self._request(
            "POST",
            "/api/export-project",
            body={
                "output_path": output_path,
                "preset_name": preset_name,
                "include_audio": include_audio,
            },
        )
