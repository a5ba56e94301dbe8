"""Configuration for the Premiere Pro MCP server and scripting relay."""

import logging
import os

logger = logging.getLogger(__name__)


def _float_env(name: str, default: float) -> float:
    raw = os.environ.get(name)
    if raw is None or raw == "":
        return default
    try:
        return float(raw)
    except ValueError:
        logger.warning("bad %s=%r; defaulting to %s", name, raw, default)
        return default


def _int_env(name: str, default: int) -> int:
    raw = os.environ.get(name)
    if raw is None or raw == "":
        return default
    try:
        return int(raw)
    except ValueError:
        logger.warning("bad %s=%r; defaulting to %s", name, raw, default)
        return default


# Control-plane server that talks to the running Premiere Pro instance
API_BASE_URL = os.environ.get("PREMIERE_API_URL", "http://localhost:3001")

# Scripting relay (panel bridge) used for direct timeline edits
RELAY_URL = os.environ.get("PREMIERE_RELAY_URL", "http://localhost:4000")

# Outbound request timeout in seconds
REQUEST_TIMEOUT = _float_env("PREMIERE_REQUEST_TIMEOUT", 30.0)

# Relay listener bind address
RELAY_HOST = os.environ.get("PREMIERE_RELAY_HOST", "127.0.0.1")
RELAY_PORT = _int_env("PREMIERE_RELAY_PORT", 4000)

# Command that evaluates ExtendScript read from stdin inside the host
SCRIPT_COMMAND = os.environ.get("PREMIERE_SCRIPT_COMMAND", "")

LOG_LEVEL = os.environ.get("PREMIERE_LOG_LEVEL", "INFO").upper()


def configure_logging(level: str = LOG_LEVEL) -> None:
    """Send log records to stderr; stdout belongs to the MCP transport."""
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
