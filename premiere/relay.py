"""
Scripting relay: HTTP listener that forwards calls to the host's
ExtendScript engine.

``POST /run-extendscript`` takes ``{"functionName": ..., "args": [...]}``,
evaluates ``functionName(args...)`` through a ``ScriptEngine`` and returns
the procedure's JSON reply. Replies that are not valid JSON come back as
``{"success": false, "error": "Failed to parse result", "raw": <text>}``.
"""

from __future__ import annotations

import asyncio
import json
import logging
import shlex
import sys
from pathlib import Path
from typing import Any, Callable, Mapping, Protocol, Sequence

from fastapi import FastAPI
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from . import __version__
from .config import RELAY_HOST, RELAY_PORT, SCRIPT_COMMAND, LOG_LEVEL, configure_logging
from .errors import ParseError
from .invoker import RELAY_PATH, build_script_call, is_script_identifier

logger = logging.getLogger(__name__)

SCRIPTS_DIR = Path(__file__).parent / "scripts"
TRIM_SCRIPT = SCRIPTS_DIR / "trimClipByFrames.jsx"


class ScriptEngineError(Exception):
    """The host engine could not evaluate a call."""


class ScriptEngine(Protocol):
    async def evaluate(self, function_name: str, args: Sequence[Any]) -> str:
        """Run ``function_name(*args)`` in the host and return its raw reply."""
        ...


# ============================================================================
# ENGINES
# ============================================================================

class CommandScriptEngine:
    """Pipes ExtendScript to an external command that evaluates it in the host.

    The command reads the script on stdin and prints the procedure's return
    value on stdout. Host script files are loaded with ``$.evalFile`` ahead
    of every call.
    """

    def __init__(self, command: str, script_files: Sequence[Path] = (TRIM_SCRIPT,)):
        self.argv = shlex.split(command)
        if not self.argv:
            raise ValueError("Script command is empty")
        self.script_files = tuple(script_files)

    def render(self, function_name: str, args: Sequence[Any]) -> str:
        preamble = "".join(f"$.evalFile({json.dumps(str(p))});\n" for p in self.script_files)
        return f"{preamble}{build_script_call(function_name, args)};\n"

    async def evaluate(self, function_name: str, args: Sequence[Any]) -> str:
        script = self.render(function_name, args)
        try:
            proc = await asyncio.create_subprocess_exec(
                *self.argv,
                stdin=asyncio.subprocess.PIPE,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
        except OSError as e:
            raise ScriptEngineError(f"Cannot start script command: {e}") from e

        stdout, stderr = await proc.communicate(script.encode("utf-8"))
        if proc.returncode != 0:
            detail = stderr.decode("utf-8", errors="replace").strip()
            raise ScriptEngineError(detail or f"Script command exited with status {proc.returncode}")
        return stdout.decode("utf-8", errors="replace").strip()


class LocalScriptEngine:
    """Evaluates registered Python procedures in-process.

    Procedures return either a JSON-serialisable value or the raw reply text.
    """

    def __init__(self, procedures: Mapping[str, Callable[..., Any]]):
        self.procedures = dict(procedures)

    async def evaluate(self, function_name: str, args: Sequence[Any]) -> str:
        procedure = self.procedures.get(function_name)
        if procedure is None:
            raise ScriptEngineError(f"{function_name} is not defined")
        try:
            result = procedure(*args)
        except Exception as e:
            logger.exception("Procedure %s failed", function_name)
            raise ScriptEngineError(f"{type(e).__name__}: {e}") from e
        return result if isinstance(result, str) else json.dumps(result)


# ============================================================================
# HTTP LISTENER
# ============================================================================

class RunScriptRequest(BaseModel):
    functionName: str
    args: list[Any] = Field(default_factory=list)


def _failure(status_code: int, error: str, **extra: Any) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"success": False, "error": error, **extra})


def create_app(engine: ScriptEngine) -> FastAPI:
    """Build the relay application around a script engine."""
    app = FastAPI(title="Premiere Pro Scripting Relay", version=__version__)
    app.state.engine = engine

    @app.get("/health")
    async def health() -> dict:
        return {"status": "ok"}

    @app.post(RELAY_PATH)
    async def run_extendscript(request: RunScriptRequest):
        if not is_script_identifier(request.functionName):
            return _failure(400, f"Invalid function name: {request.functionName!r}")

        try:
            raw = await app.state.engine.evaluate(request.functionName, request.args)
        except ScriptEngineError as e:
            logger.warning("%s failed in host: %s", request.functionName, e)
            return _failure(502, f"Relay error: {e}")

        try:
            return JSONResponse(content=json.loads(raw))
        except ValueError:
            err = ParseError("Failed to parse result", raw=raw)
            logger.warning("%s returned unparseable output", request.functionName)
            return _failure(200, err.message, raw=err.raw)

    return app


def main():
    """Console entry point: serve the relay with the configured host command."""
    import uvicorn

    configure_logging()
    if not SCRIPT_COMMAND:
        logger.error("PREMIERE_SCRIPT_COMMAND is not set; cannot reach the host scripting engine")
        sys.exit(1)
    try:
        engine = CommandScriptEngine(SCRIPT_COMMAND)
    except ValueError as e:
        logger.error("Invalid PREMIERE_SCRIPT_COMMAND: %s", e)
        sys.exit(1)

    logger.info("Scripting relay listening on %s:%s", RELAY_HOST, RELAY_PORT)
    uvicorn.run(create_app(engine), host=RELAY_HOST, port=RELAY_PORT, log_level=LOG_LEVEL.lower())


if __name__ == "__main__":
    main()
