"""Tool-call server.

Exposes the aggregation tools over HTTP:

- ``POST /mcp/tools/call`` with ``{"tool": name, "arguments": {...}}``
- ``GET /health``

Errors are returned with status 200 and an ``error`` payload so the
caller can relay them to the model.
"""

import json
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from loguru import logger

from app.config.settings import settings
from app.core.errors import ApiError
from app.core.logger import setup_logger
from app.tools.registry import ToolRegistry

setup_logger(level=settings.log_level, log_file=settings.log_file or None)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Build the tool registry on startup and close HTTP clients on shutdown."""
    if getattr(app.state, "registry", None) is None:
        app.state.registry = ToolRegistry.from_settings(settings)
    logger.info(f"[SERVER] Ready with tools: {app.state.registry.list_tools()}")
    yield
    await app.state.registry.aclose()
    logger.info("[SERVER] Shutdown complete")


app = FastAPI(title="Training Data Bridge", lifespan=lifespan)


def create_error_response(error_code: str, error_message: str, retryable: bool = False) -> JSONResponse:
    """Create MCP-compliant error response."""
    return JSONResponse(
        status_code=200,  # MCP uses 200 with error payload
        content={
            "error": {
                "code": error_code,
                "message": error_message,
                "retryable": retryable,
            },
        },
    )


@app.post("/mcp/tools/call")
async def call_tool(request: Request) -> JSONResponse:
    """Handle tool call requests.

    Expected request body:
    {
        "tool": "tool_name",
        "arguments": {...}
    }
    """
    try:
        body = await request.json()
    except json.JSONDecodeError:
        return create_error_response("INVALID_REQUEST", "Invalid JSON in request body")

    if not isinstance(body, dict):
        return create_error_response("INVALID_REQUEST", "Request body must be a JSON object")

    tool_name = body.get("tool")
    arguments = body.get("arguments") or {}

    if not tool_name:
        return create_error_response("INVALID_REQUEST", "Missing 'tool' field")
    if not isinstance(arguments, dict):
        return create_error_response("INVALID_REQUEST", "'arguments' must be an object")

    registry: ToolRegistry = request.app.state.registry
    if not registry.has_tool(tool_name):
        return create_error_response(
            "TOOL_NOT_FOUND",
            f"Tool '{tool_name}' not found. Available tools: {registry.list_tools()}",
        )

    try:
        result = await registry.call(tool_name, arguments)
    except ApiError as e:
        logger.warning(f"[SERVER] {tool_name} failed: {e.category.value} {e.message}")
        return JSONResponse(status_code=200, content={"error": e.to_dict()})
    except Exception as e:
        logger.exception(f"[SERVER] Tool execution error in {tool_name}: {e}")
        return create_error_response("INTERNAL_ERROR", f"Tool execution failed: {e!s}")

    return JSONResponse(status_code=200, content={"result": result})


@app.get("/health")
async def health_check() -> dict[str, str]:
    """Health check endpoint."""
    return {"status": "healthy", "server": "training-data-bridge"}


if __name__ == "__main__":
    import os

    import uvicorn

    host = os.getenv("HOST", "0.0.0.0")
    port = int(os.getenv("PORT", "8000"))
    uvicorn.run(app, host=host, port=port)
