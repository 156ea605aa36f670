"""passage.server

MCP server exposing every registered time tool, over stdio or over
streamable HTTP at ``/mcp``.

The tool list and the call path go through the same registry the CLI uses
(``passage.tools``); a failed call is reported with ``isError`` and the
error's text.
"""

from __future__ import annotations

import contextlib
import logging
from typing import Any, AsyncIterator, Dict, List, Optional

import mcp.types as types
import uvicorn
from fastapi import FastAPI
from mcp.server import Server
from mcp.server.stdio import stdio_server
from mcp.server.streamable_http_manager import StreamableHTTPSessionManager
from starlette.routing import Route
from starlette.types import Receive, Scope, Send

from . import tools
from .clock import Clock
from .runtime_init import RuntimeSettings, init_tools_callbacks

logger = logging.getLogger(__name__)

SERVER_NAME = "passage-of-time"
MCP_PATH = "/mcp"


class ToolCallError(Exception):
    """Raised inside the MCP handler so that the SDK marks the result isError."""


def build_tool_list() -> List[types.Tool]:
    out: List[types.Tool] = []
    for spec in tools.TOOL_SPECS:
        func = spec["function"]
        read_only = bool(func.get("x_passage", {}).get("read_only"))
        out.append(
            types.Tool(
                name=func["name"],
                description=func.get("description", ""),
                inputSchema=func.get("parameters") or {"type": "object", "properties": {}},
                annotations=types.ToolAnnotations(readOnlyHint=read_only),
            )
        )
    return out


def handle_call(name: str, arguments: Optional[Dict[str, Any]]) -> List[types.TextContent]:
    result = tools.call_tool(name, arguments or {})
    if result.is_error:
        raise ToolCallError(result.text)
    return [types.TextContent(type="text", text=result.text)]


def create_server() -> Server:
    server: Server = Server(SERVER_NAME)

    @server.list_tools()
    async def _list_tools() -> List[types.Tool]:
        return build_tool_list()

    @server.call_tool()
    async def _call_tool(name: str, arguments: Dict[str, Any]) -> List[types.TextContent]:
        return handle_call(name, arguments)

    return server


async def serve_stdio(settings: RuntimeSettings, clock: Optional[Clock] = None) -> None:
    # stdout は MCP の通信路なので [TOOL] トレースは出さない
    init_tools_callbacks(settings, clock=clock, emit_tool_trace=False)
    server = create_server()
    logger.info("starting MCP stdio server %s with tools: %s", SERVER_NAME, ", ".join(tools.tool_names()))
    async with stdio_server() as (read_stream, write_stream):
        await server.run(read_stream, write_stream, server.create_initialization_options())


class _StreamableHTTPEndpoint:
    """ASGI app handing every /mcp request to the session manager."""

    def __init__(self, session_manager: StreamableHTTPSessionManager) -> None:
        self.session_manager = session_manager

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        await self.session_manager.handle_request(scope, receive, send)


def create_http_app(server: Optional[Server] = None) -> FastAPI:
    """FastAPI app serving MCP (streamable HTTP, stateless, JSON responses)."""
    session_manager = StreamableHTTPSessionManager(
        app=server or create_server(),
        json_response=True,
        stateless=True,
    )

    @contextlib.asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        async with session_manager.run():
            yield

    app = FastAPI(title=SERVER_NAME, lifespan=lifespan)
    # 末尾スラッシュなしの /mcp をそのまま受けるため Mount ではなく Route にする
    app.router.routes.append(
        Route(MCP_PATH, endpoint=_StreamableHTTPEndpoint(session_manager))
    )
    return app


async def serve_http(
    settings: RuntimeSettings,
    host: str,
    port: int,
    clock: Optional[Clock] = None,
    log_level: Optional[str] = None,
) -> None:
    init_tools_callbacks(settings, clock=clock, emit_tool_trace=True)
    app = create_http_app()
    logger.info("starting MCP HTTP server %s on %s:%d%s", SERVER_NAME, host, port, MCP_PATH)
    config = uvicorn.Config(
        app,
        host=host,
        port=port,
        log_level=(log_level or settings.log_level).lower(),
    )
    await uvicorn.Server(config).serve()
