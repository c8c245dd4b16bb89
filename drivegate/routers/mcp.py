import json
import logging

from fastapi import APIRouter, Body, Depends, Request
from fastapi.responses import Response, StreamingResponse

from drivegate import tools
from drivegate.context import GatewayContext, get_context
from drivegate.events import KeepAliveStream
from drivegate.exceptions import (
    AuthenticationError,
    IntegrationError,
    MissingArgumentError,
    RateLimitError,
    ToolError,
)
from drivegate.models.drive import DriveFile
from drivegate.models.mcp import (
    EXECUTION_ERROR,
    METHOD_NOT_FOUND,
    PROTOCOL_VERSION,
    RpcRequest,
    RpcResponse,
)

logger = logging.getLogger(__name__)

SERVER_INFO = {"name": "gdrive-mcp-server", "version": "1.0.0"}

router = APIRouter(prefix="/mcp", tags=["mcp"])


@router.get("")
async def event_stream(request: Request, context: GatewayContext = Depends(get_context)) -> StreamingResponse:
    """Handshake stream for connectors: one initialized event, then keep-alive comments."""
    stream = KeepAliveStream(context.settings.keepalive_interval, request.is_disconnected)
    return StreamingResponse(
        stream.frames(),
        media_type="text/event-stream",
        headers={
            "Cache-Control": "no-cache",
            "Connection": "keep-alive",
            "Access-Control-Allow-Origin": "*",
        },
    )


@router.post("")
def rpc(envelope: RpcRequest, context: GatewayContext = Depends(get_context)) -> dict:
    """JSON-RPC endpoint. Always answers 200; failures travel in the envelope's error field."""
    return dispatch(envelope, context).to_payload()


@router.options("")
def preflight() -> Response:
    return Response(
        status_code=204,
        headers={
            "Access-Control-Allow-Origin": "*",
            "Access-Control-Allow-Methods": "GET, POST, OPTIONS",
            "Access-Control-Allow-Headers": "Content-Type",
        },
    )


@router.get("/tools")
def list_tools() -> dict:
    return {"tools": tools.list_tools()}


@router.post("/tools/{tool_name}", response_model_exclude_none=True)
def call_tool(
    tool_name: str,
    arguments: dict | None = Body(default=None),
    context: GatewayContext = Depends(get_context),
) -> DriveFile | list[DriveFile]:
    """REST form of tools/call: the body is the arguments object and the bare result comes back."""
    try:
        return tools.call(context.drive, tool_name, arguments)
    except (ToolError, AuthenticationError, IntegrationError, RateLimitError):
        raise
    except Exception as e:
        # wrong-typed arguments fail inside the adapter
        logger.exception("%s failed", tool_name)
        raise IntegrationError(str(e)) from e


def dispatch(envelope: RpcRequest, context: GatewayContext) -> RpcResponse:
    method, request_id = envelope.method, envelope.id
    if not isinstance(method, str):
        return RpcResponse.fail(request_id, METHOD_NOT_FOUND, "Method not found")

    if method == "initialize":
        return RpcResponse.ok(request_id, {
            "protocolVersion": PROTOCOL_VERSION,
            "serverInfo": SERVER_INFO,
            "capabilities": {"tools": {}},
        })

    if method == "tools/list":
        return RpcResponse.ok(request_id, {"tools": tools.list_tools()})

    if method == "tools/call":
        params = envelope.params or {}
        name = params.get("name") if isinstance(params, dict) else None
        try:
            if not isinstance(params, dict):
                raise ToolError("Invalid params: expected an object")
            if not name:
                raise MissingArgumentError("Missing required parameter: name")
            result = tools.execute(context.drive, name, params.get("arguments"))
        except Exception as e:
            logger.exception("tools/call %s failed", name)
            return RpcResponse.fail(request_id, EXECUTION_ERROR, str(e))
        return RpcResponse.ok(request_id, {"content": [{"type": "text", "text": json.dumps(result, indent=2)}]})

    return RpcResponse.fail(request_id, METHOD_NOT_FOUND, "Method not found")
