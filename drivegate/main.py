import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone

import uvicorn
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from drivegate.config import get_settings
from drivegate.context import build_context
from drivegate.exceptions import (
    AuthenticationError,
    IntegrationError,
    MissingArgumentError,
    RateLimitError,
    UnknownToolError,
)
from drivegate.models.common import ErrorResponse, HealthResponse
from drivegate.routers.mcp import router as mcp_router

logger = logging.getLogger(__name__)


# --- CORS middleware ---

class McpCorsMiddleware(BaseHTTPMiddleware):
    """Open every /mcp* response to any origin."""

    async def dispatch(self, request: Request, call_next):
        response = await call_next(request)
        if request.url.path.startswith("/mcp"):
            response.headers["Access-Control-Allow-Origin"] = "*"
        return response


# --- FastAPI app ---

@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = get_settings()
    app.state.context = build_context(settings)
    logger.info("GDrive MCP Server running on port %s", settings.port)
    yield


app = FastAPI(title="Drive Gateway", version="1.0.0", lifespan=lifespan)
app.add_middleware(McpCorsMiddleware)
app.include_router(mcp_router)


@app.get("/health")
def health() -> HealthResponse:
    timestamp = datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")
    return HealthResponse(status="ok", timestamp=timestamp)


# --- Exception handlers ---

def _error(status_code: int, exc: Exception) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=ErrorResponse(error=str(exc)).model_dump())


@app.exception_handler(UnknownToolError)
async def unknown_tool_handler(request: Request, exc: UnknownToolError):
    return _error(404, exc)


@app.exception_handler(MissingArgumentError)
async def missing_argument_handler(request: Request, exc: MissingArgumentError):
    return _error(400, exc)


@app.exception_handler(AuthenticationError)
async def auth_error_handler(request: Request, exc: AuthenticationError):
    return _error(401, exc)


@app.exception_handler(RateLimitError)
async def rate_limit_error_handler(request: Request, exc: RateLimitError):
    return _error(429, exc)


@app.exception_handler(IntegrationError)
async def integration_error_handler(request: Request, exc: IntegrationError):
    return _error(500, exc)


def run():
    settings = get_settings()
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    uvicorn.run(
        "drivegate.main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    run()
