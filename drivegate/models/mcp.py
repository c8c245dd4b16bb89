from typing import Any

from pydantic import BaseModel, ConfigDict, Field

JSONRPC_VERSION = "2.0"
PROTOCOL_VERSION = "2024-11-05"

METHOD_NOT_FOUND = -32601
EXECUTION_ERROR = -32000


class ToolDescriptor(BaseModel):
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    name: str
    description: str
    input_schema: dict = Field(alias="inputSchema")


class RpcRequest(BaseModel):
    """Inbound envelope. Every field is optional so a bad envelope still gets an RPC answer."""

    jsonrpc: Any = None
    method: Any = None
    params: Any = None
    id: Any = None


class RpcError(BaseModel):
    code: int
    message: str


class RpcResponse(BaseModel):
    jsonrpc: str = JSONRPC_VERSION
    id: Any = None
    result: Any = None
    error: RpcError | None = None

    @classmethod
    def ok(cls, request_id: Any, result: Any) -> "RpcResponse":
        return cls(id=request_id, result=result)

    @classmethod
    def fail(cls, request_id: Any, code: int, message: str) -> "RpcResponse":
        return cls(id=request_id, error=RpcError(code=code, message=message))

    def to_payload(self) -> dict:
        # id is always echoed, even when null; exactly one of result/error is emitted
        payload = {"jsonrpc": self.jsonrpc, "id": self.id}
        if self.error is not None:
            payload["error"] = self.error.model_dump()
        else:
            payload["result"] = self.result
        return payload
