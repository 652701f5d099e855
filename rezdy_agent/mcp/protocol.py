from typing import Any, Dict, List, Optional, Union
from pydantic import BaseModel, Field

# JSON-RPC 2.0 Constants
JSONRPC_VERSION = "2.0"
MCP_PROTOCOL_VERSION = "2024-11-05"

PARSE_ERROR = -32700
INVALID_REQUEST = -32600
METHOD_NOT_FOUND = -32601
INVALID_PARAMS = -32602
INTERNAL_ERROR = -32603


class JsonRpcRequest(BaseModel):
    method: str
    params: Optional[Dict[str, Any]] = None
    id: Optional[Union[str, int]] = None
    jsonrpc: str = Field(default=JSONRPC_VERSION, pattern=r"^2\.0$")

    @property
    def is_notification(self) -> bool:
        return self.id is None

    def to_dict(self) -> Dict[str, Any]:
        return self.model_dump(exclude_none=True)


class JsonRpcResponse(BaseModel):
    result: Any = None
    error: Optional[Dict[str, Any]] = None
    id: Optional[Union[str, int]] = None
    jsonrpc: str = Field(default=JSONRPC_VERSION, pattern=r"^2\.0$")

    def to_dict(self) -> Dict[str, Any]:
        data = self.model_dump(exclude_none=True)
        # id is mandatory in responses, null when it could not be read
        data["id"] = self.id
        return data


def error_response(code: int, message: str, request_id: Optional[Union[str, int]] = None) -> JsonRpcResponse:
    return JsonRpcResponse(error={"code": code, "message": message}, id=request_id)

# MCP Specific Structures

class Tool(BaseModel):
    name: str
    description: str
    inputSchema: Dict[str, Any]


class CallToolRequest(BaseModel):
    name: str
    arguments: Dict[str, Any] = Field(default_factory=dict)


class CallToolResult(BaseModel):
    content: List[Dict[str, Any]]
    isError: bool = False

    @classmethod
    def text(cls, text: str, is_error: bool = False) -> "CallToolResult":
        return cls(content=[{"type": "text", "text": text}], isError=is_error)

    def to_dict(self) -> Dict[str, Any]:
        return self.model_dump()

# Helper to create a tool definition
def create_tool_definition(name: str, description: str, parameters: Dict[str, Any]) -> Dict[str, Any]:
    tool = Tool(name=name, description=description, inputSchema=parameters)
    return tool.model_dump()
