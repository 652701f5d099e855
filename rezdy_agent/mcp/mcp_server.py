import inspect
import json
import logging
from typing import Any, Callable, Dict, List, Optional, Type, Union

from pydantic import BaseModel, ValidationError

from ..exceptions import RezdyAgentError
from .protocol import (
    INVALID_PARAMS,
    INVALID_REQUEST,
    MCP_PROTOCOL_VERSION,
    METHOD_NOT_FOUND,
    PARSE_ERROR,
    CallToolRequest,
    CallToolResult,
    JsonRpcRequest,
    JsonRpcResponse,
    create_tool_definition,
    error_response,
)

logger = logging.getLogger(__name__)


class MCPServer:
    """An in-process MCP server hosting tools behind JSON-RPC 2.0."""

    def __init__(self, name: str = "rezdy-agent-mcp", version: str = "1.0.0"):
        self.name = name
        self.version = version
        self.tools: Dict[str, Callable] = {}
        self.tool_definitions: List[Dict[str, Any]] = []
        self.tool_models: Dict[str, Type[BaseModel]] = {}

    def register_tool(
        self,
        func: Callable,
        name: str = None,
        description: str = None,
        args_model: Type[BaseModel] = None,
    ):
        """
        Register a python function as a tool.

        With ``args_model`` the advertised input schema is the model's JSON
        schema and the function receives the validated model instance.
        Without it the schema is inferred from the function signature and the
        function receives keyword arguments. The Rezdy tools always pass a
        model; the signature path is for ad-hoc helpers registered directly.
        """
        if name is None:
            name = func.__name__
        if description is None:
            description = inspect.getdoc(func) or ""

        if args_model is not None:
            parameters = args_model.model_json_schema(by_alias=True)
            self.tool_models[name] = args_model
        else:
            parameters = self._schema_from_signature(func)

        self.tools[name] = func
        self.tool_definitions.append(create_tool_definition(name, description, parameters))

    @staticmethod
    def _schema_from_signature(func: Callable) -> Dict[str, Any]:
        sig = inspect.signature(func)
        parameters = {
            "type": "object",
            "properties": {},
            "required": []
        }

        for param_name, param in sig.parameters.items():
            param_type = "string"  # Default to string
            if param.annotation == int:
                param_type = "integer"
            elif param.annotation == float:
                param_type = "number"
            elif param.annotation == bool:
                param_type = "boolean"
            elif param.annotation == list:
                param_type = "array"
            elif param.annotation == dict:
                param_type = "object"

            parameters["properties"][param_name] = {
                "type": param_type,
                "description": f"Parameter {param_name}"
            }
            if param.default == inspect.Parameter.empty:
                parameters["required"].append(param_name)
        return parameters

    def list_tools(self) -> List[Dict[str, Any]]:
        return self.tool_definitions

    async def call_tool(self, name: str, arguments: Optional[Dict[str, Any]]) -> CallToolResult:
        """Run a tool. Failures come back as an ``isError`` result, never raised."""
        if name not in self.tools:
            return CallToolResult.text(f"Tool not found: {name}", is_error=True)

        arguments = arguments or {}
        try:
            func = self.tools[name]
            model = self.tool_models.get(name)
            if model is not None:
                result = func(model.model_validate(arguments))
            else:
                result = func(**arguments)
            if inspect.isawaitable(result):
                result = await result

            return CallToolResult.text(self._render(result))
        except (RezdyAgentError, ValidationError) as e:
            logger.warning(f"Tool {name} rejected: {e}")
            return CallToolResult.text(f"Error executing tool {name}: {str(e)}", is_error=True)
        except Exception as e:
            logger.exception(f"Tool {name} failed")
            return CallToolResult.text(f"Error executing tool {name}: {str(e)}", is_error=True)

    @staticmethod
    def _render(result: Any) -> str:
        if isinstance(result, str):
            return result
        if isinstance(result, BaseModel):
            result = result.model_dump(by_alias=True)
        return json.dumps(result, indent=2, default=str)

    async def handle_request(self, request: JsonRpcRequest) -> Optional[JsonRpcResponse]:
        """Dispatch one JSON-RPC request. Notifications get no response."""
        method = request.method
        params = request.params or {}

        if method == "initialize":
            result = {
                "protocolVersion": params.get("protocolVersion", MCP_PROTOCOL_VERSION),
                "capabilities": {"tools": {}},
                "serverInfo": {"name": self.name, "version": self.version},
            }
        elif method == "ping":
            result = {}
        elif method == "tools/list":
            result = {"tools": self.list_tools()}
        elif method == "tools/call":
            try:
                call = CallToolRequest.model_validate(params)
            except ValidationError as e:
                return error_response(INVALID_PARAMS, f"Invalid params: {e}", request.id)
            logger.info(f"Calling tool {call.name}", extra={"request_id": request.id})
            result = (await self.call_tool(call.name, call.arguments)).to_dict()
        elif request.is_notification:
            logger.debug(f"Ignoring notification {method}")
            return None
        else:
            return error_response(METHOD_NOT_FOUND, f"Method not found: {method}", request.id)

        if request.is_notification:
            return None
        return JsonRpcResponse(result=result, id=request.id)

    async def handle_message(self, raw: Union[str, bytes]) -> Optional[Dict[str, Any]]:
        """Parse a raw JSON-RPC message, dispatch it, and return the response dict."""
        try:
            payload = json.loads(raw)
        except ValueError as e:
            return error_response(PARSE_ERROR, f"Parse error: {e}").to_dict()

        if not isinstance(payload, dict):
            return error_response(INVALID_REQUEST, "Invalid Request").to_dict()

        try:
            request = JsonRpcRequest.model_validate(payload)
        except ValidationError as e:
            request_id = payload.get("id")
            if not isinstance(request_id, (str, int)):
                request_id = None
            return error_response(INVALID_REQUEST, f"Invalid Request: {e}", request_id).to_dict()

        response = await self.handle_request(request)
        return response.to_dict() if response is not None else None
