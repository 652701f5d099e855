import unittest
from rezdy_agent.mcp.protocol import (
    METHOD_NOT_FOUND,
    JsonRpcRequest,
    JsonRpcResponse,
    Tool,
    CallToolRequest,
    CallToolResult,
    error_response,
)
from pydantic import ValidationError

class TestProtocol(unittest.TestCase):
    def test_json_rpc_request_valid(self):
        req = JsonRpcRequest(method="tools/list", params={"a": 1}, id=1)
        self.assertEqual(req.jsonrpc, "2.0")
        self.assertEqual(req.method, "tools/list")
        self.assertFalse(req.is_notification)

    def test_json_rpc_request_invalid_version(self):
        with self.assertRaises(ValidationError):
            JsonRpcRequest(method="test", jsonrpc="1.0")

    def test_notification_has_no_id(self):
        req = JsonRpcRequest(method="notifications/initialized")
        self.assertTrue(req.is_notification)
        self.assertNotIn("id", req.to_dict())

    def test_response_always_carries_id(self):
        data = error_response(METHOD_NOT_FOUND, "Method not found: nope").to_dict()
        self.assertIsNone(data["id"])
        self.assertEqual(data["error"]["code"], -32601)
        self.assertNotIn("result", data)

        ok = JsonRpcResponse(result={}, id="abc").to_dict()
        self.assertEqual(ok, {"result": {}, "id": "abc", "jsonrpc": "2.0"})

    def test_tool_definition(self):
        tool = Tool(name="rezdy_agent_get_product", description="desc", inputSchema={"type": "object"})
        self.assertEqual(tool.name, "rezdy_agent_get_product")

    def test_call_tool_request_defaults_arguments(self):
        self.assertEqual(CallToolRequest(name="x").arguments, {})

    def test_call_tool_result(self):
        res = CallToolResult(content=[{"text": "ok"}])
        self.assertFalse(res.isError)
        self.assertEqual(res.to_dict()["content"][0]["text"], "ok")

    def test_text_result(self):
        res = CallToolResult.text("boom", is_error=True)
        self.assertTrue(res.isError)
        self.assertEqual(res.content, [{"type": "text", "text": "boom"}])

if __name__ == "__main__":
    unittest.main()
