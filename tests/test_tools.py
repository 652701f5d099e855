import json
import unittest
from unittest.mock import patch

import httpx

from rezdy_agent.agent_client import RezdyAgentClient
from rezdy_agent.config import Config
from rezdy_agent.main import create_server
from rezdy_agent.rate_limit import RateLimiter
from rezdy_agent.session import AgentSession

EXPECTED_TOOLS = {
    "rezdy_agent_configure",
    "rezdy_agent_search_products",
    "rezdy_agent_get_product",
    "rezdy_agent_get_product_pickups",
    "rezdy_agent_search_availability",
    "rezdy_agent_quote_booking",
    "rezdy_agent_create_booking",
    "rezdy_agent_get_booking",
    "rezdy_agent_update_booking",
    "rezdy_agent_cancel_booking",
    "rezdy_agent_search_customers",
    "rezdy_agent_create_customer",
    "rezdy_agent_get_customer",
    "rezdy_agent_update_customer",
    "rezdy_agent_delete_customer",
    "rezdy_agent_get_categories",
    "rezdy_agent_get_locations",
    "rezdy_agent_get_suppliers",
    "rezdy_agent_calculate_pricing",
    "rezdy_agent_calculate_quantity_pricing",
}


class TestRezdyTools(unittest.IsolatedAsyncioTestCase):
    async def asyncSetUp(self):
        config_patch = patch.multiple(
            Config,
            REZDY_API_KEY=None,
            REZDY_BASE_URL="https://api.rezdy.com/v1",
            REZDY_STAGING_URL="https://api-staging.rezdy.com/v1",
        )
        config_patch.start()
        self.addCleanup(config_patch.stop)
        self.requests = []

        def handler(request: httpx.Request) -> httpx.Response:
            self.requests.append(request)
            return httpx.Response(200, json={"requestId": "r1", "success": True, "data": {"id": "ok"}})

        def client_factory(config):
            http = httpx.AsyncClient(transport=httpx.MockTransport(handler), base_url=config.effective_base_url)
            return RezdyAgentClient(config, http_client=http, rate_limiter=RateLimiter(max_requests=1000))

        self.session = AgentSession(client_factory=client_factory)
        self.server, _ = await create_server(self.session)

    async def asyncTearDown(self):
        await self.session.close()

    async def call(self, name, arguments=None):
        result = await self.server.call_tool(name, arguments or {})
        return result.isError, result.content[0]["text"]

    async def configure(self, environment="production"):
        return await self.call("rezdy_agent_configure", {"apiKey": "secret", "environment": environment})

    def test_all_tools_registered(self):
        names = {tool["name"] for tool in self.server.list_tools()}
        self.assertEqual(names, EXPECTED_TOOLS)

    def test_schemas_use_wire_names(self):
        tool = next(t for t in self.server.list_tools() if t["name"] == "rezdy_agent_create_booking")
        self.assertIn("productId", tool["inputSchema"]["properties"])
        self.assertIn("productId", tool["inputSchema"]["required"])
        self.assertEqual(tool["description"], "Create a confirmed booking")

    async def test_tools_require_configuration(self):
        is_error, text = await self.call("rezdy_agent_get_categories")
        self.assertTrue(is_error)
        self.assertIn("Please run rezdy_agent_configure first.", text)
        self.assertEqual(self.requests, [])

    async def test_configure_then_call(self):
        is_error, text = await self.configure("staging")
        self.assertFalse(is_error)
        self.assertEqual(text, "Rezdy Agent API configured successfully for staging environment")

        is_error, text = await self.call("rezdy_agent_get_product", {"productId": 42})
        self.assertFalse(is_error)
        self.assertEqual(json.loads(text)["data"], {"id": "ok"})
        self.assertEqual(str(self.requests[0].url), "https://api-staging.rezdy.com/v1/marketplace/products/42")
        self.assertEqual(self.requests[0].headers["X-Rezdy-ApiKey"], "secret")

    async def test_reconfigure_replaces_client(self):
        await self.configure()
        first = self.session.client
        await self.configure("staging")
        self.assertIsNot(self.session.client, first)
        self.assertEqual(self.session.client.config.environment, "staging")

    async def test_validation_failure_is_reported_without_upstream_call(self):
        await self.configure()
        is_error, text = await self.call("rezdy_agent_create_booking", {
            "productId": 1,
            "quantities": [{"optionId": 1, "value": 0}],
            "customer": {"firstName": "Jane", "lastName": "Smith", "email": "jane.smith@gmail.com"},
        })
        self.assertTrue(is_error)
        self.assertEqual(
            text,
            "Error executing tool rezdy_agent_create_booking: Quantity validation errors: "
            "Invalid quantity value at index 0: must be a positive integer",
        )
        self.assertEqual(self.requests, [])

    async def test_update_booking_keeps_id_out_of_body(self):
        await self.configure()
        is_error, _ = await self.call("rezdy_agent_update_booking", {"bookingId": "B42", "notes": "Vegetarian meal"})
        self.assertFalse(is_error)

        request = self.requests[0]
        self.assertEqual(request.method, "PUT")
        self.assertEqual(request.url.path, "/v1/marketplace/bookings/B42")
        self.assertEqual(json.loads(request.content), {"notes": "Vegetarian meal"})

    async def test_cancel_and_customer_tools(self):
        await self.configure()
        await self.call("rezdy_agent_cancel_booking", {"bookingId": "B1", "reason": "Sick"})
        await self.call("rezdy_agent_update_customer", {"customerId": "C9", "phone": "+1 415 555 0100"})
        await self.call("rezdy_agent_delete_customer", {"customerId": "C9"})

        self.assertEqual(
            [(r.method, r.url.path) for r in self.requests],
            [
                ("POST", "/v1/marketplace/bookings/B1/cancel"),
                ("PUT", "/v1/agent/customers/C9"),
                ("DELETE", "/v1/agent/customers/C9"),
            ],
        )
        self.assertEqual(json.loads(self.requests[1].content), {"phone": "+1 415 555 0100"})

    async def test_calculate_pricing_needs_no_configuration(self):
        is_error, text = await self.call("rezdy_agent_calculate_pricing", {
            "basePrice": 100, "discountRate": 10, "fees": 5, "taxRate": 10,
        })
        self.assertFalse(is_error)
        result = json.loads(text)
        self.assertAlmostEqual(result["total"], 104)
        self.assertAlmostEqual(result["netPrice"], 104)
        self.assertEqual(result["currency"], "USD")
        self.assertEqual(result["formatted"]["total"], "$104.00")

    async def test_calculate_quantity_pricing(self):
        is_error, text = await self.call("rezdy_agent_calculate_quantity_pricing", {
            "quantities": [{"optionId": 1, "value": 2}, {"optionId": 2, "value": 1}],
            "pricing": [{"optionId": 1, "price": 10, "agentPrice": 8}],
            "useAgentPricing": True,
            "currency": "EUR",
        })
        self.assertFalse(is_error)
        self.assertEqual(json.loads(text), {"total": 16.0, "currency": "EUR", "formatted": "€16.00"})


class TestCreateServer(unittest.IsolatedAsyncioTestCase):
    @patch.object(Config, "REZDY_ENVIRONMENT", "staging")
    @patch.object(Config, "REZDY_API_KEY", "env-key")
    async def test_configures_from_environment(self):
        server, session = await create_server()
        try:
            self.assertTrue(session.is_configured)
            self.assertEqual(session.client.config.api_key, "env-key")
            self.assertEqual(session.client.config.environment, "staging")
            self.assertEqual(server.name, "rezdy-agent-mcp")
        finally:
            await session.close()

    @patch.object(Config, "REZDY_API_KEY", None)
    async def test_starts_unconfigured_without_key(self):
        with self.assertLogs("rezdy_agent.config", level="WARNING"):
            _, session = await create_server()
        self.assertFalse(session.is_configured)


if __name__ == "__main__":
    unittest.main()
