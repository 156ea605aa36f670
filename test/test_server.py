import asyncio
import unittest
from datetime import datetime

from passage import tools
from passage.clock import FixedClock
from passage.server import (
    MCP_PATH,
    SERVER_NAME,
    ToolCallError,
    build_tool_list,
    create_http_app,
    create_server,
    handle_call,
)
from passage.tools.context import ToolCallbacks


class TestServer(unittest.TestCase):
    def setUp(self):
        tools.init_callbacks(
            ToolCallbacks(clock=FixedClock(datetime(2023, 10, 1, 12, 30)), emit_tool_trace=False)
        )

    def test_tool_list_matches_registry(self):
        listed = build_tool_list()
        self.assertEqual([t.name for t in listed], tools.tool_names())
        by_name = {t.name: t for t in listed}
        since = by_name["timeSince"]
        self.assertEqual(since.inputSchema["type"], "object")
        self.assertIn("dateTime", since.inputSchema["properties"])
        self.assertTrue(since.annotations.readOnlyHint)

    def test_handle_call_success(self):
        content = handle_call("timeSince", {"dateTime": "2023-09-30 12:00:00"})
        self.assertEqual(len(content), 1)
        self.assertEqual(content[0].type, "text")
        self.assertEqual(content[0].text, "24h30m0s")

    def test_handle_call_without_arguments(self):
        content = handle_call("currentDateTime", None)
        self.assertEqual(content[0].text, "2023-10-01 12:30:00 +0000")

    def test_handle_call_error(self):
        with self.assertRaises(ToolCallError) as cm:
            handle_call("timeUntil", {"dateTime": "2023-09-30"})
        self.assertEqual(str(cm.exception), "The specified time is in the past")

    def test_handle_call_unknown_tool(self):
        with self.assertRaises(ToolCallError) as cm:
            handle_call("nope", {})
        self.assertEqual(str(cm.exception), "unknown tool: nope")

    def test_create_server(self):
        server = create_server()
        self.assertEqual(server.name, SERVER_NAME)


class TestServerHandlers(unittest.TestCase):
    """登録済みハンドラを SDK のリクエスト型で直接呼ぶ"""

    def setUp(self):
        tools.init_callbacks(
            ToolCallbacks(clock=FixedClock(datetime(2023, 10, 1, 12, 30)), emit_tool_trace=False)
        )

    def test_list_and_call(self):
        import mcp.types as types

        server = create_server()

        list_handler = server.request_handlers[types.ListToolsRequest]
        listed = asyncio.run(list_handler(types.ListToolsRequest(method="tools/list")))
        names = [t.name for t in listed.root.tools]
        self.assertIn("daysBetween", names)

        call_handler = server.request_handlers[types.CallToolRequest]
        req = types.CallToolRequest(
            method="tools/call",
            params=types.CallToolRequestParams(name="isLeapYear", arguments={"year": 2024}),
        )
        result = asyncio.run(call_handler(req)).root
        self.assertFalse(result.isError)
        self.assertEqual(result.content[0].text, "2024 is a leap year.")

        bad = types.CallToolRequest(
            method="tools/call",
            params=types.CallToolRequestParams(name="isLeapYear", arguments={"year": 0}),
        )
        result = asyncio.run(call_handler(bad)).root
        self.assertTrue(result.isError)
        self.assertIn("Invalid year provided", result.content[0].text)


class TestHTTPTransport(unittest.TestCase):
    """streamable HTTP の /mcp に JSON-RPC を直接送る"""

    HEADERS = {"Accept": "application/json, text/event-stream"}

    def setUp(self):
        tools.init_callbacks(
            ToolCallbacks(clock=FixedClock(datetime(2023, 10, 1, 12, 30)), emit_tool_trace=False)
        )

    def _post(self, client, method, params, req_id=1):
        resp = client.post(
            MCP_PATH,
            json={"jsonrpc": "2.0", "id": req_id, "method": method, "params": params},
            headers=self.HEADERS,
        )
        self.assertEqual(resp.status_code, 200, msg=resp.text)
        return resp.json()

    def test_list_and_call_over_http(self):
        from fastapi.testclient import TestClient

        with TestClient(create_http_app()) as client:
            listed = self._post(client, "tools/list", {})
            names = [t["name"] for t in listed["result"]["tools"]]
            self.assertIn("timeSince", names)

            called = self._post(
                client,
                "tools/call",
                {"name": "timeSince", "arguments": {"dateTime": "2023-09-30 12:00:00"}},
                req_id=2,
            )
            self.assertFalse(called["result"]["isError"])
            self.assertEqual(called["result"]["content"][0]["text"], "24h30m0s")

    def test_error_result_over_http(self):
        from fastapi.testclient import TestClient

        with TestClient(create_http_app()) as client:
            called = self._post(
                client, "tools/call", {"name": "isLeapYear", "arguments": {"year": 0}}
            )
            self.assertTrue(called["result"]["isError"])
            self.assertIn("Invalid year provided", called["result"]["content"][0]["text"])


if __name__ == "__main__":
    unittest.main()
