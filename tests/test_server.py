"""Tests for the MCP server wiring."""

import json

import pytest
from mcp.types import CallToolRequest, CallToolRequestParams, ListToolsRequest

from selenium_mcp.server import create_server


@pytest.mark.asyncio
async def test_list_tools(config):
    server = create_server(config=config)
    handler = server.request_handlers[ListToolsRequest]

    result = await handler(ListToolsRequest(method="tools/list"))

    names = [tool.name for tool in result.root.tools]
    assert names == ["list_tests", "run_tests", "get_test_results", "generate_report", "get_framework_info"]


@pytest.mark.asyncio
async def test_call_tool(config):
    server = create_server(config=config)
    # Populate the server's tool cache used for input validation
    await server.request_handlers[ListToolsRequest](ListToolsRequest(method="tools/list"))
    handler = server.request_handlers[CallToolRequest]

    result = await handler(
        CallToolRequest(
            method="tools/call",
            params=CallToolRequestParams(name="list_tests", arguments={"test_class": "AboutPageTest"}),
        )
    )

    content = result.root.content
    assert json.loads(content[0].text) == {"AboutPageTest": ["testAboutPageTitle"]}
