"""The FastMCP surface: discovery through an in-memory client, calls through
CatalogTool."""

import pytest
from fastmcp import Client
from fastmcp.exceptions import ToolError

from goalstory.catalog import get_tool, tool_names
from goalstory.dispatcher import Dispatcher
from goalstory_mcp.mcp_server import CatalogTool, create_server


@pytest.mark.asyncio
async def test_list_tools_matches_the_catalog(config, http_client):
    server = create_server(config, http_client)

    async with Client(server) as client:
        tools = await client.list_tools()

    assert {t.name for t in tools} == set(tool_names())
    create_goal = next(t for t in tools if t.name == "goalstory_create_goal")
    assert create_goal.inputSchema["required"] == ["name"]


@pytest.mark.asyncio
async def test_catalog_tool_returns_text_content(config, http_client, backend):
    backend.payload = {"id": "g1"}
    tool = CatalogTool.from_entry(get_tool("goalstory_read_one_goal"), Dispatcher(config, http_client))

    result = await tool.run({"id": "g1"})

    assert len(result.content) == 1
    assert result.content[0].type == "text"
    assert result.content[0].text.startswith("Goal data:\n")


@pytest.mark.asyncio
async def test_catalog_tool_raises_tool_error_for_error_envelopes(config, http_client, backend):
    backend.status = 500
    backend.payload = {"message": "boom"}
    tool = CatalogTool.from_entry(get_tool("goalstory_about"), Dispatcher(config, http_client))

    with pytest.raises(ToolError, match="HTTP Error 500"):
        await tool.run({})


@pytest.mark.asyncio
async def test_call_through_client_reports_is_error(config, http_client, backend):
    server = create_server(config, http_client)

    async with Client(server) as client:
        result = await client.call_tool("goalstory_create_goal", {}, raise_on_error=False)

    assert result.is_error
    assert "name" in result.content[0].text
    assert backend.requests == []


@pytest.mark.asyncio
async def test_listed_schema_comes_from_the_argument_model(config, http_client):
    server = create_server(config, http_client)

    async with Client(server) as client:
        tools = await client.list_tools()

    schedule = next(t for t in tools if t.name == "goalstory_create_scheduled_story")
    assert schedule.inputSchema["required"] == ["goal_id", "timeSettings"]
    assert "timeSettings" in schedule.inputSchema["properties"]
    update_user = next(t for t in tools if t.name == "goalstory_update_self_user")
    assert {"type": "number"} in update_user.inputSchema["properties"]["visibility"]["anyOf"]
