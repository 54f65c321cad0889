"""MCP tool tests: direct calls plus the FastMCP in-process client."""

import json

import pytest
from mcp.shared.memory import create_connected_server_and_client_session

import backend.mcp_server as mcp_server
from pocket_ranger.resolver import InvalidInput


@pytest.fixture(autouse=True)
def shipped(shipped_corpus):
    mcp_server.set_corpus(shipped_corpus)


def test_plan_adventure_direct():
    result = mcp_server.plan_adventure("utah desert trip")
    assert result["key"] == "moab-utah"
    assert "keywords" not in result


def test_plan_adventure_with_recommended_file():
    result = mcp_server.plan_adventure("utah desert trip", "glacier-montana.json")
    assert result["key"] == "glacier-montana"


def test_plan_adventure_invalid():
    with pytest.raises(InvalidInput):
        mcp_server.plan_adventure("   ")


def test_list_adventures_direct(shipped_corpus):
    result = mcp_server.list_adventures()
    assert [a["key"] for a in result] == shipped_corpus.keys()


async def test_tools_registered():
    async with create_connected_server_and_client_session(mcp_server.mcp) as client:
        tools = await client.list_tools()
    assert {t.name for t in tools.tools} >= {"plan_adventure", "list_adventures"}


async def test_plan_adventure_over_session():
    async with create_connected_server_and_client_session(mcp_server.mcp) as client:
        result = await client.call_tool("plan_adventure", {"user_input": "explore Milwaukee"})
    assert not result.isError
    record = json.loads(result.content[0].text)
    assert record["activity"] == "exploration"
    assert "Milwaukee" in record["city"]


async def test_invalid_input_over_session_is_error():
    async with create_connected_server_and_client_session(mcp_server.mcp) as client:
        result = await client.call_tool("plan_adventure", {"user_input": ""})
    assert result.isError
