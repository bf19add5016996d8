from __future__ import annotations

import json
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Any, Callable, Dict

import httpx
import mcp.types as types
import pytest
from mcp.server.lowlevel import Server

from historian.capabilities import build_registry
from historian.capabilities.guidance import GUIDANCE_TEXT
from historian.errors import InvalidInput, UnknownCapability, UpstreamProtocolError
from historian.knowledge import KnowledgeStore
from historian.server.core.config import OpenRouterConfig, Settings
from historian.server import main as server_main
from historian.server.main import McpAdapter, create_server


@pytest.fixture
def adapter(store: KnowledgeStore) -> McpAdapter:
    return McpAdapter(build_registry(store, OpenRouterConfig(api_key=None)))


@pytest.mark.asyncio
async def test_discovery_splits_capabilities_by_kind(adapter: McpAdapter) -> None:
    prompts = await adapter.list_prompts()
    resources = await adapter.list_resources()
    tools = await adapter.list_tools()

    assert [p.name for p in prompts] == ["css-tutor-guidance"]
    assert [r.name for r in resources] == ["css_knowledge_memory"]
    assert str(resources[0].uri) == "memory://css_knowledge_memory/"
    assert resources[0].mimeType == "application/json"
    assert [t.name for t in tools] == ["read_from_memory", "write_to_memory"]


@pytest.mark.asyncio
async def test_write_tool_schema_published(adapter: McpAdapter) -> None:
    tools = {t.name: t for t in await adapter.list_tools()}
    schema = tools["write_to_memory"].inputSchema

    assert schema["required"] == ["concept", "known"]
    assert set(schema["properties"]) == {"concept", "known"}
    assert tools["read_from_memory"].inputSchema["properties"] == {}


@pytest.mark.asyncio
async def test_get_prompt_returns_guidance_as_assistant_message(adapter: McpAdapter) -> None:
    result = await adapter.get_prompt("css-tutor-guidance", None)

    assert len(result.messages) == 1
    assert result.messages[0].role == "assistant"
    assert result.messages[0].content.text == GUIDANCE_TEXT


@pytest.mark.asyncio
async def test_resource_and_read_tool_return_identical_bytes(adapter: McpAdapter) -> None:
    await adapter.call_tool("write_to_memory", {"concept": "Flexbox", "known": True})

    [contents] = list(await adapter.read_resource("memory://css_knowledge_memory/u1"))
    [tool_text] = await adapter.call_tool("read_from_memory", {})

    assert contents.content == tool_text.text
    assert contents.mime_type == "application/json"
    assert json.loads(tool_text.text)["knownConcepts"] == {"Flexbox": True}


@pytest.mark.asyncio
async def test_wrong_surface_is_unknown(adapter: McpAdapter) -> None:
    with pytest.raises(UnknownCapability):
        await adapter.call_tool("css-tutor-guidance", {})
    with pytest.raises(UnknownCapability):
        await adapter.get_prompt("read_from_memory", None)
    with pytest.raises(UnknownCapability):
        await adapter.read_resource("memory://elsewhere/")


@pytest.mark.asyncio
async def test_call_tool_failure_is_raised_and_storage_untouched(adapter: McpAdapter, memory_file: Path) -> None:
    before = memory_file.read_bytes()

    with pytest.raises(InvalidInput):
        await adapter.call_tool("write_to_memory", {"concept": "", "known": True})

    assert memory_file.read_bytes() == before


@pytest.mark.asyncio
async def test_upstream_protocol_error_surfaces_through_adapter(
    store: KnowledgeStore,
    mock_http_client: Callable[..., httpx.AsyncClient],
) -> None:
    config = OpenRouterConfig(api_key="sk-test", base_url="https://mock.openrouter/api/v1")
    http = mock_http_client(lambda request: httpx.Response(200, json={"choices": [{"message": {}}]}))
    adapter = McpAdapter(build_registry(store, config, http_client=http))

    with pytest.raises(UpstreamProtocolError):
        await adapter.call_tool("get_latest_updates", {})


def test_create_server_uses_configured_name(store: KnowledgeStore) -> None:
    settings = Settings(_env_file=None, HISTORIAN_SERVER_NAME="historian-test")
    server = create_server(build_registry(store, OpenRouterConfig()), settings)
    assert server.name == "historian-test"


@pytest.mark.asyncio
async def test_server_registers_every_mcp_surface(store: KnowledgeStore) -> None:
    server = create_server(build_registry(store, OpenRouterConfig()), Settings(_env_file=None))

    for request_type in (
        types.ListPromptsRequest,
        types.GetPromptRequest,
        types.ListResourcesRequest,
        types.ReadResourceRequest,
        types.ListToolsRequest,
        types.CallToolRequest,
    ):
        assert request_type in server.request_handlers

    result = await server.request_handlers[types.ListToolsRequest](None)
    assert [t.name for t in result.root.tools] == ["read_from_memory", "write_to_memory"]


@pytest.mark.asyncio
async def test_server_call_tool_reports_contract_error(store: KnowledgeStore, memory_file: Path) -> None:
    server = create_server(build_registry(store, OpenRouterConfig()), Settings(_env_file=None))
    before = memory_file.read_bytes()

    request = types.CallToolRequest(
        method="tools/call",
        params=types.CallToolRequestParams(name="write_to_memory", arguments={"concept": "", "known": True}),
    )
    result = await server.request_handlers[types.CallToolRequest](request)

    assert result.root.isError is True
    assert result.root.content[0].text.startswith("Invalid input for 'write_to_memory' field 'concept'")
    assert memory_file.read_bytes() == before


@pytest.mark.asyncio
async def test_serve_closes_provider_http_client(monkeypatch: pytest.MonkeyPatch, memory_file: Path) -> None:
    captured: Dict[str, Any] = {}
    real_build_registry = server_main.build_registry

    def _build_registry(store, config, *, http_client=None):
        captured["client"] = http_client
        return real_build_registry(store, config, http_client=http_client)

    @asynccontextmanager
    async def _stdio_server():
        yield (None, None)

    async def _run(self, read_stream, write_stream, initialization_options, *args, **kwargs):
        captured["open_while_running"] = not captured["client"].is_closed

    monkeypatch.setattr(server_main, "build_registry", _build_registry)
    monkeypatch.setattr(server_main, "stdio_server", _stdio_server)
    monkeypatch.setattr(Server, "run", _run)

    settings = Settings(_env_file=None, HISTORIAN_MEMORY_FILE=str(memory_file), OPENROUTER_API_KEY="sk-or-test")
    await server_main.serve(settings)

    assert captured["open_while_running"] is True
    assert captured["client"].is_closed
