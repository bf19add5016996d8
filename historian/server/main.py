"""
Main Server Entry Point.

Adapts the capability registry to the MCP stdio transport:

- guidance capabilities are MCP prompts,
- resource capabilities are MCP resources,
- action capabilities are MCP tools.

The adapter holds no state of its own. Discovery reads ``registry.list`` and
every call goes through ``registry.invoke``; handler failures are re-raised so
the MCP server reports them to the client as failed results.
"""

import asyncio
from typing import Any, Dict, Iterable, List, Optional

import httpx
import mcp.types as types
from mcp.server.lowlevel import Server
from mcp.server.lowlevel.helper_types import ReadResourceContents
from mcp.server.stdio import stdio_server

from historian.capabilities import Capability, CapabilityKind, CapabilityRegistry, CapabilityResult, build_registry
from historian.core.logging_config import get_logger, setup_logging
from historian.errors import HistorianError, UnknownCapability
from historian.knowledge import KnowledgeStore
from historian.server.core.config import Settings, get_settings

logger = get_logger(__name__)


def tool_for(cap: Capability) -> types.Tool:
    return types.Tool(name=cap.name, description=cap.description, inputSchema=cap.contract.to_json_schema())


def prompt_for(cap: Capability) -> types.Prompt:
    return types.Prompt(name=cap.name, description=cap.description, arguments=[])


def resource_for(cap: Capability) -> types.Resource:
    return types.Resource(uri=cap.uri, name=cap.name, description=cap.description, mimeType="application/json")


class McpAdapter:
    """
    Name-addressed bridge between MCP requests and the capability registry.

    Each method backs one MCP request handler. Asking for a capability through
    the wrong surface (e.g. calling a prompt as a tool) yields
    ``UnknownCapability``, the same as a misspelled name.
    """

    def __init__(self, registry: CapabilityRegistry) -> None:
        self._registry = registry

    def _expect(self, name: str, kind: CapabilityKind) -> Capability:
        cap = self._registry.get(name)
        if cap.kind is not kind:
            raise UnknownCapability(name)
        return cap

    async def list_prompts(self) -> List[types.Prompt]:
        return [prompt_for(c) for c in self._registry.list(CapabilityKind.guidance)]

    async def get_prompt(self, name: str, arguments: Optional[Dict[str, str]] = None) -> types.GetPromptResult:
        cap = self._expect(name, CapabilityKind.guidance)
        result = await self._call(name, arguments)
        # System prompts are not supported by MCP prompts; guidance is sent as an assistant message.
        return types.GetPromptResult(
            description=cap.description,
            messages=[
                types.PromptMessage(role="assistant", content=types.TextContent(type="text", text=result.text))
            ],
        )

    async def list_resources(self) -> List[types.Resource]:
        return [resource_for(c) for c in self._registry.list(CapabilityKind.resource)]

    async def read_resource(self, uri: str) -> Iterable[ReadResourceContents]:
        logger.info(f"Resource request for: {uri}")
        cap = self._registry.resolve_uri(uri)
        result = await self._call(cap.name, {})
        return [ReadResourceContents(content=result.text, mime_type=result.mime_type)]

    async def list_tools(self) -> List[types.Tool]:
        return [tool_for(c) for c in self._registry.list(CapabilityKind.action)]

    async def call_tool(self, name: str, arguments: Optional[Dict[str, Any]]) -> List[types.TextContent]:
        self._expect(name, CapabilityKind.action)
        result = await self._call(name, arguments)
        return [types.TextContent(type="text", text=result.text)]

    async def _call(self, name: str, arguments: Optional[Dict[str, Any]]) -> CapabilityResult:
        try:
            return await self._registry.invoke(name, arguments)
        except HistorianError as e:
            logger.warning(f"Capability '{name}' failed: {type(e).__name__}: {e}")
            raise


def create_server(registry: CapabilityRegistry, settings: Settings) -> Server:
    """Build an MCP ``Server`` whose handlers delegate to ``registry``."""
    server: Server = Server(settings.server_name, version=settings.server_version)
    adapter = McpAdapter(registry)

    @server.list_prompts()
    async def _list_prompts() -> List[types.Prompt]:
        return await adapter.list_prompts()

    @server.get_prompt()
    async def _get_prompt(name: str, arguments: Optional[Dict[str, str]]) -> types.GetPromptResult:
        return await adapter.get_prompt(name, arguments)

    @server.list_resources()
    async def _list_resources() -> List[types.Resource]:
        return await adapter.list_resources()

    @server.read_resource()
    async def _read_resource(uri: Any) -> Iterable[ReadResourceContents]:
        return await adapter.read_resource(str(uri))

    @server.list_tools()
    async def _list_tools() -> List[types.Tool]:
        return await adapter.list_tools()

    # Input is checked once, by the capability contract inside registry.invoke.
    @server.call_tool(validate_input=False)
    async def _call_tool(name: str, arguments: Dict[str, Any]) -> List[types.TextContent]:
        return await adapter.call_tool(name, arguments)

    return server


async def serve(settings: Settings) -> None:
    """Build the registry and run the MCP server over stdio until the client disconnects."""
    knowledge = settings.knowledge
    store = KnowledgeStore(knowledge.memory_file, seed_path=knowledge.seed_file)
    async with httpx.AsyncClient(timeout=None) as http_client:
        registry = build_registry(store, settings.openrouter, http_client=http_client)
        server = create_server(registry, settings)

        async with stdio_server() as (read_stream, write_stream):
            logger.info(f"{settings.server_name} MCP server is running")
            await server.run(read_stream, write_stream, server.create_initialization_options())


def main() -> None:
    """Console entry point."""
    settings = get_settings()
    setup_logging(
        log_level=settings.log_level,
        log_format=settings.log_format,
        enable_file=settings.enable_file_logging,
        log_file_dir=settings.log_file_dir,
    )
    try:
        asyncio.run(serve(settings))
    except KeyboardInterrupt:
        logger.info("Shutting down")


if __name__ == "__main__":
    main()
