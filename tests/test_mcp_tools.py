"""Tests for the MCP tool registry and protocol handler."""

import json

import pytest

from screenhound.mcp_server.base import MCPServerBase
from screenhound.mcp_server.common import ToolExecutionError, handle_tool_call
from screenhound.mcp_server.tools import TOOL_REGISTRY, execute_tool
from screenhound.services.realtime_search import RealtimeSearch
from screenhound.services.screen_search_service import ScreenSearchService
from tests.fixtures.fake_providers import no_sleep


@pytest.fixture
def service(config, provider, seeded_store):
    return ScreenSearchService(
        config, provider, seeded_store, realtime=RealtimeSearch(provider, sleep=no_sleep)
    )


class TestRegistry:
    def test_tools_listed(self):
        assert set(TOOL_REGISTRY) == {"search_figma_spec", "get_index_stats"}

    def test_search_schema(self):
        schema = TOOL_REGISTRY["search_figma_spec"].parameters
        assert schema["required"] == ["query"]
        assert set(schema["properties"]) == {"query", "project", "version", "autoConfirm", "sessionId"}
        assert schema["properties"]["autoConfirm"]["default"] is True

    def test_stats_takes_no_arguments(self):
        assert TOOL_REGISTRY["get_index_stats"].parameters["properties"] == {}


class TestExecuteTool:
    @pytest.mark.asyncio
    async def test_unknown_tool(self, service):
        with pytest.raises(ValueError, match="Unknown tool"):
            await execute_tool("search_code", service, {})

    @pytest.mark.asyncio
    @pytest.mark.parametrize("arguments", [{}, {"query": ""}, {"query": "   "}, {"query": 42}])
    async def test_query_required(self, service, arguments):
        with pytest.raises(ValueError, match="query"):
            await execute_tool("search_figma_spec", service, arguments)

    @pytest.mark.asyncio
    async def test_search_result_shape(self, service):
        result = await execute_tool(
            "search_figma_spec",
            service,
            {"query": "user detail", "project": "CONTRABASS", "version": "3.0.6"},
        )
        assert result["kind"] == "confirmed"
        assert result["is_error"] is False
        assert result["screen_id"] == "CONT-05_04_55"

    @pytest.mark.asyncio
    async def test_auto_confirm_and_session_arguments(self, service):
        listed = await execute_tool(
            "search_figma_spec",
            service,
            {"query": "contrabass 3.0.6 user detail", "autoConfirm": False, "sessionId": "conv-9"},
        )
        assert listed["kind"] == "candidates"
        assert "screen_id" not in listed

        picked = await execute_tool("search_figma_spec", service, {"query": "1", "sessionId": "conv-9"})
        assert picked["screen_id"] == "CONT-05_04_55"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("value", ["false", 0, None])
    async def test_non_boolean_auto_confirm_uses_default(self, service, value):
        result = await execute_tool(
            "search_figma_spec",
            service,
            {"query": "contrabass 3.0.6 user detail", "autoConfirm": value},
        )
        assert result["kind"] == "confirmed"

    @pytest.mark.asyncio
    async def test_stats_is_json_text(self, service):
        result = await execute_tool("get_index_stats", service, {})
        data = json.loads(result)
        assert data["totalScreens"] == 3
        assert "CONTRABASS" in data["projects"]


class TestHandleToolCall:
    @pytest.mark.asyncio
    async def test_success_returns_text_content(self, service):
        content = await handle_tool_call("search_figma_spec", {"query": "CONT-05_04_54"}, service)
        assert len(content) == 1
        assert content[0].type == "text"
        assert "CONT-05_04_54 - User List" in content[0].text

    @pytest.mark.asyncio
    async def test_not_found_is_an_error(self, service):
        with pytest.raises(ToolExecutionError, match="No screens found"):
            await handle_tool_call("search_figma_spec", {"query": "contrabass 3.0.6 invoices"}, service)

    @pytest.mark.asyncio
    async def test_invalid_arguments(self, service):
        with pytest.raises(ToolExecutionError):
            await handle_tool_call("search_figma_spec", {}, service)

    @pytest.mark.asyncio
    async def test_uninitialized_server(self):
        with pytest.raises(ToolExecutionError, match="not initialized"):
            await handle_tool_call("get_index_stats", {}, None)

    @pytest.mark.asyncio
    async def test_stats_without_index(self, config, provider, tmp_path):
        from screenhound.providers.index.index_store import IndexStore

        service = ScreenSearchService(config, provider, IndexStore(tmp_path / "absent.json"))
        with pytest.raises(ToolExecutionError, match="screenhound collect"):
            await handle_tool_call("get_index_stats", {}, service)


class _BareServer(MCPServerBase):
    def _register_tools(self) -> None:
        pass

    async def run(self) -> None:
        await self.initialize()


class TestServerBase:
    @pytest.mark.asyncio
    async def test_initialize_tolerates_missing_index(self, config):
        server = _BareServer(config)
        await server.initialize()
        await server.initialize()

        assert server.ensure_service() is server.service
        assert server.store is not None
        assert not server.store.is_loaded
        await server.cleanup()

    @pytest.mark.asyncio
    async def test_initialize_loads_existing_index(self, config, seeded_store):
        server = _BareServer(config)
        await server.initialize()

        assert server.store.is_loaded
        assert server.store.index.total_screens == 3
        await server.cleanup()

    @pytest.mark.asyncio
    async def test_initialize_tolerates_unreadable_index(self, config, index_path):
        index_path.parent.mkdir(parents=True, exist_ok=True)
        index_path.write_text('{"formatVersion": "1.0.0", "projects": {', encoding="utf-8")
        server = _BareServer(config)

        await server.initialize()

        assert not server.store.is_loaded
        with pytest.raises(ToolExecutionError, match="screenhound collect"):
            await handle_tool_call("get_index_stats", {}, server.service)
        with pytest.raises(ToolExecutionError, match="screenhound collect"):
            await handle_tool_call("search_figma_spec", {"query": "user list"}, server.service)
        await server.cleanup()

    def test_service_required_before_initialize(self, config):
        with pytest.raises(RuntimeError):
            _BareServer(config).ensure_service()
