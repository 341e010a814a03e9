"""Integration tests for the GTM MCP server.

Tool calls run through GTMServer into a real GTMClient whose HTTP traffic
is served by the FakeGTMApi fixture, so dispatch, argument translation,
lazy authentication and the JSON result text are exercised together.
"""

import json
from unittest.mock import AsyncMock

import pytest
from mcp import types

from gtm_mcp.auth import AuthenticationRequiredError
from gtm_mcp.server import GTMServer, ToolError, create_server

PARENT = "accounts/123/containers/456/workspaces"


@pytest.fixture
def server(unauthenticated_client) -> GTMServer:
    """Server wired to the fake API, not yet authenticated."""
    return GTMServer(client=unauthenticated_client)


async def _call(server: GTMServer, name: str, arguments: dict) -> types.CallToolResult:
    """Send a tools/call request through the MCP request handler."""
    handler = server.server.request_handlers[types.CallToolRequest]
    request = types.CallToolRequest(
        method="tools/call",
        params=types.CallToolRequestParams(name=name, arguments=arguments),
    )
    response = await handler(request)
    result: types.CallToolResult = response.root
    return result


@pytest.mark.integration
class TestServerSetup:
    """Server construction and tool listing."""

    def test_should_create_server(self) -> None:
        server = create_server()

        assert isinstance(server, GTMServer)
        assert server.server.name == "gtm-mcp"

    @pytest.mark.asyncio
    async def test_should_list_tools(self, server: GTMServer) -> None:
        handler = server.server.request_handlers[types.ListToolsRequest]

        response = await handler(types.ListToolsRequest(method="tools/list"))

        names = {tool.name for tool in response.root.tools}
        assert {"list_gtm_accounts", "create_gtm_tag", "publish_gtm_version"} <= names
        assert "generate_gtm_workflow" in names


@pytest.mark.integration
class TestToolRejection:
    """Calls rejected before reaching the API."""

    @pytest.mark.asyncio
    async def test_should_reject_unknown_tool(self, server: GTMServer, gtm_api) -> None:
        with pytest.raises(ToolError, match="Unknown tool: send_email"):
            await server.call_tool("send_email", {})

        assert gtm_api.requests == []

    @pytest.mark.asyncio
    async def test_should_reject_missing_required_argument(
        self, server: GTMServer, mock_auth
    ) -> None:
        with pytest.raises(ToolError) as exc_info:
            await server.call_tool("list_gtm_containers", {})

        assert str(exc_info.value).startswith("Invalid arguments for list_gtm_containers:")
        assert "account_id" in str(exc_info.value)
        mock_auth.authorize.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_should_report_authentication_failure(
        self, server: GTMServer, mock_auth, gtm_api
    ) -> None:
        mock_auth.authorize = AsyncMock(
            side_effect=AuthenticationRequiredError("Run 'gtm-mcp setup' first")
        )

        with pytest.raises(ToolError, match="Authentication error: Run 'gtm-mcp setup' first"):
            await server.call_tool("list_gtm_accounts", {})

        assert gtm_api.requests == []

    @pytest.mark.asyncio
    async def test_should_report_missing_client_secrets(self, server: GTMServer, mock_auth) -> None:
        mock_auth.authorize = AsyncMock(side_effect=FileNotFoundError("credentials.json not found"))

        with pytest.raises(ToolError, match="Authentication error: credentials.json not found"):
            await server.call_tool("list_gtm_accounts", {})

    @pytest.mark.asyncio
    async def test_should_flag_error_result(self, server: GTMServer) -> None:
        result = await _call(server, "send_email", {})

        assert result.isError is True
        assert "Unknown tool: send_email" in result.content[0].text


@pytest.mark.integration
class TestToolDispatch:
    """Successful calls through the MCP handler."""

    @pytest.mark.asyncio
    async def test_should_authenticate_lazily_once(
        self, server: GTMServer, mock_auth, gtm_api
    ) -> None:
        gtm_api.add("GET", "accounts", {"account": [{"accountId": "123", "name": "Acme"}]})

        await server.call_tool("list_gtm_accounts", {})
        await server.call_tool("list_gtm_accounts", {})

        mock_auth.authorize.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_should_return_pretty_json(self, server: GTMServer, gtm_api) -> None:
        gtm_api.add("GET", "accounts", {"account": [{"accountId": "123", "name": "Acme"}]})

        result = await _call(server, "list_gtm_accounts", {})

        assert result.isError is False
        text = result.content[0].text
        assert json.loads(text) == {
            "success": True,
            "accounts": [{"accountId": "123", "name": "Acme"}],
        }
        assert text == json.dumps(json.loads(text), indent=2)

    @pytest.mark.asyncio
    async def test_should_create_tag_in_default_workspace(self, server: GTMServer, gtm_api) -> None:
        gtm_api.add("GET", PARENT, {"workspace": [{"workspaceId": "1"}]})
        gtm_api.add("POST", f"{PARENT}/1/tags", {"tagId": "10", "name": "Test Tag"})

        result = await server.call_tool(
            "create_gtm_tag",
            {
                "account_id": "123",
                "container_id": "456",
                "tag_name": "Test Tag",
                "tag_type": "gaawc",
                "parameters": {"measurementIdOverride": "G-XXXXXXX"},
            },
        )

        assert result == {"success": True, "tag": {"tagId": "10", "name": "Test Tag"}}

    @pytest.mark.asyncio
    async def test_should_pass_api_failure_as_result(self, server: GTMServer, gtm_api) -> None:
        """Verify API errors come back as data, not as error-flagged results."""
        gtm_api.add(
            "GET",
            "accounts/123/containers",
            {"error": {"code": 403, "message": "The caller does not have permission"}},
            status=403,
        )

        result = await _call(server, "list_gtm_containers", {"account_id": "123"})

        assert result.isError is False
        assert json.loads(result.content[0].text) == {
            "success": False,
            "error": "The caller does not have permission",
        }

    @pytest.mark.asyncio
    async def test_should_serve_built_in_variable_and_folder_tools(
        self, server: GTMServer, gtm_api
    ) -> None:
        gtm_api.add("POST", f"{PARENT}/1/built_in_variables", {"builtInVariable": [{"type": "pageUrl"}]})
        gtm_api.add("POST", f"{PARENT}/1/built_in_variables:revert", {"enabled": True})
        gtm_api.add("POST", f"{PARENT}/1/folders/2:move_entities_to_folder", None)
        base = {"account_id": "123", "container_id": "456", "workspace_id": "1"}

        created = await server.call_tool("create_gtm_built_in_variable", {**base, "types": ["pageUrl"]})
        reverted = await server.call_tool("revert_gtm_built_in_variables", {**base, "type": "pageUrl"})
        moved = await server.call_tool(
            "move_entities_to_gtm_folder", {**base, "folder_id": "2", "tag_ids": ["7"]}
        )

        assert created == {"success": True, "builtInVariables": [{"type": "pageUrl"}]}
        assert reverted == {"success": True, "enabled": True}
        assert moved == {"success": True}

    @pytest.mark.asyncio
    async def test_should_translate_renamed_arguments(self, server: GTMServer, gtm_api) -> None:
        path = "accounts/123/containers/456/environments"
        gtm_api.add("POST", path, {"environmentId": "5"})

        await server.call_tool(
            "create_gtm_environment",
            {"account_id": "123", "container_id": "456", "name": "Staging", "type": "user"},
        )

        assert gtm_api.body(gtm_api.calls("POST", path)[0]) == {"name": "Staging", "type": "user"}

    @pytest.mark.asyncio
    async def test_should_run_component_tool(self, server: GTMServer, gtm_api) -> None:
        gtm_api.add("GET", PARENT, {"workspace": [{"workspaceId": "1"}]})
        gtm_api.add("POST", f"{PARENT}/1/tags", {"tagId": "10"})
        gtm_api.add("POST", f"{PARENT}/1/triggers", {"triggerId": "20"})

        result = await server.call_tool(
            "create_ga4_setup",
            {"account_id": "123", "container_id": "456", "measurement_id": "G-TEST123"},
        )

        assert result["setup"] == "GA4 Complete Setup"
        assert len(result["results"]) == 5
        assert len(gtm_api.calls("POST", f"{PARENT}/1/tags")) == 4

    @pytest.mark.asyncio
    async def test_should_publish_through_two_calls(self, server: GTMServer, gtm_api) -> None:
        version_path = "accounts/123/containers/456/versions/3"
        gtm_api.add("GET", PARENT, {"workspace": [{"workspaceId": "1"}]})
        gtm_api.add(
            "POST", f"{PARENT}/1:create_version", {"containerVersion": {"path": version_path}}
        )
        gtm_api.add("POST", f"{version_path}:publish", {"containerVersion": {"containerVersionId": "3"}})

        result = await server.call_tool(
            "publish_gtm_version",
            {"account_id": "123", "container_id": "456", "name": "Release 3"},
        )

        assert result["success"] is True
        create = gtm_api.calls("POST", f"{PARENT}/1:create_version")[0]
        assert gtm_api.body(create) == {"name": "Release 3", "notes": ""}
