"""Unit tests for the pre-built tracking setups."""

from typing import Any
from unittest.mock import AsyncMock, MagicMock

import pytest

from gtm_mcp import components

ACCOUNT = "123"
CONTAINER = "456"


@pytest.fixture
def client() -> MagicMock:
    """GTMClient stand-in whose create calls succeed."""
    mock = MagicMock()
    mock.create_tag = AsyncMock(return_value={"success": True, "tag": {"tagId": "1"}})
    mock.create_trigger = AsyncMock(return_value={"success": True, "trigger": {"triggerId": "2"}})
    return mock


def _labels(result: dict[str, Any]) -> list[str]:
    return [label for label, _ in result["results"]]


def _tag_names(client: MagicMock) -> list[str]:
    return [call.args[2] for call in client.create_tag.await_args_list]


@pytest.mark.unit
class TestGA4Setup:
    """Tests for create_ga4_setup."""

    @pytest.mark.asyncio
    async def test_should_run_five_steps_in_order(self, client: MagicMock) -> None:
        result = await components.create_ga4_setup(client, ACCOUNT, CONTAINER, "G-TEST123")

        assert result["success"] is True
        assert result["setup"] == "GA4 Complete Setup"
        assert result["measurement_id"] == "G-TEST123"
        assert _labels(result) == [
            "GA4 Configuration Tag",
            "Page View Trigger",
            "GA4 Event - Scroll Depth",
            "GA4 Event - Outbound Click",
            "GA4 Event - File Download",
        ]

    @pytest.mark.asyncio
    async def test_should_configure_measurement_id(self, client: MagicMock) -> None:
        await components.create_ga4_setup(client, ACCOUNT, CONTAINER, "G-TEST123")

        config_call = client.create_tag.await_args_list[0]
        assert config_call.args[:4] == (ACCOUNT, CONTAINER, "GA4 Configuration - MCP", "gaawc")
        assert config_call.args[4]["measurementIdOverride"] == "G-TEST123"
        client.create_trigger.assert_awaited_once_with(
            ACCOUNT, CONTAINER, "All Pages - MCP", "pageview", []
        )

    @pytest.mark.asyncio
    async def test_should_create_event_tags(self, client: MagicMock) -> None:
        await components.create_ga4_setup(client, ACCOUNT, CONTAINER, "G-TEST123")

        event_calls = client.create_tag.await_args_list[1:]
        assert [call.args[4]["eventName"] for call in event_calls] == [
            "scroll",
            "click",
            "file_download",
        ]
        assert all(call.args[3] == "gaawe" for call in event_calls)

    @pytest.mark.asyncio
    async def test_should_continue_after_failed_step(self, client: MagicMock) -> None:
        """Verify a failing step is reported and later steps still run."""
        failure = {"success": False, "error": "Tag name already exists"}
        client.create_tag.side_effect = [
            failure,
            {"success": True, "tag": {}},
            {"success": True, "tag": {}},
            {"success": True, "tag": {}},
        ]

        result = await components.create_ga4_setup(client, ACCOUNT, CONTAINER, "G-TEST123")

        assert result["success"] is True
        assert result["results"][0] == ["GA4 Configuration Tag", failure]
        assert client.create_tag.await_count == 4


@pytest.mark.unit
class TestFacebookPixelSetup:
    """Tests for create_facebook_pixel_setup."""

    @pytest.mark.asyncio
    async def test_should_create_pixel_tag_and_trigger(self, client: MagicMock) -> None:
        result = await components.create_facebook_pixel_setup(client, ACCOUNT, CONTAINER, "987654")

        assert result["setup"] == "Facebook Pixel Setup"
        assert result["pixel_id"] == "987654"
        assert _labels(result) == ["Facebook Pixel Base", "Page View Trigger"]
        url = client.create_tag.await_args.args[4]["url"]
        assert "id=987654" in url


@pytest.mark.unit
class TestFormTracking:
    """Tests for create_form_tracking."""

    @pytest.mark.asyncio
    async def test_should_create_trigger_before_tag(self, client: MagicMock) -> None:
        result = await components.create_form_tracking(client, ACCOUNT, CONTAINER, "#signup")

        assert _labels(result) == ["Form Submit Trigger", "Form Submit Event"]
        assert result["event_name"] == "form_submit"

        trigger_args = client.create_trigger.await_args.args
        assert trigger_args[3] == "formSubmission"
        condition_values = [p["value"] for p in trigger_args[4][0]["parameter"]]
        assert condition_values == ["{{Form Element}}", "#signup"]

    @pytest.mark.asyncio
    async def test_should_use_custom_event_name(self, client: MagicMock) -> None:
        await components.create_form_tracking(client, ACCOUNT, CONTAINER, "#signup", "lead")

        assert client.create_tag.await_args.args[4]["eventName"] == "lead"


@pytest.mark.unit
class TestGenerateWorkflow:
    """Tests for generate_gtm_workflow."""

    @pytest.mark.asyncio
    async def test_should_build_ecommerce_workflow(self, client: MagicMock) -> None:
        result = await components.generate_gtm_workflow(client, ACCOUNT, CONTAINER, "ecommerce")

        assert result["workflow_type"] == "ecommerce"
        assert _labels(result) == [
            "Ecommerce Event - purchase",
            "Ecommerce Event - add_to_cart",
            "Ecommerce Event - remove_from_cart",
            "Ecommerce Event - begin_checkout",
        ]
        assert _tag_names(client)[0] == "GA4 Event - purchase"

    @pytest.mark.asyncio
    async def test_should_order_ga4_first_and_pixel_last(self, client: MagicMock) -> None:
        result = await components.generate_gtm_workflow(
            client,
            ACCOUNT,
            CONTAINER,
            "lead_generation",
            ga4_measurement_id="G-TEST123",
            facebook_pixel_id="987654",
        )

        assert _labels(result) == ["GA4 Setup", "Form Tracking", "CTA Tracking", "Facebook Pixel"]
        assert result["results"][0][1]["setup"] == "GA4 Complete Setup"
        assert "CTA Click Event" in _tag_names(client)

    @pytest.mark.asyncio
    async def test_should_track_default_lead_form(self, client: MagicMock) -> None:
        result = await components.generate_gtm_workflow(client, ACCOUNT, CONTAINER, "lead_generation")

        form = dict(result["results"])["Form Tracking"]
        assert form["form_selector"] == "#contact-form"

    @pytest.mark.asyncio
    async def test_should_build_content_workflow(self, client: MagicMock) -> None:
        result = await components.generate_gtm_workflow(client, ACCOUNT, CONTAINER, "content_site")

        assert _labels(result) == [
            "Content Event - newsletter_signup",
            "Content Event - social_share",
            "Content Event - video_play",
            "Content Event - article_read",
        ]

    @pytest.mark.asyncio
    async def test_should_reject_unknown_workflow(self, client: MagicMock) -> None:
        with pytest.raises(ValueError, match="Unknown workflow type: blog"):
            await components.generate_gtm_workflow(client, ACCOUNT, CONTAINER, "blog")  # type: ignore[arg-type]

        client.create_tag.assert_not_awaited()


@pytest.mark.unit
class TestComponentsAgainstApi:
    """Setups issue real façade calls against the fake API."""

    @pytest.mark.asyncio
    async def test_should_post_to_default_workspace(self, gtm_client, gtm_api) -> None:
        parent = f"accounts/{ACCOUNT}/containers/{CONTAINER}/workspaces"
        gtm_api.add("GET", parent, {"workspace": [{"workspaceId": "5"}]})
        gtm_api.add("POST", f"{parent}/5/tags", {"tagId": "1"})
        gtm_api.add("POST", f"{parent}/5/triggers", {"triggerId": "2"})

        result = await components.create_facebook_pixel_setup(gtm_client, ACCOUNT, CONTAINER, "42")

        assert [step[1]["success"] for step in result["results"]] == [True, True]
        trigger_post = gtm_api.calls("POST", f"{parent}/5/triggers")[0]
        assert gtm_api.body(trigger_post) == {"name": "All Pages - Facebook", "type": "pageview"}
