"""Pre-built tracking setups composed from GTMClient operations.

Each setup runs its steps in order and reports every step's own result as a
``[label, result]`` pair. A failing step does not stop the remaining steps.
"""

import logging
from typing import Any, Literal

from gtm_mcp.gtm_client import GTMClient

logger = logging.getLogger(__name__)

WorkflowType = Literal["ecommerce", "lead_generation", "content_site"]
WORKFLOW_TYPES: tuple[str, ...] = ("ecommerce", "lead_generation", "content_site")

StepResults = list[tuple[str, dict[str, Any]]]

# (label, GA4 event name, extra parameters)
GA4_EVENTS: list[tuple[str, str, dict[str, str]]] = [
    ("Scroll Depth", "scroll", {"scrollThreshold": "90"}),
    ("Outbound Click", "click", {"clickType": "link"}),
    ("File Download", "file_download", {"fileExtension": "pdf,doc,docx,xls,xlsx"}),
]

ECOMMERCE_EVENTS: list[tuple[str, dict[str, str]]] = [
    ("purchase", {"transactionId": "{{Transaction ID}}", "value": "{{Revenue}}"}),
    ("add_to_cart", {"itemId": "{{Item ID}}", "value": "{{Item Value}}"}),
    ("remove_from_cart", {"itemId": "{{Item ID}}"}),
    ("begin_checkout", {}),
]

CONTENT_EVENTS: list[tuple[str, dict[str, str]]] = [
    ("newsletter_signup", {}),
    ("social_share", {"sharePlatform": "{{Share Platform}}"}),
    ("video_play", {"videoTitle": "{{Video Title}}"}),
    ("article_read", {"articleTitle": "{{Article Title}}"}),
]

LEAD_FORM_SELECTOR = "#contact-form"


def _results(steps: StepResults) -> list[list[Any]]:
    return [[label, result] for label, result in steps]


async def create_ga4_setup(
    client: GTMClient,
    account_id: str,
    container_id: str,
    measurement_id: str,
) -> dict[str, Any]:
    """Create a complete GA4 setup.

    Creates the GA4 configuration tag, an all-pages trigger and event tags
    for scroll depth, outbound clicks and file downloads.

    Args:
        client: Authenticated GTM client.
        account_id: GTM account ID.
        container_id: GTM container ID.
        measurement_id: GA4 measurement ID (G-XXXXXXXXXX).

    Returns:
        Setup summary with the result of every step.
    """
    steps: StepResults = []

    config_tag = await client.create_tag(
        account_id,
        container_id,
        "GA4 Configuration - MCP",
        "gaawc",
        {"tagId": measurement_id, "measurementIdOverride": measurement_id},
    )
    steps.append(("GA4 Configuration Tag", config_tag))

    pageview_trigger = await client.create_trigger(
        account_id, container_id, "All Pages - MCP", "pageview", []
    )
    steps.append(("Page View Trigger", pageview_trigger))

    for label, event_name, params in GA4_EVENTS:
        event_tag = await client.create_tag(
            account_id,
            container_id,
            f"GA4 Event - {label} - MCP",
            "gaawe",
            {"measurementIdOverride": measurement_id, "eventName": event_name, **params},
        )
        steps.append((f"GA4 Event - {label}", event_tag))

    logger.info(f"GA4 setup for {measurement_id} ran {len(steps)} steps")
    return {
        "success": True,
        "setup": "GA4 Complete Setup",
        "measurement_id": measurement_id,
        "results": _results(steps),
    }


async def create_facebook_pixel_setup(
    client: GTMClient,
    account_id: str,
    container_id: str,
    pixel_id: str,
) -> dict[str, Any]:
    """Create a Facebook Pixel image tag and its page view trigger."""
    steps: StepResults = []

    pixel_tag = await client.create_tag(
        account_id,
        container_id,
        "Facebook Pixel",
        "img",
        {"url": f"https://www.facebook.com/tr?id={pixel_id}&ev=PageView&noscript=1"},
    )
    steps.append(("Facebook Pixel Base", pixel_tag))

    pageview_trigger = await client.create_trigger(
        account_id, container_id, "All Pages - Facebook", "pageview", []
    )
    steps.append(("Page View Trigger", pageview_trigger))

    return {
        "success": True,
        "setup": "Facebook Pixel Setup",
        "pixel_id": pixel_id,
        "results": _results(steps),
    }


async def create_form_tracking(
    client: GTMClient,
    account_id: str,
    container_id: str,
    form_selector: str,
    event_name: str = "form_submit",
) -> dict[str, Any]:
    """Track submissions of the form matching ``form_selector``."""
    steps: StepResults = []

    conditions = [
        {
            "type": "equals",
            "parameter": [
                {"key": "arg0", "value": "{{Form Element}}", "type": "template"},
                {"key": "arg1", "value": form_selector, "type": "template"},
            ],
        }
    ]
    form_trigger = await client.create_trigger(
        account_id,
        container_id,
        f"Form Submit - {form_selector}",
        "formSubmission",
        conditions,
    )
    steps.append(("Form Submit Trigger", form_trigger))

    event_tag = await client.create_tag(
        account_id,
        container_id,
        f"Form Submit Event - {form_selector}",
        "gaawe",
        {"eventName": event_name, "formSelector": form_selector},
    )
    steps.append(("Form Submit Event", event_tag))

    return {
        "success": True,
        "setup": "Form Tracking",
        "form_selector": form_selector,
        "event_name": event_name,
        "results": _results(steps),
    }


async def _event_tags(
    client: GTMClient,
    account_id: str,
    container_id: str,
    events: list[tuple[str, dict[str, str]]],
    tag_prefix: str,
    label_prefix: str,
    measurement_id: str,
) -> StepResults:
    steps: StepResults = []
    for event_name, params in events:
        result = await client.create_tag(
            account_id,
            container_id,
            f"{tag_prefix} - {event_name}",
            "gaawe",
            {"measurementIdOverride": measurement_id, "eventName": event_name, **params},
        )
        steps.append((f"{label_prefix} - {event_name}", result))
    return steps


async def generate_gtm_workflow(
    client: GTMClient,
    account_id: str,
    container_id: str,
    workflow_type: WorkflowType,
    ga4_measurement_id: str | None = None,
    facebook_pixel_id: str | None = None,
) -> dict[str, Any]:
    """Build a complete tracking workflow for a kind of site.

    Args:
        client: Authenticated GTM client.
        account_id: GTM account ID.
        container_id: GTM container ID.
        workflow_type: "ecommerce", "lead_generation" or "content_site".
        ga4_measurement_id: Runs the GA4 setup first when given.
        facebook_pixel_id: Adds the Facebook Pixel setup last when given.

    Returns:
        Workflow summary with the result of every step.

    Raises:
        ValueError: If workflow_type is not a known workflow.
    """
    if workflow_type not in WORKFLOW_TYPES:
        raise ValueError(f"Unknown workflow type: {workflow_type}")

    steps: StepResults = []
    measurement_id = ga4_measurement_id or ""

    if ga4_measurement_id:
        ga4 = await create_ga4_setup(client, account_id, container_id, ga4_measurement_id)
        steps.append(("GA4 Setup", ga4))

    if workflow_type == "ecommerce":
        steps.extend(
            await _event_tags(
                client,
                account_id,
                container_id,
                ECOMMERCE_EVENTS,
                "GA4 Event",
                "Ecommerce Event",
                measurement_id,
            )
        )
    elif workflow_type == "lead_generation":
        form = await create_form_tracking(
            client, account_id, container_id, LEAD_FORM_SELECTOR, "form_submit"
        )
        steps.append(("Form Tracking", form))

        cta = await client.create_tag(
            account_id,
            container_id,
            "CTA Click Event",
            "gaawe",
            {
                "measurementIdOverride": measurement_id,
                "eventName": "cta_click",
                "clickElement": "{{Click Element}}",
            },
        )
        steps.append(("CTA Tracking", cta))
    else:
        steps.extend(
            await _event_tags(
                client,
                account_id,
                container_id,
                CONTENT_EVENTS,
                "Content Event",
                "Content Event",
                measurement_id,
            )
        )

    if facebook_pixel_id:
        pixel = await create_facebook_pixel_setup(
            client, account_id, container_id, facebook_pixel_id
        )
        steps.append(("Facebook Pixel", pixel))

    return {
        "success": True,
        "workflow_type": workflow_type,
        "results": _results(steps),
    }
