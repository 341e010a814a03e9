"""MCP tool catalog for the GTM server.

Each ToolSpec pairs the MCP Tool definition (name, description, input
schema) with the GTMClient method or component function that serves it.
Tool argument names match the target's keyword arguments; a translator
handles the few tools whose wire arguments need reshaping.
"""

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from mcp.types import Tool

Translator = Callable[[dict[str, Any]], dict[str, Any]]


@dataclass(frozen=True)
class ToolSpec:
    """A tool definition and the callable that implements it.

    Attributes:
        tool: MCP tool definition advertised by list_tools.
        method: GTMClient method name, or components function name.
        component: True when ``method`` names a function in gtm_mcp.components.
        translate: Optional reshaping of validated arguments into kwargs.
    """

    tool: Tool
    method: str
    component: bool = False
    translate: Translator | None = None

    @property
    def name(self) -> str:
        return self.tool.name

    @property
    def properties(self) -> dict[str, Any]:
        properties: dict[str, Any] = self.tool.inputSchema.get("properties", {})
        return properties

    def to_kwargs(self, arguments: dict[str, Any]) -> dict[str, Any]:
        """Keep only declared arguments and apply the translator."""
        kwargs = {key: value for key, value in arguments.items() if key in self.properties}
        if self.translate:
            kwargs = self.translate(kwargs)
        return kwargs


def _string(description: str, **extra: Any) -> dict[str, Any]:
    return {"type": "string", "description": description, **extra}


def _boolean(description: str) -> dict[str, Any]:
    return {"type": "boolean", "description": description}


def _string_list(description: str) -> dict[str, Any]:
    return {"type": "array", "items": {"type": "string"}, "description": description}


ACCOUNT_ID = _string("GTM account ID")
CONTAINER_ID = _string("GTM container ID")
WORKSPACE_ID = _string("GTM workspace ID (optional, uses the default workspace if omitted)")
REQUIRED_WORKSPACE_ID = _string("GTM workspace ID")

PARAMETER_LIST: dict[str, Any] = {
    "type": "array",
    "description": "GTM parameters, e.g. [{\"key\": \"tagId\", \"value\": \"G-XXXX\", \"type\": \"template\"}]",
    "items": {
        "type": "object",
        "properties": {
            "key": {"type": "string"},
            "value": {"type": "string"},
            "type": {"type": "string"},
        },
        "required": ["key"],
    },
}

CONDITION_LIST: dict[str, Any] = {
    "type": "array",
    "description": (
        "Trigger conditions, e.g. [{\"type\": \"equals\", \"parameter\": "
        "[{\"key\": \"arg0\", \"value\": \"{{Event}}\", \"type\": \"template\"}, "
        "{\"key\": \"arg1\", \"value\": \"signup\", \"type\": \"template\"}]}]"
    ),
    "items": {
        "type": "object",
        "properties": {
            "type": {"type": "string"},
            "parameter": {"type": "array", "items": {"type": "object"}},
        },
        "required": ["type"],
    },
}

CONTAINER_ACCESS: dict[str, Any] = {
    "type": "array",
    "description": "Per-container permissions",
    "items": {
        "type": "object",
        "properties": {
            "container_id": {"type": "string"},
            "permission": {
                "type": "string",
                "enum": ["noAccess", "read", "edit", "approve", "publish"],
            },
        },
        "required": ["container_id", "permission"],
    },
}

ACCOUNT_PERMISSION = _string("Account-level permission", enum=["noAccess", "user", "admin"])


def _schema(properties: dict[str, Any], required: list[str]) -> dict[str, Any]:
    return {"type": "object", "properties": properties, "required": required}


def _tool(
    name: str,
    description: str,
    method: str,
    properties: dict[str, Any] | None = None,
    required: list[str] | None = None,
    translate: Translator | None = None,
    component: bool = False,
) -> ToolSpec:
    return ToolSpec(
        tool=Tool(
            name=name,
            description=description,
            inputSchema=_schema(properties or {}, required or []),
        ),
        method=method,
        component=component,
        translate=translate,
    )


def _container_tool(
    name: str,
    description: str,
    method: str,
    properties: dict[str, Any] | None = None,
    required: list[str] | None = None,
    translate: Translator | None = None,
    component: bool = False,
) -> ToolSpec:
    """Tool scoped to a container: account_id and container_id are required."""
    return _tool(
        name,
        description,
        method,
        {"account_id": ACCOUNT_ID, "container_id": CONTAINER_ID, **(properties or {})},
        ["account_id", "container_id", *(required or [])],
        translate,
        component,
    )


def _workspace_tool(
    name: str,
    description: str,
    method: str,
    properties: dict[str, Any] | None = None,
    required: list[str] | None = None,
    translate: Translator | None = None,
) -> ToolSpec:
    """Tool scoped to a workspace, defaulting to the container's default workspace."""
    return _container_tool(
        name,
        description,
        method,
        {**(properties or {}), "workspace_id": WORKSPACE_ID},
        required,
        translate,
    )


def _entity_tools(
    entity: str,
    plural: str,
    label: str,
    id_arg: str,
    create: tuple[dict[str, Any], list[str], Translator | None],
    update: dict[str, Any],
) -> list[ToolSpec]:
    """list/get/create/update/delete/revert tools for a workspace entity."""
    create_props, create_required, create_translate = create
    entity_id = {id_arg: _string(f"{label} ID")}
    return [
        _workspace_tool(
            f"list_gtm_{plural}", f"List all {label.lower()}s in a workspace", f"list_{entity}s"
        ),
        _workspace_tool(
            f"get_gtm_{entity}", f"Get a {label.lower()} by ID", f"get_{entity}", entity_id, [id_arg]
        ),
        _workspace_tool(
            f"create_gtm_{entity}",
            f"Create a {label.lower()}",
            f"create_{entity}",
            create_props,
            create_required,
            create_translate,
        ),
        _workspace_tool(
            f"update_gtm_{entity}",
            f"Update a {label.lower()}, keeping fields that are not supplied",
            f"update_{entity}",
            {**entity_id, **update},
            [id_arg],
        ),
        _workspace_tool(
            f"delete_gtm_{entity}", f"Delete a {label.lower()}", f"delete_{entity}", entity_id, [id_arg]
        ),
        _workspace_tool(
            f"revert_gtm_{entity}",
            f"Revert changes to a {label.lower()} in a workspace",
            f"revert_{entity}",
            entity_id,
            [id_arg],
        ),
    ]


def _rename(**mapping: str) -> Translator:
    """Translator that renames wire arguments to keyword arguments."""

    def translate(kwargs: dict[str, Any]) -> dict[str, Any]:
        return {mapping.get(key, key): value for key, value in kwargs.items()}

    return translate


def _user_permission_args(kwargs: dict[str, Any]) -> dict[str, Any]:
    translated = dict(kwargs)
    permission = translated.pop("account_access_permission", None)
    if permission is not None:
        translated["account_access"] = {"permission": permission}
    if translated.get("container_access") is not None:
        translated["container_access"] = [
            {"containerId": access["container_id"], "permission": access["permission"]}
            for access in translated["container_access"]
        ]
    return translated


# ---------------------------------------------------------------------------
# Catalog
# ---------------------------------------------------------------------------

ACCOUNT_TOOLS = [
    _tool("list_gtm_accounts", "List all GTM accounts accessible to the authenticated user", "list_accounts"),
    _tool("get_gtm_account", "Get a GTM account", "get_account", {"account_id": ACCOUNT_ID}, ["account_id"]),
    _tool(
        "update_gtm_account",
        "Update a GTM account",
        "update_account",
        {
            "account_id": ACCOUNT_ID,
            "name": _string("New account name"),
            "share_data": _boolean("Share data anonymously with Google"),
        },
        ["account_id"],
    ),
]

_PERMISSION_ID = {"permission_id": _string("User permission ID")}

USER_PERMISSION_TOOLS = [
    _tool(
        "list_gtm_user_permissions",
        "List user permissions for a GTM account",
        "list_user_permissions",
        {"account_id": ACCOUNT_ID},
        ["account_id"],
    ),
    _tool(
        "get_gtm_user_permission",
        "Get a user permission",
        "get_user_permission",
        {"account_id": ACCOUNT_ID, **_PERMISSION_ID},
        ["account_id", "permission_id"],
    ),
    _tool(
        "create_gtm_user_permission",
        "Grant a user access to a GTM account and its containers",
        "create_user_permission",
        {
            "account_id": ACCOUNT_ID,
            "email_address": _string("User email address"),
            "account_access_permission": ACCOUNT_PERMISSION,
            "container_access": CONTAINER_ACCESS,
        },
        ["account_id", "email_address", "account_access_permission"],
        _user_permission_args,
    ),
    _tool(
        "update_gtm_user_permission",
        "Update a user's account or container permissions",
        "update_user_permission",
        {
            "account_id": ACCOUNT_ID,
            **_PERMISSION_ID,
            "account_access_permission": ACCOUNT_PERMISSION,
            "container_access": CONTAINER_ACCESS,
        },
        ["account_id", "permission_id"],
        _user_permission_args,
    ),
    _tool(
        "delete_gtm_user_permission",
        "Remove a user's access to a GTM account",
        "delete_user_permission",
        {"account_id": ACCOUNT_ID, **_PERMISSION_ID},
        ["account_id", "permission_id"],
    ),
]

_CONTAINER_FIELDS = {
    "domain_name": _string_list("Domains the container is used on"),
    "time_zone_country_id": _string("Time zone country ID"),
    "time_zone_id": _string("Time zone ID"),
    "notes": _string("Container notes"),
}

CONTAINER_TOOLS = [
    _tool(
        "list_gtm_containers",
        "List all containers in a GTM account",
        "list_containers",
        {"account_id": ACCOUNT_ID},
        ["account_id"],
    ),
    _container_tool("get_gtm_container", "Get a GTM container", "get_container"),
    _tool(
        "create_gtm_container",
        "Create a GTM container",
        "create_container",
        {
            "account_id": ACCOUNT_ID,
            "name": _string("Container name"),
            "usage_context": {
                "type": "array",
                "items": {"type": "string", "enum": ["web", "android", "ios", "amp", "server"]},
                "description": "Usage contexts (default: [\"web\"])",
            },
            **_CONTAINER_FIELDS,
        },
        ["account_id", "name"],
    ),
    _container_tool(
        "update_gtm_container",
        "Update a GTM container, keeping fields that are not supplied",
        "update_container",
        {"name": _string("New container name"), **_CONTAINER_FIELDS},
    ),
    _container_tool("delete_gtm_container", "Delete a GTM container", "delete_container"),
    _container_tool(
        "get_gtm_container_snippet",
        "Get the tagging snippet for a web container",
        "get_container_snippet",
    ),
    _tool(
        "lookup_gtm_container",
        "Look up a container by public ID (GTM-XXXXXXX) or destination ID",
        "lookup_container",
        {
            "public_id": _string("Container public ID, e.g. GTM-XXXXXXX"),
            "destination_id": _string("Destination ID linked to the container"),
        },
    ),
    _container_tool(
        "combine_gtm_containers",
        "Combine a source container into this container",
        "combine_containers",
        {
            "source_container_id": _string("Container ID to combine into this one"),
            "allow_user_variable_conflict": _boolean("Allow conflicting user variables"),
            "setting_source": _string("Which container's settings to keep", enum=["current", "other"]),
        },
        ["source_container_id"],
    ),
    _container_tool(
        "move_gtm_tag_id",
        "Move a Google tag ID out of this container into a new destination container",
        "move_tag_id",
        {
            "tag_id": _string("Google tag ID to move"),
            "tag_name": _string("Name for the new Google tag"),
            "copy_settings": _boolean("Copy tag settings"),
            "copy_terms_of_service": _boolean("Copy terms of service acceptance"),
            "copy_users": _boolean("Copy users"),
        },
        ["tag_id"],
    ),
]

_WORKSPACE_SCOPE = {"workspace_id": REQUIRED_WORKSPACE_ID}

WORKSPACE_TOOLS = [
    _container_tool("list_gtm_workspaces", "List all workspaces in a container", "list_workspaces"),
    _container_tool(
        "get_gtm_workspace", "Get a workspace", "get_workspace", _WORKSPACE_SCOPE, ["workspace_id"]
    ),
    _container_tool(
        "create_gtm_workspace",
        "Create a workspace",
        "create_workspace",
        {"name": _string("Workspace name"), "description": _string("Workspace description")},
        ["name"],
    ),
    _container_tool(
        "update_gtm_workspace",
        "Update a workspace, keeping fields that are not supplied",
        "update_workspace",
        {
            **_WORKSPACE_SCOPE,
            "name": _string("New workspace name"),
            "description": _string("New workspace description"),
        },
        ["workspace_id"],
    ),
    _container_tool(
        "delete_gtm_workspace", "Delete a workspace", "delete_workspace", _WORKSPACE_SCOPE, ["workspace_id"]
    ),
    _container_tool(
        "get_gtm_workspace_status",
        "Get pending changes and merge conflicts for a workspace",
        "get_workspace_status",
        _WORKSPACE_SCOPE,
        ["workspace_id"],
    ),
    _container_tool(
        "sync_gtm_workspace",
        "Sync a workspace to the latest container version",
        "sync_workspace",
        _WORKSPACE_SCOPE,
        ["workspace_id"],
    ),
    _container_tool(
        "resolve_gtm_conflict",
        "Resolve a merge conflict by submitting the resolved entity from the workspace status",
        "resolve_conflict",
        {
            **_WORKSPACE_SCOPE,
            "entity": {
                "type": "object",
                "description": "Resolved entity: one of tag/trigger/variable/folder plus changeStatus",
            },
            "fingerprint": _string("Fingerprint of the conflicting entity"),
        },
        ["workspace_id", "entity"],
    ),
    _container_tool(
        "bulk_update_gtm_workspace",
        "Apply several entity changes to a workspace in one call",
        "bulk_update",
        {
            **_WORKSPACE_SCOPE,
            "changes": {
                "type": "array",
                "items": {"type": "object"},
                "description": "Entity changes, each with an entity and a changeStatus",
            },
        },
        ["workspace_id", "changes"],
    ),
    _workspace_tool(
        "quick_preview_gtm_workspace",
        "Compile a workspace into a preview container version",
        "quick_preview",
    ),
]

_VERSION_ID = {"version_id": _string("Container version ID")}
_INCLUDE_DELETED = {"include_deleted": _boolean("Include deleted versions")}

VERSION_TOOLS = [
    _workspace_tool(
        "create_gtm_version",
        "Create a container version from a workspace without publishing it",
        "create_version",
        {"name": _string("Version name"), "notes": _string("Version notes")},
    ),
    _workspace_tool(
        "publish_gtm_version",
        "Create a container version from a workspace and publish it",
        "publish_version",
        {
            "name": _string("Version name (default: 'Published via MCP')"),
            "notes": _string("Version notes"),
        },
    ),
    _container_tool(
        "publish_gtm_container_version",
        "Publish an existing container version",
        "publish_container_version",
        _VERSION_ID,
        ["version_id"],
    ),
    _container_tool("list_gtm_versions", "List container versions", "list_versions", _INCLUDE_DELETED),
    _container_tool("get_gtm_version", "Get a container version", "get_version", _VERSION_ID, ["version_id"]),
    _container_tool(
        "update_gtm_version",
        "Update a container version's name or description",
        "update_version",
        {
            **_VERSION_ID,
            "name": _string("New version name"),
            "description": _string("New version description"),
        },
        ["version_id"],
    ),
    _container_tool(
        "delete_gtm_version", "Delete a container version", "delete_version", _VERSION_ID, ["version_id"]
    ),
    _container_tool(
        "undelete_gtm_version",
        "Restore a deleted container version",
        "undelete_version",
        _VERSION_ID,
        ["version_id"],
    ),
    _container_tool(
        "set_latest_gtm_version",
        "Set a container version as the latest version",
        "set_latest_version",
        _VERSION_ID,
        ["version_id"],
    ),
    _container_tool("get_live_gtm_version", "Get the live (published) container version", "get_live_version"),
    _container_tool(
        "list_gtm_version_headers",
        "List container version headers",
        "list_version_headers",
        _INCLUDE_DELETED,
    ),
    _container_tool(
        "get_latest_gtm_version_header",
        "Get the latest container version header",
        "get_latest_version_header",
    ),
]

_ENVIRONMENT_ID = {"environment_id": _string("Environment ID")}
_ENVIRONMENT_FIELDS = {
    "description": _string("Environment description"),
    "url": _string("Default preview page URL"),
}

ENVIRONMENT_TOOLS = [
    _container_tool("list_gtm_environments", "List environments in a container", "list_environments"),
    _container_tool(
        "get_gtm_environment", "Get an environment", "get_environment", _ENVIRONMENT_ID, ["environment_id"]
    ),
    _container_tool(
        "create_gtm_environment",
        "Create an environment",
        "create_environment",
        {
            "name": _string("Environment name"),
            "type": _string("Environment type", enum=["user", "live", "latest", "workspace"]),
            **_ENVIRONMENT_FIELDS,
        },
        ["name", "type"],
        _rename(type="environment_type"),
    ),
    _container_tool(
        "update_gtm_environment",
        "Update an environment, keeping fields that are not supplied",
        "update_environment",
        {**_ENVIRONMENT_ID, "name": _string("New environment name"), **_ENVIRONMENT_FIELDS},
        ["environment_id"],
    ),
    _container_tool(
        "delete_gtm_environment",
        "Delete an environment",
        "delete_environment",
        _ENVIRONMENT_ID,
        ["environment_id"],
    ),
    _container_tool(
        "reauthorize_gtm_environment",
        "Regenerate an environment's authorization code",
        "reauthorize_environment",
        _ENVIRONMENT_ID,
        ["environment_id"],
    ),
]

TAG_TOOLS = _entity_tools(
    "tag",
    "tags",
    "Tag",
    "tag_id",
    (
        {
            "tag_name": _string("Name of the tag"),
            "tag_type": _string("Tag type (e.g., 'gaawc' for GA4 Config, 'gaawe' for GA4 Event, 'html')"),
            "parameters": {"type": "object", "description": "Tag parameters as key/value pairs"},
            "firing_trigger_id": _string_list("Trigger IDs that fire the tag"),
        },
        ["tag_name", "tag_type"],
        None,
    ),
    {
        "name": _string("New tag name"),
        "tag_type": _string("New tag type"),
        "parameters": {"type": "object", "description": "Tag parameters as key/value pairs"},
        "firing_trigger_id": _string_list("Trigger IDs that fire the tag"),
        "blocking_trigger_id": _string_list("Trigger IDs that block the tag"),
        "tag_firing_option": _string(
            "How often the tag fires", enum=["oncePerEvent", "oncePerLoad", "unlimited"]
        ),
    },
)

TRIGGER_TOOLS = _entity_tools(
    "trigger",
    "triggers",
    "Trigger",
    "trigger_id",
    (
        {
            "trigger_name": _string("Name of the trigger"),
            "trigger_type": _string("Trigger type (e.g., 'pageview', 'click', 'customEvent', 'formSubmission')"),
            "conditions": CONDITION_LIST,
        },
        ["trigger_name", "trigger_type"],
        None,
    ),
    {
        "name": _string("New trigger name"),
        "trigger_type": _string("New trigger type"),
        "conditions": CONDITION_LIST,
        "wait_for_tags": _boolean("Wait for tags to fire before continuing"),
        "wait_for_tags_timeout": {"type": "integer", "description": "Wait timeout in milliseconds"},
        "check_validation": _boolean("Only fire when the form or link action is valid"),
    },
)

VARIABLE_TOOLS = _entity_tools(
    "variable",
    "variables",
    "Variable",
    "variable_id",
    (
        {
            "variable_name": _string("Name of the variable"),
            "variable_type": _string(
                "Variable type (e.g., 'v' for Data Layer, 'c' for Constant, 'jsm' for Custom JavaScript)"
            ),
            "value": _string("Variable value (data layer key, constant or JavaScript)"),
        },
        ["variable_name", "variable_type"],
        None,
    ),
    {
        "name": _string("New variable name"),
        "variable_type": _string("New variable type"),
        "value": _string("New value; an empty string clears the value"),
    },
)

_FOLDER_ID = {"folder_id": _string("Folder ID")}

FOLDER_TOOLS = [
    *_entity_tools(
        "folder",
        "folders",
        "Folder",
        "folder_id",
        ({"name": _string("Folder name"), "notes": _string("Folder notes")}, ["name"], None),
        {"name": _string("New folder name"), "notes": _string("Folder notes")},
    ),
    _workspace_tool(
        "move_entities_to_gtm_folder",
        "Move tags, triggers and variables into a folder",
        "move_entities_to_folder",
        {
            **_FOLDER_ID,
            "tag_ids": _string_list("Tag IDs to move"),
            "trigger_ids": _string_list("Trigger IDs to move"),
            "variable_ids": _string_list("Variable IDs to move"),
        },
        ["folder_id"],
    ),
    _workspace_tool(
        "get_gtm_folder_entities",
        "List the tags, triggers and variables in a folder",
        "get_folder_entities",
        _FOLDER_ID,
        ["folder_id"],
    ),
]

_BUILT_IN_TYPES = {
    "types": {
        "type": "array",
        "items": {"type": "string"},
        "minItems": 1,
        "description": "Built-in variable types (e.g., 'pageUrl', 'clickElement', 'formId')",
    }
}

BUILT_IN_VARIABLE_TOOLS = [
    _workspace_tool(
        "list_gtm_built_in_variables",
        "List enabled built-in variables in a workspace",
        "list_built_in_variables",
    ),
    _workspace_tool(
        "create_gtm_built_in_variable",
        "Enable built-in variables in a workspace",
        "create_built_in_variables",
        _BUILT_IN_TYPES,
        ["types"],
    ),
    _workspace_tool(
        "delete_gtm_built_in_variable",
        "Disable built-in variables in a workspace",
        "delete_built_in_variables",
        _BUILT_IN_TYPES,
        ["types"],
    ),
    _workspace_tool(
        "revert_gtm_built_in_variables",
        "Revert changes to a built-in variable in a workspace",
        "revert_built_in_variable",
        {"type": _string("Built-in variable type")},
        ["type"],
        _rename(type="built_in_type"),
    ),
]

CLIENT_TOOLS = _entity_tools(
    "client",
    "clients",
    "Client",
    "client_id",
    (
        {
            "name": _string("Client name"),
            "type": _string("Client type"),
            "parameters": PARAMETER_LIST,
            "priority": {"type": "integer", "description": "Client priority"},
        },
        ["name", "type"],
        _rename(type="client_type"),
    ),
    {
        "name": _string("New client name"),
        "parameters": PARAMETER_LIST,
        "priority": {"type": "integer", "description": "Client priority"},
    },
)

GTAG_CONFIG_TOOLS = _entity_tools(
    "gtag_config",
    "gtag_configs",
    "Google tag config",
    "config_id",
    (
        {
            "tag_id": _string("Google tag ID (e.g., G-XXXXXXXXXX)"),
            "parameters": PARAMETER_LIST,
            "type": _string("Config type (default: 'googtag')"),
        },
        [],
        _rename(type="config_type"),
    ),
    {"tag_id": _string("Google tag ID"), "parameters": PARAMETER_LIST},
)

TEMPLATE_TOOLS = [
    *_entity_tools(
        "template",
        "templates",
        "Custom template",
        "template_id",
        (
            {"name": _string("Template name"), "template_data": _string("Template source (.tpl)")},
            ["name", "template_data"],
            None,
        ),
        {"name": _string("New template name"), "template_data": _string("New template source")},
    ),
    _workspace_tool(
        "import_gtm_template_from_gallery",
        "Import a template from the Community Template Gallery",
        "import_template_from_gallery",
        {
            "gallery_reference": {
                "type": "object",
                "description": "Gallery reference with owner, repository and signature (commit SHA)",
                "properties": {
                    "owner": {"type": "string"},
                    "repository": {"type": "string"},
                    "signature": {"type": "string"},
                },
                "required": ["owner", "repository"],
            },
            "acknowledge_permissions": _boolean("Accept the template's permissions"),
        },
        ["gallery_reference"],
    ),
]

TRANSFORMATION_TOOLS = _entity_tools(
    "transformation",
    "transformations",
    "Transformation",
    "transformation_id",
    (
        {
            "name": _string("Transformation name"),
            "type": _string("Transformation type"),
            "parameters": PARAMETER_LIST,
        },
        ["name", "type"],
        _rename(type="transformation_type"),
    ),
    {"name": _string("New transformation name"), "parameters": PARAMETER_LIST},
)

_ZONE_FIELDS = {
    "boundary": {"type": "object", "description": "Zone boundary conditions"},
    "child_container": {
        "type": "array",
        "items": {"type": "object"},
        "description": "Child containers, each with publicId and nickname",
    },
    "type_restriction": {"type": "object", "description": "Allowed tag types in the zone"},
    "notes": _string("Zone notes"),
}

ZONE_TOOLS = _entity_tools(
    "zone",
    "zones",
    "Zone",
    "zone_id",
    ({"name": _string("Zone name"), **_ZONE_FIELDS}, ["name"], None),
    {"name": _string("New zone name"), **_ZONE_FIELDS},
)

COMPONENT_TOOLS = [
    _container_tool(
        "create_ga4_setup",
        "Create a complete GA4 setup: configuration tag, all-pages trigger and common event tags",
        "create_ga4_setup",
        {"measurement_id": _string("GA4 measurement ID (G-XXXXXXXXXX)")},
        ["measurement_id"],
        component=True,
    ),
    _container_tool(
        "create_facebook_pixel_setup",
        "Create a Facebook Pixel tag and page view trigger",
        "create_facebook_pixel_setup",
        {"pixel_id": _string("Facebook Pixel ID")},
        ["pixel_id"],
        component=True,
    ),
    _container_tool(
        "create_form_tracking",
        "Track form submissions with a form trigger and GA4 event tag",
        "create_form_tracking",
        {
            "form_selector": _string("CSS selector of the form (e.g., '#contact-form')"),
            "event_name": _string("GA4 event name (default: 'form_submit')"),
        },
        ["form_selector"],
        component=True,
    ),
    _container_tool(
        "generate_gtm_workflow",
        "Generate a complete tracking workflow for an ecommerce, lead generation or content site",
        "generate_gtm_workflow",
        {
            "workflow_type": _string(
                "Kind of site", enum=["ecommerce", "lead_generation", "content_site"]
            ),
            "ga4_measurement_id": _string("GA4 measurement ID (optional)"),
            "facebook_pixel_id": _string("Facebook Pixel ID (optional)"),
        },
        ["workflow_type"],
        component=True,
    ),
]

TOOL_SPECS: dict[str, ToolSpec] = {
    spec.name: spec
    for spec in [
        *ACCOUNT_TOOLS,
        *USER_PERMISSION_TOOLS,
        *CONTAINER_TOOLS,
        *WORKSPACE_TOOLS,
        *VERSION_TOOLS,
        *ENVIRONMENT_TOOLS,
        *TAG_TOOLS,
        *TRIGGER_TOOLS,
        *VARIABLE_TOOLS,
        *FOLDER_TOOLS,
        *BUILT_IN_VARIABLE_TOOLS,
        *CLIENT_TOOLS,
        *GTAG_CONFIG_TOOLS,
        *TEMPLATE_TOOLS,
        *TRANSFORMATION_TOOLS,
        *ZONE_TOOLS,
        *COMPONENT_TOOLS,
    ]
}


def list_tool_definitions() -> list[Tool]:
    """All tool definitions, in catalog order."""
    return [spec.tool for spec in TOOL_SPECS.values()]
