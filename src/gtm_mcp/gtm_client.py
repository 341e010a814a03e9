"""Google Tag Manager API v2 client.

Thin async façade over the Tag Manager REST API. Every public operation
returns ``{"success": True, <key>: <data>}`` or
``{"success": False, "error": <message>}``; remote failures never raise past
the method boundary. Calling an operation before :meth:`GTMClient.authenticate`
raises :class:`ServiceNotInitializedError`.

Two patterns recur:

- Default workspace: when ``workspace_id`` is omitted the container's
  workspaces are listed on every call and the first one is used, creating
  "Default Workspace" when none exists.
- Fingerprint-preserving update: the entity is read, caller-supplied fields
  are merged over the fresh copy, and the merged body (including the server's
  fingerprint) is written back.
"""

import functools
import logging
from collections.abc import Awaitable, Callable, Iterable
from typing import Any, TypeVar

import httpx
from google.oauth2.credentials import Credentials

from gtm_mcp.auth import OAuthManager

logger = logging.getLogger(__name__)

GTM_API_BASE = "https://tagmanager.googleapis.com/tagmanager/v2"

DEFAULT_WORKSPACE_NAME = "Default Workspace"
DEFAULT_VERSION_NAME = "Published via MCP"

F = TypeVar("F", bound=Callable[..., Awaitable[Any]])


class ServiceNotInitializedError(RuntimeError):
    """Raised when the client is used before authenticate()."""

    def __init__(self) -> None:
        super().__init__("Service not initialized. Call authenticate() first.")


class GTMAPIError(Exception):
    """Error reported by the Tag Manager API.

    Attributes:
        message: Google's error message, passed through verbatim.
        status_code: HTTP status, when the error came from a response.
    """

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code

    @classmethod
    def from_response(cls, response: httpx.Response) -> "GTMAPIError":
        """Build an error from a non-2xx API response."""
        message = response.reason_phrase or f"HTTP {response.status_code}"
        try:
            payload = response.json()
        except ValueError:
            payload = None

        if isinstance(payload, dict):
            error = payload.get("error")
            if isinstance(error, dict) and error.get("message"):
                message = error["message"]
            elif isinstance(error, str):
                message = payload.get("error_description") or error

        return cls(message, response.status_code)


def api_call(result_key: str | None = None) -> Callable[[F], F]:
    """Wrap a façade operation in the uniform result envelope.

    Args:
        result_key: Key the operation's payload is returned under. None for
            operations that only report success (deletes, moves).
    """

    def decorator(func: F) -> F:
        @functools.wraps(func)
        async def wrapper(self: "GTMClient", *args: Any, **kwargs: Any) -> dict[str, Any]:
            self._require_service()
            try:
                data = await func(self, *args, **kwargs)
            except ServiceNotInitializedError:
                raise
            except Exception as e:
                logger.warning(f"{func.__name__} failed: {e}")
                return {"success": False, "error": str(e)}

            if result_key is None:
                return {"success": True}
            return {"success": True, result_key: data}

        return wrapper  # type: ignore[return-value]

    return decorator


def _compact(values: dict[str, Any]) -> dict[str, Any]:
    """Drop keys whose value is None."""
    return {key: value for key, value in values.items() if value is not None}


def _param_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def to_template_parameters(parameters: dict[str, Any]) -> list[dict[str, str]]:
    """Convert a flat mapping into GTM template parameters."""
    return [
        {"key": key, "value": _param_value(value), "type": "template"}
        for key, value in parameters.items()
    ]


def normalize_parameters(parameters: Iterable[dict[str, Any]]) -> list[dict[str, Any]]:
    """Fill in the parameter type GTM requires, defaulting to template."""
    normalized = []
    for parameter in parameters:
        item = dict(parameter)
        item.setdefault("type", "template")
        normalized.append(item)
    return normalized


def variable_parameter_key(variable_type: str | None) -> str:
    """Parameter key that holds a variable's value for its type."""
    if variable_type == "v":
        # Data Layer Variable
        return "name"
    if variable_type == "jsm":
        # Custom JavaScript
        return "javascript"
    return "value"


def _trigger_filter_field(trigger_type: str | None) -> str:
    return "customEventFilter" if trigger_type == "customEvent" else "filter"


def _boolean_parameter(value: bool) -> dict[str, str]:
    return {"type": "boolean", "value": _param_value(value)}


def account_path(account_id: str) -> str:
    return f"accounts/{account_id}"


def container_path(account_id: str, container_id: str) -> str:
    return f"accounts/{account_id}/containers/{container_id}"


def workspace_path(account_id: str, container_id: str, workspace_id: str) -> str:
    return f"accounts/{account_id}/containers/{container_id}/workspaces/{workspace_id}"


class GTMClient:
    """Google Tag Manager API client.

    Attributes:
        auth: OAuthManager producing the session credentials.
    """

    def __init__(
        self,
        auth: OAuthManager | None = None,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            auth: Session manager. Creates default if not provided.
            http_client: Shared HTTP client. Created lazily if not provided.
        """
        self.auth = auth or OAuthManager()
        self._http_client = http_client
        self._credentials: Credentials | None = None

    @property
    def is_authenticated(self) -> bool:
        return self._credentials is not None

    async def authenticate(self) -> None:
        """Authorize the session, prompting or refreshing as needed."""
        self._credentials = await self.auth.authorize()
        logger.info("Authenticated with Google Tag Manager")

    def _require_service(self) -> None:
        if self._credentials is None:
            raise ServiceNotInitializedError()

    async def _get_http_client(self) -> httpx.AsyncClient:
        """Get or create shared HTTP client with connection pooling.

        Returns:
            Shared httpx.AsyncClient instance.
        """
        if self._http_client is None:
            self._http_client = httpx.AsyncClient(
                http2=True,
                limits=httpx.Limits(max_connections=10, max_keepalive_connections=5),
                timeout=httpx.Timeout(30.0, connect=10.0),
            )
        return self._http_client

    async def close(self) -> None:
        """Close the shared HTTP client and release resources."""
        if self._http_client:
            await self._http_client.aclose()
            self._http_client = None

    async def _get_access_token(self) -> str:
        """Get a valid access token, refreshing the session if it expired."""
        credentials = self._credentials
        if credentials is None:
            raise ServiceNotInitializedError()

        if credentials.expired and credentials.refresh_token:
            logger.info("Access token expired, refreshing...")
            await self.auth.refresh(credentials)

        token: str = credentials.token
        return token

    async def _request(
        self,
        method: str,
        path: str,
        params: dict[str, Any] | None = None,
        json_data: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        """Make an authenticated request to the Tag Manager API.

        Args:
            method: HTTP method (GET, POST, PUT, DELETE).
            path: Resource path relative to the API base, e.g. "accounts/1".
            params: Optional query parameters; None values are dropped.
            json_data: Optional JSON body.

        Returns:
            Decoded JSON response, or an empty dict for empty bodies.

        Raises:
            GTMAPIError: If the API responds with an error status.
        """
        access_token = await self._get_access_token()
        client = await self._get_http_client()

        response = await client.request(
            method=method,
            url=f"{GTM_API_BASE}/{path}",
            params=_compact(params) if params else None,
            json=json_data,
            headers={
                "Authorization": f"Bearer {access_token}",
                "Accept": "application/json",
            },
        )
        if response.is_error:
            raise GTMAPIError.from_response(response)
        if not response.content:
            return {}
        result: dict[str, Any] = response.json()
        return result

    async def _list_all(
        self,
        path: str,
        items_field: str,
        params: dict[str, Any] | None = None,
        method: str = "GET",
    ) -> list[dict[str, Any]]:
        """Collect all items across a paginated list endpoint."""
        items: list[dict[str, Any]] = []
        page_token: str | None = None

        while True:
            page = await self._request(method, path, params={**(params or {}), "pageToken": page_token})
            items.extend(page.get(items_field) or [])
            page_token = page.get("nextPageToken")
            if not page_token:
                break

        return items

    async def _get_workspace_id(self, account_id: str, container_id: str) -> str:
        """Resolve the default workspace for a container.

        Lists the container's workspaces and returns the first one, creating
        "Default Workspace" when the container has none. Resolved afresh on
        every call.
        """
        parent = container_path(account_id, container_id)
        try:
            response = await self._request("GET", f"{parent}/workspaces")
            workspaces = response.get("workspace") or []
            if workspaces:
                workspace_id: str = workspaces[0].get("workspaceId", "")
                return workspace_id

            logger.info(f"No workspace in {parent}, creating '{DEFAULT_WORKSPACE_NAME}'")
            created = await self._request(
                "POST", f"{parent}/workspaces", json_data={"name": DEFAULT_WORKSPACE_NAME}
            )
            created_id: str = created.get("workspaceId", "")
            return created_id
        except (GTMAPIError, httpx.HTTPError) as e:
            raise GTMAPIError(f"Failed to get workspace: {e}") from e

    async def _workspace(
        self, account_id: str, container_id: str, workspace_id: str | None
    ) -> str:
        """Workspace path, resolving the default workspace when none is given."""
        if not workspace_id:
            workspace_id = await self._get_workspace_id(account_id, container_id)
        return workspace_path(account_id, container_id, workspace_id)

    async def _read_merge_write(
        self,
        path: str,
        updates: dict[str, Any],
        remove: Iterable[str] = (),
    ) -> dict[str, Any]:
        """Update an entity while carrying forward its server fingerprint.

        Args:
            path: Entity resource path.
            updates: Caller-supplied fields; None values are ignored.
            remove: Fields to drop from the merged body.

        Returns:
            The updated entity.
        """
        current = await self._request("GET", path)
        body = {**current, **_compact(updates)}
        for field in remove:
            body.pop(field, None)
        return await self._request("PUT", path, json_data=body)

    # ------------------------------------------------------------------
    # Accounts
    # ------------------------------------------------------------------

    @api_call("accounts")
    async def list_accounts(self) -> list[dict[str, Any]]:
        """List all accounts accessible to the authenticated user."""
        return await self._list_all("accounts", "account")

    @api_call("account")
    async def get_account(self, account_id: str) -> dict[str, Any]:
        return await self._request("GET", account_path(account_id))

    @api_call("account")
    async def update_account(
        self,
        account_id: str,
        name: str | None = None,
        share_data: bool | None = None,
    ) -> dict[str, Any]:
        return await self._read_merge_write(
            account_path(account_id), {"name": name, "shareData": share_data}
        )

    # ------------------------------------------------------------------
    # User permissions
    # ------------------------------------------------------------------

    @api_call("userPermissions")
    async def list_user_permissions(self, account_id: str) -> list[dict[str, Any]]:
        return await self._list_all(
            f"{account_path(account_id)}/user_permissions", "userPermission"
        )

    @api_call("userPermission")
    async def get_user_permission(self, account_id: str, permission_id: str) -> dict[str, Any]:
        return await self._request(
            "GET", f"{account_path(account_id)}/user_permissions/{permission_id}"
        )

    @api_call("userPermission")
    async def create_user_permission(
        self,
        account_id: str,
        email_address: str,
        account_access: dict[str, Any],
        container_access: list[dict[str, Any]] | None = None,
    ) -> dict[str, Any]:
        """Grant a user access to an account and, optionally, its containers.

        Args:
            account_id: GTM account ID.
            email_address: User's email address.
            account_access: e.g. ``{"permission": "user"}``.
            container_access: e.g. ``[{"containerId": "1", "permission": "publish"}]``.
        """
        body: dict[str, Any] = {"emailAddress": email_address, "accountAccess": account_access}
        if container_access:
            body["containerAccess"] = container_access
        return await self._request(
            "POST", f"{account_path(account_id)}/user_permissions", json_data=body
        )

    @api_call("userPermission")
    async def update_user_permission(
        self,
        account_id: str,
        permission_id: str,
        account_access: dict[str, Any] | None = None,
        container_access: list[dict[str, Any]] | None = None,
    ) -> dict[str, Any]:
        return await self._read_merge_write(
            f"{account_path(account_id)}/user_permissions/{permission_id}",
            {"accountAccess": account_access, "containerAccess": container_access},
        )

    @api_call()
    async def delete_user_permission(self, account_id: str, permission_id: str) -> None:
        await self._request(
            "DELETE", f"{account_path(account_id)}/user_permissions/{permission_id}"
        )

    # ------------------------------------------------------------------
    # Containers
    # ------------------------------------------------------------------

    @api_call("containers")
    async def list_containers(self, account_id: str) -> list[dict[str, Any]]:
        return await self._list_all(f"{account_path(account_id)}/containers", "container")

    @api_call("container")
    async def get_container(self, account_id: str, container_id: str) -> dict[str, Any]:
        return await self._request("GET", container_path(account_id, container_id))

    @api_call("container")
    async def create_container(
        self,
        account_id: str,
        name: str,
        usage_context: list[str] | None = None,
        domain_name: list[str] | None = None,
        time_zone_country_id: str | None = None,
        time_zone_id: str | None = None,
        notes: str | None = None,
    ) -> dict[str, Any]:
        body = _compact(
            {
                "name": name,
                "usageContext": usage_context or ["web"],
                "domainName": domain_name,
                "timeZoneCountryId": time_zone_country_id,
                "timeZoneId": time_zone_id,
                "notes": notes,
            }
        )
        return await self._request(
            "POST", f"{account_path(account_id)}/containers", json_data=body
        )

    @api_call("container")
    async def update_container(
        self,
        account_id: str,
        container_id: str,
        name: str | None = None,
        domain_name: list[str] | None = None,
        time_zone_country_id: str | None = None,
        time_zone_id: str | None = None,
        notes: str | None = None,
    ) -> dict[str, Any]:
        return await self._read_merge_write(
            container_path(account_id, container_id),
            {
                "name": name,
                "domainName": domain_name,
                "timeZoneCountryId": time_zone_country_id,
                "timeZoneId": time_zone_id,
                "notes": notes,
            },
        )

    @api_call()
    async def delete_container(self, account_id: str, container_id: str) -> None:
        await self._request("DELETE", container_path(account_id, container_id))

    @api_call("snippet")
    async def get_container_snippet(self, account_id: str, container_id: str) -> str | None:
        """Get the tagging snippet for a web container."""
        response = await self._request(
            "GET", f"{container_path(account_id, container_id)}:snippet"
        )
        snippet: str | None = response.get("snippet")
        return snippet

    @api_call("container")
    async def lookup_container(
        self,
        public_id: str | None = None,
        destination_id: str | None = None,
    ) -> dict[str, Any]:
        """Look up a container by its public ID (GTM-XXXXXXX) or destination ID."""
        if not public_id and not destination_id:
            raise ValueError("Either public_id or destination_id is required")
        return await self._request(
            "GET",
            "accounts/containers:lookup",
            params={"tagId": public_id, "destinationId": destination_id},
        )

    @api_call("container")
    async def combine_containers(
        self,
        account_id: str,
        container_id: str,
        source_container_id: str,
        allow_user_variable_conflict: bool | None = None,
        setting_source: str | None = None,
    ) -> dict[str, Any]:
        """Combine a source container into the destination container."""
        return await self._request(
            "POST",
            f"{container_path(account_id, container_id)}:combine",
            params={
                "containerId": source_container_id,
                "allowUserVariableConflict": allow_user_variable_conflict,
                "settingSource": setting_source,
            },
        )

    @api_call("container")
    async def move_tag_id(
        self,
        account_id: str,
        container_id: str,
        tag_id: str,
        tag_name: str | None = None,
        copy_settings: bool | None = None,
        copy_terms_of_service: bool | None = None,
        copy_users: bool | None = None,
    ) -> dict[str, Any]:
        """Move a Google tag ID out of a container into a new destination container."""
        return await self._request(
            "POST",
            f"{container_path(account_id, container_id)}:move_tag_id",
            params={
                "tagId": tag_id,
                "tagName": tag_name,
                "copySettings": copy_settings,
                "copyTermsOfService": copy_terms_of_service,
                "copyUsers": copy_users,
            },
        )

    # ------------------------------------------------------------------
    # Workspaces
    # ------------------------------------------------------------------

    @api_call("workspaces")
    async def list_workspaces(self, account_id: str, container_id: str) -> list[dict[str, Any]]:
        return await self._list_all(
            f"{container_path(account_id, container_id)}/workspaces", "workspace"
        )

    @api_call("workspace")
    async def get_workspace(
        self, account_id: str, container_id: str, workspace_id: str
    ) -> dict[str, Any]:
        return await self._request("GET", workspace_path(account_id, container_id, workspace_id))

    @api_call("workspace")
    async def create_workspace(
        self,
        account_id: str,
        container_id: str,
        name: str,
        description: str | None = None,
    ) -> dict[str, Any]:
        return await self._request(
            "POST",
            f"{container_path(account_id, container_id)}/workspaces",
            json_data=_compact({"name": name, "description": description}),
        )

    @api_call("workspace")
    async def update_workspace(
        self,
        account_id: str,
        container_id: str,
        workspace_id: str,
        name: str | None = None,
        description: str | None = None,
    ) -> dict[str, Any]:
        return await self._read_merge_write(
            workspace_path(account_id, container_id, workspace_id),
            {"name": name, "description": description},
        )

    @api_call()
    async def delete_workspace(self, account_id: str, container_id: str, workspace_id: str) -> None:
        await self._request("DELETE", workspace_path(account_id, container_id, workspace_id))

    @api_call("status")
    async def get_workspace_status(
        self, account_id: str, container_id: str, workspace_id: str
    ) -> dict[str, Any]:
        """Get pending changes and merge conflicts for a workspace."""
        return await self._request(
            "GET", f"{workspace_path(account_id, container_id, workspace_id)}/status"
        )

    @api_call("syncResult")
    async def sync_workspace(
        self, account_id: str, container_id: str, workspace_id: str
    ) -> dict[str, Any]:
        """Sync a workspace to the latest container version."""
        return await self._request(
            "POST", f"{workspace_path(account_id, container_id, workspace_id)}:sync"
        )

    @api_call("conflict")
    async def resolve_conflict(
        self,
        account_id: str,
        container_id: str,
        workspace_id: str,
        entity: dict[str, Any],
        fingerprint: str | None = None,
    ) -> dict[str, Any]:
        """Resolve a merge conflict by submitting the resolved entity.

        Args:
            entity: Resolved entity as listed in the workspace status
                ``mergeConflict`` entries (``tag``/``trigger``/``variable``/``folder``
                plus ``changeStatus``).
            fingerprint: Fingerprint of the conflicting entity in the workspace.
        """
        return await self._request(
            "POST",
            f"{workspace_path(account_id, container_id, workspace_id)}:resolve_conflict",
            params={"fingerprint": fingerprint},
            json_data=entity,
        )

    @api_call("result")
    async def bulk_update(
        self,
        account_id: str,
        container_id: str,
        workspace_id: str,
        changes: list[dict[str, Any]],
    ) -> dict[str, Any]:
        """Apply several entity changes to a workspace in one call."""
        return await self._request(
            "POST",
            f"{workspace_path(account_id, container_id, workspace_id)}/bulk_update",
            json_data={"changes": changes},
        )

    @api_call("preview")
    async def quick_preview(
        self, account_id: str, container_id: str, workspace_id: str | None = None
    ) -> dict[str, Any]:
        """Compile the workspace into a preview container version."""
        path = await self._workspace(account_id, container_id, workspace_id)
        return await self._request("POST", f"{path}:quick_preview")

    # ------------------------------------------------------------------
    # Versioning and publishing
    # ------------------------------------------------------------------

    @api_call("version")
    async def create_version(
        self,
        account_id: str,
        container_id: str,
        name: str | None = None,
        notes: str | None = None,
        workspace_id: str | None = None,
    ) -> dict[str, Any]:
        """Snapshot a workspace into a new container version without publishing it."""
        path = await self._workspace(account_id, container_id, workspace_id)
        return await self._request(
            "POST", f"{path}:create_version", json_data=_compact({"name": name, "notes": notes})
        )

    @api_call("version")
    async def publish_version(
        self,
        account_id: str,
        container_id: str,
        name: str = DEFAULT_VERSION_NAME,
        notes: str = "",
        workspace_id: str | None = None,
    ) -> dict[str, Any]:
        """Create a version from the workspace and publish it.

        The version path returned by create_version is required for the
        publish call; a response without one fails the operation rather
        than publishing something else.

        Args:
            account_id: GTM account ID.
            container_id: GTM container ID.
            name: Version name.
            notes: Version notes.
            workspace_id: Workspace to snapshot. Uses the default workspace if omitted.

        Returns:
            The publish response (published container version).
        """
        path = await self._workspace(account_id, container_id, workspace_id)
        created = await self._request(
            "POST", f"{path}:create_version", json_data={"name": name, "notes": notes}
        )

        version_path = (created.get("containerVersion") or {}).get("path")
        if not version_path:
            raise GTMAPIError("Could not extract version path from response")

        logger.info(f"Publishing {version_path}")
        return await self._request("POST", f"{version_path}:publish")

    @api_call("version")
    async def publish_container_version(
        self, account_id: str, container_id: str, version_id: str
    ) -> dict[str, Any]:
        """Publish an existing container version."""
        return await self._request(
            "POST", f"{container_path(account_id, container_id)}/versions/{version_id}:publish"
        )

    @api_call("versions")
    async def list_versions(
        self, account_id: str, container_id: str, include_deleted: bool | None = None
    ) -> list[dict[str, Any]]:
        """List container versions (as version headers)."""
        return await self._list_all(
            f"{container_path(account_id, container_id)}/version_headers",
            "containerVersionHeader",
            params={"includeDeleted": include_deleted},
        )

    @api_call("version")
    async def get_version(
        self, account_id: str, container_id: str, version_id: str
    ) -> dict[str, Any]:
        return await self._request(
            "GET", f"{container_path(account_id, container_id)}/versions/{version_id}"
        )

    @api_call("version")
    async def update_version(
        self,
        account_id: str,
        container_id: str,
        version_id: str,
        name: str | None = None,
        description: str | None = None,
    ) -> dict[str, Any]:
        return await self._read_merge_write(
            f"{container_path(account_id, container_id)}/versions/{version_id}",
            {"name": name, "description": description},
        )

    @api_call()
    async def delete_version(self, account_id: str, container_id: str, version_id: str) -> None:
        await self._request(
            "DELETE", f"{container_path(account_id, container_id)}/versions/{version_id}"
        )

    @api_call("version")
    async def undelete_version(
        self, account_id: str, container_id: str, version_id: str
    ) -> dict[str, Any]:
        return await self._request(
            "POST", f"{container_path(account_id, container_id)}/versions/{version_id}:undelete"
        )

    @api_call("version")
    async def set_latest_version(
        self, account_id: str, container_id: str, version_id: str
    ) -> dict[str, Any]:
        return await self._request(
            "POST", f"{container_path(account_id, container_id)}/versions/{version_id}:set_latest"
        )

    @api_call("version")
    async def get_live_version(self, account_id: str, container_id: str) -> dict[str, Any]:
        return await self._request(
            "GET", f"{container_path(account_id, container_id)}/versions:live"
        )

    @api_call("versionHeaders")
    async def list_version_headers(
        self, account_id: str, container_id: str, include_deleted: bool | None = None
    ) -> list[dict[str, Any]]:
        return await self._list_all(
            f"{container_path(account_id, container_id)}/version_headers",
            "containerVersionHeader",
            params={"includeDeleted": include_deleted},
        )

    @api_call("versionHeader")
    async def get_latest_version_header(
        self, account_id: str, container_id: str
    ) -> dict[str, Any]:
        return await self._request(
            "GET", f"{container_path(account_id, container_id)}/version_headers:latest"
        )

    # ------------------------------------------------------------------
    # Environments
    # ------------------------------------------------------------------

    @api_call("environments")
    async def list_environments(self, account_id: str, container_id: str) -> list[dict[str, Any]]:
        return await self._list_all(
            f"{container_path(account_id, container_id)}/environments", "environment"
        )

    @api_call("environment")
    async def get_environment(
        self, account_id: str, container_id: str, environment_id: str
    ) -> dict[str, Any]:
        return await self._request(
            "GET", f"{container_path(account_id, container_id)}/environments/{environment_id}"
        )

    @api_call("environment")
    async def create_environment(
        self,
        account_id: str,
        container_id: str,
        name: str,
        environment_type: str,
        description: str | None = None,
        url: str | None = None,
    ) -> dict[str, Any]:
        body = _compact(
            {"name": name, "type": environment_type, "description": description, "url": url}
        )
        return await self._request(
            "POST", f"{container_path(account_id, container_id)}/environments", json_data=body
        )

    @api_call("environment")
    async def update_environment(
        self,
        account_id: str,
        container_id: str,
        environment_id: str,
        name: str | None = None,
        description: str | None = None,
        url: str | None = None,
    ) -> dict[str, Any]:
        return await self._read_merge_write(
            f"{container_path(account_id, container_id)}/environments/{environment_id}",
            {"name": name, "description": description, "url": url},
        )

    @api_call()
    async def delete_environment(
        self, account_id: str, container_id: str, environment_id: str
    ) -> None:
        await self._request(
            "DELETE", f"{container_path(account_id, container_id)}/environments/{environment_id}"
        )

    @api_call("environment")
    async def reauthorize_environment(
        self, account_id: str, container_id: str, environment_id: str
    ) -> dict[str, Any]:
        """Regenerate an environment's authorization code."""
        return await self._request(
            "POST",
            f"{container_path(account_id, container_id)}/environments/{environment_id}:reauthorize",
            json_data={},
        )

    # ------------------------------------------------------------------
    # Workspace entities: shared helpers
    # ------------------------------------------------------------------

    async def _list_entities(
        self,
        account_id: str,
        container_id: str,
        workspace_id: str | None,
        collection: str,
        items_field: str,
    ) -> list[dict[str, Any]]:
        path = await self._workspace(account_id, container_id, workspace_id)
        return await self._list_all(f"{path}/{collection}", items_field)

    async def _entity_path(
        self,
        account_id: str,
        container_id: str,
        workspace_id: str | None,
        collection: str,
        entity_id: str,
    ) -> str:
        path = await self._workspace(account_id, container_id, workspace_id)
        return f"{path}/{collection}/{entity_id}"

    async def _create_entity(
        self,
        account_id: str,
        container_id: str,
        workspace_id: str | None,
        collection: str,
        body: dict[str, Any],
    ) -> dict[str, Any]:
        path = await self._workspace(account_id, container_id, workspace_id)
        return await self._request("POST", f"{path}/{collection}", json_data=body)

    # ------------------------------------------------------------------
    # Tags
    # ------------------------------------------------------------------

    @api_call("tag")
    async def create_tag(
        self,
        account_id: str,
        container_id: str,
        tag_name: str,
        tag_type: str,
        parameters: dict[str, Any] | None = None,
        workspace_id: str | None = None,
        firing_trigger_id: list[str] | None = None,
    ) -> dict[str, Any]:
        """Create a tag.

        Args:
            account_id: GTM account ID.
            container_id: GTM container ID.
            tag_name: Display name of the tag.
            tag_type: Tag type, e.g. "gaawc", "gaawe", "html".
            parameters: Flat key/value map, sent as template parameters.
            workspace_id: Target workspace. Uses the default workspace if omitted.
            firing_trigger_id: Trigger IDs that fire the tag.

        Returns:
            The created tag.
        """
        body: dict[str, Any] = {
            "name": tag_name,
            "type": tag_type,
            "parameter": to_template_parameters(parameters or {}),
        }
        if firing_trigger_id:
            body["firingTriggerId"] = firing_trigger_id
        return await self._create_entity(account_id, container_id, workspace_id, "tags", body)

    @api_call("tags")
    async def list_tags(
        self, account_id: str, container_id: str, workspace_id: str | None = None
    ) -> list[dict[str, Any]]:
        return await self._list_entities(account_id, container_id, workspace_id, "tags", "tag")

    @api_call("tag")
    async def get_tag(
        self, account_id: str, container_id: str, tag_id: str, workspace_id: str | None = None
    ) -> dict[str, Any]:
        path = await self._entity_path(account_id, container_id, workspace_id, "tags", tag_id)
        return await self._request("GET", path)

    @api_call("tag")
    async def update_tag(
        self,
        account_id: str,
        container_id: str,
        tag_id: str,
        name: str | None = None,
        tag_type: str | None = None,
        parameters: dict[str, Any] | None = None,
        firing_trigger_id: list[str] | None = None,
        blocking_trigger_id: list[str] | None = None,
        tag_firing_option: str | None = None,
        workspace_id: str | None = None,
    ) -> dict[str, Any]:
        path = await self._entity_path(account_id, container_id, workspace_id, "tags", tag_id)
        return await self._read_merge_write(
            path,
            {
                "name": name,
                "type": tag_type,
                "parameter": to_template_parameters(parameters) if parameters is not None else None,
                "firingTriggerId": firing_trigger_id,
                "blockingTriggerId": blocking_trigger_id,
                "tagFiringOption": tag_firing_option,
            },
        )

    @api_call()
    async def delete_tag(
        self, account_id: str, container_id: str, tag_id: str, workspace_id: str | None = None
    ) -> None:
        path = await self._entity_path(account_id, container_id, workspace_id, "tags", tag_id)
        await self._request("DELETE", path)

    @api_call("tag")
    async def revert_tag(
        self, account_id: str, container_id: str, tag_id: str, workspace_id: str | None = None
    ) -> dict[str, Any]:
        """Revert a tag to its state in the latest published version."""
        path = await self._entity_path(account_id, container_id, workspace_id, "tags", tag_id)
        return await self._request("POST", f"{path}:revert")

    # ------------------------------------------------------------------
    # Triggers
    # ------------------------------------------------------------------

    @api_call("trigger")
    async def create_trigger(
        self,
        account_id: str,
        container_id: str,
        trigger_name: str,
        trigger_type: str,
        conditions: list[dict[str, Any]] | None = None,
        workspace_id: str | None = None,
    ) -> dict[str, Any]:
        """Create a trigger.

        Conditions go to ``customEventFilter`` for custom event triggers and
        to ``filter`` for every other trigger type.
        """
        body: dict[str, Any] = {"name": trigger_name, "type": trigger_type}
        if conditions:
            body[_trigger_filter_field(trigger_type)] = conditions
        return await self._create_entity(account_id, container_id, workspace_id, "triggers", body)

    @api_call("triggers")
    async def list_triggers(
        self, account_id: str, container_id: str, workspace_id: str | None = None
    ) -> list[dict[str, Any]]:
        return await self._list_entities(
            account_id, container_id, workspace_id, "triggers", "trigger"
        )

    @api_call("trigger")
    async def get_trigger(
        self, account_id: str, container_id: str, trigger_id: str, workspace_id: str | None = None
    ) -> dict[str, Any]:
        path = await self._entity_path(account_id, container_id, workspace_id, "triggers", trigger_id)
        return await self._request("GET", path)

    @api_call("trigger")
    async def update_trigger(
        self,
        account_id: str,
        container_id: str,
        trigger_id: str,
        name: str | None = None,
        trigger_type: str | None = None,
        conditions: list[dict[str, Any]] | None = None,
        wait_for_tags: bool | None = None,
        wait_for_tags_timeout: int | None = None,
        check_validation: bool | None = None,
        workspace_id: str | None = None,
    ) -> dict[str, Any]:
        path = await self._entity_path(account_id, container_id, workspace_id, "triggers", trigger_id)
        current = await self._request("GET", path)

        body = {**current, **_compact({"name": name, "type": trigger_type})}
        if wait_for_tags is not None:
            body["waitForTags"] = _boolean_parameter(wait_for_tags)
        if wait_for_tags_timeout is not None:
            body["waitForTagsTimeout"] = {"type": "template", "value": str(wait_for_tags_timeout)}
        if check_validation is not None:
            body["checkValidation"] = _boolean_parameter(check_validation)
        if conditions is not None:
            field = _trigger_filter_field(body.get("type"))
            if conditions:
                body[field] = conditions
            else:
                body.pop(field, None)

        return await self._request("PUT", path, json_data=body)

    @api_call()
    async def delete_trigger(
        self, account_id: str, container_id: str, trigger_id: str, workspace_id: str | None = None
    ) -> None:
        path = await self._entity_path(account_id, container_id, workspace_id, "triggers", trigger_id)
        await self._request("DELETE", path)

    @api_call("trigger")
    async def revert_trigger(
        self, account_id: str, container_id: str, trigger_id: str, workspace_id: str | None = None
    ) -> dict[str, Any]:
        path = await self._entity_path(account_id, container_id, workspace_id, "triggers", trigger_id)
        return await self._request("POST", f"{path}:revert")

    # ------------------------------------------------------------------
    # Variables
    # ------------------------------------------------------------------

    @api_call("variable")
    async def create_variable(
        self,
        account_id: str,
        container_id: str,
        variable_name: str,
        variable_type: str,
        value: str | None = None,
        workspace_id: str | None = None,
    ) -> dict[str, Any]:
        """Create a variable.

        The value is stored under the parameter key the variable type expects:
        ``name`` for Data Layer (v), ``javascript`` for Custom JavaScript (jsm),
        ``value`` otherwise.
        """
        body: dict[str, Any] = {"name": variable_name, "type": variable_type}
        if value:
            body["parameter"] = [
                {"key": variable_parameter_key(variable_type), "value": value, "type": "template"}
            ]
        return await self._create_entity(account_id, container_id, workspace_id, "variables", body)

    @api_call("variables")
    async def list_variables(
        self, account_id: str, container_id: str, workspace_id: str | None = None
    ) -> list[dict[str, Any]]:
        return await self._list_entities(
            account_id, container_id, workspace_id, "variables", "variable"
        )

    @api_call("variable")
    async def get_variable(
        self, account_id: str, container_id: str, variable_id: str, workspace_id: str | None = None
    ) -> dict[str, Any]:
        path = await self._entity_path(
            account_id, container_id, workspace_id, "variables", variable_id
        )
        return await self._request("GET", path)

    @api_call("variable")
    async def update_variable(
        self,
        account_id: str,
        container_id: str,
        variable_id: str,
        name: str | None = None,
        variable_type: str | None = None,
        value: str | None = None,
        workspace_id: str | None = None,
    ) -> dict[str, Any]:
        """Update a variable. An empty ``value`` clears its parameters."""
        path = await self._entity_path(
            account_id, container_id, workspace_id, "variables", variable_id
        )
        current = await self._request("GET", path)

        body = {**current, **_compact({"name": name, "type": variable_type})}
        if value is not None:
            if value:
                key = variable_parameter_key(body.get("type"))
                body["parameter"] = [{"key": key, "value": value, "type": "template"}]
            else:
                body.pop("parameter", None)

        return await self._request("PUT", path, json_data=body)

    @api_call()
    async def delete_variable(
        self, account_id: str, container_id: str, variable_id: str, workspace_id: str | None = None
    ) -> None:
        path = await self._entity_path(
            account_id, container_id, workspace_id, "variables", variable_id
        )
        await self._request("DELETE", path)

    @api_call("variable")
    async def revert_variable(
        self, account_id: str, container_id: str, variable_id: str, workspace_id: str | None = None
    ) -> dict[str, Any]:
        path = await self._entity_path(
            account_id, container_id, workspace_id, "variables", variable_id
        )
        return await self._request("POST", f"{path}:revert")

    # ------------------------------------------------------------------
    # Folders
    # ------------------------------------------------------------------

    @api_call("folders")
    async def list_folders(
        self, account_id: str, container_id: str, workspace_id: str | None = None
    ) -> list[dict[str, Any]]:
        return await self._list_entities(account_id, container_id, workspace_id, "folders", "folder")

    @api_call("folder")
    async def get_folder(
        self, account_id: str, container_id: str, folder_id: str, workspace_id: str | None = None
    ) -> dict[str, Any]:
        path = await self._entity_path(account_id, container_id, workspace_id, "folders", folder_id)
        return await self._request("GET", path)

    @api_call("folder")
    async def create_folder(
        self,
        account_id: str,
        container_id: str,
        name: str,
        notes: str | None = None,
        workspace_id: str | None = None,
    ) -> dict[str, Any]:
        return await self._create_entity(
            account_id, container_id, workspace_id, "folders", _compact({"name": name, "notes": notes})
        )

    @api_call("folder")
    async def update_folder(
        self,
        account_id: str,
        container_id: str,
        folder_id: str,
        name: str | None = None,
        notes: str | None = None,
        workspace_id: str | None = None,
    ) -> dict[str, Any]:
        path = await self._entity_path(account_id, container_id, workspace_id, "folders", folder_id)
        return await self._read_merge_write(path, {"name": name, "notes": notes})

    @api_call()
    async def delete_folder(
        self, account_id: str, container_id: str, folder_id: str, workspace_id: str | None = None
    ) -> None:
        path = await self._entity_path(account_id, container_id, workspace_id, "folders", folder_id)
        await self._request("DELETE", path)

    @api_call("folder")
    async def revert_folder(
        self, account_id: str, container_id: str, folder_id: str, workspace_id: str | None = None
    ) -> dict[str, Any]:
        path = await self._entity_path(account_id, container_id, workspace_id, "folders", folder_id)
        return await self._request("POST", f"{path}:revert")

    @api_call()
    async def move_entities_to_folder(
        self,
        account_id: str,
        container_id: str,
        folder_id: str,
        tag_ids: list[str] | None = None,
        trigger_ids: list[str] | None = None,
        variable_ids: list[str] | None = None,
        workspace_id: str | None = None,
    ) -> None:
        """Move tags, triggers and variables into a folder."""
        if not (tag_ids or trigger_ids or variable_ids):
            raise ValueError("At least one of tag_ids, trigger_ids or variable_ids is required")
        path = await self._entity_path(account_id, container_id, workspace_id, "folders", folder_id)
        await self._request(
            "POST",
            f"{path}:move_entities_to_folder",
            params={
                "tagId": tag_ids or None,
                "triggerId": trigger_ids or None,
                "variableId": variable_ids or None,
            },
            json_data={"folderId": folder_id},
        )

    @api_call("entities")
    async def get_folder_entities(
        self, account_id: str, container_id: str, folder_id: str, workspace_id: str | None = None
    ) -> dict[str, Any]:
        """List the tags, triggers and variables inside a folder."""
        path = await self._entity_path(account_id, container_id, workspace_id, "folders", folder_id)
        return await self._request("POST", f"{path}:entities")

    # ------------------------------------------------------------------
    # Built-in variables
    # ------------------------------------------------------------------

    @api_call("builtInVariables")
    async def list_built_in_variables(
        self, account_id: str, container_id: str, workspace_id: str | None = None
    ) -> list[dict[str, Any]]:
        return await self._list_entities(
            account_id, container_id, workspace_id, "built_in_variables", "builtInVariable"
        )

    @api_call("builtInVariables")
    async def create_built_in_variables(
        self,
        account_id: str,
        container_id: str,
        types: list[str],
        workspace_id: str | None = None,
    ) -> list[dict[str, Any]]:
        """Enable built-in variables, e.g. ``["pageUrl", "clickElement"]``."""
        path = await self._workspace(account_id, container_id, workspace_id)
        response = await self._request(
            "POST", f"{path}/built_in_variables", params={"type": types}
        )
        enabled: list[dict[str, Any]] = response.get("builtInVariable") or []
        return enabled

    @api_call()
    async def delete_built_in_variables(
        self,
        account_id: str,
        container_id: str,
        types: list[str],
        workspace_id: str | None = None,
    ) -> None:
        """Disable built-in variables."""
        path = await self._workspace(account_id, container_id, workspace_id)
        await self._request("DELETE", f"{path}/built_in_variables", params={"type": types})

    @api_call("enabled")
    async def revert_built_in_variable(
        self,
        account_id: str,
        container_id: str,
        built_in_type: str,
        workspace_id: str | None = None,
    ) -> bool | None:
        """Revert a built-in variable to its state in the latest published version."""
        path = await self._workspace(account_id, container_id, workspace_id)
        response = await self._request(
            "POST", f"{path}/built_in_variables:revert", params={"type": built_in_type}
        )
        enabled: bool | None = response.get("enabled")
        return enabled

    # ------------------------------------------------------------------
    # Clients (server-side containers)
    # ------------------------------------------------------------------

    @api_call("clients")
    async def list_clients(
        self, account_id: str, container_id: str, workspace_id: str | None = None
    ) -> list[dict[str, Any]]:
        return await self._list_entities(account_id, container_id, workspace_id, "clients", "client")

    @api_call("client")
    async def get_client(
        self, account_id: str, container_id: str, client_id: str, workspace_id: str | None = None
    ) -> dict[str, Any]:
        path = await self._entity_path(account_id, container_id, workspace_id, "clients", client_id)
        return await self._request("GET", path)

    @api_call("client")
    async def create_client(
        self,
        account_id: str,
        container_id: str,
        name: str,
        client_type: str,
        parameters: list[dict[str, Any]] | None = None,
        priority: int | None = None,
        workspace_id: str | None = None,
    ) -> dict[str, Any]:
        body: dict[str, Any] = _compact({"name": name, "type": client_type, "priority": priority})
        if parameters:
            body["parameter"] = normalize_parameters(parameters)
        return await self._create_entity(account_id, container_id, workspace_id, "clients", body)

    @api_call("client")
    async def update_client(
        self,
        account_id: str,
        container_id: str,
        client_id: str,
        name: str | None = None,
        parameters: list[dict[str, Any]] | None = None,
        priority: int | None = None,
        workspace_id: str | None = None,
    ) -> dict[str, Any]:
        path = await self._entity_path(account_id, container_id, workspace_id, "clients", client_id)
        return await self._read_merge_write(
            path,
            {
                "name": name,
                "parameter": normalize_parameters(parameters) if parameters is not None else None,
                "priority": priority,
            },
        )

    @api_call()
    async def delete_client(
        self, account_id: str, container_id: str, client_id: str, workspace_id: str | None = None
    ) -> None:
        path = await self._entity_path(account_id, container_id, workspace_id, "clients", client_id)
        await self._request("DELETE", path)

    @api_call("client")
    async def revert_client(
        self, account_id: str, container_id: str, client_id: str, workspace_id: str | None = None
    ) -> dict[str, Any]:
        path = await self._entity_path(account_id, container_id, workspace_id, "clients", client_id)
        return await self._request("POST", f"{path}:revert")

    # ------------------------------------------------------------------
    # Google tag configs
    # ------------------------------------------------------------------

    @api_call("gtagConfigs")
    async def list_gtag_configs(
        self, account_id: str, container_id: str, workspace_id: str | None = None
    ) -> list[dict[str, Any]]:
        return await self._list_entities(
            account_id, container_id, workspace_id, "gtag_config", "gtagConfig"
        )

    @api_call("gtagConfig")
    async def get_gtag_config(
        self, account_id: str, container_id: str, config_id: str, workspace_id: str | None = None
    ) -> dict[str, Any]:
        path = await self._entity_path(account_id, container_id, workspace_id, "gtag_config", config_id)
        return await self._request("GET", path)

    @api_call("gtagConfig")
    async def create_gtag_config(
        self,
        account_id: str,
        container_id: str,
        tag_id: str | None = None,
        parameters: list[dict[str, Any]] | None = None,
        config_type: str = "googtag",
        workspace_id: str | None = None,
    ) -> dict[str, Any]:
        """Create a Google tag config.

        ``tag_id`` (e.g. G-XXXXXXXXXX) is sent as the ``tagId`` parameter.
        """
        parameter = normalize_parameters(parameters or [])
        if tag_id:
            parameter.insert(0, {"key": "tagId", "value": tag_id, "type": "template"})
        body: dict[str, Any] = {"type": config_type}
        if parameter:
            body["parameter"] = parameter
        return await self._create_entity(account_id, container_id, workspace_id, "gtag_config", body)

    @api_call("gtagConfig")
    async def update_gtag_config(
        self,
        account_id: str,
        container_id: str,
        config_id: str,
        tag_id: str | None = None,
        parameters: list[dict[str, Any]] | None = None,
        workspace_id: str | None = None,
    ) -> dict[str, Any]:
        path = await self._entity_path(account_id, container_id, workspace_id, "gtag_config", config_id)
        current = await self._request("GET", path)

        body = dict(current)
        if parameters is not None:
            body["parameter"] = normalize_parameters(parameters)
        if tag_id is not None:
            others = [p for p in body.get("parameter") or [] if p.get("key") != "tagId"]
            body["parameter"] = [{"key": "tagId", "value": tag_id, "type": "template"}, *others]

        return await self._request("PUT", path, json_data=body)

    @api_call()
    async def delete_gtag_config(
        self, account_id: str, container_id: str, config_id: str, workspace_id: str | None = None
    ) -> None:
        path = await self._entity_path(account_id, container_id, workspace_id, "gtag_config", config_id)
        await self._request("DELETE", path)

    @api_call("gtagConfig")
    async def revert_gtag_config(
        self, account_id: str, container_id: str, config_id: str, workspace_id: str | None = None
    ) -> dict[str, Any]:
        path = await self._entity_path(account_id, container_id, workspace_id, "gtag_config", config_id)
        return await self._request("POST", f"{path}:revert")

    # ------------------------------------------------------------------
    # Custom templates
    # ------------------------------------------------------------------

    @api_call("templates")
    async def list_templates(
        self, account_id: str, container_id: str, workspace_id: str | None = None
    ) -> list[dict[str, Any]]:
        return await self._list_entities(
            account_id, container_id, workspace_id, "templates", "template"
        )

    @api_call("template")
    async def get_template(
        self, account_id: str, container_id: str, template_id: str, workspace_id: str | None = None
    ) -> dict[str, Any]:
        path = await self._entity_path(account_id, container_id, workspace_id, "templates", template_id)
        return await self._request("GET", path)

    @api_call("template")
    async def create_template(
        self,
        account_id: str,
        container_id: str,
        name: str,
        template_data: str,
        workspace_id: str | None = None,
    ) -> dict[str, Any]:
        return await self._create_entity(
            account_id,
            container_id,
            workspace_id,
            "templates",
            {"name": name, "templateData": template_data},
        )

    @api_call("template")
    async def update_template(
        self,
        account_id: str,
        container_id: str,
        template_id: str,
        name: str | None = None,
        template_data: str | None = None,
        workspace_id: str | None = None,
    ) -> dict[str, Any]:
        path = await self._entity_path(account_id, container_id, workspace_id, "templates", template_id)
        return await self._read_merge_write(path, {"name": name, "templateData": template_data})

    @api_call()
    async def delete_template(
        self, account_id: str, container_id: str, template_id: str, workspace_id: str | None = None
    ) -> None:
        path = await self._entity_path(account_id, container_id, workspace_id, "templates", template_id)
        await self._request("DELETE", path)

    @api_call("template")
    async def revert_template(
        self, account_id: str, container_id: str, template_id: str, workspace_id: str | None = None
    ) -> dict[str, Any]:
        path = await self._entity_path(account_id, container_id, workspace_id, "templates", template_id)
        return await self._request("POST", f"{path}:revert")

    @api_call("template")
    async def import_template_from_gallery(
        self,
        account_id: str,
        container_id: str,
        gallery_reference: dict[str, Any],
        acknowledge_permissions: bool | None = None,
        workspace_id: str | None = None,
    ) -> dict[str, Any]:
        """Import a template from the Community Template Gallery.

        Args:
            gallery_reference: ``{"owner", "repository", "signature"}``; the
                signature is the commit SHA of the gallery template.
            acknowledge_permissions: Accept the template's permissions.
        """
        path = await self._workspace(account_id, container_id, workspace_id)
        return await self._request(
            "POST",
            f"{path}/templates:import_from_gallery",
            params={
                "galleryOwner": gallery_reference.get("owner"),
                "galleryRepository": gallery_reference.get("repository"),
                "gallerySha": gallery_reference.get("signature"),
                "acknowledgePermissions": acknowledge_permissions,
            },
        )

    # ------------------------------------------------------------------
    # Transformations (server-side containers)
    # ------------------------------------------------------------------

    @api_call("transformations")
    async def list_transformations(
        self, account_id: str, container_id: str, workspace_id: str | None = None
    ) -> list[dict[str, Any]]:
        return await self._list_entities(
            account_id, container_id, workspace_id, "transformations", "transformation"
        )

    @api_call("transformation")
    async def get_transformation(
        self,
        account_id: str,
        container_id: str,
        transformation_id: str,
        workspace_id: str | None = None,
    ) -> dict[str, Any]:
        path = await self._entity_path(
            account_id, container_id, workspace_id, "transformations", transformation_id
        )
        return await self._request("GET", path)

    @api_call("transformation")
    async def create_transformation(
        self,
        account_id: str,
        container_id: str,
        name: str,
        transformation_type: str,
        parameters: list[dict[str, Any]] | None = None,
        workspace_id: str | None = None,
    ) -> dict[str, Any]:
        body: dict[str, Any] = {"name": name, "type": transformation_type}
        if parameters:
            body["parameter"] = normalize_parameters(parameters)
        return await self._create_entity(
            account_id, container_id, workspace_id, "transformations", body
        )

    @api_call("transformation")
    async def update_transformation(
        self,
        account_id: str,
        container_id: str,
        transformation_id: str,
        name: str | None = None,
        parameters: list[dict[str, Any]] | None = None,
        workspace_id: str | None = None,
    ) -> dict[str, Any]:
        path = await self._entity_path(
            account_id, container_id, workspace_id, "transformations", transformation_id
        )
        return await self._read_merge_write(
            path,
            {
                "name": name,
                "parameter": normalize_parameters(parameters) if parameters is not None else None,
            },
        )

    @api_call()
    async def delete_transformation(
        self,
        account_id: str,
        container_id: str,
        transformation_id: str,
        workspace_id: str | None = None,
    ) -> None:
        path = await self._entity_path(
            account_id, container_id, workspace_id, "transformations", transformation_id
        )
        await self._request("DELETE", path)

    @api_call("transformation")
    async def revert_transformation(
        self,
        account_id: str,
        container_id: str,
        transformation_id: str,
        workspace_id: str | None = None,
    ) -> dict[str, Any]:
        path = await self._entity_path(
            account_id, container_id, workspace_id, "transformations", transformation_id
        )
        return await self._request("POST", f"{path}:revert")

    # ------------------------------------------------------------------
    # Zones
    # ------------------------------------------------------------------

    @api_call("zones")
    async def list_zones(
        self, account_id: str, container_id: str, workspace_id: str | None = None
    ) -> list[dict[str, Any]]:
        return await self._list_entities(account_id, container_id, workspace_id, "zones", "zone")

    @api_call("zone")
    async def get_zone(
        self, account_id: str, container_id: str, zone_id: str, workspace_id: str | None = None
    ) -> dict[str, Any]:
        path = await self._entity_path(account_id, container_id, workspace_id, "zones", zone_id)
        return await self._request("GET", path)

    @api_call("zone")
    async def create_zone(
        self,
        account_id: str,
        container_id: str,
        name: str,
        boundary: dict[str, Any] | None = None,
        child_container: list[dict[str, Any]] | None = None,
        type_restriction: dict[str, Any] | None = None,
        notes: str | None = None,
        workspace_id: str | None = None,
    ) -> dict[str, Any]:
        body = _compact(
            {
                "name": name,
                "boundary": boundary,
                "childContainer": child_container,
                "typeRestriction": type_restriction,
                "notes": notes,
            }
        )
        return await self._create_entity(account_id, container_id, workspace_id, "zones", body)

    @api_call("zone")
    async def update_zone(
        self,
        account_id: str,
        container_id: str,
        zone_id: str,
        name: str | None = None,
        boundary: dict[str, Any] | None = None,
        child_container: list[dict[str, Any]] | None = None,
        type_restriction: dict[str, Any] | None = None,
        notes: str | None = None,
        workspace_id: str | None = None,
    ) -> dict[str, Any]:
        path = await self._entity_path(account_id, container_id, workspace_id, "zones", zone_id)
        return await self._read_merge_write(
            path,
            {
                "name": name,
                "boundary": boundary,
                "childContainer": child_container,
                "typeRestriction": type_restriction,
                "notes": notes,
            },
        )

    @api_call()
    async def delete_zone(
        self, account_id: str, container_id: str, zone_id: str, workspace_id: str | None = None
    ) -> None:
        path = await self._entity_path(account_id, container_id, workspace_id, "zones", zone_id)
        await self._request("DELETE", path)

    @api_call("zone")
    async def revert_zone(
        self, account_id: str, container_id: str, zone_id: str, workspace_id: str | None = None
    ) -> dict[str, Any]:
        path = await self._entity_path(account_id, container_id, workspace_id, "zones", zone_id)
        return await self._request("POST", f"{path}:revert")
