"""HTTP client for the Syncthing REST API."""

import logging
import os
from typing import Any, Callable, Iterable, Optional, TypeVar

import httpx

from .errors import ConnectionError, DecodeError, HttpError, SyncthingError, UriError
from .events import Event, EventType, RawEvent
from .models import (
    Config,
    Connections,
    DebugInfo,
    Device,
    Discovery,
    ErrorLog,
    Folder,
    Gui,
    Ignores,
    Ldap,
    Log,
    Options,
    Ping,
    UpgradeInfo,
    Version,
)
from .routes import (
    CONFIG_DEFAULTS_DEVICE_PATH,
    CONFIG_DEFAULTS_FOLDER_PATH,
    CONFIG_DEFAULTS_IGNORES_PATH,
    CONFIG_DEVICES_PATH,
    CONFIG_FOLDERS_PATH,
    CONFIG_GUI_PATH,
    CONFIG_LDAP_PATH,
    CONFIG_OPTIONS_PATH,
    CONFIG_PATH,
    CONFIG_RESTART_REQUIRED_PATH,
    SYSTEM_CONNECTIONS_PATH,
    SYSTEM_DEBUG_PATH,
    SYSTEM_DISCOVERY_PATH,
    SYSTEM_ERROR_PATH,
    SYSTEM_LOG_PATH,
    SYSTEM_PING_PATH,
    SYSTEM_UPGRADE_PATH,
    SYSTEM_VERSION_PATH,
    events_path,
    item_path,
)
from .stream import EventStream, SyncEventStream

logger = logging.getLogger(__name__)

API_KEY_HEADER = "X-API-Key"
DEFAULT_BASE_URL = "http://127.0.0.1:8384"
# The events endpoint long-polls for up to 60 seconds before answering.
DEFAULT_TIMEOUT = 90.0

API_KEY_ENV = "SYNCTHING_API_KEY"
BASE_URL_ENV = "SYNCTHING_URL"

T = TypeVar("T")


def _validate_base_url(base_url: str) -> str:
    base_url = base_url.rstrip("/")
    try:
        url = httpx.URL(base_url)
    except httpx.InvalidURL as e:
        raise UriError(f"{base_url!r}: {e}") from e
    if url.scheme not in ("http", "https") or not url.host:
        raise UriError(f"{base_url!r} is not an http(s) address")
    if url.path not in ("", "/") or url.query:
        raise UriError(f"{base_url!r} must not contain a path or query")
    return base_url


def _check_status(response: httpx.Response) -> None:
    if not 200 <= response.status_code <= 299:
        raise HttpError(response.status_code, response.text)


def _decode(response: httpx.Response, parse: Callable[[Any], T]) -> T:
    try:
        data = response.json()
    except ValueError as e:
        raise DecodeError(f"response is not valid JSON: {e}") from e
    try:
        return parse(data)
    except DecodeError:
        raise
    except (KeyError, TypeError, ValueError, AttributeError) as e:
        raise DecodeError(f"unexpected response shape: {e!r}") from e


def _parse_event_array(data: Any) -> list[Any]:
    if not isinstance(data, list):
        raise DecodeError("event list must be a JSON array")
    return data


def _parse_list(record: Callable[[Any], T]) -> Callable[[Any], list[T]]:
    def parse(data: Any) -> list[T]:
        if not isinstance(data, list):
            raise DecodeError("expected a JSON array")
        return [record(item) for item in data]

    return parse


def _require_id(record_id: Optional[str], what: str) -> str:
    if not record_id:
        raise UriError(f"{what} has no id")
    return record_id


class _BaseClient:
    """Settings and helpers shared by the sync and async clients."""

    def __init__(self, api_key: str, base_url: str = DEFAULT_BASE_URL):
        self.api_key = api_key
        self.base_url = _validate_base_url(base_url)

    @classmethod
    def from_env(cls, **kwargs):
        """Create a client from ``SYNCTHING_API_KEY`` and, if set, ``SYNCTHING_URL``."""
        api_key = os.environ.get(API_KEY_ENV)
        if not api_key:
            raise SyncthingError(f"{API_KEY_ENV} is not set")
        base_url = os.environ.get(BASE_URL_ENV, DEFAULT_BASE_URL)
        return cls(api_key, base_url, **kwargs)

    def _headers(self) -> dict[str, str]:
        return {API_KEY_HEADER: self.api_key}

    def _url(self, path_and_query: str) -> str:
        if not path_and_query.startswith("/"):
            raise UriError(f"{path_and_query!r} must start with '/'")
        return f"{self.base_url}{path_and_query}"


class SyncthingClient(_BaseClient):
    """HTTP client for a Syncthing instance.

    Example:
        >>> client = SyncthingClient("my-api-key")
        >>> version = client.get_system_version()
        >>> print(f"syncthing {version.version} is running on {version.os}")
    """

    def __init__(
        self,
        api_key: str,
        base_url: str = DEFAULT_BASE_URL,
        *,
        timeout: float = DEFAULT_TIMEOUT,
        http_client: Optional[httpx.Client] = None,
    ):
        """Create a new Syncthing client.

        Args:
            api_key: API key, sent as the ``X-API-Key`` header.
            base_url: Scheme and authority of the GUI/REST listener.
            timeout: Request timeout in seconds. Event fetches long-poll for
                up to a minute, so keep this above 60 when subscribing.
            http_client: httpx client to send requests with. The Syncthing
                client takes ownership of it and closes it in :meth:`close`.
        """
        super().__init__(api_key, base_url)
        self._client = http_client or httpx.Client(timeout=timeout)

    def __enter__(self):
        return self

    def __exit__(self, *args):
        self.close()

    def close(self):
        """Close the HTTP client."""
        self._client.close()

    def _request(
        self,
        method: str,
        path_and_query: str,
        *,
        json: Optional[Any] = None,
    ) -> httpx.Response:
        """Make an HTTP request and fail on a non-2xx status."""
        url = self._url(path_and_query)
        logger.debug("%s %s", method, path_and_query)
        try:
            response = self._client.request(
                method,
                url,
                json=json,
                headers=self._headers(),
            )
        except httpx.InvalidURL as e:
            raise UriError(str(e)) from e
        except httpx.TimeoutException as e:
            raise ConnectionError(f"Request timed out: {e}") from e
        except httpx.TransportError as e:
            raise ConnectionError(str(e)) from e
        except httpx.RequestError as e:
            raise ConnectionError(f"Request failed: {e}") from e
        _check_status(response)
        return response

    def _fetch(self, method: str, path_and_query: str, parse: Callable[[Any], T]) -> T:
        return _decode(self._request(method, path_and_query), parse)

    def _send(self, method: str, path_and_query: str, body: Any) -> None:
        self._request(method, path_and_query, json=body)

    def _delete(self, path_and_query: str) -> None:
        self._request("DELETE", path_and_query)

    # =========================================================================
    # Events
    # =========================================================================

    def get_event_envelopes(
        self,
        since: Optional[int] = None,
        limit: Optional[int] = None,
        events: Iterable[EventType] = (),
    ) -> list[Any]:
        """Fetch the events as plain JSON objects.

        Only the outer array is checked. The event streams validate each
        envelope on its own, so one malformed record does not fail the batch.

        Raises:
            ConnectionError: If unable to connect to the server.
            HttpError: If the server returns an error.
            DecodeError: If the response is not a JSON array.
        """
        return self._fetch("GET", events_path(since, limit, events), _parse_event_array)

    def get_raw_events(
        self,
        since: Optional[int] = None,
        limit: Optional[int] = None,
        events: Iterable[EventType] = (),
    ) -> list[RawEvent]:
        """Fetch event envelopes without decoding their payloads.

        Raises:
            ConnectionError: If unable to connect to the server.
            HttpError: If the server returns an error.
            DecodeError: If the response is not a list of event envelopes.
        """
        return [RawEvent.from_dict(item) for item in self.get_event_envelopes(since, limit, events)]

    def get_events(
        self,
        since: Optional[int] = None,
        limit: Optional[int] = None,
        events: Iterable[EventType] = (),
    ) -> list[Event]:
        """Fetch the events newer than ``since``.

        The daemon holds the request open until at least one matching event
        exists, so this call may block for up to a minute.

        Args:
            since: Only return events with a larger id.
            limit: Only return the newest ``limit`` events.
            events: Only return events of these types. Empty means all.

        Returns:
            The events in ascending id order. Payloads are decoded when
            :attr:`Event.data` is first read.
        """
        return [Event.from_raw(raw) for raw in self.get_raw_events(since, limit, events)]

    def get_all_events(
        self, since: Optional[int] = None, limit: Optional[int] = None
    ) -> list[Event]:
        """Fetch events of every type newer than ``since``."""
        return self.get_events(since, limit)

    def subscribe_to(
        self,
        events: Iterable[EventType],
        *,
        since: Optional[int] = None,
        retry_delay: float = 0.0,
        max_retries: Optional[int] = None,
    ) -> SyncEventStream:
        """Subscribe to events of the given types.

        The returned stream takes over this client; do not use the client
        for anything else afterwards. See :class:`SyncEventStream`.
        """
        return SyncEventStream(
            self, events, since=since, retry_delay=retry_delay, max_retries=max_retries
        )

    def subscribe_to_all(self, **kwargs) -> SyncEventStream:
        """Subscribe to events of every type."""
        return self.subscribe_to((), **kwargs)

    # =========================================================================
    # System
    # =========================================================================

    def get_system_connections(self) -> Connections:
        return self._fetch("GET", SYSTEM_CONNECTIONS_PATH, Connections.from_dict)

    def get_system_debug(self) -> DebugInfo:
        return self._fetch("GET", SYSTEM_DEBUG_PATH, DebugInfo.from_dict)

    def get_system_discovery(self) -> Discovery:
        return self._fetch("GET", SYSTEM_DISCOVERY_PATH, Discovery.from_dict)

    def get_system_log(self) -> Log:
        return self._fetch("GET", SYSTEM_LOG_PATH, Log.from_dict)

    def get_system_error(self) -> ErrorLog:
        return self._fetch("GET", SYSTEM_ERROR_PATH, ErrorLog.from_dict)

    def get_system_ping(self) -> Ping:
        """Check that the daemon is up and the API key is accepted.

        Raises:
            ConnectionError: If unable to connect to the server.
            HttpError: If the key is rejected (403) or the server fails.
        """
        return self._fetch("GET", SYSTEM_PING_PATH, Ping.from_dict)

    def get_system_upgrade(self) -> UpgradeInfo:
        return self._fetch("GET", SYSTEM_UPGRADE_PATH, UpgradeInfo.from_dict)

    def get_system_version(self) -> Version:
        return self._fetch("GET", SYSTEM_VERSION_PATH, Version.from_dict)

    # =========================================================================
    # Config
    # =========================================================================

    def get_config(self) -> Config:
        return self._fetch("GET", CONFIG_PATH, Config.from_dict)

    def get_config_version(self) -> int:
        """Return only the version number of the config schema."""
        return self._fetch("GET", CONFIG_PATH, lambda data: data["version"])

    def put_config(self, config: Config) -> None:
        """Replace the whole configuration."""
        self._send("PUT", CONFIG_PATH, config.to_dict())

    def is_restart_required(self) -> bool:
        """Whether the daemon must restart for the saved config to take effect."""
        return self._fetch(
            "GET", CONFIG_RESTART_REQUIRED_PATH, lambda data: data["requiresRestart"]
        )

    # config/folders

    def get_config_folders(self) -> list[Folder]:
        return self._fetch("GET", CONFIG_FOLDERS_PATH, _parse_list(Folder.from_dict))

    def put_config_folders(self, folders: list[Folder]) -> None:
        """Replace the complete list of folders."""
        self._send("PUT", CONFIG_FOLDERS_PATH, [f.to_dict() for f in folders])

    def post_config_folders(self, folder: Folder) -> None:
        """Add a folder, or replace the folder with the same id."""
        self._send("POST", CONFIG_FOLDERS_PATH, folder.to_dict())

    def get_config_folder(self, folder_id: str) -> Folder:
        return self._fetch(
            "GET", item_path(CONFIG_FOLDERS_PATH, folder_id), Folder.from_dict
        )

    def put_config_folder(self, folder: Folder) -> None:
        folder_id = _require_id(folder.id, "folder")
        self._send("PUT", item_path(CONFIG_FOLDERS_PATH, folder_id), folder.to_dict())

    def patch_config_folder(self, folder_id: str, patch: Folder) -> None:
        """Change only the fields that are set on ``patch``."""
        self._send("PATCH", item_path(CONFIG_FOLDERS_PATH, folder_id), patch.to_dict())

    def delete_config_folder(self, folder_id: str) -> None:
        self._delete(item_path(CONFIG_FOLDERS_PATH, folder_id))

    # config/devices

    def get_config_devices(self) -> list[Device]:
        return self._fetch("GET", CONFIG_DEVICES_PATH, _parse_list(Device.from_dict))

    def put_config_devices(self, devices: list[Device]) -> None:
        """Replace the complete list of devices."""
        self._send("PUT", CONFIG_DEVICES_PATH, [d.to_dict() for d in devices])

    def post_config_devices(self, device: Device) -> None:
        """Add a device, or replace the device with the same id."""
        self._send("POST", CONFIG_DEVICES_PATH, device.to_dict())

    def get_config_device(self, device_id: str) -> Device:
        return self._fetch(
            "GET", item_path(CONFIG_DEVICES_PATH, device_id), Device.from_dict
        )

    def put_config_device(self, device: Device) -> None:
        device_id = _require_id(device.device_id, "device")
        self._send("PUT", item_path(CONFIG_DEVICES_PATH, device_id), device.to_dict())

    def patch_config_device(self, device_id: str, patch: Device) -> None:
        """Change only the fields that are set on ``patch``."""
        self._send("PATCH", item_path(CONFIG_DEVICES_PATH, device_id), patch.to_dict())

    def delete_config_device(self, device_id: str) -> None:
        self._delete(item_path(CONFIG_DEVICES_PATH, device_id))

    # config/defaults

    def get_config_defaults_folder(self) -> Folder:
        return self._fetch("GET", CONFIG_DEFAULTS_FOLDER_PATH, Folder.from_dict)

    def put_config_defaults_folder(self, folder: Folder) -> None:
        self._send("PUT", CONFIG_DEFAULTS_FOLDER_PATH, folder.to_dict())

    def get_config_defaults_device(self) -> Device:
        return self._fetch("GET", CONFIG_DEFAULTS_DEVICE_PATH, Device.from_dict)

    def put_config_defaults_device(self, device: Device) -> None:
        self._send("PUT", CONFIG_DEFAULTS_DEVICE_PATH, device.to_dict())

    def get_config_defaults_ignores(self) -> Ignores:
        return self._fetch("GET", CONFIG_DEFAULTS_IGNORES_PATH, Ignores.from_dict)

    def put_config_defaults_ignores(self, ignores: Ignores) -> None:
        self._send("PUT", CONFIG_DEFAULTS_IGNORES_PATH, ignores.to_dict())

    # config/options, config/ldap, config/gui

    def get_config_options(self) -> Options:
        return self._fetch("GET", CONFIG_OPTIONS_PATH, Options.from_dict)

    def put_config_options(self, options: Options) -> None:
        self._send("PUT", CONFIG_OPTIONS_PATH, options.to_dict())

    def patch_config_options(self, patch: Options) -> None:
        self._send("PATCH", CONFIG_OPTIONS_PATH, patch.to_dict())

    def get_config_ldap(self) -> Ldap:
        return self._fetch("GET", CONFIG_LDAP_PATH, Ldap.from_dict)

    def put_config_ldap(self, ldap: Ldap) -> None:
        self._send("PUT", CONFIG_LDAP_PATH, ldap.to_dict())

    def patch_config_ldap(self, patch: Ldap) -> None:
        self._send("PATCH", CONFIG_LDAP_PATH, patch.to_dict())

    def get_config_gui(self) -> Gui:
        return self._fetch("GET", CONFIG_GUI_PATH, Gui.from_dict)

    def put_config_gui(self, gui: Gui) -> None:
        self._send("PUT", CONFIG_GUI_PATH, gui.to_dict())

    def patch_config_gui(self, patch: Gui) -> None:
        self._send("PATCH", CONFIG_GUI_PATH, patch.to_dict())


class AsyncSyncthingClient(_BaseClient):
    """Async HTTP client for a Syncthing instance.

    Example:
        >>> async with AsyncSyncthingClient("my-api-key") as client:
        ...     version = await client.get_system_version()
    """

    def __init__(
        self,
        api_key: str,
        base_url: str = DEFAULT_BASE_URL,
        *,
        timeout: float = DEFAULT_TIMEOUT,
        http_client: Optional[httpx.AsyncClient] = None,
    ):
        super().__init__(api_key, base_url)
        self._client = http_client or httpx.AsyncClient(timeout=timeout)

    async def __aenter__(self):
        return self

    async def __aexit__(self, *args):
        await self.close()

    async def close(self):
        await self._client.aclose()

    async def _request(
        self,
        method: str,
        path_and_query: str,
        *,
        json: Optional[Any] = None,
    ) -> httpx.Response:
        url = self._url(path_and_query)
        logger.debug("%s %s", method, path_and_query)
        try:
            response = await self._client.request(
                method,
                url,
                json=json,
                headers=self._headers(),
            )
        except httpx.InvalidURL as e:
            raise UriError(str(e)) from e
        except httpx.TimeoutException as e:
            raise ConnectionError(f"Request timed out: {e}") from e
        except httpx.TransportError as e:
            raise ConnectionError(str(e)) from e
        except httpx.RequestError as e:
            raise ConnectionError(f"Request failed: {e}") from e
        _check_status(response)
        return response

    async def _fetch(self, method: str, path_and_query: str, parse: Callable[[Any], T]) -> T:
        return _decode(await self._request(method, path_and_query), parse)

    async def _send(self, method: str, path_and_query: str, body: Any) -> None:
        await self._request(method, path_and_query, json=body)

    async def _delete(self, path_and_query: str) -> None:
        await self._request("DELETE", path_and_query)

    # =========================================================================
    # Events
    # =========================================================================

    async def get_event_envelopes(
        self,
        since: Optional[int] = None,
        limit: Optional[int] = None,
        events: Iterable[EventType] = (),
    ) -> list[Any]:
        return await self._fetch("GET", events_path(since, limit, events), _parse_event_array)

    async def get_raw_events(
        self,
        since: Optional[int] = None,
        limit: Optional[int] = None,
        events: Iterable[EventType] = (),
    ) -> list[RawEvent]:
        envelopes = await self.get_event_envelopes(since, limit, events)
        return [RawEvent.from_dict(item) for item in envelopes]

    async def get_events(
        self,
        since: Optional[int] = None,
        limit: Optional[int] = None,
        events: Iterable[EventType] = (),
    ) -> list[Event]:
        raw_events = await self.get_raw_events(since, limit, events)
        return [Event.from_raw(raw) for raw in raw_events]

    async def get_all_events(
        self, since: Optional[int] = None, limit: Optional[int] = None
    ) -> list[Event]:
        return await self.get_events(since, limit)

    def subscribe_to(
        self,
        events: Iterable[EventType],
        *,
        since: Optional[int] = None,
        retry_delay: float = 0.0,
        max_retries: Optional[int] = None,
    ) -> EventStream:
        """Subscribe to events of the given types.

        The returned stream takes over this client. See :class:`EventStream`.
        """
        return EventStream(
            self, events, since=since, retry_delay=retry_delay, max_retries=max_retries
        )

    def subscribe_to_all(self, **kwargs) -> EventStream:
        return self.subscribe_to((), **kwargs)

    # =========================================================================
    # System
    # =========================================================================

    async def get_system_connections(self) -> Connections:
        return await self._fetch("GET", SYSTEM_CONNECTIONS_PATH, Connections.from_dict)

    async def get_system_debug(self) -> DebugInfo:
        return await self._fetch("GET", SYSTEM_DEBUG_PATH, DebugInfo.from_dict)

    async def get_system_discovery(self) -> Discovery:
        return await self._fetch("GET", SYSTEM_DISCOVERY_PATH, Discovery.from_dict)

    async def get_system_log(self) -> Log:
        return await self._fetch("GET", SYSTEM_LOG_PATH, Log.from_dict)

    async def get_system_error(self) -> ErrorLog:
        return await self._fetch("GET", SYSTEM_ERROR_PATH, ErrorLog.from_dict)

    async def get_system_ping(self) -> Ping:
        return await self._fetch("GET", SYSTEM_PING_PATH, Ping.from_dict)

    async def get_system_upgrade(self) -> UpgradeInfo:
        return await self._fetch("GET", SYSTEM_UPGRADE_PATH, UpgradeInfo.from_dict)

    async def get_system_version(self) -> Version:
        return await self._fetch("GET", SYSTEM_VERSION_PATH, Version.from_dict)

    # =========================================================================
    # Config
    # =========================================================================

    async def get_config(self) -> Config:
        return await self._fetch("GET", CONFIG_PATH, Config.from_dict)

    async def get_config_version(self) -> int:
        return await self._fetch("GET", CONFIG_PATH, lambda data: data["version"])

    async def put_config(self, config: Config) -> None:
        await self._send("PUT", CONFIG_PATH, config.to_dict())

    async def is_restart_required(self) -> bool:
        return await self._fetch(
            "GET", CONFIG_RESTART_REQUIRED_PATH, lambda data: data["requiresRestart"]
        )

    # config/folders

    async def get_config_folders(self) -> list[Folder]:
        return await self._fetch("GET", CONFIG_FOLDERS_PATH, _parse_list(Folder.from_dict))

    async def put_config_folders(self, folders: list[Folder]) -> None:
        await self._send("PUT", CONFIG_FOLDERS_PATH, [f.to_dict() for f in folders])

    async def post_config_folders(self, folder: Folder) -> None:
        await self._send("POST", CONFIG_FOLDERS_PATH, folder.to_dict())

    async def get_config_folder(self, folder_id: str) -> Folder:
        return await self._fetch(
            "GET", item_path(CONFIG_FOLDERS_PATH, folder_id), Folder.from_dict
        )

    async def put_config_folder(self, folder: Folder) -> None:
        folder_id = _require_id(folder.id, "folder")
        await self._send("PUT", item_path(CONFIG_FOLDERS_PATH, folder_id), folder.to_dict())

    async def patch_config_folder(self, folder_id: str, patch: Folder) -> None:
        await self._send("PATCH", item_path(CONFIG_FOLDERS_PATH, folder_id), patch.to_dict())

    async def delete_config_folder(self, folder_id: str) -> None:
        await self._delete(item_path(CONFIG_FOLDERS_PATH, folder_id))

    # config/devices

    async def get_config_devices(self) -> list[Device]:
        return await self._fetch("GET", CONFIG_DEVICES_PATH, _parse_list(Device.from_dict))

    async def put_config_devices(self, devices: list[Device]) -> None:
        await self._send("PUT", CONFIG_DEVICES_PATH, [d.to_dict() for d in devices])

    async def post_config_devices(self, device: Device) -> None:
        await self._send("POST", CONFIG_DEVICES_PATH, device.to_dict())

    async def get_config_device(self, device_id: str) -> Device:
        return await self._fetch(
            "GET", item_path(CONFIG_DEVICES_PATH, device_id), Device.from_dict
        )

    async def put_config_device(self, device: Device) -> None:
        device_id = _require_id(device.device_id, "device")
        await self._send("PUT", item_path(CONFIG_DEVICES_PATH, device_id), device.to_dict())

    async def patch_config_device(self, device_id: str, patch: Device) -> None:
        await self._send("PATCH", item_path(CONFIG_DEVICES_PATH, device_id), patch.to_dict())

    async def delete_config_device(self, device_id: str) -> None:
        await self._delete(item_path(CONFIG_DEVICES_PATH, device_id))

    # config/defaults

    async def get_config_defaults_folder(self) -> Folder:
        return await self._fetch("GET", CONFIG_DEFAULTS_FOLDER_PATH, Folder.from_dict)

    async def put_config_defaults_folder(self, folder: Folder) -> None:
        await self._send("PUT", CONFIG_DEFAULTS_FOLDER_PATH, folder.to_dict())

    async def get_config_defaults_device(self) -> Device:
        return await self._fetch("GET", CONFIG_DEFAULTS_DEVICE_PATH, Device.from_dict)

    async def put_config_defaults_device(self, device: Device) -> None:
        await self._send("PUT", CONFIG_DEFAULTS_DEVICE_PATH, device.to_dict())

    async def get_config_defaults_ignores(self) -> Ignores:
        return await self._fetch("GET", CONFIG_DEFAULTS_IGNORES_PATH, Ignores.from_dict)

    async def put_config_defaults_ignores(self, ignores: Ignores) -> None:
        await self._send("PUT", CONFIG_DEFAULTS_IGNORES_PATH, ignores.to_dict())

    # config/options, config/ldap, config/gui

    async def get_config_options(self) -> Options:
        return await self._fetch("GET", CONFIG_OPTIONS_PATH, Options.from_dict)

    async def put_config_options(self, options: Options) -> None:
        await self._send("PUT", CONFIG_OPTIONS_PATH, options.to_dict())

    async def patch_config_options(self, patch: Options) -> None:
        await self._send("PATCH", CONFIG_OPTIONS_PATH, patch.to_dict())

    async def get_config_ldap(self) -> Ldap:
        return await self._fetch("GET", CONFIG_LDAP_PATH, Ldap.from_dict)

    async def put_config_ldap(self, ldap: Ldap) -> None:
        await self._send("PUT", CONFIG_LDAP_PATH, ldap.to_dict())

    async def patch_config_ldap(self, patch: Ldap) -> None:
        await self._send("PATCH", CONFIG_LDAP_PATH, patch.to_dict())

    async def get_config_gui(self) -> Gui:
        return await self._fetch("GET", CONFIG_GUI_PATH, Gui.from_dict)

    async def put_config_gui(self, gui: Gui) -> None:
        await self._send("PUT", CONFIG_GUI_PATH, gui.to_dict())

    async def patch_config_gui(self, patch: Gui) -> None:
        await self._send("PATCH", CONFIG_GUI_PATH, patch.to_dict())
