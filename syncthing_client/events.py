"""Event model for the Syncthing event API.

``GET /rest/events`` returns envelopes of the form::

    {"id": 42, "globalID": 1042, "type": "ItemFinished",
     "time": "2024-01-01T00:00:00.000000000+01:00", "data": {...}}

The envelope is parsed into a :class:`RawEvent`. Its ``data`` value is kept
as plain JSON until :attr:`Event.data` is read, at which point it is decoded
into the payload class matching the ``type`` tag. A payload that does not
match its tag raises :class:`~syncthing_client.errors.DecodeError` for that
event alone.
"""

from dataclasses import dataclass, field
from enum import Enum
from functools import cached_property
from typing import Any, Callable, Optional, Union

from .errors import DecodeError


class EventType(str, Enum):
    """Type tags of the events emitted by Syncthing."""
    CONFIG_SAVED = "ConfigSaved"
    DEVICE_CONNECTED = "DeviceConnected"
    DEVICE_DISCONNECTED = "DeviceDisconnected"
    DEVICE_DISCOVERED = "DeviceDiscovered"
    DEVICE_PAUSED = "DevicePaused"
    DEVICE_REJECTED = "DeviceRejected"
    DEVICE_RESUMED = "DeviceResumed"
    DOWNLOAD_PROGRESS = "DownloadProgress"
    FOLDER_COMPLETION = "FolderCompletion"
    FOLDER_ERRORS = "FolderErrors"
    FOLDER_REJECTED = "FolderRejected"
    FOLDER_SCAN_PROGRESS = "FolderScanProgress"
    FOLDER_SUMMARY = "FolderSummary"
    ITEM_FINISHED = "ItemFinished"
    ITEM_STARTED = "ItemStarted"
    LISTEN_ADDRESSES_CHANGED = "ListenAddressesChanged"
    LOCAL_CHANGE_DETECTED = "LocalChangeDetected"
    LOCAL_INDEX_UPDATED = "LocalIndexUpdated"
    LOGIN_ATTEMPT = "LoginAttempt"
    REMOTE_CHANGE_DETECTED = "RemoteChangeDetected"
    REMOTE_DOWNLOAD_PROGRESS = "RemoteDownloadProgress"
    REMOTE_INDEX_UPDATED = "RemoteIndexUpdated"
    STARTING = "Starting"
    STARTUP_COMPLETE = "StartupComplete"
    STATE_CHANGED = "StateChanged"

    @classmethod
    def parse(cls, name: str) -> Optional["EventType"]:
        """Return the member for a wire tag, or None for tags this client does not know."""
        try:
            return cls(name)
        except ValueError:
            return None


class ItemAction(str, Enum):
    UPDATE = "update"
    METADATA = "metadata"
    DELETE = "delete"


class FolderState(str, Enum):
    IDLE = "idle"
    SCANNING = "scanning"
    SCAN_WAITING = "scan-waiting"
    SYNC_PREPARING = "sync-preparing"
    SYNC_WAITING = "sync-waiting"
    SYNCING = "syncing"
    CLEANING = "cleaning"
    CLEAN_WAITING = "clean-waiting"
    ERROR = "error"
    UNKNOWN = "unknown"


# =============================================================================
# Field helpers
# =============================================================================

def _object(data: Any, what: str = "payload") -> dict[str, Any]:
    if not isinstance(data, dict):
        raise DecodeError(f"{what} must be a JSON object, got {type(data).__name__}")
    return data


def _get(data: dict[str, Any], key: str, kind, what: str) -> Any:
    try:
        value = data[key]
    except KeyError:
        raise DecodeError(f"missing field {key!r}") from None
    if isinstance(value, bool) and kind is not bool:
        raise DecodeError(f"field {key!r} must be {what}, got bool")
    if not isinstance(value, kind):
        raise DecodeError(f"field {key!r} must be {what}, got {type(value).__name__}")
    return value


def _str(data: dict[str, Any], key: str) -> str:
    return _get(data, key, str, "a string")


def _int(data: dict[str, Any], key: str) -> int:
    return _get(data, key, int, "an integer")


def _float(data: dict[str, Any], key: str) -> float:
    return float(_get(data, key, (int, float), "a number"))


def _bool(data: dict[str, Any], key: str) -> bool:
    return _get(data, key, bool, "a boolean")


def _opt_str(data: dict[str, Any], key: str) -> Optional[str]:
    if data.get(key) is None:
        return None
    return _str(data, key)


def _opt_float(data: dict[str, Any], key: str) -> Optional[float]:
    if data.get(key) is None:
        return None
    return _float(data, key)


def _int_or_zero(data: dict[str, Any], key: str) -> int:
    if data.get(key) is None:
        return 0
    return _int(data, key)


def _str_list(data: dict[str, Any], key: str) -> list[str]:
    values = data.get(key)
    if values is None:
        return []
    if not isinstance(values, list) or not all(isinstance(v, str) for v in values):
        raise DecodeError(f"field {key!r} must be a list of strings")
    return values


def _enum(enum_cls, data: dict[str, Any], key: str):
    value = _str(data, key)
    try:
        return enum_cls(value)
    except ValueError:
        raise DecodeError(f"field {key!r} has unknown value {value!r}") from None


# =============================================================================
# Payloads
# =============================================================================

@dataclass
class ConfigSavedEvent:
    """The configuration was saved. ``config`` holds the full saved document."""
    version: int
    config: dict[str, Any] = field(default_factory=dict, repr=False)

    @classmethod
    def from_dict(cls, data: Any) -> "ConfigSavedEvent":
        data = _object(data)
        key = "version" if "version" in data else "Version"
        return cls(version=_int(data, key), config=data)


@dataclass
class DeviceConnectedEvent:
    addr: str
    device_id: str
    device_name: str
    client_name: str
    client_version: str
    client_type: str

    @classmethod
    def from_dict(cls, data: Any) -> "DeviceConnectedEvent":
        data = _object(data)
        return cls(
            addr=_str(data, "addr"),
            device_id=_str(data, "id"),
            device_name=_str(data, "deviceName"),
            client_name=_str(data, "clientName"),
            client_version=_str(data, "clientVersion"),
            client_type=_str(data, "type"),
        )


@dataclass
class DeviceDisconnectedEvent:
    device_id: str
    error: str

    @classmethod
    def from_dict(cls, data: Any) -> "DeviceDisconnectedEvent":
        data = _object(data)
        return cls(device_id=_str(data, "id"), error=_str(data, "error"))


@dataclass
class DeviceDiscoveredEvent:
    device_id: str
    addrs: list[str]

    @classmethod
    def from_dict(cls, data: Any) -> "DeviceDiscoveredEvent":
        data = _object(data)
        return cls(device_id=_str(data, "device"), addrs=_str_list(data, "addrs"))


@dataclass
class DevicePausedEvent:
    device_id: str

    @classmethod
    def from_dict(cls, data: Any) -> "DevicePausedEvent":
        return cls(device_id=_str(_object(data), "device"))


@dataclass
class DeviceRejectedEvent:
    device_id: str
    name: str
    address: str

    @classmethod
    def from_dict(cls, data: Any) -> "DeviceRejectedEvent":
        data = _object(data)
        return cls(
            device_id=_str(data, "device"),
            name=_str(data, "name"),
            address=_str(data, "address"),
        )


@dataclass
class DeviceResumedEvent:
    device_id: str

    @classmethod
    def from_dict(cls, data: Any) -> "DeviceResumedEvent":
        return cls(device_id=_str(_object(data), "device"))


@dataclass
class FileProgress:
    """Pull progress of a single file, in blocks and bytes."""
    total: int
    pulling: int
    copied_from_origin: int
    reused: int
    copied_from_elsewhere: int
    pulled: int
    bytes_total: int
    bytes_done: int

    @classmethod
    def from_dict(cls, data: Any) -> "FileProgress":
        data = _object(data, "file progress")
        return cls(
            total=_int(data, "total"),
            pulling=_int(data, "pulling"),
            copied_from_origin=_int(data, "copiedFromOrigin"),
            reused=_int(data, "reused"),
            copied_from_elsewhere=_int(data, "copiedFromElsewhere"),
            pulled=_int(data, "pulled"),
            bytes_total=_int(data, "bytesTotal"),
            bytes_done=_int(data, "bytesDone"),
        )


@dataclass
class DownloadProgressEvent:
    """Progress of files currently being pulled, keyed by folder then file name."""
    folders: dict[str, dict[str, FileProgress]]

    @classmethod
    def from_dict(cls, data: Any) -> "DownloadProgressEvent":
        folders = {}
        for folder, files in _object(data).items():
            folders[folder] = {
                name: FileProgress.from_dict(progress)
                for name, progress in _object(files, f"folder {folder!r}").items()
            }
        return cls(folders=folders)


@dataclass
class FolderCompletionEvent:
    device_id: str
    folder_id: str
    completion: float
    global_bytes: int
    need_bytes: int
    need_deletes: int
    need_items: int

    @classmethod
    def from_dict(cls, data: Any) -> "FolderCompletionEvent":
        data = _object(data)
        return cls(
            device_id=_str(data, "device"),
            folder_id=_str(data, "folder"),
            completion=_float(data, "completion"),
            global_bytes=_int(data, "globalBytes"),
            need_bytes=_int(data, "needBytes"),
            need_deletes=_int(data, "needDeletes"),
            need_items=_int(data, "needItems"),
        )


@dataclass
class FolderError:
    error: str
    path: str


@dataclass
class FolderErrorsEvent:
    folder: str
    errors: list[FolderError]

    @classmethod
    def from_dict(cls, data: Any) -> "FolderErrorsEvent":
        data = _object(data)
        errors = data.get("errors") or []
        if not isinstance(errors, list):
            raise DecodeError("field 'errors' must be a list")
        return cls(
            folder=_str(data, "folder"),
            errors=[
                FolderError(
                    error=_str(_object(e, "folder error"), "error"),
                    path=_str(e, "path"),
                )
                for e in errors
            ],
        )


@dataclass
class FolderRejectedEvent:
    device_id: str
    folder_id: str
    folder_label: str

    @classmethod
    def from_dict(cls, data: Any) -> "FolderRejectedEvent":
        data = _object(data)
        return cls(
            device_id=_str(data, "device"),
            folder_id=_str(data, "folder"),
            folder_label=_str(data, "folderLabel"),
        )


@dataclass
class FolderScanProgressEvent:
    folder_id: str
    total: int
    rate: float
    current: int

    @classmethod
    def from_dict(cls, data: Any) -> "FolderScanProgressEvent":
        data = _object(data)
        return cls(
            folder_id=_str(data, "folder"),
            total=_int(data, "total"),
            rate=_float(data, "rate"),
            current=_int(data, "current"),
        )


@dataclass
class FolderSummaryData:
    """Counters of a folder summary.

    Counters missing from the payload read as zero, since older and newer
    daemons report slightly different sets.
    """
    state: str
    global_bytes: int = 0
    global_deleted: int = 0
    global_directories: int = 0
    global_files: int = 0
    global_symlinks: int = 0
    global_total_items: int = 0
    in_sync_bytes: int = 0
    in_sync_files: int = 0
    local_bytes: int = 0
    local_deleted: int = 0
    local_directories: int = 0
    local_files: int = 0
    local_symlinks: int = 0
    local_total_items: int = 0
    need_bytes: int = 0
    need_deletes: int = 0
    need_directories: int = 0
    need_files: int = 0
    need_symlinks: int = 0
    need_total_items: int = 0
    pull_errors: int = 0
    sequence: int = 0
    version: int = 0
    ignore_patterns: bool = False
    invalid: Optional[str] = None
    state_changed: Optional[str] = None
    error: Optional[str] = None

    _COUNTERS = (
        "global_bytes", "global_deleted", "global_directories", "global_files",
        "global_symlinks", "global_total_items", "in_sync_bytes", "in_sync_files",
        "local_bytes", "local_deleted", "local_directories", "local_files",
        "local_symlinks", "local_total_items", "need_bytes", "need_deletes",
        "need_directories", "need_files", "need_symlinks", "need_total_items",
        "pull_errors", "sequence", "version",
    )

    @classmethod
    def from_dict(cls, data: Any) -> "FolderSummaryData":
        data = _object(data, "summary")
        counters = {
            name: _int_or_zero(data, _camel(name)) for name in cls._COUNTERS
        }
        ignore_patterns = data.get("ignorePatterns")
        return cls(
            state=_str(data, "state"),
            ignore_patterns=_bool(data, "ignorePatterns") if ignore_patterns is not None else False,
            invalid=_opt_str(data, "invalid") or None,
            state_changed=_opt_str(data, "stateChanged"),
            error=_opt_str(data, "error") or None,
            **counters,
        )


@dataclass
class FolderSummaryEvent:
    folder: str
    summary: FolderSummaryData

    @classmethod
    def from_dict(cls, data: Any) -> "FolderSummaryEvent":
        data = _object(data)
        if "summary" not in data:
            raise DecodeError("missing field 'summary'")
        return cls(
            folder=_str(data, "folder"),
            summary=FolderSummaryData.from_dict(data["summary"]),
        )


@dataclass
class ItemFinishedEvent:
    item: str
    folder: str
    item_type: str
    action: ItemAction
    error: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Any) -> "ItemFinishedEvent":
        data = _object(data)
        return cls(
            item=_str(data, "item"),
            folder=_str(data, "folder"),
            item_type=_str(data, "type"),
            action=_enum(ItemAction, data, "action"),
            error=_opt_str(data, "error"),
        )


@dataclass
class ItemStartedEvent:
    item: str
    folder: str
    item_type: str
    action: ItemAction

    @classmethod
    def from_dict(cls, data: Any) -> "ItemStartedEvent":
        data = _object(data)
        return cls(
            item=_str(data, "item"),
            folder=_str(data, "folder"),
            item_type=_str(data, "type"),
            action=_enum(ItemAction, data, "action"),
        )


@dataclass
class ListenAddressesChangedEvent:
    """Listen addresses changed; the address lists are passed through as JSON."""
    address: Any = None
    lan: Any = None
    wan: Any = None

    @classmethod
    def from_dict(cls, data: Any) -> "ListenAddressesChangedEvent":
        data = _object(data)
        return cls(address=data.get("address"), lan=data.get("lan"), wan=data.get("wan"))


@dataclass
class LocalChangeDetectedEvent:
    action: str
    folder_id: str
    label: str
    path: str
    item_type: str

    @classmethod
    def from_dict(cls, data: Any) -> "LocalChangeDetectedEvent":
        data = _object(data)
        return cls(
            action=_str(data, "action"),
            folder_id=_str(data, "folderID" if "folderID" in data else "folder"),
            label=_str(data, "label"),
            path=_str(data, "path"),
            item_type=_str(data, "type"),
        )


@dataclass
class LocalIndexUpdatedEvent:
    folder_id: str
    items: int
    version: int
    filenames: list[str]

    @classmethod
    def from_dict(cls, data: Any) -> "LocalIndexUpdatedEvent":
        data = _object(data)
        return cls(
            folder_id=_str(data, "folder"),
            items=_int(data, "items"),
            version=_int(data, "version"),
            filenames=_str_list(data, "filenames"),
        )


@dataclass
class LoginAttemptEvent:
    username: str
    success: bool
    remote_address: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Any) -> "LoginAttemptEvent":
        data = _object(data)
        return cls(
            username=_str(data, "username"),
            success=_bool(data, "success"),
            remote_address=_opt_str(data, "remoteAddress"),
        )


@dataclass
class RemoteChangeDetectedEvent:
    action: str
    folder_id: str
    label: str
    path: str
    item_type: str
    modified_by: str

    @classmethod
    def from_dict(cls, data: Any) -> "RemoteChangeDetectedEvent":
        data = _object(data)
        return cls(
            action=_str(data, "action"),
            folder_id=_str(data, "folderID" if "folderID" in data else "folder"),
            label=_str(data, "label"),
            path=_str(data, "path"),
            item_type=_str(data, "type"),
            modified_by=_str(data, "modifiedBy"),
        )


@dataclass
class RemoteDownloadProgressEvent:
    """Blocks a remote device has downloaded so far, keyed by file name."""
    device_id: str
    folder: str
    state: dict[str, int]

    @classmethod
    def from_dict(cls, data: Any) -> "RemoteDownloadProgressEvent":
        data = _object(data)
        state = _object(data.get("state"), "field 'state'")
        for name, blocks in state.items():
            if isinstance(blocks, bool) or not isinstance(blocks, int):
                raise DecodeError(f"block count of {name!r} must be an integer")
        return cls(device_id=_str(data, "device"), folder=_str(data, "folder"), state=state)


@dataclass
class RemoteIndexUpdatedEvent:
    device_id: str
    folder_id: str
    items: int
    version: int

    @classmethod
    def from_dict(cls, data: Any) -> "RemoteIndexUpdatedEvent":
        data = _object(data)
        return cls(
            device_id=_str(data, "device"),
            folder_id=_str(data, "folder"),
            items=_int(data, "items"),
            version=_int(data, "version"),
        )


@dataclass
class StartingEvent:
    device_id: str
    home: str

    @classmethod
    def from_dict(cls, data: Any) -> "StartingEvent":
        data = _object(data)
        return cls(device_id=_str(data, "myID"), home=_str(data, "home"))


@dataclass
class StateChangedEvent:
    folder_id: str
    from_state: FolderState
    to_state: FolderState
    duration: Optional[float] = None
    error: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Any) -> "StateChangedEvent":
        data = _object(data)
        return cls(
            folder_id=_str(data, "folder"),
            from_state=_enum(FolderState, data, "from"),
            to_state=_enum(FolderState, data, "to"),
            duration=_opt_float(data, "duration"),
            error=_opt_str(data, "error"),
        )


@dataclass
class UnknownEvent:
    """Payload of an event type this client does not know, passed through untouched."""
    type_name: str
    payload: Any = None


EventData = Union[
    ConfigSavedEvent,
    DeviceConnectedEvent,
    DeviceDisconnectedEvent,
    DeviceDiscoveredEvent,
    DevicePausedEvent,
    DeviceRejectedEvent,
    DeviceResumedEvent,
    DownloadProgressEvent,
    FolderCompletionEvent,
    FolderErrorsEvent,
    FolderRejectedEvent,
    FolderScanProgressEvent,
    FolderSummaryEvent,
    ItemFinishedEvent,
    ItemStartedEvent,
    ListenAddressesChangedEvent,
    LocalChangeDetectedEvent,
    LocalIndexUpdatedEvent,
    LoginAttemptEvent,
    RemoteChangeDetectedEvent,
    RemoteDownloadProgressEvent,
    RemoteIndexUpdatedEvent,
    StartingEvent,
    StateChangedEvent,
    UnknownEvent,
    None,
]

PAYLOAD_DECODERS: dict[EventType, Callable[[Any], EventData]] = {
    EventType.CONFIG_SAVED: ConfigSavedEvent.from_dict,
    EventType.DEVICE_CONNECTED: DeviceConnectedEvent.from_dict,
    EventType.DEVICE_DISCONNECTED: DeviceDisconnectedEvent.from_dict,
    EventType.DEVICE_DISCOVERED: DeviceDiscoveredEvent.from_dict,
    EventType.DEVICE_PAUSED: DevicePausedEvent.from_dict,
    EventType.DEVICE_REJECTED: DeviceRejectedEvent.from_dict,
    EventType.DEVICE_RESUMED: DeviceResumedEvent.from_dict,
    EventType.DOWNLOAD_PROGRESS: DownloadProgressEvent.from_dict,
    EventType.FOLDER_COMPLETION: FolderCompletionEvent.from_dict,
    EventType.FOLDER_ERRORS: FolderErrorsEvent.from_dict,
    EventType.FOLDER_REJECTED: FolderRejectedEvent.from_dict,
    EventType.FOLDER_SCAN_PROGRESS: FolderScanProgressEvent.from_dict,
    EventType.FOLDER_SUMMARY: FolderSummaryEvent.from_dict,
    EventType.ITEM_FINISHED: ItemFinishedEvent.from_dict,
    EventType.ITEM_STARTED: ItemStartedEvent.from_dict,
    EventType.LISTEN_ADDRESSES_CHANGED: ListenAddressesChangedEvent.from_dict,
    EventType.LOCAL_CHANGE_DETECTED: LocalChangeDetectedEvent.from_dict,
    EventType.LOCAL_INDEX_UPDATED: LocalIndexUpdatedEvent.from_dict,
    EventType.LOGIN_ATTEMPT: LoginAttemptEvent.from_dict,
    EventType.REMOTE_CHANGE_DETECTED: RemoteChangeDetectedEvent.from_dict,
    EventType.REMOTE_DOWNLOAD_PROGRESS: RemoteDownloadProgressEvent.from_dict,
    EventType.REMOTE_INDEX_UPDATED: RemoteIndexUpdatedEvent.from_dict,
    EventType.STARTING: StartingEvent.from_dict,
    EventType.STARTUP_COMPLETE: lambda data: None,
    EventType.STATE_CHANGED: StateChangedEvent.from_dict,
}


def decode_event_data(type_name: str, payload: Any) -> EventData:
    """Decode a raw payload into the variant selected by ``type_name``.

    Tags without a decoder come back as :class:`UnknownEvent`.

    Raises:
        DecodeError: If the payload does not have the shape its tag requires.
    """
    event_type = EventType.parse(type_name)
    if event_type is None:
        return UnknownEvent(type_name=type_name, payload=payload)
    return PAYLOAD_DECODERS[event_type](payload)


# =============================================================================
# Envelope
# =============================================================================

@dataclass
class RawEvent:
    """An event envelope whose payload has not been interpreted yet."""
    id: int
    global_id: int
    type_name: str
    time: str
    data: Any = field(default=None, repr=False)

    @classmethod
    def from_dict(cls, data: Any) -> "RawEvent":
        data = _object(data, "event envelope")
        return cls(
            id=_int(data, "id"),
            global_id=_int(data, "globalID"),
            type_name=_str(data, "type"),
            time=_str(data, "time"),
            data=data.get("data"),
        )

    @property
    def type(self) -> Optional[EventType]:
        return EventType.parse(self.type_name)


@dataclass
class Event:
    """An event with its payload decoded on first access of :attr:`data`."""
    id: int
    global_id: int
    type_name: str
    time: str
    raw_data: Any = field(default=None, repr=False, compare=False)

    @classmethod
    def from_raw(cls, raw: RawEvent) -> "Event":
        return cls(
            id=raw.id,
            global_id=raw.global_id,
            type_name=raw.type_name,
            time=raw.time,
            raw_data=raw.data,
        )

    @classmethod
    def from_dict(cls, data: Any) -> "Event":
        return cls.from_raw(RawEvent.from_dict(data))

    @property
    def type(self) -> Optional[EventType]:
        """The event type, or None when the tag is not known to this client."""
        return EventType.parse(self.type_name)

    @cached_property
    def data(self) -> EventData:
        """The typed payload.

        Raises:
            DecodeError: If the payload does not match the event type.
        """
        try:
            return decode_event_data(self.type_name, self.raw_data)
        except DecodeError as e:
            raise DecodeError(e.reason, event_id=self.id) from e


def _camel(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(part.capitalize() for part in rest)
