"""Syncthing Python Client - typed client for the Syncthing REST API."""

from .client import AsyncSyncthingClient, SyncthingClient
from .errors import (
    SyncthingError,
    ConnectionError,
    HttpError,
    DecodeError,
    UriError,
    RetryLimitExceeded,
)
from .events import (
    Event,
    EventData,
    EventType,
    RawEvent,
    FolderState,
    ItemAction,
    UnknownEvent,
)
from .models import (
    Config,
    Connections,
    Device,
    Folder,
    Gui,
    Ignores,
    Ldap,
    Options,
    Version,
)
from .stream import EventCursor, EventStream, SyncEventStream, StreamItem

__version__ = "0.1.0"
__all__ = [
    "SyncthingClient",
    "AsyncSyncthingClient",
    "SyncthingError",
    "ConnectionError",
    "HttpError",
    "DecodeError",
    "UriError",
    "RetryLimitExceeded",
    "Event",
    "EventData",
    "EventType",
    "RawEvent",
    "FolderState",
    "ItemAction",
    "UnknownEvent",
    "Config",
    "Connections",
    "Device",
    "Folder",
    "Gui",
    "Ignores",
    "Ldap",
    "Options",
    "Version",
    "EventCursor",
    "EventStream",
    "SyncEventStream",
    "StreamItem",
]
