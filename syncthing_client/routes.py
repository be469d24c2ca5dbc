"""REST paths of the Syncthing API and query string helpers."""

from typing import Iterable, Optional, Union
from urllib.parse import quote

from .errors import UriError
from .events import EventType

EVENTS_PATH = "/rest/events"

SYSTEM_CONNECTIONS_PATH = "/rest/system/connections"
SYSTEM_DEBUG_PATH = "/rest/system/debug"
SYSTEM_DISCOVERY_PATH = "/rest/system/discovery"
SYSTEM_ERROR_PATH = "/rest/system/error"
SYSTEM_LOG_PATH = "/rest/system/log"
SYSTEM_PING_PATH = "/rest/system/ping"
SYSTEM_UPGRADE_PATH = "/rest/system/upgrade"
SYSTEM_VERSION_PATH = "/rest/system/version"

CONFIG_PATH = "/rest/config"
CONFIG_RESTART_REQUIRED_PATH = "/rest/config/restart-required"
CONFIG_FOLDERS_PATH = "/rest/config/folders"
CONFIG_DEVICES_PATH = "/rest/config/devices"
CONFIG_DEFAULTS_FOLDER_PATH = "/rest/config/defaults/folder"
CONFIG_DEFAULTS_DEVICE_PATH = "/rest/config/defaults/device"
CONFIG_DEFAULTS_IGNORES_PATH = "/rest/config/defaults/ignores"
CONFIG_OPTIONS_PATH = "/rest/config/options"
CONFIG_LDAP_PATH = "/rest/config/ldap"
CONFIG_GUI_PATH = "/rest/config/gui"


class QuerySeparator:
    """Hands out ``?`` for the first query parameter and ``&`` afterwards."""

    def __init__(self):
        self._started = False

    def next(self) -> str:
        if self._started:
            return "&"
        self._started = True
        return "?"


def events_path(
    since: Optional[int] = None,
    limit: Optional[int] = None,
    events: Iterable[Union[EventType, str]] = (),
) -> str:
    """Build the path and query for ``GET /rest/events``.

    Parameters that are not set are left out entirely, so a call without
    arguments returns the bare path.

    Example:
        >>> events_path(100, 10, [EventType.FOLDER_SUMMARY, EventType.ITEM_FINISHED])
        '/rest/events?events=FolderSummary,ItemFinished&since=100&limit=10'
    """
    path = EVENTS_PATH
    separator = QuerySeparator()
    names = [e.value if isinstance(e, EventType) else str(e) for e in events]
    if names:
        path += f"{separator.next()}events={','.join(names)}"
    if since is not None:
        path += f"{separator.next()}since={since}"
    if limit is not None:
        path += f"{separator.next()}limit={limit}"
    return path


def item_path(collection: str, item_id: str) -> str:
    """Path of a single folder or device below a config collection."""
    if not item_id:
        raise UriError(f"empty id for {collection}")
    return f"{collection}/{quote(item_id, safe='')}"
