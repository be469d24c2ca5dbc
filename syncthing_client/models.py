"""Data models for the Syncthing REST API (system and config endpoints)."""

import copy
from dataclasses import dataclass, field, fields, replace
from typing import Any, Optional, TypeVar

from .errors import DecodeError


# =============================================================================
# System
# =============================================================================

@dataclass
class Version:
    """Response of ``GET /rest/system/version``."""
    arch: str
    long_version: str
    os: str
    version: str

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Version":
        return cls(
            arch=data["arch"],
            long_version=data["longVersion"],
            os=data["os"],
            version=data["version"],
        )


@dataclass
class Ping:
    """Response of ``GET /rest/system/ping``."""
    ping: str

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Ping":
        if data["ping"] != "pong":
            raise DecodeError(f"unexpected ping reply {data['ping']!r}")
        return cls(ping=data["ping"])


@dataclass
class LogEntry:
    """A single line of the daemon's log or error list."""
    when: str
    message: str
    level: Optional[int] = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "LogEntry":
        return cls(
            when=data["when"],
            message=data["message"],
            level=data.get("level"),
        )


@dataclass
class Log:
    """Response of ``GET /rest/system/log``."""
    messages: list[LogEntry]

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Log":
        return cls(messages=[LogEntry.from_dict(m) for m in data["messages"] or []])


@dataclass
class ErrorLog:
    """Response of ``GET /rest/system/error``.

    The daemon sends ``"errors": null`` when there are none.
    """
    errors: list[LogEntry]

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ErrorLog":
        return cls(errors=[LogEntry.from_dict(e) for e in data.get("errors") or []])


@dataclass
class ConnectionStats:
    """Traffic counters of one connection, or the totals over all of them."""
    in_bytes_total: int
    out_bytes_total: int
    at: Optional[str] = None
    address: Optional[str] = None
    client_version: Optional[str] = None
    connected: Optional[bool] = None
    crypto: Optional[str] = None
    paused: Optional[bool] = None
    connection_type: Optional[str] = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ConnectionStats":
        return cls(
            in_bytes_total=data["inBytesTotal"],
            out_bytes_total=data["outBytesTotal"],
            at=data.get("at"),
            address=data.get("address"),
            client_version=data.get("clientVersion"),
            connected=data.get("connected"),
            crypto=data.get("crypto"),
            paused=data.get("paused"),
            connection_type=data.get("type"),
        )


@dataclass
class Connections:
    """Response of ``GET /rest/system/connections``, keyed by device ID."""
    total: ConnectionStats
    connections: dict[str, ConnectionStats]

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Connections":
        return cls(
            total=ConnectionStats.from_dict(data["total"]),
            connections={
                device_id: ConnectionStats.from_dict(stats)
                for device_id, stats in data["connections"].items()
            },
        )


@dataclass
class DebugInfo:
    """Response of ``GET /rest/system/debug``."""
    enabled: list[str]
    facilities: dict[str, str]

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "DebugInfo":
        return cls(
            enabled=list(data.get("enabled") or []),
            facilities=dict(data["facilities"]),
        )


@dataclass
class Discovery:
    """Response of ``GET /rest/system/discovery``: known addresses per device ID."""
    devices: dict[str, list[str]]

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Discovery":
        return cls(
            devices={
                device_id: list(entry["addresses"])
                for device_id, entry in data.items()
            }
        )


@dataclass
class UpgradeInfo:
    """Response of ``GET /rest/system/upgrade``."""
    latest: str
    major_newer: bool
    newer: bool
    running: str

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "UpgradeInfo":
        return cls(
            latest=data["latest"],
            major_newer=data["majorNewer"],
            newer=data["newer"],
            running=data["running"],
        )


# =============================================================================
# Config
# =============================================================================

R = TypeVar("R", bound="ConfigRecord")


def _camel(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(part.capitalize() for part in rest)


def wire(name: str) -> Any:
    """An optional config field whose JSON name is not the camelCase of its Python name."""
    return field(default=None, metadata={"wire": name})


def nested(record: type, *, many: bool = False) -> Any:
    """An optional config field holding another record (or a list of them)."""
    return field(default=None, metadata={"record": record, "many": many})


@dataclass
class ConfigRecord:
    """Base of the config records.

    Every field is optional: ``None`` means the daemon did not send it, or,
    when a record is written back, that it should be left alone. Fields this
    client does not know are kept in ``extra`` and written back unchanged, so
    a fetched record survives a GET/PUT cycle against a newer daemon.
    """
    extra: dict[str, Any] = field(default_factory=dict, repr=False)

    @classmethod
    def _record_fields(cls):
        return [f for f in fields(cls) if f.name != "extra"]

    @classmethod
    def from_dict(cls: type[R], data: dict[str, Any]) -> R:
        if not isinstance(data, dict):
            raise DecodeError(f"{cls.__name__} must be a JSON object")
        values: dict[str, Any] = {}
        consumed = set()
        for f in cls._record_fields():
            key = f.metadata.get("wire", _camel(f.name))
            if key not in data:
                continue
            consumed.add(key)
            value = data[key]
            record = f.metadata.get("record")
            if record is not None and value is not None:
                if f.metadata.get("many"):
                    value = [record.from_dict(v) for v in value]
                else:
                    value = record.from_dict(value)
            values[f.name] = value
        extra = {k: v for k, v in data.items() if k not in consumed}
        return cls(extra=extra, **values)

    def to_dict(self) -> dict[str, Any]:
        """Convert to the wire format, leaving out unset fields."""
        result: dict[str, Any] = {}
        for f in self._record_fields():
            value = getattr(self, f.name)
            if value is None:
                continue
            if f.metadata.get("record") is not None:
                if f.metadata.get("many"):
                    value = [v.to_dict() for v in value]
                else:
                    value = value.to_dict()
            result[f.metadata.get("wire", _camel(f.name))] = value
        for key, value in self.extra.items():
            result.setdefault(key, value)
        return result

    def with_defaults(self: R, defaults: R) -> R:
        """Return a copy with every unset field taken from ``defaults``.

        ``defaults`` is typically what ``/rest/config/defaults/folder`` or
        ``/rest/config/defaults/device`` returns.
        """
        values = {}
        for f in self._record_fields():
            value = getattr(self, f.name)
            if value is None:
                value = copy.deepcopy(getattr(defaults, f.name))
            values[f.name] = value
        extra = {**copy.deepcopy(defaults.extra), **self.extra}
        return replace(self, extra=extra, **values)


@dataclass
class MinDiskFree(ConfigRecord):
    """Free space threshold; ``unit`` is one of ``%``, ``kB``, ``MB``, ``GB``, ``TB``."""
    value: Optional[float] = None
    unit: Optional[str] = None


@dataclass
class FolderDevice(ConfigRecord):
    """A device a folder is shared with."""
    device_id: Optional[str] = wire("deviceID")
    introduced_by: Optional[str] = None
    encryption_password: Optional[str] = None


@dataclass
class Versioning(ConfigRecord):
    versioning_type: Optional[str] = wire("type")
    params: Optional[dict[str, Any]] = None
    cleanup_interval_s: Optional[int] = None
    fs_path: Optional[str] = None
    fs_type: Optional[str] = None


@dataclass
class Folder(ConfigRecord):
    """A shared folder.

    ``folder_type`` is one of ``sendreceive``, ``sendonly``, ``receiveonly``
    and ``receiveencrypted``.
    """
    id: Optional[str] = None
    label: Optional[str] = None
    filesystem_type: Optional[str] = None
    path: Optional[str] = None
    folder_type: Optional[str] = wire("type")
    devices: Optional[list[FolderDevice]] = nested(FolderDevice, many=True)
    rescan_interval_s: Optional[int] = None
    fs_watcher_enabled: Optional[bool] = None
    fs_watcher_delay_s: Optional[float] = None
    ignore_perms: Optional[bool] = None
    auto_normalize: Optional[bool] = None
    min_disk_free: Optional[MinDiskFree] = nested(MinDiskFree)
    versioning: Optional[Versioning] = nested(Versioning)
    copiers: Optional[int] = None
    puller_max_pending_kib: Optional[int] = wire("pullerMaxPendingKiB")
    hashers: Optional[int] = None
    order: Optional[str] = None
    ignore_delete: Optional[bool] = None
    scan_progress_interval_s: Optional[int] = None
    puller_pause_s: Optional[int] = None
    max_conflicts: Optional[int] = None
    disable_sparse_files: Optional[bool] = None
    disable_temp_indexes: Optional[bool] = None
    paused: Optional[bool] = None
    weak_hash_threshold_pct: Optional[int] = None
    marker_name: Optional[str] = None
    copy_ownership_from_parent: Optional[bool] = None
    mod_time_window_s: Optional[int] = None
    max_concurrent_writes: Optional[int] = None
    disable_fsync: Optional[bool] = None
    block_pull_order: Optional[str] = None
    copy_range_method: Optional[str] = None
    case_sensitive_fs: Optional[bool] = wire("caseSensitiveFS")
    junctions_as_dirs: Optional[bool] = None


@dataclass
class Device(ConfigRecord):
    """A remote device. ``addresses`` holds URLs such as ``tcp://host:22000`` or ``dynamic``."""
    device_id: Optional[str] = wire("deviceID")
    name: Optional[str] = None
    addresses: Optional[list[str]] = None
    compression: Optional[str] = None
    cert_name: Optional[str] = None
    introducer: Optional[bool] = None
    skip_introduction_removals: Optional[bool] = None
    introduced_by: Optional[str] = None
    paused: Optional[bool] = None
    allowed_networks: Optional[list[str]] = None
    auto_accept_folders: Optional[bool] = None
    max_send_kbps: Optional[int] = None
    max_recv_kbps: Optional[int] = None
    ignored_folders: Optional[list[Any]] = None
    max_request_kib: Optional[int] = wire("maxRequestKiB")
    untrusted: Optional[bool] = None
    remote_gui_port: Optional[int] = wire("remoteGUIPort")
    encryption_password: Optional[str] = None


@dataclass
class Gui(ConfigRecord):
    """GUI and REST API settings. ``auth_mode`` is ``static`` or ``ldap``."""
    enabled: Optional[bool] = None
    address: Optional[str] = None
    unix_socket_permissions: Optional[str] = None
    user: Optional[str] = None
    password: Optional[str] = None
    auth_mode: Optional[str] = None
    use_tls: Optional[bool] = wire("useTLS")
    api_key: Optional[str] = None
    insecure_admin_access: Optional[bool] = None
    theme: Optional[str] = None
    debugging: Optional[bool] = None
    insecure_skip_hostcheck: Optional[bool] = None
    insecure_allow_frame_loading: Optional[bool] = None


@dataclass
class Ldap(ConfigRecord):
    """LDAP authentication settings. ``transport`` is ``plain``, ``tls`` or ``starttls``."""
    address: Optional[str] = None
    bind_dn: Optional[str] = wire("bindDN")
    transport: Optional[str] = None
    insecure_skip_verify: Optional[bool] = None
    search_base_dn: Optional[str] = wire("searchBaseDN")
    search_filter: Optional[str] = None


@dataclass
class Options(ConfigRecord):
    listen_addresses: Optional[list[str]] = None
    global_announce_servers: Optional[list[str]] = None
    global_announce_enabled: Optional[bool] = None
    local_announce_enabled: Optional[bool] = None
    local_announce_port: Optional[int] = None
    local_announce_mc_addr: Optional[str] = wire("localAnnounceMCAddr")
    max_send_kbps: Optional[int] = None
    max_recv_kbps: Optional[int] = None
    reconnection_interval_s: Optional[int] = None
    relays_enabled: Optional[bool] = None
    relay_reconnect_interval_m: Optional[int] = None
    start_browser: Optional[bool] = None
    nat_enabled: Optional[bool] = None
    nat_lease_minutes: Optional[int] = None
    nat_renewal_minutes: Optional[int] = None
    nat_timeout_seconds: Optional[int] = None
    ur_accepted: Optional[int] = None
    ur_seen: Optional[int] = None
    ur_unique_id: Optional[str] = None
    ur_url: Optional[str] = wire("urURL")
    ur_post_insecurely: Optional[bool] = None
    ur_initial_delay_s: Optional[int] = None
    auto_upgrade_interval_h: Optional[int] = None
    upgrade_to_pre_releases: Optional[bool] = None
    keep_temporaries_h: Optional[int] = None
    cache_ignored_files: Optional[bool] = None
    progress_update_interval_s: Optional[int] = None
    limit_bandwidth_in_lan: Optional[bool] = None
    min_home_disk_free: Optional[MinDiskFree] = nested(MinDiskFree)
    releases_url: Optional[str] = wire("releasesURL")
    always_local_nets: Optional[list[str]] = None
    overwrite_remote_device_names_on_connect: Optional[bool] = None
    temp_index_min_blocks: Optional[int] = None
    unacked_notification_ids: Optional[list[str]] = wire("unackedNotificationIDs")
    traffic_class: Optional[int] = None
    set_low_priority: Optional[bool] = None
    max_folder_concurrency: Optional[int] = None
    cr_url: Optional[str] = wire("crURL")
    crash_reporting_enabled: Optional[bool] = None
    stun_keepalive_start_s: Optional[int] = None
    stun_keepalive_min_s: Optional[int] = None
    stun_servers: Optional[list[str]] = None
    database_tuning: Optional[str] = None
    max_concurrent_incoming_request_kib: Optional[int] = wire("maxConcurrentIncomingRequestKiB")
    announce_lan_addresses: Optional[bool] = wire("announceLANAddresses")
    send_full_index_on_upgrade: Optional[bool] = None
    feature_flags: Optional[list[str]] = None
    connection_limit_enough: Optional[int] = None
    connection_limit_max: Optional[int] = None
    insecure_allow_old_tls_versions: Optional[bool] = wire("insecureAllowOldTLSVersions")


@dataclass
class Ignores(ConfigRecord):
    """Ignore patterns, one per line."""
    lines: Optional[list[str]] = None


@dataclass
class Defaults(ConfigRecord):
    folder: Optional[Folder] = nested(Folder)
    device: Optional[Device] = nested(Device)
    ignores: Optional[Ignores] = nested(Ignores)


@dataclass
class Config(ConfigRecord):
    """The complete configuration, as served by ``GET /rest/config``."""
    version: Optional[int] = None
    folders: Optional[list[Folder]] = nested(Folder, many=True)
    devices: Optional[list[Device]] = nested(Device, many=True)
    gui: Optional[Gui] = nested(Gui)
    ldap: Optional[Ldap] = nested(Ldap)
    options: Optional[Options] = nested(Options)
    remote_ignored_devices: Optional[list[Any]] = None
    defaults: Optional[Defaults] = nested(Defaults)
