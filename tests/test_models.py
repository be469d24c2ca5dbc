"""Tests for the system and config models."""

import unittest

from syncthing_client.errors import DecodeError
from syncthing_client.models import (
    Config,
    Device,
    Folder,
    FolderDevice,
    Gui,
    Ignores,
    MinDiskFree,
    Options,
    Version,
)


class TestSystemModels(unittest.TestCase):
    """Tests for the /rest/system records."""

    def test_version_from_dict(self):
        version = Version.from_dict({
            "arch": "arm64",
            "longVersion": "syncthing v1.27.0 \"Gold Grasshopper\"",
            "os": "darwin",
            "version": "v1.27.0",
        })
        self.assertEqual(version.arch, "arm64")
        self.assertEqual(version.os, "darwin")
        self.assertTrue(version.long_version.startswith("syncthing"))


class TestConfigRecordFromDict(unittest.TestCase):
    """Tests for ConfigRecord.from_dict()."""

    def test_camel_case_names(self):
        folder = Folder.from_dict({
            "id": "abcd",
            "rescanIntervalS": 3600,
            "fsWatcherEnabled": True,
            "ignorePerms": False,
        })
        self.assertEqual(folder.id, "abcd")
        self.assertEqual(folder.rescan_interval_s, 3600)
        self.assertTrue(folder.fs_watcher_enabled)
        self.assertFalse(folder.ignore_perms)
        self.assertIsNone(folder.label)

    def test_irregular_wire_names(self):
        """Fields whose JSON name is not plain camelCase should still map."""
        folder = Folder.from_dict({
            "type": "sendonly",
            "pullerMaxPendingKiB": 65536,
            "caseSensitiveFS": False,
        })
        self.assertEqual(folder.folder_type, "sendonly")
        self.assertEqual(folder.puller_max_pending_kib, 65536)
        self.assertFalse(folder.case_sensitive_fs)

        device = Device.from_dict({"deviceID": "DEV-1", "maxRequestKiB": 0, "remoteGUIPort": 8384})
        self.assertEqual(device.device_id, "DEV-1")
        self.assertEqual(device.max_request_kib, 0)
        self.assertEqual(device.remote_gui_port, 8384)

        gui = Gui.from_dict({"useTLS": True, "apiKey": "k"})
        self.assertTrue(gui.use_tls)
        self.assertEqual(gui.api_key, "k")

        options = Options.from_dict({"urURL": "https://data.syncthing.net/newdata", "urUniqueId": "x"})
        self.assertEqual(options.ur_url, "https://data.syncthing.net/newdata")
        self.assertEqual(options.ur_unique_id, "x")

    def test_nested_records(self):
        folder = Folder.from_dict({
            "id": "abcd",
            "devices": [{"deviceID": "DEV-1", "introducedBy": "", "encryptionPassword": ""}],
            "minDiskFree": {"value": 1, "unit": "%"},
            "versioning": {"type": "simple", "params": {"keep": "5"}},
        })
        self.assertEqual(folder.devices, [
            FolderDevice(device_id="DEV-1", introduced_by="", encryption_password=""),
        ])
        self.assertEqual(folder.min_disk_free, MinDiskFree(value=1, unit="%"))
        self.assertEqual(folder.versioning.versioning_type, "simple")
        self.assertEqual(folder.versioning.params, {"keep": "5"})

    def test_unknown_fields_are_kept(self):
        folder = Folder.from_dict({"id": "abcd", "syncOwnership": True})
        self.assertEqual(folder.extra, {"syncOwnership": True})
        self.assertEqual(folder.to_dict(), {"id": "abcd", "syncOwnership": True})

    def test_not_an_object(self):
        with self.assertRaises(DecodeError):
            Device.from_dict(["DEV-1"])

    def test_full_config(self):
        config = Config.from_dict({
            "version": 37,
            "folders": [{"id": "a"}, {"id": "b"}],
            "devices": [{"deviceID": "DEV-1"}],
            "gui": {"address": "127.0.0.1:8384"},
            "ldap": {"bindDN": "cn=admin"},
            "options": {"listenAddresses": ["default"]},
            "remoteIgnoredDevices": [],
            "defaults": {
                "folder": {"path": "~"},
                "device": {"addresses": ["dynamic"]},
                "ignores": {"lines": ["*.tmp"]},
            },
        })
        self.assertEqual(config.version, 37)
        self.assertEqual([f.id for f in config.folders], ["a", "b"])
        self.assertEqual(config.devices[0].device_id, "DEV-1")
        self.assertEqual(config.ldap.bind_dn, "cn=admin")
        self.assertEqual(config.options.listen_addresses, ["default"])
        self.assertEqual(config.defaults.ignores, Ignores(lines=["*.tmp"]))
        self.assertEqual(config.defaults.device.addresses, ["dynamic"])


class TestConfigRecordToDict(unittest.TestCase):
    """Tests for ConfigRecord.to_dict()."""

    def test_unset_fields_are_omitted(self):
        """A record with a single field set should serialize to a one-key patch."""
        self.assertEqual(Folder(paused=True).to_dict(), {"paused": True})
        self.assertEqual(Options().to_dict(), {})

    def test_wire_names_and_nesting(self):
        folder = Folder(
            id="abcd",
            folder_type="receiveonly",
            devices=[FolderDevice(device_id="DEV-1")],
            min_disk_free=MinDiskFree(value=5, unit="GB"),
        )
        self.assertEqual(folder.to_dict(), {
            "id": "abcd",
            "type": "receiveonly",
            "devices": [{"deviceID": "DEV-1"}],
            "minDiskFree": {"value": 5, "unit": "GB"},
        })

    def test_known_field_wins_over_extra(self):
        folder = Folder(id="new", extra={"id": "old", "syncXattrs": False})
        self.assertEqual(folder.to_dict(), {"id": "new", "syncXattrs": False})

    def test_round_trip_preserves_document(self):
        document = {
            "deviceID": "DEV-1",
            "name": "nas",
            "addresses": ["tcp://192.0.2.1:22000"],
            "maxRequestKiB": 0,
            "numConnections": 3,
        }
        self.assertEqual(Device.from_dict(document).to_dict(), document)


class TestWithDefaults(unittest.TestCase):
    """Tests for ConfigRecord.with_defaults()."""

    def test_fills_only_unset_fields(self):
        defaults = Folder(
            path="~/Sync",
            rescan_interval_s=3600,
            fs_watcher_enabled=True,
            paused=False,
        )
        folder = Folder(id="abcd", path="/data", paused=True).with_defaults(defaults)
        self.assertEqual(folder.id, "abcd")
        self.assertEqual(folder.path, "/data")
        self.assertTrue(folder.paused)
        self.assertEqual(folder.rescan_interval_s, 3600)
        self.assertTrue(folder.fs_watcher_enabled)

    def test_does_not_share_nested_values(self):
        defaults = Device(addresses=["dynamic"])
        device = Device(device_id="DEV-1").with_defaults(defaults)
        device.addresses.append("tcp://192.0.2.1:22000")
        self.assertEqual(defaults.addresses, ["dynamic"])

    def test_merges_extra(self):
        defaults = Device(extra={"numConnections": 1, "untrustedFlag": False})
        device = Device(extra={"numConnections": 4}).with_defaults(defaults)
        self.assertEqual(device.extra, {"numConnections": 4, "untrustedFlag": False})


if __name__ == "__main__":
    unittest.main()
