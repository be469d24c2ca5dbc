"""Tests for the event model in syncthing_client.events."""

import unittest

from syncthing_client.errors import DecodeError
from syncthing_client.events import (
    PAYLOAD_DECODERS,
    ConfigSavedEvent,
    DeviceConnectedEvent,
    DownloadProgressEvent,
    Event,
    EventType,
    FolderCompletionEvent,
    FolderErrorsEvent,
    FolderState,
    FolderSummaryEvent,
    ItemAction,
    ItemFinishedEvent,
    LocalChangeDetectedEvent,
    RawEvent,
    RemoteDownloadProgressEvent,
    StartingEvent,
    StateChangedEvent,
    UnknownEvent,
    decode_event_data,
)


def envelope(event_id, event_type, data=None):
    return {
        "id": event_id,
        "globalID": event_id + 1000,
        "type": event_type,
        "time": "2024-03-01T12:00:00.000000000+01:00",
        "data": data,
    }


class TestEventType(unittest.TestCase):
    """Tests for the EventType enum."""

    def test_every_type_has_a_decoder(self):
        """The decoder table should cover every event type."""
        self.assertEqual(set(PAYLOAD_DECODERS), set(EventType))

    def test_parse_known_and_unknown(self):
        self.assertIs(EventType.parse("ItemFinished"), EventType.ITEM_FINISHED)
        self.assertIsNone(EventType.parse("PendingDevicesChanged"))


class TestRawEvent(unittest.TestCase):
    """Tests for envelope parsing."""

    def test_from_dict(self):
        """RawEvent.from_dict() should map the envelope fields and keep data raw."""
        raw = RawEvent.from_dict(envelope(7, "DevicePaused", {"device": "ABC"}))
        self.assertEqual(raw.id, 7)
        self.assertEqual(raw.global_id, 1007)
        self.assertEqual(raw.type_name, "DevicePaused")
        self.assertIs(raw.type, EventType.DEVICE_PAUSED)
        self.assertEqual(raw.time, "2024-03-01T12:00:00.000000000+01:00")
        self.assertEqual(raw.data, {"device": "ABC"})

    def test_missing_id_raises(self):
        data = envelope(7, "DevicePaused")
        del data["id"]
        with self.assertRaises(DecodeError):
            RawEvent.from_dict(data)

    def test_non_object_raises(self):
        with self.assertRaises(DecodeError):
            RawEvent.from_dict([1, 2, 3])


class TestEventDecoding(unittest.TestCase):
    """Tests for Event.data dispatch by type tag."""

    def test_item_finished(self):
        event = Event.from_dict(envelope(1, "ItemFinished", {
            "item": "docs/a.txt",
            "folder": "default",
            "error": None,
            "type": "file",
            "action": "update",
        }))
        self.assertIsInstance(event.data, ItemFinishedEvent)
        self.assertEqual(event.data.item, "docs/a.txt")
        self.assertEqual(event.data.folder, "default")
        self.assertIsNone(event.data.error)
        self.assertEqual(event.data.item_type, "file")
        self.assertIs(event.data.action, ItemAction.UPDATE)

    def test_device_connected(self):
        event = Event.from_dict(envelope(2, "DeviceConnected", {
            "addr": "192.0.2.1:22000",
            "id": "P56IOI7-MZJNU2Y",
            "deviceName": "laptop",
            "clientName": "syncthing",
            "clientVersion": "v1.27.0",
            "type": "tcp-client",
        }))
        self.assertEqual(event.data, DeviceConnectedEvent(
            addr="192.0.2.1:22000",
            device_id="P56IOI7-MZJNU2Y",
            device_name="laptop",
            client_name="syncthing",
            client_version="v1.27.0",
            client_type="tcp-client",
        ))

    def test_startup_complete_has_no_payload(self):
        """StartupComplete should decode to None whatever the payload."""
        event = Event.from_dict(envelope(3, "StartupComplete", None))
        self.assertIs(event.type, EventType.STARTUP_COMPLETE)
        self.assertIsNone(event.data)

    def test_download_progress_nested_maps(self):
        """DownloadProgress should decode folder -> file -> progress records."""
        event = Event.from_dict(envelope(4, "DownloadProgress", {
            "default": {
                "big.iso": {
                    "total": 800,
                    "pulling": 2,
                    "copiedFromOrigin": 0,
                    "reused": 0,
                    "copiedFromElsewhere": 0,
                    "pulled": 38,
                    "bytesTotal": 104890374,
                    "bytesDone": 5242880,
                },
            },
        }))
        self.assertIsInstance(event.data, DownloadProgressEvent)
        progress = event.data.folders["default"]["big.iso"]
        self.assertEqual(progress.total, 800)
        self.assertEqual(progress.pulled, 38)
        self.assertEqual(progress.bytes_done, 5242880)

    def test_remote_download_progress(self):
        data = decode_event_data("RemoteDownloadProgress", {
            "device": "DEV",
            "folder": "default",
            "state": {"a.bin": 4, "b.bin": 12},
        })
        self.assertEqual(
            data, RemoteDownloadProgressEvent("DEV", "default", {"a.bin": 4, "b.bin": 12})
        )

    def test_folder_summary(self):
        data = decode_event_data("FolderSummary", {
            "folder": "default",
            "summary": {
                "globalBytes": 1024,
                "globalFiles": 3,
                "needBytes": 0,
                "state": "idle",
                "stateChanged": "2024-03-01T12:00:00+01:00",
                "sequence": 12,
                "version": 12,
                "ignorePatterns": False,
                "invalid": "",
            },
        })
        self.assertIsInstance(data, FolderSummaryEvent)
        self.assertEqual(data.folder, "default")
        self.assertEqual(data.summary.global_bytes, 1024)
        self.assertEqual(data.summary.global_files, 3)
        self.assertEqual(data.summary.local_files, 0)
        self.assertEqual(data.summary.state, "idle")
        self.assertIsNone(data.summary.invalid)

    def test_folder_completion_accepts_integer_completion(self):
        data = decode_event_data("FolderCompletion", {
            "device": "DEV",
            "folder": "default",
            "completion": 100,
            "globalBytes": 10,
            "needBytes": 0,
            "needDeletes": 0,
            "needItems": 0,
        })
        self.assertIsInstance(data, FolderCompletionEvent)
        self.assertEqual(data.completion, 100.0)

    def test_folder_errors(self):
        data = decode_event_data("FolderErrors", {
            "folder": "default",
            "errors": [{"error": "permission denied", "path": "secret.txt"}],
        })
        self.assertIsInstance(data, FolderErrorsEvent)
        self.assertEqual(data.errors[0].error, "permission denied")
        self.assertEqual(data.errors[0].path, "secret.txt")

    def test_state_changed(self):
        data = decode_event_data("StateChanged", {
            "folder": "default",
            "from": "scanning",
            "to": "sync-waiting",
            "duration": 0.5,
        })
        self.assertIsInstance(data, StateChangedEvent)
        self.assertIs(data.from_state, FolderState.SCANNING)
        self.assertIs(data.to_state, FolderState.SYNC_WAITING)
        self.assertEqual(data.duration, 0.5)
        self.assertIsNone(data.error)

    def test_local_change_detected_folder_id(self):
        data = decode_event_data("LocalChangeDetected", {
            "action": "modified",
            "folderID": "default",
            "label": "Default Folder",
            "path": "notes.md",
            "type": "file",
        })
        self.assertIsInstance(data, LocalChangeDetectedEvent)
        self.assertEqual(data.folder_id, "default")

    def test_config_saved_keeps_full_document(self):
        data = decode_event_data("ConfigSaved", {"version": 37, "folders": []})
        self.assertIsInstance(data, ConfigSavedEvent)
        self.assertEqual(data.version, 37)
        self.assertEqual(data.config["folders"], [])

    def test_starting(self):
        data = decode_event_data("Starting", {"myID": "MYID", "home": "/home/st/.config"})
        self.assertEqual(data, StartingEvent(device_id="MYID", home="/home/st/.config"))

    def test_unknown_type_decodes_to_catch_all(self):
        """Tags this client does not know should be passed through untouched."""
        event = Event.from_dict(envelope(5, "PendingDevicesChanged", {"added": []}))
        self.assertIsNone(event.type)
        self.assertEqual(
            event.data, UnknownEvent(type_name="PendingDevicesChanged", payload={"added": []})
        )


class TestEventDecodeErrors(unittest.TestCase):
    """Tests for payloads that do not match their type tag."""

    def test_missing_required_field(self):
        event = Event.from_dict(envelope(9, "ItemStarted", {"folder": "default"}))
        with self.assertRaises(DecodeError) as ctx:
            event.data
        self.assertEqual(ctx.exception.event_id, 9)
        self.assertIn("item", str(ctx.exception))
        self.assertFalse(ctx.exception.is_retryable())

    def test_wrong_json_type(self):
        event = Event.from_dict(envelope(10, "LoginAttempt", {
            "username": "admin",
            "success": "yes",
        }))
        with self.assertRaises(DecodeError):
            event.data

    def test_bool_is_not_an_integer(self):
        with self.assertRaises(DecodeError):
            decode_event_data("RemoteIndexUpdated", {
                "device": "DEV", "folder": "default", "items": True, "version": 1,
            })

    def test_unknown_enum_value(self):
        with self.assertRaises(DecodeError):
            decode_event_data("ItemFinished", {
                "item": "a", "folder": "f", "type": "file", "action": "explode",
            })

    def test_payload_not_an_object(self):
        with self.assertRaises(DecodeError):
            decode_event_data("DevicePaused", ["DEV"])

    def test_decode_is_lazy(self):
        """A malformed payload should not fail envelope parsing, only data access."""
        event = Event.from_dict(envelope(11, "DeviceResumed", {}))
        self.assertEqual(event.id, 11)
        with self.assertRaises(DecodeError):
            event.data


if __name__ == "__main__":
    unittest.main()
