#!/usr/bin/env python3
"""Smoke test for the Syncthing client against a running daemon.

Only read-only endpoints are called; the configuration is left untouched.

Usage:
    SYNCTHING_URL=http://127.0.0.1:8384 SYNCTHING_API_KEY=... python smoke_test.py
"""

import sys

from syncthing_client import SyncthingClient


def main():
    client = SyncthingClient.from_env(timeout=10.0)
    print(f"Python Client Test - connecting to {client.base_url}")
    print("=" * 60)

    results = {"passed": 0, "failed": 0}

    def test(name: str, fn):
        try:
            fn()
            print(f"  [PASS] {name}")
            results["passed"] += 1
        except Exception as e:
            print(f"  [FAIL] {name}: {e}")
            results["failed"] += 1

    def test_ping():
        assert client.get_system_ping().ping == "pong"

    test("get_system_ping()", test_ping)

    def test_version():
        version = client.get_system_version()
        assert version.version.startswith("v"), f"Unexpected version {version.version!r}"

    test("get_system_version()", test_version)

    def test_connections():
        connections = client.get_system_connections()
        assert connections.total.in_bytes_total >= 0

    test("get_system_connections()", test_connections)

    def test_config():
        config = client.get_config()
        assert config.version == client.get_config_version()
        assert isinstance(config.folders, list), "Expected list of folders"

    test("get_config()", test_config)

    def test_folders_round_trip():
        for folder in client.get_config_folders():
            fetched = client.get_config_folder(folder.id)
            assert fetched.to_dict() == folder.to_dict(), f"Folder {folder.id} differs"

    test("get_config_folder()", test_folders_round_trip)

    def test_restart_required():
        assert isinstance(client.is_restart_required(), bool)

    test("is_restart_required()", test_restart_required)

    # StartupComplete is always in the daemon's event buffer, so the
    # bootstrap request returns without waiting for the long-poll.
    def test_latest_event():
        events = client.get_events(limit=1)
        assert len(events) == 1, f"Expected 1 event, got {len(events)}"
        assert events[0].id > 0

    test("get_events(limit=1)", test_latest_event)

    def test_bad_key():
        bad = SyncthingClient("not-the-key", client.base_url, timeout=10.0)
        try:
            bad.get_system_ping()
        except Exception as e:
            assert getattr(e, "status", None) == 403, f"Expected HTTP 403, got {e}"
        else:
            raise AssertionError("Request with a wrong key succeeded")
        finally:
            bad.close()

    test("rejected API key", test_bad_key)

    # Summary
    client.close()
    print("=" * 60)
    total = results["passed"] + results["failed"]
    print(f"Results: {results['passed']}/{total} passed")

    return 0 if results["failed"] == 0 else 1


if __name__ == "__main__":
    sys.exit(main())
