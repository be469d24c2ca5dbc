#!/usr/bin/env python3
"""Show which Syncthing version is running and who it is connected to.

Usage:
    SYNCTHING_API_KEY=... python system_info.py
"""

from syncthing_client import SyncthingClient


def main():
    with SyncthingClient.from_env() as client:
        version = client.get_system_version()
        print(f"syncthing {version.version} is running on {version.os}!")

        connections = client.get_system_connections()
        for device_id, stats in connections.connections.items():
            state = "connected" if stats.connected else "disconnected"
            print(f"  {device_id[:7]} {state} {stats.address or ''}")


if __name__ == "__main__":
    main()
