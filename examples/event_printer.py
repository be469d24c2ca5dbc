#!/usr/bin/env python3
"""Print every event of a local Syncthing instance as it happens.

Usage:
    SYNCTHING_API_KEY=... python event_printer.py
"""

import asyncio
import logging

from syncthing_client import AsyncSyncthingClient, Event


async def main():
    client = AsyncSyncthingClient.from_env()
    async with client.subscribe_to_all(retry_delay=1.0) as stream:
        async for item in stream:
            if isinstance(item, Event):
                print(f"{item.id:>6} {item.time} {item.type_name}: {item.data!r}")
            else:
                print(f"error: {item}")


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        pass
