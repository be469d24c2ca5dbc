"""Event subscription streams.

Syncthing exposes its event log as ``GET /rest/events?since=<id>``: a
long-polling endpoint that returns every event newer than the given id. The
streams in this module turn repeated calls to it into one unbounded, ordered
sequence of :class:`~syncthing_client.events.Event` objects.

Both streams are driven by :class:`EventCursor`, which holds the ``since``
watermark and the buffer of fetched but not yet delivered events, and
alternates between two states:

``AWAITING_FETCH``
    The next advance performs one request for events newer than ``since``.
    On success the batch becomes the buffer; on failure the error is handed
    to the caller and the same request is issued again on the next advance.

``DRAINING``
    Each advance pops the oldest buffered event, moves ``since`` to its id
    and hands it to the caller. Once the buffer is empty the next advance
    switches back to ``AWAITING_FETCH``.

Items of a stream are either events or :class:`~syncthing_client.errors.SyncthingError`
instances. An error item means one fetch failed, or one event could not be
decoded; the stream carries on with the next advance.

Example:
    >>> async with AsyncSyncthingClient(api_key="...") as client:
    ...     async for item in client.subscribe_to([EventType.ITEM_FINISHED]):
    ...         if isinstance(item, SyncthingError):
    ...             print(f"fetch failed, retrying: {item}")
    ...         else:
    ...             print(item.id, item.data)
"""

import asyncio
import logging
import time
from collections import deque
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any, Iterable, Optional, Union

from .errors import DecodeError, RetryLimitExceeded, SyncthingError
from .events import Event, EventType, RawEvent

if TYPE_CHECKING:
    from .client import AsyncSyncthingClient, SyncthingClient

logger = logging.getLogger(__name__)

# The first request of a fresh subscription only asks for the newest event,
# so the cursor is established without pulling the daemon's whole backlog.
BOOTSTRAP_LIMIT = 1

StreamItem = Union[Event, SyncthingError]


class StreamState(Enum):
    AWAITING_FETCH = "awaiting_fetch"
    DRAINING = "draining"


@dataclass
class _BrokenEnvelope:
    """Buffer entry for an envelope that failed validation."""
    id: Optional[int]
    error: DecodeError


def _parse_envelope(data: Any) -> Union[RawEvent, _BrokenEnvelope]:
    try:
        return RawEvent.from_dict(data)
    except DecodeError as e:
        event_id = data.get("id") if isinstance(data, dict) else None
        if not isinstance(event_id, int) or isinstance(event_id, bool):
            return _BrokenEnvelope(None, DecodeError(e.reason, retryable=False))
        return _BrokenEnvelope(event_id, DecodeError(e.reason, event_id=event_id))


class EventCursor:
    """State machine behind :class:`EventStream` and :class:`SyncEventStream`.

    The cursor performs no I/O. A driver asks :meth:`next_request` for the
    ``since``/``limit`` pair to fetch with, reports the outcome through
    :meth:`fetch_succeeded` or :meth:`fetch_failed`, and calls :meth:`drain`
    while the state is ``DRAINING``.

    Args:
        events: Event types to subscribe to. Empty means all types.
        since: Resume after this event id instead of bootstrapping.
        max_retries: Consecutive failed fetches tolerated before giving up.
            None retries forever.
    """

    def __init__(
        self,
        events: Iterable[EventType] = (),
        *,
        since: Optional[int] = None,
        max_retries: Optional[int] = None,
    ):
        self.events: tuple[EventType, ...] = tuple(EventType(e) for e in events)
        self.max_retries = max_retries
        self._since = since
        self._bootstrapping = since is None
        self._buffer: deque[Union[RawEvent, _BrokenEnvelope]] = deque()
        self._state = StreamState.AWAITING_FETCH
        self._failures = 0

    @property
    def since(self) -> Optional[int]:
        """Id of the last event handed to the caller."""
        return self._since

    @property
    def state(self) -> StreamState:
        return self._state

    @property
    def failures(self) -> int:
        """Number of fetches that failed since the last successful one."""
        return self._failures

    def next_request(self) -> tuple[Optional[int], Optional[int]]:
        """Return the ``(since, limit)`` to use for the next fetch."""
        limit = BOOTSTRAP_LIMIT if self._bootstrapping else None
        return self._since, limit

    def fetch_succeeded(self, batch: list[Any]) -> None:
        """Buffer a fetched batch and switch to ``DRAINING``.

        ``batch`` holds :class:`RawEvent` objects or plain JSON envelopes.
        Envelopes are validated one by one; a malformed one is buffered as a
        single error item. The batch is put in ascending id order, and events
        at or below the cursor are dropped, so nothing already delivered is
        delivered again.
        """
        self._failures = 0
        broken: list[_BrokenEnvelope] = []
        fresh: list[Union[RawEvent, _BrokenEnvelope]] = []
        for entry in batch:
            if not isinstance(entry, RawEvent):
                entry = _parse_envelope(entry)
            if entry.id is None:
                broken.append(entry)
            elif self._since is None or entry.id > self._since:
                fresh.append(entry)
        fresh.sort(key=lambda e: e.id)
        if fresh:
            self._bootstrapping = False
        self._buffer = deque(broken + fresh)
        self._state = StreamState.DRAINING

    def fetch_failed(self, error: SyncthingError) -> SyncthingError:
        """Record a failed fetch. The cursor stays where it is.

        Returns:
            The error, to be handed to the caller as a stream item.

        Raises:
            RetryLimitExceeded: If more than ``max_retries`` fetches failed in a row.
        """
        self._failures += 1
        if self.max_retries is not None and self._failures > self.max_retries:
            raise RetryLimitExceeded(self._failures, error) from error
        return error

    def drain(self) -> Optional[StreamItem]:
        """Hand out the oldest buffered event.

        Returns None when there is nothing to deliver on this turn: the buffer
        was empty (the state is now ``AWAITING_FETCH``) or the popped event
        is of a type outside the subscription.
        """
        if not self._buffer:
            self._state = StreamState.AWAITING_FETCH
            return None
        raw = self._buffer.popleft()
        if isinstance(raw, _BrokenEnvelope):
            if raw.id is not None:
                self._since = raw.id
            logger.warning("Skipping malformed event envelope: %s", raw.error)
            return raw.error
        self._since = raw.id
        if self.events and raw.type not in self.events:
            logger.debug("Skipping event %d of unsubscribed type %s", raw.id, raw.type_name)
            return None
        event = Event.from_raw(raw)
        try:
            event.data
        except DecodeError as e:
            logger.warning("Failed to decode event %d (%s): %s", raw.id, raw.type_name, e)
            return e
        return event


class EventStream:
    """Async iterator over the events of one subscription.

    The stream owns the client it was created from and closes it in
    :meth:`aclose`. It is meant for a single consumer; each ``__anext__``
    either serves a buffered event or awaits one request.

    Args:
        client: The client to poll with. It must not be used elsewhere.
        events: Event types to subscribe to. Empty means all types.
        since: Resume after this event id.
        retry_delay: Seconds to wait before repeating a failed fetch.
        max_retries: Consecutive failed fetches tolerated before the stream
            raises :class:`RetryLimitExceeded` and ends. None retries forever.
    """

    def __init__(
        self,
        client: "AsyncSyncthingClient",
        events: Iterable[EventType] = (),
        *,
        since: Optional[int] = None,
        retry_delay: float = 0.0,
        max_retries: Optional[int] = None,
    ):
        self._client = client
        self._cursor = EventCursor(events, since=since, max_retries=max_retries)
        self.retry_delay = retry_delay
        self._finished = False

    @property
    def since(self) -> Optional[int]:
        return self._cursor.since

    @property
    def events(self) -> tuple[EventType, ...]:
        return self._cursor.events

    def __aiter__(self):
        return self

    async def __anext__(self) -> StreamItem:
        while True:
            if self._finished:
                raise StopAsyncIteration
            if self._cursor.state is StreamState.AWAITING_FETCH:
                item = await self._fetch()
            else:
                item = self._cursor.drain()
            if item is not None:
                return item
            # Nothing to hand out this turn; let other tasks run before the next step.
            await asyncio.sleep(0)

    async def _fetch(self) -> Optional[SyncthingError]:
        if self._cursor.failures and self.retry_delay:
            await asyncio.sleep(self.retry_delay)
        since, limit = self._cursor.next_request()
        logger.debug("Fetching events since=%s limit=%s", since, limit)
        try:
            batch = await self._client.get_event_envelopes(since, limit, self._cursor.events)
        except SyncthingError as e:
            logger.warning("Event fetch since=%s failed: %s", since, e)
            try:
                return self._cursor.fetch_failed(e)
            except RetryLimitExceeded:
                self._finished = True
                raise
        self._cursor.fetch_succeeded(batch)
        return None

    async def aclose(self) -> None:
        """Stop the stream and close its client."""
        self._finished = True
        await self._client.close()

    async def __aenter__(self):
        return self

    async def __aexit__(self, *args):
        await self.aclose()


class SyncEventStream:
    """Blocking iterator over the events of one subscription.

    Same semantics as :class:`EventStream`; each ``__next__`` blocks for at
    most one request.
    """

    def __init__(
        self,
        client: "SyncthingClient",
        events: Iterable[EventType] = (),
        *,
        since: Optional[int] = None,
        retry_delay: float = 0.0,
        max_retries: Optional[int] = None,
    ):
        self._client = client
        self._cursor = EventCursor(events, since=since, max_retries=max_retries)
        self.retry_delay = retry_delay
        self._finished = False

    @property
    def since(self) -> Optional[int]:
        return self._cursor.since

    @property
    def events(self) -> tuple[EventType, ...]:
        return self._cursor.events

    def __iter__(self):
        return self

    def __next__(self) -> StreamItem:
        while True:
            if self._finished:
                raise StopIteration
            if self._cursor.state is StreamState.AWAITING_FETCH:
                item = self._fetch()
            else:
                item = self._cursor.drain()
            if item is not None:
                return item

    def _fetch(self) -> Optional[SyncthingError]:
        if self._cursor.failures and self.retry_delay:
            time.sleep(self.retry_delay)
        since, limit = self._cursor.next_request()
        logger.debug("Fetching events since=%s limit=%s", since, limit)
        try:
            batch = self._client.get_event_envelopes(since, limit, self._cursor.events)
        except SyncthingError as e:
            logger.warning("Event fetch since=%s failed: %s", since, e)
            try:
                return self._cursor.fetch_failed(e)
            except RetryLimitExceeded:
                self._finished = True
                raise
        self._cursor.fetch_succeeded(batch)
        return None

    def close(self) -> None:
        """Stop the stream and close its client."""
        self._finished = True
        self._client.close()

    def __enter__(self):
        return self

    def __exit__(self, *args):
        self.close()
