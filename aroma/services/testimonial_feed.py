"""
Testimonial Live Feed

Pushes the most recent active testimonials to connected browsers over
Server-Sent Events. Each client gets a snapshot on connect and a fresh
snapshot after every testimonial write.

Writes happen in sync route handlers (threadpool), while subscribers live
on the event loop, so `publish()` hands the notification over with
`call_soon_threadsafe`. The hub is in-process: with several server
processes each one only sees its own writes.
"""

import asyncio
import json
import logging
import threading
from typing import Any, AsyncIterator, Awaitable, Callable

from starlette.concurrency import run_in_threadpool

logger = logging.getLogger(__name__)

KEEPALIVE_SECONDS = 15.0

Snapshot = Callable[[], list[dict[str, Any]]]


def format_event(payload: Any) -> str:
    return f"data: {json.dumps(payload, default=str)}\n\n"


def _notify(queue: asyncio.Queue) -> None:
    # A pending notification already covers this change
    if queue.empty():
        queue.put_nowait(True)


class TestimonialFeed:
    """Fan-out of "testimonials changed" signals to SSE subscribers."""

    def __init__(self):
        self._subscribers: dict[asyncio.Queue, asyncio.AbstractEventLoop] = {}
        self._lock = threading.Lock()

    @property
    def subscriber_count(self) -> int:
        with self._lock:
            return len(self._subscribers)

    def subscribe(self) -> asyncio.Queue:
        """Register a subscriber; must be called from the event loop."""
        queue: asyncio.Queue = asyncio.Queue(maxsize=1)
        with self._lock:
            self._subscribers[queue] = asyncio.get_running_loop()
        logger.debug(f"Feed subscriber added ({self.subscriber_count} connected)")
        return queue

    def unsubscribe(self, queue: asyncio.Queue) -> None:
        with self._lock:
            self._subscribers.pop(queue, None)
        logger.debug(f"Feed subscriber removed ({self.subscriber_count} connected)")

    def publish(self) -> int:
        """Signal every subscriber; safe to call from any thread."""
        with self._lock:
            targets = list(self._subscribers.items())
        for queue, loop in targets:
            if loop.is_closed():
                self.unsubscribe(queue)
                continue
            try:
                loop.call_soon_threadsafe(_notify, queue)
            except RuntimeError:
                # Loop closed after the check above
                self.unsubscribe(queue)
        if targets:
            logger.debug(f"Feed change published to {len(targets)} subscriber(s)")
        return len(targets)


async def event_stream(
    feed: TestimonialFeed,
    snapshot: Snapshot,
    is_disconnected: Callable[[], Awaitable[bool]],
    keepalive: float = KEEPALIVE_SECONDS,
) -> AsyncIterator[str]:
    """
    SSE body: initial snapshot, then one snapshot per change.

    Comment lines are sent every `keepalive` seconds so that a vanished
    client is noticed even when nothing changes.
    """
    queue = feed.subscribe()
    try:
        yield format_event(await run_in_threadpool(snapshot))
        while True:
            if await is_disconnected():
                break
            try:
                await asyncio.wait_for(queue.get(), timeout=keepalive)
            except asyncio.TimeoutError:
                yield ": keepalive\n\n"
                continue
            yield format_event(await run_in_threadpool(snapshot))
    finally:
        feed.unsubscribe(queue)


_feed = TestimonialFeed()


def get_testimonial_feed() -> TestimonialFeed:
    """Process-wide feed instance (FastAPI dependency)."""
    return _feed
