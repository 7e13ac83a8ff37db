"""Progress event sinks.

A sink receives every ProgressEvent of one research run, in the order the
engine emits them. Sinks never reorder or drop events.
"""
from __future__ import annotations

import asyncio
from typing import AsyncIterator, Callable, Protocol, runtime_checkable

from extreme_search.models.events import ProgressEvent


@runtime_checkable
class EventSink(Protocol):
    def write(self, event: ProgressEvent) -> None: ...


class CallbackSink:
    """Forwards each event synchronously to a callback."""

    def __init__(self, callback: Callable[[ProgressEvent], None]):
        self._callback = callback

    def write(self, event: ProgressEvent) -> None:
        self._callback(event)


class ListSink:
    """Collects events in memory."""

    def __init__(self) -> None:
        self.events: list[ProgressEvent] = []

    def write(self, event: ProgressEvent) -> None:
        self.events.append(event)

    def for_query(self, query_id: str) -> list[ProgressEvent]:
        return [e for e in self.events if e.query_id == query_id]


_CLOSED = object()


class QueueSink:
    """Ordered asyncio channel between the engine and a consumer task.

    The queue is unbounded so `write` never blocks the research loop;
    the producer calls `close()` when the run ends.
    """

    def __init__(self) -> None:
        self._queue: asyncio.Queue[object] = asyncio.Queue()
        self._closed = False

    def write(self, event: ProgressEvent) -> None:
        if self._closed:
            raise RuntimeError("QueueSink is closed")
        self._queue.put_nowait(event)

    def close(self) -> None:
        if not self._closed:
            self._closed = True
            self._queue.put_nowait(_CLOSED)

    async def __aiter__(self) -> AsyncIterator[ProgressEvent]:
        while True:
            item = await self._queue.get()
            if item is _CLOSED:
                return
            yield item  # type: ignore[misc]


def emit(sink: EventSink | None, event: ProgressEvent) -> None:
    if sink is not None:
        sink.write(event)
