"""
In-process fan-out of inbound frames.

The connection pump is the only producer. Subscribers see every frame published
after they subscribed, in publish order. There is no replay for late
subscribers.
"""

import itertools
from typing import Callable

FrameHandler = Callable[[str], None]


class EventRelay:
    def __init__(self) -> None:
        self._subscribers: dict[int, FrameHandler] = {}
        self._handles = itertools.count(1)

    @property
    def subscriber_count(self) -> int:
        return len(self._subscribers)

    def subscribe(self, callback: FrameHandler) -> int:
        """Register a callback. Returns the handle to pass to unsubscribe()."""
        handle = next(self._handles)
        self._subscribers[handle] = callback
        return handle

    def unsubscribe(self, handle: int) -> None:
        self._subscribers.pop(handle, None)

    def publish(self, frame: str) -> None:
        # Snapshot: a callback subscribing during delivery starts with the next frame.
        for callback in list(self._subscribers.values()):
            callback(frame)
