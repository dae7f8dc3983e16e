"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/channels.py
Closable, unbounded result streams and a select() that waits on several of them.

Producers never block on put(), so a hashing task can always hand off its result
and finish, no matter how far behind the consumer is. Closing a channel is a normal
terminal signal: items queued before close() are still delivered, and once the
channel is drained select() reports it with ok=False.
"""

import threading
from collections import deque
from typing import Any, Optional, Tuple


class ChannelClosed(Exception):
    """Raised when putting into a channel that has already been closed."""


class Channel:
    """
    Unbounded FIFO stream with close semantics.
    Channels that are selected together must share the same Condition.
    """

    def __init__(self, name: str, condition: Optional[threading.Condition] = None):
        self.name = name
        self._cond = condition or threading.Condition()
        self._items = deque()
        self._closed = False

    @property
    def condition(self) -> threading.Condition:
        return self._cond

    @property
    def closed(self) -> bool:
        with self._cond:
            return self._closed

    def put(self, item: Any) -> None:
        with self._cond:
            if self._closed:
                raise ChannelClosed(f"Channel '{self.name}' is closed")
            self._items.append(item)
            self._cond.notify_all()

    def close(self) -> None:
        with self._cond:
            self._closed = True
            self._cond.notify_all()

    def get(self, timeout: Optional[float] = None) -> Tuple[Any, bool]:
        """Blocks for the next item. Returns (item, True), or (None, False) once closed and drained."""
        _, item, ok = select(self, timeout=timeout)
        return item, ok

    def _poll(self):
        # caller holds the condition
        if self._items:
            return self._items.popleft(), True
        if self._closed:
            return None, False
        return None

    def __len__(self):
        with self._cond:
            return len(self._items)

    def __repr__(self):
        return f"<Channel name={self.name}, pending={len(self)}, closed={self.closed}>"


def select(*channels: Channel, timeout: Optional[float] = None) -> Tuple[Channel, Any, bool]:
    """
    Wait until any of `channels` has an item or is closed and drained.

    Returns (channel, item, ok). ok is False when the channel is closed and empty;
    callers stop watching that channel and keep selecting on the rest.
    Channels are polled in the given order. Raises TimeoutError if `timeout` expires.
    """
    if not channels:
        raise ValueError("select() needs at least one channel")

    cond = channels[0].condition
    if any(ch.condition is not cond for ch in channels[1:]):
        raise ValueError("Channels passed to select() must share one condition")

    with cond:
        while True:
            for ch in channels:
                outcome = ch._poll()
                if outcome is not None:
                    item, ok = outcome
                    return ch, item, ok
            if not cond.wait(timeout):
                raise TimeoutError("select() timed out")
