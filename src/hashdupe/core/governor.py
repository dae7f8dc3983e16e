"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/governor.py
Admission gate that caps how many hashing operations run at once.
"""

import threading
from contextlib import contextmanager


class AdmissionGate:
    """
    A fixed pool of admission slots.

    Tasks are spawned freely; each one blocks in `slot()` until one of `capacity`
    slots is free and gives it back when the block exits, whether the work inside
    succeeded or raised. BoundedSemaphore turns a double release into a ValueError.
    """

    def __init__(self, capacity: int):
        if capacity < 1:
            raise ValueError("Capacity must be at least 1")
        self.capacity = capacity
        self._slots = threading.BoundedSemaphore(capacity)
        self._lock = threading.Lock()
        self._active = 0
        self._peak = 0

    @contextmanager
    def slot(self):
        self._slots.acquire()
        with self._lock:
            self._active += 1
            if self._active > self._peak:
                self._peak = self._active
        try:
            yield
        finally:
            with self._lock:
                self._active -= 1
            self._slots.release()

    @property
    def active(self) -> int:
        """Slots currently held."""
        with self._lock:
            return self._active

    @property
    def peak(self) -> int:
        """Highest number of slots ever held at the same time."""
        with self._lock:
            return self._peak

    def __repr__(self):
        return f"<AdmissionGate active={self.active}/{self.capacity}>"
