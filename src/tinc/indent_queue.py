"""FIFO of located prefixes, drained once per rendered file."""

from __future__ import annotations

from collections import deque
from typing import Iterable

from tinc.errors import QueueDesynchronizationError


class IndentQueue:
    """Prefixes in call-site order, each handed out exactly once.

    One queue belongs to one render call. Running dry means more call
    sites were visited than the locator reported, which is a bug in the
    pairing, never a template error.
    """

    def __init__(self, prefixes: Iterable[str] = ()):
        self._items: deque[str] = deque(prefixes)

    def pop(self) -> str:
        """Take the next prefix."""
        if not self._items:
            raise QueueDesynchronizationError(
                "indentation queue exhausted: more call sites than located prefixes"
            )
        return self._items.popleft()

    def __len__(self) -> int:
        return len(self._items)

    def __bool__(self) -> bool:
        return bool(self._items)

    def __repr__(self) -> str:
        return f"IndentQueue({list(self._items)!r})"
