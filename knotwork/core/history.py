"""Bounded undo/redo history over full snapshots.

The history knows nothing about splines. It is given a *state source* with
three capabilities::

    source.current_state()      -> snapshot (JSON-serializable)
    source.state_hash()         -> str, equal for equal states
    source.apply_state(state)   -> restore a snapshot

and keeps at most ``size`` snapshots with a cursor on the one currently shown.
"""

from __future__ import annotations

import copy
import hashlib
import json
import logging
from typing import Any, Callable, Optional, Protocol

logger = logging.getLogger(__name__)


class StateSource(Protocol):
    def current_state(self) -> Any: ...

    def state_hash(self) -> str: ...

    def apply_state(self, state: Any) -> None: ...


def stable_hash(state: Any) -> str:
    """Hash of a JSON-serializable state, independent of dict ordering."""
    payload = json.dumps(state, sort_keys=True, separators=(",", ":"))
    return hashlib.sha1(payload.encode("utf-8")).hexdigest()


class HistoryManager:
    def __init__(self, source: StateSource, size: int = 50,
                 on_change: Optional[Callable[[], None]] = None):
        if size < 1:
            raise ValueError("history size must be >= 1")
        self._source = source
        self._size = size
        self._on_change = on_change
        self._cursor = 0
        self._stack: list[Any] = []
        self._last_hash: Optional[str] = None

    @property
    def size(self) -> int:
        return self._size

    @property
    def cursor(self) -> int:
        return self._cursor

    @property
    def states(self) -> tuple:
        return tuple(self._stack)

    def __len__(self) -> int:
        return len(self._stack)

    def can_undo(self) -> bool:
        return bool(self._stack) and self._cursor > 0

    def can_redo(self) -> bool:
        return bool(self._stack) and self._cursor < len(self._stack) - 1

    def resize(self, size: int) -> None:
        """Change the capacity, evicting the oldest snapshots if needed."""
        if size < 1:
            raise ValueError("history size must be >= 1")
        self._size = size
        overflow = len(self._stack) - size
        if overflow > 0:
            del self._stack[:overflow]
            self._cursor = max(0, self._cursor - overflow)
            self._changed()

    def _changed(self):
        if self._on_change:
            self._on_change()

    def _clamp(self, cursor: int) -> int:
        self._cursor = max(0, min(len(self._stack) - 1, cursor))
        return self._cursor

    def push(self, state: Any = None) -> None:
        """
        Record a snapshot after the cursor. Snapshots after the cursor (the redo
        branch) are dropped, and the oldest one is evicted when full.
        """
        if state is None:
            state = self._source.current_state()
        self._stack = self._stack[:self._cursor + 1]
        if len(self._stack) >= self._size:
            self._stack.pop(0)
        self._stack.append(copy.deepcopy(state))
        self._cursor = len(self._stack) - 1
        logger.debug("History push: %d/%d state(s)", len(self._stack), self._size)
        self._changed()

    def push_if_changed(self) -> bool:
        current = self._source.state_hash()
        if current == self._last_hash:
            return False
        self._last_hash = current
        self.push(self._source.current_state())
        return True

    def _apply(self, cursor: int) -> bool:
        if not self._stack:
            return False
        before = self._cursor
        state = self._stack[self._clamp(cursor)]
        if self._cursor == before:
            return False
        self._source.apply_state(copy.deepcopy(state))
        self._last_hash = self._source.state_hash()
        self._changed()
        return True

    def undo(self) -> bool:
        applied = self._apply(self._cursor - 1)
        if applied:
            logger.debug("Undo -> state %d", self._cursor)
        return applied

    def redo(self) -> bool:
        applied = self._apply(self._cursor + 1)
        if applied:
            logger.debug("Redo -> state %d", self._cursor)
        return applied

    def reset(self) -> None:
        self._cursor = 0
        self._stack = []
        self._last_hash = None
        self._changed()
