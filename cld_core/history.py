"""Undo/redo over full diagram snapshots."""

from __future__ import annotations

import copy
import logging
from typing import List, Optional

from .model import DiagramState

logger = logging.getLogger(__name__)


class History:
    """Two stacks of :class:`DiagramState` copies.

    Callers push the state as it was immediately before each mutation with
    :meth:`snapshot`. :meth:`undo` and :meth:`redo` swap the caller's current
    state for a stored one and never snapshot on their own.
    """

    def __init__(self) -> None:
        self._past: List[DiagramState] = []
        self._future: List[DiagramState] = []

    @property
    def can_undo(self) -> bool:
        return bool(self._past)

    @property
    def can_redo(self) -> bool:
        return bool(self._future)

    @property
    def depth(self) -> int:
        return len(self._past)

    def snapshot(self, state: DiagramState) -> None:
        self._past.append(copy.deepcopy(state))
        self._future.clear()

    def undo(self, current: DiagramState) -> Optional[DiagramState]:
        """Return the previous state, or ``None`` when there is nothing to undo."""

        if not self._past:
            return None
        previous = self._past.pop()
        self._future.append(copy.deepcopy(current))
        logger.debug("Undo: %d undo / %d redo snapshot(s) left", len(self._past), len(self._future))
        return previous

    def redo(self, current: DiagramState) -> Optional[DiagramState]:
        """Return the next state, or ``None`` when there is nothing to redo."""

        if not self._future:
            return None
        following = self._future.pop()
        self._past.append(copy.deepcopy(current))
        logger.debug("Redo: %d undo / %d redo snapshot(s) left", len(self._past), len(self._future))
        return following

    def clear(self) -> None:
        self._past.clear()
        self._future.clear()


__all__ = ["History"]
