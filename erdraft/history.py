"""Undo/redo history of serialized project snapshots."""

from __future__ import annotations

import logging
from typing import Callable, List, Optional

from erdraft.geometry import Point

_log = logging.getLogger(__name__)

_INIT = "History.__init__"
_FLUSH = "History.flush"


class History:
    """Snapshots taken after edits, merging repeated edits of the same target.

    ``dump`` returns the current project as a string; ``load`` restores a
    project from such a string.
    """

    def __init__(self, dump: Callable[[], str], load: Callable[[str], None]) -> None:
        self._dump = dump
        self._load = load
        self._states: List[str] = []
        self._index = 0
        self._function = _INIT
        self._point = Point()
        self._n = -1
        self._m = -1
        self.save(_INIT)

    def save(
        self,
        function: str,
        point: Optional[Point] = None,
        n: int = -1,
        m: int = -1,
    ) -> None:
        """Record the current project if it differs from the current snapshot.

        A change made by the same ``function`` on the same target (the same
        ``n``/``m`` indices, or the same ``point`` when ``n`` is negative)
        replaces the current snapshot instead of adding one.
        """
        if point is None:
            point = Point()
        project = self._dump()
        if not self._states:
            self._states.append(project)
            self._index = 0
            _log.info("history save [%d]", self._index)
            return
        if project == self._states[self._index]:
            return

        if function != self._function:
            same_target = False
        elif n >= 0:
            same_target = self._n == n and (m < 0 or self._m == m)
        else:
            same_target = self._point == point

        if same_target:
            self._states[self._index] = project
            return

        del self._states[self._index + 1:]
        self._states.append(project)
        self._index = len(self._states) - 1
        self._function = function
        self._point = point
        self._n = n
        self._m = m
        _log.info("history save [%d]", self._index)

    def _restore(self) -> None:
        self._load(self._states[self._index])
        _log.info("history load [%d]", self._index)

    def undo(self) -> bool:
        if self._index > 0 and self._states:
            self._index -= 1
            self._restore()
            return True
        return False

    def redo(self) -> bool:
        if self._states and self._index < len(self._states) - 1:
            self._index += 1
            self._restore()
            return True
        return False

    def flush(self) -> None:
        """Forget all snapshots and start again from the current project."""
        self._index = 0
        self._n = -1
        self._m = -1
        self._states.clear()
        self.save(_FLUSH)

    def __len__(self) -> int:
        return len(self._states)

    def current(self) -> str:
        """The snapshot the history currently points at."""
        return self._states[self._index]