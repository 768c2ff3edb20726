"""
Linear undo/redo history of board Snapshots.

The log is a list of Snapshots plus a cursor position. The cursor is a
state machine (transitions library) whose state says which history
affordances are available:

    empty     - no entries, position -1
    idle      - one entry, nothing to undo or redo
    undoable  - at the newest entry, older entries exist
    redoable  - at the oldest entry, newer entries exist
    both      - somewhere in the middle

Triggers:
    push          - record a Snapshot (truncates any redo branch)
    step_back     - undo
    step_forward  - redo
    wipe          - drop everything

Usage:
    from assignboard.board.history import HistoryLog

    log = HistoryLog()
    log.record(snapshot)
    previous = log.undo()  # None when there is nothing to undo
"""

import logging
from enum import Enum
from typing import Callable, Optional

from transitions import Machine

from assignboard.board.models import Snapshot

logger = logging.getLogger(__name__)


STATES = ["empty", "idle", "undoable", "redoable", "both"]

# For triggers with several entries the first passing condition wins.
# Conditions are evaluated before the cursor moves.
TRANSITIONS = [
    # Recording always lands on the newest entry
    {"trigger": "push", "source": "*", "dest": "idle", "conditions": "_is_empty", "before": "_append"},
    {"trigger": "push", "source": "*", "dest": "undoable", "before": "_append"},

    # Undo
    {"trigger": "step_back", "source": ["undoable", "both"], "dest": "redoable",
     "conditions": "_back_reaches_oldest", "before": "_move_back"},
    {"trigger": "step_back", "source": ["undoable", "both"], "dest": "both", "before": "_move_back"},

    # Redo
    {"trigger": "step_forward", "source": ["redoable", "both"], "dest": "undoable",
     "conditions": "_forward_reaches_newest", "before": "_move_forward"},
    {"trigger": "step_forward", "source": ["redoable", "both"], "dest": "both", "before": "_move_forward"},

    {"trigger": "wipe", "source": "*", "dest": "empty", "before": "_drop_all"},
]


class CursorState(Enum):
    """History cursor states. Values match STATES."""

    EMPTY = "empty"
    IDLE = "idle"
    UNDOABLE = "undoable"
    REDOABLE = "redoable"
    BOTH = "both"


class HistoryLog:
    """Snapshot history with a cursor.

    Only record() adds entries. undo() and redo() move the cursor and
    never change the number of entries; at either end they are no-ops.
    """

    def __init__(self, on_change: Callable[[str, int, int], None] | None = None):
        """
        Args:
            on_change: Optional callback(state, position, length) called after
                every cursor transition
        """
        self._entries: list[Snapshot] = []
        self._position = -1
        self.on_change = on_change

        self.machine = Machine(
            model=self,
            states=STATES,
            transitions=TRANSITIONS,
            initial="empty",
            auto_transitions=False,
            ignore_invalid_triggers=True,
            send_event=True,
            after_state_change="_after_change",
        )

    # -- public API -------------------------------------------------------

    @property
    def position(self) -> int:
        return self._position

    @property
    def size(self) -> int:
        return len(self._entries)

    @property
    def entries(self) -> tuple[Snapshot, ...]:
        return tuple(self._entries)

    @property
    def current(self) -> Optional[Snapshot]:
        if self._position < 0:
            return None
        return self._entries[self._position]

    @property
    def can_undo(self) -> bool:
        return self.state in ("undoable", "both")

    @property
    def can_redo(self) -> bool:
        return self.state in ("redoable", "both")

    def record(self, snapshot: Snapshot) -> None:
        """Append a Snapshot after the cursor, discarding any redo branch."""
        self.push(snapshot=snapshot)

    def undo(self) -> Optional[Snapshot]:
        """Step back one entry. Returns the new current Snapshot, or None at the oldest entry."""
        if not self.can_undo:
            logger.debug("[HISTORY] nothing to undo")
            return None
        self.step_back()
        return self.current

    def redo(self) -> Optional[Snapshot]:
        """Step forward one entry. Returns the new current Snapshot, or None at the newest entry."""
        if not self.can_redo:
            logger.debug("[HISTORY] nothing to redo")
            return None
        self.step_forward()
        return self.current

    def clear(self) -> None:
        self.wipe()

    # -- guards -----------------------------------------------------------

    def _is_empty(self, event) -> bool:
        return self._position < 0

    def _back_reaches_oldest(self, event) -> bool:
        return self._position - 1 == 0

    def _forward_reaches_newest(self, event) -> bool:
        return self._position + 1 == len(self._entries) - 1

    # -- cursor moves -----------------------------------------------------

    def _append(self, event) -> None:
        snapshot = event.kwargs["snapshot"]
        dropped = len(self._entries) - (self._position + 1)
        if dropped:
            logger.debug(f"[HISTORY] discarding {dropped} redo entr{'y' if dropped == 1 else 'ies'}")
        del self._entries[self._position + 1:]
        self._entries.append(snapshot)
        self._position = len(self._entries) - 1

    def _move_back(self, event) -> None:
        self._position -= 1

    def _move_forward(self, event) -> None:
        self._position += 1

    def _drop_all(self, event) -> None:
        self._entries = []
        self._position = -1

    def _after_change(self, event) -> None:
        trigger = event.event.name
        logger.debug(
            f"[HISTORY] {event.transition.source} -> {event.transition.dest} ({trigger}) "
            f"position={self._position} size={len(self._entries)}"
        )
        if self.on_change:
            self.on_change(self.state, self._position, len(self._entries))
