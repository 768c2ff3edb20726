"""
Board session: the Entity Store and History Log for one running board.

Everything mutable lives on a BoardSession instance; there is no module
state. Presentation layers hold one session and call move(),
remove_from_project(), undo(), redo() and filter() on it.
"""

import logging
from dataclasses import dataclass
from typing import Callable, Optional

from assignboard.board.history import HistoryLog
from assignboard.board.models import Person, Snapshot, SourceKind, check_invariants
from assignboard.board import transfer
from assignboard.board.transfer import TransferError, TransferResult

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class HistoryAvailability:
    """Which history affordances the presentation layer should enable."""
    can_undo: bool
    can_redo: bool


class BoardSession:
    """Current board state plus its undo/redo history."""

    def __init__(
        self,
        snapshot: Snapshot,
        on_change: Callable[["BoardSession"], None] | None = None,
        record_seed: bool = True,
    ):
        """
        Args:
            snapshot: Seed state. Validated with check_invariants.
            on_change: Optional callback(session) called after every state change
            record_seed: Record the seed as the oldest history entry so the first
                move can be undone. When False the history starts empty and the
                first recorded entry is the state after the first move.

        Raises:
            InconsistentSnapshot: if the seed breaks an invariant
        """
        check_invariants(snapshot)
        self._seed = snapshot
        self._record_seed = record_seed
        self._snapshot = snapshot
        self.history = HistoryLog()
        self.on_change = on_change
        if record_seed:
            self.history.record(snapshot)
        logger.debug(
            f"[SESSION] seeded with {len(snapshot.people)} people, {len(snapshot.projects)} projects"
        )

    @property
    def snapshot(self) -> Snapshot:
        return self._snapshot

    @property
    def availability(self) -> HistoryAvailability:
        return HistoryAvailability(can_undo=self.history.can_undo, can_redo=self.history.can_redo)

    def pool(self) -> list[Person]:
        return self._snapshot.pool()

    def filter(self, text: str) -> list[Person]:
        """Pool members matching the search text. Read-only, not recorded."""
        return transfer.filter_pool(self._snapshot.pool(), text)

    def move(
        self,
        person_id: str,
        target_project_id: str,
        source_kind: SourceKind | str,
        source_project_id: Optional[str] = None,
    ) -> TransferResult:
        """Move a person into a project. Rejections come back as results, never raised."""
        kind = SourceKind(source_kind)
        return self._apply(
            lambda s: transfer.move(s, person_id, target_project_id, kind, source_project_id)
        )

    def remove_from_project(self, person_id: str) -> TransferResult:
        """Send a person back to the pool."""
        return self._apply(lambda s: transfer.remove_from_project(s, person_id))

    def undo(self) -> bool:
        """Restore the previous Snapshot. Returns False at the oldest entry."""
        previous = self.history.undo()
        if previous is None:
            return False
        self._replace(previous)
        return True

    def redo(self) -> bool:
        """Restore the next Snapshot. Returns False at the newest entry."""
        following = self.history.redo()
        if following is None:
            return False
        self._replace(following)
        return True

    def reset(self) -> None:
        """Return to the seed state with a fresh history."""
        self.history.clear()
        if self._record_seed:
            self.history.record(self._seed)
        logger.info("[SESSION] reset to seed")
        self._replace(self._seed)

    def _apply(self, operation: Callable[[Snapshot], TransferResult]) -> TransferResult:
        try:
            result = operation(self._snapshot)
        except TransferError as e:
            # Stale references are expected from drag events; capacity is user-facing
            logger.info(f"[SESSION] rejected ({e.outcome.value}): {e}")
            return TransferResult.rejected(e, self._snapshot)

        if result.changed:
            self.history.record(result.snapshot)
            self._replace(result.snapshot)
        return result

    def _replace(self, snapshot: Snapshot) -> None:
        self._snapshot = snapshot
        if self.on_change:
            self.on_change(self)
