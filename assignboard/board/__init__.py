"""Assignment board core: entities, transfers and undo/redo history.

Return type conventions:
- Transfer functions (move, remove_from_project) return TransferResult on
  success and raise TransferError subclasses on rejection.
- BoardSession methods never raise for rejections: move() and
  remove_from_project() return a TransferResult whose .ok is False.
- undo()/redo() return False (session) or None (history log) at the ends.
"""

from assignboard.board.models import (
    Person,
    Project,
    ProjectStatus,
    Snapshot,
    SourceKind,
    InconsistentSnapshot,
    check_invariants,
    parse_status,
)
from assignboard.board.transfer import (
    Outcome,
    TransferResult,
    TransferError,
    NotFound,
    InvalidSource,
    CapacityExceeded,
    move,
    remove_from_project,
    filter_pool,
    matches,
)
from assignboard.board.history import (
    HistoryLog,
    CursorState,
)
from assignboard.board.session import (
    BoardSession,
    HistoryAvailability,
)

__all__ = [
    # Models
    "Person",
    "Project",
    "ProjectStatus",
    "Snapshot",
    "SourceKind",
    "InconsistentSnapshot",
    "check_invariants",
    "parse_status",
    # Transfers
    "Outcome",
    "TransferResult",
    "TransferError",
    "NotFound",
    "InvalidSource",
    "CapacityExceeded",
    "move",
    "remove_from_project",
    "filter_pool",
    "matches",
    # History
    "HistoryLog",
    "CursorState",
    # Session
    "BoardSession",
    "HistoryAvailability",
]
