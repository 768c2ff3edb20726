"""Assignment board: people, capacity-limited projects, undo/redo history."""

__version__ = "0.1.0"
