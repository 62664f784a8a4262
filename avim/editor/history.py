"""Linear undo/redo over full document snapshots."""

import logging

from ..models import Clip
from .clips import ClipStore

logger = logging.getLogger(__name__)


class History:
    def __init__(self, store: ClipStore) -> None:
        self.store = store
        self.undo_stack: list[list[Clip]] = []
        self.redo_stack: list[list[Clip]] = []

    def save_checkpoint(self) -> None:
        """Snapshot the document before a mutation. Clears the redo stack."""
        self.undo_stack.append(self.store.snapshot())
        self.redo_stack.clear()

    def undo(self) -> bool:
        if not self.undo_stack:
            return False
        self.redo_stack.append(self.store.snapshot())
        self.store.load(self.undo_stack.pop())
        logger.debug("Undo: %d snapshot(s) left", len(self.undo_stack))
        return True

    def redo(self) -> bool:
        if not self.redo_stack:
            return False
        self.undo_stack.append(self.store.snapshot())
        self.store.load(self.redo_stack.pop())
        logger.debug("Redo: %d snapshot(s) left", len(self.redo_stack))
        return True
