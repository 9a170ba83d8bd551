"""
Board State Package

In-memory note membership and quadrant configuration, with change
notification for persistence.
"""

from quadboard.state.observable import Observable
from quadboard.state.notes import DuplicateNoteError, MoveOutcome, NoteStore
from quadboard.state.registry import QuadrantRegistry
from quadboard.state.transfer import DropEvent, TransferProtocol

__all__ = [
    "DropEvent",
    "DuplicateNoteError",
    "MoveOutcome",
    "NoteStore",
    "Observable",
    "QuadrantRegistry",
    "TransferProtocol",
]
