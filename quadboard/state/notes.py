"""
Note Store

Owns every note on the board, partitioned by quadrant.

INVARIANTS:
1. A note id appears in at most one quadrant at any time
2. Insertion order within a quadrant is preserved
3. `move` never changes the total number of notes

DESIGN DECISION: Alongside the per-quadrant sequences we keep an index
from note id to its current quadrant. A move event only *claims* where
the note is; the index lets us check that claim without scanning the
board, and reject it when it is stale instead of trusting it.
"""

from enum import Enum
from typing import Iterable, Mapping, Optional

from quadboard.models.note import (
    QUADRANT_INDICES,
    Note,
    check_quadrant,
)
from quadboard.state.observable import Observable


class DuplicateNoteError(ValueError):
    """A note with this id is already on the board."""

    def __init__(self, note_id: str, quadrant: int):
        self.note_id = note_id
        self.quadrant = quadrant
        super().__init__(f"Note {note_id} already exists in quadrant {quadrant}")


class MoveOutcome(str, Enum):
    """Result of a move request."""
    MOVED = "moved"
    SAME_QUADRANT = "same_quadrant"  # Dropped back where it came from
    UNKNOWN_NOTE = "unknown_note"    # Id not on the board
    STALE_SOURCE = "stale_source"    # Note is not in the claimed quadrant

    @property
    def changed(self) -> bool:
        return self is MoveOutcome.MOVED


class NoteStore(Observable):
    """
    Mapping from quadrant index to an ordered sequence of notes.

    Every successful create, move or delete notifies listeners once.
    No-op requests do not notify.
    """

    def __init__(self):
        super().__init__()
        self._quadrants: dict[int, list[Note]] = {q: [] for q in QUADRANT_INDICES}
        self._index: dict[str, int] = {}

    @classmethod
    def from_snapshot(cls, snapshot: Mapping[int, Iterable[Note]]) -> "NoteStore":
        """
        Rebuild a store from a quadrant -> notes mapping.

        Raises InvalidQuadrantError for unknown quadrants and
        DuplicateNoteError if an id appears twice.
        Listeners are not involved: the new store has none yet.
        """
        store = cls()
        for quadrant, notes in snapshot.items():
            check_quadrant(quadrant)
            for note in notes:
                store._insert(quadrant, note)
        return store

    # -------------------------------------------------------------------------
    # Mutations
    # -------------------------------------------------------------------------

    def create(self, quadrant: int, note: Note) -> bool:
        """
        Append a note to the end of a quadrant.

        Returns False (and changes nothing) if `note` is not a Note.
        """
        check_quadrant(quadrant)
        if not isinstance(note, Note):
            return False

        self._insert(quadrant, note)
        self._notify()
        return True

    def move(self, note_id: str, from_quadrant: int, to_quadrant: int) -> MoveOutcome:
        """
        Move a note from one quadrant to the end of another.

        The source quadrant is the caller's claim. If it does not match
        where the note actually is, nothing changes.
        """
        check_quadrant(from_quadrant)
        check_quadrant(to_quadrant)

        if from_quadrant == to_quadrant:
            return MoveOutcome.SAME_QUADRANT

        actual = self._index.get(note_id)
        if actual is None:
            return MoveOutcome.UNKNOWN_NOTE
        if actual != from_quadrant:
            return MoveOutcome.STALE_SOURCE

        source = self._quadrants[from_quadrant]
        position = self._position(source, note_id)
        note = source.pop(position)
        self._quadrants[to_quadrant].append(note)
        self._index[note_id] = to_quadrant

        self._notify()
        return MoveOutcome.MOVED

    def delete(self, note_id: str) -> Optional[Note]:
        """Remove a note from the board. Returns it, or None if unknown."""
        quadrant = self._index.pop(note_id, None)
        if quadrant is None:
            return None

        notes = self._quadrants[quadrant]
        note = notes.pop(self._position(notes, note_id))

        self._notify()
        return note

    # -------------------------------------------------------------------------
    # Reads
    # -------------------------------------------------------------------------

    def read(self, quadrant: int) -> tuple[Note, ...]:
        """Current notes of a quadrant, in insertion order."""
        check_quadrant(quadrant)
        return tuple(self._quadrants[quadrant])

    def locate(self, note_id: str) -> Optional[int]:
        """Quadrant currently holding the note, or None."""
        return self._index.get(note_id)

    def get(self, note_id: str) -> Optional[Note]:
        quadrant = self._index.get(note_id)
        if quadrant is None:
            return None
        notes = self._quadrants[quadrant]
        return notes[self._position(notes, note_id)]

    def count(self, quadrant: Optional[int] = None) -> int:
        if quadrant is None:
            return len(self._index)
        check_quadrant(quadrant)
        return len(self._quadrants[quadrant])

    def snapshot(self) -> dict[int, list[Note]]:
        """Copy of the full board, quadrant -> notes."""
        return {q: list(notes) for q, notes in self._quadrants.items()}

    def __len__(self) -> int:
        return len(self._index)

    def __contains__(self, note_id: object) -> bool:
        return note_id in self._index

    # -------------------------------------------------------------------------
    # Internals
    # -------------------------------------------------------------------------

    def _insert(self, quadrant: int, note: Note) -> None:
        existing = self._index.get(note.id)
        if existing is not None:
            raise DuplicateNoteError(note.id, existing)
        self._quadrants[quadrant].append(note)
        self._index[note.id] = quadrant

    @staticmethod
    def _position(notes: list[Note], note_id: str) -> int:
        for position, note in enumerate(notes):
            if note.id == note_id:
                return position
        # The index and the sequences are updated together.
        raise RuntimeError(f"Note index out of sync for {note_id}")
