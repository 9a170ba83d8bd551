"""
Transfer Protocol

The contract between the input layer (drag and drop) and the Note Store.

A drag starts on a rendered note and stamps two things into the drag
payload: the note id and the quadrant it was rendered in. The drop lands
on a quadrant. Together they make one `move` call.

The protocol forwards the claim as-is. It never searches for the note;
the Note Store checks the claim against its id index and turns stale or
duplicate drops into no-op outcomes.
"""

from typing import Optional

import structlog
from pydantic import BaseModel, ConfigDict, Field

from quadboard.state.notes import MoveOutcome, NoteStore


class DropEvent(BaseModel):
    """Payload carried from drag start to drop."""
    model_config = ConfigDict(frozen=True)

    note_id: str = Field(
        default="",
        description="Id of the dragged note (may be empty for foreign drags)"
    )
    source_quadrant: int = Field(
        ...,
        description="Quadrant the note was rendered in when the drag started"
    )


class TransferProtocol:
    """Turns drop events into Note Store moves."""

    def __init__(self, store: NoteStore):
        self._store = store
        self._logger = structlog.get_logger(__name__)

    def handle_drop(self, event: DropEvent, target_quadrant: int) -> MoveOutcome:
        """
        Apply a drop onto `target_quadrant`.

        Drops without a note id (something other than a note was dragged)
        are ignored.
        """
        if not event.note_id:
            return MoveOutcome.UNKNOWN_NOTE

        outcome = self._store.move(event.note_id, event.source_quadrant, target_quadrant)

        if outcome is MoveOutcome.STALE_SOURCE:
            self._logger.info(
                "stale_drop_ignored",
                note_id=event.note_id,
                claimed_quadrant=event.source_quadrant,
                actual_quadrant=self._store.locate(event.note_id),
                target_quadrant=target_quadrant,
            )
        elif outcome is not MoveOutcome.MOVED:
            self._logger.debug(
                "drop_ignored",
                note_id=event.note_id,
                outcome=outcome.value,
            )
        return outcome

    def drop(self, note_id: Optional[str], source_quadrant: int,
             target_quadrant: int) -> MoveOutcome:
        """Shorthand for building the event and handling it."""
        event = DropEvent(note_id=note_id or "", source_quadrant=source_quadrant)
        return self.handle_drop(event, target_quadrant)
