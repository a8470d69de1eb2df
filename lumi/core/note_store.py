"""Grammar note collection."""

import dataclasses
import logging
from typing import Callable, Optional

from lumi.core.models import GrammarNote, now_ms
from lumi.storage.gateway import PersistenceGateway, NOTES_SLOT


logger = logging.getLogger(__name__)


class NoteStore:
    """Owns the user's grammar notes; every save is persisted immediately."""

    def __init__(
        self,
        gateway: PersistenceGateway,
        clock: Callable[[], int] = now_ms,
    ):
        self.gateway = gateway
        self._clock = clock
        self._notes: list[GrammarNote] = gateway.load(NOTES_SLOT)

    @property
    def notes(self) -> tuple[GrammarNote, ...]:
        return tuple(self._notes)

    def __len__(self) -> int:
        return len(self._notes)

    def _index_of(self, note_id: str) -> Optional[int]:
        for i, note in enumerate(self._notes):
            if note.id == note_id:
                return i
        return None

    def get(self, note_id: str) -> Optional[GrammarNote]:
        """Get a note by ID."""
        idx = self._index_of(note_id)
        return self._notes[idx] if idx is not None else None

    def save(
        self,
        existing_id: Optional[str],
        title: str,
        content: str,
    ) -> Optional[GrammarNote]:
        """Create or update a note.

        Args:
            existing_id: ID of the note being edited, or None to create one
            title: Note title; an empty title becomes the placeholder on create
            content: Note body

        Returns:
            The saved note, or None if ``existing_id`` matches no note
        """
        if existing_id is None:
            note = GrammarNote.create(title, content, last_edited=self._clock())
            self._notes.insert(0, note)
            logger.info("Created note %r", note.title)
        else:
            idx = self._index_of(existing_id)
            if idx is None:
                logger.warning("Cannot update missing note %s", existing_id)
                return None
            previous = self._notes[idx]
            note = dataclasses.replace(
                previous,
                title=title,
                content=content,
                last_edited=max(self._clock(), previous.last_edited + 1),
            )
            self._notes[idx] = note
            logger.info("Updated note %r", note.title)

        self._persist()
        return note

    def remove(self, note_id: str) -> bool:
        """Delete a note. Returns False if no note has that ID."""
        idx = self._index_of(note_id)
        if idx is None:
            return False
        del self._notes[idx]
        self._persist()
        return True

    def _persist(self) -> None:
        self.gateway.save(NOTES_SLOT, self._notes)
