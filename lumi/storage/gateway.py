"""Snapshot persistence for the word and grammar note collections."""

import json
import logging
from typing import Callable, Sequence

from lumi.core.models import GrammarNote, Word
from lumi.storage.base import SlotBackend


logger = logging.getLogger(__name__)

WORDS_SLOT = "words"
NOTES_SLOT = "grammar_notes"

SLOT_TYPES: dict[str, Callable[[dict], object]] = {
    WORDS_SLOT: Word.from_dict,
    NOTES_SLOT: GrammarNote.from_dict,
}


class PersistenceGateway:
    """Reads and writes whole-collection snapshots.

    Each slot holds a JSON array with every record of its collection. The
    gateway never mutates records; it only converts them to and from that
    array.
    """

    def __init__(self, backend: SlotBackend):
        self.backend = backend

    def load(self, slot: str) -> list:
        """
        Load the collection stored in a slot.

        Args:
            slot: ``WORDS_SLOT`` or ``NOTES_SLOT``

        Returns:
            The stored records, or an empty list if the slot is missing,
            unreadable or malformed
        """
        from_dict = SLOT_TYPES[slot]

        try:
            payload = self.backend.read(slot)
        except (OSError, UnicodeDecodeError) as e:
            logger.warning("Could not read slot %s: %s", slot, e)
            return []
        if payload is None:
            return []

        try:
            data = json.loads(payload)
            if not isinstance(data, list):
                raise ValueError(f"expected a JSON array, got {type(data).__name__}")
            if not all(isinstance(item, dict) for item in data):
                raise ValueError("expected an array of JSON objects")
            return [from_dict(item) for item in data]
        except (ValueError, KeyError, TypeError) as e:
            logger.warning("Discarding malformed snapshot in slot %s: %s", slot, e)
            return []

    def save(self, slot: str, records: Sequence) -> None:
        """Overwrite a slot with a snapshot of ``records``."""
        if slot not in SLOT_TYPES:
            raise KeyError(slot)
        payload = json.dumps(
            [record.to_dict() for record in records],
            ensure_ascii=False,
            indent=2,
        )
        self.backend.write(slot, payload)
        logger.debug("Saved %d record(s) to %s", len(records), slot)
