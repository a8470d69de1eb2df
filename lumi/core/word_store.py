"""Word collection with derived vocabulary sets."""

import logging
from typing import Callable, Optional

from lumi.core import views
from lumi.core.models import Word, now_ms
from lumi.storage.gateway import PersistenceGateway, WORDS_SLOT


logger = logging.getLogger(__name__)


class WordStore:
    """Owns the user's words; every change is persisted immediately."""

    def __init__(
        self,
        gateway: PersistenceGateway,
        clock: Callable[[], int] = now_ms,
    ):
        self.gateway = gateway
        self._clock = clock
        self._words: list[Word] = gateway.load(WORDS_SLOT)

    @property
    def words(self) -> tuple[Word, ...]:
        """All words, most recently added first."""
        return tuple(self._words)

    def __len__(self) -> int:
        return len(self._words)

    def get(self, word_id: str) -> Optional[Word]:
        """Get a word by ID."""
        for word in self._words:
            if word.id == word_id:
                return word
        return None

    def add(self, term: str, meaning: str, example: str, group: str) -> Optional[Word]:
        """Add a word to a group.

        Returns the new word, or None if ``term`` or ``group`` is blank,
        in which case nothing changes and nothing is written.
        """
        term = term.strip()
        group = group.strip()
        if not term or not group:
            logger.debug("Rejected word: term=%r group=%r", term, group)
            return None

        word = Word.create(
            term=term,
            meaning=meaning,
            example=example,
            group=group,
            created_at=self._clock(),
        )
        self._words.insert(0, word)
        self._persist()
        logger.info("Added %r to %r", word.term, word.group)
        return word

    def remove(self, word_id: str) -> bool:
        """Delete a word. Returns False if no word has that ID."""
        word = self.get(word_id)
        if word is None:
            return False
        self._words.remove(word)
        self._persist()
        logger.info("Removed %r from %r", word.term, word.group)
        return True

    def groups_of(self) -> list[str]:
        """Sorted group names, recomputed from the current words."""
        return views.groups_of(self._words)

    def words_in_group(self, group: str) -> list[Word]:
        return views.words_in_group(self._words, group)

    def _persist(self) -> None:
        self.gateway.save(WORDS_SLOT, self._words)
