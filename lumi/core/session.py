"""Study session: the stores, the navigator and the add-word form in one place.

The UI receives a StudySession and goes through its methods for every
change, so there is no shared module-level state.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from lumi.core.models import AddWordForm, GrammarNote, Word, WordSuggestion
from lumi.core.navigation import (
    GroupDetail,
    Mode,
    Navigator,
    NoteEditor,
    State,
    WordDetail,
)
from lumi.core.note_store import NoteStore
from lumi.core.word_store import WordStore
from lumi.storage.gateway import PersistenceGateway


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SuggestionRequest:
    """A pending suggestion, tied to the form it was requested from."""
    token: str
    term: str


class StudySession:
    """Everything a running app needs, passed around explicitly."""

    def __init__(self, words: WordStore, notes: NoteStore, suggester=None):
        self.words = words
        self.notes = notes
        self.suggester = suggester
        self.navigator = Navigator()

    @classmethod
    def open(cls, gateway: PersistenceGateway, suggester=None) -> "StudySession":
        """Load both collections once and start at the group list."""
        session = cls(WordStore(gateway), NoteStore(gateway), suggester)
        logger.info(
            "Loaded %d word(s) in %d group(s), %d note(s)",
            len(session.words),
            len(session.words.groups_of()),
            len(session.notes),
        )
        return session

    @property
    def state(self) -> State:
        return self.navigator.state

    @property
    def mode(self) -> Mode:
        return self.navigator.mode

    # Navigation

    def switch_mode(self, mode: Mode) -> State:
        return self.navigator.switch_mode(mode)

    def open_group(self, group: str) -> State:
        if group not in self.words.groups_of():
            raise ValueError(f"no such group: {group!r}")
        return self.navigator.open_group(group)

    def open_word(self, word: Word) -> State:
        return self.navigator.open_word(word)

    def back(self) -> State:
        return self.navigator.back()

    def start_add_word(self) -> AddWordForm:
        return self.navigator.start_add_word()

    def start_edit_note(self, note: Optional[GrammarNote] = None) -> State:
        return self.navigator.start_edit_note(note)

    # Words

    def commit_word(self) -> Optional[Word]:
        """Add the word described by the active form and return to the groups.

        Returns None, leaving the form and screen as they were, if the form
        is missing a term or a group.
        """
        form = self.navigator.active_form()
        if form is None:
            return None
        word = self.words.add(form.term, form.meaning, form.example, form.group_name)
        if word is not None:
            self.navigator.word_committed()
        return word

    def remove_word(self, word: Word) -> bool:
        """Delete the word shown in the word detail view."""
        if not self.words.remove(word.id):
            return False
        if isinstance(self.state, WordDetail):
            self.navigator.word_removed(word, self.words.groups_of())
        return True

    def current_group_words(self) -> list[Word]:
        state = self.state
        if isinstance(state, GroupDetail):
            return self.words.words_in_group(state.group)
        return []

    # Notes

    def commit_note(self, title: str, content: str) -> Optional[GrammarNote]:
        """Save the note in the editor and return to the note list.

        The editor's selection decides between update and create.
        """
        state = self.state
        if not isinstance(state, NoteEditor):
            return None
        existing_id = state.note.id if state.note is not None else None
        note = self.notes.save(existing_id, title, content)
        if note is not None:
            self.navigator.note_committed()
        return note

    def remove_note(self) -> bool:
        """Delete the note open in the editor."""
        state = self.state
        if not isinstance(state, NoteEditor) or state.note is None:
            return False
        removed = self.notes.remove(state.note.id)
        if removed:
            self.navigator.note_removed()
        return removed

    # Suggestions

    def request_suggestion(self) -> Optional[SuggestionRequest]:
        """Mark the active form busy and describe the request to run.

        Returns None if no add-word form is open, its term is blank, or a
        request for it is already pending.
        """
        form = self.navigator.active_form()
        if form is None or form.busy or not form.term.strip():
            return None
        form.busy = True
        return SuggestionRequest(token=form.token, term=form.term.strip())

    def fetch_suggestion(self, request: SuggestionRequest) -> Optional[WordSuggestion]:
        """Run the provider call. Safe to call off the main thread."""
        if self.suggester is None:
            return None
        return self.suggester.suggest(request.term)

    def apply_suggestion(
        self,
        request: SuggestionRequest,
        suggestion: Optional[WordSuggestion],
    ) -> bool:
        """Fill the form the request came from, if it is still on screen.

        Returns True if the form fields were changed.
        """
        form = self.navigator.active_form()
        if form is None or form.token != request.token:
            logger.debug("Discarding stale suggestion for %r", request.term)
            return False
        form.busy = False
        if suggestion is None:
            return False
        form.meaning = suggestion.meaning
        form.example = suggestion.example
        return True
