"""Navigation state machine for the vocabulary and grammar modes.

Each screen is a small frozen dataclass carrying exactly the data it
needs, so a detail view without its selected entity cannot exist.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Optional, Union

from lumi.core.models import AddWordForm, GrammarNote, Word
from lumi.exceptions import InvalidTransition


class Mode(Enum):
    """Top-level tab."""
    VOCABULARY = "vocabulary"
    GRAMMAR = "grammar"


@dataclass(frozen=True)
class Groups:
    """List of vocabulary sets."""


@dataclass(frozen=True)
class GroupDetail:
    """Words of one vocabulary set."""
    group: str


@dataclass(frozen=True)
class WordDetail:
    """A single word."""
    word: Word


@dataclass(frozen=True)
class AddWord:
    """The add-word form."""
    form: AddWordForm


@dataclass(frozen=True)
class NotesList:
    """List of grammar notes."""


@dataclass(frozen=True)
class NoteEditor:
    """Editor for a grammar note; ``note`` is None when creating."""
    note: Optional[GrammarNote] = None

    @property
    def is_new(self) -> bool:
        return self.note is None


State = Union[Groups, GroupDetail, WordDetail, AddWord, NotesList, NoteEditor]

LIST_VIEWS = {
    Mode.VOCABULARY: Groups,
    Mode.GRAMMAR: NotesList,
}


class Navigator:
    """Owns the active mode and the current screen."""

    def __init__(self):
        self.mode = Mode.VOCABULARY
        self.state: State = Groups()

    def _require(self, transition: str, *allowed: type) -> None:
        if not isinstance(self.state, allowed):
            raise InvalidTransition(transition, self.state)

    def switch_mode(self, mode: Mode) -> State:
        """Switch tabs, always landing on the mode's list view."""
        self.mode = mode
        self.state = LIST_VIEWS[mode]()
        return self.state

    def open_group(self, group: str) -> State:
        self._require("open group", Groups)
        self.state = GroupDetail(group)
        return self.state

    def open_word(self, word: Word) -> State:
        self._require("open word", GroupDetail)
        if word.group != self.state.group:
            raise InvalidTransition(f"open word of group {word.group!r}", self.state)
        self.state = WordDetail(word)
        return self.state

    def back(self) -> State:
        """Go up one level. At a list view this does nothing."""
        state = self.state
        if isinstance(state, WordDetail):
            self.state = GroupDetail(state.word.group)
        elif isinstance(state, (GroupDetail, AddWord)):
            self.state = Groups()
        elif isinstance(state, NoteEditor):
            self.state = NotesList()
        return self.state

    def start_add_word(self) -> AddWordForm:
        """Open a blank add-word form and return it."""
        self._require("start adding a word", Groups)
        form = AddWordForm()
        self.state = AddWord(form)
        return form

    def start_edit_note(self, note: Optional[GrammarNote] = None) -> State:
        self._require("edit a note", NotesList)
        self.state = NoteEditor(note)
        return self.state

    def word_committed(self) -> State:
        self._require("commit a word", AddWord)
        self.state = Groups()
        return self.state

    def note_committed(self) -> State:
        self._require("commit a note", NoteEditor)
        self.state = NotesList()
        return self.state

    def word_removed(self, word: Word, remaining_groups: Iterable[str]) -> State:
        """Leave the detail view of a word that no longer exists."""
        self._require("remove a word", WordDetail)
        if word.group in remaining_groups:
            self.state = GroupDetail(word.group)
        else:
            self.state = Groups()
        return self.state

    def note_removed(self) -> State:
        self._require("remove a note", NoteEditor)
        self.state = NotesList()
        return self.state

    def active_form(self) -> Optional[AddWordForm]:
        """The add-word form if it is the current screen."""
        if isinstance(self.state, AddWord):
            return self.state.form
        return None
