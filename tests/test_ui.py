"""Tests for the urwid app shell, driven without a main loop."""

import tempfile

from lumi.core.models import WordSuggestion
from lumi.core.navigation import Groups, Mode, NotesList
from lumi.core.session import StudySession
from lumi.core.tts import TextToSpeech
from lumi.storage.gateway import PersistenceGateway
from lumi.storage.memory import MemoryBackend
from lumi.ui.app import App
from lumi.ui.screens import (
    AddWordScreen,
    GroupDetailScreen,
    GroupsScreen,
    NoteEditorScreen,
    NotesListScreen,
    WordDetailScreen,
)


class FixedSuggester:

    def __init__(self, suggestion):
        self.suggestion = suggestion

    def suggest(self, term):
        return self.suggestion


class TestApp:

    def setup_method(self):
        suggester = FixedSuggester(WordSuggestion("議程", "Check the agenda."))
        self.session = StudySession.open(PersistenceGateway(MemoryBackend()), suggester)
        self.app = App(self.session, tts=TextToSpeech(cache_dir=tempfile.mkdtemp()))

    @property
    def screen(self):
        return self.app.body.original_widget

    def status(self) -> str:
        return self.app.status_bar.text_widget.text

    def test_starts_on_groups(self):
        assert isinstance(self.screen, GroupsScreen)
        assert "Words: 0" in self.status()

    def test_add_word_through_form(self):
        self.app.start_add_word()
        assert isinstance(self.screen, AddWordScreen)
        self.screen.term_edit.set_text("agenda")
        self.screen.group_edit.set_text("Meetings")

        self.app.request_suggestion()
        assert self.screen.meaning_edit.text == "議程"
        assert self.screen.example_edit.text == "Check the agenda."

        self.app.commit_word()
        assert isinstance(self.screen, GroupsScreen)
        assert self.session.words.groups_of() == ["Meetings"]
        assert "Added 'agenda' to Meetings" in self.status()

    def test_missing_group_keeps_form(self):
        self.app.start_add_word()
        self.screen.term_edit.set_text("agenda")
        self.app.commit_word()
        assert isinstance(self.screen, AddWordScreen)
        assert "required" in self.status()

    def test_existing_group_radio(self):
        self.session.words.add("agenda", "", "", "Meetings")
        self.app.start_add_word()
        screen = self.screen
        meetings = screen.radio_group[1]
        meetings.set_state(True)
        assert screen.form.group_name == "Meetings"
        screen.group_edit.set_text("Travel")
        assert screen.new_group_button.state
        assert screen.form.group_name == "Travel"

    def test_browse_word_and_back(self):
        word = self.session.words.add("agenda", "議程", "", "Meetings")
        self.app.render()
        self.app.open_group("Meetings")
        assert isinstance(self.screen, GroupDetailScreen)
        self.app.open_word(word)
        assert isinstance(self.screen, WordDetailScreen)
        self.app.handle_input("esc")
        assert isinstance(self.screen, GroupDetailScreen)
        self.app.handle_input("esc")
        assert isinstance(self.screen, GroupsScreen)

    def test_delete_word(self):
        word = self.session.words.add("agenda", "", "", "Meetings")
        self.app.open_group("Meetings")
        self.app.open_word(word)
        self.app.remove_word(word)
        assert isinstance(self.screen, GroupsScreen)
        assert len(self.session.words) == 0

    def test_switch_tabs(self):
        self.app.handle_input("2")
        assert isinstance(self.screen, NotesListScreen)
        assert self.session.state == NotesList()
        assert self.app.tab_bar.active_tab == 1
        self.app.handle_input("1")
        assert self.session.state == Groups()

    def test_tab_click_switches_mode(self):
        self.app.tab_bar.set_active(1)
        assert self.session.mode == Mode.GRAMMAR
        assert isinstance(self.screen, NotesListScreen)

    def test_note_create_and_edit(self):
        self.app.switch_mode(Mode.GRAMMAR)
        self.app.start_edit_note(None)
        assert isinstance(self.screen, NoteEditorScreen)
        self.app.commit_note("", "Some rule")
        assert isinstance(self.screen, NotesListScreen)
        note = self.session.notes.notes[0]
        assert note.title == "New Note"

        self.app.start_edit_note(note)
        self.screen.title_edit.set_text("Articles")
        self.app.commit_note(self.screen.title_edit.text, self.screen.content_edit.text)
        assert self.session.notes.notes[0].title == "Articles"
        assert len(self.session.notes) == 1

    def test_speak_without_gtts_reports(self):
        self.app.tts._gtts_available = False
        self.app.speak("agenda", "en")
        assert "TTS not available" in self.status()
