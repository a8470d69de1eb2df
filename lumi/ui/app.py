"""Main application entry point."""

import logging
import os
import threading
from typing import Callable, Optional

import urwid
from dotenv import load_dotenv

from lumi.ai.suggester import WordSuggester, DEFAULT_MEANING_LANGUAGE
from lumi.config import build_backend, build_provider, load_config, setup_logging
from lumi.core.models import GrammarNote, Word
from lumi.core.navigation import (
    AddWord,
    GroupDetail,
    Groups,
    Mode,
    NoteEditor,
    NotesList,
    WordDetail,
)
from lumi.core.session import StudySession
from lumi.core.tts import TextToSpeech
from lumi.exceptions import TTSError
from lumi.storage.gateway import PersistenceGateway
from lumi.ui.screens import (
    AddWordScreen,
    GroupDetailScreen,
    GroupsScreen,
    NoteEditorScreen,
    NotesListScreen,
    WordDetailScreen,
)
from lumi.ui.theme import PALETTE
from lumi.ui.widgets import StatusBar, TabBar


logger = logging.getLogger(__name__)


class App:
    """Main application class.

    Renders whatever the session's navigator says is current; every
    user action goes through the session and is followed by a re-render.
    """

    TAB_NAMES = ["Vocabulary", "Grammar"]
    TAB_MODES = [Mode.VOCABULARY, Mode.GRAMMAR]

    def __init__(self, session: StudySession, tts: Optional[TextToSpeech] = None):
        self.session = session
        self.tts = tts or TextToSpeech()
        self.loop: Optional[urwid.MainLoop] = None

        self.tab_bar = TabBar(self.TAB_NAMES, on_tab_change=self._on_tab_change)
        self.status_bar = StatusBar()
        self.body = urwid.WidgetPlaceholder(urwid.SolidFill(" "))
        self.frame = urwid.Frame(
            header=self.tab_bar,
            body=self.body,
            footer=self.status_bar,
        )
        self.render()

    @classmethod
    def from_config(cls, config: dict) -> "App":
        """Build storage, AI and session from a loaded config."""
        gateway = PersistenceGateway(build_backend(config))
        ai_config = config.get("ai") or {}
        suggester = WordSuggester(
            build_provider(config),
            meaning_language=ai_config.get("meaning_language", DEFAULT_MEANING_LANGUAGE),
        )
        return cls(StudySession.open(gateway, suggester))

    # Rendering

    def render(self, message: Optional[str] = None):
        """Rebuild the body for the current navigation state."""
        state = self.session.state
        if isinstance(state, Groups):
            screen = GroupsScreen(self)
        elif isinstance(state, GroupDetail):
            screen = GroupDetailScreen(self, state.group)
        elif isinstance(state, WordDetail):
            screen = WordDetailScreen(self, state.word)
        elif isinstance(state, AddWord):
            screen = AddWordScreen(self, state.form)
        elif isinstance(state, NotesList):
            screen = NotesListScreen(self)
        elif isinstance(state, NoteEditor):
            screen = NoteEditorScreen(self, state.note)
        else:
            raise TypeError(f"Unhandled state {state!r}")

        self.body.original_widget = screen
        self.tab_bar.set_active(self.TAB_MODES.index(self.session.mode), notify=False)
        self.update_status(message)

    def update_status(self, message: Optional[str] = None):
        """Show a message, or the key hints of the current screen."""
        if message:
            self.status_bar.set_text(message)
            return
        words = self.session.words
        base_status = f"Words: {len(words)} | Sets: {len(words.groups_of())} | Notes: {len(self.session.notes)}"
        hint = getattr(self.body.original_widget, "hint", "")
        self.status_bar.set_text(f"{base_status} | {hint}")

    def show_message(self, message: str):
        """Show a temporary message in the status bar."""
        self.status_bar.set_text(message)

    # Actions called by screens

    def _on_tab_change(self, index: int):
        self.session.switch_mode(self.TAB_MODES[index])
        self.render()

    def switch_mode(self, mode: Mode):
        self.session.switch_mode(mode)
        self.render()

    def open_group(self, group: str):
        self.session.open_group(group)
        self.render()

    def open_word(self, word: Word):
        self.session.open_word(word)
        self.render()

    def back(self):
        self.session.back()
        self.render()

    def start_add_word(self):
        self.session.start_add_word()
        self.render()

    def commit_word(self):
        word = self.session.commit_word()
        if word is None:
            self.show_message("A word and a group are both required")
            return
        self.render(f"Added '{word.term}' to {word.group}")

    def remove_word(self, word: Word):
        if self.session.remove_word(word):
            self.render(f"Deleted '{word.term}'")

    def start_edit_note(self, note: Optional[GrammarNote]):
        self.session.start_edit_note(note)
        self.render()

    def commit_note(self, title: str, content: str):
        note = self.session.commit_note(title, content)
        if note is None:
            self.show_message("Could not save note - it no longer exists")
            return
        self.render(f"Saved '{note.title}'")

    def remove_note(self):
        if self.session.remove_note():
            self.render("Note deleted")

    def request_suggestion(self):
        """Ask the AI for a meaning/example without blocking the UI."""
        form = self.session.navigator.active_form()
        if form is not None and form.busy:
            self.show_message("Still looking up a suggestion")
            return
        request = self.session.request_suggestion()
        if request is None:
            self.show_message("Type a word first")
            return
        self._refresh_form()
        self.show_message(f"Looking up '{request.term}'...")

        def done(suggestion):
            applied = self.session.apply_suggestion(request, suggestion)
            if not isinstance(self.session.state, AddWord):
                return
            self._refresh_form()
            if applied:
                self.show_message(f"Filled in '{request.term}'")
            elif suggestion is None:
                self.show_message("No suggestion available")

        self.run_in_background(lambda: self.session.fetch_suggestion(request), done)

    def speak(self, text: str, voice: str):
        """Pronounce text in the background; only failures are reported."""
        if not self.tts.is_available():
            self.show_message("TTS not available - install gTTS")
            return

        def play():
            try:
                self.tts.speak(text, voice)
            except TTSError as e:
                logger.warning("TTS failed: %s", e)
                return str(e)
            return None

        def done(error):
            if error:
                self.show_message(f"TTS error: {error}")

        self.show_message(f"Speaking ({voice}): {text}")
        self.run_in_background(play, done)

    def _refresh_form(self):
        screen = self.body.original_widget
        if isinstance(screen, AddWordScreen):
            screen.refresh()

    # Background work

    def run_in_background(self, work: Callable[[], object], on_done: Callable[[object], None]):
        """Run ``work`` in a thread and hand its result to ``on_done`` on the UI loop."""
        if self.loop is None:
            on_done(work())
            return

        result = {}

        def deliver(_data):
            on_done(result.get("value"))
            return False

        write_fd = self.loop.watch_pipe(deliver)

        def worker():
            try:
                result["value"] = work()
            except Exception:
                logger.exception("Background task failed")
            finally:
                os.write(write_fd, b"x")
                os.close(write_fd)

        threading.Thread(target=worker, daemon=True).start()

    # Input

    def handle_input(self, key):
        """Handle global key input."""

        # Handle tuple keys (mouse events) - ignore them
        if not isinstance(key, str):
            return

        if key in ("q", "Q") and isinstance(self.session.state, (Groups, NotesList)):
            raise urwid.ExitMainLoop()

        if key in ("1", "f1"):
            self.switch_mode(Mode.VOCABULARY)
            return
        if key in ("2", "f2"):
            self.switch_mode(Mode.GRAMMAR)
            return

        if key == "esc":
            self.back()
            return

    def run(self):
        """Run the application."""
        self.loop = urwid.MainLoop(
            self.frame,
            palette=PALETTE,
            unhandled_input=self.handle_input,
            handle_mouse=True,
        )

        try:
            self.loop.run()
        except KeyboardInterrupt:
            pass


def main():
    """Entry point."""
    import argparse

    parser = argparse.ArgumentParser(description="Vocabulary sets and grammar notes")
    parser.add_argument(
        "-c", "--config",
        help="Path to config file",
        default=None,
    )
    args = parser.parse_args()

    load_dotenv()
    config = load_config(args.config)
    setup_logging(config)

    app = App.from_config(config)
    app.run()


if __name__ == "__main__":
    main()
