"""Screen compositions, one per navigation state."""

import urwid

from lumi.core import views
from lumi.core.models import AddWordForm, ExistingGroup, GrammarNote, Word
from lumi.ui.widgets import LabeledEdit, ListBrowser


VOICE_KEYS = {"e": "en", "f": "fr"}


class GroupsScreen(urwid.WidgetWrap):
    """All vocabulary sets with their word counts."""

    hint = "[Enter]open set [a]dd word [2]grammar [q]uit"

    def __init__(self, app):
        self.app = app
        self.list_browser = ListBrowser(
            on_select=app.open_group,
            empty_text="No words yet. Press [a] to add one.",
        )
        self.list_browser.set_items([
            (group, group, f"{count} word{'s' if count != 1 else ''}")
            for group, count in views.group_counts(app.session.words.words)
        ])
        super().__init__(urwid.LineBox(self.list_browser, title="Vocabulary Sets"))

    def keypress(self, size, key):
        key = super().keypress(size, key)
        if key == "a":
            self.app.start_add_word()
            return None
        return key


class GroupDetailScreen(urwid.WidgetWrap):
    """Words of one set, newest first."""

    hint = "[Enter]open word [e]nglish [f]rench [Esc]back"

    def __init__(self, app, group: str):
        self.app = app
        self.group = group
        self.words = {w.id: w for w in app.session.current_group_words()}
        self.list_browser = ListBrowser(on_select=self._on_word_select)
        self.list_browser.set_items([
            (w.id, w.term, w.meaning) for w in self.words.values()
        ])
        super().__init__(urwid.LineBox(self.list_browser, title=group))

    def _on_word_select(self, word_id: str):
        self.app.open_word(self.words[word_id])

    def keypress(self, size, key):
        key = super().keypress(size, key)
        if key in VOICE_KEYS:
            word = self.words.get(self.list_browser.get_focused_id())
            if word:
                self.app.speak(word.term, voice=VOICE_KEYS[key])
            return None
        return key


class WordDetailScreen(urwid.WidgetWrap):
    """A single word with its meaning and example."""

    hint = "[e]nglish [f]rench [d]elete [Esc]back"

    def __init__(self, app, word: Word):
        self.app = app
        self.word = word
        pile = urwid.Pile([
            urwid.Text(("term", word.term), align="center"),
            urwid.Divider(),
            urwid.Text(("content_title", "Meaning")),
            urwid.Text(("meaning", word.meaning or "-")),
            urwid.Divider(),
            urwid.Text(("content_title", "Example")),
            urwid.Text(("example", word.example or "-")),
            urwid.Divider(),
            urwid.Text(("hint", f"Added to {word.group} on {views.format_timestamp(word.created_at)}")),
        ])
        box = urwid.LineBox(urwid.Filler(urwid.Padding(pile, left=2, right=2), valign="top"), title=word.term)
        super().__init__(box)

    def keypress(self, size, key):
        if key in VOICE_KEYS:
            self.app.speak(self.word.term, voice=VOICE_KEYS[key])
            return None
        if key == "d":
            self.app.remove_word(self.word)
            return None
        return super().keypress(size, key)


class AddWordScreen(urwid.WidgetWrap):
    """The add-word form, bound to an AddWordForm."""

    hint = "[Ctrl-G]suggest meaning/example [Ctrl-S]save [Esc]cancel"
    NEW_GROUP_LABEL = "+ New group"

    def __init__(self, app, form: AddWordForm):
        self.app = app
        self.form = form

        new_name = "" if isinstance(form.group, ExistingGroup) else form.group_name
        self.group_edit = LabeledEdit("New group name (e.g. Business, Travel)", new_name, on_change=self._on_group_name)

        groups = app.session.words.groups_of()
        self.radio_group: list[urwid.RadioButton] = []
        self.new_group_button = urwid.RadioButton(
            self.radio_group, self.NEW_GROUP_LABEL,
            state=not isinstance(form.group, ExistingGroup),
            on_state_change=self._on_new_group,
        )
        for group in groups:
            urwid.RadioButton(
                self.radio_group, group,
                state=form.group == ExistingGroup(group),
                on_state_change=self._on_existing_group, user_data=group,
            )

        self.term_edit = LabeledEdit("Word", form.term, on_change=self._set("term"))
        self.meaning_edit = LabeledEdit("Meaning", form.meaning, on_change=self._set("meaning"))
        self.example_edit = LabeledEdit("Example sentence", form.example, multiline=True, on_change=self._set("example"))
        self.busy_text = urwid.Text("")

        pile = urwid.Pile([
            urwid.Text(("content_title", "Group")),
            urwid.GridFlow(
                [urwid.AttrMap(b, "button", focus_map="button_focus") for b in self.radio_group],
                cell_width=20, h_sep=1, v_sep=0, align="left",
            ),
            self.group_edit,
            urwid.Divider(),
            self.term_edit,
            urwid.Divider(),
            self.meaning_edit,
            urwid.Divider(),
            self.example_edit,
            urwid.Divider(),
            self.busy_text,
        ])
        box = urwid.LineBox(urwid.Filler(urwid.Padding(pile, left=1, right=1), valign="top"), title="Add New Word")
        super().__init__(box)
        self.refresh()

    def _set(self, field_name: str):
        def update(text: str):
            setattr(self.form, field_name, text)
        return update

    def _on_new_group(self, button, state):
        if state:
            self.form.choose_new(self.group_edit.text)

    def _on_existing_group(self, button, state, group):
        if state:
            self.form.choose_existing(group)

    def _on_group_name(self, text: str):
        # Typing a name always means a new group
        if not self.new_group_button.state:
            self.new_group_button.set_state(True)
        self.form.choose_new(text)

    def refresh(self):
        """Copy form fields back into the edits (after a suggestion arrives)."""
        if self.meaning_edit.text != self.form.meaning:
            self.meaning_edit.set_text(self.form.meaning)
        if self.example_edit.text != self.form.example:
            self.example_edit.set_text(self.form.example)
        self.busy_text.set_text(("busy", "Asking for a suggestion...") if self.form.busy else "")

    def keypress(self, size, key):
        if key == "ctrl s":
            self.app.commit_word()
            return None
        if key == "ctrl g":
            self.app.request_suggestion()
            return None
        return super().keypress(size, key)


class NotesListScreen(urwid.WidgetWrap):
    """All grammar notes, newest first."""

    hint = "[Enter]edit note [n]ew note [1]vocabulary [q]uit"

    def __init__(self, app):
        self.app = app
        self.notes = {n.id: n for n in app.session.notes.notes}
        self.list_browser = ListBrowser(
            on_select=self._on_note_select,
            empty_text="No notes yet. Press [n] to write one.",
        )
        self.list_browser.set_items([
            (n.id, n.title, views.note_summary(n)) for n in self.notes.values()
        ])
        super().__init__(urwid.LineBox(self.list_browser, title="Grammar Notes"))

    def _on_note_select(self, note_id: str):
        self.app.start_edit_note(self.notes[note_id])

    def keypress(self, size, key):
        key = super().keypress(size, key)
        if key == "n":
            self.app.start_edit_note(None)
            return None
        return key


class NoteEditorScreen(urwid.WidgetWrap):
    """Title and content editor for a new or existing note."""

    hint = "[Ctrl-S]save [Ctrl-D]delete [Esc]discard"

    def __init__(self, app, note: GrammarNote | None):
        self.app = app
        self.note = note
        self.title_edit = LabeledEdit("Title", note.title if note else "")
        self.content_edit = LabeledEdit("Content", note.content if note else "", multiline=True)
        pile = urwid.Pile([
            self.title_edit,
            urwid.Divider(),
            self.content_edit,
        ])
        title = "Edit Note" if note else "New Note"
        box = urwid.LineBox(urwid.Filler(urwid.Padding(pile, left=1, right=1), valign="top"), title=title)
        super().__init__(box)

    def keypress(self, size, key):
        if key == "ctrl s":
            self.app.commit_note(self.title_edit.text, self.content_edit.text)
            return None
        if key == "ctrl d" and self.note is not None:
            self.app.remove_note()
            return None
        return super().keypress(size, key)
