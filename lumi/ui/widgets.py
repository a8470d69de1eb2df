"""Custom urwid widgets for the study app."""

import urwid

from lumi.ui.theme import field_attr


class ListItem(urwid.WidgetWrap):
    """A selectable list item."""

    def __init__(self, id: str, title: str, subtitle: str = "", on_select=None):
        self.id = id
        self.title = title
        self.subtitle = subtitle
        self.on_select = on_select

        if subtitle:
            text = f"{title}\n  {subtitle}"
        else:
            text = title

        self.text_widget = urwid.Text(text)
        widget = urwid.AttrMap(
            self.text_widget,
            "list_item",
            focus_map="list_item_focus"
        )
        super().__init__(widget)

    def selectable(self):
        return True

    def keypress(self, size, key):
        if key == "enter" and self.on_select:
            self.on_select(self.id)
            return None
        return key

    def mouse_event(self, size, event, button, col, row, focus):
        if event == "mouse press" and button == 1 and self.on_select:
            self.on_select(self.id)
            return True
        return False


class ListBrowser(urwid.WidgetWrap):
    """A scrollable list browser widget with an empty-list message."""

    def __init__(self, on_select=None, empty_text: str = "Nothing here yet."):
        self.on_select = on_select
        self.empty_text = empty_text
        self.walker = urwid.SimpleFocusListWalker([])
        self.listbox = urwid.ListBox(self.walker)
        super().__init__(self.listbox)

    def set_items(self, items: list[tuple[str, str, str]]):
        """Set list items. Each item is (id, title, subtitle)."""
        self.walker.clear()

        if not items:
            self.walker.append(urwid.AttrMap(urwid.Text(self.empty_text, align="center"), "hint"))
            return

        for id, title, subtitle in items:
            self.walker.append(ListItem(id, title, subtitle, on_select=self.on_select))

    def get_focused_id(self) -> str | None:
        """Get the ID of the currently focused item."""
        if self.walker and self.walker.focus is not None:
            focus_widget = self.walker[self.walker.focus]
            if isinstance(focus_widget, ListItem):
                return focus_widget.id
        return None


class TabBar(urwid.WidgetWrap):
    """A horizontal tab bar."""

    def __init__(self, tabs: list[str], on_tab_change=None):
        self.tabs = tabs
        self.active_tab = 0
        self.on_tab_change = on_tab_change
        super().__init__(self._build())

    def _build(self):
        """Build the tab bar widget."""
        columns = []
        for i, tab in enumerate(self.tabs):
            attr = "tab_active" if i == self.active_tab else "tab_inactive"
            columns.append(("pack", urwid.AttrMap(urwid.Text(f" {i + 1}:{tab} "), attr)))
            columns.append(("pack", urwid.Text(" ")))
        return urwid.AttrMap(urwid.Columns(columns), "header")

    def set_active(self, index: int, notify: bool = True):
        """Set the active tab."""
        if 0 <= index < len(self.tabs):
            self.active_tab = index
            self._w = self._build()
            if notify and self.on_tab_change:
                self.on_tab_change(index)

    def mouse_event(self, size, event, button, col, row, focus):
        if event == "mouse press" and button == 1:
            x = 0
            for i, tab in enumerate(self.tabs):
                tab_width = len(tab) + 4 + 1  # label + index prefix + padding + spacer
                if x <= col < x + tab_width:
                    self.set_active(i)
                    return True
                x += tab_width
        return False


class StatusBar(urwid.WidgetWrap):
    """A status bar showing hints and messages."""

    def __init__(self, text: str = ""):
        self.text_widget = urwid.Text(text)
        widget = urwid.AttrMap(self.text_widget, "footer")
        super().__init__(widget)

    def set_text(self, text: str):
        """Set the status text."""
        self.text_widget.set_text(text)


class LabeledEdit(urwid.WidgetWrap):
    """A caption above an edit box; calls ``on_change`` with the new text."""

    def __init__(self, caption: str, text: str = "", multiline: bool = False, on_change=None):
        self.edit = urwid.Edit("", text, multiline=multiline)
        if on_change:
            urwid.connect_signal(self.edit, "postchange", lambda w, old: on_change(w.edit_text))
        pile = urwid.Pile([
            urwid.Text(("content_title", caption)),
            urwid.AttrMap(self.edit, field_attr(False), focus_map=field_attr(True)),
        ])
        super().__init__(pile)

    @property
    def text(self) -> str:
        return self.edit.edit_text

    def set_text(self, text: str):
        self.edit.set_edit_text(text)
