"""Terminal UI built on urwid."""
