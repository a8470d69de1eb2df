"""Color theme and styling for the TUI."""

# Urwid palette for the application
# Format: (name, foreground, background)

PALETTE = [
    # UI elements
    ("header", "white", "dark blue"),
    ("footer", "white", "dark gray"),
    ("tab_active", "white,bold", "dark blue"),
    ("tab_inactive", "light gray", "dark gray"),

    # List items
    ("list_item", "white", ""),
    ("list_item_focus", "white,bold", "dark cyan"),

    # Content
    ("content_title", "white,bold", ""),
    ("term", "white,bold", ""),
    ("meaning", "light green", ""),
    ("example", "light cyan", ""),
    ("hint", "dark gray", ""),

    # Forms
    ("field", "white", "dark gray"),
    ("field_focus", "white,bold", "dark blue"),
    ("busy", "yellow,bold", ""),
    ("button", "white", "dark gray"),
    ("button_focus", "white,bold", "dark blue"),
]


def field_attr(focused: bool) -> str:
    """Attribute name for a form field."""
    return "field_focus" if focused else "field"
