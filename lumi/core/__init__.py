"""Core business logic - UI independent."""
from .models import Word, GrammarNote, AddWordForm, ExistingGroup, NewGroup, WordSuggestion
from .navigation import Navigator, Mode

# Note: WordStore, NoteStore and StudySession are imported directly
# where needed to avoid circular imports with the storage module

__all__ = [
    "Word",
    "GrammarNote",
    "AddWordForm",
    "ExistingGroup",
    "NewGroup",
    "WordSuggestion",
    "Navigator",
    "Mode",
]
