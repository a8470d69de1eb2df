"""AI provider abstraction for word suggestions."""
from .base import AIProvider
from .suggester import WordSuggester

__all__ = ["AIProvider", "WordSuggester"]
