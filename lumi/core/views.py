"""Derived views over the word and note collections.

Nothing here is cached: every helper recomputes from the collection it is
given, so the collection stays the single source of truth.
"""

from collections import Counter
from datetime import datetime
from typing import Iterable

from lumi.core.models import GrammarNote, Word


def groups_of(words: Iterable[Word]) -> list[str]:
    """Sorted, deduplicated group names present in ``words``."""
    return sorted({w.group for w in words})


def words_in_group(words: Iterable[Word], group: str) -> list[Word]:
    """Words of one group, in collection order."""
    return [w for w in words if w.group == group]


def group_counts(words: Iterable[Word]) -> list[tuple[str, int]]:
    """(group, word count) pairs in group order."""
    counts = Counter(w.group for w in words)
    return [(group, counts[group]) for group in sorted(counts)]


def format_timestamp(ms: int) -> str:
    return datetime.fromtimestamp(ms / 1000).strftime("%Y-%m-%d %H:%M")


def note_summary(note: GrammarNote, width: int = 60) -> str:
    """First line of a note's content, shortened for list display."""
    first_line = note.content.strip().split("\n", 1)[0]
    if len(first_line) > width:
        first_line = first_line[:width - 1] + "…"
    edited = format_timestamp(note.last_edited)
    return f"{edited}  {first_line}" if first_line else edited
