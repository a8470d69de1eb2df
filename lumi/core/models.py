"""Data models for vocabulary words and grammar notes."""

from dataclasses import dataclass, field
import time
from typing import Union
import uuid


DEFAULT_NOTE_TITLE = "New Note"


def now_ms() -> int:
    """Current time as integer milliseconds since the epoch."""
    return int(time.time() * 1000)


def _text(data: dict, key: str, default=None, required: bool = False) -> str:
    """Read a string field from a stored record.

    Raises:
        ValueError: If the field is missing, not a string, or blank when required
    """
    value = data.get(key, default)
    if not isinstance(value, str):
        raise ValueError(f"field {key!r} must be a string, got {type(value).__name__}")
    if required and not value.strip():
        raise ValueError(f"field {key!r} must not be empty")
    return value


@dataclass(frozen=True)
class Word:
    """A word in one of the user's vocabulary sets."""
    id: str
    term: str
    meaning: str
    example: str
    group: str
    created_at: int

    @classmethod
    def create(cls, term: str, meaning: str, example: str, group: str, created_at: int) -> "Word":
        """Create a new word with generated ID."""
        return cls(
            id=str(uuid.uuid4()),
            term=term,
            meaning=meaning,
            example=example,
            group=group,
            created_at=created_at,
        )

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "id": self.id,
            "term": self.term,
            "meaning": self.meaning,
            "example": self.example,
            "group": self.group,
            "createdAt": self.created_at,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Word":
        """Create from dictionary."""
        return cls(
            id=str(data["id"]),
            term=_text(data, "term", required=True),
            meaning=_text(data, "meaning", ""),
            example=_text(data, "example", ""),
            group=_text(data, "group", required=True),
            created_at=int(data["createdAt"]),
        )


@dataclass(frozen=True)
class GrammarNote:
    """A freeform grammar note."""
    id: str
    title: str
    content: str
    last_edited: int

    @classmethod
    def create(cls, title: str, content: str, last_edited: int) -> "GrammarNote":
        """Create a new note with generated ID, falling back to a placeholder title."""
        return cls(
            id=str(uuid.uuid4()),
            title=title or DEFAULT_NOTE_TITLE,
            content=content,
            last_edited=last_edited,
        )

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "id": self.id,
            "title": self.title,
            "content": self.content,
            "lastEdited": self.last_edited,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "GrammarNote":
        """Create from dictionary."""
        return cls(
            id=str(data["id"]),
            title=_text(data, "title"),
            content=_text(data, "content", ""),
            last_edited=int(data["lastEdited"]),
        )


@dataclass(frozen=True)
class ExistingGroup:
    """The add-word form targets a group that is already in the list."""
    name: str


@dataclass(frozen=True)
class NewGroup:
    """The add-word form targets a group name typed by the user."""
    name: str = ""


GroupChoice = Union[ExistingGroup, NewGroup]


@dataclass(eq=False)
class AddWordForm:
    """In-progress add-word form.

    Each instance carries its own token; a suggestion result is only
    written back into the form whose token it was requested for.
    """
    term: str = ""
    meaning: str = ""
    example: str = ""
    group: GroupChoice = field(default_factory=NewGroup)
    token: str = field(default_factory=lambda: uuid.uuid4().hex)
    busy: bool = False

    @property
    def group_name(self) -> str:
        return self.group.name

    def choose_existing(self, name: str) -> None:
        self.group = ExistingGroup(name)

    def choose_new(self, name: str = "") -> None:
        self.group = NewGroup(name)


@dataclass(frozen=True)
class WordSuggestion:
    """Meaning/example pair offered to pre-fill the add-word form."""
    meaning: str
    example: str
