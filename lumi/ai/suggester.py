"""Meaning and example suggestions for the add-word form."""

import json
import logging
import re
from typing import Optional

from lumi.ai.base import AIProvider
from lumi.core.models import WordSuggestion


logger = logging.getLogger(__name__)

DEFAULT_MEANING_LANGUAGE = "Traditional Chinese"

SYSTEM_PROMPT = """You are an English vocabulary tutor for learners preparing for the TOEIC exam.
You give short, accurate definitions and natural example sentences in a business context.
Always answer with a single JSON object and nothing else."""

_FENCE_RE = re.compile(r"^```(?:json)?\s*|\s*```$")


class WordSuggester:
    """Suggest a meaning and an example sentence for a term.

    Every failure (no provider, no credential, API error, unusable reply)
    is reported as None so the caller can leave the form untouched.
    """

    def __init__(
        self,
        provider: Optional[AIProvider],
        meaning_language: str = DEFAULT_MEANING_LANGUAGE,
    ):
        self.provider = provider
        self.meaning_language = meaning_language

    def is_available(self) -> bool:
        return self.provider is not None and self.provider.is_available()

    def suggest(self, term: str) -> Optional[WordSuggestion]:
        """
        Ask the provider for a meaning and example.

        Args:
            term: The English word or phrase

        Returns:
            A WordSuggestion, or None if nothing usable came back
        """
        term = term.strip()
        if not term:
            return None

        if not self.is_available():
            logger.warning("No AI provider configured; skipping suggestion for %r", term)
            return None

        prompt = f"""Give the {self.meaning_language} meaning (suitable for a TOEIC context) and a TOEIC-level English example sentence for the word: "{term}".

Reply as JSON with exactly these keys:
{{"meaning": "<{self.meaning_language} definition>", "example": "<example sentence using the word>"}}"""

        try:
            response = self.provider.generate(
                prompt, system=SYSTEM_PROMPT, max_tokens=300, json_mode=True
            )
        except Exception as e:
            logger.error("Suggestion request for %r failed: %s", term, e)
            return None

        return parse_suggestion(response)


def parse_suggestion(response: Optional[str]) -> Optional[WordSuggestion]:
    """Parse a provider reply into a WordSuggestion, or None if unusable."""
    if not response:
        return None

    text = _FENCE_RE.sub("", response.strip())

    try:
        data = json.loads(text)
    except json.JSONDecodeError:
        logger.warning("Suggestion reply is not JSON: %.80r", response)
        return None

    if not isinstance(data, dict):
        return None
    meaning = data.get("meaning")
    example = data.get("example")
    if not isinstance(meaning, str) or not isinstance(example, str):
        logger.warning("Suggestion reply is missing meaning/example: %.80r", response)
        return None

    return WordSuggestion(meaning=meaning.strip(), example=example.strip())
