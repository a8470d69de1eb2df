"""Anthropic Claude AI provider."""

import os
from typing import Optional

from lumi.ai.base import AIProvider


DEFAULT_MODEL = "claude-3-haiku-20240307"


class AnthropicProvider(AIProvider):
    """Anthropic Claude API provider."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: str = DEFAULT_MODEL,
        timeout: float = 30.0,
    ):
        self.api_key = api_key or os.environ.get("ANTHROPIC_API_KEY")
        self.model = model
        self.timeout = timeout
        self._client = None

    def _get_client(self):
        """Lazy-load the Anthropic client."""
        if self._client is None:
            import anthropic
            self._client = anthropic.Anthropic(api_key=self.api_key, timeout=self.timeout)
        return self._client

    def is_available(self) -> bool:
        """Check if Anthropic is configured."""
        return bool(self.api_key)

    def generate(
        self,
        prompt: str,
        system: Optional[str] = None,
        max_tokens: int = 500,
        json_mode: bool = False,
    ) -> str:
        """Generate text using Claude."""
        if not self.is_available():
            raise ValueError("Anthropic API key not configured")

        client = self._get_client()

        messages = [{"role": "user", "content": prompt}]
        if json_mode:
            # Prefill the opening brace so the reply is the bare object
            messages.append({"role": "assistant", "content": "{"})

        kwargs = {
            "model": self.model,
            "max_tokens": max_tokens,
            "messages": messages,
        }

        if system:
            kwargs["system"] = system

        response = client.messages.create(**kwargs)

        text = response.content[0].text
        return "{" + text if json_mode else text
