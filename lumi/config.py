"""Configuration loading and service construction."""

import logging
import os
from pathlib import Path
from typing import Optional

import yaml

from lumi.ai.anthropic import AnthropicProvider, DEFAULT_MODEL as ANTHROPIC_MODEL
from lumi.ai.base import AIProvider
from lumi.ai.openai import OpenAIProvider, DEFAULT_MODEL as OPENAI_MODEL
from lumi.storage.base import SlotBackend
from lumi.storage.database import SqliteBackend
from lumi.storage.files import JsonFileBackend
from lumi.storage.memory import MemoryBackend


logger = logging.getLogger(__name__)

DEFAULT_CONFIG = {
    "data": {
        "backend": "files",
        "base_path": "~/.local/share/lumi",
        "database": "lumi.db",
    },
    "ai": {},
    "logging": {
        "level": "INFO",
        "file": "lumi.log",
    },
}

PLACEHOLDER_KEYS = {
    "your-anthropic-api-key-here",
    "your-openai-api-key-here",
}


def load_config(config_path: Optional[str] = None) -> dict:
    """Load configuration from the first file found, merged over the defaults."""
    paths_to_try = [
        config_path,
        "config.yaml",
        os.path.expanduser("~/.config/lumi/config.yaml"),
    ]

    loaded: dict = {}
    for path in paths_to_try:
        if path and os.path.exists(path):
            with open(path, "r", encoding="utf-8") as f:
                loaded = yaml.safe_load(f) or {}
            logger.debug("Loaded config from %s", path)
            break

    config = {section: dict(values) for section, values in DEFAULT_CONFIG.items()}
    for section, values in loaded.items():
        if isinstance(values, dict) and isinstance(config.get(section), dict):
            config[section].update(values)
        else:
            config[section] = values
    return config


def data_dir(config: dict) -> Path:
    return Path(config["data"]["base_path"]).expanduser()


def build_backend(config: dict) -> SlotBackend:
    """Create the storage backend named in ``data.backend``."""
    data_config = config["data"]
    kind = data_config.get("backend", "files")
    base_path = data_dir(config)

    if kind == "files":
        return JsonFileBackend(base_path)
    if kind == "sqlite":
        return SqliteBackend(base_path / data_config.get("database", "lumi.db"))
    if kind == "memory":
        return MemoryBackend()
    raise ValueError(f"Unknown storage backend: {kind!r}")


def _api_key(provider_config: dict, env_var: str) -> Optional[str]:
    key = provider_config.get("api_key") or os.environ.get(env_var)
    if key in PLACEHOLDER_KEYS:
        return None
    return key


def build_provider(config: dict) -> Optional[AIProvider]:
    """Pick an AI provider from config or environment, or None if no key is set."""
    ai_config = config.get("ai") or {}
    default_provider = ai_config.get("default_provider")

    anthropic_config = ai_config.get("anthropic") or {}
    openai_config = ai_config.get("openai") or {}
    anthropic_key = _api_key(anthropic_config, "ANTHROPIC_API_KEY")
    openai_key = _api_key(openai_config, "OPENAI_API_KEY")

    def anthropic():
        return AnthropicProvider(
            api_key=anthropic_key,
            model=anthropic_config.get("model", ANTHROPIC_MODEL),
        )

    def openai():
        return OpenAIProvider(
            api_key=openai_key,
            model=openai_config.get("model", OPENAI_MODEL),
        )

    # Use configured default, or auto-detect preferring Anthropic
    if default_provider == "anthropic" and anthropic_key:
        return anthropic()
    if default_provider == "openai" and openai_key:
        return openai()
    if anthropic_key:
        return anthropic()
    if openai_key:
        return openai()
    return None


def setup_logging(config: dict) -> None:
    """Send log records to a file; the terminal belongs to the UI."""
    log_config = config.get("logging") or {}
    level = getattr(logging, str(log_config.get("level", "INFO")).upper(), logging.INFO)
    log_file = log_config.get("file")

    handlers: list[logging.Handler] = []
    if log_file:
        path = Path(log_file).expanduser()
        if not path.is_absolute():
            path = data_dir(config) / path
        path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(path, encoding="utf-8"))
    else:
        handlers.append(logging.NullHandler())

    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        handlers=handlers,
        force=True,
    )
