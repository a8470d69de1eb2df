"""Tests for configuration loading, backend selection and TTS voices."""

import logging
import shutil
import tempfile
from pathlib import Path

import pytest
import yaml

from lumi.config import build_backend, load_config, setup_logging
from lumi.core.tts import TextToSpeech
from lumi.exceptions import TTSError
from lumi.storage.database import SqliteBackend
from lumi.storage.files import JsonFileBackend
from lumi.storage.memory import MemoryBackend


class TestConfig:

    def setup_method(self):
        self.temp_dir = tempfile.mkdtemp()
        self.root = Path(self.temp_dir)

    def teardown_method(self):
        root = logging.getLogger()
        for handler in list(root.handlers):
            if isinstance(handler, logging.FileHandler):
                root.removeHandler(handler)
                handler.close()
        shutil.rmtree(self.temp_dir, ignore_errors=True)

    def write_config(self, data: dict) -> str:
        path = self.root / "config.yaml"
        path.write_text(yaml.safe_dump(data), encoding="utf-8")
        return str(path)

    def test_defaults_when_no_file(self, monkeypatch):
        monkeypatch.chdir(self.root)
        monkeypatch.setenv("HOME", str(self.root))
        config = load_config(None)
        assert config["data"]["backend"] == "files"
        assert config["logging"]["level"] == "INFO"

    def test_file_merges_over_defaults(self):
        path = self.write_config({
            "data": {"backend": "sqlite", "base_path": str(self.root / "data")},
            "ai": {"default_provider": "openai"},
        })
        config = load_config(path)
        assert config["data"]["backend"] == "sqlite"
        assert config["data"]["database"] == "lumi.db"
        assert config["ai"]["default_provider"] == "openai"

    def test_empty_file(self):
        path = self.root / "config.yaml"
        path.write_text("", encoding="utf-8")
        config = load_config(str(path))
        assert config["data"]["backend"] == "files"

    def test_build_backends(self):
        base = {"base_path": str(self.root / "data"), "database": "test.db"}
        assert isinstance(build_backend({"data": {**base, "backend": "files"}}), JsonFileBackend)
        assert isinstance(build_backend({"data": {**base, "backend": "sqlite"}}), SqliteBackend)
        assert isinstance(build_backend({"data": {**base, "backend": "memory"}}), MemoryBackend)
        assert (self.root / "data" / "test.db").exists()

    def test_unknown_backend(self):
        with pytest.raises(ValueError):
            build_backend({"data": {"backend": "redis", "base_path": str(self.root)}})

    def test_setup_logging_writes_under_data_dir(self):
        config = {
            "data": {"base_path": str(self.root / "data")},
            "logging": {"level": "debug", "file": "lumi.log"},
        }
        setup_logging(config)
        logging.getLogger("lumi.test").debug("hello")
        for handler in logging.getLogger().handlers:
            handler.flush()
        assert "hello" in (self.root / "data" / "lumi.log").read_text(encoding="utf-8")


class TestTextToSpeech:

    def setup_method(self):
        self.temp_dir = tempfile.mkdtemp()
        self.tts = TextToSpeech(cache_dir=self.temp_dir)

    def teardown_method(self):
        shutil.rmtree(self.temp_dir, ignore_errors=True)

    def test_unknown_voice(self):
        with pytest.raises(ValueError):
            self.tts.speak("bonjour", voice="de")

    def test_empty_text_is_ignored(self):
        self.tts._gtts_available = False
        assert self.tts.speak("   ", voice="fr") is None

    def test_missing_gtts(self):
        self.tts._gtts_available = False
        with pytest.raises(TTSError):
            self.tts.speak("hello", voice="en")

    def test_each_call_gets_its_own_audio_file(self, monkeypatch):
        saved = []
        played = []

        class FakeGTTS:
            def __init__(self, text, lang, tld, slow):
                self.lang = lang

            def save(self, path):
                saved.append(path)
                Path(path).write_bytes(b"mp3")

        monkeypatch.setattr("gtts.gTTS", FakeGTTS)
        monkeypatch.setattr(self.tts, "_play_audio", lambda path: played.append(path.read_bytes()))
        self.tts._gtts_available = True

        self.tts.speak("agenda", voice="en")
        self.tts.speak("agenda", voice="en")

        assert len(set(saved)) == 2
        assert played == [b"mp3", b"mp3"]
        assert list(Path(self.temp_dir).iterdir()) == []
