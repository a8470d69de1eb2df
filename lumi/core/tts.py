"""Text-to-speech pronunciation in English or French."""

import importlib.util
import platform
import subprocess
import tempfile
from pathlib import Path

from lumi.exceptions import TTSError


# voice -> gTTS (lang, tld)
VOICES = {
    "en": ("en", "us"),
    "fr": ("fr", "fr"),
}


class TextToSpeech:
    """Text-to-speech using Google TTS (gTTS).

    Generates audio for a word and plays it using the system audio player.
    Nothing is returned; callers only learn about failures through TTSError.
    """

    def __init__(self, cache_dir: str | Path | None = None):
        self._gtts_available = None
        self._temp_dir = Path(cache_dir or Path(tempfile.gettempdir()) / "lumi-tts")
        self._temp_dir.mkdir(parents=True, exist_ok=True)

    def is_available(self) -> bool:
        """Check if TTS is available."""
        if self._gtts_available is None:
            self._gtts_available = importlib.util.find_spec("gtts") is not None
        return self._gtts_available

    def speak(self, text: str, voice: str = "en") -> None:
        """Speak the given text.

        Args:
            text: Text to speak
            voice: "en" or "fr"

        Raises:
            ValueError: If the voice is unknown
            TTSError: If TTS fails
        """
        if voice not in VOICES:
            raise ValueError(f"Unknown voice {voice!r}; expected one of {sorted(VOICES)}")

        if not text or not text.strip():
            return

        if not self.is_available():
            raise TTSError("gTTS not installed. Run: pip install gTTS")

        with tempfile.NamedTemporaryFile(
            dir=self._temp_dir, prefix=f"speech_{voice}_", suffix=".mp3", delete=False
        ) as f:
            audio_file = Path(f.name)
        try:
            self._synthesize(text.strip(), voice, audio_file)
            self._play_audio(audio_file)
        finally:
            audio_file.unlink(missing_ok=True)

    def _synthesize(self, text: str, voice: str, audio_file: Path) -> None:
        lang, tld = VOICES[voice]
        try:
            from gtts import gTTS

            gTTS(text=text, lang=lang, tld=tld, slow=False).save(str(audio_file))
        except Exception as e:
            raise TTSError(f"TTS failed: {e}") from e

    def _play_audio(self, audio_file: Path) -> None:
        """Play audio file using system player.

        Args:
            audio_file: Path to audio file
        """
        system = platform.system()

        try:
            if system == "Darwin":
                subprocess.run(
                    ["afplay", str(audio_file)],
                    check=True,
                    capture_output=True
                )
            elif system == "Linux":
                for command in (
                    ["mpv", "--no-video", str(audio_file)],
                    ["mpg123", "-q", str(audio_file)],
                    ["ffplay", "-nodisp", "-autoexit", str(audio_file)],
                ):
                    try:
                        subprocess.run(command, check=True, capture_output=True)
                        return
                    except FileNotFoundError:
                        continue
                raise TTSError("No audio player found. Install mpv, mpg123, or ffplay.")
            elif system == "Windows":
                subprocess.run(
                    ["powershell", "-c", f"(New-Object Media.SoundPlayer '{audio_file}').PlaySync()"],
                    check=True,
                    capture_output=True
                )
            else:
                raise TTSError(f"Unsupported platform: {system}")

        except subprocess.CalledProcessError as e:
            raise TTSError(f"Audio playback failed: {e}") from e
        except FileNotFoundError as e:
            raise TTSError("Audio player not found") from e

