"""JSON file storage, one file per slot."""

import os
from pathlib import Path
from typing import Optional

from lumi.storage.base import SlotBackend


class JsonFileBackend(SlotBackend):
    """Stores each slot as ``<directory>/<slot>.json``."""

    def __init__(self, directory: str | Path):
        self.directory = Path(directory)
        self.directory.mkdir(parents=True, exist_ok=True)

    def _get_path(self, slot: str) -> Path:
        """Get file path for a slot."""
        return self.directory / f"{slot}.json"

    def read(self, slot: str) -> Optional[str]:
        path = self._get_path(slot)
        if not path.exists():
            return None
        with open(path, "r", encoding="utf-8") as f:
            return f.read()

    def write(self, slot: str, payload: str) -> None:
        """Write to a temp file, then rename it over the slot file."""
        path = self._get_path(slot)
        tmp_path = path.with_suffix(".json.tmp")
        with open(tmp_path, "w", encoding="utf-8") as f:
            f.write(payload)
        os.replace(tmp_path, path)
