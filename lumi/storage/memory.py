"""In-process slot storage for tests and throwaway sessions."""

from typing import Optional

from lumi.storage.base import SlotBackend


class MemoryBackend(SlotBackend):
    """Keeps slots in a dict; nothing survives the process."""

    def __init__(self, initial: Optional[dict[str, str]] = None):
        self.slots: dict[str, str] = dict(initial or {})
        self.writes = 0

    def read(self, slot: str) -> Optional[str]:
        return self.slots.get(slot)

    def write(self, slot: str, payload: str) -> None:
        self.slots[slot] = payload
        self.writes += 1
