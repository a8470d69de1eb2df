"""Base class for slot storage backends."""

from abc import ABC, abstractmethod
from typing import Optional


class SlotBackend(ABC):
    """Key-value substrate holding one serialized snapshot per slot."""

    @abstractmethod
    def read(self, slot: str) -> Optional[str]:
        """
        Read the snapshot stored in a slot.

        Args:
            slot: Slot name

        Returns:
            The stored payload, or None if the slot has never been written
        """
        pass

    @abstractmethod
    def write(self, slot: str, payload: str) -> None:
        """Replace the snapshot stored in a slot."""
        pass
