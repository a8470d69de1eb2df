"""Durable storage for the word and grammar note collections."""
from .base import SlotBackend
from .gateway import PersistenceGateway, WORDS_SLOT, NOTES_SLOT

__all__ = ["SlotBackend", "PersistenceGateway", "WORDS_SLOT", "NOTES_SLOT"]
