"""Cart repository adapters for persistence and querying."""

from .memory import InMemoryCartRepository

__all__ = ["InMemoryCartRepository"]
