"""Abstract key-value persistence (the local-storage analogue).

Defined in the domain layer so the cache and draft store never depend
on where their blobs end up.  Concrete implementations (files,
in-memory) live in the infrastructure layer and in the test fakes.
"""

from __future__ import annotations

from abc import ABC, abstractmethod


class KeyValueStore(ABC):

    @abstractmethod
    def get(self, key: str) -> bytes | None:
        """Return the stored blob, or None if the key is absent."""

    @abstractmethod
    def set(self, key: str, value: bytes) -> None:
        """Store ``value`` under ``key``, replacing any previous blob."""

    @abstractmethod
    def delete(self, key: str) -> None:
        """Remove ``key``; absent keys are not an error."""
