"""Thread-safe placeholder provider registry."""
from __future__ import annotations

import logging
import threading
from typing import Iterator

from gchat.errors import InvalidArgumentError
from gchat.placeholders.base import PlaceholderProvider

logger = logging.getLogger(__name__)


class PlaceholderRegistry:
    """Identity-keyed set of providers, iterated in registration order.

    Writers swap in a new tuple under a lock; readers iterate whatever tuple
    was current when they started, so they never see a half-applied change.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._providers: tuple[PlaceholderProvider, ...] = ()

    def register(self, provider: PlaceholderProvider) -> bool:
        """Add provider if not already present; return whether it was added."""
        if provider is None:
            raise InvalidArgumentError("placeholder provider must not be None")
        with self._lock:
            if any(p is provider for p in self._providers):
                return False
            self._providers = self._providers + (provider,)
        logger.debug("registered placeholder provider %r", provider)
        return True

    def unregister(self, provider: PlaceholderProvider) -> bool:
        """Remove provider if present; return whether it was removed."""
        if provider is None:
            raise InvalidArgumentError("placeholder provider must not be None")
        with self._lock:
            remaining = tuple(p for p in self._providers if p is not provider)
            if len(remaining) == len(self._providers):
                return False
            self._providers = remaining
        logger.debug("unregistered placeholder provider %r", provider)
        return True

    def clear(self) -> None:
        with self._lock:
            self._providers = ()

    def snapshot(self) -> tuple[PlaceholderProvider, ...]:
        return self._providers

    def __iter__(self) -> Iterator[PlaceholderProvider]:
        return iter(self._providers)

    def __len__(self) -> int:
        return len(self._providers)

    def __contains__(self, provider: object) -> bool:
        return any(p is provider for p in self._providers)
