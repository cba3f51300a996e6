"""Placeholder provider abstraction."""
from __future__ import annotations

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class PlaceholderProvider(Protocol):
    """Resolves one token name for a subject, or returns None for no match."""

    def get_replacement(self, subject: Any, token: str) -> str | None:
        """Return the replacement for `token` (without braces), or None."""
        ...
