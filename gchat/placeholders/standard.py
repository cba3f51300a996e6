"""Standard placeholders derived from the sending player."""
from __future__ import annotations

from typing import Any

from gchat.models import Player


class StandardPlaceholders:
    """Resolves {username}, {name}, {display_name}, {uuid} and {server_name}."""

    def get_replacement(self, subject: Any, token: str) -> str | None:
        if not isinstance(subject, Player):
            return None
        token = token.lower()
        if token in ("username", "name"):
            return subject.username
        if token == "display_name":
            return subject.display_name or subject.username
        if token == "uuid":
            return subject.uuid or None
        if token == "server_name":
            return subject.server_name or ""
        return None

    def __repr__(self) -> str:
        return "StandardPlaceholders()"


class MappingPlaceholders:
    """Fixed token -> value lookup, independent of the subject."""

    def __init__(self, values: dict[str, str]) -> None:
        self._values = dict(values)

    def get_replacement(self, subject: Any, token: str) -> str | None:
        return self._values.get(token)

    def __repr__(self) -> str:
        return f"MappingPlaceholders({sorted(self._values)})"
