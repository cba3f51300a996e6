"""Placeholders backed by the permission collaborator."""
from __future__ import annotations

from typing import Any

from gchat.permissions import PermissionBackend

META_PREFIX = "meta_"
HAS_PERMISSION_PREFIX = "has_permission_"


class PermissionPlaceholders:
    """Resolves {prefix}, {suffix}, {group}, {meta_<key>} and {has_permission_<node>}.

    Prefix and suffix resolve to an empty string when unset so formats like
    "{prefix}{username}" still render cleanly for users without one.
    """

    def __init__(self, backend: PermissionBackend) -> None:
        self._backend = backend

    def get_replacement(self, subject: Any, token: str) -> str | None:
        # Token names are case-insensitive; meta keys and nodes keep their case.
        name = token.lower()
        if name == "prefix":
            return self._backend.get_prefix(subject) or ""
        if name == "suffix":
            return self._backend.get_suffix(subject) or ""
        if name == "group":
            return self._backend.get_primary_group(subject)
        if name.startswith(META_PREFIX) and len(token) > len(META_PREFIX):
            return self._backend.get_meta(subject, token[len(META_PREFIX):])
        if name.startswith(HAS_PERMISSION_PREFIX) and len(token) > len(HAS_PERMISSION_PREFIX):
            node = token[len(HAS_PERMISSION_PREFIX):]
            return "true" if self._backend.has_permission(subject, node) else "false"
        return None

    def __repr__(self) -> str:
        return f"PermissionPlaceholders({self._backend!r})"
