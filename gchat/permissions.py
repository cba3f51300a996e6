"""Permission collaborator protocol and an in-memory backend."""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Protocol

logger = logging.getLogger(__name__)

SEND_PERMISSION = "gchat.send"
RECEIVE_PERMISSION = "gchat.receive"
WILDCARD = "*"


class PermissionBackend(Protocol):
    """Answers permission and metadata questions about a subject."""

    def has_permission(self, subject: Any, node: str) -> bool:
        ...

    def get_prefix(self, subject: Any) -> str | None:
        ...

    def get_suffix(self, subject: Any) -> str | None:
        ...

    def get_primary_group(self, subject: Any) -> str | None:
        ...

    def get_meta(self, subject: Any, key: str) -> str | None:
        ...


@dataclass
class UserData:
    """Permission nodes and metadata held for one user."""

    permissions: set[str] = field(default_factory=set)
    prefix: str | None = None
    suffix: str | None = None
    primary_group: str | None = None
    meta: dict[str, str] = field(default_factory=dict)


def _subject_key(subject: Any) -> str:
    return str(getattr(subject, "username", subject)).lower()


class StaticPermissionBackend:
    """In-memory backend keyed by username (case-insensitive).

    A user holding `*` has every node.
    """

    def __init__(self, users: dict[str, UserData] | None = None) -> None:
        self._users: dict[str, UserData] = {k.lower(): v for k, v in (users or {}).items()}

    def _user(self, subject: Any) -> UserData | None:
        return self._users.get(_subject_key(subject))

    def _ensure(self, subject: Any) -> UserData:
        return self._users.setdefault(_subject_key(subject), UserData())

    def grant(self, subject: Any, *nodes: str) -> None:
        self._ensure(subject).permissions.update(nodes)
        logger.debug("granted %s to %s", nodes, _subject_key(subject))

    def revoke(self, subject: Any, *nodes: str) -> None:
        user = self._user(subject)
        if user is not None:
            user.permissions.difference_update(nodes)

    def set_meta(
        self,
        subject: Any,
        *,
        prefix: str | None = None,
        suffix: str | None = None,
        primary_group: str | None = None,
        **meta: str,
    ) -> None:
        user = self._ensure(subject)
        if prefix is not None:
            user.prefix = prefix
        if suffix is not None:
            user.suffix = suffix
        if primary_group is not None:
            user.primary_group = primary_group
        user.meta.update(meta)

    def has_permission(self, subject: Any, node: str) -> bool:
        user = self._user(subject)
        if user is None:
            return False
        return WILDCARD in user.permissions or node in user.permissions

    def get_prefix(self, subject: Any) -> str | None:
        user = self._user(subject)
        return user.prefix if user else None

    def get_suffix(self, subject: Any) -> str | None:
        user = self._user(subject)
        return user.suffix if user else None

    def get_primary_group(self, subject: Any) -> str | None:
        user = self._user(subject)
        return user.primary_group if user else None

    def get_meta(self, subject: Any, key: str) -> str | None:
        user = self._user(subject)
        return user.meta.get(key) if user else None
