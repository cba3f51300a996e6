"""Format rule predicates and first-match selection."""
from __future__ import annotations

from typing import Any, Callable, Iterable

from gchat.models import ChatFormat
from gchat.permissions import PermissionBackend

FORMAT_PERMISSION_PREFIX = "gchat.format."


def format_permission(format_id: str) -> str:
    """Permission node a subject needs to use a permission-checked format."""
    return FORMAT_PERMISSION_PREFIX + format_id


def always(subject: Any) -> bool:
    return True


def never(subject: Any) -> bool:
    return False


def permission_predicate(backend: PermissionBackend, node: str) -> Callable[[Any], bool]:
    """Predicate that holds when the subject has `node`."""

    def predicate(subject: Any) -> bool:
        return backend.has_permission(subject, node)

    predicate.__qualname__ = f"has_permission({node!r})"
    return predicate


def select_format(subject: Any, rules: Iterable[ChatFormat]) -> ChatFormat | None:
    """Return the first rule whose predicate holds for subject, or None."""
    for rule in rules:
        if rule.can_use(subject):
            return rule
    return None
