"""Core data models shared by the engine, providers and dispatcher."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Literal

BODY_TOKEN = "{message}"

ClickType = Literal["open_url", "run_command", "suggest_command", "change_page", "copy_to_clipboard"]
CLICK_TYPES: tuple[str, ...] = ("open_url", "run_command", "suggest_command", "change_page", "copy_to_clipboard")


@dataclass(frozen=True)
class Player:
    """Connected user sending chat; the engine itself treats senders as opaque."""

    username: str
    uuid: str = ""
    server_name: str | None = None
    display_name: str | None = None


@dataclass(frozen=True, eq=False)
class ChatFormat:
    """A format rule: template shown when predicate(subject) holds.

    Rules compare by identity; order in the owning sequence is the tie-break.
    """

    id: str
    template: str
    predicate: Callable[[Any], bool]
    priority: int = 0
    hover_text: str | None = None
    click_type: ClickType | None = None
    click_value: str | None = None

    def can_use(self, subject: Any) -> bool:
        return bool(self.predicate(subject))


@dataclass(frozen=True)
class RequirePermission:
    """Send/receive permission policy applied by the dispatcher."""

    send: bool = False
    send_fail: str | None = None
    receive: bool = False
    passthrough: bool = True


@dataclass(frozen=True)
class GChatConfig:
    """Immutable config snapshot; replaced as a whole on reload."""

    formats: tuple[ChatFormat, ...] = ()
    require_permission: RequirePermission = field(default_factory=RequirePermission)


@dataclass(frozen=True)
class ResolvedMessage:
    """Final text of a chat line plus its resolved hover/click extras."""

    format_id: str
    text: str
    hover_text: str | None = None
    click_type: ClickType | None = None
    click_value: str | None = None
