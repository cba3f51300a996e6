"""Chat dispatch: applies send/receive policy and renders the broadcast line."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Iterable, Literal

from gchat.engine import GChat
from gchat.models import ResolvedMessage
from gchat.permissions import RECEIVE_PERMISSION, SEND_PERMISSION

logger = logging.getLogger(__name__)

Action = Literal["broadcast", "passthrough", "denied"]


@dataclass(frozen=True)
class ChatOutcome:
    """What to do with one incoming chat message."""

    action: Action
    rendered: ResolvedMessage | None = None
    recipients: tuple[Any, ...] = ()
    notice: str | None = None


class ChatDispatcher:
    """Decides whether a message is broadcast, passed through or denied."""

    def __init__(self, api: GChat) -> None:
        self._api = api

    def _has(self, subject: Any, node: str) -> bool:
        permissions = self._api.permissions
        return permissions is not None and permissions.has_permission(subject, node)

    def _fallback(self, sender: Any, reason: str, notice: str | None = None) -> ChatOutcome:
        passthrough = self._api.config.require_permission.passthrough
        logger.debug("%s for %r; passthrough=%s", reason, sender, passthrough)
        if passthrough:
            return ChatOutcome(action="passthrough", notice=notice)
        return ChatOutcome(action="denied", notice=notice)

    def handle(self, sender: Any, message: str, online: Iterable[Any] = ()) -> ChatOutcome:
        require = self._api.config.require_permission

        if require.send and not self._has(sender, SEND_PERMISSION):
            return self._fallback(sender, "missing send permission", require.send_fail)

        rule = self._api.resolve_format(sender)
        if rule is None:
            return self._fallback(sender, "no format matched")

        rendered = self._api.render_message(rule, sender, message)
        recipients = tuple(
            subject for subject in online
            if not require.receive or self._has(subject, RECEIVE_PERMISSION)
        )
        logger.info("%s", rendered.text)
        return ChatOutcome(action="broadcast", rendered=rendered, recipients=recipients)
