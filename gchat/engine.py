"""Substitution engine: the API instance tying registry, selector and config together."""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

from gchat.config import read_config
from gchat.errors import NoMatchingFormatError
from gchat.formats import select_format
from gchat.models import BODY_TOKEN, ChatFormat, GChatConfig, ResolvedMessage
from gchat.permissions import PermissionBackend
from gchat.placeholders import (
    PermissionPlaceholders,
    PlaceholderProvider,
    PlaceholderRegistry,
    StandardPlaceholders,
)
from gchat.scanner import replace_placeholders

logger = logging.getLogger(__name__)


class GChat:
    """Chat formatting API.

    Build one instance and pass it to whatever needs it (dispatcher, CLI);
    there is no process-wide current instance.
    """

    def __init__(
        self,
        config: GChatConfig | None = None,
        *,
        config_path: str | Path | None = None,
        permissions: PermissionBackend | None = None,
    ) -> None:
        self._config = config or GChatConfig()
        self._config_path = Path(config_path) if config_path else None
        self._permissions = permissions
        self._registry = PlaceholderRegistry()

    @classmethod
    def from_config_file(
        cls,
        path: str | Path,
        permissions: PermissionBackend | None = None,
    ) -> GChat:
        """Load config and register the built-in placeholder providers."""
        config = read_config(path, permissions)
        api = cls(config, config_path=path, permissions=permissions)
        api.register_placeholder(StandardPlaceholders())
        if permissions is not None:
            api.register_placeholder(PermissionPlaceholders(permissions))
        logger.info(
            "gChat ready: %s format(s) from %s, %s placeholder provider(s)",
            len(config.formats),
            path,
            len(api.get_placeholders()),
        )
        return api

    @property
    def config(self) -> GChatConfig:
        return self._config

    @property
    def permissions(self) -> PermissionBackend | None:
        return self._permissions

    def register_placeholder(self, provider: PlaceholderProvider) -> bool:
        return self._registry.register(provider)

    def unregister_placeholder(self, provider: PlaceholderProvider) -> bool:
        return self._registry.unregister(provider)

    def get_placeholders(self) -> tuple[PlaceholderProvider, ...]:
        return self._registry.snapshot()

    def get_formats(self) -> tuple[ChatFormat, ...]:
        return self._config.formats

    def substitute(self, subject: Any, text: str) -> str:
        """Resolve every {token} in text for subject; unresolved tokens stay as-is."""
        return replace_placeholders(subject, text, self._registry.snapshot())

    replace_placeholders = substitute

    def resolve_format(self, subject: Any) -> ChatFormat | None:
        """First format (in priority order) that subject may use."""
        return select_format(subject, self._config.formats)

    def require_format(self, subject: Any) -> ChatFormat:
        rule = self.resolve_format(subject)
        if rule is None:
            raise NoMatchingFormatError(subject)
        return rule

    def _render_template(self, template: str, subject: Any, body: str) -> str:
        # Resolve the template around {message} so body text is never rescanned.
        parts = template.split(BODY_TOKEN)
        return body.join(self.substitute(subject, part) for part in parts)

    def render(self, rule: ChatFormat, subject: Any, raw_message: str) -> str:
        """Render raw_message with rule's template.

        The message is resolved on its own first; the template's tokens are
        then resolved and the resolved message put in place of {message}.
        """
        body = self.substitute(subject, raw_message)
        return self._render_template(rule.template, subject, body)

    def render_message(self, rule: ChatFormat, subject: Any, raw_message: str) -> ResolvedMessage:
        """Like render(), also resolving the rule's hover text and click value."""
        body = self.substitute(subject, raw_message)
        return ResolvedMessage(
            format_id=rule.id,
            text=self._render_template(rule.template, subject, body),
            hover_text=(
                self._render_template(rule.hover_text, subject, body)
                if rule.hover_text is not None else None
            ),
            click_type=rule.click_type,
            click_value=(
                self._render_template(rule.click_value, subject, body)
                if rule.click_value is not None else None
            ),
        )

    def reload_config(self) -> bool:
        """Re-read the config file and swap it in; keep the old one on failure."""
        if self._config_path is None:
            logger.warning("reload requested but no config path is set")
            return False
        try:
            config = read_config(self._config_path, self._permissions)
        except Exception as e:
            logger.exception("Failed to reload config from %s: %s", self._config_path, e)
            return False
        self._config = config
        logger.info("Reloaded config: %s format(s)", len(config.formats))
        return True

    def close(self) -> None:
        self._registry.clear()
        logger.debug("placeholder registry cleared")
