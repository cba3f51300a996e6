"""Exceptions raised by the engine, config loader and registry."""
from __future__ import annotations

from typing import Any


class GChatError(Exception):
    """Base class for gChat errors."""


class InvalidArgumentError(GChatError, ValueError):
    """A caller passed an absent or malformed argument (e.g. a None provider)."""


class NoMatchingFormatError(GChatError, LookupError):
    """No format rule matched the subject."""

    def __init__(self, subject: Any) -> None:
        self.subject = subject
        super().__init__(f"no chat format matches subject {subject!r}")


class ProviderFailureError(GChatError):
    """A placeholder provider raised while resolving a token."""

    def __init__(self, token: str, provider: Any) -> None:
        self.token = token
        self.provider = provider
        super().__init__(f"placeholder provider {provider!r} failed on token '{token}'")


class ConfigError(GChatError, ValueError):
    """Config file is missing required keys or has wrong types."""
