"""gChat: chat format selection and placeholder substitution."""
from __future__ import annotations

from gchat.engine import GChat
from gchat.errors import (
    ConfigError,
    GChatError,
    InvalidArgumentError,
    NoMatchingFormatError,
    ProviderFailureError,
)
from gchat.models import ChatFormat, GChatConfig, Player, RequirePermission, ResolvedMessage

__all__ = [
    "ChatFormat",
    "ConfigError",
    "GChat",
    "GChatConfig",
    "GChatError",
    "InvalidArgumentError",
    "NoMatchingFormatError",
    "Player",
    "ProviderFailureError",
    "RequirePermission",
    "ResolvedMessage",
]
