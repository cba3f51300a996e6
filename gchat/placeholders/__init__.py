"""Placeholder providers and their registry."""
from __future__ import annotations

from gchat.placeholders.base import PlaceholderProvider
from gchat.placeholders.permissions import PermissionPlaceholders
from gchat.placeholders.registry import PlaceholderRegistry
from gchat.placeholders.standard import MappingPlaceholders, StandardPlaceholders

__all__ = [
    "MappingPlaceholders",
    "PermissionPlaceholders",
    "PlaceholderProvider",
    "PlaceholderRegistry",
    "StandardPlaceholders",
]
