"""Token scanner: finds {token} placeholders and resolves them via providers."""
from __future__ import annotations

import logging
import re
from typing import Any, Iterable

from gchat.errors import ProviderFailureError
from gchat.placeholders.base import PlaceholderProvider

logger = logging.getLogger(__name__)

# One or more characters excluding braces; "{}" never matches.
PLACEHOLDER_RE = re.compile(r"\{([^{}]+)\}")


def find_tokens(text: str) -> list[str]:
    """Return token names in scan order, duplicates included."""
    return PLACEHOLDER_RE.findall(text or "")


def resolve_token(subject: Any, token: str, providers: Iterable[PlaceholderProvider]) -> str | None:
    """Ask providers in order; first non-None answer wins."""
    for provider in providers:
        try:
            replacement = provider.get_replacement(subject, token)
        except Exception as e:
            raise ProviderFailureError(token, provider) from e
        if replacement is not None:
            return replacement
    return None


def replace_placeholders(
    subject: Any,
    text: str,
    providers: Iterable[PlaceholderProvider],
) -> str:
    """Substitute every resolvable {token} in text in a single pass.

    Replacement values are inserted as-is and never rescanned. Tokens no
    provider resolves are left verbatim.
    """
    if not text:
        return text
    # Freeze the provider list so a concurrent unregister cannot change it mid-call.
    providers = tuple(providers)
    if not providers:
        return text

    resolved: dict[str, str | None] = {}

    def repl(match: re.Match[str]) -> str:
        token = match.group(1)
        if token not in resolved:
            resolved[token] = resolve_token(subject, token, providers)
            if resolved[token] is None:
                logger.debug("no provider resolved token '%s'", token)
        replacement = resolved[token]
        return match.group(0) if replacement is None else replacement

    return PLACEHOLDER_RE.sub(repl, text)
