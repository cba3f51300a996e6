"""Tests for the placeholder registry."""
from __future__ import annotations

import threading

import pytest

from gchat.errors import InvalidArgumentError
from gchat.placeholders import MappingPlaceholders, PlaceholderRegistry
from gchat.scanner import replace_placeholders


class EqualProvider:
    """Provider whose instances all compare equal; registry must still key by identity."""

    def __eq__(self, other):
        return isinstance(other, EqualProvider)

    def __hash__(self):
        return 1

    def get_replacement(self, subject, token):
        return None


@pytest.fixture
def registry():
    return PlaceholderRegistry()


def test_register_returns_true_only_when_new(registry):
    provider = MappingPlaceholders({"a": "1"})
    assert registry.register(provider) is True
    assert registry.register(provider) is False
    assert len(registry) == 1


def test_register_is_identity_based(registry):
    first, second = EqualProvider(), EqualProvider()
    assert registry.register(first)
    assert registry.register(second)
    assert len(registry) == 2
    assert registry.unregister(first)
    assert second in registry
    assert first not in registry


def test_unregister_missing_returns_false(registry):
    assert registry.unregister(MappingPlaceholders({})) is False


def test_none_provider_is_invalid_argument(registry):
    with pytest.raises(InvalidArgumentError):
        registry.register(None)
    with pytest.raises(InvalidArgumentError):
        registry.unregister(None)
    assert len(registry) == 0


def test_snapshot_is_point_in_time_copy(registry):
    provider = MappingPlaceholders({"a": "1"})
    registry.register(provider)
    snap = registry.snapshot()
    registry.unregister(provider)
    assert snap == (provider,)
    assert registry.snapshot() == ()


def test_iteration_follows_registration_order(registry):
    providers = [MappingPlaceholders({"n": str(i)}) for i in range(5)]
    for p in providers:
        registry.register(p)
    assert list(registry) == providers


def test_clear(registry):
    registry.register(MappingPlaceholders({}))
    registry.clear()
    assert len(registry) == 0


def test_concurrent_register_unregister_and_resolve(registry):
    stable = MappingPlaceholders({"x": "stable"})
    registry.register(stable)
    providers = [MappingPlaceholders({f"t{i}": str(i)}) for i in range(100)]
    errors: list[BaseException] = []
    results: list[str] = []
    start = threading.Barrier(8)

    def churn(chunk):
        try:
            start.wait()
            for p in chunk:
                assert registry.register(p)
            for p in chunk:
                assert registry.unregister(p)
        except BaseException as e:  # surfaced in the main thread
            errors.append(e)

    def resolve():
        try:
            start.wait()
            for _ in range(25):
                results.append(replace_placeholders(None, "{x}", registry))
        except BaseException as e:
            errors.append(e)

    threads = [threading.Thread(target=churn, args=(providers[i::4],)) for i in range(4)]
    threads += [threading.Thread(target=resolve) for _ in range(4)]
    for t in threads:
        t.start()
    for t in threads:
        t.join(timeout=30)

    assert not any(t.is_alive() for t in threads)
    assert errors == []
    assert results == ["stable"] * 100
    assert registry.snapshot() == (stable,)
