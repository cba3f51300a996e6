"""Tests for format predicates and selection."""
from __future__ import annotations

from gchat.formats import always, format_permission, never, permission_predicate, select_format
from gchat.models import ChatFormat


def rule(fid, result):
    return ChatFormat(id=fid, template=f"{fid}: {{message}}", predicate=lambda s: result)


def test_first_true_predicate_wins():
    r1, r2, r3 = rule("r1", False), rule("r2", True), rule("r3", True)
    assert select_format("subject", [r1, r2, r3]) is r2


def test_empty_rule_list_selects_nothing():
    assert select_format("subject", []) is None


def test_no_matching_rule_selects_nothing():
    assert select_format("subject", [rule("a", False), rule("b", False)]) is None


def test_predicates_after_match_are_not_evaluated():
    calls = []

    def tracked(subject):
        calls.append(subject)
        return True

    first = rule("first", True)
    later = ChatFormat(id="later", template="{message}", predicate=tracked)
    assert select_format("s", [first, later]) is first
    assert calls == []


def test_selection_is_deterministic():
    rules = [rule("a", False), rule("b", True), rule("c", True)]
    assert {select_format("s", rules).id for _ in range(10)} == {"b"}


def test_format_permission_node():
    assert format_permission("staff") == "gchat.format.staff"


def test_permission_predicate(permissions, alice, bob):
    permissions.grant(alice, "gchat.format.staff")
    predicate = permission_predicate(permissions, "gchat.format.staff")
    assert predicate(alice) is True
    assert predicate(bob) is False


def test_always():
    assert always(object()) is True


def test_never():
    assert never(object()) is False
