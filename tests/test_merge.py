"""
Tests for the recursive config merge (core/utils/merge.py).
"""

from core.utils.merge import merge


def test_override_wins_per_key():
    assert merge({"a": 1, "b": 2}, {"b": 3}) == {"a": 1, "b": 3}


def test_nested_dicts_merge_recursively():
    base = {"delete": {"enabled": True, "error": {"suppression": False}}}
    override = {"delete": {"error": {"suppression": True}}}

    assert merge(base, override) == {
        "delete": {"enabled": True, "error": {"suppression": True}}
    }


def test_lists_are_replaced():
    assert merge({"workers": [1, 2]}, {"workers": [3]}) == {"workers": [3]}


def test_inputs_are_not_mutated():
    base = {"a": {"b": 1}}
    override = {"a": {"c": 2}}

    result = merge(base, override)
    result["a"]["b"] = 99

    assert base == {"a": {"b": 1}}
    assert override == {"a": {"c": 2}}
