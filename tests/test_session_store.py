"""
Tests for the in-memory session store.

Run with: pytest tests/test_session_store.py -v
"""
import time

from graph.state import ConversationState, Phase, initial_state
from sessions import store


def test_save_and_load():
    state = ConversationState(phase=Phase.GATHERING, document_type="Letter of Intent")
    store.save("s1", state)
    assert store.load("s1") == state


def test_save_replaces_previous_state():
    store.save("s1", initial_state())
    later = ConversationState(phase=Phase.GATHERING, document_type="Letter of Intent")
    store.save("s1", later)
    assert store.load("s1") == later


def test_load_unknown():
    assert store.load("nope") is None


def test_drop():
    store.save("s1", initial_state())
    store.drop("s1")
    store.drop("s1")
    assert store.load("s1") is None


def test_prune_stale():
    store.save("old", initial_state())
    store.save("new", initial_state())

    assert store.prune_stale(3600) == []
    pruned = store.prune_stale(60, now=time.monotonic() + 120)
    assert sorted(pruned) == ["new", "old"]
    assert store.load("old") is None
    assert store.load("new") is None
