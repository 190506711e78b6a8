"""Thread-safe store for conversation state between turns.

The engine itself keeps nothing; the HTTP layer saves the state returned by
each turn here, keyed by session id. Idle sessions are pruned after a TTL.
"""

import threading
import time
from typing import Optional

from graph.state import ConversationState


_lock = threading.Lock()
_sessions: dict[str, tuple[ConversationState, float]] = {}   # session_id → (state, last_seen)


def save(session_id: str, state: ConversationState) -> None:
    """Store the latest state for a session and refresh its timestamp."""
    with _lock:
        _sessions[session_id] = (state, time.monotonic())


def load(session_id: str) -> Optional[ConversationState]:
    """Latest state for a session, or None if unknown/expired."""
    with _lock:
        entry = _sessions.get(session_id)
    return entry[0] if entry else None


def drop(session_id: str) -> None:
    with _lock:
        _sessions.pop(session_id, None)


def prune_stale(ttl_seconds: float, now: Optional[float] = None) -> list[str]:
    """Remove sessions idle for longer than ttl_seconds. Returns their ids."""
    now = time.monotonic() if now is None else now
    with _lock:
        stale = [sid for sid, (_, seen) in _sessions.items() if now - seen > ttl_seconds]
        for sid in stale:
            del _sessions[sid]
    return stale


def reset() -> None:
    """Clear all state. Used for testing."""
    with _lock:
        _sessions.clear()
