"""LangSmith tracing — one document conversation = one trace across turns."""

import logging
import os
from contextlib import contextmanager

from config import LANGSMITH_TRACING, LANGSMITH_PROJECT

# In-memory store: session_id -> parent RunTree (turns arrive as separate requests)
_session_trace_store: dict[str, "RunTree"] = {}


def _ensure_env():
    """Ensure LangSmith env vars are set when tracing is enabled."""
    if LANGSMITH_TRACING:
        os.environ.setdefault("LANGCHAIN_TRACING_V2", "true")
        os.environ.setdefault("LANGCHAIN_PROJECT", LANGSMITH_PROJECT)


def _root_for(session_id: str, user_id: str):
    """Fetch or open the parent run for this conversation."""
    root = _session_trace_store.get(session_id)
    if root is not None:
        return root

    from langsmith.run_trees import RunTree

    root = RunTree(name="document_conversation", run_type="chain")
    root.add_metadata({"session_id": session_id, "user_id": user_id or session_id})
    root.add_tags(["dealdocs-agent", "conversation"])
    root.post()
    _session_trace_store[session_id] = root
    return root


@contextmanager
def conversation_trace(session_id: str, user_id: str = ""):
    """
    Group every graph invoke inside this context under the conversation's
    trace. The first turn opens the parent run; later turns attach to it.
    """
    if not LANGSMITH_TRACING:
        yield
        return

    _ensure_env()
    import langsmith as ls

    root = _root_for(session_id, user_id)
    with ls.tracing_context(
        project_name=LANGSMITH_PROJECT,
        enabled=True,
        parent=root,
        metadata={"session_id": session_id},
        tags=["dealdocs-agent", "turn"],
    ):
        yield str(root.id)


def close_conversation_trace(session_id: str) -> None:
    """End the root run and remove it from the store when the conversation ends."""
    root = _session_trace_store.pop(session_id, None)
    if root:
        try:
            root.end()
            root.patch()
        except Exception as e:
            logging.warning(f"Could not close trace for {session_id}: {e}")
