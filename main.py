"""FastAPI entrypoint — exposes the document conversation engine via REST."""

import logging
import uuid

from fastapi import FastAPI, HTTPException
from pydantic import BaseModel

from config import HOST, PORT, SESSION_TTL_SECONDS
from graph.engine import ConversationEngine
from graph.state import MalformedStateError
from sessions import store
from langsmith_tracing import conversation_trace, close_conversation_trace

# ── App + engine ────────────────────────────────────────────────────────
app = FastAPI(title="Deal Documents Agent", version="1.0.0")
engine = ConversationEngine()


# ── Request / Response models ───────────────────────────────────────────
class StartRequest(BaseModel):
    user_id: str | None = None
    deal_context: dict | None = None


class TurnRequest(BaseModel):
    session_id: str | None = None
    message: str = ""
    state: dict | None = None          # client-held state; overrides the stored one
    deal_context: dict | None = None


# ── Endpoints ───────────────────────────────────────────────────────────

@app.get("/document-types")
def list_document_types():
    """The catalog, as offered on the opening turn."""
    return [
        {
            "name": entry.name,
            "display_name": entry.display_name,
            "description": entry.description,
            "question_count": len(entry.questions),
            "required_fields": sorted(entry.required_fields),
        }
        for entry in engine.catalog.document_types
    ]


@app.post("/conversation/start")
async def start_conversation(req: StartRequest):
    """Create a new conversation and return the welcome turn."""
    session_id = str(uuid.uuid4())
    with conversation_trace(session_id, req.user_id or ""):
        turn = await engine.take_turn(None, "", req.deal_context)
    store.save(session_id, turn.state)
    return {"session_id": session_id, **turn.model_dump(mode="json")}


@app.post("/conversation/turn")
async def conversation_turn(req: TurnRequest):
    """Advance a conversation by one user message."""
    for stale_id in store.prune_stale(SESSION_TTL_SECONDS):
        close_conversation_trace(stale_id)

    state = req.state
    if state is None and req.session_id:
        state = store.load(req.session_id)
        if state is None:
            raise HTTPException(404, "Conversation not found or expired.")

    session_id = req.session_id or str(uuid.uuid4())
    try:
        with conversation_trace(session_id):
            turn = await engine.take_turn(state, req.message, req.deal_context)
    except MalformedStateError as e:
        logging.warning(f"Rejected conversation state for {session_id}: {e}")
        raise HTTPException(422, str(e))

    store.save(session_id, turn.state)
    if turn.is_complete:
        close_conversation_trace(session_id)

    return {"session_id": session_id, **turn.model_dump(mode="json")}


@app.get("/conversation/{session_id}")
def get_conversation(session_id: str):
    """Retrieve the stored state for a conversation."""
    state = store.load(session_id)
    if state is None:
        raise HTTPException(404, "Conversation not found.")
    return {"session_id": session_id, "state": state.model_dump(mode="json")}


@app.delete("/conversation/{session_id}")
def end_conversation(session_id: str):
    """Forget a conversation and close its trace."""
    if store.load(session_id) is None:
        raise HTTPException(404, "Conversation not found.")
    store.drop(session_id)
    close_conversation_trace(session_id)
    return {"session_id": session_id, "deleted": True}


# ── Run ─────────────────────────────────────────────────────────────────
if __name__ == "__main__":
    import uvicorn
    uvicorn.run("main:app", host=HOST, port=PORT, reload=True)
