"""Deterministic router — NO LLM calls, pure rule-based branching on the phase."""

from typing import Literal

from graph.state import Phase, TurnState


# All valid destinations for add_conditional_edges
RouterDest = Literal[
    "select_type",
    "gathering",
    "confirming",
    "generate",
    "complete",
    "finish",
]

# Mapping: phase of the incoming state → node that handles the message.
# A persisted "generating" state never finished drafting, so it is
# handled like a confirmation.
PHASE_NODE_MAP: dict[Phase, str] = {
    Phase.SELECTING_TYPE: "select_type",
    Phase.GATHERING: "gathering",
    Phase.CONFIRMING: "confirming",
    Phase.GENERATING: "confirming",
    Phase.COMPLETE: "complete",
}


def route_turn(state: TurnState) -> RouterDest:
    """Entry router: pick the phase node for the incoming message."""
    return PHASE_NODE_MAP[state["conversation"].phase]


def route_after_confirm(state: TurnState) -> RouterDest:
    """Confirming hands off to the generator only when it moved to 'generating'."""
    if state["conversation"].phase == Phase.GENERATING:
        return "generate"
    return "finish"
