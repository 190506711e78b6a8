"""Conversation engine — the public per-turn entry point.

    (state, message, deal_context) -> TurnResponse

Wraps the compiled graph, checks the incoming state against the catalog and
shapes the graph output into a ``TurnResponse``.
"""

from typing import Any, Dict, Mapping, Optional, Union

from pydantic import ValidationError

from catalog.models import Catalog
from catalog.document_types import default_catalog
from graph.builder import build_graph
from graph.llm import DocumentGenerator
from graph.state import ConversationState, MalformedStateError, Phase, TurnResponse, initial_state

_TYPED_PHASES = (Phase.GATHERING, Phase.CONFIRMING, Phase.GENERATING, Phase.COMPLETE)


def coerce_state(raw: Union[ConversationState, Mapping[str, Any], None]) -> ConversationState:
    """Accept a state object, its JSON dict, or None (fresh conversation)."""
    if raw is None:
        return initial_state()
    if isinstance(raw, ConversationState):
        return raw
    try:
        return ConversationState.model_validate(raw)
    except ValidationError as e:
        raise MalformedStateError(f"Unreadable conversation state: {e}") from e


def check_state(catalog: Catalog, state: ConversationState) -> None:
    """Fail fast on states the engine could only guess about."""
    if state.current_question_index < 0:
        raise MalformedStateError("current_question_index is negative")
    if state.phase in _TYPED_PHASES and not state.document_type:
        raise MalformedStateError(f"phase {state.phase.value!r} requires a document_type")

    entry = catalog.get(state.document_type)
    if entry is None:
        # Unknown types are reported to the user, not raised.
        return

    unknown = set(state.gathered_answers) - set(entry.question_ids)
    if unknown:
        raise MalformedStateError(f"answers for unknown questions: {sorted(unknown)}")
    if state.phase == Phase.GATHERING and state.current_question_index > len(entry.questions):
        raise MalformedStateError(
            f"current_question_index {state.current_question_index} is outside "
            f"the {len(entry.questions)}-question flow"
        )


class ConversationEngine:
    """Stateless across conversations; safe to share between requests."""

    def __init__(self, catalog: Optional[Catalog] = None, generator: Optional[DocumentGenerator] = None):
        self.catalog = catalog or default_catalog()
        self.graph = build_graph(self.catalog, generator)

    async def take_turn(
        self,
        state: Union[ConversationState, Mapping[str, Any], None],
        message: str = "",
        deal_context: Optional[Dict[str, Any]] = None,
    ) -> TurnResponse:
        conversation = coerce_state(state)
        check_state(self.catalog, conversation)

        result = await self.graph.ainvoke({
            "conversation": conversation,
            "user_message": message or "",
            "deal_context": dict(deal_context or {}),
            "reply": "",
            "options": None,
            "is_complete": False,
            "generated_document": None,
            "disclaimer": None,
            "partial_document": None,
            "error": None,
        })

        return TurnResponse(
            message=result.get("reply") or "",
            options=result.get("options"),
            state=result["conversation"],
            is_complete=bool(result.get("is_complete")),
            generated_document=result.get("generated_document"),
            disclaimer=result.get("disclaimer"),
            partial_document=result.get("partial_document"),
            error=result.get("error"),
        )
