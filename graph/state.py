"""Conversation state schema — single source of truth for a document conversation.

``ConversationState`` is what the caller persists between turns.
``TurnState`` is the per-turn dict the LangGraph graph runs on.
"""

from enum import Enum
from typing import Annotated, Any, Dict, List, Literal, Optional, TypedDict, Union

from pydantic import BaseModel, ConfigDict, Field

from catalog.models import Option


class Phase(str, Enum):
    SELECTING_TYPE = "select_type"
    GATHERING = "gathering"
    CONFIRMING = "confirming"
    GENERATING = "generating"
    COMPLETE = "complete"


class OptionAnswer(BaseModel):
    """Answer picked from the question's option set."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["option"] = "option"
    value: str


class CustomAnswer(BaseModel):
    """Free text accepted verbatim on a question that allows custom answers."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["custom"] = "custom"
    text: str


Answer = Annotated[Union[OptionAnswer, CustomAnswer], Field(discriminator="kind")]


class MalformedStateError(ValueError):
    """Incoming state is inconsistent with the catalog (integration bug)."""


class ConversationState(BaseModel):
    """Immutable per-conversation state; every turn returns a fresh copy."""

    model_config = ConfigDict(frozen=True)

    phase: Phase = Phase.SELECTING_TYPE
    document_type: Optional[str] = None
    gathered_answers: Dict[str, Answer] = Field(default_factory=dict)
    current_question_index: int = 0

    def evolve(self, **changes: Any) -> "ConversationState":
        """Return a copy with ``changes`` applied (answers dict copied too)."""
        changes.setdefault("gathered_answers", dict(self.gathered_answers))
        return self.model_copy(update=changes)


def initial_state() -> ConversationState:
    """Factory — returns a clean starting state."""
    return ConversationState()


class TurnResponse(BaseModel):
    """What the engine hands back for one user message."""

    message: str
    options: Optional[List[Option]] = None
    state: ConversationState
    is_complete: bool = False
    generated_document: Optional[str] = None
    disclaimer: Optional[str] = None
    partial_document: Optional[str] = None
    error: Optional[str] = None


class TurnState(TypedDict, total=False):
    """Flat graph state for a single turn."""

    # Inputs
    conversation: ConversationState
    user_message: str
    deal_context: Dict[str, Any]

    # Outputs
    reply: str
    options: Optional[List[Option]]
    is_complete: bool
    generated_document: Optional[str]
    disclaimer: Optional[str]
    partial_document: Optional[str]
    error: Optional[str]
