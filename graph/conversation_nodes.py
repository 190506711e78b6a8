"""Conversation nodes — one node per phase, plus the generation hand-off.

Every node reads the incoming ``ConversationState`` and returns a NEW one
(never mutated in place) together with the reply for this turn.
"""

import logging
from typing import Any, Dict, Optional

from catalog.models import Catalog, DocumentTypeEntry
from graph.llm import DocumentGenerator
from graph.messages import GENERATE_OPTIONS, build_partial_preview, build_welcome, render_question
from graph.requirements import answer_label, build_recap, format_requirements, is_ready
from graph.resolvers import resolve_answer, resolve_document_type
from graph.state import ConversationState, Phase, TurnState

GENERATE_WORDS = ("generate", "yes", "create")
MODIFY_WORDS = ("modify", "change", "back")


# ── Helpers ─────────────────────────────────────────────────────────────
def _invalid_type(conversation: ConversationState) -> Dict[str, Any]:
    return {
        "conversation": conversation,
        "reply": "Invalid document type selected.",
        "options": None,
        "error": "Invalid document type",
    }


def _next_unskipped(entry: DocumentTypeEntry, conversation: ConversationState) -> int:
    """First index at or after the cursor whose question is not skipped."""
    index = conversation.current_question_index
    while index < len(entry.questions) and entry.questions[index].should_skip(conversation.gathered_answers):
        index += 1
    return index


def _ask_next(
    entry: DocumentTypeEntry,
    conversation: ConversationState,
    deal_context: Dict[str, Any],
    lead: str = "",
) -> Dict[str, Any]:
    """
    Emit the question under the cursor (skipping bypassed ones), or move to
    confirmation once the flow is exhausted.
    """
    answers = conversation.gathered_answers
    total = len(entry.questions)
    index = _next_unskipped(entry, conversation)

    if index >= total and not is_ready(entry, answers):
        # A required question was bypassed; go back to the first one missing.
        index = next(i for i, q in enumerate(entry.questions) if q.id in entry.required_fields and q.id not in answers)

    if index < total:
        question = entry.questions[index]
        progress = f"{index + 1}/{total}" if answers else None
        return {
            "conversation": conversation.evolve(phase=Phase.GATHERING, current_question_index=index),
            "reply": render_question(question, lead=lead, progress=progress),
            "options": list(question.options),
            "partial_document": build_partial_preview(entry, answers, deal_context),
        }

    confirming = conversation.evolve(phase=Phase.CONFIRMING, current_question_index=total)
    lead = lead or "Excellent!"
    return {
        "conversation": confirming,
        "reply": (
            f"{lead} I have all the information I need.\n\n"
            f"**Document Summary:**\n{build_recap(entry, answers)}\n\n"
            f"**Ready to generate your {entry.display_name}?**"
        ),
        "options": list(GENERATE_OPTIONS),
        "partial_document": build_partial_preview(entry, answers, deal_context),
    }


def confirm_intent(message: str) -> Optional[str]:
    """'generate', 'modify', or None. Option values win over loose wording."""
    text = (message or "").strip().lower()
    if text in ("generate", "modify"):
        return text
    if any(word in text for word in GENERATE_WORDS):
        return "generate"
    if any(word in text for word in MODIFY_WORDS):
        return "modify"
    return None


# ── Phase nodes ─────────────────────────────────────────────────────────
def select_type_node(state: TurnState, catalog: Catalog) -> Dict[str, Any]:
    """Resolve the document type; on success ask the first question right away."""
    conversation = state["conversation"]
    deal_context = state.get("deal_context") or {}
    message = (state.get("user_message") or "").strip()

    if not message or message.lower() == "start":
        return {
            "conversation": conversation,
            "reply": build_welcome(deal_context),
            "options": catalog.type_options(),
        }

    entry = resolve_document_type(catalog, message)
    if entry is None:
        return {
            "conversation": conversation,
            "reply": (
                "I couldn't tell which document you need. I can help with the documents below.\n\n"
                "**What type of document would you like to create?**"
            ),
            "options": catalog.type_options(),
        }

    started = conversation.evolve(
        phase=Phase.GATHERING,
        document_type=entry.name,
        gathered_answers={},
        current_question_index=0,
    )
    return _ask_next(entry, started, deal_context, lead=f"Great choice! Let's create your **{entry.display_name}**.")


def gathering_node(state: TurnState, catalog: Catalog) -> Dict[str, Any]:
    """Match the reply to the current question; advance or re-ask."""
    conversation = state["conversation"]
    deal_context = state.get("deal_context") or {}
    entry = catalog.get(conversation.document_type)
    if entry is None:
        return _invalid_type(conversation)

    cursor = conversation.current_question_index
    if cursor >= len(entry.questions):
        return _ask_next(entry, conversation, deal_context)

    question = entry.questions[cursor]
    answer = resolve_answer(question, state.get("user_message") or "")
    if answer is None:
        # Same question, same options, state untouched.
        progress = f"{cursor + 1}/{len(entry.questions)}" if conversation.gathered_answers else None
        return {
            "conversation": conversation,
            "reply": render_question(
                question,
                lead="I didn't catch that. Please choose one of the options below, or reply with its number.",
                progress=progress,
            ),
            "options": list(question.options),
        }

    answers = {**conversation.gathered_answers, question.id: answer}
    advanced = conversation.evolve(gathered_answers=answers, current_question_index=cursor + 1)
    return _ask_next(entry, advanced, deal_context, lead=f"Got it! *{answer_label(question, answer)}*")


def confirming_node(state: TurnState, catalog: Catalog) -> Dict[str, Any]:
    """Two intents only: generate now, or start the questions over."""
    conversation = state["conversation"]
    if conversation.phase == Phase.GENERATING:
        conversation = conversation.evolve(phase=Phase.CONFIRMING)
    entry = catalog.get(conversation.document_type)
    if entry is None:
        return _invalid_type(conversation)

    intent = confirm_intent(state.get("user_message") or "")
    if intent == "generate":
        return {"conversation": conversation.evolve(phase=Phase.GENERATING)}

    if intent == "modify":
        reset = conversation.evolve(phase=Phase.GATHERING, gathered_answers={}, current_question_index=0)
        return _ask_next(entry, reset, state.get("deal_context") or {}, lead="No problem! Let's start over.")

    return {
        "conversation": conversation,
        "reply": "Would you like me to generate the document now, or would you like to modify your answers?",
        "options": list(GENERATE_OPTIONS),
    }


async def generate_node(state: TurnState, catalog: Catalog, generator: DocumentGenerator) -> Dict[str, Any]:
    """Hand the formatted requirements to the generator; Complete on success."""
    conversation = state["conversation"]
    deal_context = state.get("deal_context") or {}
    entry = catalog.get(conversation.document_type)

    requirements = format_requirements(entry, conversation.gathered_answers)
    logging.info(f"Generating {entry.name} from {len(conversation.gathered_answers)} answers")
    try:
        document = await generator(entry.name, requirements, deal_context)
    except Exception as e:
        logging.error(f"Document generation failed for {entry.name}: {e}")
        return {
            "conversation": conversation.evolve(phase=Phase.CONFIRMING),
            "reply": "I couldn't generate the document just now. Reply **generate** to try again, or **modify** to change your answers.",
            "options": list(GENERATE_OPTIONS),
            "error": str(e) or type(e).__name__,
        }

    return {
        "conversation": conversation.evolve(phase=Phase.COMPLETE),
        "reply": f"Your **{entry.display_name}** is ready! You can review and edit it below.",
        "options": None,
        "is_complete": True,
        "generated_document": document.content,
        "disclaimer": document.disclaimer,
    }


def complete_node(state: TurnState, catalog: Catalog) -> Dict[str, Any]:
    """Terminal node: the document exists and nothing advances any more."""
    conversation = state["conversation"]
    entry = catalog.get(conversation.document_type)
    name = entry.display_name if entry else "document"
    return {
        "conversation": conversation,
        "reply": f"Your **{name}** has already been generated. Start a new conversation to create another document.",
        "options": None,
        "is_complete": True,
    }
