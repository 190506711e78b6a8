"""User-facing message builders — welcome, question prompts, draft preview.

Template text only, no LLM calls, so every turn is reproducible.
"""

from typing import Any, List, Mapping, Optional

from catalog.models import DocumentTypeEntry, Option, Question
from graph.requirements import answer_label
from graph.state import Answer, CustomAnswer
from prompts.clause_library import clause_text

GENERATE_OPTIONS = [
    Option(label="Generate Document", value="generate", description="Create the document now"),
    Option(label="Modify Answers", value="modify", description="Go back and change something"),
]


def _deal_fields(deal_context: Optional[Mapping[str, Any]]) -> Mapping[str, Any]:
    """Deal context may arrive wrapped as ``{"dealContext": {...}}``."""
    deal_context = deal_context or {}
    nested = deal_context.get("dealContext")
    return nested if isinstance(nested, Mapping) else deal_context


def build_welcome(deal_context: Optional[Mapping[str, Any]]) -> str:
    """Opening message with up to three recommendations for this deal."""
    deal = _deal_fields(deal_context)
    parts: List[str] = []

    deal_name = deal.get("title") or deal.get("businessName")
    if deal_name:
        parts.append(f"Welcome! I'll help you create professional documents for **{deal_name}**.")
    else:
        parts.append("Welcome! I'll help you create professional legal documents for this deal.")

    deal_type = str(deal.get("dealType") or "").lower()
    category = str(deal.get("dealCategory") or "").lower()
    status = str(deal.get("status") or "").lower()

    recommendations = []
    if status in ("draft", "active"):
        recommendations.append("**Non-Disclosure Agreement (NDA)** - Protect confidential information before sharing sensitive details")
    if "asset" in deal_type or category == "business_sale":
        recommendations.append("**Asset Purchase Agreement** - Define what assets are being transferred")
        recommendations.append("**Letter of Intent (LOI)** - Outline key terms before formal negotiations")
    elif "share" in deal_type or "equity" in deal_type:
        recommendations.append("**Share Purchase Agreement** - Structure equity transfer terms")
    if "service" in deal_type or "consult" in deal_type:
        recommendations.append("**Service Agreement** - Define scope, deliverables, and payment terms")

    if recommendations:
        parts.append("\n\n📋 **Recommended for your deal:**")
        parts.extend(f"• {rec}" for rec in recommendations[:3])

    parts.append("\n\n**What type of document would you like to create?**")
    return "\n".join(parts)


def render_question(question: Question, lead: str = "", progress: Optional[str] = None) -> str:
    """Lead-in, optional ``(n/total)`` marker and help text, then the question in bold."""
    intro = question.help_text or ""
    if progress:
        intro = f"*({progress})* {intro}".rstrip()
    blocks = [b for b in (lead, intro) if b]
    blocks.append(f"**{question.prompt}**")
    return "\n\n".join(blocks)


def _title(question_id: str) -> str:
    return question_id.replace("_", " ").title()


def build_partial_preview(
    entry: DocumentTypeEntry,
    answers: Mapping[str, Answer],
    deal_context: Optional[Mapping[str, Any]],
) -> str:
    """Plain-text agreement skeleton reflecting the answers so far."""
    deal = _deal_fields(deal_context)
    business = deal.get("businessName") or "[BUSINESS NAME]"
    counterparty = deal.get("counterpartyName") or "[COUNTERPARTY]"
    name = entry.name.lower()

    lines = ["═" * 50, entry.display_name.upper(), "═" * 50, ""]
    lines += ["THIS AGREEMENT is made on [DATE]", "", "BETWEEN:"]
    lines += [f'(1) {business} ("Party A")', f'(2) {counterparty} ("Party B")', ""]

    lines.append("RECITALS:")
    if "disclosure" in name or "confidential" in name:
        lines.append("A. The parties wish to explore a potential business relationship.")
        lines.append("B. In connection with this, confidential information may be disclosed.")
    elif "purchase" in name or "sale" in name:
        lines.append("A. Party A wishes to sell and Party B wishes to purchase certain assets/interests.")
        lines.append("B. The parties have agreed to the terms set out in this Agreement.")
    elif "service" in name:
        lines.append("A. Party A provides certain services.")
        lines.append("B. Party B wishes to engage Party A to provide such services.")
    else:
        lines.append("A. The parties wish to enter into a business arrangement.")
        lines.append("B. The parties have agreed to the terms set out below.")
    lines += ["", "AGREED TERMS:", ""]

    clause_num = 1
    pending = []
    for question in entry.questions:
        answer = answers.get(question.id)
        if answer is None:
            pending.append(question)
            continue
        label = answer_label(question, answer)
        if isinstance(answer, CustomAnswer):
            content = f"The parties agree that the following shall apply: {answer.text}"
        else:
            content = clause_text(question.id, answer.value, label)
        lines += [f"{clause_num}. {_title(question.id).upper()}", "", f"   {clause_num}.1 {content}", ""]
        clause_num += 1

    if pending:
        lines += ["", "┌" + "─" * 45 + "┐", "│  📝 PENDING SECTIONS" + " " * 24 + "│", "├" + "─" * 45 + "┤"]
        for question in pending:
            lines.append(f"│  ○ {_title(question.id).ljust(40)} │")
        lines.append("└" + "─" * 45 + "┘")

    lines += ["", "─" * 50, "", "EXECUTED as an agreement:", ""]
    for party in (business, counterparty):
        lines += [f"For {party}:", "", "_________________________", "Signature", ""]
    return "\n".join(lines).rstrip()
