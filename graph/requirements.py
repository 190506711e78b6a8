"""Readiness check and requirement formatting for gathered answers."""

from typing import Mapping

from catalog.models import DocumentTypeEntry, Question
from graph.state import Answer, CustomAnswer


def is_ready(entry: DocumentTypeEntry, answers: Mapping[str, Answer]) -> bool:
    """True once every required question has an answer."""
    return all(answers.get(field) is not None for field in entry.required_fields)


def answer_label(question: Question, answer: Answer) -> str:
    """Human-readable answer: the option label, or the raw text for custom answers."""
    if isinstance(answer, CustomAnswer):
        return answer.text
    option = question.find_option(answer.value)
    return option.label if option else answer.value


def _title(question_id: str) -> str:
    return question_id.replace("_", " ").title()


def build_recap(entry: DocumentTypeEntry, answers: Mapping[str, Answer]) -> str:
    """Bullet recap in flow order, shown before the generate/modify choice."""
    lines = []
    for question in entry.questions:
        answer = answers.get(question.id)
        if answer is None:
            continue
        lines.append(f"• **{_title(question.id)}**: {answer_label(question, answer)}")
    return "\n".join(lines)
def format_requirements(entry: DocumentTypeEntry, answers: Mapping[str, Answer]) -> str:
    """
    Serialize answers (flow order) into the text bundle handed to the document
    generator. The deal context travels separately, next to this bundle.
    """
    parts = [f"DOCUMENT TYPE: {entry.display_name}\n\n", "USER REQUIREMENTS:\n"]

    for question in entry.questions:
        answer = answers.get(question.id)
        if answer is None:
            continue
        parts.append(f"- {question.prompt}\n")
        if isinstance(answer, CustomAnswer):
            parts.append(f"  Answer: {answer.text}")
        else:
            option = question.find_option(answer.value)
            parts.append(f"  Answer: {option.label if option else answer.value}")
            if option and option.description:
                parts.append(f" ({option.description})")
        parts.append("\n\n")

    return "".join(parts)
