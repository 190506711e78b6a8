"""Resolvers — turn noisy free text into canonical catalog values.

Deterministic, rule-based matching only. A ``None`` result is the normal
"didn't understand" outcome and the caller re-prompts.
"""

import re
from typing import Optional

from catalog.models import Catalog, DocumentTypeEntry, Question
from graph.state import Answer, CustomAnswer, OptionAnswer

_SEPARATORS_RE = re.compile(r"[-/_]")
_STRIP_RE = re.compile(r"[^a-z0-9 ]")
_SPACES_RE = re.compile(r"\s+")
_PARENTHETICAL_RE = re.compile(r"\(([^)]*)\)")
_INDEX_REPLY_RE = re.compile(r"^(\d+)\.?$")


def normalize_text(text: str) -> str:
    """Lowercase, '&' → 'and', drop punctuation, collapse whitespace.

    Word separators (``-``, ``/``, ``_``) become spaces so "non-disclosure"
    reads as two words; every other stray character is removed outright,
    which keeps dotted acronyms ("N.D.A.") intact as "nda".
    """
    text = (text or "").lower().replace("&", " and ")
    text = _SEPARATORS_RE.sub(" ", text)
    text = _STRIP_RE.sub("", _SPACES_RE.sub(" ", text))
    return _SPACES_RE.sub(" ", text).strip()


def _contains(haystack: str, needle: str) -> bool:
    """Whole-word containment between two normalized strings.

    A trailing plural "s" still counts ("ndas" contains "nda"), but a needle
    glued to the end of another word does not ("photos" lacks "tos").
    """
    if not haystack or not needle:
        return False
    return re.search(rf"(?<![a-z0-9]){re.escape(needle)}s?(?![a-z0-9])", haystack) is not None


def _occurs(needle: str, text: str) -> bool:
    """Substring test where a number at either edge of ``needle`` cannot run into more digits."""
    if not needle:
        return False
    pattern = re.escape(needle)
    if needle[0].isdigit():
        pattern = rf"(?<!\d){pattern}"
    if needle[-1].isdigit():
        pattern = rf"{pattern}(?!\d)"
    return re.search(pattern, text) is not None


def _either_contains(a: str, b: str) -> bool:
    return _contains(a, b) or _contains(b, a)


# ── Type Resolver ──────────────────────────────────────────────────────
def resolve_document_type(catalog: Catalog, raw_text: str) -> Optional[DocumentTypeEntry]:
    """
    Map free text to a catalog entry. Precision first:
    exact alias > alias containment > type-name containment > acronym.
    """
    text = normalize_text(raw_text)
    if not text:
        return None

    # 1. exact alias
    target = catalog.aliases.get(text)
    if target:
        return catalog.get(target)

    # 2. alias containment, table order is the tie-break
    for alias, target in catalog.aliases.items():
        if _either_contains(text, alias):
            return catalog.get(target)

    # 3. canonical display name / bare name, then embedded acronym
    for entry in catalog.document_types:
        display = normalize_text(_PARENTHETICAL_RE.sub(" ", entry.display_name))
        bare = normalize_text(entry.name)
        if _either_contains(text, display) or _either_contains(text, bare):
            return entry

    for entry in catalog.document_types:
        for acronym in _PARENTHETICAL_RE.findall(entry.display_name):
            if _contains(text, normalize_text(acronym)):
                return entry

    return None


# ── Answer Resolver ────────────────────────────────────────────────────
def resolve_answer(question: Question, raw_text: str) -> Optional[Answer]:
    """Match a reply against the question's options, then index, then custom text."""
    reply = (raw_text or "").strip()
    if not reply:
        return None
    lowered = reply.lower()

    # Exact label/value first, then the longest label or value found inside the
    # reply, so "DD + Financing" is not swallowed by the shorter "dd".
    for option in question.options:
        if lowered in (option.label.lower(), option.value.lower()):
            return OptionAnswer(value=option.value)

    best, best_len = None, 0
    for option in question.options:
        for needle in (option.label.lower(), option.value.lower()):
            if len(needle) > best_len and _occurs(needle, lowered):
                best, best_len = option, len(needle)
    if best is not None:
        return OptionAnswer(value=best.value)

    index_match = _INDEX_REPLY_RE.match(lowered)
    if index_match:
        index = int(index_match.group(1)) - 1
        if 0 <= index < len(question.options):
            return OptionAnswer(value=question.options[index].value)

    if question.allow_custom_answer:
        return CustomAnswer(text=reply)

    return None
