"""Catalog schema — document types, their question flows and options.

Everything here is immutable once built. The engine receives a ``Catalog``
value at construction and never mutates it.
"""

import re
from typing import Any, Callable, Dict, List, Mapping, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, model_validator

_ALIAS_RE = re.compile(r"^[a-z0-9]+( [a-z0-9]+)*$")


class Option(BaseModel):
    """One selectable answer. ``value`` is what gets stored."""

    model_config = ConfigDict(frozen=True)

    label: str
    value: str
    description: Optional[str] = None


class Question(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    prompt: str
    help_text: Optional[str] = None
    options: Tuple[Option, ...] = ()
    allow_custom_answer: bool = False
    # Receives the answers gathered so far; True means bypass this question.
    skip_if: Optional[Callable[[Mapping[str, Any]], bool]] = Field(default=None, exclude=True)

    def find_option(self, value: str) -> Optional[Option]:
        for option in self.options:
            if option.value == value:
                return option
        return None

    def should_skip(self, answers: Mapping[str, Any]) -> bool:
        return bool(self.skip_if and self.skip_if(answers))


class DocumentTypeEntry(BaseModel):
    """A document type and its ordered question flow."""

    model_config = ConfigDict(frozen=True)

    name: str
    display_name: str
    description: str
    questions: Tuple[Question, ...]
    required_fields: frozenset[str]

    @model_validator(mode="after")
    def _check_flow(self):
        ids = [q.id for q in self.questions]
        if len(ids) != len(set(ids)):
            raise ValueError(f"{self.name}: duplicate question ids")
        unknown = self.required_fields - set(ids)
        if unknown:
            raise ValueError(f"{self.name}: required fields not in flow: {sorted(unknown)}")
        return self

    @property
    def question_ids(self) -> List[str]:
        return [q.id for q in self.questions]

    def question(self, question_id: str) -> Optional[Question]:
        for q in self.questions:
            if q.id == question_id:
                return q
        return None


class Catalog(BaseModel):
    """Registry of document types plus the curated alias table.

    ``aliases`` maps a normalized phrase (lowercase words, single spaces) to a
    canonical type name. Iteration order is the tie-break for fuzzy matches.
    """

    model_config = ConfigDict(frozen=True)

    document_types: Tuple[DocumentTypeEntry, ...]
    aliases: Dict[str, str] = Field(default_factory=dict)

    @model_validator(mode="after")
    def _check_catalog(self):
        names = [dt.name for dt in self.document_types]
        if len(names) != len(set(names)):
            raise ValueError("duplicate document type names")
        for alias, target in self.aliases.items():
            if not _ALIAS_RE.match(alias):
                raise ValueError(f"alias {alias!r} is not normalized")
            if target not in names:
                raise ValueError(f"alias {alias!r} points at unknown type {target!r}")
        return self

    def get(self, name: Optional[str]) -> Optional[DocumentTypeEntry]:
        if not name:
            return None
        for entry in self.document_types:
            if entry.name == name:
                return entry
        return None

    def type_options(self) -> List[Option]:
        """The full catalog rendered as selectable options."""
        return [
            Option(label=dt.display_name, value=dt.name, description=dt.description)
            for dt in self.document_types
        ]
