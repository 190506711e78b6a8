"""
Tests for the document generator and its prompts (no network calls).

Run with: pytest tests/test_llm.py -v
"""
import asyncio

import pytest

import graph.llm as llm
from catalog.document_types import NDA
from graph.llm import clean_generated_text, generate_document
from graph.requirements import format_requirements
from graph.state import OptionAnswer
from prompts.clause_library import clause_text
from prompts.generation_prompts import DISCLAIMER, build_generation_prompt


@pytest.fixture
def no_api_key(monkeypatch):
    monkeypatch.setattr(llm, "GOOGLE_API_KEY", "")
    llm.clear_llm_instance()
    yield
    llm.clear_llm_instance()


class TestCleanGeneratedText:
    def test_strips_code_fences(self):
        assert clean_generated_text("```markdown\nNDA\n```") == "NDA"

    def test_strips_bold(self):
        assert clean_generated_text("**1. Definitions**") == "1. Definitions"

    def test_empty(self):
        assert clean_generated_text(None) == ""


class TestTemplateFallback:
    def test_draft_without_api_key(self, no_api_key):
        requirements = "DOCUMENT TYPE: Letter of Intent (LOI)\n\nUSER REQUIREMENTS:\n"
        document = asyncio.run(generate_document("Letter of Intent", requirements, {}))
        assert document.content.startswith("LETTER OF INTENT")
        assert "USER REQUIREMENTS:" in document.content
        assert document.disclaimer == DISCLAIMER


class TestGenerationPrompt:
    def test_prompt_carries_requirements_and_context(self):
        system, human = build_generation_prompt(
            "Service Agreement",
            "- Payment structure?\n  Answer: Retainer",
            {"businessName": "Acme Pty Ltd"},
        )
        assert "Answer: Retainer" in system
        assert '"businessName": "Acme Pty Ltd"' in system
        assert "complete, professional Service Agreement" in system
        assert "Service Agreement" in human

    def test_deal_context_sent_once(self):
        deal_context = {"title": "Acme Sale", "askingPrice": 250000}
        requirements = format_requirements(NDA, {
            "nda_type": OptionAnswer(value="mutual"),
            "duration": OptionAnswer(value="3"),
            "scope": OptionAnswer(value="comprehensive"),
        })
        system, human = build_generation_prompt(NDA.name, requirements, deal_context)

        assert system.count("DEAL CONTEXT:") == 1
        assert system.count('"title": "Acme Sale"') == 1
        assert system.count('"askingPrice": 250000') == 1
        assert "Acme Sale" not in human
        assert "Answer: Mutual (Both parties share confidential info)" in system

    def test_empty_deal_context(self):
        system, _ = build_generation_prompt("Employment Contract", "", None)
        assert "DEAL CONTEXT:\n{}" in system


class TestClauseLibrary:
    def test_known_clause(self):
        assert clause_text("disputes", "court", "Court Only").startswith("Any dispute shall be resolved by the courts")

    def test_fallback_clause(self):
        assert clause_text("quorum", "two", "Two Directors") == \
            "The parties agree that two directors shall apply to this Agreement."
