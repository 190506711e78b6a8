"""
Shared pytest fixtures for the document conversation engine.

Provides:
- The default catalog
- A recording fake document generator (no LLM calls)
- An engine wired to the fake generator
- A ``turn`` helper that runs one async engine turn synchronously
"""
import asyncio
import sys
from pathlib import Path

import pytest

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from catalog.document_types import default_catalog
from graph.engine import ConversationEngine
from graph.llm import GeneratedDocument
from sessions import store


class RecordingGenerator:
    """Stands in for the LLM; records every call, optionally fails."""

    def __init__(self, content="DRAFT DOCUMENT", error=None):
        self.content = content
        self.error = error
        self.calls = []

    async def __call__(self, document_type, requirements, deal_context):
        self.calls.append({
            "document_type": document_type,
            "requirements": requirements,
            "deal_context": deal_context,
        })
        if self.error is not None:
            raise self.error
        return GeneratedDocument(content=self.content, disclaimer="Not legal advice.")


@pytest.fixture
def catalog():
    return default_catalog()


@pytest.fixture
def generator():
    return RecordingGenerator()


@pytest.fixture
def engine(catalog, generator):
    return ConversationEngine(catalog, generator)


@pytest.fixture
def turn(engine):
    """Run one engine turn: turn(state, message, deal_context=None)."""
    def _turn(state, message, deal_context=None):
        return asyncio.run(engine.take_turn(state, message, deal_context))
    return _turn


@pytest.fixture(autouse=True)
def clean_session_store():
    store.reset()
    yield
    store.reset()
