"""LLM client — the document generator handed the formatted requirements.

The LLM is used ONLY for:
  ✅ Drafting the final document from the gathered requirements
  ❌ NOT for matching answers or flow control (that's the resolvers' and router's job)
"""

import logging
import re
from typing import Awaitable, Callable

from pydantic import BaseModel
from langchain_google_genai import ChatGoogleGenerativeAI
from langchain_core.messages import SystemMessage, HumanMessage

from config import GOOGLE_API_KEY, GENERATION_MODEL, GENERATION_TEMPERATURE
from prompts.generation_prompts import DISCLAIMER, build_generation_prompt


class GeneratedDocument(BaseModel):
    content: str
    disclaimer: str


# (document_type, formatted_requirements, deal_context) -> GeneratedDocument
DocumentGenerator = Callable[[str, str, dict], Awaitable[GeneratedDocument]]


# ── LLM instance (singleton) ───────────────────────────────────────────
_llm_instance = None


def _get_llm():
    """Lazy singleton — creates the LLM once, reuses on every call."""
    global _llm_instance
    if _llm_instance is not None:
        return _llm_instance
    if not GOOGLE_API_KEY:
        logging.warning("No GOOGLE_API_KEY configured; drafting from templates.")
        return None
    _llm_instance = ChatGoogleGenerativeAI(
        model=GENERATION_MODEL,
        google_api_key=GOOGLE_API_KEY,
        temperature=GENERATION_TEMPERATURE,
    )
    return _llm_instance


def clear_llm_instance():
    """
    Reset the LLM singleton. Use before each asyncio.run() in Streamlit to avoid
    'Event loop is closed' errors — the cached LLM holds HTTP clients tied to a
    previous event loop that gets closed between reruns.
    """
    global _llm_instance
    _llm_instance = None


_FENCE_RE = re.compile(r"```[\w]*\n?")


def clean_generated_text(text: str) -> str:
    """Strip markdown code fences and bold markers from model output."""
    return _FENCE_RE.sub("", text or "").replace("**", "").strip()


def _template_document(document_type: str, requirements: str) -> str:
    """Fallback draft when the LLM is unavailable."""
    return (
        f"{document_type.upper()}\n\n"
        f"DRAFT PREPARED FROM THE FOLLOWING REQUIREMENTS\n\n"
        f"{requirements.strip()}\n\n"
        f"[Full clauses to be completed by your legal adviser.]"
    )


# ── Document generation ────────────────────────────────────────────────
async def generate_document(document_type: str, requirements: str, deal_context: dict) -> GeneratedDocument:
    """Draft the document (Async). Errors propagate to the engine."""
    llm = _get_llm()
    if not llm:
        return GeneratedDocument(content=_template_document(document_type, requirements), disclaimer=DISCLAIMER)

    system, human = build_generation_prompt(document_type, requirements, deal_context)
    try:
        # Use astream to emit on_chat_model_stream events for the graph
        full_response = ""
        async for chunk in llm.astream([SystemMessage(content=system), HumanMessage(content=human)]):
            full_response += chunk.content
    except Exception as e:
        logging.error(f"Error generating {document_type}: {e}")
        raise

    content = clean_generated_text(full_response)
    if not content:
        raise ValueError(f"Empty draft returned for {document_type}")
    return GeneratedDocument(content=content, disclaimer=DISCLAIMER)
