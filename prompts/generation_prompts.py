"""LLM prompt templates for document generation.

Used by the generator in graph/llm.py. The formatted requirements bundle
and the deal context are appended to the system prompt verbatim.
"""

import json

DOCUMENT_GENERATION_SYSTEM_PROMPT = (
    "You are an expert commercial lawyer drafting transaction documents for "
    "business deals. Draft complete, professional documents with numbered "
    "clauses, defined terms and schedules where appropriate. Never invent "
    "facts that are not in the deal context; use [PLACEHOLDER] brackets instead."
)

AUSTRALIAN_LEGAL_CONTEXT = (
    "JURISDICTION:\n"
    "- Use Australian legal terminology and spelling\n"
    "- Reference the Corporations Act 2001 (Cth) and Australian Consumer Law where relevant\n"
    "- Default governing law is the state in the deal context, otherwise New South Wales\n"
    "- Amounts are in AUD unless stated otherwise"
)

GENERATION_INSTRUCTIONS = (
    "GENERATION INSTRUCTIONS:\n"
    "1. Generate a complete, professional {document_type} based on the user's specific requirements\n"
    "2. Use Australian legal standards and terminology\n"
    "3. Include all standard clauses for this document type\n"
    "4. Tailor clauses based on the user's answers\n"
    "5. Use proper legal formatting with numbered clauses\n"
    "6. Include schedules if appropriate\n"
    "7. Make it ready for immediate use with minimal editing"
)

DISCLAIMER = (
    "IMPORTANT DISCLAIMER: This document was generated by AI based on your inputs "
    "and is provided for informational purposes only. It does not constitute legal "
    "advice. This document should be reviewed by a qualified Australian legal "
    "professional before use. Laws and regulations may have changed since this "
    "document was generated. The accuracy, completeness, and applicability of this "
    "document to your specific situation cannot be guaranteed."
)


def build_generation_prompt(document_type: str, requirements: str, deal_context: dict) -> tuple[str, str]:
    """Build the (system, human) prompt pair for one generation call."""
    system = (
        f"{DOCUMENT_GENERATION_SYSTEM_PROMPT}\n\n"
        f"{AUSTRALIAN_LEGAL_CONTEXT}\n\n"
        f"DEAL CONTEXT:\n{json.dumps(deal_context or {}, indent=2, default=str)}\n\n"
        f"USER REQUIREMENTS FROM CONVERSATION:\n{requirements}\n\n"
        f"{GENERATION_INSTRUCTIONS.format(document_type=document_type)}"
    )
    human = (
        f"Generate a complete {document_type} document based on the requirements "
        f"gathered during our conversation. The document should be professional, "
        f"comprehensive, and ready for use."
    )
    return system, human
