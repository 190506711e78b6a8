"""Clause wording used by the partial document preview.

Keyed by question id, then by option value. Anything not listed falls back
to a generic sentence built from the answer label.
"""

CLAUSE_TEMPLATES: dict[str, dict[str, str]] = {
    "scope": {
        "financial": "This Agreement covers financial information including revenue, profits and projections.",
        "operations": "This Agreement covers information about business operations, suppliers and customers.",
        "technical": "This Agreement covers technical information, trade secrets and intellectual property.",
        "comprehensive": "This Agreement covers all Confidential Information disclosed by either party, whether oral, written, electronic, or in any other form.",
    },
    "nda_type": {
        "mutual": "Both parties shall protect the confidential information of the other party with the same degree of care used to protect their own confidential information.",
        "one-way-seller": "The Recipient shall protect the confidential information disclosed by the Seller.",
        "one-way-buyer": "The Recipient shall protect the confidential information disclosed by the Buyer.",
    },
    "duration": {
        "2": "The confidentiality obligations under this Agreement shall remain in effect for a period of two (2) years from the date of disclosure.",
        "3": "The confidentiality obligations under this Agreement shall remain in effect for a period of three (3) years from the date of disclosure.",
        "5": "The confidentiality obligations under this Agreement shall remain in effect for a period of five (5) years from the date of disclosure.",
        "perpetual": "The confidentiality obligations under this Agreement shall continue indefinitely and survive termination of this Agreement.",
    },
    "payment": {
        "fixed": "The Client shall pay the agreed fixed fee in accordance with the payment schedule.",
        "milestone": "Payment shall be made in instalments upon completion of agreed milestones.",
        "retainer": "The Client shall pay a monthly retainer in advance.",
        "tm": "Fees shall be charged on a time and materials basis at the agreed rates.",
    },
    "payment_terms": {
        "upfront": "Payment shall be made in full before delivery.",
        "cash": "The purchase price shall be paid in full on completion.",
        "14": "Payment is due within 14 days of invoice.",
        "30": "Payment is due within 30 days of invoice.",
        "60": "Payment is due within 60 days of invoice.",
    },
    "disputes": {
        "mediation": "Any dispute shall first be referred to mediation in accordance with the Resolution Institute Mediation Rules.",
        "arbitration": "Any dispute shall be finally resolved by arbitration in accordance with the ACICA Arbitration Rules.",
        "court": "Any dispute shall be resolved by the courts of the relevant Australian jurisdiction.",
        "negotiation": "The parties shall first attempt to resolve any dispute by good-faith negotiation.",
    },
    "termination": {
        "2": "Either party may terminate employment by giving 2 weeks written notice.",
        "4": "Either party may terminate employment by giving 4 weeks written notice.",
        "12": "Either party may terminate employment by giving 3 months written notice.",
        "24": "Either party may terminate employment by giving 6 months written notice.",
    },
}


def clause_text(question_id: str, value: str, label: str) -> str:
    """Clause sentence for an answered question."""
    templates = CLAUSE_TEMPLATES.get(question_id.lower(), {})
    if value.lower() in templates:
        return templates[value.lower()]
    return f"The parties agree that {label.lower()} shall apply to this Agreement."
