"""Document type catalog — question flows per document type (data only).

Flows are walked in order by the conversation engine. ``required_fields``
decides readiness; the remaining questions only enrich the generated draft.
"""

from functools import lru_cache

from catalog.models import Catalog, DocumentTypeEntry, Option, Question


def _answered(answers, question_id, *values):
    """True when ``question_id`` was answered with one of ``values``."""
    answer = answers.get(question_id)
    return getattr(answer, "value", None) in values


# ── Non-Disclosure Agreement ────────────────────────────────────────────
NDA = DocumentTypeEntry(
    name="Non-Disclosure Agreement",
    display_name="Non-Disclosure Agreement (NDA)",
    description="Protect confidential information during deal discussions",
    required_fields=["nda_type", "duration", "scope"],
    questions=[
        Question(
            id="nda_type",
            prompt="Who will be sharing confidential information in this deal?",
            help_text="This determines whether the NDA protects one party or both.",
            options=[
                Option(label="Seller Only", value="one-way-seller", description="Seller shares info with buyer"),
                Option(label="Buyer Only", value="one-way-buyer", description="Buyer shares info with seller"),
                Option(label="Mutual", value="mutual", description="Both parties share confidential info"),
            ],
        ),
        Question(
            id="duration",
            prompt="How long should confidentiality obligations last after disclosure?",
            help_text="For M&A deals, 3-5 years is standard. Trade secrets may need perpetual protection.",
            allow_custom_answer=True,
            options=[
                Option(label="2 Years", value="2", description="Shorter term, lower-risk info"),
                Option(label="3 Years", value="3", description="Standard for most M&A deals"),
                Option(label="5 Years", value="5", description="Higher value or sensitive info"),
                Option(label="Perpetual", value="perpetual", description="Trade secrets, never expires"),
            ],
        ),
        Question(
            id="scope",
            prompt="What type of confidential information will be shared?",
            help_text="This helps define what's protected under the NDA.",
            options=[
                Option(label="Financial Only", value="financial", description="Revenue, profits, projections"),
                Option(label="Business Operations", value="operations", description="Processes, suppliers, customers"),
                Option(label="Technical/IP", value="technical", description="Technology, trade secrets, patents"),
                Option(label="Comprehensive", value="comprehensive", description="All business information"),
            ],
        ),
        Question(
            id="carveouts",
            prompt="Include standard exceptions (carve-outs)?",
            help_text="Standard carve-outs protect against unreasonable claims.",
            options=[
                Option(label="Yes, Standard", value="standard", description="Public info, prior knowledge, legal requirements"),
                Option(label="Minimal", value="minimal", description="Only legally required exceptions"),
                Option(label="Expanded", value="expanded", description="Standard plus independent development"),
            ],
        ),
        Question(
            id="non_solicitation",
            prompt="Include non-solicitation of employees clause?",
            help_text="Prevents parties from poaching each other's staff during and after the deal.",
            options=[
                Option(label="Yes, 12 months", value="12", description="Standard protection period"),
                Option(label="Yes, 24 months", value="24", description="Extended protection"),
                Option(label="No", value="none", description="Not needed for this deal"),
            ],
        ),
    ],
)


# ── Letter of Intent ────────────────────────────────────────────────────
LOI = DocumentTypeEntry(
    name="Letter of Intent",
    display_name="Letter of Intent (LOI)",
    description="Non-binding outline of deal terms before formal agreement",
    required_fields=["binding_provisions", "exclusivity", "key_terms"],
    questions=[
        Question(
            id="binding_provisions",
            prompt="Which provisions should be legally binding?",
            help_text="Most LOIs are non-binding except for specific clauses.",
            options=[
                Option(label="None (Non-binding)", value="none", description="Standard non-binding LOI"),
                Option(label="Confidentiality Only", value="confidentiality", description="Common choice if no NDA exists"),
                Option(label="Exclusivity Only", value="exclusivity", description="Lock in deal negotiations"),
                Option(label="Both", value="both", description="Confidentiality and exclusivity binding"),
            ],
        ),
        Question(
            id="exclusivity",
            prompt="Include an exclusivity (no-shop) period?",
            help_text="Prevents seller from negotiating with other buyers.",
            options=[
                Option(label="30 Days", value="30", description="Quick due diligence expected"),
                Option(label="60 Days", value="60", description="Standard for most deals"),
                Option(label="90 Days", value="90", description="Complex due diligence needed"),
                Option(label="No Exclusivity", value="none", description="Seller keeps options open"),
            ],
        ),
        Question(
            id="key_terms",
            prompt="What is the proposed deal structure?",
            help_text="This affects the key terms section of the LOI.",
            options=[
                Option(label="Asset Purchase", value="asset", description="Buying specific assets"),
                Option(label="Share Purchase", value="share", description="Buying company shares/equity"),
                Option(label="Business Sale", value="business", description="Entire business transfer"),
                Option(label="To Be Determined", value="tbd", description="Structure still being decided"),
            ],
        ),
        Question(
            id="conditions",
            prompt="Key conditions precedent to include?",
            help_text="These must be satisfied before the deal can close.",
            allow_custom_answer=True,
            options=[
                Option(label="Due Diligence Only", value="dd", description="Standard condition"),
                Option(label="DD + Financing", value="dd_financing", description="Buyer needs funding approval"),
                Option(label="DD + Board Approval", value="dd_board", description="Requires board sign-off"),
                Option(label="Comprehensive", value="comprehensive", description="DD, financing, approvals, third-party consents"),
            ],
        ),
        Question(
            id="deposit",
            prompt="Include a deposit or earnest money provision?",
            help_text="Shows buyer commitment and may be forfeited if buyer walks away.",
            options=[
                Option(label="No Deposit", value="none", description="No upfront payment"),
                Option(label="Refundable Deposit", value="refundable", description="Returned if deal doesn't proceed"),
                Option(label="Non-refundable Deposit", value="non_refundable", description="Forfeited if buyer backs out"),
            ],
        ),
    ],
)


# ── Asset Purchase Agreement ────────────────────────────────────────────
ASSET_PURCHASE = DocumentTypeEntry(
    name="Asset Purchase Agreement",
    display_name="Asset Purchase Agreement",
    description="Formal agreement for purchasing specific business assets",
    required_fields=["asset_types", "payment_structure", "warranties"],
    questions=[
        Question(
            id="asset_types",
            prompt="What types of assets are being purchased?",
            help_text="This determines which schedules and representations are needed.",
            options=[
                Option(label="Tangible Only", value="tangible", description="Equipment, inventory, property"),
                Option(label="Intangible Only", value="intangible", description="IP, goodwill, contracts"),
                Option(label="Both", value="both", description="Full asset acquisition"),
                Option(label="Going Concern", value="going_concern", description="Business as operating entity"),
            ],
        ),
        Question(
            id="payment_structure",
            prompt="How will the purchase price be paid?",
            help_text="Payment structure affects security and risk allocation.",
            options=[
                Option(label="Cash at Closing", value="cash", description="Full payment on completion"),
                Option(label="Deferred Payment", value="deferred", description="Paid in instalments"),
                Option(label="Earnout", value="earnout", description="Based on future performance"),
                Option(label="Combination", value="combination", description="Cash + deferred + earnout"),
            ],
        ),
        Question(
            id="warranties",
            prompt="What level of seller warranties do you need?",
            help_text="More warranties = more protection but harder negotiations.",
            options=[
                Option(label="Basic", value="basic", description="Title, authority, no encumbrances"),
                Option(label="Standard", value="standard", description="Basic + financials, compliance"),
                Option(label="Comprehensive", value="comprehensive", description="Full representations package"),
                Option(label="Minimal (As-Is)", value="minimal", description="Limited warranties, buyer beware"),
            ],
        ),
        Question(
            id="employees",
            prompt="Will employees transfer with the assets?",
            help_text="Employee transfer has legal and practical implications.",
            # No workforce changes hands when only intangibles are bought.
            skip_if=lambda answers: _answered(answers, "asset_types", "intangible"),
            options=[
                Option(label="All Employees", value="all", description="Full workforce transfer"),
                Option(label="Key Employees Only", value="key", description="Selected critical staff"),
                Option(label="No Employees", value="none", description="Assets only"),
                Option(label="Buyer's Choice", value="choice", description="Buyer selects who transfers"),
            ],
        ),
        Question(
            id="non_compete",
            prompt="Include a seller non-compete clause?",
            help_text="Prevents seller from competing with the business after sale.",
            options=[
                Option(label="Yes, 2 Years", value="2", description="Standard protection"),
                Option(label="Yes, 3 Years", value="3", description="Extended protection"),
                Option(label="Yes, 5 Years", value="5", description="Maximum protection"),
                Option(label="No", value="none", description="No restriction on seller"),
            ],
        ),
    ],
)


# ── Share Purchase Agreement ────────────────────────────────────────────
SHARE_PURCHASE = DocumentTypeEntry(
    name="Share Purchase Agreement",
    display_name="Share Purchase Agreement",
    description="Agreement for purchasing shares/equity in a company",
    required_fields=["share_percentage", "payment_terms", "warranty_level"],
    questions=[
        Question(
            id="share_percentage",
            prompt="What percentage of shares is being purchased?",
            help_text="This affects control rights and required protections.",
            options=[
                Option(label="100% (Full Acquisition)", value="100", description="Complete ownership transfer"),
                Option(label="Majority (51-99%)", value="majority", description="Control but existing shareholders"),
                Option(label="Significant Minority (25-50%)", value="significant", description="Blocking rights typical"),
                Option(label="Minority (<25%)", value="minority", description="Limited control rights"),
            ],
        ),
        Question(
            id="payment_terms",
            prompt="Payment structure for the shares?",
            help_text="How will the purchase consideration be paid?",
            options=[
                Option(label="Cash at Completion", value="cash", description="Full payment on closing"),
                Option(label="Staged Payments", value="staged", description="Multiple tranches"),
                Option(label="Share Swap", value="swap", description="Buyer shares as consideration"),
                Option(label="Mixed Consideration", value="mixed", description="Cash + shares + deferred"),
            ],
        ),
        Question(
            id="warranty_level",
            prompt="Level of warranties and indemnities?",
            help_text="Higher protection means more complex negotiations.",
            options=[
                Option(label="Title Only", value="title", description="Seller owns shares, can transfer"),
                Option(label="Standard Package", value="standard", description="Title + business warranties"),
                Option(label="Full W&I", value="full", description="Comprehensive warranty schedule"),
                Option(label="W&I Insurance", value="insurance", description="Backed by insurance policy"),
            ],
        ),
        Question(
            id="completion_accounts",
            prompt="How will the purchase price be adjusted?",
            help_text="Method for adjusting price based on actual vs. expected value.",
            options=[
                Option(label="Locked Box", value="locked_box", description="Fixed price, no adjustment"),
                Option(label="Completion Accounts", value="completion", description="Adjusted for working capital"),
                Option(label="Earn-Out", value="earnout", description="Based on future performance"),
                Option(label="Hybrid", value="hybrid", description="Base + earnout component"),
            ],
        ),
        Question(
            id="post_completion",
            prompt="Post-completion restrictions on seller?",
            help_text="Protections after the deal closes.",
            # Minority buyers rarely get restraints over continuing sellers.
            skip_if=lambda answers: _answered(answers, "share_percentage", "minority"),
            options=[
                Option(label="Standard", value="standard", description="Non-compete + non-solicit"),
                Option(label="Enhanced", value="enhanced", description="Standard + transition services"),
                Option(label="Minimal", value="minimal", description="Basic obligations only"),
                Option(label="None", value="none", description="No post-completion restrictions"),
            ],
        ),
    ],
)


# ── Employment Contract ─────────────────────────────────────────────────
EMPLOYMENT = DocumentTypeEntry(
    name="Employment Contract",
    display_name="Employment Contract",
    description="Contract for key employee as part of business transaction",
    required_fields=["role_type", "term", "compensation"],
    questions=[
        Question(
            id="role_type",
            prompt="What is the nature of this employment?",
            help_text="Determines the structure and required clauses.",
            allow_custom_answer=True,
            options=[
                Option(label="Executive/Director", value="executive", description="Senior leadership role"),
                Option(label="Key Employee", value="key", description="Critical operational role"),
                Option(label="Retained Seller", value="seller", description="Seller staying post-acquisition"),
                Option(label="General Employee", value="general", description="Standard employment terms"),
            ],
        ),
        Question(
            id="term",
            prompt="What is the employment term?",
            help_text="Fixed term provides certainty; ongoing provides flexibility.",
            options=[
                Option(label="Ongoing", value="ongoing", description="Permanent employment"),
                Option(label="12 Months Fixed", value="12", description="One year initial term"),
                Option(label="24 Months Fixed", value="24", description="Two year commitment"),
                Option(label="36 Months Fixed", value="36", description="Three year lock-in"),
            ],
        ),
        Question(
            id="compensation",
            prompt="Compensation structure?",
            help_text="How will the employee be rewarded?",
            options=[
                Option(label="Salary Only", value="salary", description="Fixed remuneration"),
                Option(label="Salary + Bonus", value="bonus", description="Base + performance bonus"),
                Option(label="Salary + Equity", value="equity", description="Base + share options/rights"),
                Option(label="Full Package", value="full", description="Salary + bonus + equity"),
            ],
        ),
        Question(
            id="restraints",
            prompt="Post-employment restraints?",
            help_text="Restrictions after employment ends.",
            options=[
                Option(label="Standard", value="standard", description="Non-compete 12 months"),
                Option(label="Enhanced", value="enhanced", description="Non-compete + non-solicit 24 months"),
                Option(label="Minimal", value="minimal", description="Confidentiality only"),
                Option(label="None", value="none", description="No restraints"),
            ],
        ),
        Question(
            id="termination",
            prompt="Termination notice period?",
            help_text="Notice required to end the employment.",
            options=[
                Option(label="2 Weeks", value="2", description="Minimum statutory"),
                Option(label="4 Weeks", value="4", description="Standard notice"),
                Option(label="3 Months", value="12", description="Executive standard"),
                Option(label="6 Months", value="24", description="Senior executive"),
            ],
        ),
    ],
)


# ── Service Agreement ───────────────────────────────────────────────────
SERVICE = DocumentTypeEntry(
    name="Service Agreement",
    display_name="Service Agreement",
    description="Agreement for professional or consulting services",
    required_fields=["service_type", "term", "payment"],
    questions=[
        Question(
            id="service_type",
            prompt="What type of services will be provided?",
            help_text="This determines the scope and deliverables section.",
            allow_custom_answer=True,
            options=[
                Option(label="Consulting", value="consulting", description="Advisory services"),
                Option(label="Professional Services", value="professional", description="Technical/specialized work"),
                Option(label="Transition Services", value="transition", description="Post-acquisition support"),
                Option(label="Managed Services", value="managed", description="Ongoing operational support"),
            ],
        ),
        Question(
            id="term",
            prompt="Service agreement duration?",
            help_text="How long will services be provided?",
            options=[
                Option(label="3 Months", value="3", description="Short-term engagement"),
                Option(label="6 Months", value="6", description="Medium-term project"),
                Option(label="12 Months", value="12", description="Annual agreement"),
                Option(label="Project-Based", value="project", description="Until completion"),
            ],
        ),
        Question(
            id="payment",
            prompt="Payment structure?",
            help_text="How will services be paid for?",
            options=[
                Option(label="Fixed Fee", value="fixed", description="Agreed total amount"),
                Option(label="Time & Materials", value="tm", description="Hourly/daily rates"),
                Option(label="Retainer", value="retainer", description="Monthly fixed amount"),
                Option(label="Milestone-Based", value="milestone", description="Payment on deliverables"),
            ],
        ),
        Question(
            id="ip_ownership",
            prompt="Who owns work product and IP?",
            help_text="Important for any deliverables created.",
            options=[
                Option(label="Client Owns All", value="client", description="Full ownership transfer"),
                Option(label="Provider Retains", value="provider", description="License to client"),
                Option(label="Shared", value="shared", description="Joint ownership"),
                Option(label="Background + Foreground Split", value="split", description="Pre-existing vs. new IP"),
            ],
        ),
        Question(
            id="liability",
            prompt="Liability cap?",
            help_text="Maximum provider liability for claims.",
            options=[
                Option(label="Fees Paid", value="fees", description="Limited to fees paid"),
                Option(label="Annual Fees", value="annual", description="One year of fees"),
                Option(label="Fixed Cap", value="fixed", description="Specific dollar amount"),
                Option(label="Unlimited", value="unlimited", description="No cap on liability"),
            ],
        ),
    ],
)


# ── Terms and Conditions ────────────────────────────────────────────────
TERMS = DocumentTypeEntry(
    name="Terms and Conditions",
    display_name="Terms and Conditions",
    description="Standard terms for products or services",
    required_fields=["business_type", "payment_terms", "liability"],
    questions=[
        Question(
            id="business_type",
            prompt="What does the business sell?",
            help_text="This determines which clauses are needed.",
            options=[
                Option(label="Physical Products", value="products", description="Goods, inventory"),
                Option(label="Digital Products", value="digital", description="Software, downloads"),
                Option(label="Services", value="services", description="Professional services"),
                Option(label="Mixed", value="mixed", description="Products and services"),
            ],
        ),
        Question(
            id="payment_terms",
            prompt="Standard payment terms?",
            help_text="When payment is due.",
            options=[
                Option(label="Upfront", value="upfront", description="Payment before delivery"),
                Option(label="14 Days", value="14", description="Two weeks from invoice"),
                Option(label="30 Days", value="30", description="Standard net 30"),
                Option(label="60 Days", value="60", description="Extended terms"),
            ],
        ),
        Question(
            id="returns",
            prompt="Returns/refund policy?",
            help_text="Customer rights for returns.",
            # Pure service businesses have nothing to return.
            skip_if=lambda answers: _answered(answers, "business_type", "services"),
            options=[
                Option(label="ACL Only", value="acl", description="Australian Consumer Law minimum"),
                Option(label="14 Days No Questions", value="14", description="Generous returns"),
                Option(label="30 Days Store Credit", value="30_credit", description="Credit only"),
                Option(label="No Returns", value="none", description="Final sale (where permitted)"),
            ],
        ),
        Question(
            id="liability",
            prompt="Liability limitations?",
            help_text="Extent of business liability to customers.",
            options=[
                Option(label="ACL Minimum", value="acl", description="Cannot exclude consumer guarantees"),
                Option(label="Standard Commercial", value="commercial", description="Reasonable exclusions"),
                Option(label="Comprehensive", value="comprehensive", description="Maximum protection"),
            ],
        ),
        Question(
            id="disputes",
            prompt="Dispute resolution process?",
            help_text="How disputes will be handled.",
            options=[
                Option(label="Negotiation First", value="negotiation", description="Informal resolution"),
                Option(label="Mediation Required", value="mediation", description="Before litigation"),
                Option(label="Arbitration", value="arbitration", description="Binding arbitration"),
                Option(label="Court Only", value="court", description="Direct to courts"),
            ],
        ),
    ],
)


DOCUMENT_TYPES = (NDA, LOI, ASSET_PURCHASE, SHARE_PURCHASE, EMPLOYMENT, SERVICE, TERMS)

# ── Alias table (normalized phrase → canonical name) ────────────────────
# Order matters: the first containment hit wins, so longer phrases go first.
ALIASES = {
    "nda": "Non-Disclosure Agreement",
    "non disclosure": "Non-Disclosure Agreement",
    "nondisclosure": "Non-Disclosure Agreement",
    "confidentiality agreement": "Non-Disclosure Agreement",
    "cda": "Non-Disclosure Agreement",
    "loi": "Letter of Intent",
    "letter of intent": "Letter of Intent",
    "heads of agreement": "Letter of Intent",
    "term sheet": "Letter of Intent",
    "apa": "Asset Purchase Agreement",
    "asset purchase": "Asset Purchase Agreement",
    "asset sale": "Asset Purchase Agreement",
    "business sale agreement": "Asset Purchase Agreement",
    "spa": "Share Purchase Agreement",
    "share purchase": "Share Purchase Agreement",
    "share sale": "Share Purchase Agreement",
    "stock purchase": "Share Purchase Agreement",
    "equity purchase": "Share Purchase Agreement",
    "employment agreement": "Employment Contract",
    "employment contract": "Employment Contract",
    "employee contract": "Employment Contract",
    "job contract": "Employment Contract",
    "msa": "Service Agreement",
    "consulting agreement": "Service Agreement",
    "services agreement": "Service Agreement",
    "service contract": "Service Agreement",
    "tsa": "Service Agreement",
    "terms and conditions": "Terms and Conditions",
    "t and c": "Terms and Conditions",
    "tandc": "Terms and Conditions",
    "terms of service": "Terms and Conditions",
    "tos": "Terms and Conditions",
    "terms of sale": "Terms and Conditions",
}


@lru_cache(maxsize=1)
def default_catalog() -> Catalog:
    """The built-in catalog, built once per process and shared read-only."""
    return Catalog(document_types=DOCUMENT_TYPES, aliases=ALIASES)
