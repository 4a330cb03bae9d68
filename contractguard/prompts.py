"""Centralized prompt for contract risk analysis.

The prompt lives here so it can be reviewed, versioned, and tuned in one place.
The JSON shape in RESPONSE_FORMAT is what parsing.py expects: change both together.
"""

RISK_CATEGORIES = [
    ("Payment Terms", "vague timelines, unclear amounts, no late fees"),
    ("Intellectual Property", "unclear ownership, missing IP clauses"),
    ("Scope of Work", "unlimited revisions, vague deliverables"),
    ("Termination", "no notice period, unfair termination clauses"),
    ("Liability", "unlimited liability, missing limitation clauses"),
    ("Non-compete", "overly broad restrictions"),
    ("Confidentiality", "missing or weak NDAs"),
]


def build_analysis_prompt(contract_text: str) -> str:
    """Embed the contract text into the fixed analysis instructions."""
    categories = "\n".join(
        f"{n}. {name} ({hint})" for n, (name, hint) in enumerate(RISK_CATEGORIES, start=1)
    )
    return f"""{SYSTEM_IDENTITY}

Contract Text:
{contract_text}

Please analyze this contract and identify risks in the following categories:
{categories}

{RISK_FIELDS}

{SUMMARY_FIELDS}

{RESPONSE_FORMAT}

Only return the JSON object, no other text."""


# ---------------------------------------------------------------------------
# Prompt Components
# ---------------------------------------------------------------------------

SYSTEM_IDENTITY = (
    "You are a legal expert analyzing a contract for potential risks. "
    "Analyze the following contract text and identify problematic clauses."
)

RISK_FIELDS = """For each risk found, provide:
- Risk level (high/medium/low)
- Category
- Brief description
- Plain English explanation of why it's problematic
- Specific suggestion for improvement
- Location in contract (section/clause reference if available)
- Original problematic clause text (exact quote from contract)
- Suggested replacement clause text"""

SUMMARY_FIELDS = """Also provide:
- Overall risk score (0-100, where 100 is safest)
- Total number of clauses analyzed
- For the top 3-5 most important risks, provide revised sections showing original vs improved text.
  In the revised text, wrap every inserted or changed phrase in **double asterisks**."""

RESPONSE_FORMAT = """Format your response as a JSON object with this structure:
{
  "risks": [
    {
      "type": "high|medium|low",
      "category": "category name",
      "description": "brief description",
      "explanation": "why this is problematic",
      "suggestion": "specific improvement suggestion",
      "location": "section reference",
      "originalClause": "exact text from contract",
      "suggestedClause": "improved replacement text"
    }
  ],
  "overallScore": 0,
  "totalClauses": 0,
  "revisedSections": [
    {
      "section": "section name/number",
      "original": "original problematic text",
      "revised": "improved text with **changes** highlighted"
    }
  ]
}"""
