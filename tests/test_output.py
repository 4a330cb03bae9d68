from datetime import date, datetime

from conftest import PAYMENT_SENTENCE
from contractguard.models import AnalysisResult, RevisedSection, RiskItem
from contractguard.output import (
    export_filename,
    generate_analysis_report,
    generate_revised_contract,
    generate_summary,
    highlight_revisions,
    safe_filename,
    strip_revision_markup,
)
from contractguard.parsing import parse_analysis_response


def _result(canned_response, contract_text):
    return parse_analysis_response(canned_response, contract_text)


def test_safe_filename_replaces_every_non_alphanumeric():
    assert safe_filename("my contract (v2).docx") == "my_contract__v2__docx"


def test_export_filename_has_prefix_and_iso_date():
    name = export_filename("Analysis", "lease.docx", on=date(2024, 5, 1))
    assert name == "ContractGuard_Analysis_lease_docx_2024-05-01.txt"


def test_markup_helpers():
    text = "Pay within **15** days <net>"
    assert strip_revision_markup(text) == "Pay within 15 days <net>"
    assert highlight_revisions(text) == (
        'Pay within <span class="revision-highlight">15</span> days &lt;net&gt;'
    )


def test_summary_counts_and_ranks():
    result = AnalysisResult(
        risks=[
            RiskItem(id="risk-1", type="low", category="Confidentiality"),
            RiskItem(id="risk-2", type="odd", category="Other"),
            RiskItem(id="risk-3", type="high", category="Liability"),
        ],
        overall_score=50,
        total_clauses=9,
        original_text="",
    )
    summary = generate_summary(result)
    assert summary["severity_breakdown"] == {"high": 1, "medium": 0, "low": 1, "odd": 1}
    assert summary["high_risk_count"] == 1
    assert [r["id"] for r in summary["top_risks"]] == ["risk-3", "risk-1", "risk-2"]


def test_analysis_report_contents(canned_response, contract_text):
    result = _result(canned_response, contract_text)
    report = generate_analysis_report(
        result, "services.txt",
        uploaded_at=datetime(2024, 5, 1, 9, 30),
        generated_at=datetime(2024, 5, 1, 9, 31),
    )
    assert "File:          services.txt" in report
    assert "Uploaded:      2024-05-01 09:30" in report
    assert "Overall Score: 70/100" in report
    assert "1. [MEDIUM] Payment Terms" in report
    assert "Suggestion: Add a 1.5% monthly late fee." in report
    assert "Section: Payment" in report
    assert "**" not in report


def test_revised_contract_substitutes_sections(canned_response, contract_text):
    result = _result(canned_response, contract_text)
    revised = generate_revised_contract(contract_text, result)
    assert "with a 1.5% monthly late fee." in revised
    # only the first occurrence is replaced
    assert revised.count(PAYMENT_SENTENCE) == contract_text.count(PAYMENT_SENTENCE) - 1
    assert "ADDITIONAL SUGGESTED REVISIONS" not in revised
    assert "**" not in revised


def test_revised_contract_lists_unmatched_sections():
    result = AnalysisResult(
        risks=[],
        overall_score=80,
        total_clauses=2,
        original_text="The term is one year.",
        revised_sections=[RevisedSection("Renewal", "auto-renews", "renews **on written notice**")],
    )
    revised = generate_revised_contract(result.original_text, result)
    assert "The term is one year." in revised
    assert "ADDITIONAL SUGGESTED REVISIONS" in revised
    assert "With:    renews on written notice" in revised
