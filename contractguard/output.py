"""Output generation: summary, plain-text exports, rich terminal output."""

import html
import re
from datetime import date, datetime

from .models import AnalysisResult

_MARKUP_RE = re.compile(r"\*\*(.*?)\*\*", re.DOTALL)
_SEVERITY_ORDER = {"high": 0, "medium": 1, "low": 2}

EXPORT_PREFIX = "ContractGuard"


# ---------------------------------------------------------------------------
# Revision markup
# ---------------------------------------------------------------------------

def strip_revision_markup(text: str) -> str:
    """Drop the ** markers around changed spans, keeping their content."""
    return _MARKUP_RE.sub(r"\1", text or "")


def highlight_revisions(text: str) -> str:
    """HTML-escape the text and turn **changed** spans into highlighted spans."""
    escaped = html.escape(text or "")
    return _MARKUP_RE.sub(r'<span class="revision-highlight">\1</span>', escaped)


# ---------------------------------------------------------------------------
# File naming
# ---------------------------------------------------------------------------

def safe_filename(name: str) -> str:
    return re.sub(r"[^a-zA-Z0-9]", "_", name or "")


def export_filename(kind: str, filename: str, on: date | None = None) -> str:
    """e.g. ContractGuard_Analysis_lease_docx_2024-05-01.txt"""
    stamp = (on or date.today()).isoformat()
    return f"{EXPORT_PREFIX}_{kind}_{safe_filename(filename)}_{stamp}.txt"


# ---------------------------------------------------------------------------
# Summary
# ---------------------------------------------------------------------------

def rank_risks(result: AnalysisResult):
    return sorted(
        result.risks,
        key=lambda r: _SEVERITY_ORDER.get((r.type or "").lower(), 9),
    )


def generate_summary(result: AnalysisResult) -> dict:
    by_severity = {"high": 0, "medium": 0, "low": 0}
    for r in result.risks:
        key = (r.type or "").lower()
        by_severity[key] = by_severity.get(key, 0) + 1

    return {
        "total_risks": len(result.risks),
        "overall_score": result.overall_score,
        "total_clauses": result.total_clauses,
        "severity_breakdown": by_severity,
        "high_risk_count": by_severity.get("high", 0),
        "top_risks": [
            {"id": r.id, "type": r.type, "category": r.category,
             "summary": r.description[:200]}
            for r in rank_risks(result)[:5]
        ],
    }


# ---------------------------------------------------------------------------
# Exports
# ---------------------------------------------------------------------------

def generate_analysis_report(
    result: AnalysisResult,
    filename: str,
    uploaded_at: datetime,
    generated_at: datetime | None = None,
) -> str:
    generated_at = generated_at or datetime.now()
    summary = generate_summary(result)
    sev = summary["severity_breakdown"]
    rule = "=" * 60

    lines = [
        rule,
        "CONTRACTGUARD - CONTRACT RISK ANALYSIS REPORT",
        rule,
        f"File:          {filename}",
        f"Uploaded:      {uploaded_at.strftime('%Y-%m-%d %H:%M')}",
        f"Generated:     {generated_at.strftime('%Y-%m-%d %H:%M')}",
        "",
        f"Overall Score: {result.overall_score}/100 (higher is safer)",
        f"Clauses:       {result.total_clauses}",
        f"Risks Found:   {summary['total_risks']} "
        f"(High: {sev.get('high', 0)}, Medium: {sev.get('medium', 0)}, Low: {sev.get('low', 0)})",
        "",
        rule,
        "IDENTIFIED RISKS",
        rule,
    ]
    if not result.risks:
        lines.append("No risks identified.")
    for n, r in enumerate(result.risks, start=1):
        lines += [
            "",
            f"{n}. [{(r.type or 'unknown').upper()}] {r.category}",
            f"   Description: {r.description}",
            f"   Why it matters: {r.explanation}",
            f"   Suggestion: {r.suggestion}",
        ]
        if r.location:
            lines.append(f"   Location: {r.location}")
        if r.original_clause:
            lines.append(f"   Original clause: {r.original_clause}")
        if r.suggested_clause:
            lines.append(f"   Suggested clause: {r.suggested_clause}")

    if result.revised_sections:
        lines += ["", rule, "SUGGESTED REVISIONS", rule]
        for s in result.revised_sections:
            lines += [
                "",
                f"Section: {s.section}",
                f"  Original: {s.original}",
                f"  Revised:  {strip_revision_markup(s.revised)}",
            ]

    lines += [
        "",
        rule,
        "This report is generated by AI and is not legal advice.",
        "Consult a qualified attorney before signing.",
    ]
    return "\n".join(lines) + "\n"


def generate_revised_contract(original_text: str, result: AnalysisResult) -> str:
    """Apply each revised section to the original text.

    Sections whose original text is not found verbatim are listed at the end.
    """
    revised = original_text
    unmatched = []
    for s in result.revised_sections:
        replacement = strip_revision_markup(s.revised)
        if s.original and s.original in revised:
            revised = revised.replace(s.original, replacement, 1)
        else:
            unmatched.append((s, replacement))

    header = [
        "REVISED CONTRACT - generated by ContractGuard",
        "Review all changes with a qualified attorney before use.",
        "=" * 60,
        "",
    ]
    out = "\n".join(header) + revised.rstrip("\n") + "\n"

    if unmatched:
        extra = ["", "=" * 60, "ADDITIONAL SUGGESTED REVISIONS", "=" * 60]
        for s, replacement in unmatched:
            extra += ["", f"Section: {s.section}", f"Replace: {s.original}", f"With:    {replacement}"]
        out += "\n".join(extra) + "\n"
    return out


# ---------------------------------------------------------------------------
# Terminal
# ---------------------------------------------------------------------------

def print_rich_summary(result: AnalysisResult, filename: str) -> None:
    from rich import box
    from rich.console import Console
    from rich.panel import Panel
    from rich.table import Table

    console = Console()
    summary = generate_summary(result)
    sev = summary["severity_breakdown"]
    console.print()
    summary_text = (
        f"[bold]File:[/bold] {filename}\n"
        f"[bold]Overall Score:[/bold] {result.overall_score}/100  "
        f"[bold]Clauses:[/bold] {result.total_clauses}\n"
        f"[bold red]High:[/bold red] {sev.get('high', 0)}  "
        f"[bold yellow]Medium:[/bold yellow] {sev.get('medium', 0)}  "
        f"[bold green]Low:[/bold green] {sev.get('low', 0)}"
    )
    console.print(Panel(summary_text, title="Contract Risk Summary", border_style="blue", expand=False))

    if not result.risks:
        console.print("[green]No risks identified.[/green]")
        return

    table = Table(title="Identified Risks", box=box.ROUNDED, show_lines=True)
    table.add_column("ID", style="bold", width=8)
    table.add_column("Risk", width=8)
    table.add_column("Category", width=22)
    table.add_column("Description", width=50)
    table.add_column("Suggestion", width=50)
    risk_style = {"high": "bold red", "medium": "bold yellow", "low": "bold green"}
    for r in rank_risks(result):
        style = risk_style.get((r.type or "").lower(), "")
        table.add_row(
            r.id,
            f"[{style}]{r.type}[/]" if style else r.type,
            r.category,
            r.description,
            r.suggestion,
        )
    console.print(table)
    console.print()
