#!/usr/bin/env python3
"""
ContractGuard: contract risk review from the command line.

Extracts the text of a local .txt or .docx contract, sends it to the LLM for
risk analysis, prints a summary, and optionally writes the plain-text
analysis report and revised contract.

Usage:
    python main.py <contract_file> [--mime <type>] [--export-dir <dir>] [--json]

The Anthropic API key is read from ANTHROPIC_API_KEY (or .env in the project dir).
"""

import json
import logging
import sys
from pathlib import Path

from contractguard.errors import ContractGuardError
from contractguard.models import UploadedDocument
from contractguard.output import (
    export_filename,
    generate_analysis_report,
    generate_revised_contract,
    print_rich_summary,
)
from contractguard.pipeline import run_pipeline

USAGE = "Usage: python main.py <contract_file> [--mime <type>] [--export-dir <dir>] [--json]"


def parse_args(args: list[str]) -> dict:
    opts = {"input": None, "mime": None, "export_dir": None, "json": False}
    i = 0
    while i < len(args):
        if args[i] == "--mime" and i + 1 < len(args):
            opts["mime"] = args[i + 1]
            i += 2
        elif args[i] == "--export-dir" and i + 1 < len(args):
            opts["export_dir"] = Path(args[i + 1])
            i += 2
        elif args[i] == "--json":
            opts["json"] = True
            i += 1
        elif args[i].startswith("--"):
            raise ValueError(f"Unknown or incomplete option: {args[i]}")
        else:
            opts["input"] = args[i]
            i += 1
    if not opts["input"]:
        raise ValueError("No contract file given")
    return opts


def write_exports(export_dir: Path, document: UploadedDocument, result) -> list[Path]:
    export_dir.mkdir(parents=True, exist_ok=True)
    report_path = export_dir / export_filename("Analysis", document.filename)
    report_path.write_text(
        generate_analysis_report(result, document.filename, document.uploaded_at),
        encoding="utf-8",
    )
    revised_path = export_dir / export_filename("Revised", document.filename)
    revised_path.write_text(
        generate_revised_contract(result.original_text, result), encoding="utf-8",
    )
    return [report_path, revised_path]


def main(argv: list[str] | None = None) -> int:
    args = sys.argv[1:] if argv is None else argv
    if not args:
        print(USAGE)
        print("\nExamples:")
        print("  python main.py contract.docx")
        print("  python main.py contract.txt --export-dir output")
        print("  python main.py notes.md --mime text/plain --json")
        return 0

    try:
        opts = parse_args(args)
    except ValueError as e:
        print(f"Error: {e}")
        print(USAGE)
        return 1

    logging.basicConfig(level=logging.WARNING, format="%(levelname)s %(name)s: %(message)s")

    input_path = Path(opts["input"])
    if not input_path.exists():
        print(f"Error: File not found: {input_path}")
        return 1

    try:
        document = UploadedDocument.from_path(input_path, mime_type=opts["mime"])
    except ContractGuardError as e:
        print(f"Error: {e}")
        return 1

    print("ContractGuard Contract Review")
    print(f"Input: {input_path} ({document.mime_type})")
    print()

    def progress(step, total, msg):
        print(msg)

    try:
        result = run_pipeline(document, progress_callback=progress)
    except ContractGuardError as e:
        print(f"\nAnalysis failed: {e}")
        return 1

    if opts["json"]:
        print(json.dumps(result.to_dict(), indent=2, ensure_ascii=False))
    else:
        print_rich_summary(result, document.filename)

    if opts["export_dir"]:
        for path in write_exports(opts["export_dir"], document, result):
            print(f"  Written: {path}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
