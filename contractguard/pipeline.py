"""Main orchestration pipeline: extract, gate, analyze, normalize."""

import logging

from .analysis import analyze_contract, request_completion
from .config import MIN_CONTRACT_LENGTH
from .errors import InsufficientTextError
from .extractors import extract_text
from .models import AnalysisResult, UploadedDocument

logger = logging.getLogger(__name__)

TOTAL_STEPS = 3


def check_contract_text(text: str) -> str:
    """Reject text too short to analyse, before anything leaves the process."""
    if not text or len(text.strip()) < MIN_CONTRACT_LENGTH:
        raise InsufficientTextError(
            "Unable to extract sufficient text from the file. "
            "Please ensure the file contains readable contract text."
        )
    return text


def run_pipeline(
    document: UploadedDocument,
    complete=request_completion,
    progress_callback=None,
) -> AnalysisResult:
    """
    Run one contract through the review pipeline.

    Args:
        document: The uploaded file with its declared MIME type
        complete: Callable(prompt) -> raw reply text; defaults to the Anthropic client
        progress_callback: Optional callback(step, total, msg)

    Returns:
        The normalized AnalysisResult. Any ContractGuardError propagates unchanged.
    """
    def progress(step, msg):
        logger.info(msg)
        if progress_callback:
            progress_callback(step, TOTAL_STEPS, msg)

    progress(1, f"[Step 1/{TOTAL_STEPS}] Extracting text from {document.filename}...")
    text = extract_text(document)
    check_contract_text(text)

    progress(2, f"[Step 2/{TOTAL_STEPS}] Analyzing contract ({len(text)} characters)...")
    result = analyze_contract(text, complete=complete)

    progress(3, f"[Step 3/{TOTAL_STEPS}] Analysis complete: {len(result.risks)} risks identified")
    return result
