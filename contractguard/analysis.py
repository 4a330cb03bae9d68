"""LLM contract analysis: one non-streamed completion per contract."""

import logging

from .config import LLM_MAX_TOKENS, LLM_MODEL, LLM_TEMPERATURE, get_api_key
from .errors import ConfigurationError, EmptyResponseError, UpstreamError
from .models import AnalysisResult
from .parsing import parse_analysis_response
from .prompts import build_analysis_prompt

logger = logging.getLogger(__name__)

_llm_client = None
_llm_client_key = None


def _get_llm_client(api_key: str):
    global _llm_client, _llm_client_key
    if _llm_client is None or _llm_client_key != api_key:
        import anthropic
        # no retries: failures are surfaced to the user as-is
        _llm_client = anthropic.Anthropic(api_key=api_key, max_retries=0)
        _llm_client_key = api_key
    return _llm_client


def _response_text(response) -> str:
    parts = []
    for block in getattr(response, "content", None) or []:
        if getattr(block, "type", None) == "text":
            parts.append(block.text or "")
    return "".join(parts)


def request_completion(prompt: str, client=None) -> str:
    """Send the prompt as a single user message and return the raw reply text."""
    api_key = get_api_key()
    if not api_key:
        raise ConfigurationError(
            "Anthropic API key not found. Please add ANTHROPIC_API_KEY to your .env file."
        )

    import anthropic

    if client is None:
        client = _get_llm_client(api_key)

    logger.info("Requesting analysis from %s (%d prompt chars)", LLM_MODEL, len(prompt))
    try:
        response = client.messages.create(
            model=LLM_MODEL,
            max_tokens=LLM_MAX_TOKENS,
            temperature=LLM_TEMPERATURE,
            messages=[{"role": "user", "content": prompt}],
        )
    except anthropic.APIError as e:
        logger.error("LLM request failed: %s", e)
        raise UpstreamError(str(e) or e.__class__.__name__, original=e) from e

    text = _response_text(response)
    if not text.strip():
        raise EmptyResponseError("No response from AI analysis")
    return text


def analyze_contract(contract_text: str, complete=request_completion) -> AnalysisResult:
    """Build the prompt, call the model once, and normalize its JSON reply."""
    prompt = build_analysis_prompt(contract_text)
    raw = complete(prompt)
    result = parse_analysis_response(raw, contract_text)
    logger.info(
        "Analysis complete: %d risks, score %d", len(result.risks), result.overall_score,
    )
    return result
