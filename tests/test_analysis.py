import httpx
import anthropic
import pytest

from contractguard import analysis
from contractguard.config import LLM_MAX_TOKENS, LLM_MODEL, LLM_TEMPERATURE
from contractguard.errors import ConfigurationError, EmptyResponseError, UpstreamError


@pytest.fixture
def api_key(monkeypatch):
    monkeypatch.setenv("ANTHROPIC_API_KEY", "sk-ant-test")


def test_missing_key_fails_before_any_client_is_built(monkeypatch, fake_client_factory):
    monkeypatch.delenv("ANTHROPIC_API_KEY", raising=False)

    def no_client(api_key):
        raise AssertionError("client must not be created without a key")

    monkeypatch.setattr(analysis, "_get_llm_client", no_client)
    client = fake_client_factory(reply="{}")
    with pytest.raises(ConfigurationError, match="ANTHROPIC_API_KEY"):
        analysis.request_completion("prompt", client=client)
    assert client.messages.calls == []


def test_single_user_message_with_fixed_settings(api_key, fake_client_factory):
    client = fake_client_factory(reply='{"risks": []}')
    assert analysis.request_completion("the prompt", client=client) == '{"risks": []}'

    assert len(client.messages.calls) == 1
    call = client.messages.calls[0]
    assert call["model"] == LLM_MODEL
    assert call["temperature"] == LLM_TEMPERATURE == 0.1
    assert call["max_tokens"] == LLM_MAX_TOKENS == 4000
    assert call["messages"] == [{"role": "user", "content": "the prompt"}]
    assert "stream" not in call


@pytest.mark.parametrize("reply", [None, "", "   \n"])
def test_empty_content_is_empty_response(api_key, fake_client_factory, reply):
    with pytest.raises(EmptyResponseError, match="No response from AI analysis"):
        analysis.request_completion("prompt", client=fake_client_factory(reply=reply))


def test_transport_errors_are_wrapped_once(api_key, fake_client_factory):
    request = httpx.Request("POST", "https://api.anthropic.com/v1/messages")
    error = anthropic.APIConnectionError(request=request)
    client = fake_client_factory(error=error)

    with pytest.raises(UpstreamError) as exc_info:
        analysis.request_completion("prompt", client=client)
    assert exc_info.value.original is error
    assert exc_info.value.__cause__ is error
    assert len(client.messages.calls) == 1


def test_client_is_cached_per_key(monkeypatch):
    built = []

    class Recorder:
        def __init__(self, api_key, max_retries):
            built.append((api_key, max_retries))

    monkeypatch.setattr(anthropic, "Anthropic", Recorder)
    monkeypatch.setattr(analysis, "_llm_client", None)
    monkeypatch.setattr(analysis, "_llm_client_key", None)

    first = analysis._get_llm_client("key-a")
    assert analysis._get_llm_client("key-a") is first
    analysis._get_llm_client("key-b")
    assert built == [("key-a", 0), ("key-b", 0)]


def test_analyze_contract_parses_reply(contract_text, completion_spy):
    result = analysis.analyze_contract(contract_text, complete=completion_spy)
    assert len(completion_spy.prompts) == 1
    assert contract_text in completion_spy.prompts[0]
    assert result.risks[0].id == "risk-1"
    assert result.original_text == contract_text
