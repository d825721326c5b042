import httpx
import pytest

from llm.llm_client import LLMClient, get_provider
from llm.providers.mock_provider import MockProvider
from taskflow.errors import LLMError


def test_extract_tasks(fake_provider_factory):
    provider = fake_provider_factory(
        '{"tasks":[{"title":"Send invoice","duration_text":"20 minutes","deadline":null}]}'
    )
    client = LLMClient(provider=provider)
    tasks = client.extract_tasks("Send invoice")
    assert tasks == [{"title": "Send invoice", "duration_text": "20 minutes"}]


def test_prompt_carries_input_and_tier(fake_provider_factory, monkeypatch):
    monkeypatch.setenv("LLM_MODEL_SMALL", "tiny-model")
    provider = fake_provider_factory('{"tasks": []}')
    LLMClient(provider=provider).extract_tasks('gym "early"', model_tier="small")

    call = provider.calls[0]
    assert "Input: \"gym 'early'\"" in call["user"]
    assert "conservative" in call["user"].lower()
    assert call["model"] == "tiny-model"


def test_large_tier_without_model_override(fake_provider_factory, monkeypatch):
    monkeypatch.delenv("LLM_MODEL_LARGE", raising=False)
    provider = fake_provider_factory('{"tasks": []}')
    LLMClient(provider=provider).extract_tasks("anything")
    assert provider.calls[0]["model"] is None
    assert "conservative" not in provider.calls[0]["user"].lower()


def test_single_draft_and_bare_list(fake_provider_factory):
    single = LLMClient(provider=fake_provider_factory('{"title": "Call mom"}'))
    assert single.extract_tasks("Call mom") == [{"title": "Call mom"}]

    bare = LLMClient(provider=fake_provider_factory('[{"title": "A"}, {"title": "B"}]'))
    assert [d["title"] for d in bare.extract_tasks("A then B")] == ["A", "B"]


def test_transport_errors_become_llm_errors():
    class BrokenProvider:
        def generate(self, *, system, user, model=None):
            raise httpx.ConnectError("connection refused")

    with pytest.raises(LLMError):
        LLMClient(provider=BrokenProvider()).extract_tasks("anything")


def test_get_provider(monkeypatch):
    monkeypatch.delenv("LLM_PROVIDER", raising=False)
    assert isinstance(get_provider(), MockProvider)
    assert isinstance(get_provider("something-else"), MockProvider)

    monkeypatch.delenv("OPENAI_API_KEY", raising=False)
    with pytest.raises(LLMError):
        get_provider("openai")


def test_mock_provider_splits_sequence():
    drafts = LLMClient(provider=MockProvider()).extract_tasks(
        "gym at 7am then work on report for 2 hours, then after that call mom"
    )
    assert [d["title"] for d in drafts] == ["Gym", "Work on report", "Call mom"]
    assert drafts[0]["time_phrase"] == "at 7am"
    assert drafts[1]["duration_text"] == "2 hours"
    assert drafts[2]["time_phrase"] == "after previous task"
    assert "duration_text" not in drafts[2]


def _client_returning(monkeypatch, body: bytes) -> None:
    real_client = httpx.Client
    transport = httpx.MockTransport(lambda request: httpx.Response(200, content=body))
    monkeypatch.setattr(httpx, "Client", lambda **kw: real_client(transport=transport, **kw))


@pytest.mark.parametrize("provider_name", ["openai", "ollama"])
def test_non_json_provider_response_becomes_llm_error(provider_name, monkeypatch):
    monkeypatch.setenv("OPENAI_API_KEY", "sk-test")
    _client_returning(monkeypatch, b"<html>Bad Gateway</html>")

    with pytest.raises(LLMError):
        LLMClient(provider=get_provider(provider_name)).extract_tasks("gym then read")
