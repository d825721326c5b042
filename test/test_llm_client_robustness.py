import json

from llm.llm_client import EMPTY_RESULT, LLMClient, extract_json_text

def test_llm_extra_text_around_json(fake_provider_factory):
    provider = fake_provider_factory(
        'Sure! Here is the result: {"tasks":[{"title":"Call mom","estimated_duration":10}]} Thanks.'
    )
    client = LLMClient(provider=provider)
    out = client.complete("Call mom")
    assert json.loads(out)["tasks"][0]["title"] == "Call mom"

def test_llm_code_fence(fake_provider_factory):
    provider = fake_provider_factory('```json\n{"tasks":[{"title":"Gym"}]}\n```')
    tasks = LLMClient(provider=provider).extract_tasks("Gym")
    assert tasks == [{"title": "Gym"}]

def test_llm_invalid_json_fallback(fake_provider_factory):
    provider = fake_provider_factory("INVALID OUTPUT")
    client = LLMClient(provider=provider)
    assert client.complete("Anything") == EMPTY_RESULT
    assert client.extract_tasks("Anything") == []

def test_llm_tasks_not_a_list(fake_provider_factory):
    provider = fake_provider_factory('{"tasks": "none today"}')
    assert LLMClient(provider=provider).extract_tasks("Anything") == []

def test_llm_malformed_drafts_pass_through(fake_provider_factory):
    provider = fake_provider_factory('{"tasks": [{"title": ["not", "text"]}, 42, null]}')
    tasks = LLMClient(provider=provider).extract_tasks("Anything")
    assert tasks == [{"title": ["not", "text"]}, 42, None]

def test_extract_json_text_empty():
    assert extract_json_text("") == EMPTY_RESULT
    assert extract_json_text(None) == EMPTY_RESULT
