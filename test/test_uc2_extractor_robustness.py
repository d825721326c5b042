from extraction.task_extractor import TaskExtractor
from llm.llm_client import LLMClient

def test_uc2_garbage_output(fake_provider_factory):
    provider = fake_provider_factory("THIS IS NOT JSON AT ALL")
    extractor = TaskExtractor(llm_client=LLMClient(provider=provider))
    tasks = extractor.extract("random text")
    assert tasks == []

def test_uc2_null_description(fake_provider_factory):
    provider = fake_provider_factory(
        '{"tasks":[{"title":"Dentist","description":null,"duration_text":"30 minutes"}]}'
    )
    extractor = TaskExtractor(llm_client=LLMClient(provider=provider))
    tasks = extractor.extract("Dentist")
    assert len(tasks) == 1
    assert "description" not in tasks[0]
    assert tasks[0]["duration_text"] == "30 minutes"

def test_uc2_tier_is_forwarded(fake_provider_factory):
    provider = fake_provider_factory('{"tasks":[{"title":"T1"}]}')
    extractor = TaskExtractor(llm_client=LLMClient(provider=provider))
    tasks = extractor.extract("do something", llm_tier="small")
    assert tasks[0]["title"] == "T1"
    assert "minimal" in provider.calls[0]["user"].lower()
