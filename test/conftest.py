from datetime import datetime

import pytest

class FakeProvider:
    def __init__(self, response_text: str):
        self._response_text = response_text
        self.calls = []

    def generate(self, *, system: str, user: str, model=None) -> str:
        self.calls.append({"system": system, "user": user, "model": model})
        return self._response_text

@pytest.fixture
def fake_provider_factory():
    def _make(response_text: str):
        return FakeProvider(response_text)
    return _make

@pytest.fixture
def fixed_now():
    # a Monday morning
    return datetime(2025, 3, 10, 9, 0)
