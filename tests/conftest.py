from __future__ import annotations

import pytest

from studio.config import Settings


class FakeGeneratorClient:
    """Stands in for GeneratorClient; returns a canned response and records calls."""

    def __init__(self, response: str = "", error: Exception | None = None, settings: Settings | None = None):
        self.settings = settings or Settings(api_key="test-key")
        self.response = response
        self.error = error
        self.calls: list[dict] = []

    def generate(self, prompt, *, web_search=False, response_schema=None):
        self.calls.append(
            {"prompt": prompt, "web_search": web_search, "response_schema": response_schema}
        )
        if self.error is not None:
            raise self.error
        return self.response


@pytest.fixture()
def fake_client():
    def _make(response: str = "", error: Exception | None = None) -> FakeGeneratorClient:
        return FakeGeneratorClient(response=response, error=error)

    return _make
