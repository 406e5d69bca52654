from __future__ import annotations

import pytest

from tests._helpers import TAGS_JSON, FakeCompletionClient, completion_body


@pytest.fixture(autouse=True)
def _azure_settings(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setenv("AZURE_OPENAI_ENDPOINT", "https://unit-test.openai.azure.com")
    monkeypatch.setenv("AZURE_OPENAI_API_KEY", "test-key")
    monkeypatch.setenv("AZURE_OPENAI_API_DEPLOYMENT_NAME", "gpt-5-chat")
    monkeypatch.delenv("AZURE_OPENAI_API_VERSION", raising=False)
    monkeypatch.delenv("MAX_REQUEST_BODY_BYTES", raising=False)
    # Settings are cached via @lru_cache; clear so each test sees its own environment.
    from app.core.settings import get_settings

    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def fake_llm() -> FakeCompletionClient:
    return FakeCompletionClient(
        response=completion_body(
            TAGS_JSON, usage={"prompt_tokens": 100, "completion_tokens": 50, "total_tokens": 150}
        )
    )


@pytest.fixture
def client():
    from fastapi.testclient import TestClient

    from app.main import create_app

    app = create_app()
    with TestClient(app) as c:
        yield c


@pytest.fixture
def tags_client(fake_llm: FakeCompletionClient):
    from fastapi.testclient import TestClient

    from app.core.llm.deps import get_completion_client
    from app.main import create_app

    app = create_app()
    app.dependency_overrides[get_completion_client] = lambda: fake_llm
    with TestClient(app) as c:
        yield c
