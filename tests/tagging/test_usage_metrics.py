from __future__ import annotations

import pytest
from fastapi.testclient import TestClient
from prometheus_client import REGISTRY

from app.core.llm.deps import get_completion_client
from app.main import create_app
from tests._helpers import TAGS_JSON, FakeCompletionClient, completion_body


def _sample(name: str, **labels: str) -> float:
    return REGISTRY.get_sample_value(name, labels) or 0.0


def _usage_samples() -> tuple[float, float, float]:
    return (
        _sample("llm_tokens_total", deployment="gpt-5-chat", direction="input"),
        _sample("llm_tokens_total", deployment="gpt-5-chat", direction="output"),
        _sample("llm_cost_usd_total", deployment="gpt-5-chat"),
    )


def _post(usage: dict) -> dict:
    app = create_app()
    fake = FakeCompletionClient(response=completion_body(TAGS_JSON, usage=usage))
    app.dependency_overrides[get_completion_client] = lambda: fake
    with TestClient(app) as c:
        res = c.post("/api/tags", json={"input": "x"})
    assert res.status_code == 200, res.text
    return res.json()


def test_successful_call_records_tokens_and_cost() -> None:
    before = _usage_samples()

    payload = _post({"prompt_tokens": 100, "completion_tokens": 50})

    after = _usage_samples()
    assert after[0] - before[0] == 100
    assert after[1] - before[1] == 50
    assert after[2] - before[2] == pytest.approx(payload["pricing"]["totalCostUSD"])
    assert after[2] - before[2] == pytest.approx(0.00075)


def test_usage_is_exposed_on_metrics_endpoint(tags_client: TestClient) -> None:
    assert tags_client.post("/api/tags", json={"input": "x"}).status_code == 200

    body = tags_client.get("/metrics").text
    assert 'llm_tokens_total{deployment="gpt-5-chat",direction="input"}' in body
    assert 'llm_cost_usd_total{deployment="gpt-5-chat"}' in body


def test_negative_counts_are_priced_but_not_recorded() -> None:
    before = _usage_samples()

    payload = _post({"prompt_tokens": -10, "completion_tokens": 5})

    assert payload["pricing"] is not None
    assert payload["pricing"]["breakdown"]["inputTokens"] == -10
    assert _usage_samples() == before
