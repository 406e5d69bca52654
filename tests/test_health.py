from __future__ import annotations


def test_root_returns_liveness_text(client) -> None:
    res = client.get("/")
    assert res.status_code == 200
    assert res.headers["content-type"].startswith("text/plain")
    assert res.text == "Tag Generation API is running."


def test_health_ok(client) -> None:
    res = client.get("/health")
    assert res.status_code == 200
    assert res.json() == {"status": "ok"}


def test_metrics_exposes_http_counters(client) -> None:
    client.get("/health")
    res = client.get("/metrics")
    assert res.status_code == 200
    assert 'http_requests_total{method="GET",route="/health",status_code="200"}' in res.text


def test_openapi_title_comes_from_settings(monkeypatch) -> None:
    from app.core.settings import get_settings
    from app.main import create_app

    monkeypatch.setenv("APP_NAME", "Tagging Staging")
    get_settings.cache_clear()

    assert create_app().title == "Tagging Staging"
