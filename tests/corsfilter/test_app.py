"""
Integration tests for the CORS filter FastAPI application.

Tests application creation, middleware chain and endpoints.
"""

from __future__ import annotations

import runpy

import pytest
import uvicorn
from fastapi.testclient import TestClient

from corsfilter.config import ConfigurationProvider, CORSFilterSettings
from corsfilter.main import create_app


@pytest.fixture
def api_settings() -> CORSFilterSettings:
    return CORSFilterSettings(_env_file=None, ENABLE_METRICS=False, CONFIG_API_ENABLED=True)


@pytest.fixture
def provider(api_settings) -> ConfigurationProvider:
    return ConfigurationProvider(api_settings)


@pytest.fixture
def client(provider, api_settings):
    """Create test client."""
    app = create_app(provider=provider, app_settings=api_settings)
    with TestClient(app) as test_client:
        yield test_client


def test_app_creation(api_settings):
    app = create_app(app_settings=api_settings)

    assert app.title == "CORS Filter"
    assert isinstance(app.state.cors_config, ConfigurationProvider)


def test_health_endpoint(client, provider):
    response = client.get("/health")

    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "healthy"
    assert data["version"] == "0.1.0"
    assert data["cors_enabled"] is False
    assert "timestamp" in data

    provider.update(enabled=True, allowed_origins="*")
    assert client.get("/health").json()["cors_enabled"] is True


def test_read_config(client, provider):
    provider.update(enabled=True, allowed_origins="http://a.com,*", allowed_methods="GET")

    response = client.get("/cors-filter/config")

    assert response.status_code == 200
    assert response.json() == {
        "enabled": True,
        "allowedOrigins": "http://a.com,*",
        "allowedMethods": "GET",
    }


def test_update_config_applies_to_next_request(client, provider):
    before = client.get("/health", headers={"Origin": "http://localhost:9000"})
    assert "Access-Control-Allow-Origin" not in before.headers

    response = client.post(
        "/cors-filter/config",
        json={
            "enabled": True,
            "allowedOrigins": "http://localhost:9000",
            "allowedMethods": "GET, OPTIONS",
        },
    )

    assert response.status_code == 200
    assert response.json()["allowedOrigins"] == "http://localhost:9000"
    assert provider.current().enabled is True

    after = client.get("/health", headers={"Origin": "http://localhost:9000"})
    assert after.headers["Access-Control-Allow-Origin"] == "http://localhost:9000"
    assert after.headers["Access-Control-Allow-Methods"] == "GET, OPTIONS"
    assert after.headers["Access-Control-Allow-Credentials"] == "true"


def test_update_config_rejects_invalid_payload(client, provider):
    response = client.post("/cors-filter/config", json={"allowedOrigins": "*"})

    assert response.status_code == 422
    assert response.json()["detail"] == "Invalid CORS filter configuration"
    assert provider.current().enabled is False


def test_config_api_not_mounted_by_default():
    app_settings = CORSFilterSettings(_env_file=None, ENABLE_METRICS=False)
    client = TestClient(create_app(app_settings=app_settings))

    assert client.get("/cors-filter/config").status_code == 404


def test_preflight_answered_before_routes(client, provider):
    provider.update(enabled=True, allowed_origins="*", allowed_methods="GET, OPTIONS")

    response = client.options("/cors-filter/config", headers={"Origin": "http://foo.com"})

    assert response.status_code == 200
    assert response.content == b""
    assert response.headers["Access-Control-Allow-Origin"] == "http://foo.com"
    # Logging middleware wraps the CORS filter
    assert "X-Trace-ID" in response.headers


def test_request_id_echoed(client):
    response = client.get("/health", headers={"X-Request-ID": "req-123"})

    assert response.headers["X-Request-ID"] == "req-123"
    assert response.headers["X-Trace-ID"] == "req-123"


def test_request_id_generated(client):
    response = client.get("/health")

    assert response.headers["X-Request-ID"]
    assert response.headers["X-Trace-ID"] == response.headers["X-Request-ID"]


def test_metrics_endpoint():
    app_settings = CORSFilterSettings(_env_file=None, ENABLE_METRICS=True)
    provider = ConfigurationProvider(app_settings)
    provider.update(enabled=True, allowed_origins="http://a.com")
    client = TestClient(create_app(provider=provider, app_settings=app_settings))

    client.get("/health", headers={"Origin": "http://b.com"})
    response = client.get("/metrics")

    assert response.status_code == 200
    assert 'cors_filter_decisions_total{outcome="denied"}' in response.text


def test_update_config_rejects_bad_types(client, provider):
    response = client.post(
        "/cors-filter/config",
        json={"enabled": "maybe", "allowedOrigins": ["http://a.com"]},
    )

    assert response.status_code == 422
    assert response.json()["detail"] == "Invalid CORS filter configuration"
    assert provider.current().allowed_origins is None


def test_update_config_accepts_snake_case_keys(client, provider):
    response = client.post(
        "/cors-filter/config",
        json={"enabled": True, "allowed_origins": "*", "allowed_methods": "GET"},
    )

    assert response.status_code == 200
    assert response.json() == {"enabled": True, "allowedOrigins": "*", "allowedMethods": "GET"}
    assert provider.current().allowed_origin_set == ("*",)


def test_health_reports_app_version():
    app_settings = CORSFilterSettings(
        _env_file=None, ENABLE_METRICS=False, SERVICE_VERSION="2.3.4"
    )
    client = TestClient(create_app(app_settings=app_settings))

    assert client.get("/health").json()["version"] == "2.3.4"


def test_main_runs_uvicorn_with_settings(monkeypatch: pytest.MonkeyPatch):
    """Running the module starts uvicorn with host, port and log level from settings."""
    monkeypatch.setenv("CORS_FILTER_HOST", "127.0.0.1")
    monkeypatch.setenv("CORS_FILTER_PORT", "9090")
    monkeypatch.setenv("CORS_FILTER_LOG_LEVEL", "DEBUG")
    calls = []
    monkeypatch.setattr(uvicorn, "run", lambda *args, **kwargs: calls.append((args, kwargs)))

    runpy.run_module("corsfilter.main", run_name="__main__")

    assert calls == [
        (
            ("corsfilter.main:app",),
            {
                "host": "127.0.0.1",
                "port": 9090,
                "reload": False,
                "log_level": "debug",
                "access_log": True,
            },
        )
    ]
