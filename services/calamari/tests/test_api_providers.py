"""服务提供者接口测试：验证元数据、配置模型与调度前提接口的返回结构。"""

from __future__ import annotations

import httpx
import pytest
from fastapi.testclient import TestClient

from calamari_spi.api.v1.providers import _registry
from calamari_spi.config import ProviderConfiguration
from calamari_spi.infra.msa.architecture import MicroserviceArchitecture
from calamari_spi.main import app
from calamari_spi.providers.registry import ProviderRegistry

_TRAINING_DESCRIPTION = {
    "description": "Calamari training",
    "categories": ["training"],
    "steps": ["train"],
    "model": {
        "selects": [
            {
                "argument": "network",
                "index": 0,
                "label": "Network",
                "multipleOptions": False,
                "items": [{"value": "def", "description": "Default", "selected": True}],
            }
        ],
        "integers": [{"argument": "epochs", "index": 1, "defaultValue": 10, "minimum": 1, "label": "Epochs"}],
    },
}


def _handler(request: httpx.Request) -> httpx.Response:
    """训练描述可用，识别描述返回 503，评估服务不可达。"""
    path = request.url.path
    if path == "/api/v1.0/training/description":
        return httpx.Response(200, json=_TRAINING_DESCRIPTION)
    if path == "/api/v1.0/recognition/description":
        return httpx.Response(503)
    if path == "/api/v1.0/evaluation/description":
        raise httpx.ConnectError("connection refused", request=request)
    return httpx.Response(200)


@pytest.fixture
def client():
    registry = ProviderRegistry(
        ProviderConfiguration({"calamari": {"training-description": "local training"}}),
        MicroserviceArchitecture({"calamari": "worker.local:9000"}),
        transport=httpx.MockTransport(_handler),
    )
    failures = registry.start_all()
    assert sorted(failures) == ["calamari/evaluation", "calamari/recognition"]
    app.dependency_overrides[_registry] = lambda: registry
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()
        registry.close_all()


def test_list_providers(client: TestClient) -> None:
    response = client.get("/api/v1/providers")

    assert response.status_code == 200
    payload = response.json()
    assert [item["provider"] for item in payload] == [
        "calamari/evaluation",
        "calamari/recognition",
        "calamari/training",
    ]
    states = {item["type"]: item["state"] for item in payload}
    assert states == {"evaluation": "failed", "recognition": "failed", "training": "started"}


def test_get_provider_uses_remote_description(client: TestClient) -> None:
    payload = client.get("/api/v1/providers/training").json()

    assert payload["description"] == "Calamari training"
    assert payload["categories"] == ["training"]
    assert payload["timeout_active_processor"] == 15000


def test_unknown_provider_returns_404(client: TestClient) -> None:
    assert client.get("/api/v1/providers/segmentation").status_code == 404


def test_model_is_ordered_and_resolved(client: TestClient) -> None:
    response = client.get("/api/v1/providers/training/model", params={"lang": "en"})

    assert response.status_code == 200
    entries = response.json()["entries"]
    assert [(item["kind"], item["argument"]) for item in entries] == [("select", "network"), ("integer", "epochs")]
    assert entries[0]["options"] == [{"value": "def", "description": "Default", "selected": True, "disabled": False}]
    assert entries[1]["default_value"] == 10
    assert entries[1]["minimum"] == 1


def test_model_unavailable_returns_503(client: TestClient) -> None:
    """描述尚未获取时配置模型不可用。"""
    assert client.get("/api/v1/providers/recognition/model").status_code == 503


def test_premise_reports_ping_result(client: TestClient) -> None:
    payload = client.get("/api/v1/providers/recognition/premise").json()

    assert payload == {"provider": "calamari/recognition", "state": "ready", "message": None}


def test_health_reports_provider_states(client: TestClient) -> None:
    """部分服务提供者启动失败时 API 仍可用，健康状态为 degraded。"""
    response = client.get("/health", headers={"X-Request-Id": "req-42"})

    assert response.status_code == 200
    assert response.headers["X-Request-Id"] == "req-42"
    assert response.json() == {
        "status": "degraded",
        "providers": {
            "calamari/evaluation": "failed",
            "calamari/recognition": "failed",
            "calamari/training": "started",
        },
    }
