from __future__ import annotations

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from massaction.auth.auth_dependencies import require_admin_user
from massaction.configurations.configurations_api import router
from massaction.configurations.configurations_errors import (
    ConfigurationSaveError,
    InvalidPayloadError,
)
from massaction.configurations.configurations_service import SaveResult

pytestmark = pytest.mark.unit


class DummyConfigurationService:
    def __init__(self) -> None:
        self.saved: list[tuple[str, str]] = []

    def save_configuration(self, configuration_payload: str, mapping_payload: str) -> SaveResult:
        self.saved.append((configuration_payload, mapping_payload))
        if configuration_payload == "invalid":
            raise InvalidPayloadError("configuration payload is not valid JSON")
        if configuration_payload == "conflict":
            raise ConfigurationSaveError("integrity constraint violated")
        return SaveResult(success=True, record_id="m0A000000000000001")

    def load_configuration(self, configuration_id: str):
        if configuration_id != "m0A000000000000001":
            return None
        return {
            "id": configuration_id,
            "label": "Run flow",
            "active": False,
            "batch_size": 200,
            "source_type": "ListView",
            "target_type": "Flow",
        }

    def load_field_mappings(self, configuration_id: str) -> dict[str, str]:
        return {"ContextId": "Id"} if configuration_id == "m0A000000000000001" else {}


def build_client(service: DummyConfigurationService) -> TestClient:
    app = FastAPI()
    app.include_router(router)
    app.state.configuration_service = service
    app.dependency_overrides[require_admin_user] = lambda: {"sub": "admin"}
    return TestClient(app)


def test_save_returns_record_id() -> None:
    service = DummyConfigurationService()
    client = build_client(service)

    response = client.post(
        "/api/configurations",
        json={"configuration": '{"label": "Run flow"}', "mappings": '{"ContextId": "Id"}'},
    )

    assert response.status_code == 200
    assert response.json() == {"success": True, "record_id": "m0A000000000000001"}
    assert service.saved == [('{"label": "Run flow"}', '{"ContextId": "Id"}')]


def test_save_defaults_mappings_to_empty_object() -> None:
    service = DummyConfigurationService()
    client = build_client(service)

    client.post("/api/configurations", json={"configuration": "{}"})

    assert service.saved[-1] == ("{}", "{}")


@pytest.mark.parametrize(
    ("configuration", "reason"),
    [("invalid", "invalid_payload"), ("conflict", "save_failed")],
)
def test_save_failures_map_to_400(configuration: str, reason: str) -> None:
    client = build_client(DummyConfigurationService())

    response = client.post("/api/configurations", json={"configuration": configuration})

    assert response.status_code == 400
    detail = response.json()["detail"]
    assert detail["failure_reason"] == reason
    assert detail["details"]


def test_load_configuration_and_mappings() -> None:
    client = build_client(DummyConfigurationService())

    header = client.get("/api/configurations/m0A000000000000001")
    mappings = client.get("/api/configurations/m0A000000000000001/mappings")

    assert header.status_code == 200
    assert header.json()["target_type"] == "Flow"
    assert mappings.json() == {"ContextId": "Id"}


def test_load_unknown_configuration_returns_404() -> None:
    client = build_client(DummyConfigurationService())

    response = client.get("/api/configurations/m0A000000000000404")

    assert response.status_code == 404
    assert response.json()["detail"]["failure_reason"] == "configuration_not_found"
