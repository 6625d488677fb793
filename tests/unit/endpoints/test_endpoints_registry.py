from __future__ import annotations

import json
from pathlib import Path

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from massaction.auth.auth_dependencies import require_admin_user
from massaction.discovery.discovery_client import CapabilityClient
from massaction.discovery.discovery_errors import UnknownEndpointError
from massaction.endpoints.endpoints_api import router
from massaction.endpoints.endpoints_registry import EndpointRegistry

pytestmark = pytest.mark.unit


def write_endpoints(path: Path, entries: list[dict]) -> Path:
    path.write_text(json.dumps({"endpoints": entries}), encoding="utf-8")
    return path


def test_registry_lists_visible_endpoints_by_label(tmp_path: Path) -> None:
    path = write_endpoints(
        tmp_path / "endpoints.json",
        [
            {"name": "Zeta", "label": "Alpha Org", "base_url": "https://a.example.test"},
            {"name": "Alpha", "label": "Zeta Org", "base_url": "https://z.example.test"},
            {"name": "Hidden_Test", "base_url": "http://localhost:8081"},
        ],
    )

    registry = EndpointRegistry.from_file(path, hidden_names=["Hidden_Test"])

    assert [entry.value for entry in registry.list_endpoints()] == ["Zeta", "Alpha"]
    assert registry.get("Hidden_Test").label == "Hidden_Test"


def test_registry_applies_default_api_version(tmp_path: Path) -> None:
    path = write_endpoints(
        tmp_path / "endpoints.json",
        [
            {"name": "Default", "base_url": "https://d.example.test/"},
            {"name": "Pinned", "base_url": "https://p.example.test", "api_version": "60.0"},
        ],
    )

    registry = EndpointRegistry.from_file(path, default_api_version="59.0")

    assert CapabilityClient.for_endpoint(registry.get("Default")).api_root == (
        "https://d.example.test/services/data/v59.0"
    )
    assert CapabilityClient.for_endpoint(registry.get("Pinned")).api_root == (
        "https://p.example.test/services/data/v60.0"
    )


def test_missing_file_yields_empty_registry(tmp_path: Path) -> None:
    registry = EndpointRegistry.from_file(tmp_path / "absent.json")

    assert registry.list_endpoints() == []
    with pytest.raises(UnknownEndpointError):
        registry.get("Anything")


def test_invalid_file_is_rejected(tmp_path: Path) -> None:
    path = tmp_path / "endpoints.json"
    path.write_text(json.dumps({"endpoints": [{"label": "No name"}]}), encoding="utf-8")

    with pytest.raises(ValueError):
        EndpointRegistry.from_file(path)


def test_endpoints_route(tmp_path: Path) -> None:
    path = write_endpoints(
        tmp_path / "endpoints.json",
        [{"name": "Mass_Action", "label": "Mass Action", "base_url": "https://m.example.test"}],
    )
    app = FastAPI()
    app.include_router(router)
    app.state.endpoint_registry = EndpointRegistry.from_file(path)
    app.dependency_overrides[require_admin_user] = lambda: {"sub": "admin"}

    response = TestClient(app).get("/api/endpoints")

    assert response.status_code == 200
    assert response.json() == [{"label": "Mass Action", "value": "Mass_Action"}]
