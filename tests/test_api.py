"""Lambda entrypoint and route tests."""

from __future__ import annotations

import base64
import json
import re

import pytest

from apiserver import app as api
from apiserver.routes import results, submit
from core.config import Settings
from core.constants import RATING_FIELDS
from core.errors import StoreError
from core.store.factory import open_store, reset_memory_stores
from core.store.memory import InMemoryStore


class FailingStore(InMemoryStore):
    def __init__(self, exc: Exception) -> None:
        super().__init__()
        self.exc = exc

    def put(self, key, value):  # type: ignore[no-untyped-def]
        raise self.exc

    def list_keys(self, prefix="", limit=1000, cursor=None):  # type: ignore[no-untyped-def]
        raise self.exc


@pytest.fixture(autouse=True)
def _isolated(monkeypatch):
    for name in ("SATRATE_KV", "SATRATE_PAGE_SIZE", "SATRATE_ALLOW_ORIGIN", "SATRATE_LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)
    api._STORES.clear()
    reset_memory_stores()
    yield
    api._STORES.clear()
    reset_memory_stores()


@pytest.fixture
def bound(monkeypatch):
    monkeypatch.setenv("SATRATE_KV", "memory://api")
    return open_store("memory://api")


def _event(method: str, path: str, body: str | None = None, **extra) -> dict:
    event = {"httpMethod": method, "resource": path, "path": path, "body": body}
    event.update(extra)
    return event


def test_submit_then_results(bound):
    response = api.lambda_handler(_event("POST", "/api/submit", json.dumps({"onboardingSmooth": 4, "onboardingLength": "short"})), None)
    assert response["statusCode"] == 200
    assert response["headers"]["Content-Type"] == "application/json"
    assert response["headers"]["Access-Control-Allow-Origin"] == "*"
    body = json.loads(response["body"])
    assert body["ok"] is True
    assert re.match(r"^submission:\d+:[a-z0-9]{7}$", body["id"])
    assert body["id"] in bound.data

    response = api.lambda_handler(_event("GET", "/api/results"), None)
    assert response["statusCode"] == 200
    assert response["headers"]["Access-Control-Allow-Origin"] == "*"
    summary = json.loads(response["body"])
    assert summary["totalResponses"] == 1
    assert summary["rating"]["onboardingSmooth"] == {"1": 0, "2": 0, "3": 0, "4": 1, "5": 0}
    assert summary["length"]["onboardingLength"] == {"short": 1, "appropriate": 0, "long": 0}


def test_results_on_empty_store(bound):
    response = api.lambda_handler(_event("GET", "/api/results"), None)
    summary = json.loads(response["body"])
    assert summary["totalResponses"] == 0
    assert list(summary["rating"]) == list(RATING_FIELDS)
    assert summary["length"] == {"onboardingLength": {"short": 0, "appropriate": 0, "long": 0}}


@pytest.mark.parametrize("method, path", [("POST", "/api/submit"), ("GET", "/api/results")])
def test_missing_binding_returns_configuration_error(method, path):
    response = api.lambda_handler(_event(method, path, "{}"), None)
    assert response["statusCode"] == 500
    assert json.loads(response["body"]) == {"error": "KV not configured"}
    assert "Access-Control-Allow-Origin" not in response["headers"]


def test_unusable_binding_returns_configuration_error(monkeypatch):
    monkeypatch.setenv("SATRATE_KV", "ftp://nowhere")
    response = api.lambda_handler(_event("GET", "/api/results"), None)
    assert response["statusCode"] == 500
    assert "Unsupported store URL scheme" in json.loads(response["body"])["error"]


def test_malformed_body_is_bad_request(bound):
    response = api.lambda_handler(_event("POST", "/api/submit", "{oops"), None)
    assert response["statusCode"] == 400
    assert "not valid JSON" in json.loads(response["body"])["error"]
    assert "Access-Control-Allow-Origin" not in response["headers"]
    assert bound.data == {}


def test_base64_body_is_decoded(bound):
    encoded = base64.b64encode(json.dumps({"docClear": 5}).encode("utf-8")).decode("ascii")
    response = api.lambda_handler(_event("POST", "/api/submit", encoded, isBase64Encoded=True), None)
    assert response["statusCode"] == 200
    stored = json.loads(bound.data[json.loads(response["body"])["id"]])
    assert stored["docClear"] == 5


def test_unknown_route_is_not_found(bound):
    response = api.lambda_handler(_event("DELETE", "/api/results"), None)
    assert response["statusCode"] == 404
    assert json.loads(response["body"]) == {"error": "Route not found"}


def test_preflight_lists_route_methods(bound):
    response = api.lambda_handler(_event("OPTIONS", "/api/submit"), None)
    assert response["statusCode"] == 204
    assert response["headers"]["Access-Control-Allow-Methods"] == "POST,OPTIONS"
    assert response["headers"]["Access-Control-Allow-Headers"] == "Content-Type"


def test_allow_origin_is_configurable(bound, monkeypatch):
    monkeypatch.setenv("SATRATE_ALLOW_ORIGIN", "https://survey.example.com")
    response = api.lambda_handler(_event("GET", "/api/results"), None)
    assert response["headers"]["Access-Control-Allow-Origin"] == "https://survey.example.com"


def test_submit_store_failure_uses_store_message():
    response = submit(_event("POST", "/api/submit", "{}"), FailingStore(StoreError("Access Denied")), Settings())
    assert response["statusCode"] == 500
    assert json.loads(response["body"]) == {"error": "Access Denied"}


def test_submit_unexpected_failure_without_message_uses_fallback():
    response = submit(_event("POST", "/api/submit", "{}"), FailingStore(RuntimeError()), Settings())
    assert response["statusCode"] == 500
    assert json.loads(response["body"]) == {"error": "Failed to save"}


def test_results_unexpected_failure_without_message_uses_fallback():
    response = results(_event("GET", "/api/results"), FailingStore(RuntimeError()), Settings())
    assert response["statusCode"] == 500
    assert json.loads(response["body"]) == {"error": "Failed to load results"}


def test_results_failure_reports_message():
    response = results(_event("GET", "/api/results"), FailingStore(RuntimeError("list timed out")), Settings())
    assert json.loads(response["body"]) == {"error": "list timed out"}


def test_sam_shim_forwards_to_api(bound):
    import importlib.util
    from pathlib import Path

    shim_path = Path(__file__).resolve().parents[1] / "infra/sam-app/src/app.py"
    module_spec = importlib.util.spec_from_file_location("sam_app", shim_path)
    module = importlib.util.module_from_spec(module_spec)
    module_spec.loader.exec_module(module)  # type: ignore[union-attr]

    response = module.lambda_handler(_event("GET", "/api/results"), None)
    assert response["statusCode"] == 200


@pytest.mark.parametrize("variable, value", [("SATRATE_LOG_LEVEL", "verbose"), ("SATRATE_PAGE_SIZE", "0")])
def test_invalid_settings_return_error_envelope(monkeypatch, variable, value):
    monkeypatch.setenv(variable, value)
    response = api.lambda_handler(_event("GET", "/api/results"), None)
    assert response["statusCode"] == 500
    assert response["headers"]["Content-Type"] == "application/json"
    assert json.loads(response["body"])["error"]
