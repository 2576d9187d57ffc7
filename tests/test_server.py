import json
from pathlib import Path

from fastapi.testclient import TestClient

from apim_openapi_exporter.config import Settings
from apim_openapi_exporter.server import create_app

FIXTURES = Path(__file__).parent / "fixtures"


def _client(**settings) -> TestClient:
    return TestClient(create_app(Settings(**settings)))


def _clash_graph() -> dict:
    return {
        "apiGraph": {
            "segments": [
                {"static": {"id": "u1", "name": "users"}},
                {"static": {"id": "u2", "name": "users"}},
            ],
            "operations": [
                {"id": "first", "pathSegmentId": "u1", "method": "GET"},
                {"id": "second", "pathSegmentId": "u2", "method": "GET"},
            ],
        }
    }


class TestHealth:
    def test_healthz(self):
        resp = _client().get("/healthz")
        assert resp.status_code == 200
        assert resp.json() == {"status": "ok"}


class TestBuildEndpoint:
    def test_build_from_fixture(self):
        body = json.loads((FIXTURES / "users_orders.json").read_text(encoding="utf-8"))
        resp = _client().post("/v1/openapi:build", json=body)
        assert resp.status_code == 200
        spec = json.loads(resp.json()["specJson"])
        assert spec["openapi"] == "3.0.0"
        assert "/users/{id}/orders" in spec["paths"]

    def test_malformed_graph_is_400(self):
        body = {"apiGraph": {"segments": [{"static": {"id": "a", "name": "a"}}], "edges": [{"from": "a", "to": "zzz"}]}}
        resp = _client().post("/v1/openapi:build", json=body)
        assert resp.status_code == 400
        assert resp.json()["error"] == "UnknownSegmentError"
        assert "zzz" in resp.json()["detail"]

    def test_cycle_is_400(self):
        body = {
            "apiGraph": {
                "segments": [{"static": {"id": "a", "name": "a"}}, {"static": {"id": "b", "name": "b"}}],
                "edges": [{"from": "a", "to": "b"}, {"from": "b", "to": "a"}],
            }
        }
        resp = _client().post("/v1/openapi:build", json=body)
        assert resp.status_code == 400
        assert resp.json()["error"] == "CycleError"

    def test_invalid_body_is_422(self):
        resp = _client().post("/v1/openapi:build", json={"apiGraph": {"edges": [{"from": "a"}]}})
        assert resp.status_code == 422

    def test_conflict_policy_from_settings(self):
        resp = _client(on_conflict="reject").post("/v1/openapi:build", json=_clash_graph())
        assert resp.status_code == 400
        assert resp.json()["error"] == "DuplicateRouteError"

    def test_conflict_overwrite_by_default(self):
        resp = _client().post("/v1/openapi:build", json=_clash_graph())
        assert resp.status_code == 200
        spec = json.loads(resp.json()["specJson"])
        assert spec["paths"]["/users"]["get"]["summary"] == "second"
