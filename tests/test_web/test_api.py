"""Tests for the HTTP API."""

from __future__ import annotations

import importlib

import pytest

from tests.test_web.conftest import make_app

LIST_MARKUP = (
    "const v = (\n"
    "  <ul>\n"
    '    <li className="row"><b>One</b></li>\n'
    '    <li className="row"><b>Two</b></li>\n'
    "  </ul>\n"
    ");\n"
)


# ---------------------------------------------------------------------------
# Health
# ---------------------------------------------------------------------------


class TestHealth:
    def test_ok(self, client):
        resp = client.get("/health")
        assert resp.status_code == 200
        body = resp.get_json()
        assert body["status"] == "ok"
        assert body["environment"] == "test"
        assert body["uptime"] >= 0
        assert "version" in body and "timestamp" in body


# ---------------------------------------------------------------------------
# Engines
# ---------------------------------------------------------------------------


class TestResolve:
    def test_classes_and_fallback(self, client):
        resp = client.post("/v1/api/resolve", json={"css": ".a { padding: 16px; transition: all 1s; }"})
        assert resp.status_code == 200
        body = resp.get_json()
        assert body["perSelectorClasses"] == {".a": ["p-4"]}
        assert "transition: all 1s;" in body["fallbackCss"]

    def test_theme_in_request(self, client):
        resp = client.post("/v1/api/resolve", json={
            "css": ".a { padding: 10px; }",
            "theme": {"spacingScale": {"gutter": "10px"}},
        })
        assert resp.get_json()["perSelectorClasses"] == {".a": ["p-gutter"]}

    def test_parse_error(self, client):
        resp = client.post("/v1/api/resolve", json={"css": ".a {"})
        assert resp.status_code == 422
        body = resp.get_json()
        assert body["error"] == "Parse error"
        assert set(body) == {"error", "message", "line", "column"}


class TestExtract:
    def test_extracts(self, client):
        resp = client.post("/v1/api/extract", json={"source": LIST_MARKUP})
        assert resp.status_code == 200
        body = resp.get_json()
        assert body["changed"] is True
        assert body["templates"][0]["name"] == "ExtractedItem"
        assert '<ExtractedItem text00="One" />' in body["transformedSource"]

    def test_options(self, client):
        resp = client.post("/v1/api/extract", json={
            "source": LIST_MARKUP,
            "options": {"generatedNamePrefix": "Row", "preferCollapsedIteration": True},
        })
        body = resp.get_json()
        assert body["templates"][0]["name"] == "Row"
        assert body["templates"][0]["dataTable"].startswith("const rowData = [")

    def test_config_defaults_apply(self):
        client = make_app(generated_name_prefix="Entry").test_client()
        body = client.post("/v1/api/extract", json={"source": LIST_MARKUP}).get_json()
        assert body["templates"][0]["name"] == "Entry"

    def test_parse_error_location(self, client):
        resp = client.post("/v1/api/extract", json={"source": "const v = <div>;"})
        assert resp.status_code == 422
        body = resp.get_json()
        assert body["line"] == 1
        assert isinstance(body["column"], int)


class TestOptimize:
    def test_round_trip(self, client):
        resp = client.post("/v1/api/optimize", json={
            "markup": LIST_MARKUP,
            "css": ".row { margin: 4px; }",
        })
        body = resp.get_json()
        assert resp.status_code == 200
        assert body["classes"] == {"row": ["m-1"]}
        assert body["css"] == ""
        assert '<li className="m-1"><b>{text00}</b></li>' in body["markup"]
        assert body["warnings"] == []

    def test_without_extraction(self, client):
        body = client.post("/v1/api/optimize", json={
            "markup": LIST_MARKUP, "css": ".row { margin: 4px; }", "extract": False,
        }).get_json()
        assert "ExtractedItem" not in body["markup"]

    def test_failures_become_warnings(self, client):
        resp = client.post("/v1/api/optimize", json={"markup": "const v = <div>;", "css": ".a {"})
        assert resp.status_code == 200
        warnings = resp.get_json()["warnings"]
        assert [w.split(":")[0] for w in warnings] == [
            "CSS conversion failed", "Repetition extraction failed",
        ]


# ---------------------------------------------------------------------------
# Validation
# ---------------------------------------------------------------------------


class TestValidation:
    def test_body_must_be_object(self, client):
        resp = client.post("/v1/api/resolve", json=["css"])
        assert resp.status_code == 400
        assert resp.get_json() == {
            "error": "Validation failed",
            "issues": [{"path": "", "message": "Request body must be a JSON object"}],
        }

    def test_missing_body(self, client):
        resp = client.post("/v1/api/extract", data="not json", content_type="text/plain")
        assert resp.status_code == 400

    def test_field_issues(self, client):
        resp = client.post("/v1/api/optimize", json={"css": 3, "extract": "yes"})
        issues = resp.get_json()["issues"]
        assert issues == [
            {"path": "markup", "message": "Required"},
            {"path": "css", "message": "Expected str"},
            {"path": "extract", "message": "Expected bool"},
        ]

    def test_bad_theme(self, client):
        resp = client.post("/v1/api/resolve", json={"css": "", "theme": {"remInPx": -1}})
        assert resp.status_code == 400
        assert resp.get_json()["issues"][0]["path"] == "theme"

    @pytest.mark.parametrize("options", [{"collapse": True}, {"minimumRepeatCount": 1}])
    def test_bad_options(self, client, options):
        resp = client.post("/v1/api/extract", json={"source": "", "options": options})
        assert resp.status_code == 400
        assert resp.get_json()["issues"][0]["path"] == "options"


# ---------------------------------------------------------------------------
# Cross-cutting behaviour
# ---------------------------------------------------------------------------


class TestAuth:
    def test_missing_key(self):
        client = make_app(api_key="s3cret").test_client()
        resp = client.post("/v1/api/resolve", json={"css": ""})
        assert resp.status_code == 401
        assert resp.get_json() == {"error": "Unauthorized", "message": "Invalid or missing API key"}

    def test_valid_key(self):
        client = make_app(api_key="s3cret").test_client()
        resp = client.post("/v1/api/resolve", json={"css": ""}, headers={"x-api-key": "s3cret"})
        assert resp.status_code == 200

    def test_preflight_exempt(self):
        client = make_app(api_key="s3cret").test_client()
        assert client.options("/v1/api/resolve").status_code == 200


class TestHeadersAndErrors:
    def test_security_headers(self, client):
        resp = client.get("/health")
        assert resp.headers["X-Frame-Options"] == "DENY"
        assert resp.headers["X-Content-Type-Options"] == "nosniff"
        assert resp.headers["Access-Control-Allow-Origin"] == "*"
        assert "Strict-Transport-Security" not in resp.headers

    def test_hsts_in_production(self):
        resp = make_app(environment="production").test_client().get("/health")
        assert resp.headers["Strict-Transport-Security"].startswith("max-age=")

    def test_cors_allow_list(self):
        client = make_app(cors_origin="https://app.test").test_client()
        allowed = client.get("/health", headers={"Origin": "https://app.test"})
        assert allowed.headers["Access-Control-Allow-Origin"] == "https://app.test"
        assert allowed.headers["Vary"] == "Origin"
        other = client.get("/health", headers={"Origin": "https://evil.test"})
        assert "Access-Control-Allow-Origin" not in other.headers

    def test_not_found(self, client):
        resp = client.get("/v1/api/nope")
        assert resp.status_code == 404
        assert resp.get_json() == {"error": "Not found", "message": "The requested endpoint does not exist"}

    def test_method_not_allowed(self, client):
        resp = client.get("/v1/api/resolve")
        assert resp.status_code == 405
        assert resp.get_json()["error"] == "Method Not Allowed"

    def test_unexpected_error(self, client, monkeypatch):
        def boom(*args, **kwargs):
            raise RuntimeError("kaput")

        monkeypatch.setattr("vibeflow.web.routes.api.extract_repetitions", boom)
        resp = client.post("/v1/api/extract", json={"source": ""})
        assert resp.status_code == 500
        assert resp.get_json() == {"error": "Internal server error", "message": "kaput"}

    def test_production_hides_error_detail(self, monkeypatch):
        def boom(*args, **kwargs):
            raise RuntimeError("kaput")

        monkeypatch.setattr("vibeflow.web.routes.api.extract_repetitions", boom)
        client = make_app(environment="production").test_client()
        resp = client.post("/v1/api/extract", json={"source": ""})
        assert resp.status_code == 500
        assert resp.get_json()["message"] == "An unexpected error occurred"


class TestServerlessEntry:
    def test_module_exposes_app(self, monkeypatch):
        monkeypatch.setenv("VIBEFLOW_ENVIRONMENT", "test")
        module = importlib.import_module("api.index")
        assert module.app.extensions["vibeflow_config"].environment == "test"
        assert module.app.test_client().get("/health").status_code == 200
