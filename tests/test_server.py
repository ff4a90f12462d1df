"""API server tests — every endpoint through FastAPI's TestClient.

The client is created inside a ``with`` block so the lifespan handler runs
and loads the packaged template catalogue.
"""

import pytest
from fastapi.testclient import TestClient

from intake_forms.constants import REQUIRED_MESSAGE
from intake_server.app import create_app
from intake_server.config import ServerSettings, load_settings

API = "/api/v1"


@pytest.fixture(scope="module")
def client():
    with TestClient(create_app(ServerSettings())) as c:
        yield c


def _psychology_answers(**overrides):
    answers = {
        "birth_date": "1990-01-31",
        "main_complaint": "Ansiedade",
        "previous_therapy": "no",
        "psychiatric_history": "no",
        "expectations": "Melhorar o sono",
    }
    answers.update(overrides)
    return answers


class TestHealth:

    def test_health(self, client):
        resp = client.get("/health")
        assert resp.status_code == 200
        assert resp.json() == {"status": "ok", "templates": 3}


class TestCatalogue:

    def test_list_templates(self, client):
        resp = client.get(f"{API}/templates")
        assert resp.status_code == 200
        infos = {info["key"]: info for info in resp.json()}
        assert set(infos) == {"nutrition", "psychology", "general_clinical"}
        assert infos["nutrition"]["questionCount"] == 21
        assert infos["nutrition"]["sectionCount"] == 5

    def test_get_template_camel_case(self, client):
        resp = client.get(f"{API}/templates/psychology")
        assert resp.status_code == 200
        body = resp.json()
        fields = {f["id"]: f for s in body["sections"] for f in s["fields"]}
        detail = fields["previous_therapy_detail"]
        assert detail["conditionalOn"] == {
            "fieldId": "previous_therapy",
            "value": "yes_stopped",
            "operator": "equals",
        }
        # None-valued attributes are omitted from the payload
        assert "placeholder" not in fields["birth_date"]

    def test_unknown_template_404(self, client):
        resp = client.get(f"{API}/templates/dental")
        assert resp.status_code == 404
        assert resp.json() == {"detail": "Resource not found"}

    def test_specialties(self, client):
        resp = client.get(f"{API}/specialties")
        assert resp.status_code == 200
        assert resp.json()["psiquiatria"] == "psychology"

    def test_specialty_template(self, client):
        resp = client.get(f"{API}/specialties/nutricao/template")
        assert resp.status_code == 200
        assert resp.json()["title"] == "Anamnese Nutricional"

    def test_unknown_specialty_404(self, client):
        assert client.get(f"{API}/specialties/odontologia/template").status_code == 404


class TestTemplateValidation:

    def test_empty_responses(self, client):
        resp = client.post(f"{API}/templates/psychology/validate", json={"responses": {}})
        assert resp.status_code == 200
        body = resp.json()
        assert body["isValid"] is False
        assert [e["fieldId"] for e in body["errors"]] == [
            "birth_date",
            "main_complaint",
            "previous_therapy",
            "psychiatric_history",
            "expectations",
        ]
        assert {e["message"] for e in body["errors"]} == {REQUIRED_MESSAGE}

    def test_valid_responses(self, client):
        resp = client.post(
            f"{API}/templates/psychology/validate",
            json={"responses": _psychology_answers()},
        )
        assert resp.json() == {"isValid": True, "errors": []}

    def test_weight_bounds(self, client):
        resp = client.post(
            f"{API}/templates/nutrition/validate",
            json={"responses": {"weight": 19.999}},
        )
        errors = {e["fieldId"]: e["message"] for e in resp.json()["errors"]}
        assert errors["weight"] == "Valor mínimo: 20"

    def test_unknown_template_404(self, client):
        resp = client.post(f"{API}/templates/dental/validate", json={"responses": {}})
        assert resp.status_code == 404


class TestRender:

    def test_hidden_detail_omitted(self, client):
        resp = client.post(
            f"{API}/templates/psychology/render",
            json={"responses": _psychology_answers()},
        )
        assert resp.status_code == 200
        ids = [f["field"]["id"] for s in resp.json()["sections"] for f in s["fields"]]
        assert "previous_therapy_detail" not in ids

    def test_revealed_detail_with_error(self, client):
        resp = client.post(
            f"{API}/templates/psychology/render",
            json={
                "responses": _psychology_answers(previous_therapy="yes_stopped"),
                "errors": {"main_complaint": REQUIRED_MESSAGE},
                "readOnly": True,
            },
        )
        fields = {f["field"]["id"]: f for s in resp.json()["sections"] for f in s["fields"]}
        detail = fields["previous_therapy_detail"]
        assert detail["fullWidth"] is True
        assert detail["disabled"] is True
        assert fields["main_complaint"]["error"] == REQUIRED_MESSAGE
        assert fields["previous_therapy"]["value"] == "yes_stopped"


class TestAdHocForms:

    SCHEMA = {
        "title": "Custom",
        "sections": [
            {
                "title": "Main",
                "fields": [
                    {"id": "email", "type": "email", "label": "E-mail", "required": True},
                    {
                        "id": "cep",
                        "type": "text",
                        "label": "CEP",
                        "validation": {"pattern": r"^\d{5}-\d{3}$", "patternMessage": "CEP inválido"},
                    },
                ],
            }
        ],
    }

    def test_validate_custom_schema(self, client):
        resp = client.post(
            f"{API}/forms/validate",
            json={"schema": self.SCHEMA, "responses": {"email": "bad", "cep": "123"}},
        )
        assert resp.status_code == 200
        assert resp.json()["errors"] == [
            {"fieldId": "email", "message": "E-mail inválido"},
            {"fieldId": "cep", "message": "CEP inválido"},
        ]

    def test_malformed_schema_422(self, client):
        schema = {
            "title": "Broken",
            "sections": [
                {
                    "title": "Main",
                    "fields": [
                        {"id": "a", "type": "text", "label": "A"},
                        {"id": "a", "type": "text", "label": "A again"},
                    ],
                }
            ],
        }
        resp = client.post(f"{API}/forms/validate", json={"schema": schema, "responses": {}})
        assert resp.status_code == 422


class TestErrorHandlers:
    """Exceptions escaping a route map to generic client-safe bodies."""

    @pytest.fixture(scope="class")
    def failing_client(self):
        app = create_app(ServerSettings())

        @app.get("/raise/value")
        def raise_value():
            raise ValueError("internal detail")

        @app.get("/raise/key")
        def raise_key():
            raise KeyError("internal detail")

        with TestClient(app) as c:
            yield c

    def test_value_error_is_400(self, failing_client):
        resp = failing_client.get("/raise/value")
        assert resp.status_code == 400
        assert resp.json() == {"detail": "Invalid request"}

    def test_key_error_is_404(self, failing_client):
        resp = failing_client.get("/raise/key")
        assert resp.status_code == 404
        assert resp.json() == {"detail": "Resource not found"}


class TestSettings:

    def test_defaults(self, monkeypatch):
        for name in ("SERVER_HOST", "SERVER_PORT", "SERVER_CORS_ORIGINS", "SERVER_TEMPLATES_DIR", "SERVER_LOG_LEVEL"):
            monkeypatch.delenv(name, raising=False)
        settings = load_settings()
        assert settings.port == 8080
        assert settings.cors_origins == ["*"]
        assert settings.templates_dir is None

    def test_env_overrides(self, monkeypatch):
        monkeypatch.setenv("SERVER_PORT", "9000")
        monkeypatch.setenv("SERVER_CORS_ORIGINS", "http://a.test, http://b.test")
        monkeypatch.setenv("SERVER_LOG_LEVEL", "debug")
        settings = load_settings()
        assert settings.port == 9000
        assert settings.cors_origins == ["http://a.test", "http://b.test"]
        assert settings.log_level == "DEBUG"
