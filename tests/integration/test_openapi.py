"""
Integration tests for OpenAPI documentation.

Verifies OpenAPI schema is correctly generated for all endpoints.
The lifespan does not run (no ``with TestClient``), so no database is needed.
"""

import pytest
from fastapi.testclient import TestClient

from src.api.main import app


@pytest.fixture
def client() -> TestClient:
    """Create test client for the application."""
    return TestClient(app)


@pytest.fixture
def schema(client: TestClient) -> dict:
    response = client.get("/openapi.json")
    assert response.status_code == 200
    return response.json()


class TestOpenAPISchema:
    """Tests for OpenAPI schema generation."""

    def test_title_and_version(self, schema: dict) -> None:
        assert schema["info"]["title"] == "safehouse-registry"
        assert "Safe House Registry" in schema["info"]["description"]
        assert schema["info"]["version"] == "0.1.0"

    @pytest.mark.parametrize("resource", ["administrators", "users"])
    def test_identity_endpoints_documented(self, schema: dict, resource: str) -> None:
        paths = schema["paths"]
        assert set(paths[f"/v1/{resource}"]) == {"get", "post"}
        assert set(paths[f"/v1/{resource}/{{id}}"]) == {"get", "put", "delete"}
        assert "post" in paths[f"/v1/{resource}/authenticate"]

    def test_safe_house_endpoints_documented(self, schema: dict) -> None:
        paths = schema["paths"]
        assert set(paths["/v1/safe-houses"]) == {"get", "post"}
        assert set(paths["/v1/safe-houses/{id}"]) == {"get", "put", "delete"}
        assert "/v1/safe-houses/authenticate" not in paths

    def test_alert_endpoint_documented(self, schema: dict) -> None:
        assert "post" in schema["paths"]["/v1/alerts/predict"]

    def test_identity_response_has_no_password_field(self, schema: dict) -> None:
        props = schema["components"]["schemas"]["IdentityResponse"]["properties"]
        assert set(props) == {"id", "name", "email"}

    def test_create_request_schema(self, schema: dict) -> None:
        props = schema["components"]["schemas"]["IdentityCreateRequest"]["properties"]
        assert {"name", "email", "password"} <= set(props)

    def test_authenticate_takes_login_body(self, schema: dict) -> None:
        operation = schema["paths"]["/v1/users/authenticate"]["post"]
        body_schema = operation["requestBody"]["content"]["application/json"]["schema"]
        assert body_schema["$ref"].endswith("/LoginRequest")
        assert "securitySchemes" not in schema.get("components", {})


    def test_tags_defined(self, schema: dict) -> None:
        tag_names = [t["name"] for t in schema.get("tags", [])]
        assert tag_names == ["administrators", "users", "safe-houses", "alerts"]


class TestSwaggerUI:
    """Tests for Swagger UI availability."""

    def test_docs_endpoint_accessible(self, client: TestClient) -> None:
        """Swagger UI is accessible at /docs."""
        response = client.get("/docs")
        assert response.status_code == 200
        assert "text/html" in response.headers["content-type"]
        assert "swagger" in response.text.lower()
