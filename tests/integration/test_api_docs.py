import pytest

pytestmark = pytest.mark.integration


class TestOpenApiSchema:
    def test_schema_describes_customer_paths(self, api_client):
        response = api_client.get("/api/schema/", {"format": "json"})
        assert response.status_code == 200
        schema = response.json()
        assert schema["info"]["title"] == "Customer CRUD API"
        assert "/api/v1/customers/" in schema["paths"]
        assert "/api/v1/customers/search/" in schema["paths"]
