import pytest
from unittest.mock import Mock
from uuid import uuid4
from fastapi.testclient import TestClient

from core.exceptions import StorageError
from repositories.section_repository import SectionRepository


@pytest.mark.integration
class TestSectionEndpoints:

    def teardown_method(self):
        """Clean up after each test."""
        from main import app
        app.dependency_overrides.clear()

    def test_create_section(self, client: TestClient, sample_tenant):
        response = client.post("/api/v1/sections/", json={
            "tenant_id": str(sample_tenant.id),
            "name": "Experience",
            "description": "Professional experience and achievements",
            "order": 1,
        })

        assert response.status_code == 201
        data = response.json()
        assert data["tenant_id"] == str(sample_tenant.id)
        assert data["order"] == 1

    def test_create_section_malformed_tenant_id(self, client: TestClient):
        response = client.post("/api/v1/sections/", json={"tenant_id": "abc", "name": "Experience"})

        assert response.status_code == 422

    def test_create_section_unknown_tenant(self, client: TestClient):
        response = client.post("/api/v1/sections/", json={"tenant_id": str(uuid4()), "name": "Experience"})

        assert response.status_code == 404
        assert response.json()["details"]["entity"] == "tenant"

    def test_list_sections_for_tenant(self, client: TestClient, sample_tenant, other_tenant, factory):
        factory.section(sample_tenant, name="Skills", order=1)
        factory.section(sample_tenant, name="Experience", order=2)
        factory.section(other_tenant, name="Elsewhere")

        response = client.get(f"/api/v1/sections/?tenant_id={sample_tenant.id}")

        assert response.status_code == 200
        assert [s["name"] for s in response.json()] == ["Experience", "Skills"]

    def test_list_sections_empty(self, client: TestClient, sample_tenant):
        response = client.get(f"/api/v1/sections/?tenant_id={sample_tenant.id}")

        assert response.status_code == 200
        assert response.json() == []

    def test_get_section_with_datagrids(self, client: TestClient, sample_section, sample_datagrid):
        response = client.get(f"/api/v1/sections/{sample_section.id}/")

        assert response.status_code == 200
        data = response.json()
        assert data["name"] == "Experience"
        assert [d["id"] for d in data["datagrids"]] == [str(sample_datagrid.id)]

    def test_get_section_of_other_tenant(self, client: TestClient, sample_section, other_tenant):
        response = client.get(f"/api/v1/sections/{sample_section.id}/?tenant_id={other_tenant.id}")

        assert response.status_code == 404

    def test_update_section(self, client: TestClient, sample_section):
        response = client.patch(f"/api/v1/sections/{sample_section.id}/", json={"order": 7})

        assert response.status_code == 200
        assert response.json()["order"] == 7
        assert response.json()["name"] == "Experience"

    def test_update_section_ignores_null_for_required_fields(self, client: TestClient, sample_section):
        response = client.patch(
            f"/api/v1/sections/{sample_section.id}/",
            json={"name": None, "order": None, "is_active": None, "description": None},
        )

        assert response.status_code == 200
        data = response.json()
        assert data["name"] == "Experience"
        assert data["order"] == 1
        assert data["is_active"] is True
        assert data["description"] is None

    def test_delete_section(self, client: TestClient, sample_section, sample_datagrid, team_column):
        datagrid_id = sample_datagrid.id
        response = client.delete(f"/api/v1/sections/{sample_section.id}/")

        assert response.status_code == 200
        assert response.json()["datagrids"] == 1
        assert client.get(f"/api/v1/datagrids/{datagrid_id}/").status_code == 404

    def test_storage_failure_maps_to_500(self, client: TestClient, sample_tenant):
        from main import app
        from repositories.section_repository import get_section_repository

        mock_repo = Mock(spec=SectionRepository)
        mock_repo.create.side_effect = StorageError("Storage failure: connection lost")
        app.dependency_overrides[get_section_repository] = lambda: mock_repo

        response = client.post("/api/v1/sections/", json={"tenant_id": str(sample_tenant.id), "name": "Experience"})

        assert response.status_code == 500
        assert response.json()["error"] == "storage_error"
