"""
Tests for the recipe import HTTP endpoints
"""

import pytest
from fastapi.testclient import TestClient

from recipe_importer.api import app
from recipe_importer.exceptions import SourceUnavailableError
from recipe_importer.parsers.coordination import hybrid_coordinator

PANCAKES = "Pancakes\nIngredients\n2 eggs\n1 cup milk\nMethod\n1. Whisk the eggs.\n2. Add the milk."


@pytest.fixture
def client():
    return TestClient(app)


class TestImportEndpoints:

    def test_health(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json() == {"status": "healthy"}

    def test_import_plain_text(self, client):
        response = client.post("/recipes/import", json={"plainText": PANCAKES})

        assert response.status_code == 200
        data = response.json()
        assert data["title"] == "Pancakes"
        assert data["ingredientGroups"] == [{"section": None, "items": ["2 eggs", "1 cup milk"]}]
        assert data["instructionGroups"][0]["steps"] == ["Whisk the eggs.", "Add the milk."]
        assert data["imageUrl"] is None

    @pytest.mark.parametrize("payload", [{}, {"plainText": "   "}, {"markup": ""}])
    def test_empty_document_is_rejected(self, client, payload):
        response = client.post("/recipes/import", json=payload)
        assert response.status_code == 422

    def test_unreachable_source(self, client, monkeypatch):
        async def failing_fetch(url):
            raise SourceUnavailableError(url, "HTTP 404")

        monkeypatch.setattr(hybrid_coordinator, "fetch_document", failing_fetch)
        response = client.post("/recipes/import-from-url", json={"url": "https://example.com/gone"})

        assert response.status_code == 502
        assert "HTTP 404" in response.json()["detail"]


class TestStepMappingEndpoint:

    def test_mapping_ids(self, client):
        response = client.post("/recipes/step-mapping", json={
            "ingredientGroups": [{"section": None, "items": ["2 cups flour", "1 cup sugar", "1 tsp vanilla extract"]}],
            "instructionGroups": [{"section": None, "steps": ["Mix flour and sugar.", "Add vanilla and stir."]}],
        })

        assert response.status_code == 200
        assert response.json() == {"mapping": {"step-0": ["0-0", "0-1"], "step-1": ["0-2"]}}
