"""Integration tests for the ingredient endpoints."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from recipe_book.services.validation import constants as c


if TYPE_CHECKING:
    from httpx import AsyncClient


pytestmark = pytest.mark.integration


class TestCreateIngredient:
    """Tests for POST /api/ingredients."""

    async def test_create_defaults_unit(self, api: AsyncClient) -> None:
        """Should default the unit to piece."""
        response = await api.post("/api/ingredients", json={"name": "  Lemon "})

        assert response.status_code == 201
        data = response.json()["data"]
        assert data["name"] == "Lemon"
        assert data["unit"] == "piece"
        assert "created_at" in data

    async def test_duplicate_name_ignores_case(
        self,
        api: AsyncClient,
        catalogue: dict[str, int],
    ) -> None:
        """Should refuse a name that differs only in case."""
        response = await api.post("/api/ingredients", json={"name": "flour", "unit": "g"})

        assert response.status_code == 409
        assert response.json() == {
            "error": {
                "code": "CONFLICT",
                "message": 'Ingredient with name "flour" already exists',
            }
        }

    async def test_invalid_fields(self, api: AsyncClient) -> None:
        """Should report an unknown unit and an over-long name."""
        response = await api.post(
            "/api/ingredients", json={"name": "x" * 101, "unit": "bucket"}
        )

        assert response.status_code == 400
        details = {d["field"]: d["message"] for d in response.json()["error"]["details"]}
        assert details == {"name": c.NAME_TOO_LONG, "unit": c.UNIT_INVALID}


class TestListIngredients:
    """Tests for GET /api/ingredients."""

    async def test_alphabetical(self, api: AsyncClient, catalogue: dict[str, int]) -> None:
        """Should list every ingredient by name."""
        response = await api.get("/api/ingredients")

        body = response.json()
        assert [i["name"] for i in body["data"]] == ["Eggs", "Flour", "Salt"]
        assert body["meta"] == {"total": 3}

    async def test_search_is_case_insensitive(
        self,
        api: AsyncClient,
        catalogue: dict[str, int],
    ) -> None:
        """Should match a trimmed substring regardless of case."""
        response = await api.get("/api/ingredients", params={"search": " LO "})

        body = response.json()
        assert [i["name"] for i in body["data"]] == ["Flour"]
        assert body["meta"] == {"total": 1, "search": "LO"}

    async def test_blank_search_lists_everything(
        self,
        api: AsyncClient,
        catalogue: dict[str, int],
    ) -> None:
        """Should ignore a search of only whitespace."""
        response = await api.get("/api/ingredients", params={"search": "   "})

        assert response.json()["meta"] == {"total": 3}

    async def test_search_treats_wildcards_literally(
        self,
        api: AsyncClient,
        catalogue: dict[str, int],
    ) -> None:
        """Should not interpret LIKE wildcards in the search term."""
        response = await api.get("/api/ingredients", params={"search": "%"})

        assert response.json()["data"] == []


class TestUpdateIngredient:
    """Tests for PUT /api/ingredients/{id}."""

    async def test_rename(self, api: AsyncClient, catalogue: dict[str, int]) -> None:
        """Should rename and change the unit."""
        response = await api.put(
            f"/api/ingredients/{catalogue['Salt']}",
            json={"name": "Sea Salt", "unit": "tsp"},
        )

        assert response.status_code == 200
        data = response.json()["data"]
        assert (data["name"], data["unit"]) == ("Sea Salt", "tsp")

    async def test_change_case_of_own_name(
        self,
        api: AsyncClient,
        catalogue: dict[str, int],
    ) -> None:
        """Should not treat an ingredient as clashing with itself."""
        response = await api.put(
            f"/api/ingredients/{catalogue['Flour']}", json={"name": "FLOUR"}
        )

        assert response.status_code == 200
        assert response.json()["data"]["name"] == "FLOUR"

    async def test_rename_to_existing(self, api: AsyncClient, catalogue: dict[str, int]) -> None:
        """Should refuse to take another ingredient's name."""
        response = await api.put(
            f"/api/ingredients/{catalogue['Salt']}", json={"name": "eggs"}
        )

        assert response.status_code == 409

    async def test_missing(self, api: AsyncClient) -> None:
        """Should answer 404 for an unknown ingredient."""
        response = await api.put("/api/ingredients/999", json={"name": "Thyme"})

        assert response.status_code == 404
        assert response.json()["error"]["message"] == "Ingredient with id 999 not found"


class TestDeleteIngredient:
    """Tests for DELETE /api/ingredients/{id}."""

    async def test_delete_unused(self, api: AsyncClient, catalogue: dict[str, int]) -> None:
        """Should delete an ingredient no recipe uses."""
        response = await api.delete(f"/api/ingredients/{catalogue['Salt']}")

        assert response.status_code == 204
        assert (await api.get(f"/api/ingredients/{catalogue['Salt']}")).status_code == 404

    async def test_delete_in_use(self, api: AsyncClient, catalogue: dict[str, int]) -> None:
        """Should refuse while a recipe uses the ingredient."""
        await api.post(
            "/api/recipes",
            json={
                "name": "Bread",
                "instructions": "Knead",
                "ingredients": [{"ingredient_id": catalogue["Flour"], "quantity": 500}],
            },
        )

        response = await api.delete(f"/api/ingredients/{catalogue['Flour']}")

        assert response.status_code == 409
        assert response.json()["error"]["message"] == (
            "Cannot delete ingredient: it is used in 1 recipe(s)"
        )

    async def test_id_beyond_store_range(self, api: AsyncClient) -> None:
        """Should answer 404 for an id larger than the store can hold."""
        response = await api.delete("/api/ingredients/99999999999999999999")

        assert response.status_code == 404
        assert response.json()["error"]["code"] == "NOT_FOUND"

    async def test_non_numeric_id(self, api: AsyncClient) -> None:

        """Should answer 400 with the ingredient id message."""
        response = await api.delete("/api/ingredients/one")

        assert response.status_code == 400
        assert response.json()["error"]["message"] == "Invalid ingredient ID"
