"""Unit tests for the server-rendered pages.

The pages talk to a fake API client, so no API server or store is needed.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import pytest
from httpx import ASGITransport, AsyncClient

from recipe_book.clients.recipe_book import ClientError
from recipe_book.clients.recipe_book.exceptions import parse_error_body
from recipe_book.schemas.ingredient import IngredientRead
from recipe_book.schemas.recipe import RecipeDetail, RecipeSummary
from recipe_book.services.validation.constants import INGREDIENTS_NONE_VALID
from recipe_book.web.factory import create_web_app
from tests.factories import error_json, ingredient_json, recipe_json, summary_json


if TYPE_CHECKING:
    from collections.abc import AsyncGenerator

    from recipe_book.core.config import Settings


pytestmark = pytest.mark.unit


class FakeRecipeClient:
    """In-memory stand-in for RecipeBookClient."""

    base_url = "http://fake/api"

    def __init__(self) -> None:
        self.recipes: dict[int, RecipeDetail] = {
            1: RecipeDetail.model_validate(recipe_json()),
        }
        self.ingredients = [
            IngredientRead.model_validate(ingredient_json()),
            IngredientRead.model_validate(ingredient_json(id=3, name="Eggs", unit="piece")),
        ]
        self.failure: ClientError | None = None
        self.sent: list[tuple[str, Any]] = []

    def _maybe_fail(self) -> None:
        if self.failure is not None:
            raise self.failure

    async def list_recipes(self) -> list[RecipeSummary]:
        self._maybe_fail()
        return [
            RecipeSummary.model_validate(
                summary_json(id=r.id, name=r.name, ingredient_count=len(r.ingredients))
            )
            for r in self.recipes.values()
        ]

    async def get_recipe(self, recipe_id: int) -> RecipeDetail:
        self._maybe_fail()
        if recipe_id not in self.recipes:
            raise ClientError.api(
                404, f"Recipe with id {recipe_id} not found", "NOT_FOUND"
            )
        return self.recipes[recipe_id]

    async def list_ingredients(self, search: str | None = None) -> list[IngredientRead]:
        return self.ingredients

    async def create_recipe(self, payload: dict[str, Any]) -> RecipeDetail:
        self.sent.append(("create", payload))
        self._maybe_fail()
        recipe = RecipeDetail.model_validate(
            recipe_json(id=2, name=payload["name"], ingredients=[])
        )
        self.recipes[2] = recipe
        return recipe

    async def update_recipe(self, recipe_id: int, payload: dict[str, Any]) -> RecipeDetail:
        self.sent.append(("update", payload))
        self._maybe_fail()
        return self.recipes[recipe_id]

    async def delete_recipe(self, recipe_id: int) -> None:
        self._maybe_fail()
        self.recipes.pop(recipe_id, None)


@pytest.fixture
def fake_client() -> FakeRecipeClient:
    return FakeRecipeClient()


@pytest.fixture
async def web(
    test_settings: Settings,
    fake_client: FakeRecipeClient,
) -> AsyncGenerator[AsyncClient]:
    """HTTP client for the web app wired to the fake API client."""
    app = create_web_app(test_settings, client=fake_client)  # type: ignore[arg-type]
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client


def _form_data(**overrides: Any) -> dict[str, Any]:
    data: dict[str, Any] = {
        "name": "Omelette",
        "description": "",
        "instructions": "Whisk.\nFry.",
        "prep_time": "2",
        "cook_time": "5",
        "servings": "1",
        "ingredient_id": ["3"],
        "quantity": ["2"],
        "action": "save",
    }
    data.update(overrides)
    return data


class TestRecipeListPage:
    """Tests for the recipe list page."""

    async def test_lists_recipe_cards(self, web: AsyncClient) -> None:
        """Should render a card per recipe."""
        response = await web.get("/")

        assert response.status_code == 200
        assert "Classic Pancakes" in response.text
        assert "/recipes/1" in response.text

    async def test_empty_state(self, web: AsyncClient, fake_client: FakeRecipeClient) -> None:
        """Should invite the user to create a recipe when there are none."""
        fake_client.recipes.clear()

        response = await web.get("/")

        assert "No recipes yet." in response.text

    async def test_error_with_retry(
        self,
        web: AsyncClient,
        fake_client: FakeRecipeClient,
    ) -> None:
        """Should show a friendly message and a retry link when the API fails."""
        fake_client.failure = ClientError.network()

        response = await web.get("/")

        assert response.status_code == 200
        assert "Network error. Please check your connection." in response.text
        assert "Try again" in response.text


class TestRecipeDetailPage:
    """Tests for the detail page and its portion calculator."""

    async def test_renders_original_quantities(self, web: AsyncClient) -> None:
        """Should show ingredients at the recipe's own servings."""
        response = await web.get("/recipes/1")

        assert response.status_code == 200
        assert "Portion Calculator" in response.text
        assert "200 g" in response.text
        assert "2 pc" in response.text
        assert "Cooking for" not in response.text

    async def test_ingredients_grouped_by_category(self, web: AsyncClient) -> None:
        """Should list ingredients under category headings."""
        response = await web.get("/recipes/1")

        text = response.text
        assert text.index("Dairy") < text.index("Eggs")
        assert text.index("Eggs") < text.index("Baking") < text.index("Flour")

    async def test_scaled_servings(self, web: AsyncClient) -> None:

        """Should scale quantities and summarise the adjustment."""
        response = await web.get("/recipes/1", params={"servings": "6"})

        assert "300 g" in response.text
        assert "3 pc" in response.text
        assert "Cooking for 6 people (150% of original recipe)" in response.text

    async def test_invalid_input_keeps_previous(self, web: AsyncClient) -> None:
        """Should keep the previous servings when the new value is unusable."""
        response = await web.get("/recipes/1", params={"servings": "abc", "prev": "2"})

        assert "100 g" in response.text
        assert "Cooking for 2 people (50% of original recipe)" in response.text

    async def test_very_large_servings(self, web: AsyncClient) -> None:
        """Should render a huge servings count instead of failing."""
        servings = "1" + "0" * 27

        response = await web.get("/recipes/1", params={"servings": servings})

        assert response.status_code == 200
        assert f"Cooking for {servings} people" in response.text

    async def test_missing_recipe(self, web: AsyncClient) -> None:

        """Should render the error page with the API's message."""
        response = await web.get("/recipes/99")

        assert response.status_code == 404
        assert "Recipe with id 99 not found" in response.text

    async def test_non_numeric_id(self, web: AsyncClient) -> None:
        """Should answer an unparseable id with the not-found page."""
        response = await web.get("/recipes/abc")

        assert response.status_code == 404
        assert "Something went wrong" in response.text

    async def test_unknown_page(self, web: AsyncClient) -> None:
        """Should render unknown paths as an HTML 404."""
        response = await web.get("/no/such/page")

        assert response.status_code == 404
        assert response.headers["content-type"].startswith("text/html")


class TestRecipeFormPages:
    """Tests for creating and editing through the form."""

    async def test_new_form_lists_catalogue(self, web: AsyncClient) -> None:
        """Should offer every catalogue ingredient in the selects."""
        response = await web.get("/recipes/new")

        assert response.status_code == 200
        assert "Flour (g)" in response.text
        assert "Eggs (pc)" in response.text

    async def test_create_redirects_to_detail(
        self,
        web: AsyncClient,
        fake_client: FakeRecipeClient,
    ) -> None:
        """Should create the recipe and redirect to its page."""
        response = await web.post("/recipes/new", data=_form_data())

        assert response.status_code == 303
        assert response.headers["location"].endswith("/recipes/2")
        action, payload = fake_client.sent[0]
        assert action == "create"
        assert payload["ingredients"] == [{"ingredient_id": 3, "quantity": 2}]
        assert payload["servings"] == 1

    async def test_invalid_form_is_rerendered(
        self,
        web: AsyncClient,
        fake_client: FakeRecipeClient,
    ) -> None:
        """Should show field errors without calling the API."""
        response = await web.post("/recipes/new", data=_form_data(name="", servings="0"))

        assert response.status_code == 400
        assert "Name is required" in response.text
        assert "Servings must be at least 1" in response.text
        assert fake_client.sent == []

    async def test_add_row(self, web: AsyncClient, fake_client: FakeRecipeClient) -> None:
        """Should add an ingredient row and keep what was typed."""
        response = await web.post("/recipes/new", data=_form_data(action="add_row"))

        assert response.status_code == 200
        assert 'value="Omelette"' in response.text
        assert response.text.count('name="quantity"') == 2
        assert fake_client.sent == []

    async def test_api_field_errors_shown(
        self,
        web: AsyncClient,
        fake_client: FakeRecipeClient,
    ) -> None:
        """Should place API validation details next to their fields."""
        fake_client.failure = parse_error_body(
            400,
            error_json(
                "VALIDATION_ERROR",
                "Validation failed",
                [{"field": "ingredients", "message": INGREDIENTS_NONE_VALID}],
            ),
        )

        response = await web.post("/recipes/new", data=_form_data())

        assert response.status_code == 400
        assert INGREDIENTS_NONE_VALID in response.text

    async def test_api_unavailable_shows_general_error(
        self,
        web: AsyncClient,
        fake_client: FakeRecipeClient,
    ) -> None:
        """Should show a general message when the API cannot be reached."""
        fake_client.failure = ClientError.timeout()

        response = await web.post("/recipes/new", data=_form_data())

        assert response.status_code == 503
        assert "Request timed out. Please try again." in response.text

    async def test_edit_prefills(self, web: AsyncClient) -> None:
        """Should prefill the edit form from the stored recipe."""
        response = await web.get("/recipes/1/edit")

        assert response.status_code == 200
        assert 'value="Classic Pancakes"' in response.text
        assert "Save changes" in response.text

    async def test_update_redirects(
        self,
        web: AsyncClient,
        fake_client: FakeRecipeClient,
    ) -> None:
        """Should send the update and redirect to the detail page."""
        response = await web.post("/recipes/1/edit", data=_form_data())

        assert response.status_code == 303
        assert response.headers["location"].endswith("/recipes/1")
        assert fake_client.sent[0][0] == "update"


class TestRecipeDelete:
    """Tests for deleting from the detail page."""

    async def test_delete_redirects_to_list(
        self,
        web: AsyncClient,
        fake_client: FakeRecipeClient,
    ) -> None:
        """Should delete and return to the list."""
        response = await web.post("/recipes/1/delete")

        assert response.status_code == 303
        assert 1 not in fake_client.recipes

    async def test_delete_failure(
        self,
        web: AsyncClient,
        fake_client: FakeRecipeClient,
    ) -> None:
        """Should render the error page with a link back to the recipe."""
        fake_client.failure = ClientError.api(500, "boom", "INTERNAL_ERROR")

        response = await web.post("/recipes/1/delete")

        assert response.status_code == 502
        assert "Server error. Please try again later." in response.text
        assert "/recipes/1" in response.text
