"""FastAPI dependencies for the web front end."""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends, Form, HTTPException, Request, status
from fastapi.templating import Jinja2Templates

from recipe_book.clients.recipe_book import RecipeBookClient
from recipe_book.web.forms import RecipeForm


async def get_client(request: Request) -> RecipeBookClient:
    """Get the API client from app state.

    Raises:
        HTTPException: 503 if the client is not initialized.
    """
    client: RecipeBookClient | None = getattr(request.app.state, "client", None)
    if client is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Recipe API client not available",
        )
    return client


def get_templates(request: Request) -> Jinja2Templates:
    return request.app.state.templates


async def recipe_form(
    name: Annotated[str, Form()] = "",
    description: Annotated[str, Form()] = "",
    instructions: Annotated[str, Form()] = "",
    prep_time: Annotated[str, Form()] = "",
    cook_time: Annotated[str, Form()] = "",
    servings: Annotated[str, Form()] = "",
    ingredient_id: Annotated[list[str] | None, Form()] = None,
    quantity: Annotated[list[str] | None, Form()] = None,
) -> RecipeForm:
    """Collect the submitted recipe form."""
    return RecipeForm.from_fields(
        name=name,
        description=description,
        instructions=instructions,
        prep_time=prep_time,
        cook_time=cook_time,
        servings=servings,
        ingredient_ids=ingredient_id,
        quantities=quantity,
    )


ClientDep = Annotated[RecipeBookClient, Depends(get_client)]
TemplatesDep = Annotated[Jinja2Templates, Depends(get_templates)]
RecipeFormDep = Annotated[RecipeForm, Depends(recipe_form)]
