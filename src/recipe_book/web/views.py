"""Server-rendered pages.

Every page talks to the REST API through ``RecipeBookClient``; API failures
are shown with ``user_friendly_message`` next to a retry link.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Annotated, Any

from fastapi import APIRouter, Form, Request, status
from fastapi.responses import HTMLResponse, RedirectResponse

from recipe_book.clients.recipe_book import ClientError, user_friendly_message
from recipe_book.observability.logging import get_logger
from recipe_book.schemas.enums import ErrorKind
from recipe_book.services.categories import group_by_category
from recipe_book.services.scaling import PortionCalculator
from recipe_book.web.dependencies import (  # noqa: TC001
    ClientDep,
    RecipeFormDep,
    TemplatesDep,
)
from recipe_book.web.forms import RecipeForm


if TYPE_CHECKING:
    from fastapi.templating import Jinja2Templates

    from recipe_book.clients.recipe_book import RecipeBookClient


logger = get_logger(__name__)

router = APIRouter()


def _render(
    templates: Jinja2Templates,
    request: Request,
    name: str,
    context: dict[str, Any],
    status_code: int = status.HTTP_200_OK,
) -> HTMLResponse:
    return templates.TemplateResponse(request, name, context, status_code=status_code)


def _error_status(error: ClientError) -> int:
    match error.kind:
        case ErrorKind.NOT_FOUND:
            return status.HTTP_404_NOT_FOUND
        case ErrorKind.NETWORK | ErrorKind.TIMEOUT:
            return status.HTTP_503_SERVICE_UNAVAILABLE
        case _:
            return status.HTTP_502_BAD_GATEWAY


# =============================================================================
# Recipe list
# =============================================================================


@router.get("/", response_class=HTMLResponse, name="recipe_list")
async def recipe_list(
    request: Request,
    client: ClientDep,
    templates: TemplatesDep,
) -> HTMLResponse:
    """Recipe cards, an empty state, or an error with a retry link."""
    recipes = []
    error = None
    try:
        recipes = await client.list_recipes()
    except ClientError as e:
        error = user_friendly_message(e)

    return _render(
        templates,
        request,
        "recipes/list.html",
        {"recipes": recipes, "error": error},
    )


# =============================================================================
# Create / edit form
# =============================================================================


async def _render_form(
    request: Request,
    client: RecipeBookClient,
    templates: Jinja2Templates,
    *,
    form: RecipeForm,
    recipe_id: int | None = None,
    errors: dict[str, str] | None = None,
    status_code: int = status.HTTP_200_OK,
) -> HTMLResponse:
    fetch_error = None
    catalogue = []
    try:
        catalogue = await client.list_ingredients()
    except ClientError as e:
        fetch_error = user_friendly_message(e)

    if not form.rows or not form.rows[-1].is_blank:
        form = form.with_blank_row()

    return _render(
        templates,
        request,
        "recipes/form.html",
        {
            "form": form,
            "recipe_id": recipe_id,
            "is_edit": recipe_id is not None,
            "catalogue": catalogue,
            "errors": errors or {},
            "fetch_error": fetch_error,
        },
        status_code=status_code,
    )


async def _submit_form(
    request: Request,
    client: RecipeBookClient,
    templates: Jinja2Templates,
    *,
    form: RecipeForm,
    action: str,
    recipe_id: int | None = None,
) -> HTMLResponse | RedirectResponse:
    if action == "add_row":
        return await _render_form(
            request, client, templates, form=form.with_blank_row(), recipe_id=recipe_id
        )

    errors = form.validate()
    if errors:
        return await _render_form(
            request,
            client,
            templates,
            form=form,
            recipe_id=recipe_id,
            errors=errors,
            status_code=status.HTTP_400_BAD_REQUEST,
        )

    payload = form.to_payload()
    try:
        if recipe_id is None:
            saved = await client.create_recipe(payload)
        else:
            saved = await client.update_recipe(recipe_id, payload)
    except ClientError as e:
        # Field details go next to their inputs, anything else on top
        field_errors = e.field_errors()
        if not field_errors:
            field_errors = {"general": user_friendly_message(e)}
        return await _render_form(
            request,
            client,
            templates,
            form=form,
            recipe_id=recipe_id,
            errors=field_errors,
            status_code=e.status_code or status.HTTP_503_SERVICE_UNAVAILABLE,
        )

    logger.info("Recipe saved from form", recipe_id=saved.id, created=recipe_id is None)
    return RedirectResponse(
        request.url_for("recipe_detail", recipe_id=saved.id),
        status_code=status.HTTP_303_SEE_OTHER,
    )


@router.get("/recipes/new", response_class=HTMLResponse, name="recipe_new")
async def recipe_new(
    request: Request,
    client: ClientDep,
    templates: TemplatesDep,
) -> HTMLResponse:
    return await _render_form(request, client, templates, form=RecipeForm())


@router.post("/recipes/new", name="recipe_create", response_model=None)
async def recipe_create(
    request: Request,
    client: ClientDep,
    templates: TemplatesDep,
    form: RecipeFormDep,
    action: Annotated[str, Form()] = "save",
) -> HTMLResponse | RedirectResponse:
    return await _submit_form(request, client, templates, form=form, action=action)


@router.get("/recipes/{recipe_id}/edit", response_class=HTMLResponse, name="recipe_edit")
async def recipe_edit(
    request: Request,
    recipe_id: int,
    client: ClientDep,
    templates: TemplatesDep,
) -> HTMLResponse:
    try:
        recipe = await client.get_recipe(recipe_id)
    except ClientError as e:
        return _render(
            templates,
            request,
            "error.html",
            {"message": user_friendly_message(e), "retry_url": request.url.path},
            status_code=_error_status(e),
        )
    return await _render_form(
        request, client, templates, form=RecipeForm.from_recipe(recipe), recipe_id=recipe_id
    )


@router.post("/recipes/{recipe_id}/edit", name="recipe_update", response_model=None)
async def recipe_update(
    request: Request,
    recipe_id: int,
    client: ClientDep,
    templates: TemplatesDep,
    form: RecipeFormDep,
    action: Annotated[str, Form()] = "save",
) -> HTMLResponse | RedirectResponse:
    return await _submit_form(
        request, client, templates, form=form, action=action, recipe_id=recipe_id
    )


# =============================================================================
# Detail with portion calculator
# =============================================================================


@router.get("/recipes/{recipe_id}", response_class=HTMLResponse, name="recipe_detail")
async def recipe_detail(
    request: Request,
    recipe_id: int,
    client: ClientDep,
    templates: TemplatesDep,
    servings: str | None = None,
    prev: str | None = None,
) -> HTMLResponse:
    """Recipe page; ``servings`` drives the portion calculator.

    Invalid ``servings`` input keeps the previous value carried in ``prev``.
    """
    try:
        recipe = await client.get_recipe(recipe_id)
    except ClientError as e:
        return _render(
            templates,
            request,
            "error.html",
            {"message": user_friendly_message(e), "retry_url": request.url.path},
            status_code=_error_status(e),
        )

    calculator = PortionCalculator.for_recipe(recipe.servings)
    if prev is not None:
        calculator = calculator.set_servings(prev)
    if servings is not None:
        calculator = calculator.set_servings(servings)
    scaled = calculator.scale(recipe.ingredients)

    return _render(
        templates,
        request,
        "recipes/detail.html",
        {
            "recipe": recipe,
            "calculator": calculator,
            "scaled": scaled,
            "groups": group_by_category(scaled),
        },
    )


@router.post("/recipes/{recipe_id}/delete", name="recipe_delete", response_model=None)
async def recipe_delete(
    request: Request,
    recipe_id: int,
    client: ClientDep,
    templates: TemplatesDep,
) -> HTMLResponse | RedirectResponse:
    try:
        await client.delete_recipe(recipe_id)
    except ClientError as e:
        return _render(
            templates,
            request,
            "error.html",
            {
                "message": user_friendly_message(e),
                "retry_url": str(request.url_for("recipe_detail", recipe_id=recipe_id)),
            },
            status_code=_error_status(e),
        )
    logger.info("Recipe deleted from web", recipe_id=recipe_id)
    return RedirectResponse(
        request.url_for("recipe_list"), status_code=status.HTTP_303_SEE_OTHER
    )
