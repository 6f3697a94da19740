"""Recipe Book API HTTP client.

Async client for the REST API with a bounded per-attempt timeout and
exponential-backoff retries:

- 2xx succeeds immediately (204 yields ``None``)
- 4xx other than 429 fails immediately and is never retried
- 429, 5xx, timeouts and transport failures are retried; the delay before
  retry ``k`` (0-indexed) is ``retry_delay * 2**k`` seconds, without jitter
- once the budget is spent the last classified error is raised

Retried writes have at-least-once semantics; there is no deduplication.
"""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING, Any

import httpx
import orjson

from recipe_book.clients.recipe_book.exceptions import ClientError, parse_error_body
from recipe_book.core.config import get_settings
from recipe_book.observability.logging import get_logger
from recipe_book.schemas.common import HealthResponse
from recipe_book.schemas.enums import ErrorKind
from recipe_book.schemas.ingredient import IngredientRead
from recipe_book.schemas.recipe import RecipeDetail, RecipeSummary


if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable, Mapping

    from recipe_book.core.config.settings import ClientSettings


logger = get_logger(__name__)


class RecipeBookClient:
    """HTTP client for the Recipe Book API.

    Example:
        ```python
        async with RecipeBookClient("http://127.0.0.1:3001/api") as client:
            recipes = await client.list_recipes()
            detail = await client.get_recipe(recipes[0].id)
        ```
    """

    def __init__(
        self,
        base_url: str | None = None,
        *,
        timeout: float | None = None,
        retries: int | None = None,
        retry_delay: float | None = None,
        settings: ClientSettings | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ) -> None:
        """Initialize the client.

        Args:
            base_url: API root, e.g. ``http://127.0.0.1:3001/api``.
            timeout: Seconds before an attempt is abandoned.
            retries: Additional attempts after the first.
            retry_delay: Base backoff delay in seconds.
            settings: Defaults for anything not passed explicitly.
            transport: Custom httpx transport (tests, ASGI apps).
            sleep: Coroutine used to wait between attempts.
        """
        defaults = settings or get_settings().client
        self.base_url = (base_url or defaults.base_url).rstrip("/")
        self.timeout = defaults.timeout if timeout is None else timeout
        self.retries = defaults.retries if retries is None else retries
        self.retry_delay = defaults.retry_delay if retry_delay is None else retry_delay
        self._transport = transport
        self._sleep = sleep
        self._http_client: httpx.AsyncClient | None = None

    async def initialize(self) -> None:
        """Create the underlying HTTP client."""
        if self._http_client is not None:
            return
        self._http_client = httpx.AsyncClient(
            base_url=self.base_url,
            timeout=httpx.Timeout(self.timeout),
            headers={"Accept": "application/json"},
            transport=self._transport,
        )
        logger.info("RecipeBookClient initialized", base_url=self.base_url)

    async def shutdown(self) -> None:
        """Release resources."""
        if self._http_client is not None:
            await self._http_client.aclose()
            self._http_client = None
        logger.debug("RecipeBookClient shutdown")

    async def __aenter__(self) -> RecipeBookClient:
        await self.initialize()
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.shutdown()

    @property
    def http(self) -> httpx.AsyncClient:
        if self._http_client is None:
            msg = "Client not initialized. Call initialize() first."
            raise RuntimeError(msg)
        return self._http_client

    # =========================================================================
    # Retry loop
    # =========================================================================

    async def request(
        self,
        method: str,
        path: str,
        *,
        json: Any = None,
        params: Mapping[str, Any] | None = None,
        timeout: float | None = None,
        retries: int | None = None,
        retry_delay: float | None = None,
    ) -> Any:
        """Perform a call under the retry policy and return the decoded body.

        Per-call ``timeout``, ``retries`` and ``retry_delay`` override the
        client defaults.

        Returns:
            Decoded JSON, or ``None`` for an empty (204) response.

        Raises:
            ClientError: Classified failure once retries are exhausted, or
                immediately for a non-retryable API error.
        """
        attempt_timeout = self.timeout if timeout is None else timeout
        budget = self.retries if retries is None else retries
        base_delay = self.retry_delay if retry_delay is None else retry_delay
        content = orjson.dumps(json) if json is not None else None

        last_error: ClientError | None = None
        for attempt in range(budget + 1):
            try:
                return await self._attempt(method, path, content, params, attempt_timeout)
            except ClientError as e:
                error = e

            if not error.is_retryable:
                raise error
            # A generic network failure never hides an API or timeout error.
            if last_error is None or error.kind is not ErrorKind.NETWORK:
                last_error = error
            if attempt >= budget:
                break

            delay = base_delay * 2**attempt
            logger.warning(
                "Retrying request",
                method=method,
                path=path,
                attempt=attempt + 1,
                retries=budget,
                delay=delay,
                reason=error.kind.value,
                status_code=error.status_code,
            )
            await self._sleep(delay)

        assert last_error is not None
        logger.error(
            "Request failed",
            method=method,
            path=path,
            kind=last_error.kind.value,
            status_code=last_error.status_code,
            attempts=budget + 1,
        )
        raise last_error

    async def _attempt(
        self,
        method: str,
        path: str,
        content: bytes | None,
        params: Mapping[str, Any] | None,
        timeout: float,
    ) -> Any:
        headers = {"Content-Type": "application/json"} if content is not None else None
        try:
            async with asyncio.timeout(timeout):
                response = await self.http.request(
                    method,
                    path,
                    content=content,
                    params=params,
                    headers=headers,
                    timeout=httpx.Timeout(timeout),
                )
        except (httpx.TimeoutException, TimeoutError) as e:
            raise ClientError.timeout() from e
        except httpx.TransportError as e:
            raise ClientError.network() from e

        if response.is_success:
            if response.status_code == httpx.codes.NO_CONTENT or not response.content:
                return None
            try:
                return orjson.loads(response.content)
            except orjson.JSONDecodeError as e:
                raise ClientError.api(
                    response.status_code, "Invalid response from server", "HTTP_ERROR"
                ) from e

        try:
            body = orjson.loads(response.content) if response.content else None
        except orjson.JSONDecodeError:
            body = None
        raise parse_error_body(response.status_code, body)

    # =========================================================================
    # Recipes
    # =========================================================================

    async def list_recipes(self) -> list[RecipeSummary]:
        body = await self.request("GET", "/recipes")
        return [RecipeSummary.model_validate(item) for item in body["data"]]

    async def get_recipe(self, recipe_id: int) -> RecipeDetail:
        body = await self.request("GET", f"/recipes/{recipe_id}")
        return RecipeDetail.model_validate(body["data"])

    async def create_recipe(self, payload: Mapping[str, Any]) -> RecipeDetail:
        body = await self.request("POST", "/recipes", json=dict(payload))
        return RecipeDetail.model_validate(body["data"])

    async def update_recipe(
        self, recipe_id: int, payload: Mapping[str, Any]
    ) -> RecipeDetail:
        body = await self.request("PUT", f"/recipes/{recipe_id}", json=dict(payload))
        return RecipeDetail.model_validate(body["data"])

    async def delete_recipe(self, recipe_id: int) -> None:
        await self.request("DELETE", f"/recipes/{recipe_id}")

    # =========================================================================
    # Ingredients
    # =========================================================================

    async def list_ingredients(self, search: str | None = None) -> list[IngredientRead]:
        params = {"search": search} if search else None
        body = await self.request("GET", "/ingredients", params=params)
        return [IngredientRead.model_validate(item) for item in body["data"]]

    async def get_ingredient(self, ingredient_id: int) -> IngredientRead:
        body = await self.request("GET", f"/ingredients/{ingredient_id}")
        return IngredientRead.model_validate(body["data"])

    async def create_ingredient(self, payload: Mapping[str, Any]) -> IngredientRead:
        body = await self.request("POST", "/ingredients", json=dict(payload))
        return IngredientRead.model_validate(body["data"])

    async def update_ingredient(
        self, ingredient_id: int, payload: Mapping[str, Any]
    ) -> IngredientRead:
        body = await self.request(
            "PUT", f"/ingredients/{ingredient_id}", json=dict(payload)
        )
        return IngredientRead.model_validate(body["data"])

    async def delete_ingredient(self, ingredient_id: int) -> None:
        await self.request("DELETE", f"/ingredients/{ingredient_id}")

    # =========================================================================
    # Health
    # =========================================================================

    async def health(self) -> HealthResponse:
        body = await self.request("GET", "/health", retries=0)
        return HealthResponse.model_validate(body)
