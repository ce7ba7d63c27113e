"""Async client for the hosted store's REST interface."""

import logging
from typing import Any

import httpx

from ..config import Settings
from ..errors import StoreError

logger = logging.getLogger(__name__)


def eq_filters(filters: dict[str, Any] | None) -> dict[str, str]:
    """Translate ``{column: value}`` into equality query parameters."""
    params: dict[str, str] = {}
    for column, value in (filters or {}).items():
        if isinstance(value, bool):
            value = "true" if value else "false"
        params[column] = f"eq.{value}"
    return params


class StoreClient:
    """Thin async wrapper around the store's table and RPC endpoints.

    One instance is created by the application root and passed to every
    repository; it must be closed with ``aclose()`` (or used as an async
    context manager) when the application shuts down.
    """

    def __init__(
        self,
        settings: Settings,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.settings = settings
        self._http = httpx.AsyncClient(
            base_url=settings.rest_url,
            headers={
                "apikey": settings.store_key,
                "Authorization": f"Bearer {settings.store_key}",
                "Content-Type": "application/json",
                "Accept": "application/json",
            },
            timeout=settings.timeout,
            transport=transport,
        )

    async def __aenter__(self) -> "StoreClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """Close the underlying HTTP connection pool."""
        await self._http.aclose()

    async def select(
        self,
        table: str,
        columns: str = "*",
        filters: dict[str, Any] | None = None,
        order: str | None = None,
        descending: bool = False,
        limit: int | None = None,
    ) -> list[dict]:
        """Fetch rows from a table.

        Args:
            table: Table name
            columns: Column list, may include embedded resources such as
                ``*,exercise:exercises(*)``
            filters: Equality filters keyed by column
            order: Column to order by
            descending: Order direction
            limit: Maximum number of rows

        Returns:
            List of row objects
        """
        params = {"select": columns, **eq_filters(filters)}
        if order:
            params["order"] = f"{order}.{'desc' if descending else 'asc'}"
        if limit is not None:
            params["limit"] = str(limit)

        rows = await self._request("GET", f"/{table}", params=params)
        if not isinstance(rows, list):
            raise StoreError(f"Expected a list of rows from '{table}'")
        return rows

    async def insert(self, table: str, row: dict) -> dict:
        """Insert one row and return it as stored."""
        rows = await self._request(
            "POST",
            f"/{table}",
            json=[row],
            headers={"Prefer": "return=representation"},
        )
        if not isinstance(rows, list) or len(rows) != 1:
            raise StoreError(f"Expected exactly one inserted row from '{table}'")
        return rows[0]

    async def delete(self, table: str, filters: dict[str, Any]) -> None:
        """Delete the rows matching ``filters``.

        An empty filter would delete the whole table and is refused.
        """
        if not filters:
            raise ValueError("delete() requires at least one filter")
        await self._request(
            "DELETE",
            f"/{table}",
            params=eq_filters(filters),
            headers={"Prefer": "return=minimal"},
        )

    async def rpc(self, function: str, params: dict[str, Any]) -> Any:
        """Call a stored procedure and return its decoded result."""
        return await self._request("POST", f"/rpc/{function}", json=params)

    async def _request(self, method: str, path: str, **kwargs) -> Any:
        logger.debug("%s %s %s", method, path, kwargs.get("params", ""))
        try:
            response = await self._http.request(method, path, **kwargs)
        except httpx.HTTPError as e:
            logger.warning("Store request %s %s failed: %s", method, path, e)
            raise StoreError(f"Store request failed: {e}") from e

        if response.is_error:
            message = _error_message(response)
            logger.warning(
                "Store returned %s for %s %s: %s",
                response.status_code,
                method,
                path,
                message,
            )
            raise StoreError(message, status_code=response.status_code)

        if response.status_code == 204 or not response.content:
            return None

        try:
            return response.json()
        except ValueError as e:
            raise StoreError(
                f"Invalid JSON from store for {method} {path}",
                status_code=response.status_code,
            ) from e


def _error_message(response: httpx.Response) -> str:
    """Extract a readable message from an error response."""
    try:
        body = response.json()
    except ValueError:
        return response.text or response.reason_phrase
    if isinstance(body, dict):
        return str(body.get("message") or body.get("error") or body)
    return str(body)
