"""Async HTTP client for one catalog collection."""
import logging
from typing import Any, Dict, List, Optional

import httpx

from catalog_console.entities import EntityType
from catalog_console.errors import TransportError, create_rejection, rejection_for, update_rejection
from catalog_console.parse import decode_json, parse_collection, parse_created

logger = logging.getLogger(__name__)


class AsyncEntityClient:
    """Async client for list/create/update/delete on one collection.

    Every call is attempted exactly once. No timeout is applied; requests
    resolve or fail as the transport decides.

    Example:
        >>> async with AsyncEntityClient(BOOKS, "http://localhost:8080") as client:
        ...     books = await client.list()
    """

    def __init__(
        self,
        entity: EntityType,
        base_url: str,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize async client.

        Args:
            entity: Collection descriptor
            base_url: Store origin, e.g. http://localhost:8080
            transport: Optional httpx transport (tests inject a MockTransport)
        """
        self.entity = entity
        self.base_url = base_url.rstrip("/")
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    def _get_client(self) -> httpx.AsyncClient:
        """Get or create the underlying httpx client."""
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                timeout=None,
                transport=self._transport,
            )
        return self._client

    def _item_path(self, entity_id: int) -> str:
        return f"{self.entity.path}/{entity_id}"

    async def _send(self, method: str, path: str, payload: Optional[Dict[str, Any]] = None) -> httpx.Response:
        """Issue one request, mapping network failures to TransportError."""
        client = self._get_client()
        try:
            logger.debug(f"{method} {self.base_url}{path}")
            return await client.request(method, path, json=payload)
        except httpx.HTTPError as e:
            logger.error(f"{method} {path} failed: {e}")
            raise TransportError(str(e) or type(e).__name__) from e

    async def list(self) -> List[Any]:
        """
        Fetch the whole collection.

        Returns:
            Parsed rows in server order

        Raises:
            TransportError: Store unreachable
            DecodeError: Body is not a JSON array of rows
            ServerRejection: Non-success status
        """
        response = await self._send("GET", self.entity.path)
        if not response.is_success:
            logger.warning(f"Status {response.status_code} listing {self.entity.key}")
            raise rejection_for(response.status_code, self.entity.fetch_error, response.text)

        items = parse_collection(decode_json(response.text), self.entity.parse_item)
        logger.info(f"Fetched {len(items)} {self.entity.key}")
        return items

    async def create(self, payload: Dict[str, Any]) -> Optional[Any]:
        """
        Create an entry.

        Args:
            payload: Wire payload

        Returns:
            The created row when the store echoes it back, else None

        Raises:
            ServerRejection: Non-success status, message taken from the body
            TransportError: Store unreachable
        """
        response = await self._send("POST", self.entity.path, payload)
        if not response.is_success:
            logger.warning(f"Create {self.entity.key} rejected ({response.status_code}): {response.text}")
            raise create_rejection(response.status_code, response.text, self.entity.create_error)

        try:
            return parse_created(response.json(), self.entity.parse_item)
        except ValueError:
            return None

    async def update(self, entity_id: int, payload: Dict[str, Any]) -> None:
        """
        Replace an entry.

        Raises:
            ServerRejection: Non-success status, always with the fixed update message
            TransportError: Store unreachable
        """
        response = await self._send("PUT", self._item_path(entity_id), payload)
        if not response.is_success:
            logger.warning(f"Update {self.entity.key}/{entity_id} rejected ({response.status_code})")
            raise update_rejection(response.status_code, response.text, self.entity.update_error)

    async def remove(self, entity_id: int) -> None:
        """
        Delete an entry, fire-and-forget.

        Failures are logged and never reach the caller.
        """
        try:
            response = await self._send("DELETE", self._item_path(entity_id))
        except TransportError as e:
            logger.warning(f"Delete {self.entity.key}/{entity_id} not confirmed: {e}")
            return

        if not response.is_success:
            logger.warning(f"Delete {self.entity.key}/{entity_id} returned {response.status_code}")

    async def close(self):
        """Close the HTTP client."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self):
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit."""
        await self.close()
