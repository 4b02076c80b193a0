"""Blocking HTTP client for one catalog collection."""
import logging
from typing import Any, Dict, List, Optional

import requests

from catalog_console.entities import EntityType
from catalog_console.errors import TransportError, create_rejection, rejection_for, update_rejection
from catalog_console.parse import decode_json, parse_collection, parse_created

logger = logging.getLogger(__name__)


class EntityClient:
    """Blocking counterpart of AsyncEntityClient, used by one-shot CLI commands."""

    def __init__(self, entity: EntityType, base_url: str):
        """
        Initialize catalog client.

        Args:
            entity: Collection descriptor
            base_url: Store origin, e.g. http://localhost:8080
        """
        self.entity = entity
        self.base_url = base_url.rstrip("/")

        # Create session for connection pooling
        self.session = requests.Session()

    def _url(self, entity_id: Optional[int] = None) -> str:
        url = f"{self.base_url}{self.entity.path}"
        if entity_id is not None:
            url = f"{url}/{entity_id}"
        return url

    def _send(self, method: str, url: str, payload: Optional[Dict[str, Any]] = None) -> requests.Response:
        """
        Make a single HTTP request.

        Args:
            method: HTTP verb
            url: Request URL
            payload: Optional JSON body

        Returns:
            The response, whatever its status

        Raises:
            TransportError: On connection errors
        """
        try:
            logger.debug(f"{method} {url}")
            return self.session.request(method, url, json=payload, timeout=None)
        except requests.exceptions.RequestException as e:
            logger.error(f"{method} {url} failed: {e}")
            raise TransportError(str(e) or type(e).__name__) from e

    def list(self) -> List[Any]:
        """
        Fetch the whole collection.

        Returns:
            Parsed rows in server order
        """
        response = self._send("GET", self._url())
        if not response.ok:
            logger.warning(f"Status {response.status_code} listing {self.entity.key}")
            raise rejection_for(response.status_code, self.entity.fetch_error, response.text)

        items = parse_collection(decode_json(response.text), self.entity.parse_item)
        logger.info(f"Fetched {len(items)} {self.entity.key}")
        return items

    def create(self, payload: Dict[str, Any]) -> Optional[Any]:
        """Create an entry; see AsyncEntityClient.create."""
        response = self._send("POST", self._url(), payload)
        if not response.ok:
            logger.warning(f"Create {self.entity.key} rejected ({response.status_code}): {response.text}")
            raise create_rejection(response.status_code, response.text, self.entity.create_error)

        try:
            return parse_created(response.json(), self.entity.parse_item)
        except ValueError:
            return None

    def update(self, entity_id: int, payload: Dict[str, Any]) -> None:
        """Replace an entry; see AsyncEntityClient.update."""
        response = self._send("PUT", self._url(entity_id), payload)
        if not response.ok:
            logger.warning(f"Update {self.entity.key}/{entity_id} rejected ({response.status_code})")
            raise update_rejection(response.status_code, response.text, self.entity.update_error)

    def remove(self, entity_id: int) -> None:
        """Delete an entry, fire-and-forget."""
        try:
            response = self._send("DELETE", self._url(entity_id))
        except TransportError as e:
            logger.warning(f"Delete {self.entity.key}/{entity_id} not confirmed: {e}")
            return

        if not response.ok:
            logger.warning(f"Delete {self.entity.key}/{entity_id} returned {response.status_code}")

    def close(self):
        """Close the session."""
        self.session.close()

    def __enter__(self):
        """Context manager entry."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit."""
        self.close()
