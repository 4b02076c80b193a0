"""Local snapshot of one catalog collection."""
import logging
from typing import Any, List, Optional

from catalog_console.errors import CatalogError

logger = logging.getLogger(__name__)


class EntityListStore:
    """
    Holds the local copy of a collection, replaced wholesale on every reload.

    There is no incremental patch path: every mutation is followed by a
    full ``reload()``. Reloads are not coalesced, so when several are in
    flight the last response to arrive wins, and the first one to finish
    already resets ``loading`` while the others are still pending.
    """

    def __init__(self, client):
        """
        Args:
            client: AsyncEntityClient (or anything with an awaitable ``list``)
        """
        self.client = client
        self.entity = client.entity
        self.items: List[Any] = []
        self.loading = False
        self.last_error: Optional[str] = None

    async def reload(self) -> bool:
        """
        Re-fetch the collection from the store.

        Returns:
            True if ``items`` was replaced, False if the fetch failed
        """
        self.loading = True
        try:
            items = await self.client.list()
        except CatalogError as e:
            # Keep the stale list visible
            logger.warning(f"Reload of {self.entity.key} failed: {e}")
            self.last_error = self.entity.fetch_error
            return False
        finally:
            self.loading = False

        self.items = self.entity.order(items)
        self.last_error = None
        return True

    def get(self, entity_id: int) -> Optional[Any]:
        """Row with the given id, or None."""
        for item in self.items:
            if item.id == entity_id:
                return item
        return None

    def __len__(self) -> int:
        return len(self.items)
