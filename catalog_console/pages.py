"""Page controllers: one state container per catalog screen."""
import asyncio
import logging
from typing import Any, List, Optional

import httpx

from catalog_console.async_client import AsyncEntityClient
from catalog_console.entities import AUTHORS, BOOKS, CATEGORIES
from catalog_console.errors import CatalogError
from catalog_console.resolver import ReferenceResolver
from catalog_console.session import EditSession
from catalog_console.store import EntityListStore

logger = logging.getLogger(__name__)


def _selected_id(value: str) -> Optional[int]:
    """Dropdown value as an id, or None if it is not an integer."""
    try:
        return int(value)
    except ValueError:
        return None


class EntityPage:
    """
    Wires a list store and an edit session for one collection.

    Errors never escape ``mount``, ``submit`` or ``delete``; they end up in
    ``error`` for the front end to show.
    """

    def __init__(self, client: AsyncEntityClient):
        self.client = client
        self.entity = client.entity
        self.store = EntityListStore(client)
        self.session = self._make_session()

    def _make_session(self) -> EditSession:
        return EditSession(self.client, self.store)

    @property
    def items(self) -> List[Any]:
        return self.store.items

    @property
    def loading(self) -> bool:
        return self.store.loading

    @property
    def error(self) -> Optional[str]:
        """Inline session error first, then the list error."""
        return self.session.error or self.store.last_error

    async def mount(self):
        await self.store.reload()

    def open(self, row=None):
        self.session.open(row)

    def edit(self, **changes):
        self.session.update(**changes)

    def cancel(self):
        self.session.cancel()

    async def submit(self) -> bool:
        """Submit the open session; False if it stayed open."""
        try:
            return await self.session.submit()
        except CatalogError as e:
            logger.warning(f"Saving {self.entity.key} failed: {e}")
            return False

    async def delete(self, entity_id: int):
        """Delete without confirmation, then reload whatever the outcome."""
        await self.client.remove(entity_id)
        await self.store.reload()

    async def close(self):
        await self.client.close()

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()


class AuthorsPage(EntityPage):
    pass


class CategoriesPage(EntityPage):
    pass


class BooksPage(EntityPage):
    """Book screen: its own list plus the author and category reference lists."""

    def __init__(
        self,
        client: AsyncEntityClient,
        authors_client: AsyncEntityClient,
        categories_client: AsyncEntityClient,
    ):
        self.authors = EntityListStore(authors_client)
        self.categories = EntityListStore(categories_client)
        self.resolver = ReferenceResolver(self.authors, self.categories)
        super().__init__(client)

    def _make_session(self) -> EditSession:
        return EditSession(
            self.client,
            self.store,
            prefill=self.resolver.draft_for,
            validators=[self._check_author, self._check_category],
        )

    def _check_author(self, draft) -> Optional[str]:
        author_id = _selected_id(draft.author)
        if author_id is None:
            return f"Autor inválido: {draft.author}"
        if not self.resolver.knows_author(author_id):
            return f"Autor {draft.author} não encontrado."
        return None

    def _check_category(self, draft) -> Optional[str]:
        category_id = _selected_id(draft.category)
        if category_id is None:
            return f"Categoria inválida: {draft.category}"
        if not self.resolver.knows_category(category_id):
            return f"Categoria {draft.category} não encontrada."
        return None

    @property
    def error(self) -> Optional[str]:
        return super().error or self.authors.last_error or self.categories.last_error

    async def mount(self):
        await asyncio.gather(
            self.store.reload(),
            self.authors.reload(),
            self.categories.reload(),
        )

    async def close(self):
        await asyncio.gather(
            self.client.close(),
            self.authors.client.close(),
            self.categories.client.close(),
        )


def open_page(key: str, base_url: str, transport: Optional[httpx.AsyncBaseTransport] = None) -> EntityPage:
    """
    Build the controller for a collection.

    Args:
        key: "books", "authors" or "categories"
        base_url: Store origin
        transport: Optional httpx transport shared by every client

    Returns:
        Unmounted page controller
    """
    def client_for(entity):
        return AsyncEntityClient(entity, base_url, transport=transport)

    if key == BOOKS.key:
        return BooksPage(client_for(BOOKS), client_for(AUTHORS), client_for(CATEGORIES))
    if key == AUTHORS.key:
        return AuthorsPage(client_for(AUTHORS))
    if key == CATEGORIES.key:
        return CategoriesPage(client_for(CATEGORIES))
    raise ValueError(f"Unknown collection: {key}")
