"""Per-entity descriptors.

Each descriptor bundles what differs between the three collections: the
endpoint, how rows are parsed and ordered, which draft the edit form uses,
and the messages shown to the user.
"""
from dataclasses import dataclass
from typing import Any, Callable, Dict, List

from catalog_console.models import AuthorDraft, BookDraft, CategoryDraft
from catalog_console.parse import parse_author, parse_book_row, parse_category, sort_by_id


def _server_order(items: List[Any]) -> List[Any]:
    return list(items)


@dataclass(frozen=True)
class EntityType:
    """Static description of one catalog collection."""
    key: str
    path: str
    parse_item: Callable[[Dict[str, Any]], Any]
    draft_type: type
    order: Callable[[List[Any]], List[Any]]
    fetch_error: str
    create_error: str
    update_error: str
    save_error: str
    missing_fields_error: str

    def draft_from(self, row) -> Any:
        """Pre-populate a draft from a listed row (name-only entities)."""
        return self.draft_type(name=row.name)


AUTHORS = EntityType(
    key="authors",
    path="/api/authors",
    parse_item=parse_author,
    draft_type=AuthorDraft,
    order=_server_order,
    fetch_error="Erro ao buscar autores.",
    create_error="Erro ao criar autor",
    update_error="Erro ao atualizar autor",
    save_error="Erro ao salvar autor.",
    missing_fields_error="Por favor, preencha o nome antes de salvar.",
)

# Categories are the only collection re-sorted client side.
CATEGORIES = EntityType(
    key="categories",
    path="/api/categories",
    parse_item=parse_category,
    draft_type=CategoryDraft,
    order=sort_by_id,
    fetch_error="Erro ao buscar categorias.",
    create_error="Erro ao criar categoria",
    update_error="Erro ao atualizar categoria",
    save_error="Erro ao salvar categoria.",
    missing_fields_error="Por favor, preencha o nome antes de salvar.",
)

BOOKS = EntityType(
    key="books",
    path="/api/books",
    parse_item=parse_book_row,
    draft_type=BookDraft,
    order=_server_order,
    fetch_error="Erro ao buscar livros.",
    create_error="Erro ao criar livro",
    update_error="Erro ao atualizar livro",
    save_error="Erro ao salvar livro.",
    missing_fields_error="Por favor, preencha todos os campos antes de salvar.",
)

ENTITY_TYPES = {entity.key: entity for entity in (BOOKS, AUTHORS, CATEGORIES)}
