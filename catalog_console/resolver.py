"""Name/identifier mapping between book rows and their references."""
from typing import Iterable, Optional

from catalog_console.models import BookDraft


def name_to_id(entries: Iterable, name: str) -> Optional[int]:
    """
    Find the id of the first entry with exactly this name.

    Args:
        entries: Loaded authors or categories
        name: Display name from a denormalized book row

    Returns:
        The id, or None if no entry matches
    """
    for entry in entries:
        if entry.name == name:
            return entry.id
    return None


class ReferenceResolver:
    """
    Resolves a book's author/category names against the reference stores.

    The list endpoint only carries names, so pre-selecting the edit form is
    done by name. A name that matches nothing, or a list that has not loaded
    yet, gives an empty selection.
    """

    def __init__(self, authors, categories):
        """
        Args:
            authors: EntityListStore of authors
            categories: EntityListStore of categories
        """
        self.authors = authors
        self.categories = categories

    def author_id(self, name: str) -> Optional[int]:
        return name_to_id(self.authors.items, name)

    def category_id(self, name: str) -> Optional[int]:
        return name_to_id(self.categories.items, name)

    def draft_for(self, book) -> BookDraft:
        """Edit draft for a listed book, with references pre-selected."""
        author_id = self.author_id(book.author_name)
        category_id = self.category_id(book.category_name)
        return BookDraft(
            title=book.title,
            author=str(author_id) if author_id is not None else "",
            category=str(category_id) if category_id is not None else "",
            isbn=book.isbn,
        )

    def knows_author(self, author_id: int) -> bool:
        """Best-effort: an unloaded list cannot rule anything out."""
        items = self.authors.items
        return not items or any(a.id == author_id for a in items)

    def knows_category(self, category_id: int) -> bool:
        items = self.categories.items
        return not items or any(c.id == category_id for c in items)
