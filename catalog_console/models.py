"""Data models for catalog entities and their edit drafts."""
from dataclasses import dataclass, fields, replace
from typing import Any, Dict, List


@dataclass
class Author:
    """Author as listed by the store."""
    id: int
    name: str


@dataclass
class Category:
    """Category as listed by the store."""
    id: int
    name: str


@dataclass
class BookRow:
    """Denormalized book representation from the list endpoint."""
    id: int
    title: str
    author_name: str
    category_name: str
    isbn: str


@dataclass
class AuthorDraft:
    """Form state for creating or editing an author."""
    name: str = ""

    REQUIRED = ("name",)

    def to_payload(self) -> Dict[str, Any]:
        return {"name": self.name}


@dataclass
class CategoryDraft:
    """Form state for creating or editing a category."""
    name: str = ""

    REQUIRED = ("name",)

    def to_payload(self) -> Dict[str, Any]:
        return {"name": self.name}


@dataclass
class BookDraft:
    """
    Form state for creating or editing a book.

    ``author`` and ``category`` hold the selected identifier in string form,
    the way a dropdown reports it; "" means nothing is selected.
    """
    title: str = ""
    author: str = ""
    category: str = ""
    isbn: str = ""

    REQUIRED = ("title", "author", "category", "isbn")

    def to_payload(self) -> Dict[str, Any]:
        """Build the wire payload, coercing selections to integers."""
        return {
            "title": self.title,
            "authorId": int(self.author),
            "categoryId": int(self.category),
            "isbn": self.isbn,
        }


def missing_fields(draft) -> List[str]:
    """Names of required draft fields that are empty or whitespace."""
    return [name for name in draft.REQUIRED if not str(getattr(draft, name)).strip()]


def apply_changes(draft, **changes):
    """
    Return a copy of ``draft`` with ``changes`` applied.

    Raises:
        TypeError: If a change names a field the draft does not have
    """
    known = {f.name for f in fields(draft)}
    unknown = sorted(set(changes) - known)
    if unknown:
        raise TypeError(f"{type(draft).__name__} has no field(s): {', '.join(unknown)}")
    return replace(draft, **changes)
