"""Parse and normalize catalog store responses."""
import json
from typing import Any, Callable, Dict, List, Optional, TypeVar

from catalog_console.errors import DecodeError
from catalog_console.models import Author, BookRow, Category

T = TypeVar("T")


def decode_json(text: str) -> Any:
    """
    Decode a response body.

    Args:
        text: Raw response body

    Returns:
        Decoded JSON value

    Raises:
        DecodeError: If the body is not valid JSON
    """
    try:
        return json.loads(text)
    except ValueError as e:
        raise DecodeError(f"Invalid JSON body: {e}") from e


def parse_author(item: Dict[str, Any]) -> Author:
    """Parse a single author entry."""
    return Author(id=int(item["id"]), name=str(item["name"]))


def parse_category(item: Dict[str, Any]) -> Category:
    """Parse a single category entry."""
    return Category(id=int(item["id"]), name=str(item["name"]))


def parse_book_row(item: Dict[str, Any]) -> BookRow:
    """
    Parse a single book from the list endpoint.

    Args:
        item: Denormalized book entry (authorName/categoryName, no ids)

    Returns:
        BookRow
    """
    return BookRow(
        id=int(item["id"]),
        title=str(item["title"]),
        author_name=str(item.get("authorName") or ""),
        category_name=str(item.get("categoryName") or ""),
        isbn=str(item.get("isbn") or ""),
    )


def parse_collection(data: Any, parse_item: Callable[[Dict[str, Any]], T]) -> List[T]:
    """
    Parse a full collection response.

    Args:
        data: Decoded JSON body of a list request
        parse_item: Parser for a single entry

    Returns:
        Parsed entries, in server order

    Raises:
        DecodeError: If the body is not an array or an entry is malformed
    """
    if not isinstance(data, list):
        raise DecodeError(f"Expected a JSON array, got {type(data).__name__}")

    items = []
    for index, entry in enumerate(data):
        try:
            items.append(parse_item(entry))
        except (KeyError, TypeError, ValueError) as e:
            raise DecodeError(f"Malformed entry at index {index}: {e!r}") from e

    return items


def parse_created(data: Any, parse_item: Callable[[Dict[str, Any]], T]) -> Optional[T]:
    """Parse the body of a create response; ``None`` if it is not an entry."""
    if not isinstance(data, dict):
        return None
    try:
        return parse_item(data)
    except (KeyError, TypeError, ValueError):
        return None


def sort_by_id(items: List[T]) -> List[T]:
    """Order entries ascending by id."""
    return sorted(items, key=lambda item: item.id)
