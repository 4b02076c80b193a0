"""Tests for name -> id reference resolution."""
from types import SimpleNamespace

from catalog_console.models import Author, BookDraft, BookRow, Category
from catalog_console.resolver import ReferenceResolver, name_to_id


def _resolver(authors, categories):
    return ReferenceResolver(SimpleNamespace(items=authors), SimpleNamespace(items=categories))


def test_name_to_id_first_match():
    """Duplicate names resolve to the first entry."""
    authors = [Author(4, "Smith"), Author(7, "Smith")]

    assert name_to_id(authors, "Smith") == 4


def test_name_to_id_exact_match_only():
    authors = [Author(1, "Orwell")]

    assert name_to_id(authors, "orwell") is None
    assert name_to_id([], "Orwell") is None


def test_draft_for_preselects_references():
    resolver = _resolver([Author(1, "Orwell")], [Category(2, "Fiction")])
    book = BookRow(5, "1984", "Orwell", "Fiction", "111")

    assert resolver.draft_for(book) == BookDraft(title="1984", author="1", category="2", isbn="111")


def test_draft_for_unknown_author_gives_empty_selection():
    resolver = _resolver([Author(1, "Orwell")], [Category(2, "Fiction")])
    book = BookRow(6, "Dune", "Herbert", "Fiction", "333")

    draft = resolver.draft_for(book)

    assert draft.author == ""
    assert draft.category == "2"


def test_draft_for_before_lists_load():
    resolver = _resolver([], [])

    draft = resolver.draft_for(BookRow(5, "1984", "Orwell", "Fiction", "111"))

    assert (draft.author, draft.category) == ("", "")


def test_knows_reference_is_best_effort():
    resolver = _resolver([Author(1, "Orwell")], [])

    assert resolver.knows_author(1)
    assert not resolver.knows_author(2)
    # Nothing loaded, nothing to rule out
    assert resolver.knows_category(42)
