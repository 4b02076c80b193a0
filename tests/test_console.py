"""Tests for the console CLI."""
import csv
import json
from unittest.mock import MagicMock, patch

import httpx
import pytest

import console
from catalog_console.models import Category
from catalog_console.pages import open_page


@pytest.fixture
def wired(server):
    """Route the CLI's page controllers to the fake store."""

    def _open(key, base_url):
        return open_page(key, base_url, transport=server.transport())

    with patch.object(console, "open_page", side_effect=_open):
        yield server


@pytest.fixture
def sync_categories():
    """Blocking client returning categories out of order."""
    client = MagicMock()
    client.__enter__.return_value.list.return_value = [Category(2, "Fiction"), Category(1, "Essay")]

    with patch.object(console, "EntityClient", return_value=client) as factory:
        yield factory


def run(argv):
    with pytest.raises(SystemExit) as excinfo:
        console.main(argv)
    return excinfo.value.code


def test_no_command_prints_help(capsys):
    assert run([]) == 1
    assert "usage" in capsys.readouterr().out


def test_list_sync_sorts_categories(sync_categories, capsys):
    assert run(["--api-url", "http://catalog.test", "list", "categories", "--format", "compact"]) == 0

    assert capsys.readouterr().out.splitlines() == ["1. Essay", "2. Fiction"]
    assert sync_categories.call_args.args[1] == "http://catalog.test"


def test_list_async_table(wired, capsys):
    assert run(["list", "books", "--async"]) == 0

    out = capsys.readouterr().out
    assert "author_name" in out
    assert "Orwell" in out


def test_list_async_reports_fetch_error(wired):
    wired.fail("GET", "/api/authors", httpx.ConnectError("Connection refused"))

    assert run(["list", "authors", "--async"]) == 1


def test_add_author(wired):
    assert run(["add", "authors", "--name", "Atwood"]) == 0

    assert ("POST", "/api/authors", {"name": "Atwood"}) in wired.requests


def test_add_book_missing_fields_sends_nothing(wired):
    assert run(["add", "books", "--title", "Animal Farm", "--author-id", "1"]) == 1

    assert wired.calls("POST") == []


def test_add_author_rejects_book_fields(wired):
    assert run(["add", "authors", "--title", "1984"]) == 1

    assert wired.calls("POST") == []


def test_edit_book_keeps_resolved_references(wired, capsys):
    assert run(["edit", "books", "5", "--isbn", "222"]) == 0

    assert ("PUT", "/api/books/5", {"title": "1984", "authorId": 1, "categoryId": 2, "isbn": "222"}) in wired.requests
    assert "222" in capsys.readouterr().out


def test_edit_unknown_id(wired):
    assert run(["edit", "books", "99", "--isbn", "1"]) == 1

    assert wired.calls("PUT") == []


def test_edit_rejected(wired):
    wired.fail("PUT", "/api/categories/2", httpx.Response(409, text="exists"))

    assert run(["edit", "categories", "2", "--name", "Essay"]) == 1


def test_delete_shows_remaining(wired, capsys):
    assert run(["delete", "authors", "1"]) == 0

    out = capsys.readouterr().out
    assert "Huxley" in out
    assert "Orwell" not in out


def test_export_json_to_file(sync_categories, tmp_path):
    output = tmp_path / "categories.json"

    assert run(["export", "categories", "--output", str(output)]) == 0

    assert json.loads(output.read_text(encoding="utf-8")) == [
        {"id": 1, "name": "Essay"},
        {"id": 2, "name": "Fiction"},
    ]


def test_export_csv(sync_categories, tmp_path):
    output = tmp_path / "categories.csv"

    assert run(["export", "categories", "--format", "csv", "--output", str(output)]) == 0

    with open(output, newline="", encoding="utf-8") as f:
        rows = list(csv.reader(f))
    assert rows == [["id", "name"], ["1", "Essay"], ["2", "Fiction"]]
