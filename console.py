#!/usr/bin/env python3
"""Catalog Console CLI - books, authors and categories against a REST store."""
import argparse
import asyncio
import csv
import json
import logging
import sys
from dataclasses import asdict, fields
from tabulate import tabulate
from catalog_console.client import EntityClient
from catalog_console.config import Config
from catalog_console.entities import ENTITY_TYPES
from catalog_console.pages import open_page

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

# CLI flag -> draft field
DRAFT_FLAGS = {
    "name": "name",
    "title": "title",
    "author_id": "author",
    "category_id": "category",
    "isbn": "isbn",
}


def draft_changes(args) -> dict:
    """Draft fields given on the command line."""
    return {
        field: getattr(args, flag)
        for flag, field in DRAFT_FLAGS.items()
        if getattr(args, flag, None) is not None
    }


def display_rows(items, format_type: str):
    """Display catalog rows in specified format."""
    if not items:
        print("No entries found.")
        return

    if format_type == "table":
        headers = [f.name for f in fields(items[0])]
        rows = [
            [
                value[:50] + "..." if isinstance(value, str) and len(value) > 50 else value
                for value in asdict(item).values()
            ]
            for item in items
        ]
        print("\n" + tabulate(rows, headers=headers, tablefmt="grid"))

    elif format_type == "json":
        print(json.dumps([asdict(item) for item in items], indent=2, ensure_ascii=False))

    elif format_type == "compact":
        for item in items:
            label = getattr(item, "title", None) or getattr(item, "name", "")
            print(f"{item.id}. {label}")


def list_entries_sync(args, config: Config) -> int:
    """List a collection with the blocking client."""
    entity = ENTITY_TYPES[args.entity]

    with EntityClient(entity, config.API_URL) as client:
        items = entity.order(client.list())

    display_rows(items, args.format)
    return 0


async def list_entries_async(args, config: Config) -> int:
    """List a collection through its page controller."""
    async with open_page(args.entity, config.API_URL) as page:
        await page.mount()

        if page.error:
            logger.error(f"❌ {page.error}")
            return 1

        display_rows(page.items, args.format)
        return 0


async def _submit(page, changes: dict) -> int:
    page.edit(**changes)
    if not await page.submit():
        logger.error(f"❌ {page.error}")
        page.cancel()
        return 1

    logger.info(f"✅ Saved {page.entity.key}")
    display_rows(page.items, "table")
    return 0


async def add_entry(args, config: Config) -> int:
    """Create an entry through a create session."""
    async with open_page(args.entity, config.API_URL) as page:
        await page.mount()
        page.open()
        return await _submit(page, draft_changes(args))


async def edit_entry(args, config: Config) -> int:
    """Edit an entry through an edit session pre-filled from the listed row."""
    async with open_page(args.entity, config.API_URL) as page:
        await page.mount()

        row = page.store.get(args.id)
        if row is None:
            logger.error(f"❌ {page.error or f'No {args.entity} with id {args.id}'}")
            return 1

        page.open(row)
        return await _submit(page, draft_changes(args))


async def delete_entry(args, config: Config) -> int:
    """Delete an entry and show the reloaded list."""
    async with open_page(args.entity, config.API_URL) as page:
        await page.delete(args.id)

        if page.error:
            logger.error(f"❌ {page.error}")
            return 1

        display_rows(page.items, "table")
        return 0


def export_data(args, config: Config) -> int:
    """Export a collection to JSON or CSV."""
    entity = ENTITY_TYPES[args.entity]

    with EntityClient(entity, config.API_URL) as client:
        items = entity.order(client.list())

    if args.format == "json":
        data = [asdict(item) for item in items]

        if args.output:
            with open(args.output, 'w', encoding='utf-8') as f:
                json.dump(data, f, indent=2, ensure_ascii=False)
            logger.info(f"✅ Exported {len(items)} {entity.key} to {args.output}")
        else:
            print(json.dumps(data, indent=2, ensure_ascii=False))

    elif args.format == "csv":
        output_file = args.output or f"{entity.key}_export.csv"
        with open(output_file, 'w', newline='', encoding='utf-8') as f:
            writer = csv.writer(f)
            if items:
                writer.writerow([f.name for f in fields(items[0])])
            for item in items:
                writer.writerow(list(asdict(item).values()))

        logger.info(f"✅ Exported {len(items)} {entity.key} to {output_file}")

    return 0


def add_draft_arguments(parser):
    """Flags that fill draft fields."""
    parser.add_argument("--name", help="Author/category name")
    parser.add_argument("--title", help="Book title")
    parser.add_argument("--author-id", help="Book author id")
    parser.add_argument("--category-id", help="Book category id")
    parser.add_argument("--isbn", help="Book ISBN")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Catalog Console - manage books, authors and categories",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # List books as a table
  %(prog)s list books

  # Create a book
  %(prog)s add books --title "1984" --author-id 1 --category-id 2 --isbn 111

  # Change a book's ISBN (author/category pre-selected by name)
  %(prog)s edit books 5 --isbn 222

  # Export categories
  %(prog)s export categories --format csv --output categories.csv
        """
    )
    parser.add_argument("--api-url", help="Store origin (default: $CATALOG_API_URL or http://localhost:8080)")
    parser.add_argument("--verbose", action="store_true", help="Debug logging")

    subparsers = parser.add_subparsers(dest="command", help="Command to execute")
    entities = sorted(ENTITY_TYPES)

    # List command
    list_parser = subparsers.add_parser("list", help="List a collection")
    list_parser.add_argument("entity", choices=entities)
    list_parser.add_argument("--format", choices=["table", "json", "compact"], default="table", help="Output format")
    list_parser.add_argument("--async", dest="use_async", action="store_true", help="Load through the async page controller")

    # Add command
    add_parser = subparsers.add_parser("add", help="Create an entry")
    add_parser.add_argument("entity", choices=entities)
    add_draft_arguments(add_parser)

    # Edit command
    edit_parser = subparsers.add_parser("edit", help="Edit an entry")
    edit_parser.add_argument("entity", choices=entities)
    edit_parser.add_argument("id", type=int)
    add_draft_arguments(edit_parser)

    # Delete command
    delete_parser = subparsers.add_parser("delete", help="Delete an entry")
    delete_parser.add_argument("entity", choices=entities)
    delete_parser.add_argument("id", type=int)

    # Export command
    export_parser = subparsers.add_parser("export", help="Export a collection")
    export_parser.add_argument("entity", choices=entities)
    export_parser.add_argument("--format", choices=["json", "csv"], default="json", help="Export format")
    export_parser.add_argument("--output", help="Output file (default: stdout for JSON)")

    return parser


def main(argv=None):
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        sys.exit(1)

    if args.verbose:
        logging.getLogger().setLevel(logging.DEBUG)

    config = Config(api_url=args.api_url)

    try:
        if args.command == "list":
            if args.use_async:
                code = asyncio.run(list_entries_async(args, config))
            else:
                code = list_entries_sync(args, config)

        elif args.command == "add":
            code = asyncio.run(add_entry(args, config))

        elif args.command == "edit":
            code = asyncio.run(edit_entry(args, config))

        elif args.command == "delete":
            code = asyncio.run(delete_entry(args, config))

        else:
            code = export_data(args, config)

    except KeyboardInterrupt:
        logger.info("\n⚠️  Interrupted by user")
        sys.exit(0)
    except Exception as e:
        logger.error(f"❌ Error: {e}", exc_info=args.verbose)
        sys.exit(1)

    sys.exit(code)


if __name__ == "__main__":
    main()
