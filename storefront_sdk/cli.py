#!/usr/bin/env python3
"""
Storefront catalog fetcher.

Fetches the shop, products or collections through the storefront client and
displays them as a table or JSON.

Usage:
    storefront-sdk shop
    storefront-sdk products [--format table] [--limit 10]
    storefront-sdk product "gid://shopify/Product/123"
    storefront-sdk collections --export collections.json
    storefront-sdk collection "gid://shopify/Collection/456"

Credentials are read from the environment (or a .env file):
    STOREFRONT_DOMAIN=your-shop.myshopify.com
    STOREFRONT_ACCESS_TOKEN=your_storefront_access_token
"""

import argparse
import asyncio
import json
import logging
import sys
from datetime import datetime
from typing import Any, Dict, List, Optional

from storefront_sdk.client import Client
from storefront_sdk.core.config import Config
from storefront_sdk.utils.error_handler import AppException


def setup_logging(verbose: bool = False) -> logging.Logger:
    """Setup logging configuration."""
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler(sys.stderr)],
    )
    return logging.getLogger("storefront_sdk.cli")


def format_table(records: List[Dict[str, Any]], columns: List[str]) -> str:
    """Format records as a simple fixed-width table."""
    if not records:
        return "No results found."

    widths = {}
    for column in columns:
        longest = max(len(str(record.get(column) if record.get(column) is not None else "")) for record in records)
        widths[column] = min(max(longest, len(column)), 40)

    header = " | ".join(f"{column:<{widths[column]}}" for column in columns)
    lines = [header, "-" * len(header)]

    for record in records:
        cells = []
        for column in columns:
            value = record.get(column)
            text = "" if value is None else str(value)
            if len(text) > widths[column]:
                text = text[: widths[column] - 3] + "..."
            cells.append(f"{text:<{widths[column]}}")
        lines.append(" | ".join(cells))

    return "\n".join(lines)


def summarize_product(product: Dict[str, Any]) -> Dict[str, Any]:
    return {
        **product,
        "images": len(product.get("images") or []),
        "variants": len(product.get("variants") or []),
    }


TABLE_COLUMNS = {
    "shop": ["name", "currencyCode", "moneyFormat"],
    "products": ["id", "title", "vendor", "images", "variants"],
    "collections": ["id", "title", "handle", "updatedAt"],
}


def render(command: str, records: List[Dict[str, Any]], output_format: str) -> str:
    if output_format == "json":
        return json.dumps(records, indent=2, ensure_ascii=False, default=str)

    kind = {"product": "products", "collection": "collections"}.get(command, command)
    if kind == "products":
        records = [summarize_product(record) for record in records]
    return format_table(records, TABLE_COLUMNS[kind])


async def fetch_records(client: Client, command: str, entity_id: Optional[str] = None) -> List[Dict[str, Any]]:
    """Run the client operation for ``command`` and return plain dictionaries."""
    if command == "shop":
        results = [await client.fetch_shop_info()]
    elif command == "products":
        results = list(await client.fetch_all_products())
    elif command == "product":
        results = [await client.fetch_product(entity_id)]
    elif command == "collections":
        results = list(await client.fetch_all_collections())
    elif command == "collection":
        results = [await client.fetch_collection(entity_id)]
    else:
        raise ValueError(f"Unknown command: {command}")

    return [result.to_dict() for result in results if result is not None]


def export_to_file(data: List[Dict[str, Any]], filename: str, logger: logging.Logger) -> bool:
    """Export fetched records to a JSON file."""
    try:
        with open(filename, "w", encoding="utf-8") as f:
            json.dump(
                {"exported_at": datetime.now().isoformat(), "total": len(data), "results": data},
                f,
                indent=2,
                ensure_ascii=False,
                default=str,
            )
        logger.info(f"Results exported to: {filename}")
        return True
    except OSError as e:
        logger.error(f"Failed to export to {filename}: {e}")
        return False


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="storefront-sdk",
        description="Fetch shop, product and collection data from a storefront",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s shop
  %(prog)s products --format table --limit 10
  %(prog)s product "gid://shopify/Product/123"
  %(prog)s collections --export collections.json
        """,
    )
    parser.add_argument("--format", choices=["table", "json"], default="table", help="Output format (default: table)")
    parser.add_argument("--limit", type=int, help="Limit number of results to display")
    parser.add_argument("--export", metavar="FILE", help="Export results to JSON file")
    parser.add_argument("--verbose", action="store_true", help="Enable verbose logging")

    subparsers = parser.add_subparsers(dest="command", required=True)
    subparsers.add_parser("shop", help="Fetch shop information")
    subparsers.add_parser("products", help="Fetch products with all images and variants")
    subparsers.add_parser("product", help="Fetch one product by ID").add_argument("id")
    subparsers.add_parser("collections", help="Fetch collections")
    subparsers.add_parser("collection", help="Fetch one collection by ID").add_argument("id")
    return parser


async def run(args: argparse.Namespace, client: Optional[Client] = None) -> int:
    logger = setup_logging(args.verbose)

    try:
        client = client or Client(Config.from_settings())
        async with client:
            records = await fetch_records(client, args.command, getattr(args, "id", None))
    except AppException as e:
        logger.error(f"{e}")
        print(f"Error: {e.message}", file=sys.stderr)
        return 1

    if args.limit and args.limit > 0:
        records = records[: args.limit]

    if not records:
        print("No results found.")
        return 1

    print(render(args.command, records, args.format))

    if args.export and not export_to_file(records, args.export, logger):
        print(f"\nFailed to export to: {args.export}")
        return 1

    return 0


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    try:
        return asyncio.run(run(args))
    except KeyboardInterrupt:
        return 130


if __name__ == "__main__":
    sys.exit(main())
