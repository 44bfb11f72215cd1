#!/usr/bin/env python
"""
CSV Sales Import Script

Loads sales transactions from a CSV export into the database. The API is
read-only, so rows are written straight through SQLAlchemy. Existing rows
are cleared first so a load can simply be re-run.

Usage:
    python import_sales.py data/sales.csv
    python import_sales.py data/sales.csv --batch-size 500
    python import_sales.py data/sales.csv --database-url sqlite+aiosqlite:///sales.db
    python import_sales.py data/sales.csv --limit 1000 --keep-existing
"""
import argparse
import asyncio
import csv
import re
import sys
import time
from datetime import datetime, timezone
from decimal import Decimal, InvalidOperation
from io import StringIO
from pathlib import Path
from typing import Any, Dict, List, Optional

from sqlalchemy import delete

from sales_api.database.database import SalesStore
from sales_api.models.sale import Sale, SaleTag
from sales_api.services.response_assembler import DISPLAY_NAMES
from sales_api.settings import settings

TAG_SEPARATORS = re.compile(r"[,;|]")
DATE_FORMATS = ("%m/%d/%Y %H:%M", "%m/%d/%Y", "%d-%m-%Y")
INT_FIELDS = {"age", "quantity"}
DECIMAL_FIELDS = {"price_per_unit", "discount_percentage", "total_amount", "final_amount"}

# CSV header -> Sale attribute; the CSV uses the same display names as the API
COLUMN_FIELDS = {name: field for field, name in DISPLAY_NAMES.items()}


def parse_date(date_str: str) -> datetime:
    """
    Parse a CSV date into a naive UTC datetime.

    Accepts ISO dates/datetimes first, then a few common export formats.

    Raises:
        ValueError: If no format matches
    """
    text = date_str.strip()
    try:
        dt = datetime.fromisoformat(text.replace("Z", "+00:00"))
    except ValueError:
        for fmt in DATE_FORMATS:
            try:
                return datetime.strptime(text, fmt)
            except ValueError:
                continue
        raise ValueError(f"Unrecognised date: {date_str!r}")

    if dt.tzinfo is not None:
        dt = dt.astimezone(timezone.utc).replace(tzinfo=None)
    return dt


def parse_int(value: Optional[str]) -> int:
    """Parse an integer column; blanks and junk become 0."""
    try:
        return int(float((value or "").strip()))
    except (ValueError, OverflowError):
        return 0


def parse_decimal(value: Optional[str]) -> Decimal:
    """Parse a money/percentage column to 2 decimal places; junk becomes 0."""
    try:
        amount = Decimal((value or "").strip())
    except InvalidOperation:
        return Decimal("0.00")
    if not amount.is_finite():
        return Decimal("0.00")
    return amount.quantize(Decimal("0.01"))


def parse_tags(value: Optional[str]) -> List[str]:
    """Split a tag cell on ',', ';' or '|', dropping empty tags."""
    if not value:
        return []
    return [tag.strip() for tag in TAG_SEPARATORS.split(value) if tag.strip()]


def csv_row_to_sale(row: Dict[str, str]) -> Dict[str, Any]:
    """
    Convert a CSV row to Sale attributes.

    Args:
        row: Dictionary with CSV column headers as keys

    Returns:
        Attribute dictionary; ``tags`` is a list of strings

    Raises:
        ValueError: If the date cannot be parsed
    """
    sale: Dict[str, Any] = {}
    for column, field in COLUMN_FIELDS.items():
        raw = row.get(column)
        if field == "id":
            if raw and raw.strip():
                sale["id"] = raw.strip()[:36]
        elif field == "date":
            sale["date"] = parse_date(raw or "")
        elif field == "tags":
            sale["tags"] = parse_tags(raw)
        elif field in INT_FIELDS:
            sale[field] = parse_int(raw)
        elif field in DECIMAL_FIELDS:
            sale[field] = parse_decimal(raw)
        else:
            sale[field] = (raw or "").strip()
    return sale


def build_sale(attributes: Dict[str, Any]) -> Sale:
    values = dict(attributes)
    tags = values.pop("tags", [])
    return Sale(**values, tags=[SaleTag(tag=tag) for tag in tags])


def read_csv_sales(file_path: Path, limit: Optional[int] = None) -> List[Dict[str, Any]]:
    """
    Read sales from a CSV file.

    Rows that cannot be converted are skipped with a warning.
    """
    encodings = ["utf-8-sig", "latin-1", "cp1252"]
    file_content = None

    for encoding in encodings:
        try:
            file_content = file_path.read_text(encoding=encoding)
            break
        except UnicodeDecodeError:
            continue

    if file_content is None:
        raise ValueError(f"Could not decode file with any of the supported encodings: {encodings}")

    sales = []
    reader = csv.DictReader(StringIO(file_content))
    for i, row in enumerate(reader):
        if limit and i >= limit:
            break
        try:
            sales.append(csv_row_to_sale(row))
        except (ValueError, KeyError) as e:
            print(f"Skipping row {i + 2}: {e}", file=sys.stderr)
    return sales


async def load_sales(
    store: SalesStore,
    sales: List[Dict[str, Any]],
    batch_size: int = 500,
    keep_existing: bool = False,
) -> int:
    """Insert sales in batches, clearing the tables first unless told not to."""
    await store.create_tables()
    inserted = 0
    started = time.monotonic()

    async with store.session() as session:
        if not keep_existing:
            await session.execute(delete(SaleTag))
            result = await session.execute(delete(Sale))
            await session.commit()
            print(f"Cleared {result.rowcount} existing sale(s)")

        for i in range(0, len(sales), batch_size):
            batch = sales[i:i + batch_size]
            session.add_all(build_sale(attributes) for attributes in batch)
            await session.commit()
            session.expunge_all()

            inserted += len(batch)
            elapsed = time.monotonic() - started
            rate = int(inserted / elapsed) if elapsed > 0 else inserted
            print(f"   Inserted {inserted}/{len(sales)} ({rate}/sec)")

    return inserted


async def _run(args: argparse.Namespace) -> int:
    sales = read_csv_sales(args.csv_file, args.limit)
    if not sales:
        print("No valid sales found in CSV", file=sys.stderr)
        return 1

    print(f"Loaded {len(sales)} sale(s) from {args.csv_file}")
    store = SalesStore.from_url(args.database_url)
    try:
        inserted = await load_sales(store, sales, args.batch_size, args.keep_existing)
    finally:
        await store.dispose()

    print(f"Import complete! Inserted {inserted} sale(s)")
    print("Call POST /cache/clear on a running API to refresh filter options.")
    return 0


def main():
    """Main entry point for the script."""
    parser = argparse.ArgumentParser(
        description="Import sales transactions from CSV into the database",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s data/sales.csv
  %(prog)s data/sales.csv --batch-size 1000
  %(prog)s data/sales.csv --limit 1000 --keep-existing
        """,
    )
    parser.add_argument("csv_file", type=Path, help="Path to CSV file with sales data")
    parser.add_argument(
        "--database-url",
        type=str,
        default=settings.DATABASE_URL,
        help="SQLAlchemy async database URL (default: DATABASE_URL setting)",
    )
    parser.add_argument(
        "--batch-size",
        type=int,
        default=500,
        help="Number of sales per insert batch (default: 500)",
    )
    parser.add_argument(
        "--limit",
        type=int,
        default=None,
        help="Maximum number of rows to import (default: all)",
    )
    parser.add_argument(
        "--keep-existing",
        action="store_true",
        help="Append instead of clearing existing sales first",
    )

    args = parser.parse_args()

    if not args.csv_file.is_file():
        print(f"Error: File not found: {args.csv_file}", file=sys.stderr)
        sys.exit(1)

    sys.exit(asyncio.run(_run(args)))


if __name__ == "__main__":
    main()
