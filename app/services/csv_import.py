# app/services/csv_import.py
"""
Read exported CSV files (sales-<year>.csv, inventory.csv, expenses-<year>.csv)
back into the record store.

Rows go through the normal creation functions in app/services/records.py,
so fees and profit are recomputed instead of trusted from the file.
"""

import logging
from pathlib import Path
from typing import Dict, List, Optional

import pandas as pd
from sqlalchemy.orm import Session

from app.services import records
from app.services.errors import ValidationError

logger = logging.getLogger(__name__)


# Columns each kind of file must provide (after header normalization)
REQUIRED_COLUMNS = {
    "sales": {"item_name", "platform", "sale_date", "sale_price"},
    "inventory": {"item_name"},
    "expenses": {"name", "amount"},
}

OPTIONAL_COLUMNS = {
    "sales": ["item_cost", "shipping_cost", "gross_total", "actual_received"],
    "inventory": ["item_cost", "platforms", "date_added"],
    "expenses": ["date_added"],
}


def kind_from_filename(path) -> Optional[str]:
    """'sales-2025.csv' -> 'sales', 'inventory.csv' -> 'inventory'."""
    stem = Path(path).stem.lower()
    for kind in REQUIRED_COLUMNS:
        if stem == kind or stem.startswith(kind + "-"):
            return kind
    return None


def _none_if_blank(x) -> Optional[str]:
    if x is None or pd.isna(x):
        return None
    s = str(x).strip()
    return None if s == "" or s.lower() == "nan" else s


def parse_export_csv(kind: str, file_path) -> List[Dict]:
    """
    Parse one exported file into a list of dicts keyed by snake_case
    column names. Blank cells become None.
    """
    if kind not in REQUIRED_COLUMNS:
        raise ValueError(f"unknown collection: {kind!r}")

    df = pd.read_csv(file_path, dtype=str, keep_default_na=False, encoding="utf-8")

    # "Item Name" -> "item_name"
    df.columns = (
        df.columns.str.strip().str.lower().str.replace(" ", "_", regex=False)
    )

    missing = REQUIRED_COLUMNS[kind] - set(df.columns)
    if missing:
        raise ValueError(f"{Path(file_path).name}: missing required columns: {sorted(missing)}")

    for col in OPTIONAL_COLUMNS[kind]:
        if col not in df.columns:
            df[col] = ""

    if df.empty:
        return []

    # drop rows where every cell is blank
    df = df[df.apply(lambda r: any(_none_if_blank(v) for v in r), axis=1)]

    wanted = sorted(REQUIRED_COLUMNS[kind]) + OPTIONAL_COLUMNS[kind]
    rows = df[wanted].to_dict(orient="records")
    return [{k: _none_if_blank(v) for k, v in row.items()} for row in rows]


def import_rows(db: Session, kind: str, rows: List[Dict]) -> int:
    """
    Create one record per row. Rows that fail validation are skipped.
    Returns the number of records created.
    """
    inserted = 0

    for i, row in enumerate(rows, start=1):
        try:
            if kind == "sales":
                records.add_sale(
                    db,
                    item_name=row.get("item_name"),
                    platform=row.get("platform"),
                    sale_price=row.get("sale_price"),
                    sale_date=row.get("sale_date"),
                    item_cost=row.get("item_cost"),
                    shipping_cost=row.get("shipping_cost"),
                    gross_total=row.get("gross_total"),
                    actual_received=row.get("actual_received"),
                )
            elif kind == "inventory":
                records.add_inventory_item(
                    db,
                    item_name=row.get("item_name"),
                    item_cost=row.get("item_cost"),
                    platforms=[row.get("platforms")],
                    date_added=row.get("date_added"),
                )
            elif kind == "expenses":
                records.add_expense(
                    db,
                    name=row.get("name"),
                    amount=row.get("amount"),
                    date_added=row.get("date_added"),
                )
            else:
                raise ValueError(f"unknown collection: {kind!r}")
        except ValidationError as e:
            logger.warning("Skipping %s row #%d: %s", kind, i, e)
            continue

        inserted += 1

    logger.info("Imported %d of %d %s rows", inserted, len(rows), kind)
    return inserted


def import_file(db: Session, file_path, kind: Optional[str] = None) -> int:
    kind = kind or kind_from_filename(file_path)
    if kind is None:
        raise ValueError(f"cannot tell which collection {Path(file_path).name} belongs to")
    return import_rows(db, kind, parse_export_csv(kind, file_path))
