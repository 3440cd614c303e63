# app/services/csv_export.py
#
# CSV export of filtered record lists.
# Every cell is quoted; embedded quotes are doubled; rows are joined with "\n".

import csv
import io
from typing import Any, List, Sequence

from app.services.filters import ALL
from app.services.import_helpers import iso_or_empty


SALES_HEADERS = [
    "Item Name",
    "Platform",
    "Sale Date",
    "Sale Price",
    "Platform Fee",
    "Item Cost",
    "Shipping Cost",
    "Profit",
    "Gross Total",
    "Actual Received",
    "Status",
]

INVENTORY_HEADERS = ["Item Name", "Item Cost", "Platforms", "Date Added"]

EXPENSES_HEADERS = ["Name", "Amount", "Date Added"]


def money(value) -> str:
    """Two-decimal currency cell; missing values become an empty cell."""
    if value is None:
        return ""
    return f"{float(value):.2f}"


def to_csv(headers: Sequence[str], rows: Sequence[Sequence[str]]) -> str:
    output = io.StringIO()
    w = csv.writer(output, quoting=csv.QUOTE_ALL, lineterminator="\n")

    w.writerow(headers)
    for row in rows:
        w.writerow(row)

    csv_data = output.getvalue()
    output.close()

    # The last line always ends with a closing quote, so this only drops
    # the writer's final line terminator.
    return csv_data.rstrip("\n")


# ---- Row builders ----

def sale_rows(sales: Sequence[Any]) -> List[List[str]]:
    return [
        [
            s.item_name or "",
            s.platform or "",
            iso_or_empty(s.sale_date),
            money(s.sale_price),
            money(s.platform_fee),
            money(s.item_cost),
            money(s.shipping_cost),
            money(s.profit),
            money(s.gross_total),
            money(s.actual_received),
            s.status or "",
        ]
        for s in sales
    ]


def inventory_rows(items: Sequence[Any]) -> List[List[str]]:
    return [
        [
            i.item_name or "",
            money(i.item_cost),
            "; ".join(i.platforms),
            iso_or_empty(i.date_added),
        ]
        for i in items
    ]


def expense_rows(expenses: Sequence[Any]) -> List[List[str]]:
    return [
        [
            e.name or "",
            money(e.amount),
            iso_or_empty(e.date_added),
        ]
        for e in expenses
    ]


# ---- Whole files ----

def export_filename(collection: str, year: str = ALL) -> str:
    """sales-<year>.csv, inventory.csv, expenses-<year>.csv"""
    if collection == "inventory":
        return "inventory.csv"
    return f"{collection}-{year}.csv"


def export_collection(collection: str, records: Sequence[Any]) -> str:
    if collection == "sales":
        return to_csv(SALES_HEADERS, sale_rows(records))
    if collection == "inventory":
        return to_csv(INVENTORY_HEADERS, inventory_rows(records))
    if collection == "expenses":
        return to_csv(EXPENSES_HEADERS, expense_rows(records))
    raise ValueError(f"unknown collection: {collection!r}")
