# app/services/records.py
"""
Record lifecycle: turn raw user input into persisted sales, inventory items
and expenses.

Everything is validated before the first write. Fee and profit are always
computed here, never taken from the caller.
"""

import logging
from datetime import date
from typing import Any, Iterable, Optional

from sqlalchemy.orm import Session

from models import Sale, InventoryItem, Expense, SALE_STATUS_SOLD
from app.services import store
from app.services.errors import (
    InvalidAmountError,
    InvalidPlatformError,
    InvalidSalePriceError,
    MissingNameError,
    PartialConversionError,
    RecordStoreError,
)
from app.services.fees import compute_fee, compute_sale_amounts
from app.services.import_helpers import (
    float_or_zero,
    normalize_platform,
    parse_optional_date,
    parse_optional_float,
    parse_platform_list,
)

logger = logging.getLogger(__name__)


def _require_name(value: Any, field: str = "item name") -> str:
    name = str(value or "").strip()
    if not name:
        logger.warning("Rejected input: missing %s", field)
        raise MissingNameError(field)
    return name


def _require_platform(value: Any) -> str:
    platform = normalize_platform(value)
    if platform is None:
        logger.warning("Rejected input: invalid platform %r", value)
        raise InvalidPlatformError(value)
    return platform


def _require_sale_price(value: Any) -> float:
    price = parse_optional_float(value)
    if price is None:
        logger.warning("Rejected input: invalid sale price %r", value)
        raise InvalidSalePriceError(value)
    return price


# ---- Sales ----

def add_sale(
    db: Session,
    item_name: Any,
    platform: Any,
    sale_price: Any,
    sale_date: Any = None,
    item_cost: Any = None,
    shipping_cost: Any = None,
    gross_total: Any = None,
    actual_received: Any = None,
) -> Sale:
    """
    Validate a sale submission, compute fee/profit and persist it.

    item_cost / shipping_cost default to 0 when empty or unparseable;
    gross_total / actual_received count as not supplied in that case.
    """
    name = _require_name(item_name)
    platform_value = _require_platform(platform)
    price = _require_sale_price(sale_price)

    cost = float_or_zero(item_cost)
    shipping = float_or_zero(shipping_cost)
    gross = parse_optional_float(gross_total)
    received = parse_optional_float(actual_received)

    fee, profit = compute_sale_amounts(
        platform_value,
        price,
        item_cost=cost,
        shipping_cost=shipping,
        gross_total=gross,
        actual_received=received,
    )

    return store.insert(
        db,
        "sales",
        {
            "item_name": name,
            "platform": platform_value,
            "sale_date": parse_optional_date(sale_date) or date.today(),
            "sale_price": price,
            "platform_fee": fee,
            "item_cost": cost,
            "shipping_cost": shipping,
            "profit": profit,
            "gross_total": gross,
            "actual_received": received,
            "status": SALE_STATUS_SOLD,
        },
    )


# ---- Inventory ----

def add_inventory_item(
    db: Session,
    item_name: Any,
    item_cost: Any = None,
    platforms: Optional[Iterable[Any]] = None,
    date_added: Any = None,
) -> InventoryItem:
    name = _require_name(item_name)

    return store.insert(
        db,
        "inventory",
        {
            "item_name": name,
            "item_cost": float_or_zero(item_cost),
            "platforms": parse_platform_list(platforms or []),
            "date_added": parse_optional_date(date_added) or date.today(),
        },
    )


def mark_as_sold(
    db: Session,
    inventory_id: int,
    sale_price: Any,
    platform: Any,
    sale_date: Any = None,
) -> Sale:
    """
    Convert an inventory item into a sale.

    Two separate writes: the sale is inserted first, then the item is
    deleted. A failed insert leaves the item untouched. A failed delete
    leaves both records behind and raises PartialConversionError.
    """
    price = _require_sale_price(sale_price)
    platform_value = _require_platform(platform)

    item = store.get(db, "inventory", inventory_id)

    fee = compute_fee(platform_value, price)
    # shipping is not asked for when selling from inventory
    profit = price - fee - item.item_cost

    sale = store.insert(
        db,
        "sales",
        {
            "item_name": item.item_name,
            "platform": platform_value,
            "sale_date": parse_optional_date(sale_date) or date.today(),
            "sale_price": price,
            "platform_fee": fee,
            "item_cost": item.item_cost,
            "shipping_cost": 0.0,
            "profit": profit,
            "status": SALE_STATUS_SOLD,
        },
    )

    try:
        store.delete(db, "inventory", inventory_id)
    except RecordStoreError as e:
        logger.error(
            "mark-as-sold partial failure: sale id=%s persisted, "
            "inventory id=%s not removed; reconcile manually",
            sale.id,
            inventory_id,
        )
        raise PartialConversionError(sale.id, inventory_id) from e

    logger.info("Inventory id=%s sold as sale id=%s", inventory_id, sale.id)
    return sale


# ---- Expenses ----

def add_expense(
    db: Session,
    name: Any,
    amount: Any,
    date_added: Any = None,
) -> Expense:
    expense_name = _require_name(name, field="expense name")

    value = parse_optional_float(amount)
    if value is None:
        logger.warning("Rejected input: invalid expense amount %r", amount)
        raise InvalidAmountError("amount", amount)

    return store.insert(
        db,
        "expenses",
        {
            "name": expense_name,
            "amount": value,
            "date_added": parse_optional_date(date_added) or date.today(),
        },
    )


# ---- Deletes ----

def delete_sale(db: Session, sale_id: int) -> bool:
    return store.delete(db, "sales", sale_id)


def delete_inventory_item(db: Session, inventory_id: int) -> bool:
    return store.delete(db, "inventory", inventory_id)


def delete_expense(db: Session, expense_id: int) -> bool:
    return store.delete(db, "expenses", expense_id)
