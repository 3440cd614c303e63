# app/services/filters.py
"""
In-memory filtering, sorting and dashboard totals.

A FilterConfig is an immutable value; every function here is pure and works
on plain lists of records as returned by the record store.
"""

from dataclasses import dataclass
from datetime import date
from typing import Any, Dict, List, Optional, Sequence

from models import PLATFORMS

ALL = "all"

TABS = ("sales", "inventory", "expenses")


@dataclass(frozen=True)
class FilterConfig:
    search: str = ""
    platform: str = ALL
    start: Optional[date] = None
    end: Optional[date] = None
    year: str = ALL

    def cleared(self) -> "FilterConfig":
        """Drop every filter except the selected year."""
        return FilterConfig(year=self.year)

    @property
    def is_active(self) -> bool:
        return (
            bool(self.search)
            or self.platform != ALL
            or self.start is not None
            or self.end is not None
        )


def build_filter_config(
    search: Optional[str] = None,
    platform: Optional[str] = None,
    start: Optional[date] = None,
    end: Optional[date] = None,
    year: Optional[str] = None,
) -> FilterConfig:
    """
    Normalize raw query values: unknown platforms and malformed years
    fall back to "all".
    """
    platform_value = ALL
    for p in PLATFORMS:
        if (platform or "").strip().lower() == p.lower():
            platform_value = p

    year_value = (year or "").strip()
    if not (len(year_value) == 4 and year_value.isdigit()):
        year_value = ALL

    return FilterConfig(
        search=(search or "").strip(),
        platform=platform_value,
        start=start,
        end=end,
        year=year_value,
    )


def tab_filters(active_tab: str, config: FilterConfig) -> Dict[str, FilterConfig]:
    """
    The full configuration applies to the active tab only;
    the other tabs keep just the year.
    """
    return {tab: (config if tab == active_tab else config.cleared()) for tab in TABS}


# ---- Predicates ----

def _matches_search(name: Optional[str], search: str) -> bool:
    if not search:
        return True
    return search.lower() in (name or "").lower()


def _matches_range(d: Optional[date], config: FilterConfig) -> bool:
    if config.start is None and config.end is None:
        return True
    if d is None:
        return False
    if config.start is not None and d < config.start:
        return False
    if config.end is not None and d > config.end:
        return False
    return True


def _matches_year(d: Optional[date], year: str) -> bool:
    if year == ALL:
        return True
    return d is not None and d.isoformat().startswith(year)


def _by_name(records: List[Any], attr: str) -> List[Any]:
    return sorted(records, key=lambda r: (getattr(r, attr) or "").lower())


# ---- Per-collection filters ----

def filter_sales(sales: Sequence[Any], config: FilterConfig) -> List[Any]:
    result = [
        s for s in sales
        if _matches_search(s.item_name, config.search)
        and (config.platform == ALL or s.platform == config.platform)
        and _matches_range(s.sale_date, config)
        and _matches_year(s.sale_date, config.year)
    ]
    return _by_name(result, "item_name")


def filter_inventory(items: Sequence[Any], config: FilterConfig) -> List[Any]:
    # Inventory is current stock, so the year filter does not apply
    result = [
        i for i in items
        if _matches_search(i.item_name, config.search)
        and (config.platform == ALL or config.platform in i.platforms)
        and _matches_range(i.date_added, config)
    ]
    return _by_name(result, "item_name")


def filter_expenses(expenses: Sequence[Any], config: FilterConfig) -> List[Any]:
    # No platform on expenses; store order is kept
    return [
        e for e in expenses
        if _matches_search(e.name, config.search)
        and _matches_range(e.date_added, config)
        and _matches_year(e.date_added, config.year)
    ]


# ---- Totals ----

def compute_stats(
    filtered_sales: Sequence[Any],
    filtered_expenses: Sequence[Any],
    all_inventory: Sequence[Any],
) -> Dict[str, float]:
    """
    Dashboard totals. Sales and expense figures follow the filters;
    inventory value always covers all current stock.
    """
    total_sales = sum(s.sale_price for s in filtered_sales)
    total_fees = sum(s.platform_fee for s in filtered_sales)
    total_profit = sum(s.profit for s in filtered_sales)
    total_expenses = sum(e.amount for e in filtered_expenses)
    inventory_value = sum(i.item_cost for i in all_inventory)

    return {
        "total_sales": float(total_sales),
        "total_fees": float(total_fees),
        "total_expenses": float(total_expenses),
        "inventory_value": float(inventory_value),
        "net_profit": float(total_profit - total_expenses),
    }


def available_years(
    sales: Sequence[Any],
    inventory: Sequence[Any],
    expenses: Sequence[Any],
    today: Optional[date] = None,
) -> List[str]:
    dates = (
        [s.sale_date for s in sales]
        + [i.date_added for i in inventory]
        + [e.date_added for e in expenses]
    )
    years = {d.isoformat()[:4] for d in dates if d is not None}
    if not years:
        years = {str((today or date.today()).year)}
    return sorted(years, reverse=True)
