# app/routes_dashboard.py

from datetime import date
from typing import Any, Dict
from urllib.parse import urlencode

from fastapi import APIRouter, Request, Depends, Query
from fastapi.responses import RedirectResponse
from sqlalchemy.orm import Session

from models import PLATFORMS
from .deps import templates, get_db, get_filter_config, normalize_tab
from app.services import store
from app.services.filters import (
    ALL,
    FilterConfig,
    available_years,
    build_filter_config,
    compute_stats,
    filter_expenses,
    filter_inventory,
    filter_sales,
    tab_filters,
)
from app.services.import_helpers import iso_or_empty

router = APIRouter()


def build_dashboard(db: Session, tab: str, config: FilterConfig) -> Dict[str, Any]:
    """
    Reload all three collections and derive every view the dashboard shows.
    """
    data = store.load_all(db)
    per_tab = tab_filters(tab, config)

    sales = filter_sales(data["sales"], per_tab["sales"])
    inventory = filter_inventory(data["inventory"], per_tab["inventory"])
    expenses = filter_expenses(data["expenses"], per_tab["expenses"])

    return {
        "tab": tab,
        "filters": config,
        "sales": sales,
        "inventory": inventory,
        "expenses": expenses,
        "stats": compute_stats(sales, expenses, data["inventory"]),
        "years": available_years(data["sales"], data["inventory"], data["expenses"]),
    }


def _sale_json(s) -> Dict[str, Any]:
    return {
        "id": s.id,
        "item_name": s.item_name,
        "platform": s.platform,
        "sale_date": iso_or_empty(s.sale_date),
        "sale_price": s.sale_price,
        "platform_fee": s.platform_fee,
        "item_cost": s.item_cost,
        "shipping_cost": s.shipping_cost,
        "profit": s.profit,
        "gross_total": s.gross_total,
        "actual_received": s.actual_received,
        "status": s.status,
    }


def _inventory_json(i) -> Dict[str, Any]:
    return {
        "id": i.id,
        "item_name": i.item_name,
        "item_cost": i.item_cost,
        "platforms": i.platforms,
        "date_added": iso_or_empty(i.date_added),
    }


def _expense_json(e) -> Dict[str, Any]:
    return {
        "id": e.id,
        "name": e.name,
        "amount": e.amount,
        "date_added": iso_or_empty(e.date_added),
    }


@router.get("/dashboard")
def dashboard_page(
    request: Request,
    tab: str = Query("sales"),
    config: FilterConfig = Depends(get_filter_config),
    db: Session = Depends(get_db),
):
    view = build_dashboard(db, normalize_tab(tab), config)

    export_query = urlencode(
        {
            "search": config.search,
            "platform": config.platform,
            "start": iso_or_empty(config.start),
            "end": iso_or_empty(config.end),
            "year": config.year,
        }
    )

    return templates.TemplateResponse(
        request,
        "dashboard.html",
        {
            **view,
            "platforms": PLATFORMS,
            "today": date.today().isoformat(),
            "start": iso_or_empty(config.start),
            "end": iso_or_empty(config.end),
            "export_query": export_query,
        },
    )


@router.get("/dashboard/data")
def dashboard_data(
    tab: str = Query("sales"),
    config: FilterConfig = Depends(get_filter_config),
    db: Session = Depends(get_db),
):
    """
    Same content as /dashboard, as JSON.
    """
    view = build_dashboard(db, normalize_tab(tab), config)

    return {
        "tab": view["tab"],
        "filters": {
            "search": config.search,
            "platform": config.platform,
            "start": iso_or_empty(config.start),
            "end": iso_or_empty(config.end),
            "year": config.year,
        },
        "stats": view["stats"],
        "years": view["years"],
        "sales": [_sale_json(s) for s in view["sales"]],
        "inventory": [_inventory_json(i) for i in view["inventory"]],
        "expenses": [_expense_json(e) for e in view["expenses"]],
    }


@router.get("/dashboard/clear")
def clear_filters(
    tab: str = Query("sales"),
    year: str = Query(ALL),
):
    """
    Reset search, platform and date range; the selected year stays.
    """
    cleared = build_filter_config(year=year).cleared()
    query = urlencode({"tab": normalize_tab(tab), "year": cleared.year})
    return RedirectResponse(url=f"/dashboard?{query}", status_code=303)
