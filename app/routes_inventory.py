# routes_inventory.py
"""
Routes for inventory: add, delete, mark as sold and CSV export.
"""

from typing import List

from fastapi import APIRouter, Depends, Form
from fastapi.responses import RedirectResponse
from sqlalchemy.orm import Session

from app.deps import get_db, get_filter_config, csv_download
from app.services import records, store
from app.services.csv_export import export_collection, export_filename
from app.services.filters import FilterConfig, filter_inventory

router = APIRouter()


@router.post("/inventory")
def add_inventory_item(
    item_name: str = Form(""),
    item_cost: str = Form(""),
    platforms: List[str] = Form(default=[]),
    db: Session = Depends(get_db),
):
    """
    Add an item to current stock. Each checked platform arrives as a
    repeated "platforms" field.
    """
    records.add_inventory_item(
        db,
        item_name=item_name,
        item_cost=item_cost,
        platforms=platforms,
    )
    return RedirectResponse(url="/dashboard?tab=inventory", status_code=303)


@router.post("/inventory/{item_id}/sold")
def mark_inventory_sold(
    item_id: int,
    sale_price: str = Form(""),
    platform: str = Form(""),
    sale_date: str = Form(""),
    db: Session = Depends(get_db),
):
    """
    Turn the item into a sale, then remove it from inventory.
    sale_date defaults to today.
    """
    records.mark_as_sold(
        db,
        inventory_id=item_id,
        sale_price=sale_price,
        platform=platform,
        sale_date=sale_date,
    )
    return RedirectResponse(url="/dashboard?tab=sales", status_code=303)


@router.post("/inventory/{item_id}/delete")
def delete_inventory_item(item_id: int, db: Session = Depends(get_db)):
    records.delete_inventory_item(db, item_id)
    return RedirectResponse(url="/dashboard?tab=inventory", status_code=303)


@router.get("/inventory/export.csv")
def export_inventory_csv(
    config: FilterConfig = Depends(get_filter_config),
    db: Session = Depends(get_db),
):
    items = filter_inventory(store.list_all(db, "inventory"), config)
    return csv_download(
        export_collection("inventory", items),
        export_filename("inventory"),
    )
