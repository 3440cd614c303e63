# routes_sales.py
"""
Routes for sales: add, delete and CSV export.
"""

from fastapi import APIRouter, Depends, Form
from fastapi.responses import RedirectResponse
from sqlalchemy.orm import Session

from app.deps import get_db, get_filter_config, csv_download
from app.services import records, store
from app.services.csv_export import export_collection, export_filename
from app.services.filters import FilterConfig, filter_sales

router = APIRouter()


@router.post("/sales")
def add_sale(
    item_name: str = Form(""),
    platform: str = Form("eBay"),
    sale_date: str = Form(""),
    sale_price: str = Form(""),
    item_cost: str = Form(""),
    shipping_cost: str = Form(""),
    gross_total: str = Form(""),
    actual_received: str = Form(""),
    db: Session = Depends(get_db),
):
    """
    Record a sale. Fee and profit are computed server-side;
    gross_total / actual_received only matter for eBay.
    """
    records.add_sale(
        db,
        item_name=item_name,
        platform=platform,
        sale_price=sale_price,
        sale_date=sale_date,
        item_cost=item_cost,
        shipping_cost=shipping_cost,
        gross_total=gross_total,
        actual_received=actual_received,
    )
    return RedirectResponse(url="/dashboard?tab=sales", status_code=303)


@router.post("/sales/{sale_id}/delete")
def delete_sale(sale_id: int, db: Session = Depends(get_db)):
    records.delete_sale(db, sale_id)
    return RedirectResponse(url="/dashboard?tab=sales", status_code=303)


@router.get("/sales/export.csv")
def export_sales_csv(
    config: FilterConfig = Depends(get_filter_config),
    db: Session = Depends(get_db),
):
    sales = filter_sales(store.list_all(db, "sales"), config)
    return csv_download(
        export_collection("sales", sales),
        export_filename("sales", config.year),
    )
