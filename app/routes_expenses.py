# routes_expenses.py
"""
Routes for expenses: add, delete and CSV export.
"""

from fastapi import APIRouter, Depends, Form
from fastapi.responses import RedirectResponse
from sqlalchemy.orm import Session

from app.deps import get_db, get_filter_config, csv_download
from app.services import records, store
from app.services.csv_export import export_collection, export_filename
from app.services.filters import FilterConfig, filter_expenses

router = APIRouter()


@router.post("/expenses")
def add_expense(
    name: str = Form(""),
    amount: str = Form(""),
    date_added: str = Form(""),
    db: Session = Depends(get_db),
):
    records.add_expense(db, name=name, amount=amount, date_added=date_added)
    return RedirectResponse(url="/dashboard?tab=expenses", status_code=303)


@router.post("/expenses/{expense_id}/delete")
def delete_expense(expense_id: int, db: Session = Depends(get_db)):
    records.delete_expense(db, expense_id)
    return RedirectResponse(url="/dashboard?tab=expenses", status_code=303)


@router.get("/expenses/export.csv")
def export_expenses_csv(
    config: FilterConfig = Depends(get_filter_config),
    db: Session = Depends(get_db),
):
    expenses = filter_expenses(store.list_all(db, "expenses"), config)
    return csv_download(
        export_collection("expenses", expenses),
        export_filename("expenses", config.year),
    )
