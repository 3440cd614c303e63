# app/deps.py
# Role: Shared application-level dependencies.
#       Provides the Jinja2 templates loader, the standard SQLAlchemy session
#       dependency, the filter-configuration dependency read from the query
#       string, and the small HTML error page used by the exception handlers.

"""
Shared dependencies and helpers for the resell tracker app.
"""

import html
import os
from typing import Generator

from fastapi import Query, Response
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates
from sqlalchemy.orm import Session

from db import SessionLocal
from app.services.filters import ALL, TABS, FilterConfig, build_filter_config
from app.services.import_helpers import parse_optional_date

# -------------------------------------------------------------------
# Templates
# -------------------------------------------------------------------

TEMPLATES_DIR = os.path.join(os.path.dirname(os.path.abspath(__file__)), "templates")

# Jinja2 templates loader (used by all HTML-rendering routes)
templates = Jinja2Templates(directory=TEMPLATES_DIR)

# -------------------------------------------------------------------
# Database dependency
# -------------------------------------------------------------------

def get_db() -> Generator[Session, None, None]:
    """
    FastAPI dependency that yields a database session and ensures it is closed.

    Typical usage in routes:
        db: Session = Depends(get_db)
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()

# -------------------------------------------------------------------
# Filters
# -------------------------------------------------------------------

def get_filter_config(
    search: str = Query(""),
    platform: str = Query(ALL),
    start: str = Query(""),
    end: str = Query(""),
    year: str = Query(ALL),
) -> FilterConfig:
    """
    Filter configuration from the query string.
    Empty or malformed dates mean "unbounded".
    """
    return build_filter_config(
        search=search,
        platform=platform,
        start=parse_optional_date(start),
        end=parse_optional_date(end),
        year=year,
    )


def normalize_tab(tab: str | None) -> str:
    return tab if tab in TABS else "sales"

# -------------------------------------------------------------------
# Error page
# -------------------------------------------------------------------

def error_page(title: str, message: str, status_code: int) -> HTMLResponse:
    return HTMLResponse(
        f"""
        <html>
        <body style="font-family:sans-serif; padding:20px;">
            <h1>{html.escape(title)}</h1>
            <p>{html.escape(message)}</p>
            <a href="/dashboard">Back to dashboard</a>
        </body>
        </html>
        """,
        status_code=status_code,
    )

# -------------------------------------------------------------------
# CSV download
# -------------------------------------------------------------------

def csv_download(csv_data: str, filename: str) -> Response:
    return Response(
        csv_data,
        media_type="text/csv",
        headers={"Content-Disposition": f"attachment; filename={filename}"},
    )
