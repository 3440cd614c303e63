# main.py
# Role: Application entry point for the resell tracker.
#       Configures logging, initializes the FastAPI app, creates database
#       tables, maps service errors to HTTP responses and registers all
#       route modules.

"""
Main FastAPI app for the resell tracker.

Here we only:
- configure logging
- create the FastAPI app
- create DB tables
- install error handlers
- include route modules
"""

import logging
import os

from fastapi import FastAPI, Request

from db import Base, engine
from app.deps import error_page
from app.services.errors import (
    ValidationError,
    RecordNotFoundError,
    RecordStoreError,
    PartialConversionError,
)
from app.routes_root import router as root_router
from app.routes_dashboard import router as dashboard_router
from app.routes_sales import router as sales_router
from app.routes_inventory import router as inventory_router
from app.routes_expenses import router as expenses_router


# -------------------------------------------------------------------
# Logging
# -------------------------------------------------------------------

logging.basicConfig(
    level=os.environ.get("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s [%(name)s] %(levelname)s: %(message)s",
)
logger = logging.getLogger("resell_tracker")


# -------------------------------------------------------------------
# App & DB setup
# -------------------------------------------------------------------

# Create database tables (only if they don't exist yet).
Base.metadata.create_all(bind=engine)

# FastAPI application instance
app = FastAPI(title="Resell Tracker")


# -------------------------------------------------------------------
# Error handlers
# -------------------------------------------------------------------

@app.exception_handler(ValidationError)
async def handle_validation_error(request: Request, exc: ValidationError):
    return error_page("Invalid input", str(exc), status_code=400)


@app.exception_handler(RecordNotFoundError)
async def handle_not_found(request: Request, exc: RecordNotFoundError):
    return error_page("Not found", str(exc), status_code=404)


@app.exception_handler(RecordStoreError)
async def handle_store_error(request: Request, exc: RecordStoreError):
    if isinstance(exc, PartialConversionError):
        title = "Sale recorded, inventory not updated"
    else:
        title = "Database error"
    logger.error("%s %s failed: %s", request.method, request.url.path, exc)
    return error_page(title, str(exc), status_code=503)


# -------------------------------------------------------------------
# Include routers
# -------------------------------------------------------------------

# Root / landing routes
app.include_router(root_router)

# Dashboard: stats, filtered lists, filters
app.include_router(dashboard_router)

# Sales: add / delete / export
app.include_router(sales_router)

# Inventory: add / mark sold / delete / export
app.include_router(inventory_router)

# Expenses: add / delete / export
app.include_router(expenses_router)
