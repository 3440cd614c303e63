# app/services/store.py
#
# Record store client: create / list / get / delete on the three collections
# ("sales", "inventory", "expenses"). Every database failure is rolled back,
# logged and re-raised as RecordStoreError.

import logging
from typing import Any, Dict, List

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from models import Sale, InventoryItem, Expense
from app.services.errors import RecordStoreError, RecordNotFoundError

logger = logging.getLogger(__name__)


# collection name -> (model, list ordering)
COLLECTIONS = {
    "sales": (Sale, Sale.sale_date.desc()),
    "inventory": (InventoryItem, InventoryItem.item_name.asc()),
    "expenses": (Expense, Expense.date_added.desc()),
}


def _model_for(collection: str):
    try:
        return COLLECTIONS[collection][0]
    except KeyError:
        raise ValueError(f"unknown collection: {collection!r}") from None


def insert(db: Session, collection: str, values: Dict[str, Any]):
    """
    Insert one record and return it with its id and created_at filled in.
    """
    model = _model_for(collection)
    record = model(**values)
    try:
        db.add(record)
        db.commit()
        db.refresh(record)
    except SQLAlchemyError as e:
        db.rollback()
        logger.exception("Insert into %s failed", collection)
        raise RecordStoreError(f"could not save {collection} record: {e}") from e

    logger.info("Inserted %s record id=%s", collection, record.id)
    return record


def list_all(db: Session, collection: str) -> List[Any]:
    """All records of a collection in its natural order."""
    model = _model_for(collection)
    ordering = COLLECTIONS[collection][1]
    try:
        return db.query(model).order_by(ordering, model.id.asc()).all()
    except SQLAlchemyError as e:
        db.rollback()
        logger.exception("Listing %s failed", collection)
        raise RecordStoreError(f"could not load {collection}: {e}") from e


def get(db: Session, collection: str, record_id: int):
    model = _model_for(collection)
    try:
        record = db.get(model, record_id)
    except SQLAlchemyError as e:
        db.rollback()
        logger.exception("Loading %s id=%s failed", collection, record_id)
        raise RecordStoreError(f"could not load {collection} record: {e}") from e

    if record is None:
        raise RecordNotFoundError(collection, record_id)
    return record


def delete(db: Session, collection: str, record_id: int) -> bool:
    """
    Delete by id. Returns False (and does nothing) when no row matched.
    """
    model = _model_for(collection)
    try:
        deleted = (
            db.query(model)
            .filter(model.id == record_id)
            .delete(synchronize_session=False)
        )
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.exception("Delete from %s id=%s failed", collection, record_id)
        raise RecordStoreError(f"could not delete {collection} record: {e}") from e

    if not deleted:
        logger.warning("Delete from %s: no record with id=%s", collection, record_id)
        return False

    logger.info("Deleted %s record id=%s", collection, record_id)
    return True


def load_all(db: Session) -> Dict[str, List[Any]]:
    """Reload every collection, keyed by collection name."""
    return {name: list_all(db, name) for name in COLLECTIONS}
