"""Record lifecycle and record store tests (against an in-memory SQLite)."""

from datetime import date
from unittest.mock import MagicMock

import pytest
from sqlalchemy.exc import SQLAlchemyError

from app.services import records, store
from app.services.errors import (
    InvalidAmountError,
    InvalidPlatformError,
    InvalidSalePriceError,
    MissingNameError,
    PartialConversionError,
    RecordNotFoundError,
    RecordStoreError,
)


class TestAddSale:

    def test_standard_sale(self, db):
        sale = records.add_sale(
            db, "Coach bag", "Poshmark", "80", sale_date="2025-06-01",
            item_cost="20", shipping_cost="",
        )
        assert sale.id is not None
        assert sale.status == "Sold"
        assert sale.sale_date == date(2025, 6, 1)
        assert sale.platform_fee == pytest.approx(16.0)
        assert sale.shipping_cost == 0.0
        assert sale.profit == pytest.approx(44.0)
        assert sale.gross_total is None

    def test_ebay_override(self, db):
        sale = records.add_sale(
            db, "Jacket", "eBay", "45", item_cost="10", shipping_cost="2",
            gross_total="50", actual_received="42",
        )
        assert sale.platform_fee == pytest.approx(8.0)
        assert sale.profit == pytest.approx(30.0)
        assert sale.actual_received == 42.0

    def test_unparseable_costs_default_to_zero(self, db):
        sale = records.add_sale(db, "Tee", "Depop", "$50", item_cost="abc", shipping_cost=None)
        assert sale.item_cost == 0.0
        assert sale.profit == pytest.approx(47.90)

    def test_platform_name_is_normalized(self, db):
        sale = records.add_sale(db, "Tee", "mercari", "10")
        assert sale.platform == "Mercari"

    def test_sale_date_defaults_to_today(self, db):
        sale = records.add_sale(db, "Tee", "Depop", "10")
        assert sale.sale_date == date.today()

    @pytest.mark.parametrize("price", ["", "abc", None, "12.3.4", "inf", "Infinity", "-inf", "1e309", float("inf")])
    def test_invalid_price_writes_nothing(self, db, price):
        with pytest.raises(InvalidSalePriceError, match="invalid sale price"):
            records.add_sale(db, "Tee", "Depop", price)
        assert store.list_all(db, "sales") == []

    def test_invalid_platform(self, db):
        with pytest.raises(InvalidPlatformError):
            records.add_sale(db, "Tee", "Etsy", "10")
        assert store.list_all(db, "sales") == []

    def test_missing_name(self, db):
        with pytest.raises(MissingNameError):
            records.add_sale(db, "  ", "Depop", "10")


class TestInventoryAndExpenses:

    def test_inventory_defaults(self, db):
        item = records.add_inventory_item(db, "old lamp", platforms=["ebay", "Etsy", "Depop", "eBay"])
        assert item.item_cost == 0.0
        assert item.platforms == ["eBay", "Depop"]
        assert item.date_added == date.today()

    def test_expense(self, db):
        e = records.add_expense(db, "Poly mailers", "18.50", "2025-04-01")
        assert e.amount == 18.5
        assert e.date_added == date(2025, 4, 1)
        assert e.created_at is not None

    def test_expense_amount_required(self, db):
        with pytest.raises(InvalidAmountError):
            records.add_expense(db, "Poly mailers", "lots")
        assert store.list_all(db, "expenses") == []

    @pytest.mark.parametrize("amount", ["inf", "Infinity", "1e309"])
    def test_infinite_expense_amount_rejected(self, db, amount):
        with pytest.raises(InvalidAmountError):
            records.add_expense(db, "Poly mailers", amount)
        assert store.list_all(db, "expenses") == []


class TestMarkAsSold:

    def test_converts_item_into_sale(self, db):
        item = records.add_inventory_item(db, "vintage tee", item_cost="20", platforms=["Depop"])

        sale = records.mark_as_sold(db, item.id, "50", "Depop", "2025-05-05")

        assert sale.item_name == "vintage tee"
        assert sale.platform_fee == pytest.approx(2.10)
        assert sale.profit == pytest.approx(27.90)
        assert sale.item_cost == 20.0
        assert sale.shipping_cost == 0.0
        assert sale.sale_date == date(2025, 5, 5)
        assert store.list_all(db, "inventory") == []

    def test_missing_item(self, db):
        with pytest.raises(RecordNotFoundError):
            records.mark_as_sold(db, 999, "50", "Depop")
        assert store.list_all(db, "sales") == []

    def test_invalid_price_keeps_item(self, db):
        item = records.add_inventory_item(db, "vintage tee", item_cost="20")
        with pytest.raises(InvalidSalePriceError):
            records.mark_as_sold(db, item.id, "fifty", "Depop")
        assert len(store.list_all(db, "inventory")) == 1

    def test_failed_insert_leaves_item_alone(self, db, monkeypatch):
        item = records.add_inventory_item(db, "vintage tee", item_cost="20")
        delete = MagicMock()
        monkeypatch.setattr(store, "insert", MagicMock(side_effect=RecordStoreError("down")))
        monkeypatch.setattr(store, "delete", delete)

        with pytest.raises(RecordStoreError):
            records.mark_as_sold(db, item.id, "50", "Depop")

        delete.assert_not_called()
        monkeypatch.undo()
        assert len(store.list_all(db, "inventory")) == 1

    def test_failed_delete_is_partial_conversion(self, db, monkeypatch, caplog):
        item = records.add_inventory_item(db, "vintage tee", item_cost="20")
        monkeypatch.setattr(store, "delete", MagicMock(side_effect=RecordStoreError("down")))

        with pytest.raises(PartialConversionError) as excinfo:
            records.mark_as_sold(db, item.id, "50", "Depop")

        sales = store.list_all(db, "sales")
        assert len(sales) == 1
        assert excinfo.value.sale_id == sales[0].id
        assert excinfo.value.inventory_id == item.id
        assert len(store.list_all(db, "inventory")) == 1
        assert "mark-as-sold partial failure" in caplog.text


class TestStore:

    def test_list_ordering(self, db):
        records.add_sale(db, "a", "Depop", "1", sale_date="2024-01-01")
        records.add_sale(db, "b", "Depop", "1", sale_date="2025-01-01")
        records.add_inventory_item(db, "zebra")
        records.add_inventory_item(db, "apple")

        assert [s.item_name for s in store.list_all(db, "sales")] == ["b", "a"]
        assert [i.item_name for i in store.list_all(db, "inventory")] == ["apple", "zebra"]

    def test_delete(self, db):
        e = records.add_expense(db, "Tape", "3")
        assert records.delete_expense(db, e.id) is True
        assert store.list_all(db, "expenses") == []

    def test_delete_missing_is_noop(self, db):
        assert records.delete_sale(db, 12345) is False

    def test_load_all(self, db):
        records.add_expense(db, "Tape", "3")
        data = store.load_all(db)
        assert set(data) == {"sales", "inventory", "expenses"}
        assert len(data["expenses"]) == 1

    def test_database_errors_are_wrapped(self):
        session = MagicMock()
        session.commit.side_effect = SQLAlchemyError("connection lost")

        with pytest.raises(RecordStoreError):
            store.insert(session, "expenses", {"name": "Tape", "amount": 3.0, "date_added": date.today()})

        session.rollback.assert_called_once()

    def test_unknown_collection(self, db):
        with pytest.raises(ValueError):
            store.insert(db, "customers", {})
        with pytest.raises(ValueError):
            store.list_all(db, "customers")
