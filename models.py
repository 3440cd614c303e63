# models.py
# Role: SQLAlchemy ORM models for the resell tracker.
#       Sales, inventory items and expenses are three independent tables
#       with no foreign keys between them.

from datetime import datetime, timezone
from enum import Enum

from sqlalchemy import Column, Integer, String, Date, DateTime, Float

from db import Base


class Platform(str, Enum):
    EBAY = "eBay"
    MERCARI = "Mercari"
    POSHMARK = "Poshmark"
    DEPOP = "Depop"


PLATFORMS = [p.value for p in Platform]

SALE_STATUS_SOLD = "Sold"


class Sale(Base):
    """
    One completed sale on a marketplace.

    platform_fee and profit are computed when the row is created
    (see app/services/fees.py) and never edited afterwards.
    """

    __tablename__ = "sales"

    id = Column(Integer, primary_key=True, index=True)

    item_name = Column(String, nullable=False)

    # One of PLATFORMS
    platform = Column(String(20), nullable=False)

    sale_date = Column(Date, nullable=False)

    sale_price = Column(Float, nullable=False)
    platform_fee = Column(Float, nullable=False)
    item_cost = Column(Float, nullable=False, default=0.0)
    shipping_cost = Column(Float, nullable=False, default=0.0)
    profit = Column(Float, nullable=False)

    # eBay override: tax-inclusive billed amount and net amount received
    gross_total = Column(Float, nullable=True)
    actual_received = Column(Float, nullable=True)

    status = Column(String(20), nullable=False, default=SALE_STATUS_SOLD)

    created_at = Column(DateTime, default=lambda: datetime.now(timezone.utc), nullable=False)


class InventoryItem(Base):
    """
    An item in current stock, possibly crosslisted on several platforms.

    An item_cost of 0 marks a non-taxable personal item.
    """

    __tablename__ = "inventory"

    id = Column(Integer, primary_key=True, index=True)

    item_name = Column(String, nullable=False)
    item_cost = Column(Float, nullable=False, default=0.0)

    # Crosslisting targets stored as "eBay,Depop"
    platforms_raw = Column("platforms", String, nullable=False, default="")

    date_added = Column(Date, nullable=True)

    created_at = Column(DateTime, default=lambda: datetime.now(timezone.utc), nullable=False)

    @property
    def platforms(self) -> list[str]:
        return [p for p in (self.platforms_raw or "").split(",") if p]

    @platforms.setter
    def platforms(self, values) -> None:
        self.platforms_raw = ",".join(values or [])


class Expense(Base):
    """A bulk business expense (supplies, sourcing trips, subscriptions)."""

    __tablename__ = "expenses"

    id = Column(Integer, primary_key=True, index=True)

    name = Column(String, nullable=False)
    amount = Column(Float, nullable=False)
    date_added = Column(Date, nullable=False)

    created_at = Column(DateTime, default=lambda: datetime.now(timezone.utc), nullable=False)
