# app/services/fees.py
#
# Platform fee and profit calculation for a single sale.

from typing import Optional, Tuple

from models import Platform


# ---- Fee schedule ----

# (percentage of sale price, fixed fee)
FEE_RATES = {
    Platform.EBAY.value: (0.136, 0.40),
    Platform.MERCARI.value: (0.129, 0.30),
    Platform.DEPOP.value: (0.033, 0.45),
}

# Poshmark charges a flat fee under the threshold, a percentage above it
POSHMARK_THRESHOLD = 15.0
POSHMARK_FLAT_FEE = 2.95
POSHMARK_RATE = 0.20


def compute_fee(platform: str, sale_price: float) -> float:
    """
    Estimated marketplace fee for a sale. Unknown platforms cost nothing.
    """
    if platform == Platform.POSHMARK.value:
        if sale_price < POSHMARK_THRESHOLD:
            return POSHMARK_FLAT_FEE
        return sale_price * POSHMARK_RATE

    rate = FEE_RATES.get(platform)
    if rate is None:
        return 0.0

    pct, fixed = rate
    return sale_price * pct + fixed


# ---- Sale amounts ----

def uses_ebay_override(platform: str, actual_received: Optional[float]) -> bool:
    return platform == Platform.EBAY.value and actual_received is not None


def compute_sale_amounts(
    platform: str,
    sale_price: float,
    item_cost: float = 0.0,
    shipping_cost: float = 0.0,
    gross_total: Optional[float] = None,
    actual_received: Optional[float] = None,
) -> Tuple[float, float]:
    """
    Returns (platform_fee, profit) for a new sale.

    Standard path: the fee comes from the platform's schedule.

    eBay override: when the net amount eBay paid out is known, the fee is
    whatever eBay kept out of the gross total (which may include collected
    tax), and profit is measured from the amount actually received.
    gross_total falls back to sale_price when missing or 0.
    """
    if uses_ebay_override(platform, actual_received):
        gross = gross_total or sale_price
        fee = gross - actual_received
        profit = actual_received - item_cost - shipping_cost
        return fee, profit

    fee = compute_fee(platform, sale_price)
    profit = sale_price - fee - item_cost - shipping_cost
    return fee, profit
