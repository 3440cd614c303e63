"""Fee and profit calculation tests."""

import pytest

from app.services.fees import compute_fee, compute_sale_amounts


class TestComputeFee:

    def test_ebay(self):
        assert compute_fee("eBay", 100.00) == pytest.approx(14.00)

    def test_mercari(self):
        assert compute_fee("Mercari", 100.00) == pytest.approx(13.20)

    def test_depop(self):
        assert compute_fee("Depop", 50.00) == pytest.approx(2.10)

    def test_poshmark_below_threshold_is_flat(self):
        assert compute_fee("Poshmark", 14.99) == pytest.approx(2.95)
        assert compute_fee("Poshmark", 0) == pytest.approx(2.95)

    def test_poshmark_at_threshold_is_percentage(self):
        assert compute_fee("Poshmark", 15.00) == pytest.approx(3.00)
        assert compute_fee("Poshmark", 40.00) == pytest.approx(8.00)

    def test_unknown_platform_costs_nothing(self):
        assert compute_fee("Etsy", 100.00) == 0.0

    @pytest.mark.parametrize("platform", ["eBay", "Mercari", "Poshmark", "Depop"])
    @pytest.mark.parametrize("price", [0, 0.01, 9.99, 15, 250])
    def test_never_negative(self, platform, price):
        assert compute_fee(platform, price) >= 0


class TestStandardProfit:

    def test_profit_subtracts_fee_and_costs(self):
        fee, profit = compute_sale_amounts("Mercari", 40.0, item_cost=5.0, shipping_cost=7.5)
        assert fee == pytest.approx(40.0 * 0.129 + 0.30)
        assert profit == pytest.approx(40.0 - fee - 5.0 - 7.5)

    def test_costs_default_to_zero(self):
        fee, profit = compute_sale_amounts("Depop", 50.0)
        assert profit == pytest.approx(50.0 - fee)

    def test_actual_received_ignored_off_ebay(self):
        fee, profit = compute_sale_amounts("Depop", 50.0, actual_received=40.0)
        assert fee == pytest.approx(2.10)
        assert profit == pytest.approx(47.90)


class TestEbayOverride:

    def test_gross_and_received(self):
        fee, profit = compute_sale_amounts(
            "eBay", 45.0,
            item_cost=10.0, shipping_cost=2.0,
            gross_total=50.0, actual_received=42.0,
        )
        assert fee == pytest.approx(8.00)
        assert profit == pytest.approx(30.00)

    def test_gross_defaults_to_sale_price(self):
        fee, profit = compute_sale_amounts("eBay", 50.0, actual_received=42.0)
        assert fee == pytest.approx(8.00)
        assert profit == pytest.approx(42.00)

    def test_zero_gross_falls_back_to_sale_price(self):
        fee, profit = compute_sale_amounts("eBay", 50.0, gross_total=0.0, actual_received=42.0)
        assert fee == pytest.approx(8.00)
        assert profit == pytest.approx(42.00)

    def test_without_received_uses_fee_schedule(self):
        fee, profit = compute_sale_amounts("eBay", 100.0, gross_total=108.0)
        assert fee == pytest.approx(14.00)
        assert profit == pytest.approx(86.00)
