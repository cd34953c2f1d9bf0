"""Tests for the per-trade PnL calculator."""

import pytest

from trading_journal.core.enums import AssetClass, TradeDirection
from trading_journal.journal.pnl import FOREX_LOT_SIZE, compute_pnl, price_difference


class TestPriceDifference:
    def test_long_profits_when_price_rises(self):
        assert price_difference(100.0, 110.0, TradeDirection.LONG) == 10.0

    def test_short_profits_when_price_falls(self):
        assert price_difference(110.0, 100.0, TradeDirection.SHORT) == 10.0

    def test_short_sign_is_mirror_of_long(self):
        long_diff = price_difference(50.0, 42.0, TradeDirection.LONG)
        short_diff = price_difference(50.0, 42.0, TradeDirection.SHORT)
        assert long_diff == -short_diff


class TestComputePnl:
    def test_forex_uses_standard_lot(self):
        pnl = compute_pnl(1.1000, 1.1050, 1, TradeDirection.LONG, AssetClass.FOREX)
        assert pnl == pytest.approx(500.0)

    def test_forex_fractional_lots(self):
        pnl = compute_pnl(1.2000, 1.1900, 0.5, TradeDirection.SHORT, AssetClass.FOREX)
        assert pnl == pytest.approx(0.01 * 0.5 * FOREX_LOT_SIZE)

    @pytest.mark.parametrize("asset_class", [AssetClass.INDEX, AssetClass.FUTURES])
    def test_index_and_futures_use_quantity_as_point_value(self, asset_class):
        pnl = compute_pnl(4500.0, 4510.0, 50, TradeDirection.LONG, asset_class)
        assert pnl == 500.0

    @pytest.mark.parametrize(
        "asset_class",
        [AssetClass.CRYPTO, AssetClass.COMMODITY, AssetClass.METALS, AssetClass.STOCKS],
    )
    def test_other_classes_use_plain_units(self, asset_class):
        pnl = compute_pnl(200.0, 190.0, 3, TradeDirection.LONG, asset_class)
        assert pnl == -30.0

    def test_short_loss(self):
        pnl = compute_pnl(100.0, 104.0, 2, TradeDirection.SHORT, AssetClass.STOCKS)
        assert pnl == -8.0

    def test_unchanged_price_is_zero(self):
        pnl = compute_pnl(1.25, 1.25, 3, TradeDirection.SHORT, AssetClass.FOREX)
        assert pnl == 0.0

    def test_no_rounding_applied(self):
        pnl = compute_pnl(10.0, 10.333, 3, TradeDirection.LONG, AssetClass.CRYPTO)
        assert pnl == (10.333 - 10.0) * 3
