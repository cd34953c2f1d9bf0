"""Tests for trade input validation and normalization."""

import datetime as dt
import math

import pytest

from trading_journal.core.enums import AssetClass, TradeDirection, TradeStatus
from trading_journal.core.errors import (
    InvalidChoiceError,
    InvalidDateError,
    InvalidNumericFieldError,
    MissingFieldError,
    TradeValidationError,
)
from trading_journal.journal.validation import (
    normalize_trade,
    parse_choice,
    parse_date,
    parse_number,
)


class TestParseNumber:
    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            ("1.25", 1.25),
            ("  42 ", 42.0),
            ("$1,234.50", 1234.5),
            ("-3", -3.0),
            (7, 7.0),
            (0.5, 0.5),
        ],
    )
    def test_accepts(self, raw, expected):
        assert parse_number("entryPrice", raw) == expected

    @pytest.mark.parametrize("raw", ["abc", "", "1.2.3", None, True, [1]])
    def test_rejects_non_numeric(self, raw):
        with pytest.raises(InvalidNumericFieldError) as exc_info:
            parse_number("entryPrice", raw)
        assert exc_info.value.field == "entryPrice"

    @pytest.mark.parametrize("raw", ["nan", "inf", "-Infinity", math.nan, math.inf])
    def test_rejects_non_finite(self, raw):
        with pytest.raises(InvalidNumericFieldError, match="finite"):
            parse_number("quantity", raw)


class TestParseChoice:
    @pytest.mark.parametrize("raw", ["Forex", "forex", "FOREX", " Forex "])
    def test_case_insensitive(self, raw):
        assert parse_choice("assetClass", raw, AssetClass) == AssetClass.FOREX

    def test_buy_sell_synonyms(self):
        assert parse_choice("direction", "buy", TradeDirection) == TradeDirection.LONG
        assert parse_choice("direction", "Sell", TradeDirection) == TradeDirection.SHORT

    def test_enum_member_passes_through(self):
        assert parse_choice("status", TradeStatus.OPEN, TradeStatus) is TradeStatus.OPEN

    def test_unknown_value(self):
        with pytest.raises(InvalidChoiceError) as exc_info:
            parse_choice("assetClass", "Bonds", AssetClass)
        assert "Forex" in exc_info.value.choices

    def test_synonyms_only_apply_to_direction(self):
        with pytest.raises(InvalidChoiceError):
            parse_choice("status", "buy", TradeStatus)


class TestParseDate:
    def test_iso_string(self):
        assert parse_date("date", "2024-02-29") == dt.date(2024, 2, 29)

    def test_iso_datetime_string_is_truncated(self):
        assert parse_date("date", "2024-02-29T13:45:00Z") == dt.date(2024, 2, 29)

    def test_datetime_object(self):
        assert parse_date("date", dt.datetime(2024, 5, 1, 9, 30)) == dt.date(2024, 5, 1)

    @pytest.mark.parametrize("raw", ["yesterday", "2024-13-01", "01/02/2024"])
    def test_rejects_invalid(self, raw):
        with pytest.raises(InvalidDateError):
            parse_date("date", raw)


class TestNormalizeTrade:
    def test_happy_path(self, forex_form):
        draft = normalize_trade(forex_form)
        assert draft.date == dt.date(2024, 3, 1)
        assert draft.asset_class == AssetClass.FOREX
        assert draft.symbol == "EURUSD"
        assert draft.direction == TradeDirection.LONG
        assert draft.entry_price == 1.1
        assert draft.exit_price == 1.105
        assert draft.quantity == 1.0
        assert draft.status == TradeStatus.CLOSED
        assert draft.notes is None
        assert draft.fees is None

    def test_snake_case_keys(self):
        draft = normalize_trade({
            "date": "2024-03-01",
            "asset_class": "stocks",
            "symbol": "msft",
            "direction": "short",
            "entry_price": "410",
            "exit_price": "400",
            "quantity": "10",
        })
        assert draft.asset_class == AssetClass.STOCKS
        assert draft.direction == TradeDirection.SHORT
        assert draft.exit_price == 400.0

    @pytest.mark.parametrize("blank", [None, "", "   "])
    def test_blank_exit_falls_back_to_entry(self, forex_form, blank):
        forex_form["exitPrice"] = blank
        assert normalize_trade(forex_form).exit_price == 1.1

    def test_missing_exit_falls_back_to_entry(self, forex_form):
        del forex_form["exitPrice"]
        assert normalize_trade(forex_form).exit_price == 1.1

    def test_explicit_zero_exit_is_kept(self, forex_form):
        forex_form["exitPrice"] = "0"
        assert normalize_trade(forex_form).exit_price == 0.0

    def test_status_defaults_to_closed(self, forex_form):
        del forex_form["status"]
        assert normalize_trade(forex_form).status == TradeStatus.CLOSED

    def test_open_status(self, forex_form):
        forex_form["status"] = "open"
        assert normalize_trade(forex_form).status == TradeStatus.OPEN

    def test_notes_and_fees(self, forex_form):
        forex_form["notes"] = "  waited for retest  "
        forex_form["fees"] = "$3.50"
        draft = normalize_trade(forex_form)
        assert draft.notes == "waited for retest"
        assert draft.fees == 3.5

    @pytest.mark.parametrize(
        "field", ["date", "assetClass", "symbol", "direction", "quantity", "entryPrice"],
    )
    def test_missing_required_field(self, forex_form, field):
        del forex_form[field]
        with pytest.raises(MissingFieldError) as exc_info:
            normalize_trade(forex_form)
        assert exc_info.value.field == field

    def test_blank_symbol_is_missing(self, forex_form):
        forex_form["symbol"] = "  "
        with pytest.raises(MissingFieldError):
            normalize_trade(forex_form)

    def test_non_numeric_entry_names_field(self, forex_form):
        forex_form["entryPrice"] = "one point one"
        with pytest.raises(InvalidNumericFieldError) as exc_info:
            normalize_trade(forex_form)
        assert exc_info.value.field == "entryPrice"

    def test_non_numeric_exit(self, forex_form):
        forex_form["exitPrice"] = "soon"
        with pytest.raises(InvalidNumericFieldError) as exc_info:
            normalize_trade(forex_form)
        assert exc_info.value.field == "exitPrice"

    @pytest.mark.parametrize("qty", ["0", "-1"])
    def test_quantity_must_be_positive(self, forex_form, qty):
        forex_form["quantity"] = qty
        with pytest.raises(InvalidNumericFieldError, match="positive"):
            normalize_trade(forex_form)

    def test_negative_fees_rejected(self, forex_form):
        forex_form["fees"] = "-1"
        with pytest.raises(InvalidNumericFieldError) as exc_info:
            normalize_trade(forex_form)
        assert exc_info.value.field == "fees"

    def test_unknown_asset_class(self, forex_form):
        forex_form["assetClass"] = "Bonds"
        with pytest.raises(InvalidChoiceError):
            normalize_trade(forex_form)

    def test_bad_date(self, forex_form):
        forex_form["date"] = "not-a-date"
        with pytest.raises(InvalidDateError):
            normalize_trade(forex_form)

    def test_all_errors_share_base_class(self, forex_form):
        forex_form["quantity"] = "lots"
        with pytest.raises(TradeValidationError):
            normalize_trade(forex_form)
