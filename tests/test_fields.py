"""Tests for field alias resolution and value coercion."""

import math

import pytest

from oiflow.data.fields import (first_present, optional_number,
                                resolve_buy, resolve_net, resolve_sell,
                                resolve_symbol, resolve_volume7,
                                resolve_volume21, to_number)


class TestToNumber:
    """Tests for lenient numeric coercion."""

    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            (None, 0.0),
            (5, 5.0),
            (2.5, 2.5),
            ("12", 12.0),
            (" 3.5 ", 3.5),
            ("", 0.0),
            ("   ", 0.0),
            ("abc", 0.0),
            ("1,234", 0.0),
            (True, 1.0),
            (False, 0.0),
            ([1, 2], 0.0),
            ({"a": 1}, 0.0),
            (float("nan"), 0.0),
            ("nan", 0.0),
        ],
    )
    def test_coercion(self, value: object, expected: float) -> None:
        """Loose JSON values coerce to floats, invalid ones to zero."""
        assert to_number(value) == expected

    def test_negative_values_preserved(self) -> None:
        """Negative numbers are kept as-is."""
        assert to_number(-4) == -4.0
        assert to_number("-4.5") == -4.5

    def test_optional_number_keeps_none(self) -> None:
        """optional_number distinguishes missing from zero."""
        assert optional_number(None) is None
        assert optional_number("0") == 0.0
        assert optional_number("x") == 0.0


class TestFirstPresent:
    """Tests for alias priority lookup."""

    def test_first_alias_wins(self) -> None:
        """The first present alias is returned."""
        record = {"b": 2, "a": 1}
        assert first_present(record, ("a", "b")) == 1

    def test_null_values_are_skipped(self) -> None:
        """Null values fall through to the next alias."""
        record = {"a": None, "b": 2}
        assert first_present(record, ("a", "b")) == 2

    def test_zero_is_present(self) -> None:
        """Zero counts as present and stops the search."""
        record = {"a": 0, "b": 2}
        assert first_present(record, ("a", "b")) == 0

    def test_missing_returns_none(self) -> None:
        """No alias present yields None."""
        assert first_present({}, ("a", "b")) is None


class TestResolvers:
    """Tests for metric resolvers."""

    def test_resolve_symbol_aliases(self) -> None:
        """symbol, ticker and Symbol are all recognized, in that order."""
        assert resolve_symbol({"symbol": " AAA "}) == "AAA"
        assert resolve_symbol({"ticker": "BBB"}) == "BBB"
        assert resolve_symbol({"Symbol": "CCC"}) == "CCC"
        assert resolve_symbol({"ticker": "BBB", "symbol": "AAA"}) == "AAA"
        assert resolve_symbol({}) == ""

    def test_resolve_symbol_non_string(self) -> None:
        """Numeric identifiers are converted to strings."""
        assert resolve_symbol({"symbol": 1234}) == "1234"

    def test_resolve_buy_and_sell_aliases(self) -> None:
        """Buy and sell differentials fall back through their aliases."""
        assert resolve_buy({"buyOI": 3}) == 3.0
        assert resolve_buy({"buy_ratio": "0.5"}) == 0.5
        assert resolve_sell({"sellOI": 2}) == 2.0
        assert resolve_sell({}) == 0.0

    def test_resolve_net_published(self) -> None:
        """A published net differential is used even if buy/sell disagree."""
        assert resolve_net({"net_diff": 1, "buy_diff": 10, "sell_diff": 4}) == 1.0
        assert resolve_net({"netOI": -2}) == -2.0

    def test_resolve_net_derived(self) -> None:
        """Without a published net, net is buy minus sell."""
        assert resolve_net({"buy_diff": 10, "sell_diff": 4}) == 6.0
        assert resolve_net({"buyOI": "7", "sellOI": 2}) == 5.0

    def test_resolve_net_invalid_published_is_zero(self) -> None:
        """A published but non-numeric net coerces to zero."""
        assert resolve_net({"net_diff": "n/a", "buy_diff": 10}) == 0.0

    def test_resolve_volumes(self) -> None:
        """Volume aliases are resolved in priority order."""
        assert resolve_volume7({"volume_7days": 5, "volume": 9}) == 5.0
        assert resolve_volume7({"volume7": 6}) == 6.0
        assert resolve_volume7({"volume": 7}) == 7.0
        assert resolve_volume7({"volume_weight": 8}) == 8.0
        assert resolve_volume21({"volume21": 4}) == 4.0
        assert resolve_volume21({"volume_21days": 3, "volume21": 4}) == 3.0
        assert math.isclose(resolve_volume7({}), 0.0)
