"""Tests for the currency registry and Currency value object."""

import pytest

from severance_kernel.domain.currency import CurrencyRegistry
from severance_kernel.domain.values import Currency
from severance_kernel.exceptions import InvalidCurrencyError


class TestCurrencyRegistry:
    """Tests for supported-code validation."""

    def test_payroll_currencies_supported(self):
        for code in ("HNL", "USD"):
            assert CurrencyRegistry.get_info(code).code == code

    def test_other_central_american_currency_rejected(self):
        with pytest.raises(InvalidCurrencyError):
            CurrencyRegistry.validate("GTQ")

    def test_lempira_has_two_places(self):
        assert CurrencyRegistry.get_decimal_places("HNL") == 2

    def test_validate_normalizes(self):
        assert CurrencyRegistry.validate(" hnl ") == "HNL"

    def test_validate_rejects_unknown(self):
        with pytest.raises(InvalidCurrencyError) as exc_info:
            CurrencyRegistry.validate("ABC")
        assert exc_info.value.currency == "ABC"

    def test_validate_rejects_empty(self):
        with pytest.raises(InvalidCurrencyError):
            CurrencyRegistry.validate("")

    def test_decimal_places_unknown_raises(self):
        with pytest.raises(InvalidCurrencyError):
            CurrencyRegistry.get_decimal_places("ABC")

    def test_get_info_unknown_is_none(self):
        assert CurrencyRegistry.get_info("ABC") is None


class TestCurrencyValueObject:
    """Tests for the Currency value object."""

    def test_normalized_on_construction(self):
        assert Currency("hnl").code == "HNL"

    def test_equal_after_normalization(self):
        assert Currency("hnl") == Currency("HNL")

    def test_name(self):
        assert Currency("HNL").name == "Lempira hondureño"

    def test_str(self):
        assert str(Currency("HNL")) == "HNL"

    def test_invalid_rejected(self):
        with pytest.raises(InvalidCurrencyError):
            Currency("LPS")
