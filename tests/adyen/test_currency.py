from datetime import datetime, timezone
from decimal import Decimal
from zoneinfo import ZoneInfo

import pytest

from application.utils.currency import CurrencyFormatter, CurrencyUtil
from application.utils.formatting import format_admin_datetime


@pytest.mark.parametrize(
    "amount, currency, expected",
    [
        (Decimal("10.50"), "EUR", 1050),
        ("10.005", "EUR", 1001),
        ("10.004", "eur", 1000),
        (Decimal("1500"), "JPY", 1500),
        (Decimal("1500.5"), "JPY", 1501),
        (Decimal("1.234"), "KWD", 1234),
        (7, "USD", 700),
    ],
)
def test_sanitize_to_minor_units(amount, currency, expected):
    assert CurrencyUtil().sanitize(amount, currency) == expected


def test_to_major():
    util = CurrencyUtil()
    assert util.to_major(1050, "EUR") == Decimal("10.50")
    assert util.to_major(1500, "JPY") == Decimal("1500")
    assert util.to_major(1234, "BHD") == Decimal("1.234")


def test_format_minor_with_order_locale():
    formatter = CurrencyFormatter(CurrencyUtil(), default_locale="en_US")
    assert formatter.format_minor(1050, "EUR", "en_GB") == "€10.50"
    assert formatter.format_minor(150000, "JPY", "en_US") == "¥150,000"


def test_format_minor_falls_back_to_default_locale():
    formatter = CurrencyFormatter(CurrencyUtil(), default_locale="en_US")
    assert formatter.format_minor(1999, "USD", "xx") == "$19.99"
    assert formatter.format_minor(1999, "USD", None) == "$19.99"


def test_format_admin_datetime_converts_to_zone():
    value = datetime(2024, 5, 2, 12, 30, tzinfo=timezone.utc)
    assert format_admin_datetime(value, ZoneInfo("Europe/Amsterdam")) == "2024-05-02 14:30 (Europe/Amsterdam)"


def test_format_admin_datetime_treats_naive_values_as_utc():
    assert format_admin_datetime(datetime(2024, 1, 15, 23, 59)) == "2024-01-15 23:59 (UTC)"


def test_format_admin_datetime_placeholder():
    assert format_admin_datetime(None) == "-"
