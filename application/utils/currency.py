"""Currency helpers: major/minor unit conversion and localized display."""
from __future__ import annotations

from decimal import Decimal, ROUND_HALF_UP
from typing import Optional, Union

from babel.core import Locale, UnknownLocaleError
from babel.numbers import format_currency

from core.config import settings
from core.logging_config import get_logger


logger = get_logger(__name__)

Amount = Union[Decimal, str, int, float]

# Adyen minor-unit exponents that differ from the default of 2
ZERO_DECIMAL_CURRENCIES = {
    "CVE", "DJF", "GNF", "IDR", "JPY", "KMF", "KRW", "PYG",
    "RWF", "UGX", "VND", "VUV", "XAF", "XOF", "XPF",
}
THREE_DECIMAL_CURRENCIES = {"BHD", "IQD", "JOD", "KWD", "LYD", "OMR", "TND"}


class CurrencyUtil:
    """Conversion between display amounts and Adyen minor units."""

    @staticmethod
    def decimals(currency: str) -> int:
        code = (currency or "").upper()
        if code in ZERO_DECIMAL_CURRENCIES:
            return 0
        if code in THREE_DECIMAL_CURRENCIES:
            return 3
        return 2

    def sanitize(self, amount: Amount, currency: str) -> int:
        """Decimal major units -> integer minor units (half-up rounding)."""
        value = amount if isinstance(amount, Decimal) else Decimal(str(amount))
        exponent = self.decimals(currency)
        quantized = value.quantize(Decimal(1).scaleb(-exponent), rounding=ROUND_HALF_UP)
        return int(quantized.scaleb(exponent))

    def to_major(self, amount_minor: int, currency: str) -> Decimal:
        return Decimal(int(amount_minor)).scaleb(-self.decimals(currency))


class CurrencyFormatter:
    """Formats minor-unit amounts for display in an order's language."""

    def __init__(self, currency_util: Optional[CurrencyUtil] = None, default_locale: Optional[str] = None) -> None:
        self._currency = currency_util or CurrencyUtil()
        self._default_locale = default_locale or settings.DEFAULT_LOCALE

    def format_minor(self, amount_minor: int, currency: str, locale: Optional[str] = None) -> str:
        amount = self._currency.to_major(amount_minor, currency)
        return format_currency(amount, currency.upper(), locale=self._resolve_locale(locale))

    def _resolve_locale(self, locale: Optional[str]) -> Locale:
        for candidate in (locale, self._default_locale):
            if not candidate:
                continue
            try:
                return Locale.parse(candidate.replace("-", "_"))
            except (UnknownLocaleError, ValueError):
                logger.warning("currency_locale_unknown", locale=candidate)
        return Locale.parse("en_US")
