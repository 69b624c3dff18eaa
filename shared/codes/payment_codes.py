"""
Payment specific codes and the message codes returned to the admin UI.
"""
from __future__ import annotations

from enum import Enum, IntEnum


class PaymentCode(IntEnum):
    # Generic success
    SUCCESS = 0

    # Provider/Network errors (6xxxx)
    PROVIDER_ERROR = 60000
    PROVIDER_RECOVERABLE = 60001
    CONFIGURATION_ERROR = 60005


class AdminMessageCode(str, Enum):
    """Stable message codes, localized client-side by the admin UI."""

    INVALID_REFUND_AMOUNT = "adyen.invalidRefundAmount"
    REFUND_ERROR = "adyen.refundError"
    PAYMENT_METHODS_MISSING = "adyen.paymentMethodsMissing"
