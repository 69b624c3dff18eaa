"""
Payment gateway port (application/ports) exposing a replaceable protocol.

Application depends on this Protocol; infrastructure implements adapters.
Responses are returned as the provider's decoded JSON objects so callers
can check for fields such as ``paymentMethods`` or ``pspReference``.
"""
from __future__ import annotations

from typing import Any, Optional, Protocol, runtime_checkable


@runtime_checkable
class AdyenGateway(Protocol):
    """Gateway protocol for the Adyen Checkout API."""

    provider: str

    async def payment_methods(self, params: dict[str, Any]) -> dict[str, Any]: ...

    async def refund(
        self,
        payment_psp_reference: str,
        params: dict[str, Any],
        *,
        idempotency_key: Optional[str] = None,
    ) -> dict[str, Any]: ...
