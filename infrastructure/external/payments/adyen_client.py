"""
Adyen Checkout adapter using the official Adyen Python API library.

Only the two calls the admin needs are wrapped:
- ``PaymentsApi.payment_methods`` to validate credentials
- ``ModificationsApi.refund_captured_payment`` to refund a captured payment

The SDK picks the endpoint from ``client.platform`` ("test"/"live") and, for
live, ``client.live_endpoint_prefix``. Its calls block, so they run in a
worker thread.
"""
from __future__ import annotations

from typing import Any, Optional

import Adyen
from Adyen.exceptions import AdyenAPICommunicationError, AdyenError

from core.settings import payment_settings
from infrastructure.external.payments.base import BasePaymentClient
from infrastructure.external.payments.exceptions import (
    PaymentConfigurationError,
    PaymentProviderError,
    PaymentRecoverableError,
)


class AdyenCheckoutClient(BasePaymentClient):
    provider = "adyen"

    def __init__(
        self,
        *,
        api_key: Optional[str],
        live: bool = False,
        live_endpoint_url_prefix: Optional[str] = None,
        sdk: Optional[Any] = None,
    ) -> None:
        if not api_key:
            raise PaymentConfigurationError("Adyen API key is not configured", provider=self.provider, field="api_key")
        if live and not live_endpoint_url_prefix:
            raise PaymentConfigurationError(
                "Live endpoint URL prefix is required for the live environment",
                provider=self.provider,
                field="live_endpoint_url_prefix",
            )
        self.live = live
        self._adyen = sdk if sdk is not None else Adyen.Adyen()
        client = self._adyen.client
        client.xapikey = api_key
        client.platform = "live" if live else "test"
        client.live_endpoint_prefix = live_endpoint_url_prefix
        client.http_timeout = payment_settings.adyen.timeout

    async def payment_methods(self, params: dict[str, Any]) -> dict[str, Any]:
        try:
            result = await self._call(
                "payment_methods",
                self._adyen.checkout.payments_api.payment_methods,
                request=params,
            )
        except AdyenAPICommunicationError as exc:
            raise self._recoverable(exc) from exc
        except AdyenError as exc:
            raise self._provider_error(exc) from exc
        except OSError as exc:
            raise PaymentRecoverableError(f"Adyen request failed: {exc}", provider=self.provider) from exc
        return self._message(result)

    async def refund(
        self,
        payment_psp_reference: str,
        params: dict[str, Any],
        *,
        idempotency_key: Optional[str] = None,
    ) -> dict[str, Any]:
        try:
            result = await self._call(
                "refund_captured_payment",
                self._adyen.checkout.modifications_api.refund_captured_payment,
                request=params,
                paymentPspReference=payment_psp_reference,
                idempotency_key=idempotency_key,
            )
        except AdyenAPICommunicationError as exc:
            raise self._recoverable(exc) from exc
        except AdyenError as exc:
            raise self._provider_error(exc) from exc
        except OSError as exc:
            raise PaymentRecoverableError(f"Adyen request failed: {exc}", provider=self.provider) from exc
        return self._message(result)

    def _message(self, result: Any) -> dict[str, Any]:
        message = getattr(result, "message", None)
        if not isinstance(message, dict):
            raise PaymentProviderError(
                "Unexpected response from Adyen",
                provider=self.provider,
                details={"status_code": getattr(result, "status_code", None)},
            )
        return message

    def _recoverable(self, exc: AdyenError) -> PaymentRecoverableError:
        return PaymentRecoverableError(
            _error_message(exc),
            provider=self.provider,
            provider_code=_error_code(exc),
            details={"status_code": getattr(exc, "status_code", None) or None},
        )

    def _provider_error(self, exc: AdyenError) -> PaymentProviderError:
        return PaymentProviderError(
            _error_message(exc),
            provider=self.provider,
            provider_code=_error_code(exc),
            details={"status_code": getattr(exc, "status_code", None) or None},
        )


def _error_message(exc: AdyenError) -> str:
    return str(getattr(exc, "message", "") or exc)


def _error_code(exc: AdyenError) -> Optional[str]:
    code = getattr(exc, "error_code", None)
    return str(code) if code else None
