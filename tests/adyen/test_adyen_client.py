from types import SimpleNamespace

import pytest
from Adyen.exceptions import AdyenAPICommunicationError, AdyenError

from infrastructure.external.payments.adyen_client import AdyenCheckoutClient
from infrastructure.external.payments.exceptions import (
    PaymentConfigurationError,
    PaymentProviderError,
    PaymentRecoverableError,
)


class StubCheckoutApi:
    """Stands in for the SDK's PaymentsApi and ModificationsApi services."""

    def __init__(self, message=None, error=None):
        self.message = message if message is not None else {}
        self.error = error
        self.calls: list[dict] = []

    def _respond(self, **kwargs):
        self.calls.append(kwargs)
        if self.error is not None:
            raise self.error
        return SimpleNamespace(message=self.message, status_code=200)

    def payment_methods(self, request, idempotency_key=None, **kwargs):
        return self._respond(operation="payment_methods", request=request, idempotency_key=idempotency_key)

    def refund_captured_payment(self, request, paymentPspReference, idempotency_key=None, **kwargs):
        return self._respond(
            operation="refund_captured_payment",
            request=request,
            psp_reference=paymentPspReference,
            idempotency_key=idempotency_key,
        )


def _sdk(api: StubCheckoutApi):
    return SimpleNamespace(
        client=SimpleNamespace(),
        checkout=SimpleNamespace(payments_api=api, modifications_api=api),
    )


@pytest.mark.asyncio
async def test_payment_methods_configures_test_platform():
    api = StubCheckoutApi(message={"paymentMethods": [{"type": "scheme"}]})
    sdk = _sdk(api)
    client = AdyenCheckoutClient(api_key="test_api_key", sdk=sdk)

    data = await client.payment_methods({"merchantAccount": "TestMerchantECOM"})

    assert data == {"paymentMethods": [{"type": "scheme"}]}
    assert api.calls == [
        {"operation": "payment_methods", "request": {"merchantAccount": "TestMerchantECOM"}, "idempotency_key": None}
    ]
    assert sdk.client.xapikey == "test_api_key"
    assert sdk.client.platform == "test"
    assert sdk.client.http_timeout == 30


@pytest.mark.asyncio
async def test_refund_on_live_platform_with_idempotency_key():
    api = StubCheckoutApi(message={"pspReference": "REF-1", "status": "received"})
    sdk = _sdk(api)
    client = AdyenCheckoutClient(
        api_key="live_key", live=True, live_endpoint_url_prefix="1797a841fbb37ca7-AdyenDemo", sdk=sdk
    )
    params = {"merchantAccount": "M", "amount": {"value": 1050, "currency": "EUR"}, "reference": "10001"}

    data = await client.refund("PAY-1", params, idempotency_key="abc123")

    assert data["pspReference"] == "REF-1"
    assert api.calls[0]["psp_reference"] == "PAY-1"
    assert api.calls[0]["request"] == params
    assert api.calls[0]["idempotency_key"] == "abc123"
    assert sdk.client.platform == "live"
    assert sdk.client.live_endpoint_prefix == "1797a841fbb37ca7-AdyenDemo"


@pytest.mark.asyncio
async def test_sdk_error_is_raised_with_adyen_message():
    error = AdyenError("HTTP Status Response - Unauthorized", status_code=401, error_code="000")
    client = AdyenCheckoutClient(api_key="wrong", sdk=_sdk(StubCheckoutApi(error=error)))

    with pytest.raises(PaymentProviderError) as exc_info:
        await client.payment_methods({"merchantAccount": "M"})

    assert exc_info.value.message == "HTTP Status Response - Unauthorized"
    assert exc_info.value.details["provider_code"] == "000"
    assert exc_info.value.details["status_code"] == 401


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "error",
    [
        AdyenAPICommunicationError("Unable to connect to Adyen"),
        ConnectionResetError("connection reset"),
        TimeoutError("read timed out"),
    ],
)
async def test_communication_failures_are_recoverable(error):
    client = AdyenCheckoutClient(api_key="test_api_key", sdk=_sdk(StubCheckoutApi(error=error)))

    with pytest.raises(PaymentRecoverableError):
        await client.refund("PAY-1", {})


@pytest.mark.asyncio
async def test_response_without_json_object():
    api = StubCheckoutApi()
    api.message = "<html>"
    client = AdyenCheckoutClient(api_key="test_api_key", sdk=_sdk(api))

    with pytest.raises(PaymentProviderError) as exc_info:
        await client.payment_methods({})

    assert exc_info.value.message == "Unexpected response from Adyen"


def test_default_sdk_instance_is_configured():
    client = AdyenCheckoutClient(api_key="test_api_key")

    assert client._adyen.client.xapikey == "test_api_key"
    assert client._adyen.client.platform == "test"


def test_missing_api_key_is_a_configuration_error():
    with pytest.raises(PaymentConfigurationError) as exc_info:
        AdyenCheckoutClient(api_key=None)
    assert exc_info.value.field == "api_key"


def test_live_requires_endpoint_prefix():
    with pytest.raises(PaymentConfigurationError) as exc_info:
        AdyenCheckoutClient(api_key="live_key", live=True)
    assert exc_info.value.field == "live_endpoint_url_prefix"
